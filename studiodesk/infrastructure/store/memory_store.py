from __future__ import annotations

from studiodesk.application.ports.snapshot_store import SnapshotStorePort
from studiodesk.domain.entities.store_state import StoreState


class MemorySnapshotStore(SnapshotStorePort):
    """Keeps the last saved snapshot in process memory."""

    def __init__(self, initial: StoreState | None = None) -> None:
        self._snapshot: StoreState | None = initial.copy() if initial else None
        self.save_count = 0

    def load(self) -> StoreState | None:
        return self._snapshot.copy() if self._snapshot else None

    def save(self, state: StoreState) -> None:
        self._snapshot = state.copy()
        self.save_count += 1

    def reset(self) -> None:
        self._snapshot = None
