from __future__ import annotations

from abc import ABC, abstractmethod

from studiodesk.domain.entities.store_state import StoreState


class SnapshotStorePort(ABC):
    @abstractmethod
    def load(self) -> StoreState | None:
        """
        Load the last saved snapshot.
        Returns None when nothing has been saved yet.
        Raises StorageError (or SnapshotVersionError) when the snapshot cannot be used.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, state: StoreState) -> None:
        """Persist a full snapshot. Raises StorageError on failure."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Discard any stored snapshot."""
        raise NotImplementedError
