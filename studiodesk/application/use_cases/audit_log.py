from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.utils.ids import new_id
from studiodesk.domain.entities.audit import AuditLogEntry


class AuditLog:
    """Append-only history of mutating operations."""

    def __init__(self, store: EntityStore, clock: Callable[[], datetime]) -> None:
        self._store = store
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def append(self, action: str, entity_type: str, entity_id: str, details: str, location: str) -> AuditLogEntry:
        entry = AuditLogEntry(
            id=new_id("audit"),
            timestamp=self._clock(),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
            location=location,
        )
        self._store.append_audit_entry(entry)
        self._logger.debug("Audit %s %s/%s: %s", action, entity_type, entity_id, details)
        return entry

    def list_all(self) -> list[AuditLogEntry]:
        return self._store.list_audit_entries()

    def filter_by_entity(self, entity_type: str, entity_id: str | None = None) -> list[AuditLogEntry]:
        return [
            entry
            for entry in self._store.list_audit_entries()
            if entry.entity_type == entity_type and (entity_id is None or entry.entity_id == entity_id)
        ]
