"""
Tests for the append-only audit history.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.infrastructure.store.memory_store import MemorySnapshotStore

NOW = datetime(2024, 1, 10, 9, 0, tzinfo=ZoneInfo("America/New_York"))


def test_append_and_filter_entries():
    snapshots = MemorySnapshotStore()
    audit = AuditLog(EntityStore(snapshots), clock=lambda: NOW)

    first = audit.append("book_class", "booking", "booking-1", "Alex booked HIIT", "athletic-club")
    audit.append("check_in", "booking", "booking-2", "Casey checked in to HIIT", "athletic-club")
    audit.append("freeze_membership", "member", "member-1", "Membership frozen", "athletic-club")

    assert first.timestamp == NOW
    assert first.id.startswith("audit-")
    assert [e.action for e in audit.list_all()] == ["book_class", "check_in", "freeze_membership"]
    assert len(audit.filter_by_entity("booking")) == 2
    assert [e.entity_id for e in audit.filter_by_entity("booking", "booking-2")] == ["booking-2"]
    assert snapshots.save_count == 3


def test_entries_are_distinct_even_when_identical():
    audit = AuditLog(EntityStore(MemorySnapshotStore()), clock=lambda: NOW)

    a = audit.append("check_in", "booking", "booking-1", "same", "athletic-club")
    b = audit.append("check_in", "booking", "booking-1", "same", "athletic-club")

    assert a.id != b.id
    assert len(audit.list_all()) == 2
