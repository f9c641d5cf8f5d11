"""
Tests for membership freezes, cancellations and person activity views.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.application.use_cases.memberships import MembershipUseCase
from studiodesk.application.use_cases.person_activity import PersonActivityUseCase
from studiodesk.domain.entities.booking import Booking, BookingStatus
from studiodesk.domain.entities.person import Lead, Member, PersonKind, WeeklyUsage
from studiodesk.domain.entities.result import ErrorKind
from studiodesk.domain.entities.store_state import StoreState
from studiodesk.infrastructure.store.memory_store import MemorySnapshotStore

TZ = ZoneInfo("America/New_York")
NOW = datetime(2024, 1, 10, 9, 0, tzinfo=TZ)


def _member() -> Member:
    return Member(id="member-1", name="Alex", membership_type="2x-week", location="athletic-club")


def _membership_use_case() -> tuple[MembershipUseCase, EntityStore]:
    store = EntityStore(MemorySnapshotStore(), state=StoreState(members={"member-1": _member()}))
    return MembershipUseCase(store=store, audit_log=AuditLog(store, lambda: NOW)), store


def test_freeze_membership_records_freeze():
    uc, store = _membership_use_case()

    result = uc.freeze_membership("member-1", date(2024, 2, 1), date(2024, 2, 14), reason="travel")

    assert result.success
    assert result.message == "Membership frozen"
    assert store.get_member("member-1").status == "active"
    freezes = uc.list_freezes("member-1")
    assert len(freezes) == 1
    assert freezes[0].reason == "travel"
    assert store.list_audit_entries()[-1].action == "freeze_membership"


def test_freeze_with_end_before_start_is_rejected():
    uc, store = _membership_use_case()

    result = uc.freeze_membership("member-1", date(2024, 2, 14), date(2024, 2, 1))

    assert result.error == ErrorKind.invalid_transition
    assert uc.list_freezes("member-1") == []
    assert store.get_member("member-1").status == "active"


def test_cancel_membership_for_unknown_member():
    uc, _ = _membership_use_case()

    result = uc.cancel_membership("member-404", date(2024, 1, 10), date(2024, 2, 1))

    assert result.error == ErrorKind.not_found
    assert result.message == "Member not found"


def test_cancel_membership_records_cancellation():
    uc, store = _membership_use_case()

    result = uc.cancel_membership("member-1", date(2024, 1, 10), date(2024, 2, 1), reason="moving")

    assert result.success
    assert store.get_member("member-1").status == "active"
    assert uc.list_cancellations("member-1")[0].effective_date == date(2024, 2, 1)


def _booking(booking_id: str, status: BookingStatus, booked_at: datetime, checked_in_at: datetime | None = None):
    return Booking(
        id=booking_id,
        class_id="class-hiit",
        person_id="member-1",
        person_name="Alex",
        status=status,
        booked_at=booked_at,
        checked_in_at=checked_in_at,
    )


def test_person_activity_views():
    state = StoreState(members={"member-1": _member()})
    old = NOW - timedelta(days=45)
    recent = NOW - timedelta(days=3)
    state.bookings["b1"] = _booking("b1", BookingStatus.checked_in, old, old)
    state.bookings["b2"] = _booking("b2", BookingStatus.checked_in, recent, recent)
    state.bookings["b3"] = _booking("b3", BookingStatus.cancelled, NOW)
    state.weekly_usage[("member-1", "2024-01-08")] = WeeklyUsage("member-1", "2024-01-08", 2)
    uc = PersonActivityUseCase(EntityStore(MemorySnapshotStore(), state=state), clock=lambda: NOW)

    assert uc.get_person("member-1").kind == PersonKind.member
    assert [b.id for b in uc.get_person_bookings("member-1")] == ["b3", "b2", "b1"]
    assert uc.get_last_visit("member-1") == recent
    assert uc.get_visits_in_last_n_days("member-1", 30) == 1
    assert uc.get_weekly_usage("member-1") == 2
    assert uc.get_weekly_usage("member-1", on=NOW + timedelta(days=7)) == 0


def test_resolve_person_prefers_member_record():
    state = StoreState(
        members={"p-1": Member(id="p-1", name="Alex", membership_type="unlimited", location="athletic-club")},
        leads={"p-1": Lead(id="p-1", name="Alex", location="athletic-club")},
    )
    uc = PersonActivityUseCase(EntityStore(MemorySnapshotStore(), state=state), clock=lambda: NOW)

    assert uc.get_person("p-1").kind == PersonKind.member
    assert uc.get_person("nobody") is None
    assert uc.get_last_visit("nobody") is None
