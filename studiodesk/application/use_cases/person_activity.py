from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.utils.dates import week_start
from studiodesk.domain.entities.booking import Booking, BookingStatus
from studiodesk.domain.entities.person import ResolvedPerson


class PersonActivityUseCase:
    """Read-only views over a person's bookings and visits."""

    def __init__(self, store: EntityStore, clock: Callable[[], datetime]) -> None:
        self._store = store
        self._clock = clock

    def get_person(self, person_id: str) -> ResolvedPerson | None:
        return self._store.resolve_person(person_id)

    def get_person_bookings(self, person_id: str) -> list[Booking]:
        return sorted(self._store.bookings_for_person(person_id), key=lambda b: b.booked_at, reverse=True)

    def get_last_visit(self, person_id: str) -> datetime | None:
        visits = [b.checked_in_at for b in self._checked_in(person_id)]
        return max(visits) if visits else None

    def get_visits_in_last_n_days(self, person_id: str, days: int) -> int:
        cutoff = self._clock() - timedelta(days=days)
        return sum(1 for b in self._checked_in(person_id) if b.checked_in_at >= cutoff)

    def get_weekly_usage(self, person_id: str, on: datetime | None = None) -> int:
        usage = self._store.get_weekly_usage(person_id, week_start(on or self._clock()))
        return usage.count if usage else 0

    def _checked_in(self, person_id: str) -> list[Booking]:
        return [
            b
            for b in self._store.bookings_for_person(person_id)
            if b.status == BookingStatus.checked_in and b.checked_in_at is not None
        ]
