from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    booked = "booked"
    checked_in = "checked-in"
    no_show = "no-show"
    cancelled = "cancelled"


# Statuses that hold a capacity slot. no-show releases the slot like cancelled.
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.booked, BookingStatus.checked_in})


@dataclass(frozen=True)
class Booking:
    id: str
    class_id: str
    person_id: str
    person_name: str  # snapshot at booking time
    status: BookingStatus
    booked_at: datetime
    checked_in_at: datetime | None = None
    cancelled_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES
