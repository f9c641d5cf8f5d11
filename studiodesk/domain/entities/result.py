from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from studiodesk.domain.entities.booking import Booking


class ErrorKind(str, Enum):
    not_found = "not_found"
    duplicate_booking = "duplicate_booking"
    duplicate_waitlist = "duplicate_waitlist"
    class_full = "class_full"
    already_checked_in = "already_checked_in"
    already_cancelled = "already_cancelled"
    invalid_transition = "invalid_transition"


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str
    error: ErrorKind | None = None
    booking: Booking | None = None
    promoted_booking: Booking | None = None

    @classmethod
    def ok(cls, message: str, booking: Booking | None = None, promoted_booking: Booking | None = None) -> "OperationResult":
        return cls(success=True, message=message, booking=booking, promoted_booking=promoted_booking)

    @classmethod
    def fail(cls, error: ErrorKind, message: str, booking: Booking | None = None) -> "OperationResult":
        return cls(success=False, message=message, error=error, booking=booking)
