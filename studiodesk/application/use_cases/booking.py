from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.application.utils.ids import new_id
from studiodesk.domain.entities.booking import Booking, BookingStatus
from studiodesk.domain.entities.gym_class import GymClass
from studiodesk.domain.entities.result import ErrorKind, OperationResult
from studiodesk.domain.entities.waitlist import WaitlistEntry


class BookingUseCase:
    """Capacity-checked booking, FIFO waitlist and cancellation with promotion."""

    def __init__(
        self,
        store: EntityStore,
        audit_log: AuditLog,
        clock: Callable[[], datetime],
    ) -> None:
        self._store = store
        self._audit = audit_log
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def get_class(self, class_id: str) -> GymClass | None:
        return self._store.get_class(class_id)

    def get_waitlist(self, class_id: str) -> list[WaitlistEntry]:
        return self._store.waitlist_for_class(class_id)

    def book_class(self, class_id: str, person_id: str, person_name: str) -> OperationResult:
        # Duplicate check, capacity check and insert run in one store transaction.
        with self._store.transaction():
            gym_class = self._store.get_class(class_id)
            if gym_class is None:
                return OperationResult.fail(ErrorKind.not_found, "Class not found")

            if self._store.find_active_booking(class_id, person_id) is not None:
                return OperationResult.fail(ErrorKind.duplicate_booking, "Already booked for this class")

            if self._store.count_active_bookings(class_id) >= gym_class.capacity:
                self._logger.info("Class full", extra={"class_id": class_id, "person_id": person_id})
                return OperationResult.fail(ErrorKind.class_full, "Class is full")

            booking = self._store.put_booking(
                Booking(
                    id=new_id("booking"),
                    class_id=class_id,
                    person_id=person_id,
                    person_name=person_name,
                    status=BookingStatus.booked,
                    booked_at=self._clock(),
                )
            )
            self._audit.append(
                "book_class",
                "booking",
                booking.id,
                f"{person_name} booked {gym_class.name}",
                gym_class.location,
            )

        self._logger.info("Class booked", extra={"booking_id": booking.id, "class_id": class_id, "person_id": person_id})
        return OperationResult.ok("Class booked successfully", booking=booking)

    def add_to_waitlist(self, class_id: str, person_id: str, person_name: str) -> OperationResult:
        # No capacity check here; gating happens at booking time.
        with self._store.transaction():
            gym_class = self._store.get_class(class_id)
            if gym_class is None:
                return OperationResult.fail(ErrorKind.not_found, "Class not found")

            if self._store.find_waitlist_entry(class_id, person_id) is not None:
                return OperationResult.fail(ErrorKind.duplicate_waitlist, "Already on waitlist")

            entry = self._store.append_waitlist_entry(
                WaitlistEntry(
                    id=new_id("waitlist"),
                    class_id=class_id,
                    person_id=person_id,
                    person_name=person_name,
                    added_at=self._clock(),
                )
            )
            self._audit.append(
                "add_to_waitlist",
                "waitlist",
                entry.id,
                f"{person_name} added to waitlist for {gym_class.name}",
                gym_class.location,
            )

        self._logger.info("Added to waitlist", extra={"class_id": class_id, "person_id": person_id})
        return OperationResult.ok("Added to waitlist")

    def cancel_booking(self, booking_id: str) -> OperationResult:
        with self._store.transaction():
            booking = self._store.get_booking(booking_id)
            if booking is None:
                return OperationResult.fail(ErrorKind.not_found, "Booking not found")

            if booking.status in (BookingStatus.cancelled, BookingStatus.no_show):
                return OperationResult.fail(
                    ErrorKind.already_cancelled,
                    f"Booking is already {booking.status.value}",
                    booking=booking,
                )

            if booking.status == BookingStatus.checked_in:
                return OperationResult.fail(
                    ErrorKind.invalid_transition,
                    "Cannot cancel a booking that is already checked in",
                    booking=booking,
                )

            booking = self._store.put_booking(
                replace(booking, status=BookingStatus.cancelled, cancelled_at=self._clock())
            )
            gym_class = self._store.get_class(booking.class_id)
            promoted = self._promote_from_waitlist(booking.class_id) if gym_class else None

            self._audit.append(
                "cancel_booking",
                "booking",
                booking.id,
                f"{booking.person_name} cancelled booking",
                gym_class.location if gym_class else "",
            )

        self._logger.info("Booking cancelled", extra={"booking_id": booking.id, "class_id": booking.class_id})
        return OperationResult.ok("Booking cancelled", booking=booking, promoted_booking=promoted)

    def _promote_from_waitlist(self, class_id: str) -> Booking | None:
        """
        Book the earliest waitlisted person into the freed spot.

        The entry is removed whether or not the booking succeeds; a person whose
        promotion fails is not re-queued.
        """
        waiting = self._store.waitlist_for_class(class_id)
        if not waiting:
            return None

        entry = waiting[0]
        result = self.book_class(entry.class_id, entry.person_id, entry.person_name)
        self._store.remove_waitlist_entry(entry.id)

        if result.success:
            self._logger.info(
                "Promoted from waitlist",
                extra={"class_id": class_id, "person_id": entry.person_id, "booking_id": result.booking.id},
            )
            return result.booking

        self._logger.warning(
            "Waitlist promotion failed, entry dropped",
            extra={"class_id": class_id, "person_id": entry.person_id, "reason": result.message},
        )
        gym_class = self._store.get_class(class_id)
        self._audit.append(
            "waitlist_promotion_failed",
            "waitlist",
            entry.id,
            f"{entry.person_name} could not be promoted: {result.message}",
            gym_class.location if gym_class else "",
        )
        return None
