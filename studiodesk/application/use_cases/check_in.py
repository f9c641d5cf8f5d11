from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.application.utils.dates import week_start
from studiodesk.domain.entities.booking import Booking, BookingStatus
from studiodesk.domain.entities.result import ErrorKind, OperationResult


class CheckInUseCase:
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

    def check_in_member(self, booking_id: str) -> OperationResult:
        """
        Mark a booking as attended and debit the person's balance once.

        Status change, debit and audit entry commit together: if the snapshot
        cannot be saved, none of them stick and StorageError propagates.
        """
        with self._store.transaction():
            booking = self._store.get_booking(booking_id)
            if booking is None:
                return OperationResult.fail(ErrorKind.not_found, "Booking not found")

            if booking.status == BookingStatus.checked_in:
                return OperationResult.fail(ErrorKind.already_checked_in, "Already checked in", booking=booking)

            if booking.status != BookingStatus.booked:
                return OperationResult.fail(
                    ErrorKind.invalid_transition,
                    f"Cannot check in a booking that is {booking.status.value}",
                    booking=booking,
                )

            now = self._clock()
            booking = self._store.put_booking(replace(booking, status=BookingStatus.checked_in, checked_in_at=now))
            self._debit_balance(booking, now)

            gym_class = self._store.get_class(booking.class_id)
            class_name = gym_class.name if gym_class else booking.class_id
            self._audit.append(
                "check_in",
                "booking",
                booking.id,
                f"{booking.person_name} checked in to {class_name}",
                gym_class.location if gym_class else "",
            )

        self._logger.info("Checked in", extra={"booking_id": booking.id, "person_id": booking.person_id})
        return OperationResult.ok("Checked in successfully", booking=booking)

    def _debit_balance(self, booking: Booking, now: datetime) -> None:
        # A pack with classes left is debited even if the same id also holds a membership.
        client = self._store.get_pack_client(booking.person_id)
        if client is not None and client.remaining_classes > 0:
            self._store.update_person(replace(client, remaining_classes=client.remaining_classes - 1))
            return

        member = self._store.get_member(booking.person_id)
        if member is not None:
            self._store.increment_weekly_usage(member.id, week_start(now))
            return

        if client is not None:
            # Zero-balance check-ins are allowed; the desk settles them at POS.
            self._logger.warning(
                "Class-pack client checked in with no remaining classes",
                extra={"person_id": client.id, "booking_id": booking.id},
            )
            return

        if self._store.resolve_person(booking.person_id) is None:
            self._logger.info("Check-in for unknown person, no balance to debit", extra={"person_id": booking.person_id})
        # Drop-ins pay per visit at POS; leads carry no balance.
