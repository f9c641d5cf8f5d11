from __future__ import annotations

import logging
from datetime import date

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.domain.entities.membership import MembershipCancellation, MembershipFreeze
from studiodesk.domain.entities.result import ErrorKind, OperationResult


class MembershipUseCase:
    def __init__(self, store: EntityStore, audit_log: AuditLog) -> None:
        self._store = store
        self._audit = audit_log
        self._logger = logging.getLogger(__name__)

    def freeze_membership(
        self,
        member_id: str,
        start_date: date,
        end_date: date,
        reason: str | None = None,
    ) -> OperationResult:
        if end_date < start_date:
            return OperationResult.fail(ErrorKind.invalid_transition, "Freeze must end on or after its start date")

        with self._store.transaction():
            member = self._store.get_member(member_id)
            if member is None:
                return OperationResult.fail(ErrorKind.not_found, "Member not found")

            self._store.add_membership_freeze(
                MembershipFreeze(member_id=member_id, start_date=start_date, end_date=end_date, reason=reason)
            )
            self._audit.append(
                "freeze_membership",
                "member",
                member_id,
                f"Membership frozen from {start_date.isoformat()} to {end_date.isoformat()}",
                member.location,
            )

        self._logger.info("Membership frozen", extra={"person_id": member_id, "reason": reason})
        return OperationResult.ok("Membership frozen")

    def cancel_membership(
        self,
        member_id: str,
        cancellation_date: date,
        effective_date: date,
        reason: str | None = None,
    ) -> OperationResult:
        with self._store.transaction():
            member = self._store.get_member(member_id)
            if member is None:
                return OperationResult.fail(ErrorKind.not_found, "Member not found")

            self._store.add_membership_cancellation(
                MembershipCancellation(
                    member_id=member_id,
                    cancellation_date=cancellation_date,
                    effective_date=effective_date,
                    reason=reason,
                )
            )
            self._audit.append(
                "cancel_membership",
                "member",
                member_id,
                f"Membership cancelled, effective {effective_date.isoformat()}",
                member.location,
            )

        self._logger.info("Membership cancelled", extra={"person_id": member_id, "reason": reason})
        return OperationResult.ok("Membership cancelled")

    def list_freezes(self, member_id: str) -> list[MembershipFreeze]:
        return self._store.list_membership_freezes(member_id)

    def list_cancellations(self, member_id: str) -> list[MembershipCancellation]:
        return self._store.list_membership_cancellations(member_id)
