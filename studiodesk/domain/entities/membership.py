from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MembershipFreeze:
    member_id: str
    start_date: date
    end_date: date
    reason: str | None = None


@dataclass(frozen=True)
class MembershipCancellation:
    member_id: str
    cancellation_date: date
    effective_date: date
    reason: str | None = None
