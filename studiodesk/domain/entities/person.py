from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class PersonKind(str, Enum):
    member = "member"
    class_pack = "class-pack"
    drop_in = "drop-in"
    lead = "lead"


@dataclass(frozen=True)
class Member:
    id: str
    name: str
    membership_type: str  # "1x-week" | "2x-week" | "unlimited"
    location: str
    status: str = "active"  # "active" | "frozen" | "cancelled"
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class PackClient:
    id: str
    name: str
    pack_type: str  # "5-pack" | "10-pack" | "20-pack"
    total_classes: int
    remaining_classes: int
    location: str
    email: str | None = None
    phone: str | None = None

    def __post_init__(self) -> None:
        if self.remaining_classes < 0:
            raise ValueError("remaining_classes cannot be negative")


@dataclass(frozen=True)
class DropInClient:
    id: str
    name: str
    location: str
    total_visits: int = 0
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class Lead:
    id: str
    name: str
    location: str
    status: str = "new-lead"
    source: str | None = None
    email: str | None = None
    phone: str | None = None


Person = Union[Member, PackClient, DropInClient, Lead]


@dataclass(frozen=True)
class ResolvedPerson:
    kind: PersonKind
    record: Person

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class WeeklyUsage:
    person_id: str
    week_start: str  # ISO date of the Monday
    count: int = 0
