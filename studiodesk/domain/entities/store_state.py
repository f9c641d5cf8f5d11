from __future__ import annotations

from dataclasses import dataclass, field

from studiodesk.domain.entities.audit import AuditLogEntry
from studiodesk.domain.entities.booking import Booking
from studiodesk.domain.entities.gym_class import GymClass
from studiodesk.domain.entities.membership import MembershipCancellation, MembershipFreeze
from studiodesk.domain.entities.person import DropInClient, Lead, Member, PackClient, WeeklyUsage
from studiodesk.domain.entities.product import Product
from studiodesk.domain.entities.staff import Staff
from studiodesk.domain.entities.transaction import Transaction
from studiodesk.domain.entities.waitlist import WaitlistEntry

SCHEMA_VERSION = 1


@dataclass
class StoreState:
    """Every collection the studio persists, as one versioned snapshot.

    Records are frozen dataclasses, so a shallow copy of the containers is a
    complete, independent snapshot.
    """

    version: int = SCHEMA_VERSION
    members: dict[str, Member] = field(default_factory=dict)
    pack_clients: dict[str, PackClient] = field(default_factory=dict)
    drop_in_clients: dict[str, DropInClient] = field(default_factory=dict)
    leads: dict[str, Lead] = field(default_factory=dict)
    staff: dict[str, Staff] = field(default_factory=dict)
    classes: dict[str, GymClass] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)
    bookings: dict[str, Booking] = field(default_factory=dict)
    waitlist: list[WaitlistEntry] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    audit_log: list[AuditLogEntry] = field(default_factory=list)
    membership_freezes: list[MembershipFreeze] = field(default_factory=list)
    membership_cancellations: list[MembershipCancellation] = field(default_factory=list)
    weekly_usage: dict[tuple[str, str], WeeklyUsage] = field(default_factory=dict)

    def copy(self) -> StoreState:
        return StoreState(
            version=self.version,
            members=dict(self.members),
            pack_clients=dict(self.pack_clients),
            drop_in_clients=dict(self.drop_in_clients),
            leads=dict(self.leads),
            staff=dict(self.staff),
            classes=dict(self.classes),
            products=dict(self.products),
            bookings=dict(self.bookings),
            waitlist=list(self.waitlist),
            transactions=list(self.transactions),
            audit_log=list(self.audit_log),
            membership_freezes=list(self.membership_freezes),
            membership_cancellations=list(self.membership_cancellations),
            weekly_usage=dict(self.weekly_usage),
        )
