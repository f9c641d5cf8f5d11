from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from typing import Iterator

from studiodesk.application.ports.snapshot_store import SnapshotStorePort
from studiodesk.domain.entities.audit import AuditLogEntry
from studiodesk.domain.entities.booking import ACTIVE_BOOKING_STATUSES, Booking
from studiodesk.domain.entities.gym_class import GymClass
from studiodesk.domain.entities.membership import MembershipCancellation, MembershipFreeze
from studiodesk.domain.entities.person import (
    DropInClient,
    Lead,
    Member,
    PackClient,
    Person,
    PersonKind,
    ResolvedPerson,
    WeeklyUsage,
)
from studiodesk.domain.entities.product import Product
from studiodesk.domain.entities.staff import Staff
from studiodesk.domain.entities.store_state import StoreState
from studiodesk.domain.entities.transaction import Transaction
from studiodesk.domain.entities.waitlist import WaitlistEntry


class EntityStore:
    """
    Single source of truth for studio records.

    Holds the current StoreState in memory and persists it through a
    SnapshotStorePort. All access goes through one re-entrant lock; mutations
    are grouped with `transaction()`, which saves a snapshot when the
    outermost block exits after a change and restores the previous state if
    anything inside it raises (including the save itself).
    """

    def __init__(self, snapshots: SnapshotStorePort, state: StoreState | None = None) -> None:
        self._snapshots = snapshots
        self._lock = threading.RLock()
        self._depth = 0
        self._dirty = False
        self._logger = logging.getLogger(__name__)
        if state is None:
            state = snapshots.load()
        self._state = state or StoreState()
        # Snapshots may carry stale counts; bookings are authoritative.
        for class_id in list(self._state.classes):
            self._refresh_booked_count(class_id)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            backup = self._state.copy() if outermost else None
            if outermost:
                self._dirty = False
            self._depth += 1
            try:
                yield
                if outermost and self._dirty:
                    self._snapshots.save(self._state)
            except BaseException:
                if outermost:
                    self._state = backup
                    self._logger.warning("Store transaction rolled back")
                raise
            finally:
                self._depth -= 1

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        with self.transaction():
            self._dirty = True
            yield

    def snapshot(self) -> StoreState:
        with self._lock:
            return self._state.copy()

    # Classes

    def get_class(self, class_id: str) -> GymClass | None:
        with self._lock:
            return self._state.classes.get(class_id)

    def list_classes(self, location: str | None = None) -> list[GymClass]:
        with self._lock:
            classes = list(self._state.classes.values())
        if location and location != "all":
            classes = [c for c in classes if c.location == location]
        return classes

    def add_class(self, gym_class: GymClass) -> GymClass:
        with self._mutation():
            self._state.classes[gym_class.id] = gym_class
            return self._refresh_booked_count(gym_class.id)

    def _refresh_booked_count(self, class_id: str) -> GymClass:
        gym_class = self._state.classes[class_id]
        count = self.count_active_bookings(class_id)
        if count != gym_class.booked_count:
            gym_class = replace(gym_class, booked_count=count)
            self._state.classes[class_id] = gym_class
        return gym_class

    # Bookings

    def get_booking(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._state.bookings.get(booking_id)

    def bookings_for_class(self, class_id: str) -> list[Booking]:
        with self._lock:
            return [b for b in self._state.bookings.values() if b.class_id == class_id]

    def bookings_for_person(self, person_id: str) -> list[Booking]:
        with self._lock:
            return [b for b in self._state.bookings.values() if b.person_id == person_id]

    def find_active_booking(self, class_id: str, person_id: str) -> Booking | None:
        with self._lock:
            for booking in self._state.bookings.values():
                if booking.class_id == class_id and booking.person_id == person_id and booking.is_active:
                    return booking
        return None

    def count_active_bookings(self, class_id: str) -> int:
        with self._lock:
            return sum(
                1
                for b in self._state.bookings.values()
                if b.class_id == class_id and b.status in ACTIVE_BOOKING_STATUSES
            )

    def put_booking(self, booking: Booking) -> Booking:
        """Insert or replace a booking and keep the class's booked_count in step."""
        with self._mutation():
            self._state.bookings[booking.id] = booking
            if booking.class_id in self._state.classes:
                self._refresh_booked_count(booking.class_id)
            return booking

    # Waitlist

    def waitlist_for_class(self, class_id: str) -> list[WaitlistEntry]:
        with self._lock:
            return [w for w in self._state.waitlist if w.class_id == class_id]

    def find_waitlist_entry(self, class_id: str, person_id: str) -> WaitlistEntry | None:
        with self._lock:
            for entry in self._state.waitlist:
                if entry.class_id == class_id and entry.person_id == person_id:
                    return entry
        return None

    def append_waitlist_entry(self, entry: WaitlistEntry) -> WaitlistEntry:
        with self._mutation():
            self._state.waitlist.append(entry)
            return entry

    def remove_waitlist_entry(self, entry_id: str) -> None:
        with self._mutation():
            self._state.waitlist = [w for w in self._state.waitlist if w.id != entry_id]

    # People

    def resolve_person(self, person_id: str) -> ResolvedPerson | None:
        with self._lock:
            lookups = (
                (PersonKind.member, self._state.members),
                (PersonKind.class_pack, self._state.pack_clients),
                (PersonKind.drop_in, self._state.drop_in_clients),
                (PersonKind.lead, self._state.leads),
            )
            for kind, collection in lookups:
                record = collection.get(person_id)
                if record is not None:
                    return ResolvedPerson(kind=kind, record=record)
        return None

    def get_member(self, member_id: str) -> Member | None:
        with self._lock:
            return self._state.members.get(member_id)

    def get_pack_client(self, client_id: str) -> PackClient | None:
        with self._lock:
            return self._state.pack_clients.get(client_id)

    def add_person(self, person: Person) -> Person:
        with self._mutation():
            self._collection_for(person)[person.id] = person
            return person

    def update_person(self, person: Person) -> Person:
        with self._mutation():
            collection = self._collection_for(person)
            if person.id not in collection:
                raise KeyError(f"Unknown {type(person).__name__} {person.id}")
            collection[person.id] = person
            return person

    def _collection_for(self, person: Person) -> dict:
        if isinstance(person, Member):
            return self._state.members
        if isinstance(person, PackClient):
            return self._state.pack_clients
        if isinstance(person, DropInClient):
            return self._state.drop_in_clients
        if isinstance(person, Lead):
            return self._state.leads
        raise TypeError(f"Not a person record: {type(person).__name__}")

    def get_weekly_usage(self, person_id: str, week_start: date) -> WeeklyUsage | None:
        with self._lock:
            return self._state.weekly_usage.get((person_id, week_start.isoformat()))

    def increment_weekly_usage(self, person_id: str, week_start: date) -> WeeklyUsage:
        with self._mutation():
            key = (person_id, week_start.isoformat())
            usage = self._state.weekly_usage.get(key) or WeeklyUsage(person_id=person_id, week_start=key[1])
            usage = replace(usage, count=usage.count + 1)
            self._state.weekly_usage[key] = usage
            return usage

    # Staff & products

    def get_staff(self, staff_id: str) -> Staff | None:
        with self._lock:
            return self._state.staff.get(staff_id)

    def add_staff(self, staff: Staff) -> Staff:
        with self._mutation():
            self._state.staff[staff.id] = staff
            return staff

    def get_product(self, product_id: str) -> Product | None:
        with self._lock:
            return self._state.products.get(product_id)

    def product_catalog(self) -> dict[str, Product]:
        with self._lock:
            return dict(self._state.products)

    def put_product(self, product: Product) -> Product:
        with self._mutation():
            self._state.products[product.id] = product
            return product

    # Transactions, audit, memberships

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return list(self._state.transactions)

    def append_transaction(self, transaction: Transaction) -> Transaction:
        with self._mutation():
            self._state.transactions.append(transaction)
            return transaction

    def list_audit_entries(self) -> list[AuditLogEntry]:
        with self._lock:
            return list(self._state.audit_log)

    def append_audit_entry(self, entry: AuditLogEntry) -> AuditLogEntry:
        with self._mutation():
            self._state.audit_log.append(entry)
            return entry

    def list_membership_freezes(self, member_id: str | None = None) -> list[MembershipFreeze]:
        with self._lock:
            freezes = list(self._state.membership_freezes)
        if member_id is not None:
            freezes = [f for f in freezes if f.member_id == member_id]
        return freezes

    def add_membership_freeze(self, freeze: MembershipFreeze) -> MembershipFreeze:
        with self._mutation():
            self._state.membership_freezes.append(freeze)
            return freeze

    def list_membership_cancellations(self, member_id: str | None = None) -> list[MembershipCancellation]:
        with self._lock:
            cancellations = list(self._state.membership_cancellations)
        if member_id is not None:
            cancellations = [c for c in cancellations if c.member_id == member_id]
        return cancellations

    def add_membership_cancellation(self, cancellation: MembershipCancellation) -> MembershipCancellation:
        with self._mutation():
            self._state.membership_cancellations.append(cancellation)
            return cancellation
