from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable

from studiodesk.application.exceptions import SnapshotVersionError, StorageError
from studiodesk.application.ports.snapshot_store import SnapshotStorePort
from studiodesk.application.utils.categories import parse_category
from studiodesk.domain.entities.audit import AuditLogEntry
from studiodesk.domain.entities.booking import Booking, BookingStatus
from studiodesk.domain.entities.gym_class import GymClass
from studiodesk.domain.entities.membership import MembershipCancellation, MembershipFreeze
from studiodesk.domain.entities.person import DropInClient, Lead, Member, PackClient, WeeklyUsage
from studiodesk.domain.entities.product import Product, ProductCategory
from studiodesk.domain.entities.staff import Staff
from studiodesk.domain.entities.store_state import SCHEMA_VERSION, StoreState
from studiodesk.domain.entities.transaction import LineItem, Transaction
from studiodesk.domain.entities.waitlist import WaitlistEntry

# Step migrations keyed by the version they upgrade from; each returns data at version + 1.
Migration = Callable[[dict[str, Any]], dict[str, Any]]
MIGRATIONS: dict[int, Migration] = {}


class JsonSnapshotStore(SnapshotStorePort):
    """
    Versioned JSON snapshot on local disk.

    Writes go to a temp file and are renamed into place. A snapshot written
    by another schema version is migrated step by step, or rejected with
    SnapshotVersionError; it is never silently replaced.
    """

    def __init__(
        self,
        path: str = "./data/studiodesk.json",
        migrations: dict[int, Migration] | None = None,
    ) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._migrations = MIGRATIONS if migrations is None else migrations
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoreState | None:
        with self._lock:
            if not self._path.exists():
                return None
            try:
                with open(self._path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise StorageError(f"Snapshot {self._path} is corrupt: {e}") from e
            except OSError as e:
                raise StorageError(f"Cannot read snapshot {self._path}: {e}") from e

        data = self._migrate(data)
        try:
            return self._deserialize_state(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Snapshot {self._path} has invalid records: {e}") from e

    def save(self, state: StoreState) -> None:
        data = self._serialize_state(state)
        temp_path = self._path.with_suffix(".json.tmp")
        with self._lock:
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                temp_path.replace(self._path)
            except (OSError, TypeError, ValueError) as e:
                temp_path.unlink(missing_ok=True)
                raise StorageError(f"Cannot write snapshot {self._path}: {e}") from e

    def reset(self) -> None:
        with self._lock:
            try:
                self._path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot remove snapshot {self._path}: {e}") from e
        self._logger.info("Snapshot reset", extra={"reason": str(self._path)})

    def _migrate(self, data: dict[str, Any]) -> dict[str, Any]:
        version = data.get("version")
        if not isinstance(version, int):
            raise SnapshotVersionError(f"Snapshot {self._path} has no schema version")
        if version > SCHEMA_VERSION:
            raise SnapshotVersionError(
                f"Snapshot version {version} is newer than supported version {SCHEMA_VERSION}"
            )
        while version < SCHEMA_VERSION:
            migration = self._migrations.get(version)
            if migration is None:
                raise SnapshotVersionError(
                    f"No migration from snapshot version {version}; reset the store to continue"
                )
            self._logger.info("Migrating snapshot", extra={"reason": f"v{version}->v{version + 1}"})
            data = migration(data)
            version += 1
            data["version"] = version
        return data

    def _serialize_state(self, state: StoreState) -> dict[str, Any]:
        return {
            "version": state.version,
            "members": [self._serialize_member(m) for m in state.members.values()],
            "pack_clients": [self._serialize_pack_client(c) for c in state.pack_clients.values()],
            "drop_in_clients": [
                {
                    "id": c.id,
                    "name": c.name,
                    "location": c.location,
                    "total_visits": c.total_visits,
                    "email": c.email,
                    "phone": c.phone,
                }
                for c in state.drop_in_clients.values()
            ],
            "leads": [
                {
                    "id": lead.id,
                    "name": lead.name,
                    "location": lead.location,
                    "status": lead.status,
                    "source": lead.source,
                    "email": lead.email,
                    "phone": lead.phone,
                }
                for lead in state.leads.values()
            ],
            "staff": [
                {"id": s.id, "name": s.name, "role": s.role, "location": s.location, "email": s.email}
                for s in state.staff.values()
            ],
            "classes": [self._serialize_class(c) for c in state.classes.values()],
            "products": [
                {
                    "id": p.id,
                    "name": p.name,
                    "category": p.category.value,
                    "price": p.price,
                    "location": p.location,
                    "stock": p.stock,
                }
                for p in state.products.values()
            ],
            "bookings": [self._serialize_booking(b) for b in state.bookings.values()],
            "waitlist": [
                {
                    "id": w.id,
                    "class_id": w.class_id,
                    "person_id": w.person_id,
                    "person_name": w.person_name,
                    "added_at": w.added_at.isoformat(),
                }
                for w in state.waitlist
            ],
            "transactions": [self._serialize_transaction(t) for t in state.transactions],
            "audit_log": [
                {
                    "id": a.id,
                    "timestamp": a.timestamp.isoformat(),
                    "action": a.action,
                    "entity_type": a.entity_type,
                    "entity_id": a.entity_id,
                    "details": a.details,
                    "location": a.location,
                }
                for a in state.audit_log
            ],
            "membership_freezes": [
                {
                    "member_id": f.member_id,
                    "start_date": f.start_date.isoformat(),
                    "end_date": f.end_date.isoformat(),
                    "reason": f.reason,
                }
                for f in state.membership_freezes
            ],
            "membership_cancellations": [
                {
                    "member_id": c.member_id,
                    "cancellation_date": c.cancellation_date.isoformat(),
                    "effective_date": c.effective_date.isoformat(),
                    "reason": c.reason,
                }
                for c in state.membership_cancellations
            ],
            "weekly_usage": [
                {"person_id": u.person_id, "week_start": u.week_start, "count": u.count}
                for u in state.weekly_usage.values()
            ],
        }

    def _deserialize_state(self, data: dict[str, Any]) -> StoreState:
        members = [self._deserialize_member(m) for m in data.get("members", [])]
        pack_clients = [self._deserialize_pack_client(c) for c in data.get("pack_clients", [])]
        drop_ins = [DropInClient(**c) for c in data.get("drop_in_clients", [])]
        leads = [Lead(**lead) for lead in data.get("leads", [])]
        staff = [Staff(**s) for s in data.get("staff", [])]
        classes = [GymClass(**c) for c in data.get("classes", [])]
        products = [
            Product(**{**p, "category": parse_category(p["category"]) or ProductCategory.other})
            for p in data.get("products", [])
        ]
        bookings = [self._deserialize_booking(b) for b in data.get("bookings", [])]
        usage = [WeeklyUsage(**u) for u in data.get("weekly_usage", [])]

        return StoreState(
            version=data["version"],
            members={m.id: m for m in members},
            pack_clients={c.id: c for c in pack_clients},
            drop_in_clients={c.id: c for c in drop_ins},
            leads={lead.id: lead for lead in leads},
            staff={s.id: s for s in staff},
            classes={c.id: c for c in classes},
            products={p.id: p for p in products},
            bookings={b.id: b for b in bookings},
            waitlist=[
                WaitlistEntry(**{**w, "added_at": datetime.fromisoformat(w["added_at"])})
                for w in data.get("waitlist", [])
            ],
            transactions=[self._deserialize_transaction(t) for t in data.get("transactions", [])],
            audit_log=[
                AuditLogEntry(**{**a, "timestamp": datetime.fromisoformat(a["timestamp"])})
                for a in data.get("audit_log", [])
            ],
            membership_freezes=[
                MembershipFreeze(
                    member_id=f["member_id"],
                    start_date=date.fromisoformat(f["start_date"]),
                    end_date=date.fromisoformat(f["end_date"]),
                    reason=f.get("reason"),
                )
                for f in data.get("membership_freezes", [])
            ],
            membership_cancellations=[
                MembershipCancellation(
                    member_id=c["member_id"],
                    cancellation_date=date.fromisoformat(c["cancellation_date"]),
                    effective_date=date.fromisoformat(c["effective_date"]),
                    reason=c.get("reason"),
                )
                for c in data.get("membership_cancellations", [])
            ],
            weekly_usage={(u.person_id, u.week_start): u for u in usage},
        )

    def _serialize_member(self, member: Member) -> dict[str, Any]:
        return {
            "id": member.id,
            "name": member.name,
            "membership_type": member.membership_type,
            "location": member.location,
            "status": member.status,
            "email": member.email,
            "phone": member.phone,
        }

    def _deserialize_member(self, data: dict[str, Any]) -> Member:
        return Member(**data)

    def _serialize_pack_client(self, client: PackClient) -> dict[str, Any]:
        return {
            "id": client.id,
            "name": client.name,
            "pack_type": client.pack_type,
            "total_classes": client.total_classes,
            "remaining_classes": client.remaining_classes,
            "location": client.location,
            "email": client.email,
            "phone": client.phone,
        }

    def _deserialize_pack_client(self, data: dict[str, Any]) -> PackClient:
        return PackClient(**data)

    def _serialize_class(self, gym_class: GymClass) -> dict[str, Any]:
        return {
            "id": gym_class.id,
            "name": gym_class.name,
            "type": gym_class.type,
            "day_of_week": gym_class.day_of_week,
            "start_time": gym_class.start_time,
            "duration_minutes": gym_class.duration_minutes,
            "capacity": gym_class.capacity,
            "coach_id": gym_class.coach_id,
            "location": gym_class.location,
            "booked_count": gym_class.booked_count,
        }

    def _serialize_booking(self, booking: Booking) -> dict[str, Any]:
        """Serialize Booking with ISO timestamps."""
        return {
            "id": booking.id,
            "class_id": booking.class_id,
            "person_id": booking.person_id,
            "person_name": booking.person_name,
            "status": booking.status.value,
            "booked_at": booking.booked_at.isoformat(),
            "checked_in_at": booking.checked_in_at.isoformat() if booking.checked_in_at else None,
            "cancelled_at": booking.cancelled_at.isoformat() if booking.cancelled_at else None,
        }

    def _deserialize_booking(self, data: dict[str, Any]) -> Booking:
        checked_in_at = data.get("checked_in_at")
        cancelled_at = data.get("cancelled_at")
        return Booking(
            id=data["id"],
            class_id=data["class_id"],
            person_id=data["person_id"],
            person_name=data["person_name"],
            status=BookingStatus(data["status"]),
            booked_at=datetime.fromisoformat(data["booked_at"]),
            checked_in_at=datetime.fromisoformat(checked_in_at) if checked_in_at else None,
            cancelled_at=datetime.fromisoformat(cancelled_at) if cancelled_at else None,
        )

    def _serialize_transaction(self, transaction: Transaction) -> dict[str, Any]:
        return {
            "id": transaction.id,
            "items": [
                {
                    "product_id": i.product_id,
                    "product_name": i.product_name,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                    "category": i.category.value if i.category else None,
                }
                for i in transaction.items
            ],
            "subtotal": transaction.subtotal,
            "discount": transaction.discount,
            "tax": transaction.tax,
            "total": transaction.total,
            "seller_id": transaction.seller_id,
            "seller_name": transaction.seller_name,
            "timestamp": transaction.timestamp.isoformat(),
            "location": transaction.location,
            "person_id": transaction.person_id,
            "person_name": transaction.person_name,
            "promo_code": transaction.promo_code,
        }

    def _deserialize_transaction(self, data: dict[str, Any]) -> Transaction:
        items = tuple(
            LineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=i["quantity"],
                unit_price=i["unit_price"],
                category=ProductCategory(i["category"]) if i.get("category") else None,
            )
            for i in data.get("items", [])
        )
        return Transaction(
            id=data["id"],
            items=items,
            subtotal=data["subtotal"],
            discount=data["discount"],
            tax=data["tax"],
            total=data["total"],
            seller_id=data["seller_id"],
            seller_name=data.get("seller_name"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            location=data["location"],
            person_id=data.get("person_id"),
            person_name=data.get("person_name"),
            promo_code=data.get("promo_code"),
        )
