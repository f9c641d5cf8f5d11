#!/usr/bin/env python3
"""
Seed a JSON snapshot with a small demo studio.

Usage:
  python3 scripts/seed_store.py --path ./data/studiodesk.json [--reset]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from studiodesk.application.entity_store import EntityStore
from studiodesk.domain.entities.gym_class import GymClass
from studiodesk.domain.entities.person import DropInClient, Lead, Member, PackClient
from studiodesk.domain.entities.product import Product, ProductCategory
from studiodesk.domain.entities.staff import Staff
from studiodesk.infrastructure.store.json_store import JsonSnapshotStore

LOCATION = "athletic-club"


def seed(store: EntityStore) -> None:
    with store.transaction():
        store.add_staff(Staff(id="staff-1", name="Jordan Lee", role="front-desk", location=LOCATION))
        store.add_staff(Staff(id="staff-2", name="Sam Ortiz", role="coach", location=LOCATION))
        store.add_staff(Staff(id="staff-3", name="Riley Chen", role="head-coach", location=LOCATION))

        store.add_class(
            GymClass(
                id="class-hiit-mon",
                name="HIIT Express",
                type="hiit",
                day_of_week="Monday",
                start_time="06:00",
                duration_minutes=45,
                capacity=12,
                coach_id="staff-2",
                location=LOCATION,
            )
        )
        store.add_class(
            GymClass(
                id="class-strength-wed",
                name="Strength Foundations",
                type="strength",
                day_of_week="Wednesday",
                start_time="18:00",
                duration_minutes=60,
                capacity=8,
                coach_id="staff-3",
                location=LOCATION,
            )
        )

        store.add_person(Member(id="member-1", name="Alex Morgan", membership_type="unlimited", location=LOCATION))
        store.add_person(Member(id="member-2", name="Casey Park", membership_type="2x-week", location=LOCATION))
        store.add_person(
            PackClient(
                id="pack-1",
                name="Taylor Brooks",
                pack_type="10-pack",
                total_classes=10,
                remaining_classes=10,
                location=LOCATION,
            )
        )
        store.add_person(DropInClient(id="dropin-1", name="Jamie Fox", location=LOCATION))
        store.add_person(Lead(id="lead-1", name="Morgan Diaz", location=LOCATION, source="instagram"))

        for product in (
            Product("membership-unlimited", "Unlimited Membership", ProductCategory.membership, 199.0, LOCATION),
            Product("pack-10", "10-Class Pack", ProductCategory.class_pack, 140.0, LOCATION),
            Product("drop-in", "Drop-In Class", ProductCategory.drop_in, 20.0, LOCATION),
            Product("retail-water", "Water Bottle", ProductCategory.retail, 15.0, LOCATION, stock=45),
            Product("retail-shirt", "T-Shirt", ProductCategory.retail, 25.0, LOCATION, stock=8),
        ):
            store.put_product(product)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demo studio snapshot")
    parser.add_argument("--path", default="./data/studiodesk.json")
    parser.add_argument("--reset", action="store_true", help="Discard an existing snapshot first")
    args = parser.parse_args()

    snapshots = JsonSnapshotStore(path=args.path)
    if args.reset:
        snapshots.reset()

    store = EntityStore(snapshots)
    seed(store)
    print(f"Seeded {len(store.list_classes())} classes into {snapshots.path}")


if __name__ == "__main__":
    main()
