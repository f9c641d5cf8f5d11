"""
Tests for the HTTP surface.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from studiodesk.application.entity_store import EntityStore
from studiodesk.domain.entities.gym_class import GymClass
from studiodesk.domain.entities.person import Member, PackClient
from studiodesk.domain.entities.staff import Staff
from studiodesk.domain.entities.store_state import StoreState
from studiodesk.infrastructure.store.memory_store import MemorySnapshotStore
from studiodesk.main import app
from studiodesk.wiring import dependencies


@pytest.fixture
def client(monkeypatch):
    state = StoreState()
    state.classes["class-hiit"] = GymClass(
        id="class-hiit",
        name="HIIT Express",
        type="hiit",
        day_of_week="Monday",
        start_time="06:00",
        duration_minutes=45,
        capacity=1,
        coach_id="staff-2",
        location="athletic-club",
    )
    state.members["member-1"] = Member(id="member-1", name="Alex", membership_type="unlimited", location="athletic-club")
    state.pack_clients["pack-1"] = PackClient(
        id="pack-1",
        name="Taylor",
        pack_type="5-pack",
        total_classes=5,
        remaining_classes=5,
        location="athletic-club",
    )
    state.staff["staff-1"] = Staff(id="staff-1", name="Jordan", role="front-desk", location="athletic-club")
    monkeypatch.setattr(dependencies, "_entity_store", EntityStore(MemorySnapshotStore(), state=state))
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_book_check_in_flow(client):
    resp = client.post("/api/v1/classes/class-hiit/bookings", json={"person_id": "pack-1", "person_name": "Taylor"})
    assert resp.status_code == 201
    booking_id = resp.json()["booking"]["id"]

    full = client.post("/api/v1/classes/class-hiit/bookings", json={"person_id": "member-1", "person_name": "Alex"})
    assert full.status_code == 409
    assert full.json()["detail"]["error"] == "class_full"

    info = client.get("/api/v1/classes/class-hiit").json()
    assert info["booked_count"] == 1
    assert info["spots_left"] == 0

    checked = client.post(f"/api/v1/bookings/{booking_id}/check-in")
    assert checked.status_code == 200
    assert checked.json()["booking"]["status"] == "checked-in"

    activity = client.get("/api/v1/people/pack-1/activity").json()
    assert activity["kind"] == "class-pack"
    assert activity["remaining_classes"] == 4


def test_cancel_promotes_waitlisted_person(client):
    booking_id = client.post(
        "/api/v1/classes/class-hiit/bookings", json={"person_id": "pack-1", "person_name": "Taylor"}
    ).json()["booking"]["id"]
    wait = client.post("/api/v1/classes/class-hiit/waitlist", json={"person_id": "member-1", "person_name": "Alex"})
    assert wait.status_code == 201

    resp = client.post(f"/api/v1/bookings/{booking_id}/cancel")

    assert resp.status_code == 200
    assert resp.json()["promoted_booking"]["person_id"] == "member-1"
    assert client.post(f"/api/v1/bookings/{booking_id}/cancel").json()["detail"]["error"] == "already_cancelled"


def test_unknown_resources_return_404(client):
    assert client.get("/api/v1/classes/nope").status_code == 404
    resp = client.post("/api/v1/bookings/nope/check-in")
    assert resp.status_code == 404
    assert resp.json()["detail"]["message"] == "Booking not found"


def test_transaction_and_commission_report(client):
    resp = client.post(
        "/api/v1/transactions",
        json={
            "items": [{"product_id": "pack-10", "product_name": "10-Class Pack", "quantity": 1, "unit_price": 100.0}],
            "seller_id": "staff-1",
            "location": "athletic-club",
            "discount": 10.0,
            "tax": 6.3,
        },
    )
    assert resp.status_code == 201
    assert resp.json()["total"] == 96.3

    start = (datetime.now() - timedelta(days=1)).isoformat()
    end = (datetime.now() + timedelta(days=1)).isoformat()
    reports = client.get("/api/v1/reports/commissions", params={"start": start, "end": end}).json()
    assert len(reports) == 1
    assert reports[0]["seller_name"] == "Jordan"
    assert reports[0]["commission_rate"] == 0.15
    assert reports[0]["commission_amount"] == pytest.approx(14.445, abs=0.006)
    assert reports[0]["category_breakdown"]["class_packs"] == 100.0

    bad = client.get("/api/v1/reports/commissions", params={"start": end, "end": start})
    assert bad.status_code == 400


def test_invalid_transaction_returns_400(client):
    resp = client.post(
        "/api/v1/transactions",
        json={
            "items": [{"product_id": "drop-in", "product_name": "Drop-In Class", "quantity": 1, "unit_price": 20.0}],
            "seller_id": "staff-1",
            "location": "athletic-club",
            "discount": 50.0,
        },
    )
    assert resp.status_code == 400


def test_freeze_membership_and_audit_log(client):
    resp = client.post(
        "/api/v1/members/member-1/freeze",
        json={"start_date": "2024-02-01", "end_date": "2024-02-14", "reason": "travel"},
    )
    assert resp.status_code == 200

    entries = client.get("/api/v1/audit-log", params={"entity_type": "member"}).json()
    assert [e["action"] for e in entries] == ["freeze_membership"]
