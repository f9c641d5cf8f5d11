"""
Tests for per-seller commission reports and category revenue.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.commission import CommissionReportUseCase
from studiodesk.application.utils.categories import infer_category, parse_category
from studiodesk.core.config import Settings
from studiodesk.domain.entities.product import Product, ProductCategory
from studiodesk.domain.entities.staff import Staff
from studiodesk.domain.entities.store_state import StoreState
from studiodesk.domain.entities.transaction import LineItem, Transaction
from studiodesk.infrastructure.store.memory_store import MemorySnapshotStore

TZ = ZoneInfo("America/New_York")
START = datetime(2024, 1, 1, 0, 0, tzinfo=TZ)
END = datetime(2024, 1, 31, 23, 59, tzinfo=TZ)


def _txn(
    txn_id: str,
    seller_id: str,
    total: float,
    when: datetime,
    location: str = "athletic-club",
    product_id: str = "retail-water",
    product_name: str = "Water Bottle",
    category: ProductCategory | None = None,
) -> Transaction:
    return Transaction(
        id=txn_id,
        items=(LineItem(product_id, product_name, 1, total, category),),
        subtotal=total,
        discount=0.0,
        tax=0.0,
        total=total,
        seller_id=seller_id,
        timestamp=when,
        location=location,
    )


def _make_use_case(transactions: list[Transaction], staff: list[Staff] | None = None) -> CommissionReportUseCase:
    state = StoreState(transactions=list(transactions))
    for s in staff or []:
        state.staff[s.id] = s
    state.products["pack-10"] = Product("pack-10", "10-Class Pack", ProductCategory.class_pack, 140.0, "athletic-club")
    store = EntityStore(MemorySnapshotStore(), state=state)
    settings = Settings()
    return CommissionReportUseCase(
        store=store,
        timezone=TZ,
        commission_rates={"front-desk": 0.15, "coach": 0.10},
        default_rate=settings.DEFAULT_COMMISSION_RATE,
    )


def test_single_seller_report_totals():
    when = datetime(2024, 1, 15, 12, 0, tzinfo=TZ)
    uc = _make_use_case(
        [_txn("t1", "staff-1", 50.00, when), _txn("t2", "staff-1", 75.25, when), _txn("t3", "staff-1", 10.00, when)],
        staff=[Staff(id="staff-1", name="Jordan", role="front-desk", location="athletic-club")],
    )

    report = uc.get_commission_report("staff-1", START, END)

    assert report.seller_name == "Jordan"
    assert report.transaction_count == 3
    assert report.total_sales == pytest.approx(135.25)
    assert report.commission_rate == 0.15
    assert report.commission_amount == pytest.approx(20.2875)
    assert round(report.commission_amount, 2) == pytest.approx(20.29)
    assert report.category_breakdown.retail == pytest.approx(135.25)


def test_seller_without_sales_gets_empty_report():
    uc = _make_use_case([], staff=[Staff(id="staff-2", name="Sam", role="coach", location="athletic-club")])

    report = uc.get_commission_report("staff-2", START, END)

    assert report.total_sales == 0
    assert report.transaction_count == 0
    assert report.commission_amount == 0
    assert report.commission_rate == 0.10


def test_reports_sorted_by_sales_then_name():
    when = datetime(2024, 1, 15, 12, 0, tzinfo=TZ)
    staff = [
        Staff(id="staff-1", name="Zoe", role="coach", location="athletic-club"),
        Staff(id="staff-2", name="Adam", role="coach", location="athletic-club"),
        Staff(id="staff-3", name="Mia", role="coach", location="athletic-club"),
    ]
    uc = _make_use_case(
        [
            _txn("t1", "staff-1", 40.0, when),
            _txn("t2", "staff-2", 40.0, when),
            _txn("t3", "staff-3", 90.0, when),
        ],
        staff=staff,
    )

    reports = uc.get_all_commission_reports("all", START, END)

    assert [r.seller_id for r in reports] == ["staff-3", "staff-2", "staff-1"]


def test_location_filter_and_inclusive_range():
    uc = _make_use_case(
        [
            _txn("t1", "staff-1", 20.0, START),
            _txn("t2", "staff-1", 30.0, END),
            _txn("t3", "staff-1", 99.0, datetime(2024, 2, 1, 0, 0, tzinfo=TZ)),
            _txn("t4", "staff-1", 45.0, datetime(2024, 1, 5, 10, 0, tzinfo=TZ), location="downtown"),
        ],
    )

    everywhere = uc.get_all_commission_reports(None, START, END)
    athletic = uc.get_all_commission_reports("athletic-club", START, END)

    assert everywhere[0].total_sales == pytest.approx(95.0)
    assert athletic[0].total_sales == pytest.approx(50.0)
    assert athletic[0].transaction_count == 2


def test_unknown_seller_falls_back_to_default_rate():
    when = datetime(2024, 1, 15, 12, 0, tzinfo=TZ)
    uc = _make_use_case([_txn("t1", "staff-gone", 100.0, when)])

    report = uc.get_all_commission_reports("all", START, END)[0]

    assert report.seller_name == "staff-gone"
    assert report.seller_role == "unknown"
    assert report.commission_rate == 0.10


def test_naive_bounds_use_studio_timezone():
    uc = _make_use_case([_txn("t1", "staff-1", 25.0, datetime(2024, 1, 15, 12, 0, tzinfo=TZ))])

    report = uc.get_commission_report("staff-1", datetime(2024, 1, 15), datetime(2024, 1, 15, 23, 59))

    assert report.total_sales == pytest.approx(25.0)


def test_revenue_by_category_uses_catalog_and_names():
    when = datetime(2024, 1, 15, 12, 0, tzinfo=TZ)
    uc = _make_use_case(
        [
            _txn("t1", "staff-1", 140.0, when, product_id="pack-10", product_name="10-Class Pack"),
            _txn("t2", "staff-1", 199.0, when, product_id="legacy-1", product_name="Unlimited Membership"),
            _txn("t3", "staff-1", 20.0, when, product_id="legacy-2", product_name="Drop-In Class"),
            _txn("t4", "staff-1", 12.0, when, product_id="legacy-3", product_name="Gift card"),
            _txn("t5", "staff-1", 30.0, when, product_id="x", product_name="Shaker", category=ProductCategory.retail),
        ]
    )

    breakdown = uc.get_revenue_by_category("all", START, END)

    assert breakdown.class_packs == pytest.approx(140.0)
    assert breakdown.memberships == pytest.approx(199.0)
    assert breakdown.drop_in == pytest.approx(20.0)
    assert breakdown.other == pytest.approx(12.0)
    assert breakdown.retail == pytest.approx(30.0)


def test_category_inference_order():
    catalog = {"pack-5": Product("pack-5", "5-Class Pack", ProductCategory.class_pack, 75.0, "athletic-club")}

    explicit = LineItem("pack-5", "5-Class Pack", 1, 75.0, ProductCategory.other)
    assert infer_category(explicit, catalog) == ProductCategory.other
    assert infer_category(LineItem("pack-5", "anything", 1, 75.0), catalog) == ProductCategory.class_pack
    assert infer_category(LineItem("membership-2x", "2x Week", 1, 149.0)) == ProductCategory.membership
    assert infer_category(LineItem("misc", "Towel rental", 1, 2.0)) == ProductCategory.other


def test_parse_category_aliases():
    assert parse_category("Apparel") == ProductCategory.retail
    assert parse_category("drop in") == ProductCategory.drop_in
    assert parse_category("unheard-of") is None
    assert parse_category(None) is None
