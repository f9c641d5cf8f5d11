from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.utils.categories import infer_category
from studiodesk.application.utils.dates import ensure_aware
from studiodesk.domain.entities.commission import CategoryBreakdown, CommissionReport
from studiodesk.domain.entities.product import Product
from studiodesk.domain.entities.transaction import Transaction


class CommissionReportUseCase:
    """
    Per-seller sales and commission figures derived from the transaction log.

    Sums are kept unrounded; callers round to cents when presenting.
    """

    def __init__(
        self,
        store: EntityStore,
        timezone: ZoneInfo,
        commission_rates: dict[str, float],
        default_rate: float,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._rates = dict(commission_rates)
        self._default_rate = default_rate
        self._logger = logging.getLogger(__name__)

    def get_commission_report(self, seller_id: str, start: datetime, end: datetime) -> CommissionReport:
        transactions = [t for t in self._in_range(start, end) if t.seller_id == seller_id]
        return self._build_report(seller_id, transactions, self._store.product_catalog())

    def get_all_commission_reports(
        self,
        location: str | None,
        start: datetime,
        end: datetime,
    ) -> list[CommissionReport]:
        grouped: dict[str, list[Transaction]] = {}
        for transaction in self._in_range(start, end, location):
            grouped.setdefault(transaction.seller_id, []).append(transaction)

        catalog = self._store.product_catalog()
        reports = [self._build_report(seller_id, transactions, catalog) for seller_id, transactions in grouped.items()]

        reports.sort(key=lambda r: (-r.total_sales, r.seller_name, r.seller_id))
        self._logger.debug("Built %d commission reports", len(reports), extra={"reason": location or "all"})
        return reports

    def get_revenue_by_category(self, location: str | None, start: datetime, end: datetime) -> CategoryBreakdown:
        breakdown = CategoryBreakdown()
        catalog = self._store.product_catalog()
        for transaction in self._in_range(start, end, location):
            for item in transaction.items:
                breakdown.add(infer_category(item, catalog), item.amount)
        return breakdown

    def rate_for_role(self, role: str) -> float:
        return self._rates.get(role, self._default_rate)

    def _in_range(self, start: datetime, end: datetime, location: str | None = None) -> list[Transaction]:
        start = ensure_aware(start, self._timezone)
        end = ensure_aware(end, self._timezone)
        filter_location = location is not None and location != "all"
        return [
            t
            for t in self._store.list_transactions()
            if start <= ensure_aware(t.timestamp, self._timezone) <= end
            and (not filter_location or t.location == location)
        ]

    def _build_report(
        self,
        seller_id: str,
        transactions: list[Transaction],
        catalog: dict[str, Product],
    ) -> CommissionReport:
        staff = self._store.get_staff(seller_id)
        if staff is not None:
            name, role = staff.name, staff.role
        else:
            # Seller no longer on staff; fall back to the name captured at sale time.
            name = next((t.seller_name for t in transactions if t.seller_name), seller_id)
            role = "unknown"
        report = CommissionReport(
            seller_id=seller_id,
            seller_name=name,
            seller_role=role,
            commission_rate=self.rate_for_role(role),
        )
        for transaction in transactions:
            report.total_sales += transaction.total
            report.transaction_count += 1
            for item in transaction.items:
                report.category_breakdown.add(infer_category(item, catalog), item.amount)
        return report
