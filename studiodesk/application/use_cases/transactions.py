from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Sequence

from studiodesk.application.entity_store import EntityStore
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.application.utils.ids import new_id
from studiodesk.domain.entities.transaction import LineItem, Transaction


class TransactionUseCase:
    """Point-of-sale recording. Transactions are immutable once stored."""

    def __init__(
        self,
        store: EntityStore,
        audit_log: AuditLog,
        clock: Callable[[], datetime],
    ) -> None:
        self._store = store
        self._audit = audit_log
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def record_transaction(
        self,
        items: Sequence[LineItem],
        seller_id: str,
        location: str,
        discount: float = 0.0,
        tax: float = 0.0,
        person_id: str | None = None,
        person_name: str | None = None,
        promo_code: str | None = None,
        seller_name: str | None = None,
    ) -> Transaction:
        if not items:
            raise ValueError("A transaction needs at least one line item")
        for item in items:
            if item.quantity <= 0:
                raise ValueError(f"Quantity for {item.product_id} must be positive")
            if item.unit_price < 0:
                raise ValueError(f"Price for {item.product_id} cannot be negative")
        if discount < 0 or tax < 0:
            raise ValueError("Discount and tax cannot be negative")

        subtotal = sum(item.amount for item in items)
        if discount > subtotal:
            raise ValueError("Discount cannot exceed the subtotal")

        if seller_name is None:
            seller = self._store.get_staff(seller_id)
            seller_name = seller.name if seller else None

        with self._store.transaction():
            transaction = self._store.append_transaction(
                Transaction(
                    id=new_id("txn"),
                    items=tuple(items),
                    subtotal=subtotal,
                    discount=discount,
                    tax=tax,
                    total=subtotal - discount + tax,
                    seller_id=seller_id,
                    seller_name=seller_name,
                    timestamp=self._clock(),
                    location=location,
                    person_id=person_id,
                    person_name=person_name,
                    promo_code=promo_code,
                )
            )

            for item in items:
                product = self._store.get_product(item.product_id)
                if product is not None:
                    self._store.put_product(replace(product, stock=max(0, product.stock - item.quantity)))

            self._audit.append(
                "create_transaction",
                "transaction",
                transaction.id,
                f"Transaction for {person_name or 'Guest'}: ${transaction.total:.2f}",
                location,
            )

        self._logger.info(
            "Transaction recorded",
            extra={"seller_id": seller_id, "person_id": person_id, "reason": f"total={transaction.total:.2f}"},
        )
        return transaction

    def list_transactions(self, person_id: str | None = None) -> list[Transaction]:
        transactions = self._store.list_transactions()
        if person_id is not None:
            transactions = [t for t in transactions if t.person_id == person_id]
        return sorted(transactions, key=lambda t: t.timestamp, reverse=True)
