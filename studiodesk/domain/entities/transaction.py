from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from studiodesk.domain.entities.product import ProductCategory

TOTAL_TOLERANCE = 0.005


@dataclass(frozen=True)
class LineItem:
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    category: ProductCategory | None = None  # None for legacy, unclassified sales

    @property
    def amount(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Transaction:
    id: str
    items: tuple[LineItem, ...]
    subtotal: float
    discount: float
    tax: float
    total: float
    seller_id: str
    timestamp: datetime
    location: str
    person_id: str | None = None
    person_name: str | None = None
    promo_code: str | None = None
    seller_name: str | None = None

    def __post_init__(self) -> None:
        expected = self.subtotal - self.discount + self.tax
        if abs(self.total - expected) > TOTAL_TOLERANCE:
            raise ValueError(
                f"Transaction {self.id} total {self.total:.2f} does not equal "
                f"subtotal - discount + tax ({expected:.2f})"
            )
