from __future__ import annotations

from dataclasses import dataclass, field

from studiodesk.domain.entities.product import ProductCategory


@dataclass
class CategoryBreakdown:
    memberships: float = 0.0
    class_packs: float = 0.0
    drop_in: float = 0.0
    retail: float = 0.0
    other: float = 0.0

    def add(self, category: ProductCategory, amount: float) -> None:
        attr = _CATEGORY_FIELDS[category]
        setattr(self, attr, getattr(self, attr) + amount)

    def as_dict(self) -> dict[str, float]:
        return {
            "memberships": self.memberships,
            "class_packs": self.class_packs,
            "drop_in": self.drop_in,
            "retail": self.retail,
            "other": self.other,
        }


_CATEGORY_FIELDS = {
    ProductCategory.membership: "memberships",
    ProductCategory.class_pack: "class_packs",
    ProductCategory.drop_in: "drop_in",
    ProductCategory.retail: "retail",
    ProductCategory.other: "other",
}


@dataclass
class CommissionReport:
    seller_id: str
    seller_name: str
    seller_role: str
    commission_rate: float
    total_sales: float = 0.0
    transaction_count: int = 0
    category_breakdown: CategoryBreakdown = field(default_factory=CategoryBreakdown)

    @property
    def commission_amount(self) -> float:
        # Unrounded; presentation layers round to cents.
        return self.total_sales * self.commission_rate
