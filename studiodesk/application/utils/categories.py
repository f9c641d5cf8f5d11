from __future__ import annotations

from studiodesk.domain.entities.product import Product, ProductCategory
from studiodesk.domain.entities.transaction import LineItem

# Catalog labels seen on legacy product records, mapped to sales categories.
_LABEL_ALIASES: dict[str, ProductCategory] = {
    "membership": ProductCategory.membership,
    "memberships": ProductCategory.membership,
    "class-pack": ProductCategory.class_pack,
    "class pack": ProductCategory.class_pack,
    "pack": ProductCategory.class_pack,
    "drop-in": ProductCategory.drop_in,
    "drop in": ProductCategory.drop_in,
    "dropin": ProductCategory.drop_in,
    "retail": ProductCategory.retail,
    "apparel": ProductCategory.retail,
    "equipment": ProductCategory.retail,
    "nutrition": ProductCategory.retail,
    "other": ProductCategory.other,
}

# Substring fallback for unclassified sales, checked in order.
_SUBSTRING_RULES: tuple[tuple[tuple[str, ...], ProductCategory], ...] = (
    (("membership",), ProductCategory.membership),
    (("drop-in", "drop in", "dropin"), ProductCategory.drop_in),
    (("pack",), ProductCategory.class_pack),
    (("retail",), ProductCategory.retail),
)


def parse_category(label: str | ProductCategory | None) -> ProductCategory | None:
    """Map a stored category label to a ProductCategory, or None if unknown."""
    if label is None:
        return None
    if isinstance(label, ProductCategory):
        return label
    return _LABEL_ALIASES.get(label.lower().strip())


def infer_category(item: LineItem, catalog: dict[str, Product] | None = None) -> ProductCategory:
    """
    Resolve the sales category of a line item.

    Explicit line category wins, then the catalog product's category, then
    substring matching on the product id and name for legacy data.
    """
    if item.category is not None:
        return item.category

    if catalog:
        product = catalog.get(item.product_id)
        if product is not None:
            return product.category

    haystack = f"{item.product_id} {item.product_name}".lower()
    for needles, category in _SUBSTRING_RULES:
        if any(needle in haystack for needle in needles):
            return category
    return ProductCategory.other
