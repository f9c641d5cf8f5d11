from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProductCategory(str, Enum):
    membership = "membership"
    class_pack = "class-pack"
    drop_in = "drop-in"
    retail = "retail"
    other = "other"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: ProductCategory
    price: float
    location: str
    stock: int = 0
