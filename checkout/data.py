"""Typed demo catalog built from the raw seed rows."""

from __future__ import annotations

from checkout.constant import DEMO_CATEGORIES as _DEMO_CATEGORIES_RAW
from checkout.constant import DEMO_PRODUCTS as _DEMO_PRODUCTS_RAW
from checkout.models import Category, ProductSnapshot

DEMO_CATEGORIES: list[Category] = [
    Category(id=str(raw["id"]), name=str(raw["name"]), sort_order=int(raw["sort_order"]))
    for raw in _DEMO_CATEGORIES_RAW
]

DEMO_PRODUCTS: list[ProductSnapshot] = [
    ProductSnapshot(
        id=str(raw["id"]),
        name=str(raw["name"]),
        price=int(raw["price"]),  # type: ignore[arg-type]
        enable_stock=bool(raw["enable_stock"]),
        stock_qty=int(raw["stock_qty"]) if raw["stock_qty"] is not None else None,  # type: ignore[arg-type]
        unit=str(raw["unit"]) if raw["unit"] is not None else None,
        category_id=str(raw["category_id"]) if raw["category_id"] is not None else None,
    )
    for raw in _DEMO_PRODUCTS_RAW
]
