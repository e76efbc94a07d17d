"""Editable static money, status and demo catalog configuration."""

from __future__ import annotations

# Physical cash denominations in the smallest currency unit, ascending.
MONEY_UNITS: tuple[int, ...] = (1000, 2000, 5000, 10000, 20000, 50000, 100000)

CURRENCY_PREFIX = "Rp"
THOUSANDS_DELIMITER = "."
DEFAULT_UNIT_LABEL = "Pcs"

TRANSACTION_STATUS_PENDING = "pending"
TRANSACTION_STATUS_PAID = "paid"

INVOICE_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Seed rows for the local SQLite backend (consumed by checkout.data).
DEMO_CATEGORIES: list[dict[str, str | int]] = [
    {"id": "cat-coffee", "name": "Coffee", "sort_order": 1},
    {"id": "cat-tea", "name": "Tea", "sort_order": 2},
    {"id": "cat-bakery", "name": "Bakery", "sort_order": 3},
    {"id": "cat-snack", "name": "Snacks", "sort_order": 4},
]

DEMO_PRODUCTS: list[dict[str, str | int | bool | None]] = [
    {"id": "prd-americano", "name": "Americano", "price": 18000, "category_id": "cat-coffee",
     "enable_stock": False, "stock_qty": None, "unit": "Cup"},
    {"id": "prd-latte", "name": "Caffe Latte", "price": 25000, "category_id": "cat-coffee",
     "enable_stock": False, "stock_qty": None, "unit": "Cup"},
    {"id": "prd-palm-latte", "name": "Palm Sugar Latte", "price": 27000, "category_id": "cat-coffee",
     "enable_stock": False, "stock_qty": None, "unit": "Cup"},
    {"id": "prd-jasmine", "name": "Jasmine Tea", "price": 12000, "category_id": "cat-tea",
     "enable_stock": False, "stock_qty": None, "unit": "Cup"},
    {"id": "prd-lychee", "name": "Lychee Tea", "price": 22000, "category_id": "cat-tea",
     "enable_stock": False, "stock_qty": None, "unit": "Cup"},
    {"id": "prd-croissant", "name": "Butter Croissant", "price": 21000, "category_id": "cat-bakery",
     "enable_stock": True, "stock_qty": 12, "unit": None},
    {"id": "prd-banana-bread", "name": "Banana Bread", "price": 19500, "category_id": "cat-bakery",
     "enable_stock": True, "stock_qty": 4, "unit": "Slice"},
    {"id": "prd-cheesecake", "name": "Basque Cheesecake", "price": 38000, "category_id": "cat-bakery",
     "enable_stock": True, "stock_qty": 0, "unit": "Slice"},
    {"id": "prd-chips", "name": "Cassava Chips", "price": 9000, "category_id": "cat-snack",
     "enable_stock": True, "stock_qty": 30, "unit": "Pack"},
    {"id": "prd-water", "name": "Mineral Water", "price": 6000, "category_id": None,
     "enable_stock": True, "stock_qty": 48, "unit": "Bottle"},
]
