"""Domain models for the checkout terminal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    """A catalog category used to narrow the product grid."""

    id: str
    name: str
    sort_order: int = 0


@dataclass(frozen=True)
class ProductSnapshot:
    """Read-only view of a catalog product at selection time.

    Prices are integers in the smallest currency unit.
    """

    id: str
    name: str
    price: int
    enable_stock: bool = False
    stock_qty: int | None = None
    unit: str | None = None
    image: str | None = None
    category_id: str | None = None

    @property
    def stock_limit(self) -> int | None:
        """Upper bound for quantities, or None when stock is not tracked."""
        if not self.enable_stock or self.stock_qty is None:
            return None
        return max(0, self.stock_qty)


@dataclass
class OrderItem:
    """One cart line: a product and how many of it."""

    product: ProductSnapshot
    quantity: int

    @property
    def subtotal(self) -> int:
        return self.quantity * self.product.price
