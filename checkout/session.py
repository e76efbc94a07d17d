"""In-memory order session (the cart) for one checkout terminal."""

from __future__ import annotations

import logging

from checkout.models import OrderItem, ProductSnapshot

log = logging.getLogger(__name__)


class OrderSession:
    """Ordered cart lines plus the terminal's browsing selections.

    Every mutation keeps two invariants: at most one line per product id,
    and every line has ``quantity >= 1``.
    """

    def __init__(self) -> None:
        self._items: list[OrderItem] = []
        self.selected_category_id: str | None = None
        self.selected_item: OrderItem | None = None

    @property
    def items(self) -> list[OrderItem]:
        return list(self._items)

    @property
    def total(self) -> int:
        return sum(item.subtotal for item in self._items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def product_count(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, product_id: str) -> OrderItem | None:
        for item in self._items:
            if item.product.id == product_id:
                return item
        return None

    def quantity_of(self, product_id: str) -> int:
        item = self.get_item(product_id)
        return item.quantity if item is not None else 0

    def add_item(self, product: ProductSnapshot, quantity: int = 1) -> OrderItem:
        """Increment an existing line by ``quantity`` or append a new one."""
        if quantity < 1:
            raise ValueError("quantity to add must be at least 1")

        item = self.get_item(product.id)
        if item is None:
            item = OrderItem(product=product, quantity=quantity)
            self._items.append(item)
        else:
            item.quantity += quantity
        log.debug("add_item product=%s qty=%d line_qty=%d", product.id, quantity, item.quantity)
        return item

    def set_quantity(self, product: ProductSnapshot, quantity: int) -> OrderItem | None:
        """Set an absolute quantity, appending the line if needed."""
        if quantity <= 0:
            self.remove_item(product.id)
            return None

        item = self.get_item(product.id)
        if item is None:
            item = OrderItem(product=product, quantity=quantity)
            self._items.append(item)
        else:
            item.quantity = quantity
        log.debug("set_quantity product=%s qty=%d", product.id, quantity)
        return item

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id)
            return

        item = self.get_item(product_id)
        if item is None:
            return
        item.quantity = quantity

    def remove_item(self, product_id: str) -> None:
        self._items = [item for item in self._items if item.product.id != product_id]
        if self.selected_item is not None and self.selected_item.product.id == product_id:
            self.selected_item = None

    def clear_items(self) -> None:
        self._items.clear()
        self.selected_item = None
        log.info("order session cleared")

    def set_selected_category(self, category_id: str | None) -> None:
        self.selected_category_id = category_id

    def set_selected_item(self, item: OrderItem | None) -> None:
        self.selected_item = item
