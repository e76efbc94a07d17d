"""Staged quantity edit for a single product before it reaches the cart."""

from __future__ import annotations

import logging

from checkout.models import OrderItem, ProductSnapshot
from checkout.session import OrderSession

log = logging.getLogger(__name__)


class ItemAdjustment:
    """Hold a staged quantity for one product until commit, remove or cancel.

    Increments are refused past tracked stock; the staged value never goes
    below zero. Nothing touches the session until :meth:`commit` or
    :meth:`remove` is called.
    """

    def __init__(self, session: OrderSession, product: ProductSnapshot) -> None:
        self.session = session
        self.product = product

        existing = session.get_item(product.id)
        self.in_cart = existing is not None
        staged = existing.quantity if existing is not None else 1
        limit = product.stock_limit
        if limit is not None:
            staged = min(staged, limit)
        self.staged_quantity = staged
        self.closed = False

        session.set_selected_item(existing or OrderItem(product=product, quantity=1))

    @property
    def stock_limit(self) -> int | None:
        return self.product.stock_limit

    @property
    def staged_subtotal(self) -> int:
        return self.staged_quantity * self.product.price

    def can_increment(self) -> bool:
        limit = self.stock_limit
        return limit is None or self.staged_quantity + 1 <= limit

    def can_decrement(self) -> bool:
        return self.staged_quantity - 1 >= 0

    def increment(self) -> bool:
        if self.closed or not self.can_increment():
            log.debug("increment refused product=%s staged=%d", self.product.id, self.staged_quantity)
            return False
        self.staged_quantity += 1
        return True

    def decrement(self) -> bool:
        if self.closed or not self.can_decrement():
            return False
        self.staged_quantity -= 1
        return True

    def set_manual(self, value: int) -> int:
        """Apply a typed quantity, clamped to ``[0, stock]`` (or ``[0, inf)``)."""
        if self.closed:
            return self.staged_quantity
        value = max(0, value)
        limit = self.stock_limit
        if limit is not None:
            value = min(value, limit)
        self.staged_quantity = value
        return value

    def commit(self) -> OrderItem | None:
        """Write the staged quantity to the cart as an absolute value."""
        if self.closed:
            return self.session.get_item(self.product.id)
        self._close()
        if self.staged_quantity == 0:
            self.session.remove_item(self.product.id)
            log.info("adjustment removed product=%s", self.product.id)
            return None
        item = self.session.set_quantity(self.product, self.staged_quantity)
        log.info("adjustment committed product=%s qty=%d", self.product.id, self.staged_quantity)
        return item

    def remove(self) -> None:
        if self.closed:
            return
        self._close()
        self.session.remove_item(self.product.id)
        log.info("adjustment removed product=%s", self.product.id)

    def cancel(self) -> None:
        if self.closed:
            return
        self._close()

    def _close(self) -> None:
        self.closed = True
        self.session.set_selected_item(None)
