"""Checkout flow controller: which dialog is open and what it may do."""

from __future__ import annotations

import enum
import logging

from checkout.adjustment import ItemAdjustment
from checkout.catalog import CatalogFilter
from checkout.errors import (
    CheckoutError,
    InsufficientAmountError,
    PaymentInProgressError,
    TransactionCommitError,
)
from checkout.models import ProductSnapshot
from checkout.money import format_currency
from checkout.payment import PaymentFlow
from checkout.schemas import TransactionOut
from checkout.services import TransactionService
from checkout.session import OrderSession

log = logging.getLogger(__name__)


class CheckoutState(enum.Enum):
    BROWSING = "browsing"
    ITEM_ADJUST = "item_adjust"
    PAYMENT = "payment"
    SETTLED = "settled"


class CheckoutFlow:
    """Drive ``BROWSING -> ITEM_ADJUST -> BROWSING`` and
    ``BROWSING -> PAYMENT -> SETTLED -> BROWSING``.

    Calls that do not apply to the current state are ignored. Errors from the
    payment step end up in :attr:`notice` instead of propagating to the UI.
    """

    def __init__(
        self,
        session: OrderSession,
        catalog: CatalogFilter,
        transactions: TransactionService,
    ) -> None:
        self.session = session
        self.catalog = catalog
        self.payment = PaymentFlow(session, transactions)
        self.state = CheckoutState.BROWSING
        self.adjustment: ItemAdjustment | None = None
        self.last_transaction: TransactionOut | None = None
        self.notice = ""
        self.payment_error = ""

    def _transition(self, target: CheckoutState) -> None:
        log.info("checkout state %s -> %s", self.state.value, target.value)
        self.state = target

    def _refuse(self, action: str) -> None:
        log.debug("ignored %s in state=%s", action, self.state.value)

    # Browsing

    def quick_add(self, product: ProductSnapshot) -> bool:
        if self.state is not CheckoutState.BROWSING:
            self._refuse("quick_add")
            return False
        item = self.session.add_item(product)
        self.notice = f"Added {product.name} ({item.quantity})"
        return True

    def remove_line(self, product_id: str) -> None:
        if self.state is not CheckoutState.BROWSING:
            self._refuse("remove_line")
            return
        self.session.remove_item(product_id)

    def clear_cart(self) -> None:
        if self.state is not CheckoutState.BROWSING:
            self._refuse("clear_cart")
            return
        if self.session.is_empty():
            return
        self.session.clear_items()
        self.notice = "Order cleared"

    # Item adjustment

    def open_adjustment(self, product: ProductSnapshot) -> ItemAdjustment | None:
        if self.state is not CheckoutState.BROWSING:
            self._refuse("open_adjustment")
            return None
        self.adjustment = ItemAdjustment(self.session, product)
        self._transition(CheckoutState.ITEM_ADJUST)
        return self.adjustment

    def open_adjustment_for_line(self, product_id: str) -> ItemAdjustment | None:
        item = self.session.get_item(product_id)
        if item is None:
            return None
        return self.open_adjustment(item.product)

    def commit_adjustment(self) -> None:
        adjustment = self._active_adjustment("commit_adjustment")
        if adjustment is None:
            return
        item = adjustment.commit()
        if item is None:
            self.notice = f"Removed {adjustment.product.name}"
        else:
            self.notice = f"{adjustment.product.name} x{item.quantity}"
        self._close_adjustment()

    def remove_adjusted_item(self) -> None:
        adjustment = self._active_adjustment("remove_adjusted_item")
        if adjustment is None:
            return
        adjustment.remove()
        self.notice = f"Removed {adjustment.product.name}"
        self._close_adjustment()

    def cancel_adjustment(self) -> None:
        adjustment = self._active_adjustment("cancel_adjustment")
        if adjustment is None:
            return
        adjustment.cancel()
        self._close_adjustment()

    def _active_adjustment(self, action: str) -> ItemAdjustment | None:
        if self.state is not CheckoutState.ITEM_ADJUST or self.adjustment is None:
            self._refuse(action)
            return None
        return self.adjustment

    def _close_adjustment(self) -> None:
        self.adjustment = None
        self._transition(CheckoutState.BROWSING)

    # Payment

    def open_payment(self) -> bool:
        if self.state is not CheckoutState.BROWSING:
            self._refuse("open_payment")
            return False
        try:
            self.payment.open()
        except CheckoutError as exc:
            self.notice = str(exc)
            return False
        self.payment_error = ""
        self._transition(CheckoutState.PAYMENT)
        return True

    def set_received(self, amount: int | None) -> None:
        if self.state is not CheckoutState.PAYMENT:
            self._refuse("set_received")
            return
        self.payment.set_received(amount)
        self.payment_error = ""

    def submit_payment(self) -> TransactionOut | None:
        if self.state is not CheckoutState.PAYMENT:
            self._refuse("submit_payment")
            return None
        try:
            transaction = self.payment.submit()
        except InsufficientAmountError:
            self.payment_error = "Insufficient amount"
            return None
        except PaymentInProgressError as exc:
            self.payment_error = str(exc)
            return None
        except TransactionCommitError as exc:
            self.payment_error = exc.message or "Failed to create transaction"
            self.notice = f"Payment failed: {self.payment_error}"
            return None

        self.last_transaction = transaction
        self.payment_error = ""
        self.notice = (
            f"Paid #{transaction.invoice_number}, change {format_currency(transaction.change_amount)}"
        )
        self._transition(CheckoutState.SETTLED)
        return transaction

    def cancel_payment(self) -> None:
        if self.state is not CheckoutState.PAYMENT:
            self._refuse("cancel_payment")
            return
        self.payment.cancel()
        self.payment_error = ""
        self._transition(CheckoutState.BROWSING)

    def start_new_transaction(self) -> None:
        if self.state is not CheckoutState.SETTLED:
            self._refuse("start_new_transaction")
            return
        self._transition(CheckoutState.BROWSING)
