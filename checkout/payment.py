"""Cash payment entry, validation and the one-shot transaction commit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import uuid4

from checkout.errors import (
    CheckoutError,
    InsufficientAmountError,
    PaymentInProgressError,
    ServiceError,
    TransactionCommitError,
)
from checkout.money import compute_change, effective_received, suggest_cash_amounts
from checkout.schemas import CreateTransactionRequest, TransactionItemRequest, TransactionOut
from checkout.services import TransactionService
from checkout.session import OrderSession

log = logging.getLogger(__name__)


@dataclass
class PaymentAttempt:
    """Ephemeral cash entry for one payment dialog; never persisted."""

    total: int
    received_amount: int | None = None
    # Reused when the cashier retries the same attempt after a failed commit.
    idempotency_key: str = field(default_factory=lambda: uuid4().hex)

    @property
    def is_input_empty(self) -> bool:
        return not self.received_amount

    @property
    def effective_received(self) -> int:
        return effective_received(self.total, self.received_amount)

    @property
    def change(self) -> int:
        return compute_change(self.total, self.received_amount)

    @property
    def is_insufficient(self) -> bool:
        return self.effective_received < self.total


class PaymentFlow:
    def __init__(self, session: OrderSession, transactions: TransactionService) -> None:
        self.session = session
        self.transactions = transactions
        self.attempt: PaymentAttempt | None = None
        self.pending = False

    @property
    def is_open(self) -> bool:
        return self.attempt is not None

    def open(self) -> PaymentAttempt:
        if self.session.is_empty():
            raise CheckoutError("Nothing to charge: the order is empty.")
        self.attempt = PaymentAttempt(total=self.session.total)
        log.info("payment opened total=%d", self.attempt.total)
        return self.attempt

    def set_received(self, amount: int | None) -> None:
        attempt = self._require_attempt()
        attempt.received_amount = None if amount is None else max(0, amount)

    def suggestions(self) -> list[int]:
        return suggest_cash_amounts(self._require_attempt().total)

    def submit(self) -> TransactionOut:
        """Validate the cash amount and commit the order.

        Raises:
            InsufficientAmountError: the effective amount is below the total.
            PaymentInProgressError: a commit for this flow is still running.
            TransactionCommitError: the transaction service failed; the cart
                and entered amount are left untouched.
        """
        attempt = self._require_attempt()
        if self.pending:
            raise PaymentInProgressError()
        if attempt.is_insufficient:
            raise InsufficientAmountError(attempt.total, attempt.effective_received)

        request = CreateTransactionRequest(
            items=[
                TransactionItemRequest(product_id=item.product.id, quantity=item.quantity)
                for item in self.session.items
            ],
            received_amount=attempt.effective_received,
            is_cash_paid=True,
        )

        self.pending = True
        try:
            transaction = self.transactions.create_transaction(
                request, idempotency_key=attempt.idempotency_key
            )
        except TransactionCommitError as exc:
            log.warning("payment commit failed: %s", exc)
            raise
        except ServiceError as exc:
            log.warning("payment commit failed: %s", exc)
            raise TransactionCommitError(exc.message, exc.status_code) from exc
        finally:
            self.pending = False

        log.info(
            "payment committed invoice=%s total=%d change=%d",
            transaction.invoice_number,
            transaction.total_amount,
            transaction.change_amount,
        )
        self.session.clear_items()
        self.attempt = None
        return transaction

    def cancel(self) -> None:
        self.attempt = None

    def _require_attempt(self) -> PaymentAttempt:
        if self.attempt is None:
            raise CheckoutError("Payment is not open.")
        return self.attempt
