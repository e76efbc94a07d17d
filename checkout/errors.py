from __future__ import annotations


class CheckoutError(Exception):
    """Base class for checkout errors."""


class InsufficientAmountError(CheckoutError):
    def __init__(self, total: int, received: int) -> None:
        super().__init__(f"Insufficient amount. Required: {total}, Received: {received}")
        self.total = total
        self.received = received


class PaymentInProgressError(CheckoutError):
    def __init__(self) -> None:
        super().__init__("A payment for this order is already being submitted.")


class ServiceError(CheckoutError):
    """A remote collaborator failed or rejected the request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CatalogUnavailableError(ServiceError):
    pass


class TransactionCommitError(ServiceError):
    pass
