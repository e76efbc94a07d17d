"""Collaborator interfaces for the catalog and transaction backends."""

from __future__ import annotations

import os
from typing import Protocol

from checkout import config
from checkout.models import Category, ProductSnapshot
from checkout.schemas import CreateTransactionRequest, TransactionOut


class CatalogService(Protocol):
    def list_products(
        self,
        category_id: str | None = None,
        search: str | None = None,
        page: int = 1,
        page_size: int = config.CATALOG_PAGE_SIZE,
    ) -> list[ProductSnapshot]: ...

    def list_categories(self, page: int = 1, page_size: int = config.CATALOG_PAGE_SIZE) -> list[Category]: ...


class TransactionService(Protocol):
    def create_transaction(
        self,
        request: CreateTransactionRequest,
        idempotency_key: str | None = None,
    ) -> TransactionOut: ...


class CheckoutBackend(CatalogService, TransactionService, Protocol):
    def close(self) -> None: ...


def get_backend() -> CheckoutBackend:
    """Select a backend based on env vars.

    Defaults to the local SQLite backend so the terminal runs without a server
    unless explicitly configured otherwise.
    """

    mode = os.getenv("CHECKOUT_BACKEND", config.BACKEND).strip().lower()

    if mode == "local":
        from checkout.persistence import LocalBackend

        return LocalBackend(os.getenv("CHECKOUT_DB_PATH", config.DB_PATH))

    if mode == "http":
        from checkout.api_client import ApiClient

        return ApiClient.from_env()

    raise ValueError(f"Unknown CHECKOUT_BACKEND={mode!r}. Expected local or http.")
