"""REST client for the catalog and transaction endpoints of the POS backend."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from pydantic import ValidationError

from checkout import config
from checkout.errors import CatalogUnavailableError, ServiceError, TransactionCommitError
from checkout.models import Category, ProductSnapshot
from checkout.schemas import (
    CategoryOut,
    CreateTransactionRequest,
    Envelope,
    ProductOut,
    TransactionOut,
)

log = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class ApiClient:
    """Client for the backend's ``/products``, ``/categories`` and ``/transactions``.

    Every request carries a connect/read timeout so a hung server surfaces as
    an error instead of blocking the terminal.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout or httpx.Timeout(config.HTTP_CONNECT_TIMEOUT_S, read=config.HTTP_READ_TIMEOUT_S),
            transport=transport,
        )

    @classmethod
    def from_env(cls) -> ApiClient:
        read_timeout = float(os.getenv("CHECKOUT_HTTP_TIMEOUT", str(config.HTTP_READ_TIMEOUT_S)))
        return cls(
            base_url=os.getenv("CHECKOUT_API_BASE_URL", config.API_BASE_URL),
            token=os.getenv("CHECKOUT_API_TOKEN", config.API_TOKEN),
            timeout=httpx.Timeout(config.HTTP_CONNECT_TIMEOUT_S, read=read_timeout),
        )

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Envelope:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            log.error("%s %s failed: %s - %s", method, path, e.response.status_code, message)
            raise ServiceError(message, e.response.status_code) from e
        except httpx.TimeoutException as e:
            log.error("%s %s timed out: %s", method, path, e)
            raise ServiceError("Request timed out") from e
        except httpx.HTTPError as e:
            log.error("%s %s failed: %s", method, path, e)
            raise ServiceError(f"Connection failed: {e}") from e

        try:
            envelope = Envelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ServiceError(f"Unexpected response from {path}") from e
        if not envelope.success:
            raise ServiceError(envelope.message or "Request failed", envelope.status)
        return envelope

    def list_products(
        self,
        category_id: str | None = None,
        search: str | None = None,
        page: int = 1,
        page_size: int = config.CATALOG_PAGE_SIZE,
    ) -> list[ProductSnapshot]:
        params: dict[str, Any] = {"page": page, "pageSize": page_size}
        if category_id:
            params["categoryId"] = category_id
        if search:
            params["search"] = search
        try:
            envelope = self._request("GET", "/products", params=params)
            products = [ProductOut.model_validate(raw) for raw in envelope.data or []]
        except ServiceError as e:
            raise CatalogUnavailableError(e.message, e.status_code) from e
        except ValidationError as e:
            raise CatalogUnavailableError("Malformed product data") from e
        return [product.to_snapshot() for product in products if product.is_active]

    def list_categories(self, page: int = 1, page_size: int = config.CATALOG_PAGE_SIZE) -> list[Category]:
        try:
            envelope = self._request("GET", "/categories", params={"page": page, "pageSize": page_size})
            categories = [CategoryOut.model_validate(raw) for raw in envelope.data or []]
        except ServiceError as e:
            raise CatalogUnavailableError(e.message, e.status_code) from e
        except ValidationError as e:
            raise CatalogUnavailableError("Malformed category data") from e
        return [category.to_category() for category in categories]

    def create_transaction(
        self,
        request: CreateTransactionRequest,
        idempotency_key: str | None = None,
    ) -> TransactionOut:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else {}
        try:
            envelope = self._request(
                "POST",
                "/transactions",
                json=request.model_dump(by_alias=True, exclude_none=True),
                headers=headers,
            )
            if envelope.data is None:
                raise TransactionCommitError("Empty transaction response")
            return TransactionOut.model_validate(envelope.data)
        except TransactionCommitError:
            raise
        except ServiceError as e:
            raise TransactionCommitError(e.message, e.status_code) from e
        except ValidationError as e:
            raise TransactionCommitError("Malformed transaction response") from e
