from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from checkout.api_client import ApiClient
from checkout.errors import CatalogUnavailableError, ServiceError, TransactionCommitError
from checkout.schemas import CreateTransactionRequest, TransactionItemRequest

BASE_URL = "http://pos.test/api/v1"


def _envelope(data: Any, status: int = 200, success: bool = True, message: str = "OK") -> dict[str, Any]:
    return {"success": success, "status": status, "message": message, "code": "", "data": data}


def _client(handler: Callable[[httpx.Request], httpx.Response], token: str = "secret") -> ApiClient:
    return ApiClient(BASE_URL, token=token, transport=httpx.MockTransport(handler))


TRANSACTION = {
    "id": "trx-1",
    "invoiceNumber": "130126JTY",
    "totalAmount": 27000,
    "receivedAmount": 50000,
    "changeAmount": 23000,
    "status": "paid",
    "createdAt": "2026-01-13T10:00:00Z",
    "paidAt": "2026-01-13T10:00:00Z",
    "expiredAt": "2026-01-13T10:15:00Z",
    "items": [
        {
            "id": "1",
            "productId": "p-latte",
            "productName": "Palm Sugar Latte",
            "price": 27000,
            "quantity": 1,
            "subtotal": 27000,
        }
    ],
}


def test_list_products_maps_wire_fields() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=_envelope(
                [
                    {
                        "id": "p-latte",
                        "name": "Palm Sugar Latte",
                        "price": 27000,
                        "isActive": True,
                        "image": {"url": "https://cdn.test/latte.png"},
                        "categoryId": "cat-coffee",
                        "enableStock": False,
                        "unit": "Cup",
                    },
                    {"id": "p-old", "name": "Old Brew", "price": 1000, "isActive": False},
                    {"id": "p-bread", "name": "Banana Bread", "price": 19500, "enableStock": True, "stockQty": 4},
                ]
            ),
        )

    products = _client(handler).list_products(category_id="cat-coffee", search="lat")

    request = seen[0]
    assert request.url.path == "/api/v1/products"
    assert request.url.params["categoryId"] == "cat-coffee"
    assert request.url.params["search"] == "lat"
    assert request.url.params["pageSize"] == "100"
    assert request.headers["Authorization"] == "Bearer secret"

    assert [p.id for p in products] == ["p-latte", "p-bread"]
    assert products[0].image == "https://cdn.test/latte.png"
    assert products[0].stock_limit is None
    assert products[1].stock_limit == 4


def test_list_categories() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/categories"
        return httpx.Response(200, json=_envelope([{"id": "cat-tea", "name": "Tea", "sortOrder": 2}]))

    categories = _client(handler).list_categories()
    assert [(c.id, c.name, c.sort_order) for c in categories] == [("cat-tea", "Tea", 2)]


def test_no_token_means_no_authorization_header() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json=_envelope([]))

    assert _client(handler, token="").list_categories() == []


def test_catalog_http_error_uses_server_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json=_envelope(None, status=401, success=False, message="Unauthorized"))

    with pytest.raises(CatalogUnavailableError, match="Unauthorized") as excinfo:
        _client(handler).list_products()
    assert excinfo.value.status_code == 401


def test_catalog_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(CatalogUnavailableError, match="Request timed out"):
        _client(handler).list_products()


def test_connection_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(CatalogUnavailableError, match="Connection failed"):
        _client(handler).list_categories()


def test_unsuccessful_envelope_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope(None, success=False, status=500, message="Database down"))

    with pytest.raises(ServiceError, match="Database down"):
        _client(handler).list_categories()


def test_create_transaction_posts_camel_case_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=_envelope(TRANSACTION, status=201))

    request = CreateTransactionRequest(
        items=[TransactionItemRequest(product_id="p-latte", quantity=1)],
        received_amount=50000,
    )
    transaction = _client(handler).create_transaction(request, idempotency_key="key-1")

    sent = seen[0]
    assert sent.method == "POST"
    assert sent.url.path == "/api/v1/transactions"
    assert sent.headers["Idempotency-Key"] == "key-1"
    assert json.loads(sent.content) == {
        "items": [{"productId": "p-latte", "quantity": 1}],
        "receivedAmount": 50000,
        "isCashPaid": True,
    }
    assert transaction.invoice_number == "130126JTY"
    assert transaction.change_amount == 23000
    assert transaction.items[0].product_name == "Palm Sugar Latte"


def test_create_transaction_rejection() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json=_envelope(
                None,
                status=400,
                success=False,
                message="Insufficient stock for product Banana Bread. Available: 4, Requested: 5",
            ),
        )

    request = CreateTransactionRequest(
        items=[TransactionItemRequest(product_id="p-bread", quantity=5)],
        received_amount=100000,
    )
    with pytest.raises(TransactionCommitError, match="Insufficient stock") as excinfo:
        _client(handler).create_transaction(request)
    assert excinfo.value.status_code == 400


def test_create_transaction_malformed_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json=_envelope({"id": "trx-1"}, status=201))

    request = CreateTransactionRequest(items=[TransactionItemRequest(product_id="p", quantity=1)])
    with pytest.raises(TransactionCommitError, match="Malformed transaction response"):
        _client(handler).create_transaction(request)
