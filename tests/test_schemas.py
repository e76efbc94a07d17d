from __future__ import annotations

import pytest
from pydantic import ValidationError

from checkout.schemas import CreateTransactionRequest, ProductOut, TransactionItemRequest


def test_request_needs_at_least_one_item() -> None:
    with pytest.raises(ValidationError):
        CreateTransactionRequest(items=[])


def test_request_item_quantity_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        TransactionItemRequest(product_id="p", quantity=0)


def test_request_received_amount_cannot_be_negative() -> None:
    with pytest.raises(ValidationError):
        CreateTransactionRequest(items=[TransactionItemRequest(product_id="p", quantity=1)], received_amount=-1)


def test_product_snapshot_from_wire() -> None:
    product = ProductOut.model_validate(
        {"id": "p", "name": "Tea", "price": 12000, "enableStock": True, "stockQty": 3, "unit": ""}
    )
    snapshot = product.to_snapshot()

    assert snapshot.stock_limit == 3
    assert snapshot.unit is None
    assert snapshot.category_id is None
