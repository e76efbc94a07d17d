"""Wire models for the catalog and transaction REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from checkout.models import Category, ProductSnapshot


class WireModel(BaseModel):
    # The backend speaks camelCase JSON.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(WireModel):
    page: int = 1
    page_size: int = 0
    total: int = 0
    total_pages: int = 0


class Envelope(WireModel):
    """Common response wrapper: ``{success, status, message, code, data}``."""

    success: bool = True
    status: int = 200
    message: str = ""
    code: str = ""
    data: Any = None
    pagination: Pagination | None = None


class CategoryOut(WireModel):
    id: str
    name: str
    sort_order: int = 0

    def to_category(self) -> Category:
        return Category(id=self.id, name=self.name, sort_order=self.sort_order)


class ProductOut(WireModel):
    id: str
    name: str
    price: int = Field(..., ge=0)
    is_active: bool = True
    image: str | None = None
    category_id: str | None = None
    enable_stock: bool = False
    stock_qty: int | None = Field(default=None, ge=0)
    unit: str | None = None

    @field_validator("image", mode="before")
    @classmethod
    def _flatten_image(cls, value: Any) -> Any:
        # Some endpoints return the uploaded file object instead of its URL.
        if isinstance(value, dict):
            return value.get("url")
        return value

    def to_snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            id=self.id,
            name=self.name,
            price=self.price,
            enable_stock=self.enable_stock,
            stock_qty=self.stock_qty,
            unit=self.unit or None,
            image=self.image,
            category_id=self.category_id,
        )


class TransactionItemRequest(WireModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class CreateTransactionRequest(WireModel):
    items: list[TransactionItemRequest] = Field(..., min_length=1)
    received_amount: int | None = Field(default=None, ge=0)
    is_cash_paid: bool = True


class TransactionItemOut(WireModel):
    id: str
    product_id: str | None = None
    product_name: str
    price: int
    quantity: int
    subtotal: int


class TransactionOut(WireModel):
    """Server-authoritative record of a committed sale."""

    id: str
    invoice_number: str
    total_amount: int
    received_amount: int
    change_amount: int
    status: str
    created_at: str
    paid_at: str | None = None
    expired_at: str | None = None
    creator_name: str | None = None
    items: list[TransactionItemOut] = Field(default_factory=list)
