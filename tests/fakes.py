"""Shared catalog rows and an in-memory backend for checkout tests."""

from __future__ import annotations

from checkout.errors import TransactionCommitError
from checkout.models import Category, ProductSnapshot
from checkout.schemas import CreateTransactionRequest, TransactionItemOut, TransactionOut

COFFEE = Category(id="cat-coffee", name="Coffee", sort_order=1)
BAKERY = Category(id="cat-bakery", name="Bakery", sort_order=2)

LATTE = ProductSnapshot(id="p-latte", name="Palm Sugar Latte", price=27000, unit="Cup", category_id="cat-coffee")
AMERICANO = ProductSnapshot(id="p-americano", name="Americano", price=18000, category_id="cat-coffee")
CROISSANT = ProductSnapshot(
    id="p-croissant",
    name="Butter Croissant",
    price=21000,
    enable_stock=True,
    stock_qty=3,
    category_id="cat-bakery",
)
SOLD_OUT = ProductSnapshot(
    id="p-cheesecake",
    name="Basque Cheesecake",
    price=38000,
    enable_stock=True,
    stock_qty=0,
    category_id="cat-bakery",
)


class FakeBackend:
    """In-memory catalog plus a recording transaction service."""

    def __init__(
        self,
        products: list[ProductSnapshot] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        self.products = list(products if products is not None else [LATTE, AMERICANO, CROISSANT, SOLD_OUT])
        self.categories = list(categories if categories is not None else [BAKERY, COFFEE])
        self.catalog_error: Exception | None = None
        self.commit_error: Exception | None = None
        self.requests: list[tuple[CreateTransactionRequest, str | None]] = []

    def list_products(self, category_id=None, search=None, page=1, page_size=100) -> list[ProductSnapshot]:
        del category_id, search, page, page_size
        if self.catalog_error is not None:
            raise self.catalog_error
        return list(self.products)

    def list_categories(self, page=1, page_size=100) -> list[Category]:
        del page, page_size
        if self.catalog_error is not None:
            raise self.catalog_error
        return list(self.categories)

    def create_transaction(
        self,
        request: CreateTransactionRequest,
        idempotency_key: str | None = None,
    ) -> TransactionOut:
        self.requests.append((request, idempotency_key))
        if self.commit_error is not None:
            raise self.commit_error

        by_id = {product.id: product for product in self.products}
        items = []
        for idx, item in enumerate(request.items):
            product = by_id.get(item.product_id)
            if product is None:
                raise TransactionCommitError(f"Product {item.product_id} not found", 400)
            items.append(
                TransactionItemOut(
                    id=str(idx),
                    product_id=product.id,
                    product_name=product.name,
                    price=product.price,
                    quantity=item.quantity,
                    subtotal=product.price * item.quantity,
                )
            )
        total = sum(item.subtotal for item in items)
        received = request.received_amount or 0
        return TransactionOut(
            id=f"trx-{len(self.requests)}",
            invoice_number="130126ABC",
            total_amount=total,
            received_amount=received,
            change_amount=received - total,
            status="paid",
            created_at="2026-01-13T10:00:00+00:00",
            items=items,
        )

    def close(self) -> None:
        return


