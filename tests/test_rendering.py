from __future__ import annotations

from checkout.models import Category, OrderItem
from checkout.rendering import (
    format_category_bar,
    format_order_line,
    format_product_row,
    format_receipt,
    format_timestamp,
    stock_label,
)
from checkout.schemas import TransactionOut
from tests.fakes import CROISSANT, LATTE, SOLD_OUT


def test_order_line_shows_quantity_and_subtotal() -> None:
    text = format_order_line(OrderItem(product=LATTE, quantity=2)).plain
    assert "Palm Sugar Latte  2 Cup" in text
    assert "@Rp27.000  Rp54.000" in text


def test_stock_label_uses_default_unit() -> None:
    assert stock_label(LATTE) is None
    assert stock_label(CROISSANT) == "3 Pcs"


def test_product_row_marks_cart_quantity() -> None:
    assert "in order: 2" in format_product_row(CROISSANT, in_cart=2).plain
    assert "[0 Pcs]" in format_product_row(SOLD_OUT).plain


def test_category_bar_lists_all_first() -> None:
    bar = format_category_bar([Category(id="c", name="Coffee")], "c").plain
    assert bar.index("All") < bar.index("Coffee")


def test_timestamp_formatting() -> None:
    assert format_timestamp(None) == "-"
    assert format_timestamp("2026-01-13T10:05:00Z") == "13 Jan 2026, 10:05"
    assert format_timestamp("yesterday") == "yesterday"


def test_receipt_uses_server_amounts() -> None:
    transaction = TransactionOut(
        id="trx-1",
        invoice_number="130126JTY",
        total_amount=27000,
        received_amount=50000,
        change_amount=23000,
        status="paid",
        created_at="2026-01-13T10:00:00Z",
    )
    receipt = format_receipt(transaction).plain

    assert "#130126JTY" in receipt
    assert "Cash" in receipt
    assert "Rp27.000" in receipt
    assert "Rp50.000" in receipt
    assert "Rp23.000" in receipt
