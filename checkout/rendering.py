"""Rich text rendering helpers for cart lines, products and receipts."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from checkout.constant import DEFAULT_UNIT_LABEL
from checkout.models import Category, OrderItem, ProductSnapshot
from checkout.money import delimit_number, format_currency
from checkout.schemas import TransactionOut

POINTER = "➤ "
NO_POINTER = "  "


def badge_style(active: bool) -> str:
    """Return a consistent badge style for category chips."""
    if active:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #3a3f4b"


def quantity_label(quantity: int, unit: str | None) -> str:
    return f"{quantity} {unit}" if unit else f"{quantity}x"


def stock_label(product: ProductSnapshot) -> str | None:
    if product.stock_limit is None:
        return None
    return f"{delimit_number(product.stock_limit)} {product.unit or DEFAULT_UNIT_LABEL}"


def format_order_line(item: OrderItem) -> Text:
    """Render ``name  qty`` over ``@price  subtotal`` for one cart line."""
    text = Text()
    text.append(item.product.name, style="bold")
    text.append(f"  {quantity_label(item.quantity, item.product.unit)}", style="dim")
    text.append(f"\n      @{format_currency(item.product.price)}", style="dim")
    text.append(f"  {format_currency(item.subtotal)}", style="bold")
    return text


def format_product_row(product: ProductSnapshot, in_cart: int = 0) -> Text:
    text = Text()
    text.append(product.name)
    text.append(f"  {format_currency(product.price)}", style="bold")
    stock = stock_label(product)
    if stock is not None:
        style = "#ffb3b3" if product.stock_limit == 0 else "dim"
        text.append(f"  [{stock}]", style=style)
    if in_cart:
        text.append(f"  in order: {in_cart}", style="#5fbf72")
    return text


def format_category_bar(categories: list[Category], selected_id: str | None) -> Text:
    """Render ``All`` followed by each category, highlighting the selection."""
    text = Text()
    text.append(" All ", style=badge_style(selected_id is None))
    for category in categories:
        text.append(" ")
        text.append(f" {category.name} ", style=badge_style(category.id == selected_id))
    return text


def format_timestamp(value: str | None) -> str:
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%d %b %Y, %H:%M")
    except ValueError:
        return value


def format_receipt(transaction: TransactionOut) -> Text:
    """Render the server-confirmed sale; every amount comes from the server."""
    rows = [
        ("Invoice Number", f"#{transaction.invoice_number}"),
        ("Payment Method", "Cash"),
        ("Total Charge", format_currency(transaction.total_amount)),
        ("Received Amount", format_currency(transaction.received_amount)),
    ]

    text = Text()
    text.append(format_timestamp(transaction.created_at), style="dim")
    text.append("\n")
    for label, value in rows:
        text.append(f"\n{label:<18}{value:>16}")
    text.append("\n" + "─" * 34)
    text.append(f"\n{'Change':<18}")
    text.append(f"{format_currency(transaction.change_amount):>16}", style="bold #5fbf72")

    if transaction.items:
        text.append("\n")
        for item in transaction.items:
            text.append(f"\n{item.quantity} x {item.product_name}", style="dim")
            text.append(f"  {format_currency(item.subtotal)}", style="dim")
    return text
