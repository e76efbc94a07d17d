"""Item adjustment modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from checkout.flow import CheckoutFlow
from checkout.money import format_currency
from checkout.rendering import stock_label


class ItemAdjustModal(ModalScreen[None]):
    """Stage a quantity for one product, then commit, remove or cancel."""

    CSS = """
    ItemAdjustModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #item-body {
        color: white;
        margin-bottom: 1;
    }

    #item-help {
        color: #dddddd;
    }
    """

    def __init__(self, flow: CheckoutFlow) -> None:
        super().__init__()
        if flow.adjustment is None:
            raise ValueError("ItemAdjustModal needs an open adjustment")
        self.flow = flow
        self.adjustment = flow.adjustment
        self.typed = ""

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static(self.adjustment.product.name, id="item-title")
            yield Static(id="item-body")
            yield Static(
                "+/- or ←/→ adjust. Digits type. Enter save. Del remove. Esc cancel.",
                id="item-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.flow.cancel_adjustment()
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.flow.commit_adjustment()
            self.dismiss(None)
            event.stop()
            return

        if event.key == "delete":
            self.flow.remove_adjusted_item()
            self.dismiss(None)
            event.stop()
            return

        if event.key in {"right", "up"} or event.character in {"+", "="}:
            self.adjustment.increment()
            self.typed = ""
            self._refresh_content()
            event.stop()
            return

        if event.key in {"left", "down"} or event.character == "-":
            self.adjustment.decrement()
            self.typed = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            if self.typed:
                self.typed = self.typed[:-1]
                self.adjustment.set_manual(int(self.typed or "0"))
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character and event.character.isdigit():
            if len(self.typed) < 6:
                self.typed += event.character
            applied = self.adjustment.set_manual(int(self.typed))
            # Show the clamped value when the typed one was out of range.
            self.typed = str(applied) if applied else ""
            self._refresh_content()
            event.stop()

    def _refresh_content(self) -> None:
        body = self.query_one("#item-body", Static)
        adjustment = self.adjustment
        product = adjustment.product

        content = Text(style="white")
        content.append(format_currency(product.price), style="bold")
        stock = stock_label(product)
        if stock is not None:
            content.append(f"   stock {stock}", style="dim")

        content.append("\n\n")
        content.append(" - ", style="bold" if adjustment.can_decrement() else "dim")
        content.append(f"  {adjustment.staged_quantity}  ", style="bold reverse")
        content.append(" + ", style="bold" if adjustment.can_increment() else "dim")
        content.append(f"   {format_currency(adjustment.staged_subtotal)}")

        content.append("\n\n")
        if adjustment.staged_quantity == 0:
            content.append("Enter removes this item from the order.", style="#ffb3b3")
        elif adjustment.in_cart:
            content.append("Enter updates the order.")
        else:
            content.append("Enter adds to the order.")
        if not adjustment.can_increment():
            content.append("\nStock limit reached.", style="#ffb3b3")
        body.update(content)
