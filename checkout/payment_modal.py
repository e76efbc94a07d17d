"""Cash payment modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from checkout.flow import CheckoutFlow
from checkout.money import format_currency
from checkout.schemas import TransactionOut

_MAX_DIGITS = 12


class PaymentModal(ModalScreen[TransactionOut | None]):
    """Collect the received cash amount and commit the order."""

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-total {
        color: white;
        margin-bottom: 1;
    }

    #payment-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #payment-suggestions {
        color: white;
        margin-bottom: 1;
    }

    #payment-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #payment-help {
        color: #dddddd;
    }
    """

    def __init__(self, flow: CheckoutFlow) -> None:
        super().__init__()
        self.flow = flow
        self.value = ""
        self.suggestion_index: int | None = None

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static("Payment", id="payment-title")
            yield Static(id="payment-total")
            yield Static(id="payment-value")
            yield Static(id="payment-suggestions")
            yield Static(id="payment-error")
            yield Static(
                "Digits type amount. Tab/S next suggestion. Enter pay. Esc cancel.",
                id="payment-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.flow.cancel_payment()
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            transaction = self.flow.submit_payment()
            if transaction is not None:
                self.dismiss(transaction)
            else:
                self._refresh_content()
            event.stop()
            return

        if event.key == "tab" or event.character in {"s", "S"}:
            self._next_suggestion()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.suggestion_index = None
                self._apply_value()
            event.stop()
            return

        if event.is_printable and event.character and event.character.isdigit():
            if len(self.value) < _MAX_DIGITS:
                self.value = (self.value + event.character).lstrip("0")
            self.suggestion_index = None
            self._apply_value()
            event.stop()

    def _apply_value(self) -> None:
        self.flow.set_received(int(self.value) if self.value else None)
        self._refresh_content()

    def _next_suggestion(self) -> None:
        suggestions = self.flow.payment.suggestions()
        if not suggestions:
            return
        if self.suggestion_index is None:
            self.suggestion_index = 0
        else:
            self.suggestion_index = (self.suggestion_index + 1) % len(suggestions)
        self.value = str(suggestions[self.suggestion_index])
        self._apply_value()

    def _refresh_content(self) -> None:
        attempt = self.flow.payment.attempt
        if attempt is None:
            return

        total_text = Text()
        total_text.append("Total Charge  ", style="dim")
        total_text.append(format_currency(attempt.total), style="bold")
        self.query_one("#payment-total", Static).update(total_text)

        value_text = Text()
        if attempt.is_input_empty:
            value_text.append("Enter amount (empty = exact)", style="dim")
        else:
            value_text.append(format_currency(attempt.effective_received), style="bold")
        value_text.append("\n")
        if attempt.is_insufficient:
            value_text.append("Insufficient amount", style="#ffb3b3")
        else:
            value_text.append(f"Change  {format_currency(attempt.change)}", style="#5fbf72")
            value_text.append("   [Pay Exact]" if attempt.is_input_empty else "   [Process Payment]", style="dim")
        self.query_one("#payment-value", Static).update(value_text)

        suggestions_text = Text()
        suggestions_text.append("Suggestions:", style="bold")
        for idx, amount in enumerate(self.flow.payment.suggestions()):
            style = "bold reverse" if idx == self.suggestion_index else "white"
            suggestions_text.append(" ")
            suggestions_text.append(f" {format_currency(amount)} ", style=style)
        self.query_one("#payment-suggestions", Static).update(suggestions_text)

        self.query_one("#payment-error", Static).update(self.flow.payment_error or "")
