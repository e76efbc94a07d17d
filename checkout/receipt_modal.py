"""Transaction success modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from checkout.flow import CheckoutFlow
from checkout.rendering import format_receipt


class ReceiptModal(ModalScreen[None]):
    """Show the server-confirmed transaction until the next sale starts."""

    BINDINGS = [
        ("escape", "new_transaction", "New transaction"),
        ("enter", "new_transaction", "New transaction"),
        ("n", "new_transaction", "New transaction"),
    ]

    CSS = """
    ReceiptModal {
        align: center middle;
        background: $background 60%;
    }

    #receipt-dialog {
        width: 44;
        height: auto;
        border: round $success;
        background: $panel;
        padding: 1 2;
    }

    #receipt-title {
        text-style: bold;
        margin-bottom: 1;
        color: $success;
    }

    #receipt-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, flow: CheckoutFlow) -> None:
        super().__init__()
        self.flow = flow

    def compose(self) -> ComposeResult:
        with Container(id="receipt-dialog"):
            yield Static("Transaction Succeed", id="receipt-title")
            yield Static(id="receipt-body")
            yield Static("Enter / n new transaction", id="receipt-help")

    def on_mount(self) -> None:
        transaction = self.flow.last_transaction
        if transaction is not None:
            self.query_one("#receipt-body", Static).update(format_receipt(transaction))

    def action_new_transaction(self) -> None:
        self.flow.start_new_transaction()
        self.dismiss(None)
