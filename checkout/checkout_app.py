"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from checkout.catalog import CatalogFilter
from checkout.flow import CheckoutFlow
from checkout.item_modal import ItemAdjustModal
from checkout.models import OrderItem, ProductSnapshot
from checkout.money import format_currency
from checkout.payment_modal import PaymentModal
from checkout.receipt_modal import ReceiptModal
from checkout.rendering import (
    NO_POINTER,
    POINTER,
    format_category_bar,
    format_order_line,
    format_product_row,
)
from checkout.schemas import TransactionOut
from checkout.services import CheckoutBackend
from checkout.session import OrderSession

log = logging.getLogger(__name__)


class CheckoutApp(App):
    """A Textual cashier terminal: browse the catalog, build an order, take cash."""

    TITLE = "Checkout"
    SUB_TITLE = "Cash register"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #orders-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #search-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #category-bar {
        height: 1;
        margin-bottom: 1;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #orders-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #order-summary {
        height: 2;
        margin-top: 1;
    }

    #status-line {
        height: 1;
        padding: 0 1;
        color: #dddddd;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_text = reactive("")
    selected_index = reactive(0)
    order_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next product"),
        ("up", "cycle_results(-1)", "Previous product"),
        ("down", "cycle_results(1)", "Next product"),
        ("enter", "quick_add_selected", "Add product"),
        ("backspace", "backspace_search", "Delete search char"),
        ("ctrl+c", "cancel_search", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, backend: CheckoutBackend) -> None:
        super().__init__()
        self.backend = backend
        self.session = OrderSession()
        self.catalog = CatalogFilter(backend, self.session)
        self.flow = CheckoutFlow(self.session, self.catalog, backend)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="orders-pane"):
                yield Static("Order Details", classes="pane-title")
                yield Static("(no items yet)", id="orders-list")
                yield Static(id="order-summary")
            with Vertical(id="search-pane"):
                yield Static(id="search-bar")
                yield Static(id="category-bar")
                yield Static(id="results")
        yield Static(id="status-line")

    def on_mount(self) -> None:
        self.catalog.refresh()
        self._refresh_all()

    @property
    def system_status(self) -> str:
        if self.catalog.error:
            return f"Catalog unavailable: {self.catalog.error} (r to retry)"
        return self.flow.notice or "Ready"

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        char = event.character
        if self.input_state == "search":
            self.search_text += char
            self._apply_search()
            event.stop()
            return

        key = char.lower()
        handlers = {
            "/": self._enter_search,
            "[": lambda: self._cycle_category(-1),
            "]": lambda: self._cycle_category(1),
            "j": lambda: self._move_order_selection(1),
            "k": lambda: self._move_order_selection(-1),
            "e": self._open_adjustment_for_selected_order,
            "d": self._delete_selected_order,
            "x": self._clear_order,
            "a": self._open_adjustment_for_selected_result,
            "r": self._reload_catalog,
            "p": self._open_payment,
        }
        handler = handlers.get(key)
        if handler is None:
            return
        handler()
        event.stop()

    def action_cancel_search(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_text = ""
        self._apply_search()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        results = self.catalog.filtered()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_quick_add_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        product = self._selected_product()
        if product is None:
            return
        if self.flow.quick_add(product):
            self.order_selected_index = self._order_index_of(product.id)
        self._refresh_all()

    def action_backspace_search(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "search":
            return

        if not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self._apply_search()

    def _enter_search(self) -> None:
        self.input_state = "search"
        self._refresh_search_bar()

    def _apply_search(self) -> None:
        self.catalog.set_search(self.search_text)
        self.selected_index = 0
        self._refresh_search()

    def _cycle_category(self, delta: int) -> None:
        self.catalog.cycle_category(delta)
        self.selected_index = 0
        self._refresh_search()

    def _reload_catalog(self) -> None:
        self.flow.notice = "Catalog refreshed" if self.catalog.refresh() else ""
        self.selected_index = 0
        self._refresh_all()

    def _selected_product(self) -> ProductSnapshot | None:
        results = self.catalog.filtered()
        if not results:
            return None
        if not (0 <= self.selected_index < len(results)):
            self.selected_index = 0
        return results[self.selected_index]

    def _selected_order(self) -> OrderItem | None:
        items = self.session.items
        if self.order_selected_index is None:
            return None
        if not (0 <= self.order_selected_index < len(items)):
            return None
        return items[self.order_selected_index]

    def _order_index_of(self, product_id: str) -> int | None:
        for idx, item in enumerate(self.session.items):
            if item.product.id == product_id:
                return idx
        return None

    def _move_order_selection(self, delta: int) -> None:
        count = self.session.product_count
        if not count:
            return

        if self.order_selected_index is None:
            self.order_selected_index = 0 if delta > 0 else count - 1
        else:
            self.order_selected_index = (self.order_selected_index + delta) % count
        self._refresh_orders()

    def _delete_selected_order(self) -> None:
        item = self._selected_order()
        if item is None:
            return

        idx = self.order_selected_index
        self.flow.remove_line(item.product.id)
        count = self.session.product_count
        self.order_selected_index = None if not count else min(idx, count - 1)
        self._refresh_all()

    def _clear_order(self) -> None:
        self.flow.clear_cart()
        self.order_selected_index = None
        self._refresh_all()

    def _open_adjustment_for_selected_order(self) -> None:
        item = self._selected_order()
        if item is None:
            return
        if self.flow.open_adjustment_for_line(item.product.id) is None:
            return
        self.push_screen(ItemAdjustModal(self.flow), callback=self._on_adjustment_closed)

    def _open_adjustment_for_selected_result(self) -> None:
        product = self._selected_product()
        if product is None:
            return
        if self.flow.open_adjustment(product) is None:
            return
        self.push_screen(ItemAdjustModal(self.flow), callback=self._on_adjustment_closed)

    def _on_adjustment_closed(self, _: None) -> None:
        count = self.session.product_count
        if not count:
            self.order_selected_index = None
        elif self.order_selected_index is not None:
            self.order_selected_index = min(self.order_selected_index, count - 1)
        self._refresh_all()

    def _open_payment(self) -> None:
        if self.input_state != "normal":
            return
        if not self.flow.open_payment():
            self._refresh_status()
            return
        self.push_screen(PaymentModal(self.flow), callback=self._on_payment_closed)

    def _on_payment_closed(self, transaction: TransactionOut | None) -> None:
        if transaction is not None:
            log.info("sale settled invoice=%s", transaction.invoice_number)
            self.order_selected_index = None
            self.push_screen(ReceiptModal(self.flow), callback=self._on_receipt_closed)
        self._refresh_all()

    def _on_receipt_closed(self, _: None) -> None:
        # Stock moved server side; reload so limits stay current.
        self.catalog.refresh()
        self._refresh_all()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        self._refresh_orders()
        self._refresh_search()
        self._refresh_status()

    def _refresh_orders(self) -> None:
        try:
            orders_widget = self.query_one("#orders-list", Static)
        except NoMatches:
            return

        self._refresh_summary()
        items = self.session.items
        if not items:
            self.order_selected_index = None
            orders_widget.update("(no items yet)")
            return

        if self.order_selected_index is not None and self.order_selected_index >= len(items):
            self.order_selected_index = len(items) - 1

        # Every cart line takes two rows.
        visible_rows = max(1, self._visible_rows(orders_widget) // 2)
        start, end = self._window_bounds(len(items), visible_rows, self.order_selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append(POINTER if idx == self.order_selected_index else NO_POINTER)
            lines.append_text(format_order_line(items[idx]))

        if end < len(items):
            lines.append("\n⋮", style="dim")

        orders_widget.update(lines)

    def _refresh_summary(self) -> None:
        summary = Text()
        summary.append(f"{self.session.product_count} products, {self.session.item_count} items", style="dim")
        summary.append("\nTotal  ")
        summary.append(format_currency(self.session.total), style="bold")
        self.query_one("#order-summary", Static).update(summary)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        self._refresh_category_bar()
        self._refresh_results(self.catalog.filtered())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return

        if self.input_state == "normal":
            if self.search_text:
                bar.update(f"Filter: {self.search_text}   (/ to edit)")
            else:
                bar.update("/ search  [ ] category  a adjust  p pay")
            return

        text = Text()
        text.append(" / ", style="bold reverse")
        text.append(f" {self.search_text}")
        text.append("▏", style="blink")
        bar.update(text)

    def _refresh_category_bar(self) -> None:
        self.query_one("#category-bar", Static).update(
            format_category_bar(self.catalog.categories, self.catalog.selected_category_id)
        )

    def _refresh_results(self, results: list[ProductSnapshot]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return

        if not results:
            results_widget.update("No products" if self.catalog.is_filter_active else "Catalog is empty")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        visible_rows = self._visible_rows(results_widget)
        start, end = self._window_bounds(len(results), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            product = results[idx]
            lines.append(POINTER if idx == self.selected_index else NO_POINTER)
            lines.append_text(format_product_row(product, self.session.quantity_of(product.id)))

        if end < len(results):
            lines.append("\n⋮", style="dim")

        results_widget.update(lines)

    def _refresh_status(self) -> None:
        try:
            status = self.query_one("#status-line", Static)
        except NoMatches:
            return
        status.update(self.system_status)
