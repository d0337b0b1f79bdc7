"""Main Textual app class."""

from __future__ import annotations

from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from food_order.cart import CartEngine
from food_order.checkout_modal import CheckoutDetails, CheckoutModal
from food_order.config import DB_PATH, DELIVERY_OPTIONS
from food_order.data import get_categories, search_menu_items
from food_order.debug_log import log_debug
from food_order.instructions_modal import InstructionsModal
from food_order.models import CartLine, CatalogItem, SavedOrder
from food_order.ordering import LocalOrderService, OrderService, OrderSubmissionError, OrderValidationError, submit_order
from food_order.orders_modal import OrdersModal
from food_order.persistence import bootstrap_schema, get_order, list_orders, update_receipt_status
from food_order.printer import check_printer_dependencies, print_order_receipt
from food_order.rendering import (
    badge_style,
    format_cart_line,
    format_local_time,
    format_menu_item,
    format_money,
    format_totals,
)


class FoodOrderApp(App):
    """A Textual app for browsing the menu, building a cart and placing an order."""

    TITLE = "Food Order"
    SUB_TITLE = "Menu / Cart / Checkout"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #cart-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-totals {
        height: auto;
        padding: 0 1;
        margin-top: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    category_index = reactive(0)
    search_query = reactive("")
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "add_selected", "Add to cart"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "checkout", "Checkout", priority=True),
        ("escape", "cancel_active_mode", "Exit search"),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        engine: CartEngine | None = None,
        order_service: OrderService | None = None,
        db_path: str | Path = DB_PATH,
    ) -> None:
        super().__init__()
        self.engine = engine if engine is not None else CartEngine()
        self.db_path = db_path
        self.order_service = order_service if order_service is not None else LocalOrderService(db_path)
        self.categories: list[str | None] = [None] + [category.name for category in get_categories()]
        self.system_status = ""
        self.printer_ready = False
        self._clear_armed = False
        log_debug("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static("Menu", classes="pane-title")
                yield Static(id="search-bar")
                yield Static(id="results")
            with Vertical(id="cart-pane"):
                yield Static("Your Cart", id="cart-title", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="cart-totals")

    def on_mount(self) -> None:
        bootstrap_schema(self.db_path)
        self.printer_ready, msg = check_printer_dependencies()
        self.system_status = msg
        log_debug(f"on_mount printer_status={msg!r} cart_items={self.engine.item_count}")
        self._refresh_all()

    @property
    def current_category(self) -> str | None:
        return self.categories[self.category_index]

    def _modal_active(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def on_key(self, event: Key) -> None:
        if self._modal_active():
            return

        if self.input_state == "normal" and event.character in {"+", "-"}:
            self._change_selected_quantity(1 if event.character == "+" else -1)
            event.stop()
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return
        if not (event.character.isalnum() or event.character == " "):
            return

        if self.input_state == "active":
            self.search_query += event.character
            self.selected_index = 0
            self._refresh_search()
            event.stop()
            return

        key = event.character.lower()
        if key != "x":
            self._clear_armed = False

        handlers = {
            "j": lambda: self._move_cart_selection(1),
            "k": lambda: self._move_cart_selection(-1),
            "d": self._remove_selected_line,
            "n": self._open_instructions_for_selected_line,
            "f": self._cycle_delivery_option,
            "c": self._cycle_category,
            "x": self._clear_cart,
            "o": self._open_order_history,
        }
        handler = handlers.get(key)
        if handler is not None:
            handler()
            event.stop()
            return

        if key != "s":
            return

        self.input_state = "active"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if self._modal_active():
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if self._modal_active():
            return
        if self.input_state != "active":
            if delta:
                self._move_cart_selection(delta)
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_add_selected(self) -> None:
        if self._modal_active():
            return
        if self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            return
        self._add_to_cart(results[self.selected_index])

    def action_backspace_query(self) -> None:
        if self._modal_active():
            return
        if self.input_state != "active":
            return

        if not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_checkout(self) -> None:
        log_debug(f"checkout_enter state={self.input_state!r} items={self.engine.item_count}")
        if self._modal_active():
            return
        if self.input_state != "normal":
            self._set_status("Checkout only in NORMAL mode (Esc to leave search)")
            return
        if self.engine.state.is_empty:
            self._set_status("Your cart is empty")
            return

        self.push_screen(CheckoutModal(self.engine.state), callback=self._on_checkout_details)

    def _on_checkout_details(self, details: CheckoutDetails | None) -> None:
        if details is None:
            self._set_status("Checkout cancelled")
            return

        try:
            order_id, _ = submit_order(
                self.engine,
                self.order_service,
                details.customer,
                details.payment_method,
                details.order_notes,
            )
        except (OrderValidationError, OrderSubmissionError) as exc:
            # The cart is untouched so the user can retry.
            self._set_status(f"Order failed: {exc}")
            return

        self.cart_selected_index = None
        status = f"Order #{order_id} placed"
        saved = get_order(order_id, self.db_path)
        if saved is not None:
            status = f"{status}, arriving around {format_local_time(saved.estimated_delivery_at)}"
        receipt_note = self._print_receipt(saved)
        if receipt_note:
            status = f"{status}; {receipt_note}"
        self._set_status(status)
        self._refresh_cart()

    def _print_receipt(self, saved: SavedOrder | None) -> str:
        if not self.printer_ready or saved is None:
            return ""
        order_id = saved.order_id
        try:
            print_order_receipt(saved)
        except Exception as exc:
            update_receipt_status(order_id, "PRINT_FAILED", self.db_path)
            log_debug(f"receipt_print_failed order_id={order_id} error={exc!r}")
            return f"receipt print failed: {exc}"
        update_receipt_status(order_id, "PRINTED", self.db_path)
        log_debug(f"receipt_printed order_id={order_id}")
        return "receipt printed"

    def _add_to_cart(self, item: CatalogItem) -> None:
        if not item.available:
            self._set_status(f"{item.name} is currently unavailable")
            return

        state = self.engine.add_item(item)
        self.cart_selected_index = next(idx for idx, line in enumerate(state.lines) if line.id == item.id)
        self.system_status = f"Added {item.name}"
        self._refresh_all()

    def _filtered_results(self) -> list[CatalogItem]:
        return search_menu_items(self.search_query, self.current_category)

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_search()

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_search()

    def _cycle_category(self) -> None:
        self.category_index = (self.category_index + 1) % len(self.categories)
        self.selected_index = 0
        self._set_status(f"Category: {self.current_category or 'All'}")

    def _cycle_delivery_option(self) -> None:
        fees = [fee for _, fee in DELIVERY_OPTIONS]
        current = self.engine.state.delivery_fee
        idx = fees.index(current) if current in fees else -1
        label, fee = DELIVERY_OPTIONS[(idx + 1) % len(DELIVERY_OPTIONS)]
        self.engine.set_delivery_fee(fee)
        self.system_status = f"Delivery: {label} ({format_money(fee)})"
        self._refresh_all()

    def _clear_cart(self) -> None:
        if self.engine.state.is_empty:
            self._set_status("Your cart is empty")
            return
        if not self._clear_armed:
            self._clear_armed = True
            self._set_status("Press x again to remove all items")
            return

        self._clear_armed = False
        self.engine.clear_cart()
        self.cart_selected_index = None
        self.system_status = "Cart cleared"
        self._refresh_all()

    def _open_order_history(self) -> None:
        self.push_screen(OrdersModal(list_orders(db_path=self.db_path)))

    def _move_cart_selection(self, delta: int) -> None:
        lines = self.engine.state.lines
        if not lines:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(lines)
        self._refresh_cart()

    def _selected_line(self) -> CartLine | None:
        lines = self.engine.state.lines
        if self.cart_selected_index is None:
            return None
        if not (0 <= self.cart_selected_index < len(lines)):
            return None
        return lines[self.cart_selected_index]

    def _change_selected_quantity(self, delta: int) -> None:
        line = self._selected_line()
        if line is None:
            return
        self.engine.update_quantity(line.id, line.quantity + delta)
        self._refresh_cart()

    def _remove_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        self.engine.remove_item(line.id)
        self.system_status = f"Removed {line.name}"
        self._refresh_all()

    def _open_instructions_for_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return

        def apply(text: str | None) -> None:
            if text is None:
                return
            self.engine.update_special_instructions(line.id, text or None)
            self._refresh_cart()

        self.push_screen(InstructionsModal(line), callback=apply)

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
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            totals_widget = self.query_one("#cart-totals", Static)
            title_widget = self.query_one("#cart-title", Static)
        except NoMatches:
            return

        state = self.engine.state
        title_widget.update(f"Your Cart ({state.item_count} {'item' if state.item_count == 1 else 'items'})")
        totals_widget.update(format_totals(state))
        if state.is_empty:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)\nPress S to search the menu.")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(state.lines):
            self.cart_selected_index = len(state.lines) - 1

        # Lines with instructions take two rows.
        visible_rows = max(1, self._visible_rows(cart_widget) // 2)
        start, end = self._window_bounds(len(state.lines), visible_rows, self.cart_selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")

            pointer = "➤ " if idx == self.cart_selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_cart_line(state.lines[idx]))

        if end < len(state.lines):
            lines.append("\n⋮", style="dim")

        cart_widget.update(lines)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        category = self.current_category
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            bar.update(
                f"S search, C category ({category or 'All'}), Ctrl+S checkout.\n"
                f"J/K select, +/- qty, D remove, N notes, F delivery, X clear, O orders.\n{status}"
            )
            return

        text = Text()
        if category:
            text.append(f" {category} ", style=badge_style(category))
        else:
            text.append(" All ", style="bold")
        text.append(f": {self.search_query}")
        if self.system_status:
            text.append(f"\n{self.system_status}", style="dim")
        bar.update(text)

    def _refresh_results(self, results: list[CatalogItem]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update("")
            return

        if not results:
            results_widget.update("No results")
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
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_menu_item(results[idx]))

        if end < len(results):
            lines.append("\n⋮", style="dim")

        results_widget.update(lines)
