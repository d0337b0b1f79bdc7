"""Order history modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from food_order.persistence import OrderSummary
from food_order.rendering import format_local_time, format_money

_STATUS_STYLES = {
    "pending": "bold #1f1300 on #f2d17c",
    "confirmed": "bold #ffffff on #2f6db5",
    "preparing": "bold #1f1300 on #e0a030",
    "ready": "bold #0b1f0f on #5fbf72",
    "delivered": "bold #0b1f0f on #5fbf72",
    "cancelled": "bold #ffffff on #b23a48",
}


def format_order_summary(order: OrderSummary) -> Text:
    text = Text()
    text.append(f" {order.status.upper()} ", style=_STATUS_STYLES.get(order.status, "bold"))
    text.append(f" #{order.order_id}")
    text.append(f"\n    {order.created_at[:16].replace('T', ' ')}  {order.item_count} item(s)  ")
    text.append(f"Total: {format_money(order.total)}", style="bold")
    if order.estimated_delivery_at:
        text.append(f"  ETA {format_local_time(order.estimated_delivery_at)}")
    if order.receipt_status == "PRINT_FAILED":
        text.append("  receipt not printed", style="dim")
    for line in order.lines:
        text.append(f"\n      {line.quantity}x {line.name}", style="dim")
    return text


class OrdersModal(ModalScreen[None]):
    """Read-only list of recent orders."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    OrdersModal {
        align: center middle;
        background: $background 60%;
    }

    #orders-dialog {
        width: 72;
        height: auto;
        max-height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #orders-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #orders-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, orders: list[OrderSummary]) -> None:
        super().__init__()
        self.orders = orders

    def compose(self) -> ComposeResult:
        with Container(id="orders-dialog"):
            yield Static("My Orders", id="orders-title")
            yield Static(id="orders-body")
            yield Static("Esc / q / Ctrl+C to close", id="orders-help")

    def on_mount(self) -> None:
        body = self.query_one("#orders-body", Static)
        if not self.orders:
            body.update("No orders yet")
            return

        content = Text()
        for idx, order in enumerate(self.orders):
            if idx > 0:
                content.append("\n")
            content.append_text(format_order_summary(order))
        body.update(content)

    def action_close(self) -> None:
        self.dismiss()
