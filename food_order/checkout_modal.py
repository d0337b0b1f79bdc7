"""Checkout modal: customer contact, payment method and order notes."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from food_order.constant import PAYMENT_METHOD_LABELS
from food_order.models import PAYMENT_METHODS, CartState, CustomerInfo
from food_order.ordering import OrderValidationError, validate_customer
from food_order.rendering import format_checkout_summary


@dataclass(frozen=True)
class CheckoutDetails:
    customer: CustomerInfo
    payment_method: str
    order_notes: str


_TEXT_FIELDS: list[tuple[str, str]] = [
    ("name", "Name*"),
    ("phone", "Phone*"),
    ("email", "Email"),
    ("address", "Address*"),
    ("notes", "Notes"),
]
_PAYMENT_ROW = "payment"
_PLACE_ROW = "place"
_FIELD_MAX_LENGTH = 120


class CheckoutModal(ModalScreen[CheckoutDetails | None]):
    """Collect delivery and payment details before the order is placed."""

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-summary {
        color: white;
        margin-bottom: 1;
    }

    #checkout-form {
        color: white;
        margin-bottom: 1;
    }

    #checkout-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #checkout-help {
        color: #dddddd;
    }
    """

    def __init__(self, state: CartState) -> None:
        super().__init__()
        self.state = state
        self.values: dict[str, str] = {key: "" for key, _ in _TEXT_FIELDS}
        self.payment_index = 0
        self.cursor_index = 0
        self.error = ""

    @property
    def payment_method(self) -> str:
        return PAYMENT_METHODS[self.payment_index]

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Checkout", id="checkout-title")
            yield Static(id="checkout-summary")
            yield Static(id="checkout-form")
            yield Static(id="checkout-error")
            yield Static(
                "Tab/↑/↓ move. Type to fill. Space/Enter on Payment cycles. Enter on Place order submits. Esc cancel.",
                id="checkout-help",
            )

    def on_mount(self) -> None:
        self.query_one("#checkout-summary", Static).update(format_checkout_summary(self.state))
        self._refresh_content()

    def _rows(self) -> list[str]:
        return [key for key, _ in _TEXT_FIELDS] + [_PAYMENT_ROW, _PLACE_ROW]

    def _current_row(self) -> str:
        return self._rows()[self.cursor_index]

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            return

        if event.key in {"tab", "down"}:
            self._move(1)
            return

        if event.key in {"shift+tab", "up"}:
            self._move(-1)
            return

        row = self._current_row()
        if row == _PAYMENT_ROW:
            if event.key in {"enter", "space", "right"}:
                self.payment_index = (self.payment_index + 1) % len(PAYMENT_METHODS)
            elif event.key == "left":
                self.payment_index = (self.payment_index - 1) % len(PAYMENT_METHODS)
            self._refresh_content()
            return

        if row == _PLACE_ROW:
            if event.key == "enter":
                self._confirm()
            return

        if event.key == "enter":
            self._move(1)
            return

        if event.key == "backspace":
            self.values[row] = self.values[row][:-1]
            self._refresh_content()
            return

        if event.is_printable and event.character:
            if len(self.values[row]) < _FIELD_MAX_LENGTH:
                self.values[row] += event.character
            self.error = ""
            self._refresh_content()

    def _move(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self._rows())
        self._refresh_content()

    def _confirm(self) -> None:
        customer = CustomerInfo(
            name=self.values["name"],
            phone=self.values["phone"],
            email=self.values["email"],
            address=self.values["address"],
        )
        try:
            customer = validate_customer(customer)
        except OrderValidationError as exc:
            self.error = str(exc)
            self._refresh_content()
            return

        self.dismiss(
            CheckoutDetails(
                customer=customer,
                payment_method=self.payment_method,
                order_notes=self.values["notes"].strip(),
            )
        )

    def _refresh_content(self) -> None:
        form = Text()
        labels = dict(_TEXT_FIELDS)
        for idx, row in enumerate(self._rows()):
            if idx > 0:
                form.append("\n")
            selected = idx == self.cursor_index
            pointer = "➤ " if selected else "  "
            style = "bold white" if selected else "white"
            if row == _PAYMENT_ROW:
                form.append(f"{pointer}{'Payment':<10}", style=style)
                form.append(f"‹ {PAYMENT_METHOD_LABELS[self.payment_method]} ›", style=style)
            elif row == _PLACE_ROW:
                form.append(f"{pointer}[ Place order ]", style="bold #ffffff on #2f6db5" if selected else style)
            else:
                cursor = "|" if selected else ""
                form.append(f"{pointer}{labels[row]:<10}{self.values[row]}{cursor}", style=style)

        self.query_one("#checkout-form", Static).update(form)
        self.query_one("#checkout-error", Static).update(self.error or "")
