"""Order request construction and submission."""

from __future__ import annotations

import secrets
import string
import time
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Protocol

from food_order.cart import CartEngine
from food_order.config import DB_PATH
from food_order.debug_log import log_debug
from food_order.models import PAYMENT_METHODS, CartState, CustomerInfo, OrderRequest, SavedOrder
from food_order.persistence import save_order

_CENT = Decimal("0.01")
_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


class OrderValidationError(ValueError):
    """Raised with a user-facing message when an order cannot be built."""


class OrderSubmissionError(RuntimeError):
    """Raised when the order service fails. The cart is left untouched."""


class OrderService(Protocol):
    def create_order(self, request: OrderRequest) -> str: ...


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def new_order_id() -> str:
    """Return an id shaped like ORD<epoch millis><4 uppercase alphanumerics>."""
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(4))
    return f"ORD{int(time.time() * 1000)}{suffix}"


def validate_customer(customer: CustomerInfo) -> CustomerInfo:
    """Return the trimmed customer info or raise on the first missing field."""
    normalized = customer.normalized()
    if not normalized.name:
        raise OrderValidationError("Please enter your name.")
    if not normalized.phone:
        raise OrderValidationError("Please enter your phone number.")
    if not normalized.address:
        raise OrderValidationError("Please enter your delivery address.")
    return normalized


def build_order_request(
    state: CartState,
    customer: CustomerInfo,
    payment_method: str = "card",
    order_notes: str = "",
) -> OrderRequest:
    """Snapshot a cart state into an order request."""
    if state.is_empty:
        raise OrderValidationError("Order must contain at least one item")
    if payment_method not in PAYMENT_METHODS:
        raise OrderValidationError(f"Unknown payment method: {payment_method}")

    return OrderRequest(
        lines=state.lines,
        subtotal=state.subtotal,
        tax=state.tax,
        delivery_fee=state.delivery_fee,
        total=quantize_money(state.grand_total),
        customer=validate_customer(customer),
        payment_method=payment_method,  # type: ignore[arg-type]
        order_notes=order_notes.strip(),
    )


class LocalOrderService:
    """Order service that records orders in the local SQLite database."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = db_path
        self.last_saved: SavedOrder | None = None

    def create_order(self, request: OrderRequest) -> str:
        if not request.lines:
            raise OrderValidationError("Order must contain at least one item")
        if not request.customer.name or not request.customer.phone:
            raise OrderValidationError("Customer name and phone are required")

        order_id = new_order_id()
        self.last_saved = save_order(order_id, request, db_path=self.db_path)
        return order_id


def submit_order(
    engine: CartEngine,
    service: OrderService,
    customer: CustomerInfo,
    payment_method: str = "card",
    order_notes: str = "",
) -> tuple[str, OrderRequest]:
    """
    Place the current cart as an order.

    Validation errors propagate as OrderValidationError. Any failure inside the
    service is wrapped in OrderSubmissionError. The cart is cleared only after
    the service returns an order id.
    """
    request = build_order_request(engine.state, customer, payment_method, order_notes)
    log_debug(f"order_submit lines={len(request.lines)} total={request.total} payment={request.payment_method}")
    try:
        order_id = service.create_order(request)
    except Exception as exc:
        log_debug(f"order_submit_failed error={exc!r}")
        message = str(exc) or "Failed to place order. Please try again."
        raise OrderSubmissionError(message) from exc

    engine.clear_cart()
    log_debug(f"order_submit_ok order_id={order_id}")
    return order_id, request
