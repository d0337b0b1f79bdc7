import re
from decimal import Decimal
from pathlib import Path

import pytest

from food_order.cart import CartEngine
from food_order.data import find_menu_item
from food_order.models import CustomerInfo, OrderRequest
from food_order.ordering import (
    LocalOrderService,
    OrderSubmissionError,
    OrderValidationError,
    build_order_request,
    new_order_id,
    quantize_money,
    submit_order,
    validate_customer,
)
from food_order.persistence import get_order, list_orders
from food_order.storage import MemoryCartStorage

CUSTOMER = CustomerInfo(name=" Ada ", phone=" 555-0100 ", email="", address=" 1 Main St ")


class RecordingService:
    def __init__(self, order_id: str = "ORD1") -> None:
        self.order_id = order_id
        self.requests: list[OrderRequest] = []

    def create_order(self, request: OrderRequest) -> str:
        self.requests.append(request)
        return self.order_id


class BrokenService:
    def create_order(self, request: OrderRequest) -> str:
        raise ConnectionError("network unreachable")


@pytest.fixture
def engine() -> CartEngine:
    engine = CartEngine(MemoryCartStorage())
    engine.add_item(find_menu_item("1"))
    engine.add_item(find_menu_item("1"))
    engine.add_item(find_menu_item("12"))
    engine.update_special_instructions("12", "extra cocoa")
    return engine


def test_validate_customer_trims_fields():
    customer = validate_customer(CUSTOMER)

    assert customer == CustomerInfo(name="Ada", phone="555-0100", email="", address="1 Main St")


@pytest.mark.parametrize(
    "customer, message",
    [
        (CustomerInfo(name="  ", phone="1", address="a"), "Please enter your name."),
        (CustomerInfo(name="Ada", phone="", address="a"), "Please enter your phone number."),
        (CustomerInfo(name="Ada", phone="1", address=" "), "Please enter your delivery address."),
    ],
)
def test_validate_customer_reports_first_missing_field(customer, message):
    with pytest.raises(OrderValidationError, match=re.escape(message)):
        validate_customer(customer)


def test_build_order_request_snapshots_cart(engine):
    request = build_order_request(engine.state, CUSTOMER, "cash", "  ring the bell ")

    assert [(line.id, line.quantity) for line in request.lines] == [("1", 2), ("12", 1)]
    assert request.lines[1].special_instructions == "extra cocoa"
    assert request.subtotal == Decimal("42.97")
    assert request.tax == Decimal("3.4376")
    assert request.delivery_fee == Decimal("3.99")
    assert request.total == Decimal("50.40")
    assert request.payment_method == "cash"
    assert request.order_notes == "ring the bell"
    assert request.status == "pending"
    assert request.customer.name == "Ada"


def test_build_order_request_rejects_empty_cart():
    with pytest.raises(OrderValidationError, match="at least one item"):
        build_order_request(CartEngine().state, CUSTOMER)


def test_build_order_request_rejects_unknown_payment_method(engine):
    with pytest.raises(OrderValidationError, match="payment method"):
        build_order_request(engine.state, CUSTOMER, "bitcoin")


def test_quantize_money_rounds_half_up():
    assert quantize_money(Decimal("22.3392")) == Decimal("22.34")
    assert quantize_money(Decimal("1.005")) == Decimal("1.01")


def test_new_order_id_shape():
    assert re.fullmatch(r"ORD\d{13,}[A-Z0-9]{4}", new_order_id())


def test_submit_order_clears_cart_on_success(engine):
    service = RecordingService("ORD42")

    order_id, request = submit_order(engine, service, CUSTOMER, "card", "")

    assert order_id == "ORD42"
    assert service.requests == [request]
    assert engine.state.is_empty
    assert engine.state.delivery_fee == Decimal("3.99")


def test_submit_order_failure_leaves_cart_untouched(engine):
    engine.set_delivery_fee("6.99")
    before = engine.state

    with pytest.raises(OrderSubmissionError, match="network unreachable"):
        submit_order(engine, BrokenService(), CUSTOMER)

    assert engine.state == before


def test_submit_order_validation_failure_does_not_call_service(engine):
    service = RecordingService()
    before = engine.state

    with pytest.raises(OrderValidationError):
        submit_order(engine, service, CustomerInfo(name="", phone="1", address="x"))

    assert service.requests == []
    assert engine.state == before


def test_request_is_not_affected_by_later_cart_changes(engine):
    request = build_order_request(engine.state, CUSTOMER)

    engine.update_quantity("1", 10)

    assert request.lines[0].quantity == 2


def test_local_order_service_persists_order(tmp_path: Path, engine):
    db_path = tmp_path / "orders.db"
    service = LocalOrderService(db_path)

    order_id, request = submit_order(engine, service, CUSTOMER, "digital", "leave at door")

    assert service.last_saved is not None
    assert service.last_saved.order_id == order_id
    saved = get_order(order_id, db_path)
    assert saved is not None
    assert saved.request.total == request.total
    assert saved.request.payment_method == "digital"
    assert saved.request.order_notes == "leave at door"
    assert [(line.id, line.quantity) for line in saved.request.lines] == [("1", 2), ("12", 1)]
    assert [summary.order_id for summary in list_orders(db_path=db_path)] == [order_id]


def test_local_order_service_rejects_missing_contact(tmp_path: Path, engine):
    request = build_order_request(engine.state, CUSTOMER)
    bad = OrderRequest(
        lines=request.lines,
        subtotal=request.subtotal,
        tax=request.tax,
        delivery_fee=request.delivery_fee,
        total=request.total,
        customer=CustomerInfo(name="", phone=""),
    )

    with pytest.raises(OrderValidationError):
        LocalOrderService(tmp_path / "orders.db").create_order(bad)
