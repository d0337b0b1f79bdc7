import asyncio
from decimal import Decimal
from pathlib import Path

import pytest

from food_order.app import FoodOrderApp
from food_order.cart import CartEngine
from food_order.checkout_modal import CheckoutModal
from food_order.data import find_menu_item
from food_order.instructions_modal import InstructionsModal
from food_order.models import OrderRequest
from food_order.persistence import list_orders
from food_order.rendering import format_local_time
from food_order.storage import MemoryCartStorage

FILL_CHECKOUT_FORM = ("A", "d", "a", "down", "5", "5", "5", "down", "down", "M", "a", "i", "n")
# From the address row: notes, payment, place order.
PLACE_ORDER = ("down", "down", "down", "enter")


class BrokenService:
    def create_order(self, request: OrderRequest) -> str:
        raise ConnectionError("network unreachable")


@pytest.fixture(autouse=True)
def no_printer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("food_order.app.check_printer_dependencies", lambda: (False, "Printer unavailable"))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "food.db"


@pytest.fixture
def engine() -> CartEngine:
    return CartEngine(MemoryCartStorage())


def run_app(app: FoodOrderApp, *keys: str) -> None:
    async def runner() -> None:
        async with app.run_test() as pilot:
            await pilot.press(*keys)
            await pilot.pause()

    asyncio.run(runner())


def test_search_and_add_item_then_adjust_quantity(engine, db_path):
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "s", "p", "i", "z", "enter", "enter", "escape", "plus", "plus", "minus")

    assert app.input_state == "normal"
    assert [(line.id, line.quantity) for line in engine.state.lines] == [("1", 3)]
    assert engine.state.subtotal == Decimal("50.97")


def test_down_arrow_picks_next_search_result(engine, db_path):
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "s", "p", "i", "z", "down", "enter")

    assert [line.id for line in engine.state.lines] == ["2"]


def test_unavailable_item_is_not_added(engine, db_path):
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "s", "b", "a", "s", "s", "enter")

    assert engine.state.is_empty
    assert "unavailable" in app.system_status


def test_remove_selected_line(engine, db_path):
    engine.add_item(find_menu_item("1"))
    engine.add_item(find_menu_item("12"))
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "j", "d")

    assert [line.id for line in engine.state.lines] == ["12"]


def test_clear_cart_needs_confirmation(engine, db_path):
    engine.add_item(find_menu_item("1"))
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "x")
    assert not engine.state.is_empty

    run_app(FoodOrderApp(engine=engine, db_path=db_path), "x", "x")
    assert engine.state.is_empty


def test_delivery_option_cycles_fee(engine, db_path):
    engine.add_item(find_menu_item("1"))
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "f")
    assert engine.state.delivery_fee == Decimal("6.99")

    run_app(FoodOrderApp(engine=engine, db_path=db_path), "f")
    assert engine.state.delivery_fee == Decimal("0.00")


def test_edit_special_instructions(engine, db_path):
    engine.add_item(find_menu_item("1"))
    app = FoodOrderApp(engine=engine, db_path=db_path)
    seen_modal: list[bool] = []

    async def runner() -> None:
        async with app.run_test() as pilot:
            await pilot.press("j", "n")
            seen_modal.append(isinstance(app.screen, InstructionsModal))
            await pilot.press("h", "o", "t", "enter")
            await pilot.pause()

    asyncio.run(runner())

    assert seen_modal == [True]
    assert engine.line("1").special_instructions == "hot"


def test_clearing_instructions_stores_none(engine, db_path):
    engine.add_item(find_menu_item("1"))
    engine.update_special_instructions("1", "no basil")
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "j", "n", "ctrl+u", "space", "enter")

    assert engine.line("1").special_instructions is None


def test_checkout_with_empty_cart_reports_status(engine, db_path):
    app = FoodOrderApp(engine=engine, db_path=db_path)

    run_app(app, "ctrl+s")

    assert app.system_status == "Your cart is empty"


def test_checkout_places_order_and_clears_cart(engine, db_path):
    engine.add_item(find_menu_item("1"))
    app = FoodOrderApp(engine=engine, db_path=db_path)
    seen_modal: list[bool] = []

    async def runner() -> None:
        async with app.run_test() as pilot:
            await pilot.press("ctrl+s")
            seen_modal.append(isinstance(app.screen, CheckoutModal))
            await pilot.press(*FILL_CHECKOUT_FORM, *PLACE_ORDER)
            await pilot.pause()

    asyncio.run(runner())

    assert seen_modal == [True]
    assert engine.state.is_empty
    orders = list_orders(db_path=db_path)
    assert len(orders) == 1
    assert orders[0].total == Decimal("22.34")
    eta = format_local_time(orders[0].estimated_delivery_at)
    assert app.system_status == f"Order #{orders[0].order_id} placed, arriving around {eta}"


def test_checkout_requires_name(engine, db_path):
    engine.add_item(find_menu_item("1"))
    app = FoodOrderApp(engine=engine, db_path=db_path)
    errors: list[str] = []

    async def runner() -> None:
        async with app.run_test() as pilot:
            await pilot.press("ctrl+s", "up", "enter")
            screen = app.screen
            assert isinstance(screen, CheckoutModal)
            errors.append(screen.error)

    asyncio.run(runner())

    assert errors == ["Please enter your name."]
    assert not engine.state.is_empty


def test_failed_submission_keeps_cart(engine, db_path):
    engine.add_item(find_menu_item("1"))
    before = engine.state
    app = FoodOrderApp(engine=engine, order_service=BrokenService(), db_path=db_path)

    run_app(app, "ctrl+s", *FILL_CHECKOUT_FORM, *PLACE_ORDER)

    assert engine.state == before
    assert app.system_status == "Order failed: network unreachable"
