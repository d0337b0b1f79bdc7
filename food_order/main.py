"""Entry point for the food-order Textual app."""

from __future__ import annotations

from food_order.app import FoodOrderApp
from food_order.cart import CartEngine
from food_order.config import DB_PATH
from food_order.storage import SqliteCartStorage


def main() -> None:
    """Restore the saved cart and run the Textual application."""
    engine = CartEngine(SqliteCartStorage(DB_PATH))
    engine.load_saved()
    FoodOrderApp(engine=engine, db_path=DB_PATH).run()


if __name__ == "__main__":
    main()
