"""Durable storage backends for the saved cart."""

from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Protocol

from food_order.models import CartLine, NutritionInfo


class CartDataError(ValueError):
    """Raised when persisted cart data cannot be decoded."""


class CartStorage(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class NullCartStorage:
    """Storage for environments without a durable store. Nothing is kept."""

    def read(self, key: str) -> str | None:
        return None

    def write(self, key: str, value: str) -> None:
        return None


class MemoryCartStorage:
    """Process-lifetime storage, mostly useful for tests and demos."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value


class SqliteCartStorage:
    """Key/value storage in a single SQLite table next to the orders tables."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        return conn

    def read(self, key: str) -> str | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return None if row is None else str(row[0])

    def write(self, key: str, value: str) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(timezone.utc).isoformat()),
            )


def _line_to_dict(line: CartLine) -> dict[str, object]:
    nutrition = line.nutritional_info
    return {
        "id": line.id,
        "name": line.name,
        "price": str(line.price),
        "category": line.category,
        "quantity": line.quantity,
        "specialInstructions": line.special_instructions,
        "available": line.available,
        "description": line.description,
        "image": line.image,
        "preparationTime": line.preparation_time,
        "ingredients": list(line.ingredients),
        "nutritionalInfo": None
        if nutrition is None
        else {
            "calories": nutrition.calories,
            "protein": nutrition.protein,
            "carbs": nutrition.carbs,
            "fat": nutrition.fat,
        },
    }


def _line_from_dict(data: object) -> CartLine:
    if not isinstance(data, dict):
        raise CartDataError(f"Cart line must be an object, got {type(data).__name__}")
    try:
        price = Decimal(str(data["price"]))
        quantity = int(data["quantity"])
        nutrition = data.get("nutritionalInfo")
        return CartLine(
            id=str(data["id"]),
            name=str(data["name"]),
            price=price,
            category=str(data.get("category", "")),
            quantity=quantity,
            special_instructions=data.get("specialInstructions"),
            available=bool(data.get("available", True)),
            description=str(data.get("description", "")),
            image=data.get("image"),
            preparation_time=data.get("preparationTime"),
            ingredients=tuple(data.get("ingredients") or ()),
            nutritional_info=NutritionInfo(**nutrition) if isinstance(nutrition, dict) else None,
        )
    except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
        raise CartDataError(f"Invalid cart line: {exc!r}") from exc


def serialize_lines(lines: Iterable[CartLine]) -> str:
    """Encode cart lines as a JSON array; prices are kept as decimal strings."""
    return json.dumps([_line_to_dict(line) for line in lines], ensure_ascii=False)


def deserialize_lines(raw: str) -> list[CartLine]:
    """Decode a JSON array written by serialize_lines."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CartDataError(f"Saved cart is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise CartDataError("Saved cart must be a JSON array")
    return [_line_from_dict(entry) for entry in payload]
