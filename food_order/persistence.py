"""SQLite persistence for placed orders."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

from food_order.config import DB_PATH, ESTIMATED_DELIVERY_MINUTES
from food_order.models import CartLine, CustomerInfo, OrderRequest, SavedOrder

RECEIPT_STATUSES = ("NOT_PRINTED", "PRINTED", "PRINT_FAILED")


@dataclass(frozen=True)
class OrderSummary:
    """One row of the order history list."""

    order_id: str
    created_at: str
    estimated_delivery_at: str
    status: str
    receipt_status: str
    item_count: int
    total: Decimal
    lines: tuple[CartLine, ...] = ()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _connect(db_path: str | Path) -> sqlite3.Connection:
    db_file = Path(db_path)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def bootstrap_schema(db_path: str | Path = DB_PATH) -> None:
    """Create persistence schema if it does not already exist."""
    with closing(_connect(db_path)) as conn, conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS orders (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                estimated_delivery_at TEXT NOT NULL,
                status TEXT NOT NULL,
                receipt_status TEXT NOT NULL DEFAULT 'NOT_PRINTED',
                customer_name TEXT NOT NULL,
                customer_phone TEXT NOT NULL,
                customer_email TEXT,
                customer_address TEXT,
                payment_method TEXT NOT NULL,
                order_notes TEXT,
                subtotal TEXT NOT NULL,
                tax TEXT NOT NULL,
                delivery_fee TEXT NOT NULL,
                total TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS order_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id TEXT NOT NULL,
                line_index INTEGER NOT NULL,
                item_id TEXT NOT NULL,
                item_name TEXT NOT NULL,
                category TEXT NOT NULL,
                unit_price TEXT NOT NULL,
                quantity INTEGER NOT NULL,
                special_instructions TEXT,
                FOREIGN KEY(order_id) REFERENCES orders(id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_order_items_order_id_line
                ON order_items(order_id, line_index);
            """
        )


def save_order(order_id: str, request: OrderRequest, db_path: str | Path = DB_PATH) -> SavedOrder:
    """Persist a placed order with all of its lines."""
    if not request.lines:
        raise ValueError("Cannot save an order without items")

    created = _utc_now()
    created_at = created.isoformat()
    estimated_delivery_at = (created + timedelta(minutes=ESTIMATED_DELIVERY_MINUTES)).isoformat()
    customer = request.customer

    bootstrap_schema(db_path)
    with closing(_connect(db_path)) as conn:
        with conn:
            conn.execute(
                """
                INSERT INTO orders (
                    id, created_at, estimated_delivery_at, status, receipt_status,
                    customer_name, customer_phone, customer_email, customer_address,
                    payment_method, order_notes, subtotal, tax, delivery_fee, total
                ) VALUES (?, ?, ?, ?, 'NOT_PRINTED', ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order_id,
                    created_at,
                    estimated_delivery_at,
                    request.status,
                    customer.name,
                    customer.phone,
                    customer.email,
                    customer.address,
                    request.payment_method,
                    request.order_notes,
                    str(request.subtotal),
                    str(request.tax),
                    str(request.delivery_fee),
                    str(request.total),
                ),
            )
            conn.executemany(
                """
                INSERT INTO order_items (
                    order_id, line_index, item_id, item_name, category, unit_price, quantity, special_instructions
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        order_id,
                        idx,
                        line.id,
                        line.name,
                        line.category,
                        str(line.price),
                        line.quantity,
                        line.special_instructions,
                    )
                    for idx, line in enumerate(request.lines)
                ],
            )

    return SavedOrder(
        order_id=order_id,
        created_at=created_at,
        estimated_delivery_at=estimated_delivery_at,
        request=request,
    )


def update_receipt_status(order_id: str, status: str, db_path: str | Path = DB_PATH) -> None:
    """Record the receipt printing outcome for a placed order."""
    if status not in RECEIPT_STATUSES:
        raise ValueError(f"Unknown receipt status: {status}")
    with closing(_connect(db_path)) as conn, conn:
        conn.execute("UPDATE orders SET receipt_status = ? WHERE id = ?", (status, order_id))


def _load_lines(conn: sqlite3.Connection, order_id: str) -> tuple[CartLine, ...]:
    rows = conn.execute(
        """
        SELECT item_id, item_name, category, unit_price, quantity, special_instructions
        FROM order_items WHERE order_id = ? ORDER BY line_index
        """,
        (order_id,),
    ).fetchall()
    return tuple(
        CartLine(
            id=row[0],
            name=row[1],
            category=row[2],
            price=Decimal(row[3]),
            quantity=int(row[4]),
            special_instructions=row[5],
        )
        for row in rows
    )


def list_orders(limit: int = 20, db_path: str | Path = DB_PATH) -> list[OrderSummary]:
    """Return the most recent orders with their lines, newest first."""
    bootstrap_schema(db_path)
    with closing(_connect(db_path)) as conn:
        rows = conn.execute(
            """
            SELECT id, created_at, estimated_delivery_at, status, receipt_status, total
            FROM orders
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()
        summaries = []
        for row in rows:
            lines = _load_lines(conn, row[0])
            summaries.append(
                OrderSummary(
                    order_id=row[0],
                    created_at=row[1],
                    estimated_delivery_at=row[2],
                    status=row[3],
                    receipt_status=row[4],
                    total=Decimal(row[5]),
                    item_count=sum(line.quantity for line in lines),
                    lines=lines,
                )
            )
    return summaries


def get_order(order_id: str, db_path: str | Path = DB_PATH) -> SavedOrder | None:
    """Load one placed order with its lines, or None if the id is unknown."""
    bootstrap_schema(db_path)
    with closing(_connect(db_path)) as conn:
        order = conn.execute(
            """
            SELECT id, created_at, estimated_delivery_at, status, receipt_status,
                   customer_name, customer_phone, customer_email, customer_address,
                   payment_method, order_notes, subtotal, tax, delivery_fee, total
            FROM orders WHERE id = ?
            """,
            (order_id,),
        ).fetchone()
        if order is None:
            return None
        lines = _load_lines(conn, order_id)

    request = OrderRequest(
        lines=lines,
        subtotal=Decimal(order[11]),
        tax=Decimal(order[12]),
        delivery_fee=Decimal(order[13]),
        total=Decimal(order[14]),
        customer=CustomerInfo(name=order[5], phone=order[6], email=order[7] or "", address=order[8] or ""),
        payment_method=order[9],
        order_notes=order[10] or "",
        status=order[3],
    )
    return SavedOrder(
        order_id=order[0],
        created_at=order[1],
        estimated_delivery_at=order[2],
        request=request,
        receipt_status=order[4],
    )
