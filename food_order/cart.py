"""Cart state, mutations and pricing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable

from food_order.config import CART_STORAGE_KEY, DEFAULT_DELIVERY_FEE, TAX_RATE
from food_order.debug_log import log_debug
from food_order.models import CartLine, CartState, CatalogItem, to_decimal
from food_order.storage import CartStorage, NullCartStorage, deserialize_lines, serialize_lines

_ZERO = Decimal("0")


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    item_count: int


def calculate_totals(lines: Iterable[CartLine], delivery_fee: Decimal, tax_rate: Decimal = TAX_RATE) -> CartTotals:
    """Derive all totals from scratch for the given lines."""
    subtotal = _ZERO
    item_count = 0
    for line in lines:
        subtotal += line.price * line.quantity
        item_count += line.quantity
    tax = subtotal * tax_rate
    return CartTotals(
        subtotal=subtotal,
        tax=tax,
        grand_total=subtotal + tax + delivery_fee,
        item_count=item_count,
    )


def _normalize_lines(lines: Iterable[CartLine]) -> list[CartLine]:
    """Drop non-positive quantities and merge repeated ids into the first occurrence."""
    merged: dict[str, CartLine] = {}
    for line in lines:
        if line.quantity < 1:
            continue
        existing = merged.get(line.id)
        if existing is None:
            merged[line.id] = line
            continue
        merged[line.id] = replace(
            existing,
            quantity=existing.quantity + line.quantity,
            special_instructions=existing.special_instructions or line.special_instructions,
        )
    return list(merged.values())


class CartEngine:
    """
    Sole owner of the cart.

    Every mutation recomputes the totals from the full line set, writes the
    lines to storage, and returns a fresh CartState snapshot.
    """

    def __init__(
        self,
        storage: CartStorage | None = None,
        *,
        tax_rate: Decimal = TAX_RATE,
        default_delivery_fee: Decimal = DEFAULT_DELIVERY_FEE,
        storage_key: str = CART_STORAGE_KEY,
    ) -> None:
        self.storage: CartStorage = storage if storage is not None else NullCartStorage()
        self.storage_key = storage_key
        self.tax_rate = to_decimal(tax_rate)
        self.default_delivery_fee = to_decimal(default_delivery_fee)
        self._lines: list[CartLine] = []
        self._delivery_fee = self.default_delivery_fee
        self._state = self._snapshot()

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def item_count(self) -> int:
        return self._state.item_count

    @property
    def subtotal(self) -> Decimal:
        return self._state.subtotal

    def line(self, item_id: str) -> CartLine | None:
        index = self._index(item_id)
        return None if index is None else self._lines[index]

    def add_item(self, item: CatalogItem) -> CartState:
        """Add one unit of a catalog item. Callers only pass available items."""
        index = self._index(item.id)
        if index is not None:
            self._replace_line(index, quantity=self._lines[index].quantity + 1)
        else:
            self._lines.append(CartLine.from_catalog_item(item))
        return self._commit(f"add_item id={item.id}")

    def remove_item(self, item_id: str) -> CartState:
        self._lines = [line for line in self._lines if line.id != item_id]
        return self._commit(f"remove_item id={item_id}")

    def update_quantity(self, item_id: str, quantity: int) -> CartState:
        """Set an absolute quantity; zero or less removes the line."""
        if quantity <= 0:
            return self.remove_item(item_id)
        index = self._index(item_id)
        if index is not None:
            self._replace_line(index, quantity=quantity)
        return self._commit(f"update_quantity id={item_id} quantity={quantity}")

    def update_special_instructions(self, item_id: str, instructions: str | None) -> CartState:
        """Replace the line's instructions text as given; None clears it."""
        index = self._index(item_id)
        if index is not None:
            self._replace_line(index, special_instructions=instructions)
        return self._commit(f"update_special_instructions id={item_id}")

    def clear_cart(self) -> CartState:
        self._lines = []
        self._delivery_fee = self.default_delivery_fee
        return self._commit("clear_cart")

    def set_delivery_fee(self, fee: Decimal | int | float | str) -> CartState:
        # Negative fees are the caller's problem; nothing is clamped here.
        self._delivery_fee = to_decimal(fee)
        return self._commit(f"set_delivery_fee fee={self._delivery_fee}")

    def restore(self, lines: Iterable[CartLine]) -> CartState:
        """Replace the lines wholesale, keeping the current delivery fee."""
        self._lines = _normalize_lines(lines)
        return self._commit(f"restore lines={len(self._lines)}")

    def load_saved(self) -> CartState:
        """Seed the cart from storage once at startup. Any failure leaves it empty."""
        try:
            raw = self.storage.read(self.storage_key)
            lines = deserialize_lines(raw) if raw else []
        except Exception as exc:
            log_debug(f"cart_load_failed key={self.storage_key} error={exc!r}")
            return self._state

        if not lines:
            log_debug("cart_load_empty")
            return self._state
        log_debug(f"cart_load_ok lines={len(lines)}")
        return self.restore(lines)

    def _index(self, item_id: str) -> int | None:
        for index, line in enumerate(self._lines):
            if line.id == item_id:
                return index
        return None

    def _replace_line(self, index: int, **changes) -> None:
        self._lines[index] = replace(self._lines[index], **changes)

    def _snapshot(self) -> CartState:
        totals = calculate_totals(self._lines, self._delivery_fee, self.tax_rate)
        return CartState(
            lines=tuple(self._lines),
            delivery_fee=self._delivery_fee,
            subtotal=totals.subtotal,
            tax=totals.tax,
            grand_total=totals.grand_total,
            item_count=totals.item_count,
        )

    def _commit(self, action: str) -> CartState:
        self._state = self._snapshot()
        self._persist(action)
        return self._state

    def _persist(self, action: str) -> None:
        try:
            self.storage.write(self.storage_key, serialize_lines(self._lines))
        except Exception as exc:
            log_debug(f"cart_save_failed action={action} error={exc!r}")
