"""Domain models for food-order."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

PaymentMethod = Literal["cash", "card", "digital"]
OrderStatus = Literal["pending", "confirmed", "preparing", "ready", "delivered", "cancelled"]

PAYMENT_METHODS: tuple[str, ...] = ("card", "cash", "digital")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a price-like value to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class NutritionInfo:
    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class CatalogItem:
    """A menu entry owned by the catalog. The cart only reads it."""

    id: str
    name: str
    price: Decimal
    category: str
    available: bool = True
    description: str = ""
    image: str | None = None
    preparation_time: int | None = None
    ingredients: tuple[str, ...] = ()
    nutritional_info: NutritionInfo | None = None


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    description: str
    sort_order: int


@dataclass(frozen=True)
class CartLine:
    """One catalog item's entry in the cart. The engine swaps lines rather than editing them."""

    id: str
    name: str
    price: Decimal
    category: str
    quantity: int = 1
    special_instructions: str | None = None
    available: bool = True
    description: str = ""
    image: str | None = None
    preparation_time: int | None = None
    ingredients: tuple[str, ...] = ()
    nutritional_info: NutritionInfo | None = None

    @classmethod
    def from_catalog_item(cls, item: CatalogItem, quantity: int = 1) -> CartLine:
        return cls(
            id=item.id,
            name=item.name,
            price=to_decimal(item.price),
            category=item.category,
            quantity=quantity,
            available=item.available,
            description=item.description,
            image=item.image,
            preparation_time=item.preparation_time,
            ingredients=tuple(item.ingredients),
            nutritional_info=item.nutritional_info,
        )

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class CartState:
    """Read-only snapshot of the cart and its derived totals."""

    lines: tuple[CartLine, ...]
    delivery_fee: Decimal
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    item_count: int

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    phone: str
    email: str = ""
    address: str = ""

    def normalized(self) -> CustomerInfo:
        return CustomerInfo(
            name=self.name.strip(),
            phone=self.phone.strip(),
            email=self.email.strip(),
            address=self.address.strip(),
        )


@dataclass(frozen=True)
class OrderRequest:
    """Snapshot of a cart handed to the order service."""

    lines: tuple[CartLine, ...]
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    total: Decimal
    customer: CustomerInfo
    payment_method: PaymentMethod = "card"
    order_notes: str = ""
    status: OrderStatus = "pending"


@dataclass(frozen=True)
class SavedOrder:
    """A placed order as recorded locally."""

    order_id: str
    created_at: str
    estimated_delivery_at: str
    request: OrderRequest
    receipt_status: str = "NOT_PRINTED"
