"""Rendering helpers for menu rows, cart lines and totals."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from rich.text import Text

from food_order.config import ESTIMATED_DELIVERY_MINUTES
from food_order.constant import CATEGORY_BADGE_STYLES
from food_order.models import CartLine, CartState, CatalogItem

_DEFAULT_BADGE_STYLE = "bold #0b1f0f on #5fbf72"


def format_money(amount: Decimal) -> str:
    """Format an amount as dollars rounded half-up to cents."""
    return f"${amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    return CATEGORY_BADGE_STYLES.get(category, _DEFAULT_BADGE_STYLE)


def category_badge(category: str) -> Text:
    text = Text()
    text.append(f" {category[:1].upper() or '?'} ", style=badge_style(category))
    return text


def format_menu_item(item: CatalogItem) -> Text:
    """Render a search result with badge, name and unit price."""
    text = category_badge(item.category)
    text.append(f" {item.name}")
    text.append(f"  {format_money(item.price)}", style="bold")
    if not item.available:
        text.append("  (unavailable)", style="dim")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = category_badge(line.category)
    text.append(f" {line.quantity}x {line.name}")
    text.append(f"  {format_money(line.line_total)}", style="bold")
    if line.special_instructions:
        text.append(f"\n      ✎ {line.special_instructions}", style="italic")
    return text


def format_totals(state: CartState) -> Text:
    """Render the order summary block shown under the cart."""
    text = Text()
    rows = [
        ("Subtotal", state.subtotal),
        ("Tax", state.tax),
        ("Delivery Fee", state.delivery_fee),
    ]
    for label, amount in rows:
        text.append(f"{label:<14}{format_money(amount):>10}\n")
    text.append(f"{'Total':<14}{format_money(state.grand_total):>10}", style="bold")
    return text


def format_local_time(iso_timestamp: str) -> str:
    """Render a stored ISO timestamp as local HH:MM."""
    return datetime.fromisoformat(iso_timestamp).astimezone().strftime("%H:%M")


def format_order_line(line: CartLine) -> Text:
    """Render `Name  qty x price = line total`, with the note on its own row."""
    text = Text()
    text.append(line.name)
    text.append(f"  {line.quantity} x {format_money(line.price)} = ")
    text.append(format_money(line.line_total), style="bold")
    if line.special_instructions:
        text.append(f"\n    Note: {line.special_instructions}", style="italic")
    return text


def format_checkout_summary(state: CartState) -> Text:
    """Every line, the totals breakdown and the delivery estimate."""
    text = Text()
    for line in state.lines:
        text.append_text(format_order_line(line))
        text.append("\n")
    text.append("\n")
    text.append_text(format_totals(state))
    text.append(f"\n\nEstimated delivery: {ESTIMATED_DELIVERY_MINUTES} minutes after ordering", style="dim")
    return text
