"""Receipt printing for placed orders."""

from __future__ import annotations

import os
from pathlib import Path

from food_order.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_LINE_SPACING_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from food_order.constant import PAYMENT_METHOD_LABELS
from food_order.models import SavedOrder
from food_order.rendering import format_money

# Characters per line at PRINTER_FONT_SIZE on a 58mm roll.
RECEIPT_COLUMNS = 32
_FONT_OVERRIDE_ENV = "FOOD_ORDER_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/liberation/LiberationMono-Regular.ttf",
)


def _two_column(left: str, right: str, width: int = RECEIPT_COLUMNS) -> str:
    room = width - len(right) - 1
    if len(left) > room:
        left = left[: max(0, room - 3)] + "..."
    return f"{left}{' ' * (width - len(left) - len(right))}{right}"


def format_receipt_lines(order: SavedOrder, width: int = RECEIPT_COLUMNS) -> list[str]:
    """Lay out a placed order as fixed-width receipt text."""
    request = order.request
    lines = [f"Order {order.order_id}", order.created_at[:16].replace("T", " "), "-" * width]

    for line in request.lines:
        lines.append(_two_column(f"{line.quantity}x {line.name}", format_money(line.line_total), width))
        if line.special_instructions:
            lines.append(f"   * {line.special_instructions}")

    lines.append("-" * width)
    lines.append(_two_column("Subtotal", format_money(request.subtotal), width))
    lines.append(_two_column("Tax", format_money(request.tax), width))
    lines.append(_two_column("Delivery", format_money(request.delivery_fee), width))
    lines.append(_two_column("TOTAL", format_money(request.total), width))
    lines.append("")
    lines.append(f"Paid by: {PAYMENT_METHOD_LABELS.get(request.payment_method, request.payment_method)}")
    lines.append(f"For: {request.customer.name} {request.customer.phone}")
    if request.customer.address:
        lines.append(request.customer.address)
    if request.order_notes:
        lines.append(f"Notes: {request.order_notes}")
    return lines


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. FOOD_ORDER_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def render_receipt_image(lines: list[str], font: object) -> object:
    """Render receipt text into one 1-bit image the width of the paper."""
    from PIL import Image, ImageDraw

    probe = Image.new("1", (1, 1), color=1)
    probe_draw = ImageDraw.Draw(probe)
    line_height = probe_draw.textbbox((0, 0), "Hg", font=font)[3] + PRINTER_LINE_SPACING_PX
    height = max(1, line_height * len(lines)) + PRINTER_TAIL_SPACER_PX

    img = Image.new("1", (PRINTER_WIDTH_PX, height), color=1)
    draw = ImageDraw.Draw(img)
    y = 0
    for text in lines:
        if text:
            draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
        y += line_height
    return img


def print_order_receipt(order: SavedOrder) -> None:
    """Print the receipt for a placed order and cut the ticket."""
    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    printer.image(render_receipt_image(format_receipt_lines(order), font))
    printer.cut()
