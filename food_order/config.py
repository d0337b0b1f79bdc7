"""Runtime configuration defaults for pricing, persistence and printing."""

from __future__ import annotations

import os
from decimal import Decimal

DB_PATH = os.environ.get("FOOD_ORDER_DB_PATH", "data/food_order.db")
DEBUG_LOG_PATH = "/tmp/food-order-debug.log"

CART_STORAGE_KEY = "foodApp_cart"

TAX_RATE = Decimal("0.08")
DEFAULT_DELIVERY_FEE = Decimal("3.99")

# Cycled with `f` in the cart pane. The first entry must match DEFAULT_DELIVERY_FEE.
DELIVERY_OPTIONS: list[tuple[str, Decimal]] = [
    ("Standard", DEFAULT_DELIVERY_FEE),
    ("Express", Decimal("6.99")),
    ("Pickup", Decimal("0.00")),
]

ESTIMATED_DELIVERY_MINUTES = 30

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 24
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_LINE_SPACING_PX = 6
PRINTER_TAIL_SPACER_PX = 70
