"""Static catalog data and lookups."""

from __future__ import annotations

from food_order.constant import CATEGORY_ROWS, MENU_ITEM_ROWS
from food_order.models import CatalogItem, Category, NutritionInfo, to_decimal


def _build_item(row: dict[str, object]) -> CatalogItem:
    nutrition = row.get("nutritional_info")
    return CatalogItem(
        id=str(row["id"]),
        name=str(row["name"]),
        price=to_decimal(str(row["price"])),
        category=str(row["category"]),
        available=bool(row.get("available", True)),
        description=str(row.get("description", "")),
        image=row.get("image"),  # type: ignore[arg-type]
        preparation_time=row.get("preparation_time"),  # type: ignore[arg-type]
        ingredients=tuple(row.get("ingredients", ())),  # type: ignore[arg-type]
        nutritional_info=NutritionInfo(**nutrition) if isinstance(nutrition, dict) else None,
    )


MENU_ITEMS: list[CatalogItem] = [_build_item(row) for row in MENU_ITEM_ROWS]

CATEGORIES: list[Category] = sorted(
    (
        Category(
            id=str(row["id"]),
            name=str(row["name"]),
            description=str(row["description"]),
            sort_order=int(row["sort_order"]),
        )
        for row in CATEGORY_ROWS
    ),
    key=lambda category: category.sort_order,
)

MENU_ITEMS_BY_ID: dict[str, CatalogItem] = {item.id: item for item in MENU_ITEMS}


def get_menu_items() -> list[CatalogItem]:
    """Return the full menu in catalog order."""
    return list(MENU_ITEMS)


def get_categories() -> list[Category]:
    return list(CATEGORIES)


def get_menu_items_by_category(category: str | None) -> list[CatalogItem]:
    """Filter menu items by category name (case-insensitive). None returns everything."""
    if not category:
        return get_menu_items()
    wanted = category.lower()
    return [item for item in MENU_ITEMS if item.category.lower() == wanted]


def find_menu_item(item_id: str) -> CatalogItem | None:
    return MENU_ITEMS_BY_ID.get(item_id)


def search_menu_items(query: str, category: str | None = None) -> list[CatalogItem]:
    """Substring search over names, descriptions and ingredients within a category."""
    source = get_menu_items_by_category(category)
    q = query.strip().lower()
    if not q:
        return source

    name_hits = [item for item in source if q in item.name.lower()]
    other_hits = [
        item
        for item in source
        if item not in name_hits
        and (q in item.description.lower() or any(q in ingredient.lower() for ingredient in item.ingredients))
    ]
    return name_hits + other_hits
