"""Editable static menu and category configuration."""

from __future__ import annotations

_IMG = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w=800"

CATEGORY_ROWS: list[dict[str, str | int]] = [
    {"id": "1", "name": "Pizza", "description": "Wood-fired artisan pizzas", "sort_order": 1},
    {"id": "2", "name": "Burgers", "description": "Gourmet burgers & sandwiches", "sort_order": 2},
    {"id": "3", "name": "Salads", "description": "Fresh & healthy options", "sort_order": 3},
    {"id": "4", "name": "Pasta", "description": "Handmade pasta dishes", "sort_order": 4},
    {"id": "5", "name": "Seafood", "description": "Fresh catch of the day", "sort_order": 5},
    {"id": "6", "name": "Desserts", "description": "Sweet endings", "sort_order": 6},
]

# Prices are decimal strings; food_order.data converts them once into CatalogItem values.
MENU_ITEM_ROWS: list[dict[str, object]] = [
    {
        "id": "1",
        "name": "Margherita Pizza",
        "description": "Classic Italian pizza with fresh tomatoes, mozzarella di bufala, fresh basil and olive oil",
        "price": "16.99",
        "image": _IMG.format(315755, 315755),
        "category": "Pizza",
        "available": True,
        "preparation_time": 15,
        "ingredients": ["Tomato sauce", "Mozzarella", "Fresh basil", "Olive oil"],
        "nutritional_info": {"calories": 280, "protein": 12, "carbs": 36, "fat": 10},
    },
    {
        "id": "2",
        "name": "Truffle Mushroom Pizza",
        "description": "Wild mushrooms, truffle oil, caramelized onions and aged parmesan on a thin crust",
        "price": "24.99",
        "image": _IMG.format(1146760, 1146760),
        "category": "Pizza",
        "available": True,
        "preparation_time": 18,
        "ingredients": ["Wild mushrooms", "Truffle oil", "Caramelized onions", "Parmesan"],
        "nutritional_info": {"calories": 320, "protein": 14, "carbs": 38, "fat": 14},
    },
    {
        "id": "3",
        "name": "Gourmet Chicken Burger",
        "description": "Grilled chicken breast with avocado, bacon, aged cheddar and chipotle mayo on brioche",
        "price": "18.99",
        "image": _IMG.format(1639557, 1639557),
        "category": "Burgers",
        "available": True,
        "preparation_time": 12,
        "ingredients": ["Chicken breast", "Avocado", "Bacon", "Cheddar", "Chipotle mayo"],
        "nutritional_info": {"calories": 580, "protein": 35, "carbs": 42, "fat": 28},
    },
    {
        "id": "4",
        "name": "Wagyu Beef Burger",
        "description": "Wagyu beef patty with caramelized onions, swiss cheese, arugula and truffle aioli",
        "price": "28.99",
        "image": _IMG.format(1556909, 1556909),
        "category": "Burgers",
        "available": True,
        "preparation_time": 15,
        "ingredients": ["Wagyu beef", "Swiss cheese", "Arugula", "Truffle aioli"],
        "nutritional_info": {"calories": 650, "protein": 42, "carbs": 38, "fat": 35},
    },
    {
        "id": "5",
        "name": "Mediterranean Caesar Salad",
        "description": "Romaine hearts with house caesar dressing, parmesan, herb croutons and grilled chicken",
        "price": "14.99",
        "image": _IMG.format(1059905, 1059905),
        "category": "Salads",
        "available": True,
        "preparation_time": 8,
        "ingredients": ["Romaine lettuce", "Parmesan", "Croutons", "Caesar dressing"],
        "nutritional_info": {"calories": 280, "protein": 25, "carbs": 18, "fat": 15},
    },
    {
        "id": "6",
        "name": "Quinoa Power Bowl",
        "description": "Quinoa, roasted vegetables, avocado, chickpeas, feta and tahini dressing",
        "price": "16.99",
        "image": _IMG.format(1640777, 1640777),
        "category": "Salads",
        "available": True,
        "preparation_time": 10,
        "ingredients": ["Quinoa", "Roasted vegetables", "Avocado", "Chickpeas", "Feta"],
        "nutritional_info": {"calories": 420, "protein": 18, "carbs": 52, "fat": 18},
    },
    {
        "id": "7",
        "name": "Truffle Carbonara",
        "description": "Handmade fettuccine with pancetta, egg yolk, pecorino romano and truffle oil",
        "price": "22.99",
        "image": _IMG.format(1279330, 1279330),
        "category": "Pasta",
        "available": True,
        "preparation_time": 14,
        "ingredients": ["Fettuccine", "Pancetta", "Pecorino romano", "Truffle oil"],
        "nutritional_info": {"calories": 520, "protein": 22, "carbs": 58, "fat": 24},
    },
    {
        "id": "8",
        "name": "Seafood Linguine",
        "description": "Linguine with prawns, scallops, mussels, cherry tomatoes and white wine",
        "price": "26.99",
        "image": _IMG.format(1437267, 1437267),
        "category": "Pasta",
        "available": True,
        "preparation_time": 16,
        "ingredients": ["Linguine", "Prawns", "Scallops", "Mussels", "White wine"],
        "nutritional_info": {"calories": 480, "protein": 32, "carbs": 54, "fat": 16},
    },
    {
        "id": "9",
        "name": "Pan-Seared Salmon",
        "description": "Atlantic salmon with lemon herb butter, roasted asparagus and garlic mash",
        "price": "24.99",
        "image": _IMG.format(1833336, 1833336),
        "category": "Seafood",
        "available": True,
        "preparation_time": 18,
        "ingredients": ["Atlantic salmon", "Lemon herb butter", "Asparagus", "Potatoes"],
        "nutritional_info": {"calories": 450, "protein": 38, "carbs": 28, "fat": 22},
    },
    {
        "id": "10",
        "name": "Grilled Sea Bass",
        "description": "Mediterranean sea bass with olive tapenade, roasted vegetables and saffron rice",
        "price": "28.99",
        "image": _IMG.format(725991, 725991),
        "category": "Seafood",
        "available": False,
        "preparation_time": 20,
        "ingredients": ["Sea bass", "Olive tapenade", "Roasted vegetables", "Saffron rice"],
        "nutritional_info": {"calories": 380, "protein": 35, "carbs": 32, "fat": 14},
    },
    {
        "id": "11",
        "name": "Chocolate Lava Cake",
        "description": "Warm chocolate cake with a molten center, vanilla ice cream and fresh berries",
        "price": "9.99",
        "image": _IMG.format(291528, 291528),
        "category": "Desserts",
        "available": True,
        "preparation_time": 12,
        "ingredients": ["Dark chocolate", "Vanilla ice cream", "Fresh berries"],
        "nutritional_info": {"calories": 420, "protein": 6, "carbs": 52, "fat": 22},
    },
    {
        "id": "12",
        "name": "Tiramisu",
        "description": "Mascarpone, espresso-soaked ladyfingers and cocoa powder",
        "price": "8.99",
        "image": _IMG.format(6880219, 6880219),
        "category": "Desserts",
        "available": True,
        "preparation_time": 5,
        "ingredients": ["Mascarpone", "Ladyfingers", "Espresso", "Cocoa powder"],
        "nutritional_info": {"calories": 320, "protein": 8, "carbs": 28, "fat": 20},
    },
]

CATEGORY_BADGE_STYLES: dict[str, str] = {
    "Pizza": "bold #ffffff on #b23a48",
    "Burgers": "bold #1f1300 on #e0a030",
    "Salads": "bold #0b1f0f on #5fbf72",
    "Pasta": "bold #1f1300 on #f2d17c",
    "Seafood": "bold #ffffff on #2f6db5",
    "Desserts": "bold #ffffff on #8a4fbf",
}

PAYMENT_METHOD_LABELS: dict[str, str] = {
    "card": "Card",
    "cash": "Cash",
    "digital": "Digital wallet",
}
