"""Fixed lookup tables for categorisation and suggestions."""

from __future__ import annotations

# Keyword -> category. First keyword contained in the item name wins.
CATEGORY_MAP: dict[str, str] = {
    # Fruits
    "apple": "Fruits",
    "banana": "Fruits",
    "mango": "Fruits",
    "orange": "Fruits",
    "grape": "Fruits",
    "strawberry": "Fruits",
    "watermelon": "Fruits",
    "pineapple": "Fruits",
    "lemon": "Fruits",
    "kiwi": "Fruits",
    # Vegetables
    "onion": "Vegetables",
    "tomato": "Vegetables",
    "potato": "Vegetables",
    "carrot": "Vegetables",
    "spinach": "Vegetables",
    "broccoli": "Vegetables",
    "cucumber": "Vegetables",
    "garlic": "Vegetables",
    "ginger": "Vegetables",
    "pepper": "Vegetables",
    # Dairy
    "milk": "Dairy",
    "butter": "Dairy",
    "cheese": "Dairy",
    "yogurt": "Dairy",
    "cream": "Dairy",
    "paneer": "Dairy",
    "curd": "Dairy",
    # Bakery
    "bread": "Bakery",
    "bun": "Bakery",
    "cake": "Bakery",
    "biscuit": "Bakery",
    "cookie": "Bakery",
    # Beverages
    "juice": "Beverages",
    "water": "Beverages",
    "soda": "Beverages",
    "coffee": "Beverages",
    "tea": "Beverages",
    "cola": "Beverages",
    # Grains & Staples
    "rice": "Grains & Staples",
    "wheat": "Grains & Staples",
    "flour": "Grains & Staples",
    "oats": "Grains & Staples",
    "pasta": "Grains & Staples",
    "noodles": "Grains & Staples",
    "dal": "Grains & Staples",
    "lentil": "Grains & Staples",
    # Personal Care
    "toothpaste": "Personal Care",
    "shampoo": "Personal Care",
    "soap": "Personal Care",
    "lotion": "Personal Care",
    "deodorant": "Personal Care",
    "razor": "Personal Care",
    # Cleaning
    "detergent": "Cleaning",
    "bleach": "Cleaning",
    "mop": "Cleaning",
    "sponge": "Cleaning",
    "dishwash": "Cleaning",
}

DEFAULT_CATEGORY = "General"

FREQUENTLY_USED: tuple[tuple[str, str], ...] = (
    ("milk", "Dairy"),
    ("bread", "Bakery"),
    ("eggs", "General"),
    ("rice", "Grains & Staples"),
    ("onion", "Vegetables"),
    ("tomato", "Vegetables"),
    ("banana", "Fruits"),
    ("butter", "Dairy"),
    ("sugar", "Grains & Staples"),
    ("salt", "Grains & Staples"),
    ("cooking oil", "General"),
    ("toothpaste", "Personal Care"),
)

SUBSTITUTES: dict[str, list[str]] = {
    "milk": ["almond milk", "oat milk", "soy milk"],
    "butter": ["margarine", "coconut oil"],
    "sugar": ["honey", "jaggery", "stevia"],
    "bread": ["whole wheat bread", "multigrain bread"],
    "rice": ["brown rice", "quinoa"],
    "flour": ["almond flour", "oat flour"],
    "cola": ["sparkling water", "lemon soda"],
    "cheese": ["tofu", "paneer"],
    "cream": ["coconut cream", "yogurt"],
    "pasta": ["whole wheat pasta", "zucchini noodles"],
}

# Month index 0 = January
SEASONAL_BY_MONTH: dict[int, list[str]] = {
    0: ["peas", "carrot", "strawberry"],
    1: ["mango", "strawberry", "beet"],
    2: ["watermelon", "mango", "cucumber"],
    3: ["watermelon", "lemon", "mango"],
    4: ["watermelon", "lychee", "peach"],
    5: ["cherry", "plum", "corn"],
    6: ["peach", "blueberry", "zucchini"],
    7: ["peach", "tomato", "sweet corn"],
    8: ["apple", "grape", "spinach"],
    9: ["apple", "pear", "pumpkin"],
    10: ["orange", "sweet potato", "pomegranate"],
    11: ["orange", "pea", "carrot"],
}

HEALTHY_OPTIONS: tuple[str, ...] = (
    "spinach",
    "broccoli",
    "quinoa",
    "kale",
    "almonds",
    "walnuts",
    "greek yogurt",
    "lentils",
    "sweet potato",
    "blueberries",
    "avocado",
    "chia seeds",
)

# (category, cue keywords, items, message), checked in order
GENERIC_CATEGORIES: tuple[tuple[str, tuple[str, ...], list[str], str], ...] = (
    (
        "staples",
        ("basic", "staple"),
        ["rice", "flour", "sugar", "salt", "cooking oil"],
        "Here are some basic grocery items you may need",
    ),
    (
        "household",
        ("household", "cleaning"),
        ["detergent", "soap", "toothpaste", "toilet paper"],
        "Here are some common household items for your needs",
    ),
    (
        "essentials",
        ("daily need", "essential", "groceries", "grocery", "food"),
        ["rice", "milk", "eggs", "bread", "cooking oil"],
        "Here are some essential groceries you may need",
    ),
)

SUPPORTED_LANGUAGES: tuple[tuple[str, str], ...] = (
    ("en-US", "English"),
    ("hi-IN", "Hindi"),
    ("es-ES", "Spanish"),
    ("fr-FR", "French"),
    ("de-DE", "German"),
    ("ar-SA", "Arabic"),
)
