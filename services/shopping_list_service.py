"""
Shopping List Service - the ingredients the user still has to buy.

The list is an ordered set of ingredient names:
- Adding a name that is already present changes nothing
- Removing a name that is absent changes nothing
- Names keep the order they were added in, for display

Items can also be grouped by store section for the drawer and for the
plain-text export.
"""

from collections import defaultdict
from typing import Iterator


# Ingredient category mappings
INGREDIENT_CATEGORIES = {
    # Produce
    "onion": "Produce", "garlic": "Produce", "tomato": "Produce",
    "potato": "Produce", "carrot": "Produce", "celery": "Produce",
    "lettuce": "Produce", "spinach": "Produce", "kale": "Produce",
    "bell pepper": "Produce", "cucumber": "Produce", "broccoli": "Produce",
    "mushroom": "Produce", "zucchini": "Produce", "squash": "Produce",
    "lemon": "Produce", "lime": "Produce", "apple": "Produce",
    "banana": "Produce", "orange": "Produce", "avocado": "Produce",
    "herbs": "Produce", "cilantro": "Produce", "parsley": "Produce",
    "basil": "Produce", "thyme": "Produce", "rosemary": "Produce",
    "ginger": "Produce", "scallion": "Produce", "green onion": "Produce",

    # Meat & Seafood
    "chicken": "Meat & Seafood", "beef": "Meat & Seafood",
    "pork": "Meat & Seafood", "sausage": "Meat & Seafood",
    "bacon": "Meat & Seafood", "ham": "Meat & Seafood",
    "turkey": "Meat & Seafood", "lamb": "Meat & Seafood",
    "fish": "Meat & Seafood", "salmon": "Meat & Seafood",
    "shrimp": "Meat & Seafood", "tuna": "Meat & Seafood",

    # Dairy & Eggs
    "milk": "Dairy & Eggs", "cream": "Dairy & Eggs",
    "butter": "Dairy & Eggs", "cheese": "Dairy & Eggs",
    "yogurt": "Dairy & Eggs", "egg": "Dairy & Eggs",

    # Bakery
    "bread": "Bakery", "tortilla": "Bakery", "bun": "Bakery",
    "pita": "Bakery", "naan": "Bakery",

    # Grains & Pasta
    "rice": "Grains & Pasta", "pasta": "Grains & Pasta",
    "noodle": "Grains & Pasta", "quinoa": "Grains & Pasta",
    "oat": "Grains & Pasta", "lentil": "Grains & Pasta",

    # Canned & Jarred
    "tomato sauce": "Canned & Jarred", "tomato paste": "Canned & Jarred",
    "broth": "Canned & Jarred", "stock": "Canned & Jarred",
    "coconut milk": "Canned & Jarred", "beans": "Canned & Jarred",

    # Pantry Staples
    "flour": "Pantry", "sugar": "Pantry", "salt": "Pantry",
    "black pepper": "Pantry", "oil": "Pantry", "vinegar": "Pantry",
    "soy sauce": "Pantry", "honey": "Pantry", "maple syrup": "Pantry",
    "baking powder": "Pantry", "baking soda": "Pantry", "cornstarch": "Pantry",

    # Spices
    "cumin": "Spices", "paprika": "Spices", "oregano": "Spices",
    "cinnamon": "Spices", "nutmeg": "Spices", "cayenne": "Spices",
    "chili powder": "Spices", "curry": "Spices", "turmeric": "Spices",
}

# Category sort order for shopping flow
CATEGORY_ORDER = {
    "Produce": 1,
    "Meat & Seafood": 2,
    "Dairy & Eggs": 3,
    "Bakery": 4,
    "Grains & Pasta": 5,
    "Canned & Jarred": 6,
    "Pantry": 7,
    "Spices": 8,
    "Other": 99,
}


def categorize_ingredient(ingredient_name: str) -> str:
    """Determine the store category for an ingredient."""
    name_lower = ingredient_name.lower()

    # Longest keyword first so "coconut milk" beats "milk"
    for keyword in sorted(INGREDIENT_CATEGORIES, key=len, reverse=True):
        if keyword in name_lower:
            return INGREDIENT_CATEGORIES[keyword]

    return "Other"


class ShoppingList:
    """Ordered, duplicate-free list of ingredient names."""

    def __init__(self):
        # dict keys keep insertion order and reject duplicates
        self._items: dict[str, None] = {}

    def add(self, name: str) -> bool:
        """Add an ingredient. Returns True if it was not already listed."""
        name = name.strip()
        if not name or name in self._items:
            return False
        self._items[name] = None
        return True

    def remove(self, name: str) -> bool:
        """Remove an ingredient. Returns True if it was listed."""
        return self._items.pop(name.strip(), False) is None

    def clear(self):
        self._items.clear()

    @property
    def items(self) -> list[str]:
        return list(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def grouped_by_category(self) -> dict[str, list[str]]:
        """Items grouped by store section, sections in shopping order."""
        grouped = defaultdict(list)
        for name in self._items:
            grouped[categorize_ingredient(name)].append(name)
        return {
            category: grouped[category]
            for category in sorted(grouped, key=lambda c: CATEGORY_ORDER.get(c, 99))
        }

    def to_text(self, title: str = "Shopping List") -> str:
        """Plain-text checklist for copying into a notes app."""
        if not self._items:
            return f"{title}\n(empty)"

        lines = [title]
        for category, names in self.grouped_by_category().items():
            lines.append("")
            lines.append(f"{category}:")
            lines.extend(f"[ ] {name}" for name in names)
        return "\n".join(lines)
