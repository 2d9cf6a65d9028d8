"""
Dietary filtering of suggested recipes.
"""

from typing import Iterable

from models.entities import DietaryFilter, Recipe


def filter_recipes(recipes: Iterable[Recipe], dietary_filter: DietaryFilter) -> list[Recipe]:
    """
    Recipes matching a dietary filter, in their original order.

    A recipe matches when one of its tags equals the filter label,
    ignoring case. The All filter matches every recipe.
    """
    if dietary_filter is DietaryFilter.ALL:
        return list(recipes)
    return [r for r in recipes if r.has_tag(dietary_filter.label)]


def count_by_filter(recipes: Iterable[Recipe]) -> dict[DietaryFilter, int]:
    """Number of matching recipes for every filter, for the filter sidebar."""
    recipes = list(recipes)
    return {f: len(filter_recipes(recipes, f)) for f in DietaryFilter}
