"""
Models Package - domain entities, view state and voice settings.
"""

from models.entities import (
    AnalysisResult,
    DietaryFilter,
    Difficulty,
    Ingredient,
    Recipe,
)
from models.view_state import (
    INGREDIENTS_OVERVIEW,
    CookingState,
    ResultsState,
    UploadState,
    ViewMode,
    ViewState,
)

__all__ = [
    # Entities
    "AnalysisResult",
    "DietaryFilter",
    "Difficulty",
    "Ingredient",
    "Recipe",
    # View state
    "INGREDIENTS_OVERVIEW",
    "CookingState",
    "ResultsState",
    "UploadState",
    "ViewMode",
    "ViewState",
]
