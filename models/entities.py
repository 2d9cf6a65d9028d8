"""
Domain entities for fridge analysis results.

These models describe what the vision gateway produces and what the
recipe session holds. They are immutable once created:
- Tuples instead of lists for ordered collections
- Frozen pydantic models so fields cannot be reassigned

Relationships:
    AnalysisResult (1) ──┬──> (*) detected ingredient names
                         └──> (*) Recipe ──> (*) Ingredient
                                        └──> (*) step text
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Difficulty(str, Enum):
    """How demanding a recipe is to cook."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class DietaryFilter(str, Enum):
    """Dietary filters offered on the results page."""
    ALL = "All"
    VEGETARIAN = "Vegetarian"
    VEGAN = "Vegan"
    KETO = "Keto"
    GLUTEN_FREE = "Gluten-Free"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "DietaryFilter":
        """
        Look up a filter by its display label, ignoring case.

        Raises:
            ValueError: If no filter has that label
        """
        wanted = label.strip().casefold()
        for member in cls:
            if member.value.casefold() == wanted:
                return member
        raise ValueError(f"Unknown dietary filter: {label!r}")


class Ingredient(BaseModel):
    """
    An ingredient required by a recipe.

    The quantity is free text ("2 cups", "a pinch") because the model
    describes amounts the way a cook would say them.
    """
    name: str = Field(..., min_length=1, description="Ingredient name")
    quantity: str = Field("", description="Amount needed, as free text")
    is_missing: bool = Field(
        False,
        description="True when the recipe needs it but it was not seen in the photo",
    )

    class Config:
        frozen = True


class Recipe(BaseModel):
    """
    A recipe proposed for the photographed ingredients.

    The id is None while the recipe is still a raw gateway record; the
    recipe session assigns a session-unique id on ingestion.
    """
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: str = ""
    difficulty: Difficulty
    prep_time: str = Field("", description="e.g. '30 mins'")
    calories: int = Field(..., ge=0)
    tags: tuple[str, ...] = Field(default_factory=tuple, description="Dietary labels")
    ingredients: tuple[Ingredient, ...] = Field(default_factory=tuple)
    steps: tuple[str, ...] = Field(default_factory=tuple)

    class Config:
        frozen = True

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        # Models sometimes number their recipes
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def missing_ingredients(self) -> list[Ingredient]:
        """Ingredients the user still has to buy."""
        return [i for i in self.ingredients if i.is_missing]

    @property
    def missing_count(self) -> int:
        return len(self.missing_ingredients)

    def has_tag(self, label: str) -> bool:
        """Check for a dietary tag, ignoring case."""
        wanted = label.casefold()
        return any(tag.casefold() == wanted for tag in self.tags)


class AnalysisResult(BaseModel):
    """Everything the gateway learned from one photo."""
    detected_ingredients: tuple[str, ...]
    recipes: tuple[Recipe, ...]

    class Config:
        frozen = True
