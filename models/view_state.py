"""
View state for the kitchen session.

The session is always in exactly one of three states. Cooking carries the
selected recipe and the step index, so a step index cannot exist outside
of a cooking session.

Step index values while cooking:
    -1              ingredients overview
    0 .. n-1        active step
    n               finished (n = number of steps)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


INGREDIENTS_OVERVIEW = -1


class ViewMode(str, Enum):
    UPLOAD = "upload"
    RESULTS = "results"
    COOKING = "cooking"


@dataclass(frozen=True)
class UploadState:
    mode = ViewMode.UPLOAD


@dataclass(frozen=True)
class ResultsState:
    mode = ViewMode.RESULTS


@dataclass(frozen=True)
class CookingState:
    """Cook-through of one recipe."""
    recipe_id: str
    step_index: int = INGREDIENTS_OVERVIEW
    mode = ViewMode.COOKING

    def at(self, step_index: int) -> "CookingState":
        return CookingState(recipe_id=self.recipe_id, step_index=step_index)


ViewState = Union[UploadState, ResultsState, CookingState]
