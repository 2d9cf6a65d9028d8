"""
Shared fixtures: a scriptable gateway, a recording narrator and sample recipes.
"""

import pytest

from models.entities import AnalysisResult, Difficulty, Ingredient, Recipe
from services.audio_service import Narration
from services.recipe_session import RecipeSession
from services.vision_service import GatewayFailure, GatewayFailureKind


class FakeGateway:
    """Returns queued outcomes in order; raises queued exceptions."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def analyze(self, image_bytes, media_type="image/jpeg"):
        self.calls.append((image_bytes, media_type))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingNarrator:
    """Narrator that remembers what it was asked to say."""

    def __init__(self):
        self.spoken: list[str] = []
        self.cancel_count = 0
        self.current = None

    def speak(self, text: str) -> Narration:
        if self.current is not None:
            self.current.cancel()
        self.spoken.append(text)
        self.current = Narration(text)
        return self.current

    def cancel(self):
        self.cancel_count += 1
        if self.current is not None:
            self.current.cancel()
        self.current = None


def make_recipe(name="Omelette", steps=("Crack eggs", "Cook"), tags=(), ingredients=None, **kwargs):
    if ingredients is None:
        ingredients = (
            Ingredient(name="eggs", quantity="3", is_missing=False),
            Ingredient(name="salt", quantity="a pinch", is_missing=True),
        )
    return Recipe(
        name=name,
        description=kwargs.pop("description", f"A simple {name.lower()}"),
        difficulty=kwargs.pop("difficulty", Difficulty.EASY),
        prep_time=kwargs.pop("prep_time", "10 mins"),
        calories=kwargs.pop("calories", 250),
        tags=tags,
        ingredients=ingredients,
        steps=steps,
        **kwargs,
    )


@pytest.fixture
def omelette_result():
    return AnalysisResult(
        detected_ingredients=("eggs", "cheese"),
        recipes=(make_recipe(),),
    )


@pytest.fixture
def mixed_result():
    return AnalysisResult(
        detected_ingredients=("eggs", "spinach", "bacon"),
        recipes=(
            make_recipe("Spinach Frittata", tags=("Vegetarian", "Gluten-Free")),
            make_recipe("Bacon Eggs", tags=("Keto",)),
            make_recipe("Tofu Scramble", tags=("vegan", "Vegetarian")),
            make_recipe("Toast", tags=()),
        ),
    )


@pytest.fixture
def narrator():
    return RecordingNarrator()


@pytest.fixture
def make_session(narrator):
    def _make(*outcomes):
        return RecipeSession(gateway=FakeGateway(*outcomes), narrator=narrator)
    return _make


@pytest.fixture
def transport_failure():
    return GatewayFailure(GatewayFailureKind.TRANSPORT, "connection reset")
