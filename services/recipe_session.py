"""
Recipe Session - state of one visit to the kitchen assistant.

This service is pure Python with no Streamlit dependencies. The gateway
and the narrator are injected, so the whole flow can be driven in tests
with fakes.

Flow:
1. submit_image() sends the photo to the gateway (Upload -> Results)
2. set_dietary_filter() narrows the suggested recipes
3. select_recipe() opens the cook-through (Results -> Cooking)
4. advance_step() / retreat_step() walk the steps, narrating each one
5. close_cooking() goes back to the results, reset_to_upload() to a new photo

The shopping list lives alongside and survives new analyses.
"""

import itertools
import logging
from typing import Optional, Union

from models.entities import AnalysisResult, DietaryFilter, Recipe
from models.view_state import (
    INGREDIENTS_OVERVIEW,
    CookingState,
    ResultsState,
    UploadState,
    ViewMode,
    ViewState,
)
from services.audio_service import Narration, Narrator
from services.recipe_filter import filter_recipes
from services.shopping_list_service import ShoppingList
from services.vision_service import (
    GatewayFailure,
    GatewayFailureKind,
    InferenceGateway,
)

logger = logging.getLogger(__name__)


class RecipeSession:
    """State container for upload, results and cook-through."""

    FAILURE_NOTICE = "Failed to analyze image. Please try again."
    INTRO_NARRATION = "Let's cook {name}. Here are the ingredients."
    STEP_NARRATION = "Step {number}. {text}"
    FINISHED_NARRATION = "Enjoy your meal!"

    def __init__(self, gateway: InferenceGateway, narrator: Narrator):
        self.gateway = gateway
        self.narrator = narrator

        self.view: ViewState = UploadState()
        self.recipes: tuple[Recipe, ...] = ()
        self.detected_ingredients: tuple[str, ...] = ()
        self.dietary_filter = DietaryFilter.ALL
        self.shopping_list = ShoppingList()
        self.last_error: Optional[str] = None

        self._recipe_ids = itertools.count(1)
        self._issued_ids: set[str] = set()
        self._submissions = itertools.count(1)
        self._pending_submission: Optional[int] = None

    # Read surface
    @property
    def view_mode(self) -> ViewMode:
        return self.view.mode

    @property
    def is_loading(self) -> bool:
        return self._pending_submission is not None

    @property
    def filtered_recipes(self) -> list[Recipe]:
        """Recipes matching the active dietary filter. Recomputed on every read."""
        return filter_recipes(self.recipes, self.dietary_filter)

    @property
    def selected_recipe(self) -> Optional[Recipe]:
        if isinstance(self.view, CookingState):
            return self.get_recipe(self.view.recipe_id)
        return None

    @property
    def selected_recipe_id(self) -> Optional[str]:
        if isinstance(self.view, CookingState):
            return self.view.recipe_id
        return None

    @property
    def cooking_step_index(self) -> Optional[int]:
        """Current step while cooking: -1 overview, len(steps) finished, else None."""
        if isinstance(self.view, CookingState):
            return self.view.step_index
        return None

    @property
    def is_finished(self) -> bool:
        recipe = self.selected_recipe
        return recipe is not None and self.cooking_step_index == recipe.step_count

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    # Image analysis
    async def submit_image(self, image_bytes: bytes, media_type: str = "image/jpeg") -> bool:
        """
        Analyze a fridge photo and replace the suggested recipes.

        Only the most recently submitted photo can change the session;
        results of earlier submissions that arrive later are discarded.

        Returns:
            True if the recipes were replaced
        """
        submission = next(self._submissions)
        self._pending_submission = submission
        self.last_error = None
        logger.info(f"Submitting image #{submission} ({len(image_bytes)} bytes, {media_type})")

        try:
            outcome = await self.gateway.analyze(image_bytes, media_type)
        except Exception as e:
            logger.exception(f"Gateway raised while analyzing image #{submission}")
            outcome = GatewayFailure(GatewayFailureKind.TRANSPORT, str(e))
        finally:
            # Cancellation skips the except clause but must still end loading
            superseded = submission != self._pending_submission
            if not superseded:
                self._pending_submission = None

        if superseded:
            logger.info(f"Discarding result of superseded image #{submission}")
            return False

        if isinstance(outcome, GatewayFailure):
            logger.warning(f"Image analysis failed ({outcome.kind.value}): {outcome.message}")
            self.last_error = self.FAILURE_NOTICE
            return False

        self._apply_analysis(outcome)
        return True

    def _apply_analysis(self, result: AnalysisResult):
        recipes = []
        for recipe in result.recipes:
            if not recipe.id or recipe.id in self._issued_ids:
                recipe = recipe.model_copy(update={"id": self._next_recipe_id()})
            self._issued_ids.add(recipe.id)
            recipes.append(recipe)

        if isinstance(self.view, CookingState):
            self.narrator.cancel()

        self.recipes = tuple(recipes)
        self.detected_ingredients = tuple(result.detected_ingredients)
        self.view = ResultsState()
        logger.info(
            f"Analysis applied: {len(self.detected_ingredients)} ingredients, "
            f"{len(self.recipes)} recipes"
        )

    def _next_recipe_id(self) -> str:
        while True:
            recipe_id = f"recipe-{next(self._recipe_ids)}"
            if recipe_id not in self._issued_ids:
                return recipe_id

    # Filtering
    def set_dietary_filter(self, dietary_filter: Union[DietaryFilter, str]):
        """
        Change the active dietary filter.

        Raises:
            ValueError: If given a label that is not a known filter
        """
        if not isinstance(dietary_filter, DietaryFilter):
            dietary_filter = DietaryFilter.from_label(dietary_filter)
        self.dietary_filter = dietary_filter

    # Cook-through
    def select_recipe(self, recipe_id: str) -> bool:
        """
        Start cooking a recipe from its ingredients overview.

        Returns True if the recipe exists.
        """
        if self.get_recipe(recipe_id) is None:
            logger.warning(f"Ignoring selection of unknown recipe {recipe_id!r}")
            return False

        self.view = CookingState(recipe_id=recipe_id, step_index=INGREDIENTS_OVERVIEW)
        self._narrate_current()
        return True

    def advance_step(self) -> bool:
        """Move to the next step, or to finished after the last one."""
        state = self.view
        if not isinstance(state, CookingState):
            logger.warning("advance_step called outside of cooking")
            return False

        step_count = self.selected_recipe.step_count
        if state.step_index >= step_count:
            return False

        if state.step_index < step_count - 1:
            next_index = state.step_index + 1
        else:
            next_index = step_count

        self.view = state.at(next_index)
        self._narrate_current()
        return True

    def retreat_step(self) -> bool:
        """Move back one step, down to the ingredients overview."""
        state = self.view
        if not isinstance(state, CookingState):
            logger.warning("retreat_step called outside of cooking")
            return False

        if state.step_index <= INGREDIENTS_OVERVIEW:
            return False

        self.view = state.at(state.step_index - 1)
        self._narrate_current()
        return True

    def repeat_narration(self) -> Optional[Narration]:
        """Read the current step aloud again."""
        if not isinstance(self.view, CookingState):
            return None
        return self._narrate_current()

    def close_cooking(self):
        """Leave the cook-through and return to the suggestions."""
        self.narrator.cancel()
        if isinstance(self.view, CookingState):
            self.view = ResultsState()

    def reset_to_upload(self):
        """Go back to the upload screen. Recipes and shopping list are kept."""
        self.narrator.cancel()
        self.view = UploadState()

    def close(self):
        """Release the session: stop any narration in progress."""
        self.narrator.cancel()

    def narration_text(self, recipe: Recipe, step_index: int) -> str:
        if step_index == INGREDIENTS_OVERVIEW:
            return self.INTRO_NARRATION.format(name=recipe.name)
        if step_index >= recipe.step_count:
            return self.FINISHED_NARRATION
        return self.STEP_NARRATION.format(number=step_index + 1, text=recipe.steps[step_index])

    def _narrate_current(self) -> Narration:
        text = self.narration_text(self.selected_recipe, self.cooking_step_index)
        return self.narrator.speak(text)

    # Shopping list
    def add_to_shopping_list(self, ingredient_name: str) -> bool:
        return self.shopping_list.add(ingredient_name)

    def remove_from_shopping_list(self, ingredient_name: str) -> bool:
        return self.shopping_list.remove(ingredient_name)

    def add_missing_ingredients(self, recipe_id: str) -> int:
        """Add every missing ingredient of a recipe. Returns how many were new."""
        recipe = self.get_recipe(recipe_id)
        if recipe is None:
            logger.warning(f"Ignoring shopping list update for unknown recipe {recipe_id!r}")
            return 0
        return sum(self.shopping_list.add(i.name) for i in recipe.missing_ingredients)
