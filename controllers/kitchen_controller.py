"""
Kitchen Controller - keeps the recipe session alive across Streamlit reruns.

This controller handles:
- Session state initialization (one RecipeSession per browser session)
- Wiring the Claude vision gateway and the edge-tts narrator
- Validating uploads before they reach the gateway
- Voice preferences for narration
- Handing finished narration audio to the view exactly once
"""

import asyncio
import logging
from typing import Optional

import streamlit as st

from config.settings import get_settings
from models.entities import DietaryFilter, Recipe
from models.view_state import ViewMode
from models.voice import (
    rate_to_slider_value,
    slider_value_to_rate,
)
from services.audio_service import AudioService, EdgeTTSNarrator, Narrator
from services.recipe_filter import count_by_filter
from services.recipe_session import RecipeSession
from services.vision_service import ClaudeVisionGateway, InferenceGateway

logger = logging.getLogger(__name__)


SUPPORTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")


class KitchenController:
    """Controller for the upload, results and cooking flow."""

    def __init__(
        self,
        gateway: Optional[InferenceGateway] = None,
        narrator: Optional[Narrator] = None,
    ):
        self.settings = get_settings()
        self._init_session_state(gateway, narrator)

    def _init_session_state(self, gateway, narrator):
        """Initialize session state if not already set."""
        if "kitchen" not in st.session_state:
            st.session_state.kitchen = {
                "session": RecipeSession(
                    gateway=gateway or ClaudeVisionGateway(settings=self.settings),
                    narrator=narrator or EdgeTTSNarrator(
                        voice=self.settings.voice_name,
                        rate=self.settings.voice_rate,
                    ),
                ),
                "shopping_open": False,
                "played_narration": None,
            }

    @property
    def session(self) -> RecipeSession:
        return st.session_state.kitchen["session"]

    # Session state accessors
    def get_view_mode(self) -> ViewMode:
        return self.session.view_mode

    def is_loading(self) -> bool:
        return self.session.is_loading

    def get_filtered_recipes(self) -> list[Recipe]:
        return self.session.filtered_recipes

    def get_detected_ingredients(self) -> list[str]:
        return list(self.session.detected_ingredients)

    def get_dietary_filter(self) -> DietaryFilter:
        return self.session.dietary_filter

    def get_filter_counts(self) -> dict[DietaryFilter, int]:
        """Matching recipe count per filter."""
        return count_by_filter(self.session.recipes)

    def get_selected_recipe(self) -> Optional[Recipe]:
        return self.session.selected_recipe

    def get_step_index(self) -> Optional[int]:
        return self.session.cooking_step_index

    def is_finished(self) -> bool:
        return self.session.is_finished

    def get_shopping_list(self) -> list[str]:
        return self.session.shopping_list.items

    def get_shopping_list_grouped(self) -> dict[str, list[str]]:
        return self.session.shopping_list.grouped_by_category()

    def get_shopping_list_text(self) -> str:
        return self.session.shopping_list.to_text()

    def is_shopping_list_open(self) -> bool:
        return st.session_state.kitchen["shopping_open"]

    def toggle_shopping_list(self):
        st.session_state.kitchen["shopping_open"] = not self.is_shopping_list_open()

    # Image analysis
    def validate_upload(self, image_bytes: bytes, media_type: Optional[str]) -> Optional[str]:
        """Return an error message if the upload cannot be analyzed."""
        if not image_bytes:
            return "The uploaded file is empty."
        if not media_type or not media_type.startswith("image/"):
            return "Please upload an image file."
        if media_type not in SUPPORTED_IMAGE_TYPES:
            return "Please upload a JPEG, PNG, WebP or GIF image."
        if len(image_bytes) > self.settings.max_image_bytes:
            return f"Image is too large. The limit is {self.settings.max_image_mb:g} MB."
        return None

    def submit_image(self, image_bytes: bytes, media_type: Optional[str]) -> tuple[bool, Optional[str]]:
        """
        Analyze an uploaded fridge photo.

        Returns (success, error_message)
        """
        error = self.validate_upload(image_bytes, media_type)
        if error:
            logger.info(f"Rejected upload: {error}")
            return False, error

        success = asyncio.run(self.session.submit_image(image_bytes, media_type))
        if not success:
            return False, self.session.last_error
        return True, None

    # Filtering
    def set_dietary_filter(self, dietary_filter: DietaryFilter):
        self.session.set_dietary_filter(dietary_filter)

    def clear_filter(self):
        self.session.set_dietary_filter(DietaryFilter.ALL)

    # Cook-through
    def start_cooking(self, recipe_id: str) -> bool:
        """
        Open the cook-through for a recipe.

        Returns True if the recipe exists.
        """
        return self.session.select_recipe(recipe_id)

    def next_step(self) -> bool:
        return self.session.advance_step()

    def previous_step(self) -> bool:
        return self.session.retreat_step()

    def repeat_step(self):
        self.session.repeat_narration()

    def close_cooking(self):
        self.session.close_cooking()

    def back_to_upload(self):
        self.session.reset_to_upload()

    def start_over(self):
        """
        Discard the session, as a page reload would.

        Recipes and the shopping list are dropped; the next controller
        built on rerun starts a fresh session.
        """
        session = self.session
        session.close()
        if hasattr(session.narrator, "shutdown"):
            session.narrator.shutdown()
        st.session_state.pop("kitchen", None)
        logger.info("Kitchen session discarded")

    # Shopping list
    def add_to_shopping_list(self, ingredient_name: str):
        self.session.add_to_shopping_list(ingredient_name)

    def remove_from_shopping_list(self, ingredient_name: str):
        self.session.remove_from_shopping_list(ingredient_name)

    def add_missing_to_shopping_list(self, recipe_id: str) -> int:
        return self.session.add_missing_ingredients(recipe_id)

    def is_in_shopping_list(self, ingredient_name: str) -> bool:
        return ingredient_name in self.session.shopping_list

    # Narration
    def get_pending_audio(self) -> Optional[bytes]:
        """
        Get audio for the latest narration, once.

        Returns None if there is nothing new to play.
        """
        narration = getattr(self.session.narrator, "current", None)
        state = st.session_state.kitchen
        if narration is None or narration is state["played_narration"]:
            return None

        audio = narration.audio(timeout=self.settings.narration_timeout_seconds)
        state["played_narration"] = narration
        return audio

    def is_speaking(self) -> bool:
        return bool(getattr(self.session.narrator, "is_speaking", False))

    def get_available_voices(self) -> dict[str, str]:
        return AudioService.get_available_voices()

    def get_voice_name(self) -> str:
        return getattr(self.session.narrator, "voice", self.settings.voice_name)

    def set_voice_name(self, voice_name: str):
        """Set the narration voice for the next utterance."""
        if hasattr(self.session.narrator, "voice"):
            self.session.narrator.voice = voice_name

    def get_speed_slider_value(self) -> int:
        rate = getattr(self.session.narrator, "rate", self.settings.voice_rate)
        return rate_to_slider_value(rate)

    def set_speed_from_slider(self, slider_value: int):
        if hasattr(self.session.narrator, "rate"):
            self.session.narrator.rate = slider_value_to_rate(slider_value)
