"""
Services layer - pure business logic, no Streamlit dependencies.
"""

from services.audio_service import AudioService, EdgeTTSNarrator, Narration, Narrator
from services.recipe_filter import filter_recipes
from services.recipe_session import RecipeSession
from services.shopping_list_service import ShoppingList
from services.vision_service import (
    ClaudeVisionGateway,
    GatewayFailure,
    GatewayFailureKind,
    InferenceGateway,
)

__all__ = [
    "AudioService",
    "EdgeTTSNarrator",
    "Narration",
    "Narrator",
    "filter_recipes",
    "RecipeSession",
    "ShoppingList",
    "ClaudeVisionGateway",
    "GatewayFailure",
    "GatewayFailureKind",
    "InferenceGateway",
]
