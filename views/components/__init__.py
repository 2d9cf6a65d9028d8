"""
Reusable UI components.
"""

from views.components.audio import render_audio_playback
from views.components.cooking_panel import render_cooking_panel
from views.components.recipe_card import render_recipe_card
from views.components.voice_settings import render_voice_settings

# Sidebar components
from views.components.sidebar import (
    render_filter_sidebar,
    render_shopping_drawer,
)

__all__ = [
    "render_audio_playback",
    "render_cooking_panel",
    "render_recipe_card",
    "render_voice_settings",
    # Sidebar
    "render_filter_sidebar",
    "render_shopping_drawer",
]
