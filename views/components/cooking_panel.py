"""
Cooking panel component - ingredients overview, steps and finish screen.

Provides:
- Ingredient checklist with "Add to List" for missing items
- One step at a time with replay of the narration
- Back / Next controls and a progress indicator
- Voice selector and speed slider in the sidebar
"""

import streamlit as st
from typing import Callable, Optional

from models.entities import Recipe
from models.view_state import INGREDIENTS_OVERVIEW
from views.components.audio import render_audio_playback
from views.components.voice_settings import render_voice_settings


def render_cooking_panel(
    recipe: Recipe,
    step_index: int,
    is_finished: bool,
    pending_audio: Optional[bytes],
    is_speaking: bool,
    in_shopping_list: Callable[[str], bool],
    on_add_to_list: Callable[[str], None],
    on_add_all_missing: Callable[[], int],
    on_next: Callable[[], bool],
    on_previous: Callable[[], bool],
    on_repeat: Callable[[], None],
    on_close: Callable[[], None],
    voices: dict[str, str],
    current_voice: str,
    current_speed: int,
    on_voice_change: Callable[[str], None],
    on_speed_change: Callable[[int], None],
):
    """
    Render the cook-through for a recipe.

    Args:
        recipe: Recipe being cooked
        step_index: -1 for ingredients, step number, or len(steps) when finished
        is_finished: True once the last step is done
        pending_audio: Narration audio to autoplay (if any)
        is_speaking: True while narration audio is being prepared
        in_shopping_list: Checks whether an ingredient is already listed
        on_add_to_list: Callback to add a missing ingredient
        on_add_all_missing: Callback to add every missing ingredient
        on_next / on_previous: Step navigation callbacks
        on_repeat: Callback to read the current step again
        on_close: Callback to leave cooking mode
    """
    with st.sidebar:
        st.markdown(f"### {recipe.name}")
        render_voice_settings(
            voices=voices,
            current_voice=current_voice,
            current_speed=current_speed,
            on_voice_change=on_voice_change,
            on_speed_change=on_speed_change,
        )

    header_col, close_col = st.columns([5, 1])
    with header_col:
        st.caption("COOKING MODE")
        st.markdown(f"## {recipe.name}")
    with close_col:
        if st.button("✕ Close", use_container_width=True):
            on_close()
            st.rerun()

    render_audio_playback(pending_audio)
    if is_speaking:
        st.caption("🔊 Preparing narration...")

    if step_index == INGREDIENTS_OVERVIEW:
        _render_ingredients(recipe, in_shopping_list, on_add_to_list, on_add_all_missing)
    elif is_finished:
        _render_finished(on_close)
        return
    else:
        _render_step(recipe, step_index, on_repeat)

    _render_controls(recipe, step_index, on_next, on_previous)


def _render_ingredients(
    recipe: Recipe,
    in_shopping_list: Callable[[str], bool],
    on_add_to_list: Callable[[str], None],
    on_add_all_missing: Callable[[], int],
):
    st.markdown("### Gather Ingredients")

    for idx, ingredient in enumerate(recipe.ingredients):
        name_col, action_col = st.columns([4, 1])
        with name_col:
            marker = "🟠" if ingredient.is_missing else "🟢"
            st.markdown(f"{marker} **{ingredient.name}**  \n{ingredient.quantity}")
        with action_col:
            if ingredient.is_missing:
                listed = in_shopping_list(ingredient.name)
                if st.button(
                    "Added" if listed else "Add to List",
                    key=f"add_{recipe.id}_{idx}",
                    disabled=listed,
                    use_container_width=True,
                ):
                    on_add_to_list(ingredient.name)
                    st.rerun()

    missing = recipe.missing_count
    if missing and not all(in_shopping_list(i.name) for i in recipe.missing_ingredients):
        if st.button(f"Add all {missing} missing to list", key=f"add_all_{recipe.id}"):
            on_add_all_missing()
            st.rerun()


def _render_step(recipe: Recipe, step_index: int, on_repeat: Callable[[], None]):
    st.markdown(f"**Step {step_index + 1} of {recipe.step_count}**")
    st.markdown(f"### {recipe.steps[step_index]}")

    if st.button("🔊 Read again", key=f"repeat_{recipe.id}_{step_index}"):
        on_repeat()
        st.rerun()


def _render_finished(on_close: Callable[[], None]):
    st.success("Bon Appétit! You've completed this recipe.")
    if st.button("Back to Recipes", type="primary"):
        on_close()
        st.rerun()


def _render_controls(
    recipe: Recipe,
    step_index: int,
    on_next: Callable[[], bool],
    on_previous: Callable[[], bool],
):
    st.markdown("---")

    # Ingredients overview counts as the first position
    st.progress((step_index + 1) / (recipe.step_count + 1))

    back_col, _, next_col = st.columns([1, 2, 1])
    with back_col:
        if st.button("← Back", disabled=step_index == INGREDIENTS_OVERVIEW, use_container_width=True):
            on_previous()
            st.rerun()

    with next_col:
        if step_index == INGREDIENTS_OVERVIEW:
            label = "Start Cooking"
        elif step_index == recipe.step_count - 1:
            label = "Finish"
        else:
            label = "Next Step"
        if st.button(f"{label} →", type="primary", use_container_width=True):
            on_next()
            st.rerun()
