"""
Recipe card component for the suggestions grid.
"""

import streamlit as st

from models.entities import Recipe


DIFFICULTY_ICONS = {
    "Easy": "🟢",
    "Medium": "🟠",
    "Hard": "🔴",
}


def render_recipe_card(recipe: Recipe) -> bool:
    """
    Render one suggested recipe.

    Args:
        recipe: The recipe to show

    Returns:
        True if the user chose to cook this recipe
    """
    with st.container(border=True):
        st.markdown(f"### {recipe.name}")

        tags = list(recipe.tags)
        if tags:
            shown = " · ".join(tags[:2])
            extra = f" +{len(tags) - 2}" if len(tags) > 2 else ""
            st.caption(f"{shown}{extra}")

        st.write(recipe.description)

        icon = DIFFICULTY_ICONS.get(recipe.difficulty.value, "")
        st.markdown(
            f"{icon} {recipe.difficulty.value} | ⏱ {recipe.prep_time or '?'} | "
            f"🔥 {recipe.calories} kcal"
        )

        missing = recipe.missing_count
        if missing:
            st.warning(f"Missing {missing} ingredient{'s' if missing != 1 else ''}")

        return st.button("Cook this", key=f"cook_{recipe.id}", type="primary", use_container_width=True)
