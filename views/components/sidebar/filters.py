"""
Dietary filter sidebar component.
"""

import streamlit as st
from typing import Callable

from models.entities import DietaryFilter


def render_filter_sidebar(
    current: DietaryFilter,
    counts: dict[DietaryFilter, int],
    detected_ingredients: list[str],
    on_change: Callable[[DietaryFilter], None],
):
    """
    Render dietary filters and the ingredients detected in the photo.

    Args:
        current: Active filter
        counts: Matching recipe count per filter
        detected_ingredients: Ingredient names seen in the photo
        on_change: Callback when another filter is chosen
    """
    with st.sidebar:
        st.markdown("### Filters")

        options = list(DietaryFilter)
        selected = st.radio(
            "Dietary filter",
            options=options,
            index=options.index(current),
            format_func=lambda f: f"{f.label} ({counts.get(f, 0)})",
            label_visibility="collapsed",
        )
        if selected != current:
            on_change(selected)
            st.rerun()

        st.markdown("---")
        st.markdown("**Detected Items**")
        if detected_ingredients:
            st.markdown(" ".join(f"`{name}`" for name in detected_ingredients))
        else:
            st.caption("Nothing detected.")
