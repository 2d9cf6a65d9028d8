"""
Shopping list drawer component.
"""

import streamlit as st
from typing import Callable


def render_shopping_drawer(
    items: dict[str, list[str]],
    export_text: str,
    on_remove: Callable[[str], None],
):
    """
    Render the shopping list in the sidebar.

    Args:
        items: Ingredient names grouped by store section
        export_text: Plain-text version of the list for copying
        on_remove: Callback when an item is removed
    """
    with st.sidebar:
        st.markdown("### Shopping List")
        st.markdown("---")

        if not items:
            st.caption("Your list is empty.")
            st.caption("Add missing ingredients from recipes.")
            return

        for category, names in items.items():
            st.markdown(f"**{category}**")
            for name in names:
                col1, col2 = st.columns([4, 1])
                with col1:
                    st.write(name)
                with col2:
                    if st.button("x", key=f"remove_{name}", help="Remove from list"):
                        on_remove(name)
                        st.rerun()

        st.markdown("---")
        st.markdown("**Copy your list**")
        st.code(export_text, language=None)
