"""
Kitchen View - UI for the fridge photo, suggestions and cook-through.

This view handles all rendering for the kitchen assistant.
It delegates business logic to the KitchenController.
"""

import streamlit as st

from controllers.kitchen_controller import KitchenController
from models.view_state import ViewMode
from views.components.cooking_panel import render_cooking_panel
from views.components.recipe_card import render_recipe_card
from views.components.sidebar import render_filter_sidebar, render_shopping_drawer


FEATURES = [
    ("Visual Recognition", "Instantly identifies ingredients from photos"),
    ("Dietary Filters", "Keto, Vegan, Gluten-Free options available"),
    ("Step-by-Step Cooking", "Voice-guided instructions for hands-free cooking"),
]


class KitchenView:
    """View for the whole kitchen assistant flow."""

    def __init__(self):
        self.controller = KitchenController()

    def render(self):
        """Main render method - displays appropriate UI based on state."""
        self._render_header()

        if self.controller.is_shopping_list_open():
            render_shopping_drawer(
                items=self.controller.get_shopping_list_grouped(),
                export_text=self.controller.get_shopping_list_text(),
                on_remove=self.controller.remove_from_shopping_list,
            )

        mode = self.controller.get_view_mode()
        if mode == ViewMode.COOKING and self.controller.get_selected_recipe():
            self._render_cooking()
        elif mode == ViewMode.UPLOAD:
            self._render_upload()
        else:
            self._render_results()

    def _render_header(self):
        title_col, cart_col = st.columns([5, 1])
        with title_col:
            st.title("🍳 Smart Fridge Chef")
        with cart_col:
            count = len(self.controller.get_shopping_list())
            label = f"🛒 {count}" if count else "🛒"
            if st.button(label, use_container_width=True, help="Shopping list"):
                self.controller.toggle_shopping_list()
                st.rerun()

    def _render_upload(self):
        """Render the photo upload screen."""
        st.markdown("## What's in your fridge?")
        st.markdown(
            "Upload a photo of your open fridge or ingredients. "
            "Claude will identify them and create recipes just for you."
        )

        uploaded = st.file_uploader(
            "Fridge photo",
            type=["jpg", "jpeg", "png", "webp", "gif"],
            disabled=self.controller.is_loading(),
            label_visibility="collapsed",
        )

        if uploaded is not None:
            st.image(uploaded, use_container_width=True)
            if st.button("Find Recipes", type="primary", use_container_width=True):
                with st.spinner("Analyzing your fridge... identifying ingredients & dreaming up recipes"):
                    success, error = self.controller.submit_image(uploaded.getvalue(), uploaded.type)
                if success:
                    st.rerun()
                else:
                    st.error(error)

        st.markdown("---")
        columns = st.columns(len(FEATURES))
        for col, (title, desc) in zip(columns, FEATURES):
            with col:
                st.markdown(f"**{title}**")
                st.caption(desc)

    def _render_results(self):
        """Render suggested recipes with the filter sidebar."""
        render_filter_sidebar(
            current=self.controller.get_dietary_filter(),
            counts=self.controller.get_filter_counts(),
            detected_ingredients=self.controller.get_detected_ingredients(),
            on_change=self.controller.set_dietary_filter,
        )

        back_col, reset_col, _ = st.columns([1, 1, 3])
        with back_col:
            if st.button("← New photo"):
                self.controller.back_to_upload()
                st.rerun()
        with reset_col:
            if st.button("Start over", help="Clear recipes and the shopping list"):
                self.controller.start_over()
                st.rerun()

        st.markdown("## Suggested Recipes")
        st.caption("Based on your ingredients and preferences")

        recipes = self.controller.get_filtered_recipes()
        if not recipes:
            st.info("No recipes found for this filter.")
            if st.button("Clear filters"):
                self.controller.clear_filter()
                st.rerun()
            return

        columns = st.columns(3)
        for idx, recipe in enumerate(recipes):
            with columns[idx % 3]:
                if render_recipe_card(recipe):
                    self.controller.start_cooking(recipe.id)
                    st.rerun()

    def _render_cooking(self):
        """Render the cook-through for the selected recipe."""
        recipe = self.controller.get_selected_recipe()
        render_cooking_panel(
            recipe=recipe,
            step_index=self.controller.get_step_index(),
            is_finished=self.controller.is_finished(),
            pending_audio=self.controller.get_pending_audio(),
            is_speaking=self.controller.is_speaking(),
            in_shopping_list=self.controller.is_in_shopping_list,
            on_add_to_list=self.controller.add_to_shopping_list,
            on_add_all_missing=lambda: self.controller.add_missing_to_shopping_list(recipe.id),
            on_next=self.controller.next_step,
            on_previous=self.controller.previous_step,
            on_repeat=self.controller.repeat_step,
            on_close=self.controller.close_cooking,
            voices=self.controller.get_available_voices(),
            current_voice=self.controller.get_voice_name(),
            current_speed=self.controller.get_speed_slider_value(),
            on_voice_change=self.controller.set_voice_name,
            on_speed_change=self.controller.set_speed_from_slider,
        )
