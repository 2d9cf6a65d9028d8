"""
Smart Fridge Chef - Home Page

Upload a photo of your fridge, get recipe ideas from Claude and cook
them step by step with voice narration.
"""

import logging

import streamlit as st

# Page configuration (must be first Streamlit command)
st.set_page_config(
    page_title="Smart Fridge Chef",
    page_icon="🍳",
    layout="wide"
)

from config.settings import get_settings
from views.kitchen_view import KitchenView

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

view = KitchenView()
view.render()
