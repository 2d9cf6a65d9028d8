"""
Sidebar components for different views.
"""

from views.components.sidebar.filters import render_filter_sidebar
from views.components.sidebar.shopping import render_shopping_drawer

__all__ = [
    "render_filter_sidebar",
    "render_shopping_drawer",
]
