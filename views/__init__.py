"""
Views layer - UI presentation components.
"""

from views.kitchen_view import KitchenView

__all__ = ["KitchenView"]
