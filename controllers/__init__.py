"""
Controllers layer - orchestration and session state management.
"""

from controllers.kitchen_controller import KitchenController

__all__ = ["KitchenController"]
