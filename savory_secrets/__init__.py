"""Savory Secrets - recipe book and shopping list."""

__version__ = "1.0.0"

from .events import EventBus
from .images import ImageError, ImageHandle, ImagePicker, apply_picked_image
from .recipes import Recipe, RecipeDraft, RecipeStore
from .shopping import ShoppingListEntry, ShoppingListStore

__all__ = [
    "EventBus",
    "ImageError",
    "ImageHandle",
    "ImagePicker",
    "apply_picked_image",
    "Recipe",
    "RecipeDraft",
    "RecipeStore",
    "ShoppingListEntry",
    "ShoppingListStore",
]
