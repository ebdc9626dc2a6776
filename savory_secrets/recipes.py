"""Recipe model, the in-memory recipe store and the create-recipe draft."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .events import (
    RECIPE_ADDED,
    RECIPE_IMAGE_UPDATED,
    RECIPE_INGREDIENT_SET,
    Callback,
    EventBus,
)

if TYPE_CHECKING:
    from .images import ImageHandle

logger = logging.getLogger(__name__)


@dataclass
class Recipe:
    """A named recipe with an optional image and ingredient -> quantity mapping."""

    name: str
    image: ImageHandle | None = None
    ingredients: dict[str, str] = field(default_factory=dict)

    def ingredient_names(self) -> list[str]:
        """Ingredient names sorted for display."""
        return sorted(self.ingredients)

    def sorted_ingredients(self) -> list[tuple[str, str]]:
        return [(name, self.ingredients[name]) for name in self.ingredient_names()]


def _clean_ingredients(ingredients: dict[str, str] | None) -> dict[str, str]:
    """Copy an ingredient mapping, dropping pairs with an empty name or quantity."""
    if not ingredients:
        return {}
    return {name: qty for name, qty in ingredients.items() if name and qty}


class RecipeStore:
    """
    Owns the list of recipes.

    Recipes are kept in insertion order. Names are not required to be
    unique; name-keyed updates affect the first recipe with that name.
    Every applied mutation is published synchronously on the store's bus.
    """

    def __init__(self, bus: EventBus | None = None) -> None:
        self._recipes: list[Recipe] = []
        self.bus = bus or EventBus()

    def subscribe(self, event_name: str, callback: Callback) -> None:
        self.bus.subscribe(event_name, callback)

    def unsubscribe(self, event_name: str, callback: Callback) -> None:
        self.bus.unsubscribe(event_name, callback)

    def __iter__(self) -> Iterator[Recipe]:
        return self.recipes()

    def __len__(self) -> int:
        return len(self._recipes)

    def recipes(self) -> Iterator[Recipe]:
        """Yield recipes in insertion order."""
        yield from self._recipes

    def get(self, name: str) -> Recipe | None:
        """Return the first recipe named exactly `name`, or None."""
        for recipe in self._recipes:
            if recipe.name == name:
                return recipe
        return None

    def add_recipe(
        self,
        name: str,
        image: ImageHandle | None = None,
        ingredients: dict[str, str] | None = None,
    ) -> bool:
        """
        Append a new recipe.

        Args:
            name: Recipe name (must be non-empty)
            image: Optional picked image
            ingredients: Ingredient -> quantity mapping; copied, empty pairs dropped

        Returns:
            True if the recipe was added, False if the name was empty
        """
        if not name:
            logger.debug("Rejected recipe with empty name")
            return False

        if self.get(name) is not None:
            logger.debug("Recipe '%s' already exists; updates will target the first one", name)

        recipe = Recipe(name=name, image=image, ingredients=_clean_ingredients(ingredients))
        self._recipes.append(recipe)
        self.bus.publish(RECIPE_ADDED, recipe)
        return True

    def update_image(self, name: str, image: ImageHandle) -> bool:
        """Replace the image of the first recipe named `name`. Returns False if none matches."""
        recipe = self.get(name)
        if recipe is None:
            logger.debug("update_image: no recipe named '%s'", name)
            return False

        recipe.image = image
        self.bus.publish(RECIPE_IMAGE_UPDATED, recipe)
        return True

    def add_ingredient(self, name: str, ingredient: str, quantity: str) -> bool:
        """
        Set `ingredient` to `quantity` on the first recipe named `name`.

        Setting an existing ingredient overwrites its quantity. Empty
        ingredient/quantity strings and unknown recipe names are no-ops.
        """
        if not ingredient or not quantity:
            logger.debug("add_ingredient: rejected empty ingredient or quantity for '%s'", name)
            return False

        recipe = self.get(name)
        if recipe is None:
            logger.debug("add_ingredient: no recipe named '%s'", name)
            return False

        recipe.ingredients[ingredient] = quantity
        self.bus.publish(
            RECIPE_INGREDIENT_SET,
            {"recipe": recipe, "ingredient": ingredient, "quantity": quantity},
        )
        return True


@dataclass
class RecipeDraft:
    """Unsaved state of the create-recipe form."""

    name: str = ""
    image: ImageHandle | None = None
    ingredients: dict[str, str] = field(default_factory=dict)

    @property
    def can_submit(self) -> bool:
        # Submitting is only offered once an ingredient has been added
        return bool(self.ingredients)

    def set_ingredient(self, ingredient: str, quantity: str) -> bool:
        if not ingredient or not quantity:
            return False
        self.ingredients[ingredient] = quantity
        return True

    def sorted_ingredients(self) -> list[tuple[str, str]]:
        return Recipe(name=self.name, ingredients=self.ingredients).sorted_ingredients()

    def reset(self) -> None:
        self.name = ""
        self.image = None
        self.ingredients = {}

    def submit(self, store: RecipeStore) -> bool:
        """
        Add the drafted recipe to the store and clear the form.

        The draft is left untouched when the name is empty or no ingredient
        has been added.
        """
        if not self.name or not self.can_submit:
            return False
        if not store.add_recipe(self.name, self.image, self.ingredients):
            return False
        self.reset()
        return True
