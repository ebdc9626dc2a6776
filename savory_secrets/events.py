"""Synchronous publish/subscribe bus used by the stores to notify observers.

Event names:
  recipe.added                  -> payload Recipe
  recipe.image_updated          -> payload Recipe
  recipe.ingredient_set         -> payload {"recipe": Recipe, "ingredient": str, "quantity": str}
  shopping.item_added           -> payload ShoppingListEntry
  shopping.sub_ingredient_added -> payload {"entry": ShoppingListEntry, "ingredient": str}

Subscribers are callables taking (event_name, payload).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# Subscribing to this name receives every event published on the bus
ALL_EVENTS = "*"

RECIPE_ADDED = "recipe.added"
RECIPE_IMAGE_UPDATED = "recipe.image_updated"
RECIPE_INGREDIENT_SET = "recipe.ingredient_set"
SHOPPING_ITEM_ADDED = "shopping.item_added"
SHOPPING_SUB_INGREDIENT_ADDED = "shopping.sub_ingredient_added"

Callback = Callable[[str, Any], None]


class EventBus:
    """Delivers events to subscribers on the publishing thread, in order."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callback]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callback) -> None:
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callback) -> None:
        try:
            self._subscribers.get(event_name, []).remove(callback)
        except ValueError:
            pass

    def subscriber_count(self, event_name: str) -> int:
        return len(self._subscribers.get(event_name, []))

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Call every subscriber of event_name, then every wildcard subscriber.

        Exceptions raised by a subscriber propagate to the publisher.
        """
        callbacks = list(self._subscribers.get(event_name, []))
        if event_name != ALL_EVENTS:
            callbacks += self._subscribers.get(ALL_EVENTS, [])

        logger.debug("Publishing %s to %d subscriber(s)", event_name, len(callbacks))
        for callback in callbacks:
            callback(event_name, payload)


__all__ = [
    "ALL_EVENTS",
    "Callback",
    "EventBus",
    "RECIPE_ADDED",
    "RECIPE_IMAGE_UPDATED",
    "RECIPE_INGREDIENT_SET",
    "SHOPPING_ITEM_ADDED",
    "SHOPPING_SUB_INGREDIENT_ADDED",
]
