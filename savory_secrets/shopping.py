"""Shopping list store: named entries, each owning its sub-ingredient notes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .events import SHOPPING_ITEM_ADDED, SHOPPING_SUB_INGREDIENT_ADDED, Callback, EventBus

logger = logging.getLogger(__name__)


@dataclass
class ShoppingListEntry:
    """A shopping list entry and its ordered sub-ingredients."""

    entry_id: int
    name: str
    sub_ingredients: list[str] = field(default_factory=list)


class ShoppingListStore:
    """
    Owns the flat list of shopping list entries.

    Entry names may repeat, so entries are addressed by the `entry_id`
    handed out by add_item(). Detail views keep that id and mutate through
    the store instead of holding their own copy of the sub-ingredients.
    """

    def __init__(self, bus: EventBus | None = None) -> None:
        self._entries: list[ShoppingListEntry] = []
        self._by_id: dict[int, ShoppingListEntry] = {}
        self._next_id = 1
        self.bus = bus or EventBus()

    def subscribe(self, event_name: str, callback: Callback) -> None:
        self.bus.subscribe(event_name, callback)

    def unsubscribe(self, event_name: str, callback: Callback) -> None:
        self.bus.unsubscribe(event_name, callback)

    def __iter__(self) -> Iterator[ShoppingListEntry]:
        return self.entries()

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Iterator[ShoppingListEntry]:
        """Yield entries in insertion order."""
        yield from self._entries

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def get(self, entry_id: int) -> ShoppingListEntry | None:
        return self._by_id.get(entry_id)

    def sub_ingredients(self, entry_id: int) -> list[str]:
        """Sub-ingredients of an entry in insertion order (empty for unknown ids)."""
        entry = self._by_id.get(entry_id)
        if entry is None:
            return []
        return list(entry.sub_ingredients)

    def add_item(self, name: str) -> int | None:
        """
        Append a new entry with no sub-ingredients.

        Returns:
            The new entry's id, or None if the name was empty
        """
        if not name:
            logger.debug("Rejected shopping list entry with empty name")
            return None

        entry = ShoppingListEntry(entry_id=self._next_id, name=name)
        self._next_id += 1
        self._entries.append(entry)
        self._by_id[entry.entry_id] = entry
        self.bus.publish(SHOPPING_ITEM_ADDED, entry)
        return entry.entry_id

    def add_sub_ingredient(self, entry_id: int, ingredient: str) -> bool:
        """Append an ingredient note to an entry. Empty text or unknown ids are no-ops."""
        if not ingredient:
            logger.debug("Rejected empty sub-ingredient for entry %s", entry_id)
            return False

        entry = self._by_id.get(entry_id)
        if entry is None:
            logger.debug("add_sub_ingredient: unknown entry %s", entry_id)
            return False

        entry.sub_ingredients.append(ingredient)
        self.bus.publish(SHOPPING_SUB_INGREDIENT_ADDED, {"entry": entry, "ingredient": ingredient})
        return True
