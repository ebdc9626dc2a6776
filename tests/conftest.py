"""Shared fixtures for savory-secrets tests."""

import pytest

from savory_secrets.events import EventBus
from savory_secrets.images import ImageHandle
from savory_secrets.recipes import RecipeStore
from savory_secrets.shopping import ShoppingListStore

# Smallest valid PNG header; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def recipe_store():
    """Create an empty recipe store."""
    return RecipeStore()


@pytest.fixture
def shopping_store():
    """Create an empty shopping list store."""
    return ShoppingListStore()


@pytest.fixture
def bus():
    """Create a fresh event bus."""
    return EventBus()


@pytest.fixture
def image_file(tmp_path):
    """Write a small PNG file and return its path."""
    path = tmp_path / "pasta.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def image(image_file):
    """An ImageHandle loaded from image_file."""
    return ImageHandle.from_path(image_file)


@pytest.fixture
def recorder():
    """Callback that records every (event_name, payload) it receives."""

    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, event_name, payload):
            self.events.append((event_name, payload))

        @property
        def names(self):
            return [name for name, _ in self.events]

    return Recorder()
