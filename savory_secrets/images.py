"""Image handles and the modal image-picker interaction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .config import IMAGE_SUFFIXES

if TYPE_CHECKING:
    from .recipes import RecipeStore

logger = logging.getLogger(__name__)


class ImageError(Exception):
    """Exception raised when a picked file cannot be used as an image."""

    pass


@dataclass(frozen=True)
class ImageHandle:
    """An opaque in-memory image picked by the user."""

    path: Path
    data: bytes = field(repr=False)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> ImageHandle:
        """
        Read an image file into a handle.

        Args:
            path: Location of the image file

        Returns:
            ImageHandle holding the file's bytes

        Raises:
            ImageError: If the suffix is not a supported image type or the
                file cannot be read
        """
        path = Path(path).expanduser()
        if path.suffix.lower() not in IMAGE_SUFFIXES:
            raise ImageError(f"Unsupported image type: '{path.suffix or path.name}'")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageError(f"Failed to read image {path}: {e}") from e

        if not data:
            raise ImageError(f"Image file is empty: {path}")

        logger.debug("Loaded image %s (%d bytes)", path, len(data))
        return cls(path=path, data=data)


class ImagePicker:
    """
    Tracks the single image-picker interaction.

    Only one picker can be presented at a time; the selection (or None on
    cancel) is handed back through finish().
    """

    def __init__(self) -> None:
        self.is_presented = False

    def present(self) -> bool:
        """Raise the visibility flag. Returns False if a picker is already showing."""
        if self.is_presented:
            logger.debug("Image picker already presented")
            return False
        self.is_presented = True
        return True

    def finish(self, image: ImageHandle | None) -> ImageHandle | None:
        """Close the picker and return the selection (None when cancelled)."""
        self.is_presented = False
        return image

    def cancel(self) -> None:
        self.finish(None)


def apply_picked_image(store: RecipeStore, recipe_name: str, image: ImageHandle | None) -> bool:
    """
    Deliver a picker result into the recipe store.

    A cancelled pick (None) leaves the recipe's current image unchanged.
    """
    if image is None:
        return False
    return store.update_image(recipe_name, image)
