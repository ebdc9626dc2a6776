"""Configuration for Savory Secrets."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

APP_NAME = "savory-secrets"

# Logging
LOG_LEVEL = os.getenv("SAVORY_LOG_LEVEL", "WARNING")

# Image picker
PICTURES_DIR = Path(os.getenv("SAVORY_PICTURES_DIR", str(Path.home() / "Pictures"))).expanduser()
IMAGE_SUFFIXES: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".heic"}
)


def get_log_level(name: str | None = None) -> int:
    """Resolve a level name (default: LOG_LEVEL) to a logging level, falling back to WARNING."""
    level = logging.getLevelName((name or LOG_LEVEL).upper())
    if isinstance(level, int):
        return level
    return logging.WARNING
