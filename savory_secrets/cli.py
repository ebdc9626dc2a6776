"""CLI entry point for Savory Secrets."""

import logging

import click
from textual.logging import TextualHandler

from . import __version__
from .config import get_log_level
from .images import ImageError, ImageHandle
from .tui import run_app

logger = logging.getLogger(__name__)


def configure_logging(level_name: str | None = None) -> None:
    """Route log records through Textual while the app owns the terminal."""
    logging.basicConfig(
        level=get_log_level(level_name),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[TextualHandler()],
        force=True,
    )


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="savory-secrets")
def cli():
    """Savory Secrets: a recipe book and shopping list for the terminal.

    Record recipes with an optional photo and their ingredients, and keep
    shopping lists with per-list ingredient notes.
    """
    pass


@cli.command()
@click.option(
    "--log-level",
    "-l",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to SAVORY_LOG_LEVEL.",
)
def run(log_level: str | None):
    """Open the interactive recipe book and shopping list."""
    configure_logging(log_level)
    run_app()


@cli.command("pick-image")
@click.argument("path", type=click.Path(dir_okay=False))
def pick_image(path: str):
    """Check that PATH can be used as a recipe image."""
    try:
        image = ImageHandle.from_path(path)
    except ImageError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    click.echo(f"✓ {image.name} ({image.size} bytes)")


def main():
    cli()


if __name__ == "__main__":
    main()
