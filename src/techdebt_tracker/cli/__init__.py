"""CLI entry point."""

import typer

app = typer.Typer(
    name="techdebt",
    help="techdebt - Technical-debt metrics for Python code",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .analyze import main as _main_command  # noqa: F401, E402

__all__ = ["app"]
