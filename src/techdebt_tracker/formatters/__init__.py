"""Output formatters for techdebt-tracker."""

from .base import BaseFormatter
from .rich_formatter import RichFormatter
from .json_formatter import JsonFormatter
from .csv_formatter import CsvFormatter
from .quiet_formatter import QuietFormatter
from .github_formatter import GithubFormatter
from .text_formatter import TextFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "text", "json", "csv", "quiet", "github"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "rich": RichFormatter,
        "text": TextFormatter,
        "json": JsonFormatter,
        "csv": CsvFormatter,
        "quiet": QuietFormatter,
        "github": GithubFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "TextFormatter",
    "JsonFormatter",
    "CsvFormatter",
    "QuietFormatter",
    "GithubFormatter",
    "get_formatter",
]
