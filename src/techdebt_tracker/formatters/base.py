"""Base formatter interface for techdebt-tracker output rendering."""

from abc import ABC, abstractmethod

from ..models import ProjectReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: ProjectReport) -> None:
        """Render the report to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, report: ProjectReport) -> str:
        """Return formatted string representation of the report."""
