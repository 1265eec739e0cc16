"""Quiet formatter: offender locations only."""

from ..models import ProjectReport
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render ``file::function`` for each top offender, one per line."""

    def render(self, report: ProjectReport) -> None:
        print(self.format(report))

    def format(self, report: ProjectReport) -> str:
        return "\n".join(f"{fn.path}::{fn.name}" for fn in report.top_offenders)
