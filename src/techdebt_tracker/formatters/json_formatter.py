"""JSON formatter for techdebt-tracker."""

import json

from .base import BaseFormatter
from ..models import ProjectReport


class JsonFormatter(BaseFormatter):
    """Render the report as stable-keyed JSON."""

    def render(self, report: ProjectReport) -> None:
        print(self.format(report))

    def format(self, report: ProjectReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
