"""CSV formatter for techdebt-tracker."""

import csv
import io

from .base import BaseFormatter
from ..models import ProjectReport


class CsvFormatter(BaseFormatter):
    """Render one row per measured function."""

    def render(self, report: ProjectReport) -> None:
        print(self.format(report), end="")

    def format(self, report: ProjectReport) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow([
            "file", "function", "line", "loc", "complexity",
            "maintainability_index", "risk", "low_confidence",
            "halstead_volume", "halstead_difficulty", "halstead_effort",
            "halstead_time_seconds", "halstead_bugs",
            "max_nesting",
        ])
        for fn in report.functions:
            writer.writerow([
                fn.path, fn.name, fn.line, fn.loc, fn.complexity,
                f"{fn.maintainability_index:.4f}", fn.risk.value,
                "true" if fn.low_confidence else "false",
                f"{fn.halstead.volume:.4f}", f"{fn.halstead.difficulty:.4f}",
                f"{fn.halstead.effort:.4f}", f"{fn.halstead.time_seconds:.4f}",
                f"{fn.halstead.bugs:.4f}", fn.max_nesting,
            ])
        return output.getvalue()
