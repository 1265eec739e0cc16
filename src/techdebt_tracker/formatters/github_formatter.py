"""GitHub Actions formatter: workflow annotations."""

from ..metrics.maintainability import RiskLevel
from ..models import ProjectReport
from .base import BaseFormatter


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions ``::warning`` / ``::error`` annotations.

    High-risk functions and functions over the ``max_complexity`` budget are
    errors, moderate-risk functions are warnings. Failed files get an error
    annotation of their own.
    """

    def render(self, report: ProjectReport) -> None:
        print(self.format(report))

    def format(self, report: ProjectReport) -> str:
        over_budget = {(fn.path, fn.name, fn.line) for fn in report.threshold.violations}
        lines: list[str] = []

        for fn in report.functions:
            key = (fn.path, fn.name, fn.line)
            if fn.risk is RiskLevel.LOW and key not in over_budget:
                continue
            level = "error" if fn.risk is RiskLevel.HIGH or key in over_budget else "warning"
            msg = (
                f"{fn.name} has cyclomatic complexity {fn.complexity} "
                f"(MI {fn.maintainability_index:.1f}, {fn.risk.value} risk)"
            )
            lines.append(f"::{level} file={fn.path},line={fn.line}::{msg}")

        for err in report.errors:
            location = f",line={err.line}" if err.line else ""
            lines.append(f"::error file={err.path}{location}::{err.kind} error: {err.message}")

        if not report.complete:
            lines.append(f"::warning::Analysis incomplete: {len(report.skipped)} files skipped")

        return "\n".join(lines)
