"""Plain-text formatter: the metrics summary without terminal markup."""

from ..models import ProjectReport
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Render a plain metrics summary followed by the top offenders."""

    def render(self, report: ProjectReport) -> None:
        print(self.format(report))

    def format(self, report: ProjectReport) -> str:
        s = report.summary
        dist = s.distribution
        lines = [
            "Code Metrics:",
            f"Lines of Code (LOC): {s.total_loc}",
            f"KLOC: {s.kloc:.2f}",
            f"Cyclomatic Complexity: {s.total_complexity}",
            f"Average Cyclomatic Complexity per Function: {s.mean_complexity:.2f}",
            (
                f"Cyclomatic Complexity Distribution: [Simple (<=5): {dist.get('simple', 0)}, "
                f"Moderate (6-10): {dist.get('moderate', 0)}, "
                f"Complex (>10): {dist.get('complex', 0)}]"
            ),
            f"Number of Functions: {s.function_count}",
            f"Longest Function (LOC): {s.longest_function_loc}",
            f"Maximum Nesting Depth: {s.max_nesting}",
            f"Comment Density: {s.comment_density * 100:.2f}%",
            f"Maintainability Index: {s.mean_maintainability:.2f} (0-100)",
            f"File with Maximum Complexity: {s.file_with_max_complexity or '-'}",
            f"Maximum Cyclomatic Complexity in a File: {s.max_file_complexity}",
        ]

        if report.top_offenders:
            lines.append("")
            lines.append(f"Top {len(report.top_offenders)} Most Complex Functions:")
            for i, fn in enumerate(report.top_offenders, 1):
                lines.append(
                    f"{i}. {fn.path}::{fn.name} -> complexity={fn.complexity} "
                    f"LOC={fn.loc} MI={fn.maintainability_index:.2f}"
                )

        if report.errors:
            lines.append("")
            lines.append(f"Errors ({len(report.errors)}):")
            for err in report.errors:
                where = f"{err.path}:{err.line}" if err.line else err.path
                lines.append(f"  {where}: {err.kind}: {err.message}")

        if not report.complete:
            lines.append("")
            lines.append(f"INCOMPLETE: {len(report.skipped)} files were not analyzed")

        return "\n".join(lines)
