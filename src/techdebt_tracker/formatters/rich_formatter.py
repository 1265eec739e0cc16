"""Rich terminal formatter for techdebt-tracker."""

import io
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..metrics.maintainability import RiskLevel, mi_rating
from ..models import FileStatus, ProjectReport
from .base import BaseFormatter

console = Console(stderr=True)

_RISK_STYLE = {
    RiskLevel.LOW: "green",
    RiskLevel.MODERATE: "yellow",
    RiskLevel.HIGH: "red bold",
}


def _risk_label(risk: RiskLevel) -> str:
    style = _RISK_STYLE[risk]
    return f"[{style}]{risk.value}[/{style}]"


def _mi_label(mi: float) -> str:
    rating = mi_rating(mi)
    if rating == "A":
        return f"[green]{mi:.1f}[/green]"
    elif rating == "B":
        return f"[yellow]{mi:.1f}[/yellow]"
    else:
        return f"[red]{mi:.1f}[/red]"


class RichFormatter(BaseFormatter):
    """Rich terminal output with summary panel, offenders table and risky files."""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def render(self, report: ProjectReport) -> None:
        self._print_summary(report, self.console)
        self._print_offenders(report, self.console)
        self._print_files(report, self.console)
        self._print_problems(report, self.console)

    def format(self, report: ProjectReport) -> str:
        capture = Console(record=True, width=120, file=io.StringIO())
        self._print_summary(report, capture)
        self._print_offenders(report, capture)
        self._print_files(report, capture)
        self._print_problems(report, capture)
        return capture.export_text()

    # -- private helpers --

    def _print_summary(self, report: ProjectReport, out: Console) -> None:
        s = report.summary
        status = "" if report.complete else "  |  [red bold]INCOMPLETE[/red bold]"
        summary_text = (
            f"Analyzed [bold]{s.files_analyzed}[/bold] files "
            f"([yellow]{s.files_degraded}[/yellow] degraded, "
            f"[red]{s.files_failed}[/red] failed)  |  "
            f"[bold]{s.function_count}[/bold] functions  |  "
            f"{s.kloc:.2f} KLOC{status}\n"
            f"Mean complexity: [bold]{s.mean_complexity:.2f}[/bold] "
            f"(median {s.median_complexity:.1f}, p90 {s.p90_complexity:.1f}, "
            f"max {s.max_complexity})  |  "
            f"Mean MI: {_mi_label(s.mean_maintainability)}  |  "
            f"Risk: {_risk_label(s.risk)}\n"
            f"Distribution: {s.distribution.get('simple', 0)} simple, "
            f"{s.distribution.get('moderate', 0)} moderate, "
            f"{s.distribution.get('complex', 0)} complex  |  "
            f"Comment density: {s.comment_density * 100:.1f}%"
        )
        out.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        out.print()

    def _print_offenders(self, report: ProjectReport, out: Console) -> None:
        if not report.top_offenders:
            out.print("[dim]No functions found.[/dim]")
            return

        table = Table(title=f"Top {len(report.top_offenders)} Functions Requiring Attention", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Function", style="yellow", no_wrap=False, ratio=3)
        table.add_column("Line", justify="right", width=6)
        table.add_column("CC", justify="right", width=5)
        table.add_column("MI", justify="right", width=7)
        table.add_column("LOC", justify="right", width=6)
        table.add_column("Risk", justify="center", width=10)

        for i, fn in enumerate(report.top_offenders, 1):
            mi = _mi_label(fn.maintainability_index)
            if fn.low_confidence:
                mi += "[dim]*[/dim]"
            table.add_row(
                str(i),
                f"{fn.path}::{fn.name}",
                str(fn.line),
                str(fn.complexity),
                mi,
                str(fn.loc),
                _risk_label(fn.risk),
            )

        out.print(table)
        out.print()

    def _print_files(self, report: ProjectReport, out: Console) -> None:
        risky = [
            f for f in report.files
            if f.status is not FileStatus.FAILED and f.risk is not RiskLevel.LOW
        ]
        if not risky:
            return

        risky.sort(key=lambda f: (-f.total_complexity, f.path))
        table = Table(title="Files Above Low Risk", expand=True)
        table.add_column("File", style="yellow", ratio=3)
        table.add_column("Funcs", justify="right", width=6)
        table.add_column("Total CC", justify="right", width=9)
        table.add_column("Mean CC", justify="right", width=8)
        table.add_column("Mean MI", justify="right", width=8)
        table.add_column("Risk", justify="center", width=10)
        table.add_column("Status", justify="center", width=10)

        for f in risky:
            table.add_row(
                f.path,
                str(len(f.unit.functions)),
                str(f.total_complexity),
                f"{f.mean_complexity:.2f}",
                _mi_label(f.mean_maintainability),
                _risk_label(f.risk),
                f.status.value,
            )

        out.print(table)
        out.print()

    def _print_problems(self, report: ProjectReport, out: Console) -> None:
        for err in report.errors:
            where = f"{err.path}:{err.line}" if err.line else err.path
            out.print(f"[red]![/red] {where}: {err.kind} error: {err.message}")
        for f in report.files:
            for issue in f.unit.issues:
                out.print(
                    f"[yellow]~[/yellow] {f.path}:{issue.line}-{issue.end_line}: "
                    f"skipped ({issue.message})"
                )
        if report.threshold.exceeded:
            out.print(
                f"[red bold]{len(report.threshold.violations)} functions exceed "
                f"max complexity {report.threshold.max_complexity}[/red bold]"
            )
        if not report.complete:
            out.print(
                f"[red bold]Analysis incomplete:[/red bold] {len(report.skipped)} files "
                "were not analyzed (cancelled or timed out)"
            )
