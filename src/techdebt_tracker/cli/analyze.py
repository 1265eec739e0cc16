"""Main analysis command."""

import threading
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from ..api import analyze
from ..config import AnalysisConfig, ThresholdConfig, load_config
from ..core import check_thresholds
from ..exceptions import ConfigurationError, TechDebtError, ThresholdExceeded
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import FORMATS, console, file_progress


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        console.print(f"[bold cyan]techdebt[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="File or directory to analyze (default: current directory)",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help=f"Output format: {', '.join(FORMATS)}",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Number of top offenders to report",
        min=1,
    ),
    max_complexity: Optional[int] = typer.Option(
        None,
        "--max-complexity",
        help="Exit with code 2 if any function's complexity is above this",
        min=1,
    ),
    moderate: Optional[int] = typer.Option(
        None,
        "--moderate",
        help="Complexity above which risk is moderate (default 10)",
        min=1,
    ),
    high: Optional[int] = typer.Option(
        None,
        "--high",
        help="Complexity above which risk is high (default 20)",
        min=1,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers (default: CPU count, max 8)",
        min=1,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Stop dispatching files after this many seconds; report is marked incomplete",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to this file instead of stdout",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Measure cyclomatic complexity, Halstead volume and Maintainability Index.

    Exit codes: 0 success, 1 error, 2 complexity threshold exceeded,
    130 interrupted.

    [bold cyan]Examples:[/bold cyan]

      techdebt src/

      techdebt . --format json --output report.json

      techdebt . --max-complexity 15 --format github
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    if output_format not in FORMATS:
        console.print(
            f"[red]Error:[/red] Unknown format {output_format!r}. Choose from: {', '.join(FORMATS)}"
        )
        raise typer.Exit(1)

    thresholds = {}
    if moderate is not None:
        thresholds["moderate_complexity"] = moderate
    if high is not None:
        thresholds["high_complexity"] = high

    cancel_event = threading.Event()

    try:
        settings = load_config(
            config_file=config,
            top_n=top,
            max_complexity=max_complexity,
            workers=workers,
            timeout_seconds=timeout,
            verbose=verbose,
            quiet=quiet,
        )
        if thresholds:
            settings = _with_thresholds(settings, thresholds)

        show_progress = output_format == "rich" and not quiet and console.is_terminal
        with file_progress(show_progress) as on_progress:
            report = analyze(
                str(path),
                config=settings,
                cancel_event=cancel_event,
                on_progress=on_progress,
            )

        formatter = get_formatter(output_format)
        if output is not None:
            output.write_text(formatter.format(report) + "\n", encoding="utf-8")
            console.print(f"[green]Report written to {output}[/green]")
        else:
            formatter.render(report)

        check_thresholds(report)

    except typer.Exit:
        raise

    except ThresholdExceeded as e:
        console.print(
            f"[red bold]Maximum cyclomatic complexity ({e.worst}) exceeds "
            f"threshold ({e.max_complexity}).[/red bold]"
        )
        raise typer.Exit(2)

    except TechDebtError as e:
        logger.error(f"Analysis failed: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        cancel_event.set()
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _with_thresholds(settings: AnalysisConfig, thresholds: dict) -> AnalysisConfig:
    """Return settings with risk cutoffs replaced from CLI flags."""
    merged = {
        "moderate_complexity": settings.thresholds.moderate_complexity,
        "high_complexity": settings.thresholds.high_complexity,
        **thresholds,
    }
    try:
        return replace(settings, thresholds=ThresholdConfig(**merged))
    except ValueError as e:
        raise ConfigurationError(f"Invalid thresholds: {e}")
