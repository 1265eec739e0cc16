"""Public API for techdebt-tracker.

Example:
    >>> from techdebt_tracker import analyze
    >>>
    >>> report = analyze("src")
    >>> report.summary.mean_complexity
    3.4
    >>> [fn.name for fn in report.top_offenders[:2]]
    ['Parser.parse_block', 'tokenize']
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from .config import AnalysisConfig, load_config
from .core import AnalysisRunner, build_report
from .core.runner import ProgressCallback
from .logging_config import get_logger
from .models import ProjectReport
from .scanning import collect_source_files

logger = get_logger(__name__)


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    *,
    config: Optional[AnalysisConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    on_progress: ProgressCallback = None,
    **overrides,
) -> ProjectReport:
    """Analyze a file or directory and return its technical-debt report.

    Pipeline:
    1. Load configuration (auto-discover TOML + apply overrides)
    2. Discover source files under ``path``
    3. Measure every file (in parallel for larger inputs)
    4. Aggregate, rank and assemble the report

    Args:
        path: File or directory to analyze (default: current directory)
        config_file: Optional explicit config file path
        config: Ready-made configuration; skips loading when given
        cancel_event: Set from another thread to stop the run early
        on_progress: Called with (files_done, files_total)
        **overrides: Configuration overrides (e.g. top_n=15, max_complexity=12)

    Returns:
        ProjectReport; ``complete`` is False if the run was cut short

    Raises:
        InvalidPathError: If ``path`` does not exist
        InsufficientDataError: If there is nothing to measure
        ConfigurationError: If configuration is invalid

    Example:
        >>> report = analyze("src", top_n=5, max_complexity=15)
        >>> report.threshold.exceeded
        False
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)

    logger.info(f"Starting analysis of {path}")
    root, files = collect_source_files(Path(path), config)
    paths = [f.as_posix() for f in files]

    run = AnalysisRunner(config).run(
        paths, root, cancel_event=cancel_event, on_progress=on_progress
    )
    logger.debug(f"Measured {len(run.units)} files in {run.elapsed_seconds:.2f}s")

    return build_report(root, run, config)
