"""Report assembly and CI gating."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import InsufficientDataError, ThresholdExceeded
from ..logging_config import get_logger
from ..metrics.aggregate import summarize_file, summarize_project
from ..metrics.ranking import rank_functions, rank_offenders
from ..models import ProjectReport, ThresholdStatus
from .runner import RunResult

logger = get_logger(__name__)


def build_report(root: Path, run: RunResult, config: AnalysisConfig) -> ProjectReport:
    """
    Assemble the final report from a runner pass.

    Args:
        root: Analysis root
        run: Units and skipped paths from AnalysisRunner
        config: Analysis configuration

    Returns:
        Frozen ProjectReport

    Raises:
        InsufficientDataError: If a finished run measured no file at all
    """
    units = sorted(run.units, key=lambda u: u.path)
    measured = [u for u in units if u.measured]

    if run.complete and not measured:
        if not units:
            raise InsufficientDataError("no Python source files found", minimum_required=1)
        raise InsufficientDataError(f"all {len(units)} files failed to parse or read")

    files = tuple(summarize_file(u, config.thresholds) for u in units)
    summary = summarize_project(files, config.thresholds, skipped=len(run.skipped))

    report = ProjectReport(
        root=str(root),
        summary=summary,
        top_offenders=rank_offenders(measured, config.top_n),
        files=files,
        errors=tuple(u.error for u in units if u.error is not None),
        skipped=tuple(run.skipped),
        complete=run.complete,
        threshold=_threshold_status(files, config.max_complexity),
    )

    logger.info(
        f"Analyzed {summary.files_analyzed} files, {summary.function_count} functions "
        f"({summary.files_failed} failed, {summary.files_skipped} skipped)"
    )
    return report


def _threshold_status(files, max_complexity: Optional[int]) -> ThresholdStatus:
    if max_complexity is None:
        return ThresholdStatus(None)
    functions = (fn for f in files for fn in f.unit.functions)
    violations = [fn for fn in rank_functions(functions) if fn.complexity > max_complexity]
    return ThresholdStatus(max_complexity=max_complexity, violations=tuple(violations))


def check_thresholds(report: ProjectReport) -> None:
    """
    Raise ThresholdExceeded if the report breaks its complexity budget.

    Raises:
        ThresholdExceeded: If any function's complexity is strictly greater
            than the configured ``max_complexity``
    """
    status = report.threshold
    if status.max_complexity is None or not status.exceeded:
        return
    raise ThresholdExceeded(
        status.max_complexity,
        [(fn.path, fn.name, fn.line, fn.complexity) for fn in status.violations],
    )
