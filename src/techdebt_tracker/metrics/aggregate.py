"""File and project roll-ups of function metrics.

Means at project level are taken over every function of every measured
file, so a file with many small functions weighs more than a file with
one large function. Failed files add nothing but their status.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from ..config import ThresholdConfig
from ..math import Statistics
from ..models import FileStatus, FileSummary, FunctionRecord, ProjectSummary, SourceUnit
from .halstead import HalsteadMetrics
from .maintainability import RiskLevel, classify_risk, complexity_bucket

DISTRIBUTION_BUCKETS = ("simple", "moderate", "complex")


def summarize_file(unit: SourceUnit, thresholds: ThresholdConfig) -> FileSummary:
    """Roll one file's function records up to file level."""
    functions = unit.functions
    complexities = [fn.complexity for fn in functions]
    max_complexity = max(complexities, default=0)

    return FileSummary(
        unit=unit,
        total_complexity=sum(complexities),
        mean_complexity=Statistics.mean(complexities),
        mean_maintainability=Statistics.mean([fn.maintainability_index for fn in functions]),
        max_complexity=max_complexity,
        risk=classify_risk(max_complexity, thresholds),
        comment_density=Statistics.ratio(unit.comment_lines, unit.loc),
        longest_function_loc=max((fn.loc for fn in functions), default=0),
        max_nesting=max((fn.max_nesting for fn in functions), default=0),
    )


def complexity_distribution(functions: Iterable[FunctionRecord]) -> dict[str, int]:
    """Count functions per complexity bucket (every bucket present)."""
    counts = Counter(complexity_bucket(fn.complexity) for fn in functions)
    return {bucket: counts.get(bucket, 0) for bucket in DISTRIBUTION_BUCKETS}


def summarize_project(
    files: Sequence[FileSummary],
    thresholds: ThresholdConfig,
    skipped: int = 0,
) -> ProjectSummary:
    """
    Roll per-file summaries up to project level.

    Args:
        files: Per-file summaries, failed files included
        thresholds: Risk cutoffs
        skipped: Number of files never analyzed (cancel or timeout)

    Returns:
        ProjectSummary over the measured files
    """
    measured = [f for f in files if f.unit.measured]
    functions = [fn for f in measured for fn in f.unit.functions]
    complexities = [fn.complexity for fn in functions]

    total_loc = sum(f.unit.loc for f in measured)
    comment_lines = sum(f.unit.comment_lines for f in measured)
    max_complexity = max(complexities, default=0)

    worst_file = None
    max_file_complexity = 0
    for f in measured:
        # Strictly greater: ties keep the first file in path order
        if f.total_complexity > max_file_complexity:
            worst_file, max_file_complexity = f.path, f.total_complexity

    halstead = HalsteadMetrics()
    for fn in functions:
        halstead = halstead + fn.halstead

    return ProjectSummary(
        total_loc=total_loc,
        kloc=total_loc / 1000,
        file_count=len(files) + skipped,
        files_analyzed=len(measured),
        files_degraded=sum(1 for f in measured if f.status is FileStatus.DEGRADED),
        files_failed=len(files) - len(measured),
        files_skipped=skipped,
        function_count=len(functions),
        total_complexity=sum(complexities),
        mean_complexity=Statistics.mean(complexities),
        median_complexity=Statistics.median(complexities),
        p90_complexity=Statistics.percentile(complexities, 90),
        max_complexity=max_complexity,
        mean_maintainability=Statistics.mean([fn.maintainability_index for fn in functions]),
        risk=classify_risk(max_complexity, thresholds) if functions else RiskLevel.LOW,
        comment_lines=comment_lines,
        comment_density=Statistics.ratio(comment_lines, total_loc),
        longest_function_loc=max((fn.loc for fn in functions), default=0),
        max_nesting=max((fn.max_nesting for fn in functions), default=0),
        file_with_max_complexity=worst_file,
        max_file_complexity=max_file_complexity,
        distribution=complexity_distribution(functions),
        halstead=halstead,
    )
