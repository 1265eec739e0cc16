"""Analysis core: per-file measurement, scheduling and report assembly."""

from .measure import analyze_file, measure_source, read_source
from .report import build_report, check_thresholds
from .runner import AnalysisRunner, RunResult

__all__ = [
    "analyze_file",
    "measure_source",
    "read_source",
    "build_report",
    "check_thresholds",
    "AnalysisRunner",
    "RunResult",
]
