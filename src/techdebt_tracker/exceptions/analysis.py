"""Analysis-related exceptions: file access, parsing, undefined metrics."""

from pathlib import Path
from typing import Dict, Optional

from .base import TechDebtError


class AnalysisError(TechDebtError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParseError(AnalysisError):
    """Raised when file content does not conform to the Python grammar."""

    def __init__(self, filepath: Path, reason: str, line: Optional[int] = None):
        details = {"filepath": str(filepath), "reason": reason}
        if line is not None:
            details["line"] = str(line)

        super().__init__(f"Failed to parse Python file: {filepath}", details=details)
        self.filepath = filepath
        self.reason = reason
        self.line = line


class MetricUndefinedError(AnalysisError):
    """Raised when a metric has no defined value for its inputs.

    The measuring pipeline resolves this through substitution and a
    low-confidence flag; it is never surfaced as a failed run.
    """

    def __init__(self, metric: str, reason: str):
        super().__init__(
            f"Metric undefined: {metric}",
            details={"metric": metric, "reason": reason},
        )
        self.metric = metric
        self.reason = reason


class InsufficientDataError(AnalysisError):
    """Raised when there's not enough data for analysis."""

    def __init__(self, reason: str, minimum_required: Optional[int] = None):
        details: Dict[str, str] = {"reason": reason}
        if minimum_required is not None:
            details["minimum_required"] = str(minimum_required)

        super().__init__(f"Insufficient data for analysis: {reason}", details=details)
        self.reason = reason
        self.minimum_required = minimum_required
