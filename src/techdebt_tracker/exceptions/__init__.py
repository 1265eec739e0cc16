"""Exception hierarchy for techdebt-tracker."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    InsufficientDataError,
    MetricUndefinedError,
    ParseError,
)
from .base import TechDebtError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)
from .gating import ThresholdExceeded

__all__ = [
    "TechDebtError",
    "AnalysisError",
    "FileAccessError",
    "ParseError",
    "MetricUndefinedError",
    "InsufficientDataError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "ThresholdExceeded",
]
