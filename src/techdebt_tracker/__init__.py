"""
techdebt-tracker - Technical-debt metrics for Python code

Measures cyclomatic complexity, Halstead volume and the Maintainability
Index per function, rolls them up per file and per project, and ranks the
functions most in need of attention.
"""

__version__ = "0.1.0"

from .api import analyze
from .core import check_thresholds, measure_source
from .models import FileStatus, FunctionRecord, ProjectReport, SourceUnit

__all__ = [
    "analyze",  # Main entry point
    "measure_source",  # Single in-memory file
    "check_thresholds",
    "ProjectReport",
    "SourceUnit",
    "FunctionRecord",
    "FileStatus",
]
