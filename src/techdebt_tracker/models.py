"""Data models for techdebt-tracker.

Ownership runs one way: a SourceUnit owns its FunctionRecords, summaries
and the ProjectReport only refer to records that already exist. Every
model is frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .metrics.halstead import HalsteadMetrics
from .metrics.maintainability import RiskLevel
from .scanning.syntax import ParseIssue

# Bumped whenever a key in ProjectReport.to_dict() is renamed or moved
SCHEMA_VERSION = 1

_PRECISION = 4


class FileStatus(str, Enum):
    """How much of a file's metrics could be trusted."""

    COMPLETE = "complete"
    DEGRADED = "degraded"  # partial parse or substituted metric
    FAILED = "failed"  # unreadable or unparseable


@dataclass(frozen=True)
class FunctionRecord:
    """Metrics for one function or method.

    Attributes:
        path: File the function lives in (relative to the analysis root)
        name: Qualified name (``Class.method``, ``outer.inner``)
        line: Line of the ``def`` keyword
        loc: Physical lines of the definition
        complexity: Cyclomatic complexity (>= 1)
        halstead: Halstead counts and measures
        maintainability_index: MI clamped into [0, 100]
        raw_maintainability_index: MI before clamping
        low_confidence: True when MI needed a volume/LOC substitution
        risk: Risk band of ``complexity``
        max_nesting: Deepest control-block nesting in the body
        parent: Qualified name of the enclosing function, if nested
    """

    path: str
    name: str
    line: int
    loc: int
    complexity: int
    halstead: HalsteadMetrics
    maintainability_index: float
    raw_maintainability_index: float
    low_confidence: bool = False
    risk: RiskLevel = RiskLevel.LOW
    max_nesting: int = 0
    parent: Optional[str] = None

    def rank_key(self) -> Tuple[Any, ...]:
        """Total order for offender ranking: worst first."""
        return (-self.complexity, self.maintainability_index, self.path, self.name, self.line)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.path,
            "function": self.name,
            "line": self.line,
            "loc": self.loc,
            "complexity": self.complexity,
            "maintainability_index": round(self.maintainability_index, _PRECISION),
            "risk": self.risk.value,
            "low_confidence": self.low_confidence,
            "max_nesting": self.max_nesting,
            "halstead": self.halstead.to_dict(),
        }


@dataclass(frozen=True)
class FileError:
    """A per-file problem that kept some or all metrics out of the report.

    Attributes:
        path: File the problem belongs to
        kind: ``"parse"`` or ``"io"``
        message: Human-readable reason
        line: Line of the problem, when known
    """

    path: str
    kind: str
    message: str
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "kind": self.kind, "message": self.message, "line": self.line}


@dataclass(frozen=True)
class SourceUnit:
    """One analyzed file.

    Attributes:
        path: File path relative to the analysis root
        loc: Raw physical line count
        functions: Function records in source order
        status: complete / degraded / failed
        comment_lines: Lines holding only a comment
        issues: Regions the parser skipped (degraded files)
        error: Why the file failed (failed files)
    """

    path: str
    loc: int
    functions: Tuple[FunctionRecord, ...] = ()
    status: FileStatus = FileStatus.COMPLETE
    comment_lines: int = 0
    issues: Tuple[ParseIssue, ...] = ()
    error: Optional[FileError] = None

    @property
    def measured(self) -> bool:
        """True if the file contributes to metrics."""
        return self.status is not FileStatus.FAILED

    @classmethod
    def failed(cls, path: str, error: FileError, loc: int = 0) -> "SourceUnit":
        return cls(path=path, loc=loc, status=FileStatus.FAILED, error=error)


@dataclass(frozen=True)
class FileSummary:
    """Per-file roll-up of function metrics."""

    unit: SourceUnit
    total_complexity: int
    mean_complexity: float
    mean_maintainability: float
    max_complexity: int
    risk: RiskLevel
    comment_density: float
    longest_function_loc: int
    max_nesting: int

    @property
    def path(self) -> str:
        return self.unit.path

    @property
    def status(self) -> FileStatus:
        return self.unit.status

    def to_dict(self) -> Dict[str, Any]:
        unit = self.unit
        return {
            "path": unit.path,
            "status": unit.status.value,
            "loc": unit.loc,
            "function_count": len(unit.functions),
            "total_complexity": self.total_complexity,
            "mean_complexity": round(self.mean_complexity, _PRECISION),
            "mean_maintainability": round(self.mean_maintainability, _PRECISION),
            "max_complexity": self.max_complexity,
            "risk": self.risk.value,
            "comment_lines": unit.comment_lines,
            "comment_density": round(self.comment_density, _PRECISION),
            "longest_function_loc": self.longest_function_loc,
            "max_nesting": self.max_nesting,
            "parse_issues": [
                {"line": i.line, "end_line": i.end_line, "message": i.message}
                for i in unit.issues
            ],
            "error": unit.error.to_dict() if unit.error else None,
            "functions": [fn.to_dict() for fn in unit.functions],
        }


@dataclass(frozen=True)
class ProjectSummary:
    """Project-level totals and means over every measured function."""

    total_loc: int
    kloc: float
    file_count: int
    files_analyzed: int
    files_degraded: int
    files_failed: int
    files_skipped: int
    function_count: int
    total_complexity: int
    mean_complexity: float
    median_complexity: float
    p90_complexity: float
    max_complexity: int
    mean_maintainability: float
    risk: RiskLevel
    comment_lines: int
    comment_density: float
    longest_function_loc: int
    max_nesting: int
    file_with_max_complexity: Optional[str]
    max_file_complexity: int
    distribution: Dict[str, int] = field(default_factory=dict)
    halstead: HalsteadMetrics = field(default_factory=HalsteadMetrics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_loc": self.total_loc,
            "kloc": round(self.kloc, _PRECISION),
            "file_count": self.file_count,
            "files_analyzed": self.files_analyzed,
            "files_degraded": self.files_degraded,
            "files_failed": self.files_failed,
            "files_skipped": self.files_skipped,
            "function_count": self.function_count,
            "total_complexity": self.total_complexity,
            "mean_complexity": round(self.mean_complexity, _PRECISION),
            "median_complexity": round(self.median_complexity, _PRECISION),
            "p90_complexity": round(self.p90_complexity, _PRECISION),
            "max_complexity": self.max_complexity,
            "mean_maintainability": round(self.mean_maintainability, _PRECISION),
            "risk": self.risk.value,
            "comment_lines": self.comment_lines,
            "comment_density": round(self.comment_density, _PRECISION),
            "longest_function_loc": self.longest_function_loc,
            "max_nesting": self.max_nesting,
            "file_with_max_complexity": self.file_with_max_complexity,
            "max_file_complexity": self.max_file_complexity,
            "distribution": dict(self.distribution),
            "halstead": {
                "n1": self.halstead.n1,
                "n2": self.halstead.n2,
                "N1": self.halstead.N1,
                "N2": self.halstead.N2,
            },
        }


@dataclass(frozen=True)
class ThresholdStatus:
    """Outcome of the ``max_complexity`` gate."""

    max_complexity: Optional[int]
    violations: Tuple[FunctionRecord, ...] = ()

    @property
    def exceeded(self) -> bool:
        return bool(self.violations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_complexity": self.max_complexity,
            "exceeded": self.exceeded,
            "violations": [
                {"file": fn.path, "function": fn.name, "line": fn.line, "complexity": fn.complexity}
                for fn in self.violations
            ],
        }


@dataclass(frozen=True)
class ProjectReport:
    """Final, read-only output of one analysis run.

    This is the single hand-off point to formatters and other consumers.
    """

    root: str
    summary: ProjectSummary
    top_offenders: Tuple[FunctionRecord, ...]
    files: Tuple[FileSummary, ...]
    errors: Tuple[FileError, ...] = ()
    skipped: Tuple[str, ...] = ()
    complete: bool = True
    threshold: ThresholdStatus = field(default_factory=lambda: ThresholdStatus(None))

    @property
    def functions(self) -> Tuple[FunctionRecord, ...]:
        """Every measured function in file order."""
        return tuple(fn for f in self.files for fn in f.unit.functions)

    def to_dict(self) -> Dict[str, Any]:
        """Stable-keyed record for serialization and CI diffing."""
        return {
            "schema_version": SCHEMA_VERSION,
            "root": self.root,
            "complete": self.complete,
            "summary": self.summary.to_dict(),
            "top_offenders": [fn.to_dict() for fn in self.top_offenders],
            "files": [f.to_dict() for f in self.files],
            "errors": [e.to_dict() for e in self.errors],
            "skipped": list(self.skipped),
            "threshold": self.threshold.to_dict(),
        }
