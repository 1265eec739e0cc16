"""CI gating outcome raised when a complexity budget is exceeded."""

from typing import List, Tuple

from .base import TechDebtError

# (file, function, line, complexity)
Violation = Tuple[str, str, int, int]


class ThresholdExceeded(TechDebtError):
    """Raised when at least one function is above ``max_complexity``.

    This is an expected, reportable outcome rather than a crash; the CLI
    maps it to its own exit code.
    """

    def __init__(self, max_complexity: int, violations: List[Violation]):
        worst = max((v[3] for v in violations), default=0)
        super().__init__(
            f"Maximum cyclomatic complexity ({worst}) exceeds threshold ({max_complexity})",
            details={"violations": str(len(violations))},
        )
        self.max_complexity = max_complexity
        self.violations = violations
        self.worst = worst
