"""
Maintainability Index and risk classification.

Implements the classic Maintainability Index:

    MI = 171 - 5.2 * ln(V) - 0.23 * G - 16.2 * ln(LOC)

where V is Halstead volume, G is cyclomatic complexity and LOC is lines
of code. The result is clamped into [0, 100]. A zero volume or LOC is
replaced by 1 before taking the logarithm and the result is flagged as
low-confidence.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..config import ThresholdConfig
from ..exceptions import MetricUndefinedError

MI_MIN = 0.0
MI_MAX = 100.0


class RiskLevel(str, Enum):
    """Complexity risk band."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class MaintainabilityResult:
    """Maintainability Index for one function.

    Attributes:
        value: MI clamped into [0, 100]
        raw: MI before clamping
        low_confidence: True when volume or LOC had to be substituted
    """

    value: float
    raw: float
    low_confidence: bool = False


def _log_input(name: str, value: float) -> float:
    if value <= 0:
        raise MetricUndefinedError(f"ln({name})", f"{name} is {value}")
    return value


def maintainability_index(volume: float, complexity: int, loc: int) -> MaintainabilityResult:
    """
    Calculate the Maintainability Index.

    Args:
        volume: Halstead volume
        complexity: Cyclomatic complexity
        loc: Lines of code

    Returns:
        MaintainabilityResult with the clamped value, raw value and
        low-confidence flag
    """
    low_confidence = False
    try:
        volume = _log_input("volume", volume)
    except MetricUndefinedError:
        volume, low_confidence = 1.0, True
    try:
        loc = _log_input("loc", loc)
    except MetricUndefinedError:
        loc, low_confidence = 1, True

    raw = 171 - 5.2 * math.log(volume) - 0.23 * complexity - 16.2 * math.log(loc)
    value = max(MI_MIN, min(MI_MAX, raw))
    return MaintainabilityResult(value=value, raw=raw, low_confidence=low_confidence)


def mi_rating(mi: float) -> str:
    """
    Letter rating for a 0-100 Maintainability Index.

    A: >= 20 (maintainable), B: 10-20 (moderate), C: < 10 (hard to maintain)
    """
    if mi >= 20:
        return "A"
    elif mi >= 10:
        return "B"
    else:
        return "C"


def classify_risk(complexity: float, thresholds: ThresholdConfig) -> RiskLevel:
    """Classify a complexity value against the configured cutoffs."""
    if complexity > thresholds.high_complexity:
        return RiskLevel.HIGH
    elif complexity > thresholds.moderate_complexity:
        return RiskLevel.MODERATE
    else:
        return RiskLevel.LOW


def complexity_bucket(complexity: int) -> str:
    """Distribution bucket: simple (<= 5), moderate (6-10), complex (> 10)."""
    if complexity <= 5:
        return "simple"
    elif complexity <= 10:
        return "moderate"
    else:
        return "complex"
