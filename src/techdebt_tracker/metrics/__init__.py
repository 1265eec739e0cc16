"""Function-level metrics: complexity, Halstead, Maintainability Index.

Roll-ups and ranking live in ``metrics.aggregate`` and ``metrics.ranking``;
they build report models and are imported from there directly.
"""

from .complexity import ComplexityResult, ComplexityWalker, cyclomatic_complexity, measure_complexity
from .halstead import HalsteadClassifier, HalsteadMetrics, halstead_metrics
from .maintainability import (
    MaintainabilityResult,
    RiskLevel,
    classify_risk,
    complexity_bucket,
    maintainability_index,
    mi_rating,
)

__all__ = [
    "ComplexityResult",
    "ComplexityWalker",
    "cyclomatic_complexity",
    "measure_complexity",
    "HalsteadClassifier",
    "HalsteadMetrics",
    "halstead_metrics",
    "MaintainabilityResult",
    "RiskLevel",
    "classify_risk",
    "complexity_bucket",
    "maintainability_index",
    "mi_rating",
]
