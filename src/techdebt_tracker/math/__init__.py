"""Mathematical utilities for metric aggregation."""

from .statistics import Statistics

__all__ = ["Statistics"]
