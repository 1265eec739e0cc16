"""Descriptive statistics over metric values."""

import statistics as stdlib_stats
from typing import Sequence

import numpy as np


class Statistics:
    """Statistical summary methods."""

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        """Compute arithmetic mean (0.0 for no values)."""
        if not values:
            return 0.0
        return float(stdlib_stats.fmean(values))

    @staticmethod
    def median(values: Sequence[float]) -> float:
        """Compute median (0.0 for no values)."""
        if not values:
            return 0.0
        return float(stdlib_stats.median(values))

    @staticmethod
    def percentile(values: Sequence[float], q: float) -> float:
        """
        Compute the q-th percentile with linear interpolation.

        Args:
            values: Observations
            q: Percentile in [0, 100]

        Returns:
            Percentile value, 0.0 for no values
        """
        if not values:
            return 0.0
        return float(np.percentile(np.asarray(values, dtype=float), q))

    @staticmethod
    def ratio(part: float, whole: float) -> float:
        """part / whole, 0.0 when whole is 0."""
        if whole == 0:
            return 0.0
        return part / whole
