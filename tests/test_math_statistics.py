"""Tests for techdebt_tracker.math.statistics module."""

import pytest

from techdebt_tracker.math.statistics import Statistics


class TestCentralTendency:
    """Mean and median."""

    def test_mean_empty(self):
        """Mean of empty list is 0."""
        assert Statistics.mean([]) == 0.0

    def test_mean_known(self):
        assert Statistics.mean([1, 2, 3, 6]) == pytest.approx(3.0)

    def test_median_even(self):
        assert Statistics.median([1, 2, 3, 10]) == pytest.approx(2.5)

    def test_median_empty(self):
        assert Statistics.median([]) == 0.0


class TestPercentile:
    """Linear-interpolated percentiles."""

    def test_endpoints(self):
        values = [3, 1, 2]
        assert Statistics.percentile(values, 0) == 1.0
        assert Statistics.percentile(values, 100) == 3.0

    def test_interpolates(self):
        assert Statistics.percentile([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 90) == pytest.approx(9.1)

    def test_empty(self):
        assert Statistics.percentile([], 90) == 0.0


class TestRatio:
    def test_ratio(self):
        assert Statistics.ratio(1, 4) == 0.25

    def test_zero_denominator(self):
        assert Statistics.ratio(3, 0) == 0.0
