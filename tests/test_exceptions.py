"""Tests for the exception hierarchy."""

from pathlib import Path

from techdebt_tracker.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAccessError,
    InsufficientDataError,
    InvalidConfigError,
    InvalidPathError,
    MetricUndefinedError,
    ParseError,
    TechDebtError,
    ThresholdExceeded,
)


class TestHierarchy:
    def test_analysis_errors(self):
        for exc in (
            ParseError(Path("a.py"), "bad"),
            FileAccessError(Path("a.py"), "denied"),
            MetricUndefinedError("ln(volume)", "volume is 0"),
            InsufficientDataError("nothing"),
        ):
            assert isinstance(exc, AnalysisError)
            assert isinstance(exc, TechDebtError)

    def test_configuration_errors(self):
        assert isinstance(InvalidPathError(Path("x"), "missing"), ConfigurationError)
        assert isinstance(InvalidConfigError("top_n", 0, "too small"), ConfigurationError)

    def test_threshold_is_not_an_analysis_error(self):
        exc = ThresholdExceeded(10, [("a.py", "f", 1, 12)])
        assert isinstance(exc, TechDebtError)
        assert not isinstance(exc, AnalysisError)


class TestMessages:
    def test_details_in_str(self):
        exc = ParseError(Path("pkg/a.py"), "invalid syntax", line=3)
        text = str(exc)
        assert "pkg/a.py" in text
        assert "line=3" in text
        assert exc.details["reason"] == "invalid syntax"

    def test_no_details(self):
        assert str(TechDebtError("plain")) == "plain"

    def test_threshold_worst(self):
        exc = ThresholdExceeded(10, [("a.py", "f", 1, 12), ("b.py", "g", 5, 31)])
        assert exc.worst == 31
        assert "(31) exceeds threshold (10)" in str(exc)
