"""Tests for techdebt_tracker.metrics.halstead."""

import math
import tokenize

import pytest

from techdebt_tracker.metrics.halstead import HalsteadClassifier, HalsteadMetrics, halstead_metrics
from techdebt_tracker.scanning.syntax import SourceToken
from techdebt_tracker.scanning.tokens import tokenize_text


def _tok(kind, text):
    return SourceToken(kind, text, (1, 0), (1, len(text)))


class TestClassification:
    """Operator / operand classification of single tokens."""

    @pytest.fixture
    def classifier(self):
        return HalsteadClassifier()

    def test_keywords_are_operators(self, classifier):
        for word in ("def", "return", "if", "for", "in", "not", "and", "lambda"):
            assert classifier.classify(_tok(tokenize.NAME, word)) == "operator"

    def test_value_keywords_are_operands(self, classifier):
        for word in ("True", "False", "None"):
            assert classifier.classify(_tok(tokenize.NAME, word)) == "operand"

    def test_identifiers_and_literals_are_operands(self, classifier):
        assert classifier.classify(_tok(tokenize.NAME, "total")) == "operand"
        assert classifier.classify(_tok(tokenize.NUMBER, "42")) == "operand"
        assert classifier.classify(_tok(tokenize.STRING, "'x'")) == "operand"

    def test_punctuation(self, classifier):
        """Opening brackets count; closing brackets are ignored."""
        assert classifier.classify(_tok(tokenize.OP, "(")) == "operator"
        assert classifier.classify(_tok(tokenize.OP, ".")) == "operator"
        assert classifier.classify(_tok(tokenize.OP, ")")) is None
        assert classifier.classify(_tok(tokenize.OP, "]")) is None

    def test_layout_tokens_ignored(self, classifier):
        assert classifier.classify(_tok(tokenize.NEWLINE, "\n")) is None
        assert classifier.classify(_tok(tokenize.COMMENT, "# note")) is None


class TestCounts:
    """Counting over a real token stream."""

    def test_simple_function(self):
        """def add(a, b): return a + b

        operators: def ( , : return +      -> n1=6, N1=6
        operands:  add a b a b             -> n2=3, N2=5
        """
        tokens = tokenize_text("def add(a, b):\n    return a + b\n")
        m = halstead_metrics(tokens)
        assert (m.n1, m.n2, m.N1, m.N2) == (6, 3, 6, 5)
        assert m.vocabulary == 9
        assert m.length == 11
        assert m.volume == pytest.approx(11 * math.log2(9))
        assert m.difficulty == pytest.approx(5.0)
        assert m.effort == pytest.approx(5.0 * 11 * math.log2(9))

    def test_repeated_operands_counted_once_in_vocabulary(self):
        tokens = tokenize_text("x = x + x\n")
        m = halstead_metrics(tokens)
        assert m.n2 == 1
        assert m.N2 == 3
        assert m.n1 == 2  # = +


class TestUndefined:
    """Degenerate inputs."""

    def test_no_operands(self):
        """Zero operands: volume and difficulty are 0, not an error."""
        m = HalsteadMetrics(n1=2, n2=0, N1=3, N2=0)
        assert not m.defined
        assert m.volume == 0.0
        assert m.difficulty == 0.0
        assert m.effort == 0.0

    def test_empty_stream(self):
        m = halstead_metrics([])
        assert not m.defined
        assert m.volume == 0.0

    def test_to_dict_marks_undefined(self):
        data = HalsteadMetrics().to_dict()
        assert data["defined"] is False
        assert data["volume"] == 0.0


class TestAddition:
    """Summing metrics for project totals."""

    def test_add_sums_counts(self):
        total = HalsteadMetrics(1, 2, 3, 4) + HalsteadMetrics(5, 6, 7, 8)
        assert (total.n1, total.n2, total.N1, total.N2) == (6, 8, 10, 12)


class TestEstimates:
    """Time and bug estimates derived from effort and volume."""

    def test_time_and_bugs(self):
        m = halstead_metrics(tokenize_text("def add(a, b):\n    return a + b\n"))
        assert m.time_seconds == pytest.approx(m.effort / 18)
        assert m.bugs == pytest.approx(m.volume / 3000)

    def test_estimates_in_to_dict(self):
        m = HalsteadMetrics(n1=6, n2=3, N1=6, N2=5)
        data = m.to_dict()
        assert data["time_seconds"] == pytest.approx(m.effort / 18, abs=1e-4)
        assert data["bugs"] == pytest.approx(m.volume / 3000, abs=1e-4)

    def test_undefined_estimates_are_zero(self):
        data = HalsteadMetrics().to_dict()
        assert data["time_seconds"] == 0.0
        assert data["bugs"] == 0.0
