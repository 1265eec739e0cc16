"""Halstead measures from a function's token stream.

Classification of Python tokens:

    operators   every OP token except closing brackets (a bracket pair
                counts once, as its opening token), and every hard keyword
                (``def``, ``return``, ``if``, ``for``, ``in``, ``not``, ...)
    operands    identifiers, numbers, strings, f-string literal parts and
                the constants ``True``, ``False`` and ``None``

Derived values:
    vocabulary  n = n1 + n2
    length      N = N1 + N2
    volume      V = N * log2(n)
    difficulty  D = (n1 / 2) * (N2 / n2)
    effort      E = D * V

When a function has no operators or no operands the measures are
undefined: ``defined`` is False and volume, difficulty and effort are 0.0.
"""

from __future__ import annotations

import keyword
import math
import tokenize
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from ..scanning.syntax import SourceToken

# Value keywords behave as operands
VALUE_KEYWORDS = frozenset({"True", "False", "None"})

_CLOSING_BRACKETS = frozenset({")", "]", "}"})

_LITERAL_TOKENS = frozenset(
    t
    for t in (
        tokenize.NUMBER,
        tokenize.STRING,
        getattr(tokenize, "FSTRING_MIDDLE", None),
        getattr(tokenize, "TSTRING_MIDDLE", None),
    )
    if t is not None
)


@dataclass(frozen=True)
class HalsteadMetrics:
    """Halstead counts and derived measures for one function.

    Attributes:
        n1: Distinct operators
        n2: Distinct operands
        N1: Total operator occurrences
        N2: Total operand occurrences
    """

    n1: int = 0
    n2: int = 0
    N1: int = 0
    N2: int = 0

    @property
    def defined(self) -> bool:
        """False when there is no operator or no operand to measure."""
        return self.n1 > 0 and self.n2 > 0

    @property
    def vocabulary(self) -> int:
        return self.n1 + self.n2

    @property
    def length(self) -> int:
        return self.N1 + self.N2

    @property
    def volume(self) -> float:
        if not self.defined:
            return 0.0
        return self.length * math.log2(self.vocabulary)

    @property
    def difficulty(self) -> float:
        if not self.defined:
            return 0.0
        return (self.n1 / 2) * (self.N2 / self.n2)

    @property
    def effort(self) -> float:
        return self.difficulty * self.volume

    @property
    def time_seconds(self) -> float:
        """Estimated implementation time, E / 18."""
        return self.effort / 18

    @property
    def bugs(self) -> float:
        """Estimated delivered bugs, V / 3000."""
        return self.volume / 3000

    def __add__(self, other: "HalsteadMetrics") -> "HalsteadMetrics":
        # Sums of counts; distinct counts are not re-deduplicated across functions
        return HalsteadMetrics(
            n1=self.n1 + other.n1,
            n2=self.n2 + other.n2,
            N1=self.N1 + other.N1,
            N2=self.N2 + other.N2,
        )

    def to_dict(self) -> dict:
        return {
            "n1": self.n1,
            "n2": self.n2,
            "N1": self.N1,
            "N2": self.N2,
            "vocabulary": self.vocabulary,
            "length": self.length,
            "volume": round(self.volume, 4),
            "difficulty": round(self.difficulty, 4),
            "effort": round(self.effort, 4),
            "time_seconds": round(self.time_seconds, 4),
            "bugs": round(self.bugs, 4),
            "defined": self.defined,
        }


class HalsteadClassifier:
    """Tallies operators and operands from a token stream.

    Example:
        >>> classifier = HalsteadClassifier()
        >>> classifier.feed(tokens)
        >>> classifier.metrics().volume
        42.0
    """

    def __init__(self) -> None:
        self.operators: Counter = Counter()
        self.operands: Counter = Counter()

    def classify(self, tok: SourceToken) -> str | None:
        """Return ``"operator"``, ``"operand"`` or None for a token."""
        if tok.type == tokenize.OP:
            if tok.string in _CLOSING_BRACKETS:
                return None
            return "operator"
        if tok.type == tokenize.NAME:
            if tok.string in VALUE_KEYWORDS:
                return "operand"
            if keyword.iskeyword(tok.string):
                return "operator"
            return "operand"
        if tok.type in _LITERAL_TOKENS:
            return "operand"
        return None

    def feed(self, tokens: Iterable[SourceToken]) -> None:
        for tok in tokens:
            kind = self.classify(tok)
            if kind == "operator":
                self.operators[tok.string] += 1
            elif kind == "operand":
                self.operands[tok.string] += 1

    def metrics(self) -> HalsteadMetrics:
        return HalsteadMetrics(
            n1=len(self.operators),
            n2=len(self.operands),
            N1=sum(self.operators.values()),
            N2=sum(self.operands.values()),
        )


def halstead_metrics(tokens: Iterable[SourceToken]) -> HalsteadMetrics:
    """Halstead measures for one function's tokens."""
    classifier = HalsteadClassifier()
    classifier.feed(tokens)
    return classifier.metrics()
