"""Cyclomatic complexity walker.

Complexity starts at 1 (one linear path) and grows by 1 per decision
point found in the function body:

    if / elif                 +1 each (``else`` adds nothing)
    conditional expression    +1
    for / async for / while   +1 (loop ``else`` adds nothing)
    comprehension             +1 per ``for`` clause, +1 per ``if`` filter
    match                     +1 per ``case`` beyond the first
    except / except*          +1 per handler
    and / or                  +(operands - 1) per boolean expression

Nested ``def``, ``async def`` and ``class`` bodies are not entered; nested
functions are measured as records of their own. A ``lambda`` is an
expression of its host function and its decision points count there.
Decorators and default argument values run in the enclosing scope and are
not part of the body.
"""

from __future__ import annotations

import ast
from collections import Counter
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ComplexityResult:
    """Outcome of walking one function body.

    Attributes:
        complexity: Cyclomatic complexity, always >= 1
        max_nesting: Deepest nesting of control blocks in the body
        decisions: Decision points by construct name
    """

    complexity: int
    max_nesting: int = 0
    decisions: Counter = field(default_factory=Counter)


class ComplexityWalker(ast.NodeVisitor):
    """Counts decision points and control-block nesting for one function."""

    def __init__(self) -> None:
        self.decisions: Counter = Counter()
        self.max_nesting = 0
        self._depth = 0

    @property
    def complexity(self) -> int:
        return 1 + sum(self.decisions.values())

    def walk(self, node: ast.AST) -> ComplexityResult:
        """Walk a function definition's body."""
        for stmt in getattr(node, "body", []):
            self.visit(stmt)
        return ComplexityResult(
            complexity=self.complexity,
            max_nesting=self.max_nesting,
            decisions=Counter(self.decisions),
        )

    # ── Scopes measured elsewhere ─────────────────────────────────

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        return

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        return

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        return

    # ── Nesting helpers ───────────────────────────────────────────

    def _nested(self, nodes) -> None:
        self._depth += 1
        self.max_nesting = max(self.max_nesting, self._depth)
        for child in nodes:
            self.visit(child)
        self._depth -= 1

    # ── Branches ──────────────────────────────────────────────────

    def visit_If(self, node: ast.If) -> None:
        self.decisions["if"] += 1
        self.visit(node.test)
        self._nested(node.body)
        if len(node.orelse) == 1 and isinstance(node.orelse[0], ast.If):
            # elif: same level as the if it continues
            self.visit(node.orelse[0])
        elif node.orelse:
            self._nested(node.orelse)

    def visit_IfExp(self, node: ast.IfExp) -> None:
        self.decisions["ternary"] += 1
        self.generic_visit(node)

    def _visit_loop(self, node) -> None:
        self.decisions["loop"] += 1
        if isinstance(node, ast.While):
            self.visit(node.test)
        else:
            self.visit(node.target)
            self.visit(node.iter)
        self._nested(node.body)
        if node.orelse:
            self._nested(node.orelse)

    visit_For = _visit_loop
    visit_AsyncFor = _visit_loop
    visit_While = _visit_loop

    def visit_comprehension(self, node: ast.comprehension) -> None:
        self.decisions["comprehension"] += 1 + len(node.ifs)
        self.generic_visit(node)

    def visit_Match(self, node) -> None:
        self.decisions["case"] += max(len(node.cases) - 1, 0)
        self.visit(node.subject)
        self._nested(node.cases)

    def _visit_try(self, node) -> None:
        self._nested(node.body)
        for handler in node.handlers:
            self.visit(handler)
        if node.orelse:
            self._nested(node.orelse)
        if node.finalbody:
            self._nested(node.finalbody)

    visit_Try = _visit_try
    visit_TryStar = _visit_try

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
        self.decisions["except"] += 1
        if node.type is not None:
            self.visit(node.type)
        self._nested(node.body)

    def visit_BoolOp(self, node: ast.BoolOp) -> None:
        self.decisions["boolean"] += len(node.values) - 1
        self.generic_visit(node)

    def _visit_with(self, node) -> None:
        for item in node.items:
            self.visit(item)
        self._nested(node.body)

    visit_With = _visit_with
    visit_AsyncWith = _visit_with


def measure_complexity(node: ast.AST) -> ComplexityResult:
    """Walk one function definition and return its complexity result."""
    return ComplexityWalker().walk(node)


def cyclomatic_complexity(node: ast.AST) -> int:
    """Cyclomatic complexity of one function definition."""
    return measure_complexity(node).complexity
