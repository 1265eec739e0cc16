"""Syntax models for parsed Python source files.

ParsedSource is the structural tree handed to the metric walkers:
    - Per-function: qualified name, boundary lines, AST node, parent
    - Per-file: physical line count, recovered parse issues

Positions follow the ``ast`` / ``tokenize`` conventions: lines are
1-indexed, columns are 0-indexed.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Optional, Union

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]

# (line, column)
Position = tuple[int, int]


@dataclass(frozen=True)
class SourceToken:
    """One lexical token from ``tokenize``.

    Attributes:
        type: ``tokenize`` token type (e.g. ``tokenize.NAME``)
        string: Token text
        start: Start position
        end: End position
    """

    type: int
    string: str
    start: Position
    end: Position


@dataclass(frozen=True)
class ParseIssue:
    """A region of a file the parser could not accept.

    Attributes:
        line: First line of the rejected region (1-indexed)
        end_line: Last line of the rejected region
        message: Parser message
    """

    line: int
    end_line: int
    message: str


@dataclass
class FunctionSyntax:
    """A function or method definition found in the parse tree.

    Attributes:
        name: Bare function name
        qualified_name: Dotted name including enclosing classes/functions
        start_line: Line of the ``def`` keyword (decorators excluded)
        end_line: Last line of the body
        node: The ``ast`` node for the definition
        parent: Qualified name of the enclosing function, if nested
        is_async: True for ``async def``
    """

    name: str
    qualified_name: str
    start_line: int
    end_line: int
    node: FunctionNode
    parent: Optional[str] = None
    is_async: bool = False

    @property
    def loc(self) -> int:
        """Physical lines spanned by the definition."""
        return self.end_line - self.start_line + 1


@dataclass
class ParsedSource:
    """Structural view of one source file.

    Attributes:
        path: File path as reported
        line_count: Raw physical line count
        functions: Functions in source order (outer before nested)
        issues: Regions rejected by the parser (empty on a clean parse)
        chunks: Recovered top-level chunks as (first_line, text); empty
            on a clean parse
    """

    path: str
    line_count: int
    functions: list[FunctionSyntax] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)
    chunks: list[tuple[int, str]] = field(default_factory=list)

    @property
    def recovered(self) -> bool:
        """True if parts of the file had to be skipped."""
        return bool(self.issues)
