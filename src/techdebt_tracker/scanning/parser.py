"""Python parser adapter: source text -> ParsedSource.

The interpreter's own ``ast`` module is the grammar. A file that parses
cleanly yields every ``def`` / ``async def`` in it, methods and nested
functions included.

A file with a syntax error is not discarded outright. It is cut into
top-level chunks (a chunk starts at a logical line in column 0 and keeps
its decorators) and each chunk is parsed on its own, padded with blank
lines so line numbers stay absolute. A broken ``class`` chunk is cut again
at method level, so one bad method does not hide its siblings. Chunks that
parse contribute their functions; chunks that do not are recorded as
ParseIssue entries. When no function survives, ``ParseError`` is raised.

Usage:
    parsed = parse_source(text, "pkg/module.py")
    for fn in parsed.functions:
        print(fn.qualified_name, fn.start_line, fn.end_line)
"""

from __future__ import annotations

import ast
import io
import re
import tokenize
from pathlib import Path
from typing import Optional

from ..exceptions import ParseError
from ..logging_config import get_logger
from .syntax import FunctionSyntax, ParsedSource, ParseIssue

logger = get_logger(__name__)

# Column-0 lines that continue the previous top-level statement
_CONTINUATION_KEYWORDS = ("else", "elif", "except", "finally")
_CLOSERS = (")", "]", "}")

_CLASS_HEADER = re.compile(r"class\s+(\w+)")

# Longest multi-line class header tried when descending into a broken class
_MAX_HEADER_LINES = 50


def parse_source(text: str, path: str = "<string>") -> ParsedSource:
    """Parse one file's text into a ParsedSource.

    Args:
        text: Full source text
        path: Path used in diagnostics and the resulting ParsedSource

    Returns:
        ParsedSource; ``issues`` is non-empty when chunk recovery was used

    Raises:
        ParseError: If no function in the text conforms to the Python grammar
    """
    line_count = len(text.splitlines())

    try:
        tree = ast.parse(text, filename=path)
    except SyntaxError as e:
        logger.debug(f"{path}: syntax error at line {e.lineno}, attempting chunk recovery")
        return _recover(text, path, line_count, e)
    except ValueError as e:
        # NUL bytes are rejected with ValueError before tokenizing
        raise ParseError(Path(path), str(e))

    return ParsedSource(path=path, line_count=line_count, functions=collect_functions(tree))


def collect_functions(tree: ast.AST, scope: Optional[list[str]] = None) -> list[FunctionSyntax]:
    """Collect function definitions in pre-order (outer before nested).

    ``scope`` prefixes qualified names, for a class body parsed on its own.
    """
    collector = _FunctionCollector(scope)
    collector.visit(tree)
    return collector.functions


class _FunctionCollector(ast.NodeVisitor):
    """Walks a module, naming functions by their enclosing scopes."""

    def __init__(self, scope: Optional[list[str]] = None) -> None:
        self.functions: list[FunctionSyntax] = []
        self._scope: list[str] = list(scope or [])
        self._enclosing: list[str] = []

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._scope.append(node.name)
        self.generic_visit(node)
        self._scope.pop()

    def _visit_function(self, node) -> None:
        qualified = ".".join(self._scope + [node.name])
        self.functions.append(
            FunctionSyntax(
                name=node.name,
                qualified_name=qualified,
                start_line=node.lineno,
                end_line=node.end_lineno or node.lineno,
                node=node,
                parent=self._enclosing[-1] if self._enclosing else None,
                is_async=isinstance(node, ast.AsyncFunctionDef),
            )
        )
        self._scope.append(node.name)
        self._enclosing.append(qualified)
        self.generic_visit(node)
        self._enclosing.pop()
        self._scope.pop()

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function


# ── Chunk recovery ────────────────────────────────────────────────


def _recover(text: str, path: str, line_count: int, error: SyntaxError) -> ParsedSource:
    """Parse a file chunk by chunk after a whole-file syntax error."""
    parsed = ParsedSource(path=path, line_count=line_count)
    total = _parse_chunks(text, 1, [], path, parsed)

    # Only a surviving function makes the file measurable
    if not parsed.functions:
        raise ParseError(Path(path), error.msg or str(error), line=error.lineno)

    # Chunks are parsed independently; keep functions in source order
    parsed.functions.sort(key=lambda fn: (fn.start_line, -fn.end_line))

    logger.debug(
        f"{path}: recovered {len(parsed.chunks)}/{total} chunks, "
        f"{len(parsed.functions)} functions"
    )
    return parsed


def _parse_chunks(
    text: str, first_line: int, scope: list[str], path: str, parsed: ParsedSource
) -> int:
    """Parse each chunk of ``text`` on its own, descending into broken classes.

    Args:
        text: Source with its chunks at column 0
        first_line: Absolute line number of the first line of ``text``
        scope: Enclosing class names for qualified function names
        path: Path used in diagnostics
        parsed: Receives functions, chunks and issues

    Returns:
        Number of chunks tried
    """
    chunks = split_chunks(text)
    total = len(chunks)
    for start, end, chunk_text in chunks:
        chunk_first = first_line + start - 1
        chunk_last = first_line + end - 1
        padded = "\n" * (chunk_first - 1) + chunk_text
        try:
            tree = ast.parse(padded, filename=path)
        except (SyntaxError, ValueError) as e:
            issues_before = len(parsed.issues)
            body = class_body(chunk_text)
            if body is not None:
                name, offset, body_text = body
                total += _parse_chunks(
                    body_text, chunk_first + offset, scope + [name], path, parsed
                )
            if len(parsed.issues) == issues_before:
                line = getattr(e, "lineno", None) or chunk_first
                message = getattr(e, "msg", None) or str(e)
                parsed.issues.append(ParseIssue(line=line, end_line=chunk_last, message=message))
            continue
        parsed.functions.extend(collect_functions(tree, scope))
        parsed.chunks.append((chunk_first, chunk_text))
    return total


def class_body(chunk_text: str) -> Optional[tuple[str, int, str]]:
    """Split a top-level ``class`` chunk into its name and dedented body.

    The header (possibly spanning several lines) must parse on its own.

    Returns:
        (class name, line offset of the body within the chunk, body text
        shifted to column 0), or None if the chunk is not a class with an
        indented body
    """
    lines = chunk_text.splitlines(keepends=True)
    header = 0
    while header < len(lines) and (
        not lines[header].strip() or lines[header].lstrip().startswith(("@", "#"))
    ):
        header += 1
    match = _CLASS_HEADER.match(lines[header]) if header < len(lines) else None
    if match is None:
        return None

    for end in range(header, min(len(lines), header + _MAX_HEADER_LINES)):
        candidate = "".join(lines[header:end + 1])
        try:
            ast.parse(candidate + "    pass\n")
        except (SyntaxError, ValueError):
            continue
        break
    else:
        return None

    body = lines[end + 1:]
    indent = next(
        (
            line[: len(line) - len(line.lstrip(" \t"))]
            for line in body
            if line.strip() and not line.lstrip().startswith("#")
        ),
        "",
    )
    if not indent:
        return None

    dedented = [
        line[len(indent):] if line.startswith(indent) else line.lstrip(" \t")
        for line in body
    ]
    return match.group(1), end + 1, "".join(dedented)


def split_chunks(text: str) -> list[tuple[int, int, str]]:
    """Cut text into top-level chunks.

    Returns:
        List of (first_line, last_line, chunk_text); lines are 1-indexed
    """
    lines = text.splitlines(keepends=True)
    if not lines:
        return []

    logical_starts, known_until = _logical_line_starts(text)

    starts: list[int] = [0]
    previous_was_decorator = False
    for idx, line in enumerate(lines):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if line[0] in " \t":
            previous_was_decorator = False
            continue
        lineno = idx + 1
        if lineno <= known_until and lineno not in logical_starts:
            continue
        if stripped.startswith(_CLOSERS) or _starts_with_keyword(stripped, _CONTINUATION_KEYWORDS):
            previous_was_decorator = False
            continue
        if idx != 0 and not previous_was_decorator:
            starts.append(idx)
        previous_was_decorator = stripped.startswith("@")

    chunks = []
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(lines)
        chunks.append((start + 1, end, "".join(lines[start:end])))
    return chunks


def _starts_with_keyword(stripped: str, keywords: tuple[str, ...]) -> bool:
    for kw in keywords:
        if stripped.startswith(kw):
            rest = stripped[len(kw):len(kw) + 1]
            if not rest or not (rest.isalnum() or rest == "_"):
                return True
    return False


def _logical_line_starts(text: str) -> tuple[set[int], int]:
    """Find lines that begin a logical line, as far as the tokenizer gets.

    Lines inside multi-line strings or open brackets are not logical line
    starts. Only completed logical lines are trusted: after a lexical error
    (an unclosed bracket swallows the rest of the file) the unfinished
    statement and everything after it are left to the column-0 rule.

    Returns:
        (set of 1-indexed logical start lines, last line of the last
        completed logical line)
    """
    starts: set[int] = set()
    known_until = 0
    expect_start = True
    skip = {tokenize.NL, tokenize.COMMENT, tokenize.INDENT, tokenize.DEDENT, tokenize.ENCODING}
    try:
        for tok in tokenize.generate_tokens(io.StringIO(text).readline):
            if tok.type == tokenize.NEWLINE:
                expect_start = True
                known_until = tok.end[0]
            elif tok.type == tokenize.ENDMARKER:
                known_until = tok.start[0]
            elif expect_start and tok.type not in skip:
                starts.add(tok.start[0])
                expect_start = False
    except (tokenize.TokenError, SyntaxError):
        pass
    return starts, known_until
