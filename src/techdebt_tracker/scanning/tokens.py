"""Token stream extraction and attribution to functions.

The Halstead classifier works on the flattened token stream of one
function. The file is tokenized once and every token is attributed to the
innermost function whose span contains it, so tokens of a nested function
never count toward the function that encloses it.
"""

from __future__ import annotations

import io
import tokenize
from pathlib import Path
from typing import Iterable

from ..exceptions import ParseError
from .syntax import ParsedSource, SourceToken

# Layout and bookkeeping tokens; never operators or operands
LAYOUT_TOKENS = frozenset(
    t
    for t in (
        tokenize.ENCODING,
        tokenize.ENDMARKER,
        tokenize.NEWLINE,
        tokenize.NL,
        tokenize.INDENT,
        tokenize.DEDENT,
        tokenize.COMMENT,
        getattr(tokenize, "FSTRING_START", None),
        getattr(tokenize, "FSTRING_END", None),
        getattr(tokenize, "TSTRING_START", None),
        getattr(tokenize, "TSTRING_END", None),
    )
    if t is not None
)


def tokenize_text(text: str, path: str = "<string>") -> list[SourceToken]:
    """Tokenize text into SourceToken values.

    Raises:
        ParseError: If the tokenizer rejects the text
    """
    try:
        return [
            SourceToken(tok.type, tok.string, tok.start, tok.end)
            for tok in tokenize.generate_tokens(io.StringIO(text).readline)
        ]
    except (tokenize.TokenError, SyntaxError) as e:
        raise ParseError(Path(path), f"tokenize failed: {e}")


def tokenize_source(parsed: ParsedSource, text: str) -> list[SourceToken]:
    """Token stream for a parsed file.

    A cleanly parsed file is tokenized whole. A recovered file is tokenized
    chunk by chunk (only the chunks that parsed), padded so positions stay
    absolute.
    """
    if not parsed.recovered:
        return tokenize_text(text, parsed.path)

    tokens: list[SourceToken] = []
    for first_line, chunk_text in parsed.chunks:
        padded = "\n" * (first_line - 1) + chunk_text
        tokens.extend(
            tok for tok in tokenize_text(padded, parsed.path) if tok.start[0] >= first_line
        )
    return tokens


def attribute_tokens(
    parsed: ParsedSource, tokens: Iterable[SourceToken]
) -> list[list[SourceToken]]:
    """Split code tokens by owning function.

    Returns:
        One token list per entry of ``parsed.functions`` (same order).
        Tokens outside every function are dropped.
    """
    # Pre-order: a nested function overwrites its parent's lines
    owner: dict[int, int] = {}
    for index, fn in enumerate(parsed.functions):
        for line in range(fn.start_line, fn.end_line + 1):
            owner[line] = index

    buckets: list[list[SourceToken]] = [[] for _ in parsed.functions]
    for tok in tokens:
        if tok.type in LAYOUT_TOKENS:
            continue
        index = owner.get(tok.start[0])
        if index is not None:
            buckets[index].append(tok)
    return buckets


def count_comment_lines(tokens: Iterable[SourceToken]) -> int:
    """Count lines holding only a comment (inline comments excluded)."""
    code_lines: set[int] = set()
    comment_lines: set[int] = set()
    for tok in tokens:
        if tok.type == tokenize.COMMENT:
            comment_lines.add(tok.start[0])
        elif tok.type not in LAYOUT_TOKENS:
            code_lines.add(tok.start[0])
    return len(comment_lines - code_lines)
