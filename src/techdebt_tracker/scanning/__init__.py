"""Source scanning: discovery, parsing and token streams."""

from .discovery import collect_source_files
from .parser import parse_source, split_chunks
from .syntax import FunctionSyntax, ParsedSource, ParseIssue, SourceToken
from .tokens import attribute_tokens, count_comment_lines, tokenize_source, tokenize_text

__all__ = [
    "collect_source_files",
    "parse_source",
    "split_chunks",
    "FunctionSyntax",
    "ParsedSource",
    "ParseIssue",
    "SourceToken",
    "attribute_tokens",
    "count_comment_lines",
    "tokenize_source",
    "tokenize_text",
]
