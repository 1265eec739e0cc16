"""Tests for token extraction and attribution."""

import textwrap

from techdebt_tracker.scanning.parser import parse_source
from techdebt_tracker.scanning.tokens import (
    attribute_tokens,
    count_comment_lines,
    tokenize_source,
    tokenize_text,
)


class TestAttribution:
    """Tokens are owned by the innermost enclosing function."""

    def test_nested_tokens_go_to_inner_function(self):
        source = textwrap.dedent(
            """\
            def outer(a):
                def inner(b):
                    return b
                return inner(a)
            """
        )
        parsed = parse_source(source)
        buckets = attribute_tokens(parsed, tokenize_source(parsed, source))
        outer_words = [t.string for t in buckets[0]]
        inner_words = [t.string for t in buckets[1]]

        assert "outer" in outer_words
        assert "inner" in outer_words  # the call on line 4
        assert outer_words.count("b") == 0
        assert inner_words[:2] == ["def", "inner"]
        assert "a" not in inner_words

    def test_module_level_tokens_dropped(self):
        source = "X = 1\n\ndef f():\n    return X\n"
        parsed = parse_source(source)
        buckets = attribute_tokens(parsed, tokenize_text(source))
        assert len(buckets) == 1
        assert [t.string for t in buckets[0]] == ["def", "f", "(", ")", ":", "return", "X"]

    def test_recovered_file_tokens(self):
        source = "def ok():\n    return 1\n\n\ndef bad(:\n    pass\n"
        parsed = parse_source(source)
        tokens = tokenize_source(parsed, source)
        assert all(t.start[0] <= 2 for t in tokens if t.string.strip())
        assert [t.string for t in attribute_tokens(parsed, tokens)[0]][:2] == ["def", "ok"]


class TestCommentLines:
    def test_counts_comment_only_lines(self):
        source = "# header\nx = 1  # inline\n\n# one\n# two\n"
        assert count_comment_lines(tokenize_text(source)) == 3

    def test_no_comments(self):
        assert count_comment_lines(tokenize_text("x = 1\n")) == 0
