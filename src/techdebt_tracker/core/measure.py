"""Per-file measurement: source text -> SourceUnit.

measure_source() runs the whole single-file pipeline:

    parse -> tokenize -> attribute tokens -> complexity + Halstead -> MI

analyze_file() wraps it with reading from disk and turns per-file failures
into a ``failed`` SourceUnit so one bad file never stops a run.
"""

from __future__ import annotations

import io
import tokenize
from pathlib import Path

from ..config import AnalysisConfig
from ..exceptions import FileAccessError, ParseError
from ..logging_config import get_logger
from ..metrics.complexity import measure_complexity
from ..metrics.halstead import halstead_metrics
from ..metrics.maintainability import classify_risk, maintainability_index
from ..models import FileError, FileStatus, FunctionRecord, SourceUnit
from ..scanning.parser import parse_source
from ..scanning.tokens import attribute_tokens, count_comment_lines, tokenize_source

logger = get_logger(__name__)


def measure_source(text: str, path: str, config: AnalysisConfig) -> SourceUnit:
    """
    Measure every function in one file's source text.

    Args:
        text: Decoded source text
        path: Path recorded on the unit and its functions
        config: Analysis configuration (risk thresholds)

    Returns:
        SourceUnit with status ``complete`` or ``degraded``

    Raises:
        ParseError: If no part of the text parses
    """
    parsed = parse_source(text, path)
    tokens = tokenize_source(parsed, text)
    buckets = attribute_tokens(parsed, tokens)

    records = []
    for fn, fn_tokens in zip(parsed.functions, buckets):
        complexity = measure_complexity(fn.node)
        halstead = halstead_metrics(fn_tokens)
        mi = maintainability_index(halstead.volume, complexity.complexity, fn.loc)
        if mi.low_confidence:
            logger.debug(f"{path}:{fn.start_line} {fn.qualified_name}: MI input substituted")
        records.append(
            FunctionRecord(
                path=path,
                name=fn.qualified_name,
                line=fn.start_line,
                loc=fn.loc,
                complexity=complexity.complexity,
                halstead=halstead,
                maintainability_index=mi.value,
                raw_maintainability_index=mi.raw,
                low_confidence=mi.low_confidence,
                risk=classify_risk(complexity.complexity, config.thresholds),
                max_nesting=complexity.max_nesting,
                parent=fn.parent,
            )
        )

    degraded = parsed.recovered or any(r.low_confidence for r in records)
    return SourceUnit(
        path=path,
        loc=parsed.line_count,
        functions=tuple(records),
        status=FileStatus.DEGRADED if degraded else FileStatus.COMPLETE,
        comment_lines=count_comment_lines(tokens),
        issues=tuple(parsed.issues),
    )


def read_source(file_path: Path) -> str:
    """
    Read a Python file, honouring its encoding declaration.

    Raises:
        FileAccessError: If the file cannot be read
        ParseError: If the bytes do not decode in the declared encoding
    """
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise FileAccessError(file_path, e.strerror or str(e))

    try:
        encoding, _ = tokenize.detect_encoding(io.BytesIO(data).readline)
        text = data.decode(encoding)
    except (SyntaxError, UnicodeDecodeError, LookupError) as e:
        raise ParseError(file_path, f"cannot decode source: {e}")

    # Universal newlines, as the interpreter reads source
    return text.replace("\r\n", "\n").replace("\r", "\n")


def analyze_file(root: Path, rel_path: str, config: AnalysisConfig) -> SourceUnit:
    """
    Read and measure one file, isolating its failures.

    Args:
        root: Analysis root
        rel_path: Path relative to root, as reported
        config: Analysis configuration

    Returns:
        SourceUnit; status ``failed`` with ``error`` set when the file could
        not be read or parsed
    """
    try:
        text = read_source(root / rel_path)
    except FileAccessError as e:
        logger.warning(f"Cannot read {rel_path}: {e.reason}")
        return SourceUnit.failed(rel_path, FileError(rel_path, "io", e.reason))
    except ParseError as e:
        logger.warning(f"Cannot decode {rel_path}: {e.reason}")
        return SourceUnit.failed(rel_path, FileError(rel_path, "parse", e.reason))

    try:
        return measure_source(text, rel_path, config)
    except ParseError as e:
        logger.warning(f"Cannot parse {rel_path}: {e.reason}")
        return SourceUnit.failed(
            rel_path,
            FileError(rel_path, "parse", e.reason, e.line),
            loc=len(text.splitlines()),
        )
