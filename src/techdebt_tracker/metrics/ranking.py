"""Offender ranking: the functions most in need of attention."""

from __future__ import annotations

from typing import Iterable

from ..config import DEFAULT_TOP_N
from ..models import FunctionRecord, SourceUnit


def rank_functions(functions: Iterable[FunctionRecord]) -> list[FunctionRecord]:
    """Sort functions worst first.

    Order: highest complexity, then lowest Maintainability Index, then
    path, qualified name and line. The key is total, so equal inputs
    always give the same ordering.
    """
    return sorted(functions, key=FunctionRecord.rank_key)


def rank_offenders(
    units: Iterable[SourceUnit], top_n: int = DEFAULT_TOP_N
) -> tuple[FunctionRecord, ...]:
    """
    Select the top ``top_n`` offenders across all measured files.

    Args:
        units: Analyzed files; failed files hold no functions
        top_n: Number of offenders to keep (>= 1)

    Returns:
        Up to ``top_n`` function records, worst first

    Raises:
        ValueError: If top_n < 1
    """
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}")
    functions = (fn for unit in units for fn in unit.functions)
    return tuple(rank_functions(functions)[:top_n])
