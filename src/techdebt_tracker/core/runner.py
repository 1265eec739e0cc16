"""AnalysisRunner: measures many files, in parallel when it pays off.

Usage:
    runner = AnalysisRunner(config)
    result = runner.run(paths, root)
    # result.units is aligned with paths; result.skipped lists paths that
    # were never dispatched because the run was cancelled or timed out

Scheduling:
    - Fewer than ``config.parallel_min_files`` files: sequential
    - Otherwise a ThreadPoolExecutor with ``config.effective_workers``
      threads; at most that many files are open or in flight at once
    - Before each dispatch the deadline and the cancel event are checked;
      once either trips, in-flight work is drained and nothing new starts
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..config import AnalysisConfig
from ..logging_config import get_logger
from ..models import FileError, SourceUnit
from .measure import analyze_file

logger = get_logger(__name__)

# Called with (files_done, files_total) after each file completes
ProgressCallback = Optional[Callable[[int, int], None]]


@dataclass
class RunResult:
    """Outcome of one runner pass.

    Attributes:
        units: Analyzed files, in input order (undispatched files omitted)
        skipped: Paths never dispatched, in input order
        cancelled: True if the cancel event stopped the run
        timed_out: True if the deadline stopped the run
        elapsed_seconds: Wall-clock duration
    """

    units: list[SourceUnit] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    cancelled: bool = False
    timed_out: bool = False
    elapsed_seconds: float = 0.0

    @property
    def complete(self) -> bool:
        return not self.skipped


class AnalysisRunner:
    """Dispatches per-file analysis with bounded concurrency."""

    def __init__(self, config: AnalysisConfig) -> None:
        self.config = config
        self._max_workers = config.effective_workers

    def run(
        self,
        paths: list[str],
        root: Path,
        cancel_event: Optional[threading.Event] = None,
        on_progress: ProgressCallback = None,
    ) -> RunResult:
        """
        Analyze every path under root.

        Args:
            paths: File paths relative to root
            root: Analysis root
            cancel_event: Set from another thread to stop dispatching
            on_progress: Optional progress callback

        Returns:
            RunResult with units in input order
        """
        started = time.monotonic()
        deadline = (
            started + self.config.timeout_seconds if self.config.timeout_seconds else None
        )
        results: list[Optional[SourceUnit]] = [None] * len(paths)
        state = _RunState(total=len(paths), on_progress=on_progress)

        def should_stop() -> bool:
            if cancel_event is not None and cancel_event.is_set():
                state.cancelled = True
                return True
            if deadline is not None and time.monotonic() >= deadline:
                state.timed_out = True
                return True
            return False

        if len(paths) < self.config.parallel_min_files or self._max_workers == 1:
            dispatched = self._run_sequential(paths, root, results, state, should_stop)
        else:
            dispatched = self._run_parallel(paths, root, results, state, should_stop)

        skipped = [paths[i] for i in range(dispatched, len(paths))]
        if skipped:
            reason = "cancelled" if state.cancelled else "timed out"
            logger.warning(f"Run {reason}: {len(skipped)} of {len(paths)} files not analyzed")

        return RunResult(
            units=[u for u in results if u is not None],
            skipped=skipped,
            cancelled=state.cancelled,
            timed_out=state.timed_out,
            elapsed_seconds=time.monotonic() - started,
        )

    def _measure(self, path: str, root: Path) -> SourceUnit:
        try:
            return analyze_file(root, path, self.config)
        except Exception as e:
            # Unexpected failure inside one file (e.g. recursion limit on
            # pathological nesting); the run carries on
            logger.warning(f"Error analyzing {path}: {type(e).__name__}: {e}")
            return SourceUnit.failed(path, FileError(path, "parse", f"{type(e).__name__}: {e}"))

    def _run_sequential(self, paths, root, results, state, should_stop) -> int:
        for index, path in enumerate(paths):
            if should_stop():
                return index
            results[index] = self._measure(path, root)
            state.advance()
        return len(paths)

    def _run_parallel(self, paths, root, results, state, should_stop) -> int:
        logger.debug(f"Analyzing {len(paths)} files with {self._max_workers} workers")
        in_flight: dict[Future, int] = {}
        next_index = 0

        def collect(done) -> None:
            for future in done:
                index = in_flight.pop(future)
                results[index] = future.result()
                state.advance()

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            while next_index < len(paths):
                if len(in_flight) >= self._max_workers:
                    done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                    collect(done)
                    continue
                if should_stop():
                    break
                future = executor.submit(self._measure, paths[next_index], root)
                in_flight[future] = next_index
                next_index += 1

            if in_flight:
                done, _ = wait(in_flight)
                collect(done)

        return next_index


class _RunState:
    """Progress and stop-reason bookkeeping for one run."""

    def __init__(self, total: int, on_progress: ProgressCallback) -> None:
        self.total = total
        self.done = 0
        self.cancelled = False
        self.timed_out = False
        self._on_progress = on_progress

    def advance(self) -> None:
        self.done += 1
        if self._on_progress is not None:
            self._on_progress(self.done, self.total)
