"""Shared CLI helpers."""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from ..core.runner import ProgressCallback

# Diagnostics go to stderr so stdout stays machine-readable
console = Console(stderr=True)

FORMATS = ("rich", "text", "json", "csv", "github", "quiet")


@contextmanager
def file_progress(enabled: bool) -> Iterator[ProgressCallback]:
    """Yield a progress callback backed by a Rich progress bar.

    Yields None when disabled so the runner skips progress reporting.
    """
    if not enabled:
        yield None
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task_id: Optional[int] = None

        def on_progress(done: int, total: int) -> None:
            nonlocal task_id
            if task_id is None:
                task_id = progress.add_task("Measuring files", total=total)
            progress.update(task_id, completed=done)

        yield on_progress
