"""Source file discovery.

Expands the input path into the ordered list of candidate Python files.
Discovery is a plain directory walk; the result is sorted so that report
ordering never depends on file-system enumeration order.

Example:
    >>> root, files = collect_source_files(Path("src"), config)
    >>> files[:2]
    [PosixPath('pkg/__init__.py'), PosixPath('pkg/core.py')]
"""

from __future__ import annotations

import fnmatch
from pathlib import Path

from ..config import AnalysisConfig
from ..exceptions import InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Directories never worth descending into
SKIP_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "__pycache__",
        ".tox",
        ".nox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".eggs",
        "node_modules",
        "venv",
        ".venv",
        "site-packages",
    }
)


def collect_source_files(path: Path, config: AnalysisConfig) -> tuple[Path, list[Path]]:
    """Expand an input path into source files.

    Args:
        path: A file or a directory
        config: Filtering options (extensions, excludes, hidden, symlinks, size)

    Returns:
        (root, files) where ``files`` are relative to ``root`` and sorted.
        For a single-file input ``root`` is the file's directory.

    Raises:
        InvalidPathError: If the path does not exist or is neither a file
            nor a directory
    """
    path = Path(path)
    if not path.exists():
        raise InvalidPathError(path, "path does not exist")

    root_path = path.resolve()

    if root_path.is_file():
        # An explicitly named file is analyzed regardless of filters
        return root_path.parent, [Path(root_path.name)]

    if not root_path.is_dir():
        raise InvalidPathError(path, "not a regular file or directory")

    files = _walk_directory(root_path, config)
    files.sort(key=lambda p: p.as_posix())

    logger.debug(f"Discovered {len(files)} source files under {root_path}")
    return root_path, files


def _walk_directory(root: Path, config: AnalysisConfig) -> list[Path]:
    """Walk the directory tree collecting files that pass every filter."""
    files: list[Path] = []
    extensions = {ext.lower() for ext in config.extensions}

    for item in root.rglob("*"):
        rel = item.relative_to(root)

        if any(part in SKIP_DIRS for part in rel.parts[:-1]):
            continue

        if item.is_symlink() and not config.follow_symlinks:
            continue

        if not item.is_file():
            continue

        if item.suffix.lower() not in extensions:
            continue

        if not config.allow_hidden_files and any(part.startswith(".") for part in rel.parts):
            continue

        if _is_excluded(rel, config.exclude_patterns):
            logger.debug(f"Excluded by pattern: {rel}")
            continue

        try:
            size = item.stat().st_size
        except OSError as e:
            # Unreadable entries surface later as per-file I/O errors
            logger.debug(f"Cannot stat {rel}: {e}")
            files.append(rel)
            continue

        if size > config.max_file_size_bytes:
            logger.info(f"Skipping {rel}: {size} bytes exceeds max_file_size_mb")
            continue

        files.append(rel)

    return files


def _is_excluded(rel: Path, patterns: list[str]) -> bool:
    posix = rel.as_posix()
    for pattern in patterns:
        if fnmatch.fnmatch(posix, pattern):
            return True
        # "dir/*" also matches the directory at any depth
        if pattern.endswith("/*") and f"/{pattern[:-2]}/" in f"/{posix}":
            return True
    return False
