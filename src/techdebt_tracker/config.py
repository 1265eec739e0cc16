"""Configuration loading and management for techdebt-tracker.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.techdebt.toml)
    3. Project config (./techdebt.toml)
    4. Explicit config file
    5. Environment variables (TECHDEBT_* prefix)
    6. CLI overrides (passed as kwargs)

The resulting config is passed explicitly through the pipeline; nothing
reads it from module state.

Example:
    >>> config = load_config(top_n=15, max_complexity=12)
    >>> config.top_n
    15
    >>> config.thresholds.high_complexity
    20
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

# Offender list bound when nothing else is configured
DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class ThresholdConfig:
    """Risk classification cutoffs for cyclomatic complexity.

    A function (or file, through its worst function) is:
    - ``low`` when complexity <= moderate_complexity
    - ``moderate`` when complexity > moderate_complexity
    - ``high`` when complexity > high_complexity

    Attributes:
        moderate_complexity: Cutoff above which risk is moderate
        high_complexity: Cutoff above which risk is high
    """

    moderate_complexity: int = 10
    high_complexity: int = 20

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        if self.moderate_complexity < 1:
            raise ValueError("moderate_complexity must be at least 1")
        if self.high_complexity <= self.moderate_complexity:
            raise ValueError(
                f"high_complexity ({self.high_complexity}) must be greater than "
                f"moderate_complexity ({self.moderate_complexity})"
            )


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        Gating and reporting:
            max_complexity: Fail condition; any function above it trips the gate
            top_n: Size of the top-offenders list

        Performance tuning:
            workers: Number of parallel workers (None = auto-detect)
            timeout_seconds: Run-level deadline (None = no limit)
            parallel_min_files: Below this many files, measure sequentially

        File filtering:
            extensions: File suffixes treated as Python source
            exclude_patterns: Glob patterns to exclude from analysis
            allow_hidden_files: Include hidden files (starting with .)
            follow_symlinks: Follow symbolic links during discovery
            max_file_size_mb: Maximum file size to analyze (MB)

        Output control:
            verbosity: Logging verbosity level
    """

    max_complexity: Optional[int] = None
    top_n: int = DEFAULT_TOP_N

    workers: Optional[int] = None
    timeout_seconds: Optional[float] = None
    parallel_min_files: int = 4

    extensions: list[str] = field(default_factory=lambda: [".py"])
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "venv/*",
            ".venv/*",
            "build/*",
            "dist/*",
            "*.egg-info/*",
            "node_modules/*",
        ]
    )
    allow_hidden_files: bool = False
    follow_symlinks: bool = False
    max_file_size_mb: float = 10.0

    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_complexity is not None and self.max_complexity < 1:
            raise ValueError("max_complexity must be at least 1")
        if self.top_n < 1:
            raise ValueError("top_n must be at least 1")

        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.parallel_min_files < 1:
            raise ValueError("parallel_min_files must be at least 1")

        if not self.extensions:
            raise ValueError("extensions must not be empty")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got {self.verbosity!r}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def effective_workers(self) -> int:
        """Worker count: the configured value, else CPU count capped at 8."""
        if self.workers is not None:
            return self.workers
        return min(os.cpu_count() or 1, 8)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask file values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation

    Example:
        >>> config = load_config(config_file=Path("techdebt.toml"), top_n=5)
    """
    merged: dict = {}

    global_config = Path.home() / ".techdebt.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "techdebt.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # [risk_thresholds] is accepted as an alias of [thresholds]
    if "risk_thresholds" in merged:
        merged["thresholds"] = merged.pop("risk_thresholds")

    thresholds = merged.pop("thresholds", None)
    if thresholds is not None:
        if isinstance(thresholds, dict):
            try:
                merged["thresholds"] = ThresholdConfig(**thresholds)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [thresholds] config: {e}")
        elif isinstance(thresholds, ThresholdConfig):
            merged["thresholds"] = thresholds
        else:
            raise ConfigurationError(
                f"Invalid [thresholds] config: expected a table, got {type(thresholds).__name__}"
            )

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from TECHDEBT_* environment variables.

    Supported environment variables:
        TECHDEBT_MAX_COMPLEXITY: int
        TECHDEBT_TOP_N: int
        TECHDEBT_WORKERS: int
        TECHDEBT_TIMEOUT_SECONDS: float
        TECHDEBT_PARALLEL_MIN_FILES: int
        TECHDEBT_ALLOW_HIDDEN_FILES: bool
        TECHDEBT_FOLLOW_SYMLINKS: bool
        TECHDEBT_MAX_FILE_SIZE_MB: float
        TECHDEBT_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any TECHDEBT_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"TECHDEBT_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint, field_name)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any, field_name: str) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass
        field_name: Field name for error messages

    Returns:
        Parsed value or None if can't parse

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Lists and nested configs are file-only
    if origin is list or type_hint is list or type_hint is ThresholdConfig:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    A ``pyproject.toml`` contributes only its ``[tool.techdebt]`` table.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML as dict

    Raises:
        ConfigurationError: If no TOML reader is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    if path.name == "pyproject.toml":
        return dict(data.get("tool", {}).get("techdebt", {}))
    return data
