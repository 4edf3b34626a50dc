"""Configuration loading and management for Template Insight.

Two immutable structures drive an analysis run:

    MetricsConfig   - every weight, threshold and grade tier used by the
                      calculators, evaluators and graders
    AnalysisConfig  - discovery and run options, with a nested MetricsConfig

Configuration sources are merged in priority order:
    1. Defaults (defined in the dataclasses)
    2. Global config (~/.template-insight.toml)
    3. Project config (./template-insight.toml)
    4. Explicit config file
    5. Environment variables (TEMPLATE_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(max_dir_depth=3)
    >>> config.max_dir_depth
    3
    >>> config.metrics.health_weights["complexity"]
    0.2
"""

from __future__ import annotations

import operator
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "TEMPLATE_INSIGHT_"

_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


@dataclass(frozen=True)
class Bound:
    """One threshold test on a named grading signal, e.g. ``cv < 0.6``."""

    signal: str
    op: str
    limit: float

    def __post_init__(self) -> None:
        if self.op not in _OPERATORS:
            raise ValueError(f"Unknown comparison {self.op!r} for signal {self.signal!r}")

    def holds(self, signals: Mapping[str, float]) -> bool:
        return _OPERATORS[self.op](signals[self.signal], self.limit)


@dataclass(frozen=True)
class GradeTier:
    """A (grade, score) pair awarded when every bound holds."""

    grade: str
    score: float
    bounds: Tuple[Bound, ...]

    def matches(self, signals: Mapping[str, float]) -> bool:
        return all(bound.holds(signals) for bound in self.bounds)


def _tier(grade: str, score: float, *bounds: Tuple[str, str, float]) -> GradeTier:
    return GradeTier(grade, score, tuple(Bound(*b) for b in bounds))


@dataclass(frozen=True)
class GradingConfig:
    """Ordered grade tiers per dimension, strictest first.

    Each dimension is graded by testing its tiers top-down and taking the
    first one whose bounds all hold; when none does, the fallback grade and
    score apply. The literal thresholds are empirical and kept for
    comparability between runs, not derived from first principles.

    Signals per dimension:
        template_files:  cv, gini, max_lines, dir_dominance
        complexity:      avg, max, critical_ratio, logic_ratio
        code_style:      consistency, max_line, comment_density, mixed_indent_ratio
        callables:       debug_calls, security_score, diversity, deprecated
        architecture:    components_ratio, orphan_ratio, circular_refs, max_depth
        maintainability: mi_avg
    """

    template_files: Tuple[GradeTier, ...] = (
        _tier("A", 95.0, ("cv", "<", 0.6), ("gini", "<", 0.35), ("max_lines", "<", 200), ("dir_dominance", "<", 0.45)),
        _tier("B", 85.0, ("cv", "<", 0.9), ("gini", "<", 0.5), ("max_lines", "<", 300), ("dir_dominance", "<", 0.55)),
        _tier("C", 75.0, ("cv", "<", 1.2), ("gini", "<", 0.65), ("max_lines", "<", 400), ("dir_dominance", "<", 0.65)),
    )
    complexity: Tuple[GradeTier, ...] = (
        _tier("A", 95.0, ("avg", "<", 10), ("max", "<", 40), ("critical_ratio", "<=", 0.02), ("logic_ratio", "<", 0.2)),
        _tier("B", 85.0, ("avg", "<", 15), ("max", "<", 80), ("critical_ratio", "<", 0.08), ("logic_ratio", "<", 0.3)),
        _tier("C", 75.0, ("avg", "<", 25), ("max", "<", 120), ("critical_ratio", "<", 0.15), ("logic_ratio", "<", 0.4)),
    )
    code_style: Tuple[GradeTier, ...] = (
        _tier(
            "A", 95.0,
            ("consistency", ">", 95), ("max_line", "<", 150),
            ("comment_density", ">=", 5), ("comment_density", "<=", 25),
            ("mixed_indent_ratio", "<=", 0.0),
        ),
        _tier(
            "B", 85.0,
            ("consistency", ">", 85), ("max_line", "<", 200),
            ("comment_density", ">=", 2), ("comment_density", "<=", 30),
            ("mixed_indent_ratio", "<", 0.05),
        ),
        _tier(
            "C", 75.0,
            ("consistency", ">", 75), ("max_line", "<", 250),
            ("comment_density", ">=", 1), ("comment_density", "<=", 35),
            ("mixed_indent_ratio", "<", 0.10),
        ),
    )
    callables: Tuple[GradeTier, ...] = (
        _tier("A", 95.0, ("debug_calls", "<=", 0), ("security_score", ">", 95), ("diversity", ">", 0.7), ("deprecated", "<=", 0)),
        _tier("B", 85.0, ("debug_calls", "<", 5), ("security_score", ">", 85), ("diversity", ">", 0.5), ("deprecated", "<", 5)),
        _tier("C", 75.0, ("debug_calls", "<", 20), ("security_score", ">", 70), ("diversity", ">", 0.3), ("deprecated", "<", 10)),
    )
    architecture: Tuple[GradeTier, ...] = (
        _tier("A", 95.0, ("components_ratio", ">", 0.4), ("orphan_ratio", "<", 0.3), ("circular_refs", "<=", 0), ("max_depth", "<", 5)),
        _tier("B", 85.0, ("components_ratio", ">", 0.3), ("orphan_ratio", "<", 0.5), ("circular_refs", "<", 2), ("max_depth", "<", 6)),
        _tier("C", 75.0, ("components_ratio", ">", 0.2), ("orphan_ratio", "<", 0.7), ("circular_refs", "<", 5), ("max_depth", "<", 8)),
    )
    maintainability: Tuple[GradeTier, ...] = (
        _tier("A", 95.0, ("mi_avg", ">", 85)),
        _tier("B", 85.0, ("mi_avg", ">", 70)),
        _tier("C", 75.0, ("mi_avg", ">", 55)),
    )

    # Relationships derive their score from penalties; the grade follows the score
    relationship_bands: Tuple[Tuple[float, str], ...] = ((90.0, "A"), (80.0, "B"), (70.0, "C"))

    fallback_grade: str = "D"
    fallback_score: float = 60.0

    def __post_init__(self) -> None:
        """Validate that every cascade runs from strictest to laxest."""
        for name in ("template_files", "complexity", "code_style", "callables", "architecture", "maintainability"):
            tiers = getattr(self, name)
            if not tiers:
                raise ValueError(f"{name} needs at least one grade tier")
            scores = [tier.score for tier in tiers]
            if scores != sorted(scores, reverse=True):
                raise ValueError(f"{name} tiers must be ordered by descending score")
            if tiers[-1].score < self.fallback_score:
                raise ValueError(f"{name} tiers must score above the fallback ({self.fallback_score})")

    def tiers(self, dimension: str) -> Tuple[GradeTier, ...]:
        """Get the cascade for a dimension attribute name (e.g. ``code_style``)."""
        return getattr(self, dimension.replace("-", "_"))


@dataclass(frozen=True)
class MetricsConfig:
    """Weights, thresholds and constants used to turn raw counts into scores.

    Attributes:
        Complexity points:
            if_points, for_points, ternary_points, logical_operator_points,
            depth_points: contribution of each construct to complexity_score
            critical_complexity: complexity_score above which a file is critical
            complexity_buckets: upper bounds for simple/moderate/complex

        Maintainability index (171 - a*ln(volume) - b*complexity - c*ln(lines)):
            mi_base, mi_volume_coefficient, mi_complexity_coefficient,
            mi_lines_coefficient

        Distributions:
            size_buckets: (label, inclusive upper bound) pairs; None = unbounded
            line_length_buckets: upper bounds for the line-length histogram
            long_line_limit: lines longer than this are style violations

        Callables:
            risky_functions / risky_filters: names that lower the security score
            risky_function_penalty / risky_filter_penalty: cost per distinct risky name
            debug_functions: calls that count as leftover debugging
            deprecated_callables: callables flagged as deprecated

        Health:
            health_weights: dimension slug -> weight (must sum to 1.0)
            health_bands: (minimum score, band) pairs, highest first
    """

    if_points: int = 2
    for_points: int = 3
    ternary_points: int = 1
    logical_operator_points: int = 1
    depth_points: int = 2
    critical_complexity: int = 25
    complexity_buckets: Tuple[int, int, int] = (5, 15, 25)

    mi_base: float = 171.0
    mi_volume_coefficient: float = 5.2
    mi_complexity_coefficient: float = 0.23
    mi_lines_coefficient: float = 16.2

    size_buckets: Tuple[Tuple[str, Optional[int]], ...] = (
        ("0-50", 50),
        ("51-100", 100),
        ("101-200", 200),
        ("201-500", 500),
        ("500+", None),
    )
    line_length_buckets: Tuple[int, int, int] = (80, 120, 160)
    long_line_limit: int = 120

    risky_functions: Tuple[str, ...] = ("dump", "eval", "include_raw")
    risky_filters: Tuple[str, ...] = ("safe", "raw", "unsafe")
    risky_function_penalty: int = 5
    risky_filter_penalty: int = 3
    debug_functions: Tuple[str, ...] = ("dump", "debug")
    deprecated_callables: Tuple[str, ...] = ()

    # Per-template A-D ratings
    size_rating_limits: Tuple[int, int, int] = (75, 100, 150)
    complexity_rating_limits: Tuple[Tuple[int, int], ...] = ((8, 3), (15, 4), (25, 5))
    callables_rating_limits: Tuple[int, int, int] = (85, 70, 55)
    # (metric, high threshold, high penalty, medium threshold, medium penalty)
    callables_rating_penalties: Tuple[Tuple[str, int, int, int, int], ...] = (
        ("unique_functions", 20, 20, 15, 10),
        ("unique_variables", 10, 20, 7, 10),
        ("unique_filters", 8, 15, 5, 5),
    )
    macro_reuse_bonus: int = 10
    macro_reuse_penalty: int = 5

    health_weights: Dict[str, float] = field(
        default_factory=lambda: {
            "complexity": 0.20,
            "template-files": 0.15,
            "relationships": 0.15,
            "architecture": 0.15,
            "maintainability": 0.15,
            "callables": 0.10,
            "code-style": 0.10,
        }
    )
    health_bands: Tuple[Tuple[float, str], ...] = (
        (90.0, "exceptional"),
        (80.0, "good"),
        (70.0, "fair"),
        (60.0, "poor"),
    )
    health_fallback_band: str = "critical"

    grading: GradingConfig = field(default_factory=GradingConfig)

    def __post_init__(self) -> None:
        """Validate metric configuration."""
        weight_sum = sum(self.health_weights.values())
        if not 0.99 <= weight_sum <= 1.01:
            raise ValueError(f"Health weights must sum to 1.0, got {weight_sum:.3f}")
        if any(w < 0 for w in self.health_weights.values()):
            raise ValueError("Health weights must be non-negative")

        if list(self.complexity_buckets) != sorted(self.complexity_buckets):
            raise ValueError("complexity_buckets must be ascending")
        if self.critical_complexity < 0:
            raise ValueError("critical_complexity must be non-negative")

        bounds = [b for _, b in self.size_buckets if b is not None]
        if bounds != sorted(bounds) or len(bounds) < len(self.size_buckets) - 1:
            raise ValueError("size_buckets must be ascending with only the last unbounded")

        if self.long_line_limit < 1:
            raise ValueError("long_line_limit must be at least 1")

        if not isinstance(self.grading, GradingConfig):
            raise ValueError("grading must be a GradingConfig instance")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        File discovery:
            extensions: Template file suffixes to analyze
            exclude_patterns: Glob patterns (relative paths) to skip
            max_file_size_mb: Larger files are skipped
            allow_hidden_files: Include files and directories starting with "."
            follow_symlinks: Follow symbolic links during discovery
            encoding: Encoding used to read template sources

        Reporting:
            max_dir_depth: Depth limit for directory rollups
            hotspot_limit: Number of hotspots to report
            verbosity: Logging verbosity level

        metrics: Scoring constants (see MetricsConfig)
    """

    extensions: list[str] = field(
        default_factory=lambda: [".html", ".htm", ".jinja", ".jinja2", ".j2", ".twig"]
    )
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "node_modules/*",
            "vendor/*",
            "dist/*",
            "build/*",
            ".git/*",
            "venv/*",
            ".venv/*",
            "htmlcov/*",
        ]
    )
    max_file_size_mb: float = 5.0
    allow_hidden_files: bool = False
    follow_symlinks: bool = False
    encoding: str = "utf-8"

    max_dir_depth: int = 2
    hotspot_limit: int = 5
    verbosity: Verbosity = "normal"

    metrics: MetricsConfig = field(default_factory=MetricsConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise ValueError("extensions must not be empty")
        if any(not ext.startswith(".") for ext in self.extensions):
            raise ValueError("extensions must start with '.'")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.max_dir_depth < 1:
            raise ValueError("max_dir_depth must be at least 1")
        if self.hotspot_limit < 1:
            raise ValueError("hotspot_limit must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got {self.verbosity!r}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid, or a
            value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".template-insight.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "template-insight.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

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

    # [metrics] section from TOML
    metrics = merged.pop("metrics", None)
    if isinstance(metrics, dict):
        metrics = _build_metrics_config(metrics)
    if isinstance(metrics, MetricsConfig):
        merged["metrics"] = metrics

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _build_metrics_config(values: dict[str, Any]) -> MetricsConfig:
    values = dict(values)
    # TOML arrays arrive as lists; the dataclass stores tuples
    for key, value in values.items():
        if isinstance(value, list):
            values[key] = tuple(tuple(v) if isinstance(v, list) else v for v in value)
    if "health_weights" in values:
        weights = dict(MetricsConfig().health_weights)
        weights.update(values["health_weights"])
        values["health_weights"] = weights
    try:
        return MetricsConfig(**values)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [metrics] config: {e}") from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from TEMPLATE_INSIGHT_* environment variables.

    Supported environment variables:
        TEMPLATE_INSIGHT_MAX_DIR_DEPTH: int
        TEMPLATE_INSIGHT_HOTSPOT_LIMIT: int
        TEMPLATE_INSIGHT_MAX_FILE_SIZE_MB: float
        TEMPLATE_INSIGHT_ALLOW_HIDDEN_FILES: bool (true/false/1/0)
        TEMPLATE_INSIGHT_FOLLOW_SYMLINKS: bool
        TEMPLATE_INSIGHT_ENCODING: str
        TEMPLATE_INSIGHT_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed as a single variable
    (lists, nested configs).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)
    if origin is list or type_hint is list or type_hint is MetricsConfig:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # str and Literal
    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

    # Accept both a bare table and a [tool.template-insight] section
    tool_section = data.get("tool", {}).get("template-insight")
    if isinstance(tool_section, dict):
        return dict(tool_section)
    return data
