"""Per-template analysis result: an immutable, string-keyed metric bag."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence


class MetricKey:
    """Metric names other components rely on.

    Collectors may add further keys; these are the ones read downstream.
    """

    # Text statistics (code style collector)
    LINES = "lines"
    BLANK_LINES = "blank_lines"
    COMMENT_LINES = "comment_lines"
    TOTAL_LINE_LENGTH = "total_line_length"
    AVG_LINE_LENGTH = "avg_line_length"
    MAX_LINE_LENGTH = "max_line_length"
    TRAILING_SPACES = "trailing_spaces"
    MIXED_INDENTATION_LINES = "mixed_indentation_lines"
    COMMENT_DENSITY = "comment_density"
    FORMATTING_CONSISTENCY_SCORE = "formatting_consistency_score"

    # Complexity collector
    COMPLEXITY_SCORE = "complexity_score"
    MAX_DEPTH = "max_depth"
    CONDITIONS = "conditions"
    LOOPS = "loops"
    WHILE_COUNT = "whileCount"
    SWITCH_COUNT = "switchCount"

    # Callable collector
    FUNCTIONS_DETAIL = "functions_detail"
    FILTERS_DETAIL = "filters_detail"
    TESTS_DETAIL = "tests_used_detail"
    DEPRECATED_CALLABLES = "deprecated_callables"
    DEBUG_CALLS = "debug_calls"

    # Relationship collector
    DEPENDENCIES = "dependencies"
    PROVIDED_BLOCKS = "provided_blocks"
    USED_BLOCKS = "used_blocks"
    INHERITANCE_DEPTH = "inheritance_depth"

    # Enrichment
    FILE_CATEGORY = "file_category"


@dataclass(frozen=True)
class AnalysisResult:
    """Metrics gathered for one template.

    Attributes:
        relative_path: Path relative to the analysis root, "/"-separated
        metrics: Metric name -> number, string, list or mapping (read-only)
        analysis_time: Seconds spent parsing and traversing the template
    """

    relative_path: str
    metrics: Mapping[str, Any] = field(default_factory=dict)
    analysis_time: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.metrics.get(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Get a metric as int, or default when absent or not numeric."""
        value = self.metrics.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        return int(value)

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Get a metric as float, or default when absent or not numeric."""
        value = self.metrics.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        return float(value)

    def get_str(self, key: str, default: str = "") -> str:
        value = self.metrics.get(key)
        return value if isinstance(value, str) else default

    def get_list(self, key: str) -> list:
        value = self.metrics.get(key)
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    def get_mapping(self, key: str) -> Mapping[str, Any]:
        value = self.metrics.get(key)
        if isinstance(value, Mapping):
            return value
        return {}

    def has(self, key: str) -> bool:
        return key in self.metrics

    def with_metrics(self, extra: Mapping[str, Any]) -> AnalysisResult:
        """Return a copy with extra metrics merged over the existing ones."""
        merged = dict(self.metrics)
        merged.update(extra)
        return replace(self, metrics=merged)

    @property
    def filename(self) -> str:
        return posixpath.basename(self.relative_path)

    @property
    def directory(self) -> str:
        """Parent directory, "." for templates at the root."""
        return posixpath.dirname(self.relative_path) or "."

    @property
    def path_parts(self) -> Sequence[str]:
        return [p for p in self.relative_path.split("/") if p]

    def dependency_targets(self, kind: Optional[str] = None) -> list[str]:
        """Template names this one depends on, optionally of a single kind."""
        targets = []
        for dep in self.get_list(MetricKey.DEPENDENCIES):
            if isinstance(dep, Mapping):
                if kind is not None and dep.get("type") != kind:
                    continue
                template = dep.get("template")
            else:
                template = dep
            if template:
                targets.append(str(template))
        return targets
