"""Rollups of per-template metrics by directory prefix."""

from dataclasses import dataclass
from typing import Dict, Iterable

from ..analysis.result import AnalysisResult, MetricKey
from ..config import MetricsConfig


@dataclass
class DirectoryMetrics:
    """Running totals for every template under one directory prefix.

    Ratios are derived from the sums on access.
    """

    path: str
    file_count: int = 0
    total_lines: int = 0
    total_blank: int = 0
    total_comments: int = 0
    max_complexity: int = 0
    sum_complexity: int = 0
    sum_depth: int = 0
    critical_count: int = 0
    sum_max_line_length: int = 0
    sum_format_score: float = 0.0
    sum_mixed_indent: int = 0

    def add(self, result: AnalysisResult, critical_complexity: int = 25) -> None:
        complexity = result.get_int(MetricKey.COMPLEXITY_SCORE)
        self.file_count += 1
        self.total_lines += result.get_int(MetricKey.LINES)
        self.total_blank += result.get_int(MetricKey.BLANK_LINES)
        self.total_comments += result.get_int(MetricKey.COMMENT_LINES)
        self.max_complexity = max(self.max_complexity, complexity)
        self.sum_complexity += complexity
        self.sum_depth += result.get_int(MetricKey.MAX_DEPTH)
        if complexity > critical_complexity:
            self.critical_count += 1
        self.sum_max_line_length += result.get_int(MetricKey.MAX_LINE_LENGTH)
        self.sum_format_score += result.get_float(MetricKey.FORMATTING_CONSISTENCY_SCORE, 100.0)
        self.sum_mixed_indent += result.get_int(MetricKey.MIXED_INDENTATION_LINES)

    @property
    def blank_ratio(self) -> float:
        return self.total_blank / self.total_lines if self.total_lines > 0 else 0.0

    @property
    def comment_ratio(self) -> float:
        return self.total_comments / self.total_lines if self.total_lines > 0 else 0.0

    @property
    def avg_lines(self) -> float:
        return self.total_lines / self.file_count if self.file_count > 0 else 0.0

    @property
    def avg_complexity(self) -> float:
        return self.sum_complexity / self.file_count if self.file_count > 0 else 0.0

    @property
    def avg_depth(self) -> float:
        return self.sum_depth / self.file_count if self.file_count > 0 else 0.0

    @property
    def avg_max_line_length(self) -> float:
        return self.sum_max_line_length / self.file_count if self.file_count > 0 else 0.0

    @property
    def avg_format_score(self) -> float:
        return self.sum_format_score / self.file_count if self.file_count > 0 else 0.0

    @property
    def indentation_consistency(self) -> float:
        """100 minus the percentage of lines with mixed indentation."""
        if self.total_lines <= 0:
            return 100.0
        return 100.0 - (self.sum_mixed_indent / self.total_lines) * 100.0


def aggregate_by_directory(
    results: Iterable[AnalysisResult], max_depth: int = 2, config: MetricsConfig = None
) -> Dict[str, DirectoryMetrics]:
    """
    Fold templates into every ancestor directory up to max_depth.

    ``a/b/c/x.html`` with max_depth=2 contributes to ``a`` and ``a/b``.
    Templates at the root have no directory and contribute nothing.

    Returns:
        Directory prefix -> metrics, ordered by prefix
    """
    critical = (config or MetricsConfig()).critical_complexity
    buckets: Dict[str, DirectoryMetrics] = {}
    for result in results:
        parts = result.path_parts
        levels = min(max_depth, len(parts) - 1)
        for level in range(1, levels + 1):
            key = "/".join(parts[:level])
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = DirectoryMetrics(path=key)
            bucket.add(result, critical)
    return dict(sorted(buckets.items()))
