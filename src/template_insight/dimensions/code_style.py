"""Formatting consistency: line length, indentation, comments."""

from typing import Dict, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..analyzers.style import LONG_LINES, MIXED_INDENT, TRAILING_SPACES, StyleConsistencyAnalyzer
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..math.statistics import StatisticalCalculator
from ..metrics.models import DimensionMetrics
from .base import int_values, share_table


class CodeStyleDimension:
    """Grades style consistency, p95 line length, comment density and mixed indentation."""

    slug = "code-style"
    title = "Code Style"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)
        self.style = StyleConsistencyAnalyzer(self.config)

    def line_length_buckets(self, values: Sequence[int]) -> Dict[str, Dict[str, float]]:
        short, limit, long_ = self.config.line_length_buckets
        counts = {f"<={short}": 0, f"{short + 1}-{limit}": 0, f"{limit + 1}-{long_}": 0, f">{long_}": 0}
        labels = list(counts)
        for value in values:
            if value <= short:
                counts[labels[0]] += 1
            elif value <= limit:
                counts[labels[1]] += 1
            elif value <= long_:
                counts[labels[2]] += 1
            else:
                counts[labels[3]] += 1
        return share_table(counts, len(values))

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        max_lines = int_values(results, MetricKey.MAX_LINE_LENGTH)
        summary = StatisticalCalculator.calculate(max_lines)
        style = self.style.analyze(results)
        mixed_files = len(style.violations[MIXED_INDENT])
        mixed_ratio = mixed_files / max(1, len(results))
        densities = [r.get_float(MetricKey.COMMENT_DENSITY) for r in results if r.has(MetricKey.COMMENT_DENSITY)]
        density = sum(densities) / len(densities) if densities else 0.0
        p95 = int(round(summary.p95))

        score, grade = self.grader.grade_code_style(style.consistency_score, p95, density, mixed_ratio)

        insights = []
        if p95 > self.config.long_line_limit:
            insights.append(f"High p95 line length ({p95})")
        if mixed_files > 0:
            insights.append(f"Mixed indentation in {mixed_files} file(s)")

        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "consistency": round(style.consistency_score, 1),
                "readability": round(style.readability_score, 1),
                "entropy": round(style.formatting_entropy, 3),
                "p95_line_length": p95,
            },
            detail_metrics={
                "long_lines_files": len(style.violations[LONG_LINES]),
                "trailing_spaces_files": len(style.violations[TRAILING_SPACES]),
                "mixed_indent_files": mixed_files,
                "comment_density_avg": round(density, 2),
            },
            distributions={"line_length": self.line_length_buckets(max_lines)},
            insights=insights,
        )
