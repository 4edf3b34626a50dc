"""Template size spread and directory balance."""

from collections import Counter
from typing import Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..calculators.distribution import DistributionCalculator
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..math.statistics import StatisticalCalculator, StatisticalSummary
from ..metrics.models import DimensionMetrics
from .base import int_values, share_table


class TemplateFilesDimension:
    """Grades how evenly template sizes and files are spread."""

    slug = "template-files"
    title = "Template Files"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)
        self.distribution = DistributionCalculator(self.config)

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        lines = int_values(results, MetricKey.LINES)
        summary = StatisticalCalculator.calculate(lines)
        directories = Counter(r.directory for r in results)
        dominance = max(directories.values()) / len(results) if results else 0.0
        max_lines = max(lines, default=0)

        score, grade = self.grader.grade_template_files(summary, dominance, max_lines)
        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "templates": len(results),
                "avg_lines": summary.mean,
                "median_lines": summary.median,
                "std_dev": summary.std_dev,
            },
            detail_metrics={
                "cv": summary.coefficient_of_variation,
                "gini_index": summary.gini_index,
                "entropy": summary.entropy,
                "p95": summary.p95,
                "dir_dominance": dominance,
            },
            distributions={
                "size": self.distribution.size_distribution(results),
                "directory": share_table(dict(directories.most_common()), len(results)),
            },
            insights=self._insights(summary, dominance, max_lines),
        )

    @staticmethod
    def _insights(summary: StatisticalSummary, dominance: float, max_lines: int) -> list:
        insights = []
        if summary.gini_index < 0.35:
            insights.append(f"Balanced sizes (Gini: {summary.gini_index:.2f})")
        if dominance > 0.5:
            insights.append(f"One directory dominates ({dominance * 100:.0f}%)")
        if max_lines > 200:
            insights.append(f"Large templates present (max: {max_lines} lines)")
        return insights
