"""Logical complexity across the corpus."""

from typing import Dict, List, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..calculators.complexity import ComplexityCalculator
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..math.statistics import StatisticalCalculator
from ..metrics.hotspots import Hotspot, HotspotDetector
from ..metrics.models import DimensionMetrics
from .base import int_values

HOTSPOT_LIMIT = 5


class ComplexityDimension:
    """Grades average and peak complexity, critical files and logic ratio."""

    slug = "complexity"
    title = "Logical Complexity"

    def __init__(self, config: Optional[MetricsConfig] = None, hotspot_limit: int = HOTSPOT_LIMIT):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)
        self.calculator = ComplexityCalculator(self.config)
        self.hotspots = HotspotDetector(self.calculator)
        self.hotspot_limit = hotspot_limit

    def bucket(self, values: Sequence[int]) -> Dict[str, int]:
        """Count values as simple, moderate, complex or critical."""
        simple, moderate, complex_ = self.config.complexity_buckets
        buckets = {"simple": 0, "moderate": 0, "complex": 0, "critical": 0}
        for value in values:
            if value <= simple:
                buckets["simple"] += 1
            elif value <= moderate:
                buckets["moderate"] += 1
            elif value <= complex_:
                buckets["complex"] += 1
            else:
                buckets["critical"] += 1
        return buckets

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        values = int_values(results, MetricKey.COMPLEXITY_SCORE)
        summary = StatisticalCalculator.calculate(values)
        buckets = self.bucket(values)
        critical = buckets["critical"]
        critical_ratio = critical / len(results) if results else 0.0

        n = max(1, len(results))
        logic = sum(self.calculator.logic_ratio(r) for r in results) / n
        density = sum(self.calculator.decision_density(r) for r in results) / n
        mi = sum(self.calculator.maintainability_index(r) for r in results) / n

        score, grade = self.grader.grade_complexity(summary.mean, int(summary.max), critical_ratio, logic)
        hotspots = self.hotspots.detect(results, self.hotspot_limit)

        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "avg": round(summary.mean, 2),
                "median": summary.median,
                "max": int(summary.max),
                "critical_files": critical,
            },
            detail_metrics={
                "logic_ratio": round(logic, 3),
                "decision_density": round(density, 3),
                "mi_avg": round(mi, 2),
            },
            distributions={
                "heatmap": buckets,
                "hotspots": [
                    {"file": h.file, "path": h.path, "complexity": h.complexity,
                     "logic_ratio": h.logic_ratio, "maintainability": h.maintainability}
                    for h in hotspots
                ],
            },
            insights=self._insights(critical, int(summary.max), hotspots),
        )

    def _insights(self, critical: int, max_complexity: int, hotspots: List[Hotspot]) -> list:
        insights = []
        if critical > 0:
            insights.append(f"{critical} critical file(s)")
        if max_complexity > self.config.critical_complexity:
            insights.append(f"Max complexity: {max_complexity}")
        if hotspots:
            insights.append(f"Hotspot: {hotspots[0].file} [{hotspots[0].complexity}]")
        return insights
