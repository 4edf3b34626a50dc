"""Maintainability index and refactoring priorities."""

from typing import Dict, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..calculators.complexity import ComplexityCalculator
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..math.statistics import StatisticalCalculator
from ..metrics.models import DimensionMetrics

REFACTOR_CANDIDATES = 5
HIGH_RISK = 0.7
MEDIUM_RISK = 0.35


def refactor_priority(result: AnalysisResult) -> float:
    """
    Weighted 0-1 risk: complexity (.4), size (.3), dependencies (.2) and
    formatting inconsistency (.1), each normalized and capped at 1.
    """
    complexity = min(1.0, result.get_int(MetricKey.COMPLEXITY_SCORE) / 30.0)
    size = min(1.0, result.get_int(MetricKey.LINES) / 200.0)
    deps = min(1.0, len(result.get_list(MetricKey.DEPENDENCIES)) / 5.0)
    style = 1.0 - min(1.0, result.get_float(MetricKey.FORMATTING_CONSISTENCY_SCORE, 100.0) / 100.0)
    return 0.4 * complexity + 0.3 * size + 0.2 * deps + 0.1 * style


def risk_buckets(risks: Sequence[float]) -> Dict[str, int]:
    buckets = {"high": 0, "medium": 0, "low": 0}
    for risk in risks:
        if risk >= HIGH_RISK:
            buckets["high"] += 1
        elif risk >= MEDIUM_RISK:
            buckets["medium"] += 1
        else:
            buckets["low"] += 1
    return buckets


class MaintainabilityDimension:
    """Grades the average maintainability index and ranks refactoring candidates."""

    slug = "maintainability"
    title = "Maintainability"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)
        self.calculator = ComplexityCalculator(self.config)

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        mi = StatisticalCalculator.calculate([self.calculator.maintainability_index(r) for r in results])
        rows = [
            {
                "template": r.relative_path,
                "risk": refactor_priority(r),
                "complexity": r.get_int(MetricKey.COMPLEXITY_SCORE),
                "lines": r.get_int(MetricKey.LINES),
            }
            for r in results
        ]
        rows.sort(key=lambda row: row["risk"], reverse=True)
        top = rows[:REFACTOR_CANDIDATES]
        buckets = risk_buckets([row["risk"] for row in rows])

        score, grade = self.grader.grade_maintainability(mi.mean)
        insights = []
        if top:
            insights.append(f"Top refactor: {top[0]['template']} (risk {top[0]['risk']:.2f})")

        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "mi_avg": round(mi.mean, 1),
                "mi_median": round(mi.median, 1),
                "refactor_candidates": len(top),
            },
            detail_metrics={
                "risk_high": buckets["high"],
                "risk_medium": buckets["medium"],
                "risk_low": buckets["low"],
            },
            distributions={"risk": buckets, "refactor_candidates": top},
            insights=insights,
        )
