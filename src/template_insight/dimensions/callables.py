"""Function, filter and test usage."""

from collections import Counter
from typing import Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..analyzers.security import CallableSecurityAnalyzer
from ..calculators.diversity import DiversityCalculator
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..metrics.models import DimensionMetrics

TOP_RISKS = 3


def _usage(results: Sequence[AnalysisResult], key: str) -> Counter:
    usage: Counter = Counter()
    for result in results:
        for name, count in result.get_mapping(key).items():
            usage[str(name)] += int(count)
    return usage


class CallablesDimension:
    """Grades callable diversity and risky, deprecated or debugging usage."""

    slug = "callables"
    title = "Template Callables"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)
        self.security = CallableSecurityAnalyzer(self.config)

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        functions = _usage(results, MetricKey.FUNCTIONS_DETAIL)
        filters = _usage(results, MetricKey.FILTERS_DETAIL)
        tests = _usage(results, MetricKey.TESTS_DETAIL)
        merged = functions + filters

        diversity = DiversityCalculator.simpson_diversity(merged)
        entropy = DiversityCalculator.usage_entropy(merged)
        security = self.security.analyze(results)

        score, grade = self.grader.grade_callables(
            security.score, diversity, security.deprecated_count, security.debug_calls
        )

        total_calls = sum(functions.values()) + sum(filters.values()) + sum(tests.values())
        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "total_calls": total_calls,
                "unique_functions": len(functions),
                "unique_filters": len(filters),
                "unique_tests": len(tests),
                "avg_calls_per_template": round(total_calls / max(1, len(results)), 2),
            },
            detail_metrics={
                "diversity_index": round(diversity, 3),
                "usage_entropy": round(entropy, 3),
                "security_score": security.score,
                "deprecated_count": security.deprecated_count,
                "debug_calls": security.debug_calls,
            },
            distributions={
                "usage_breakdown": {
                    "functions": sum(functions.values()),
                    "filters": sum(filters.values()),
                    "tests": sum(tests.values()),
                },
                "top_functions": dict(functions.most_common(10)),
                "top_filters": dict(filters.most_common(10)),
            },
            insights=[
                f"Risky: {name} ({count})"
                for name, count in Counter(security.risks).most_common(TOP_RISKS)
            ],
        )
