"""Protocol shared by dimension evaluators."""

from typing import List, Protocol, Sequence, runtime_checkable

from ..analysis.result import AnalysisResult
from ..metrics.models import DimensionMetrics


@runtime_checkable
class DimensionEvaluator(Protocol):
    """Turns the analyzed corpus into one dimension's score, grade and figures."""

    slug: str
    title: str

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics: ...


def int_values(results: Sequence[AnalysisResult], key: str) -> List[int]:
    return [r.get_int(key) for r in results]


def share_table(counts: dict, total: int) -> dict:
    """Label -> {count, percentage} with the total floored at 1."""
    total = max(1, total)
    return {label: {"count": c, "percentage": c / total * 100.0} for label, c in counts.items()}
