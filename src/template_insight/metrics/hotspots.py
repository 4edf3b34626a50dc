"""Ranking of templates by complexity."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..calculators.complexity import ComplexityCalculator


@dataclass(frozen=True)
class Hotspot:
    """A template ranked among the most complex."""

    file: str
    path: str
    complexity: int
    logic_ratio: float
    maintainability: float


class HotspotDetector:
    """Ranks templates by complexity score, highest first."""

    def __init__(self, calculator: Optional[ComplexityCalculator] = None):
        self.calculator = calculator or ComplexityCalculator()

    def detect(self, results: Sequence[AnalysisResult], limit: int = 5) -> List[Hotspot]:
        """
        Top ``limit`` templates by complexity score.

        Ties keep input order (the sort is stable).
        """
        hotspots = [
            Hotspot(
                file=r.filename,
                path=r.relative_path,
                complexity=r.get_int(MetricKey.COMPLEXITY_SCORE),
                logic_ratio=self.calculator.logic_ratio(r),
                maintainability=self.calculator.maintainability_index(r),
            )
            for r in results
        ]
        hotspots.sort(key=lambda h: h.complexity, reverse=True)
        return hotspots[: max(0, limit)]
