"""Threshold-cascade grading of analysis dimensions."""

from typing import Mapping, Optional, Tuple

from ..config import MetricsConfig
from ..exceptions import InvalidDimensionError
from ..math.statistics import StatisticalSummary

Grade = Tuple[float, str]

GRADED_DIMENSIONS = (
    "template-files",
    "complexity",
    "code-style",
    "callables",
    "architecture",
    "maintainability",
)


class DimensionGrader:
    """Maps pre-aggregated signals to a (score, grade) pair per dimension.

    Each dimension has an ordered cascade of tiers in ``GradingConfig``;
    the first tier whose bounds all hold wins, otherwise the fallback
    grade applies. Grading is pure: the same signals always give the same
    result.
    """

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    def grade(self, dimension: str, signals: Mapping[str, float]) -> Grade:
        """
        Run a dimension's cascade over named signals.

        Args:
            dimension: Slug from GRADED_DIMENSIONS
            signals: Signal name -> value, see GradingConfig for the names

        Raises:
            InvalidDimensionError: If the dimension has no cascade
            KeyError: If a signal needed by a tier is missing
        """
        if dimension not in GRADED_DIMENSIONS:
            raise InvalidDimensionError(dimension, GRADED_DIMENSIONS)
        grading = self.config.grading
        for tier in grading.tiers(dimension):
            if tier.matches(signals):
                return tier.score, tier.grade
        return grading.fallback_score, grading.fallback_grade

    def grade_template_files(self, stats: StatisticalSummary, dir_dominance: float, max_lines: int) -> Grade:
        return self.grade(
            "template-files",
            {
                "cv": stats.coefficient_of_variation,
                "gini": stats.gini_index,
                "max_lines": max_lines,
                "dir_dominance": dir_dominance,
            },
        )

    def grade_complexity(self, avg: float, max_complexity: int, critical_ratio: float, logic_ratio: float) -> Grade:
        return self.grade(
            "complexity",
            {
                "avg": avg,
                "max": max_complexity,
                "critical_ratio": critical_ratio,
                "logic_ratio": logic_ratio,
            },
        )

    def grade_code_style(
        self, consistency: float, max_line: int, comment_density: float, mixed_indent_ratio: float
    ) -> Grade:
        return self.grade(
            "code-style",
            {
                "consistency": consistency,
                "max_line": max_line,
                "comment_density": comment_density,
                "mixed_indent_ratio": mixed_indent_ratio,
            },
        )

    def grade_callables(
        self, security_score: float, diversity: float, deprecated: int, debug_calls: int
    ) -> Grade:
        return self.grade(
            "callables",
            {
                "security_score": security_score,
                "diversity": diversity,
                "deprecated": deprecated,
                "debug_calls": debug_calls,
            },
        )

    def grade_architecture(
        self, components_ratio: float, orphan_ratio: float, circular_refs: int, max_depth: int
    ) -> Grade:
        return self.grade(
            "architecture",
            {
                "components_ratio": components_ratio,
                "orphan_ratio": orphan_ratio,
                "circular_refs": circular_refs,
                "max_depth": max_depth,
            },
        )

    def grade_maintainability(self, mi_average: float) -> Grade:
        return self.grade("maintainability", {"mi_avg": mi_average})

    def grade_relationships(self, has_cycles: bool, orphan_ratio: float, max_depth: int) -> Grade:
        """
        Penalty-based score: 30 for any cycle, 25/15/10 for an orphan ratio
        above .3/.2/.1, 20/10 for an inheritance depth above 5/3.
        """
        score = 100.0
        if has_cycles:
            score -= 30
        if orphan_ratio > 0.3:
            score -= 25
        elif orphan_ratio > 0.2:
            score -= 15
        elif orphan_ratio > 0.1:
            score -= 10
        if max_depth > 5:
            score -= 20
        elif max_depth > 3:
            score -= 10
        score = max(0.0, score)
        return score, self.letter_for(score)

    def letter_for(self, score: float) -> str:
        """Letter grade for a 0-100 score using the relationship bands."""
        grading = self.config.grading
        for minimum, grade in grading.relationship_bands:
            if score >= minimum:
                return grade
        return grading.fallback_grade
