"""Complexity-derived ratios for a single template."""

import math
from typing import Optional

from ..analysis.result import AnalysisResult, MetricKey
from ..config import MetricsConfig


class ComplexityCalculator:
    """Logic ratio, decision density and maintainability index for a template."""

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    @staticmethod
    def code_lines(result: AnalysisResult) -> int:
        """Lines that are neither blank nor comments, floored at 1."""
        lines = result.get_int(MetricKey.LINES)
        blank = result.get_int(MetricKey.BLANK_LINES)
        comments = result.get_int(MetricKey.COMMENT_LINES)
        return max(1, lines - blank - comments)

    def logic_ratio(self, result: AnalysisResult) -> float:
        """Control-flow constructs per line of code."""
        logic = (
            result.get_int(MetricKey.CONDITIONS)
            + result.get_int(MetricKey.LOOPS)
            + result.get_int(MetricKey.WHILE_COUNT)
            + result.get_int(MetricKey.SWITCH_COUNT)
        )
        return logic / self.code_lines(result)

    def decision_density(self, result: AnalysisResult) -> float:
        """Complexity score per line."""
        lines = max(1, result.get_int(MetricKey.LINES))
        return result.get_int(MetricKey.COMPLEXITY_SCORE) / lines

    def maintainability_index(self, result: AnalysisResult) -> float:
        """
        MI = 171 - 5.2 ln(volume) - 0.23 complexity - 16.2 ln(lines), floored at 0.

        Volume is the total line length of the template; it is treated as 1
        when not positive so the logarithm stays defined.
        """
        cfg = self.config
        volume = result.get_float(MetricKey.TOTAL_LINE_LENGTH, 1.0)
        if volume <= 0:
            volume = 1.0
        complexity = result.get_float(MetricKey.COMPLEXITY_SCORE)
        lines = max(1, result.get_int(MetricKey.LINES))

        mi = (
            cfg.mi_base
            - cfg.mi_volume_coefficient * math.log(volume)
            - cfg.mi_complexity_coefficient * complexity
            - cfg.mi_lines_coefficient * math.log(lines)
        )
        return max(0.0, mi)
