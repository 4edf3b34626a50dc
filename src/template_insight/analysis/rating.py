"""Per-template A-D ratings for size, complexity and callable usage."""

from typing import Any, Mapping, Optional

from ..config import MetricsConfig

GRADES = ("A", "B", "C")


class TemplateRating:
    """Quick letter ratings attached to every analyzed template."""

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    def size_rating(self, lines: int) -> str:
        for grade, limit in zip(GRADES, self.config.size_rating_limits):
            if lines < limit:
                return grade
        return "D"

    def complexity_rating(self, complexity: int, depth: int) -> str:
        for grade, (max_score, max_depth) in zip(GRADES, self.config.complexity_rating_limits):
            if complexity < max_score and depth < max_depth:
                return grade
        return "D"

    def callables_score(self, metrics: Mapping[str, Any]) -> int:
        """
        Start from 100, subtract penalties for many distinct functions,
        variables and filters, and adjust for macro reuse.
        """
        cfg = self.config
        score = 100
        for key, high, high_penalty, medium, medium_penalty in cfg.callables_rating_penalties:
            value = metrics.get(key, 0)
            if value > high:
                score -= high_penalty
            elif value > medium:
                score -= medium_penalty

        definitions = metrics.get("macro_definitions", 0)
        calls = metrics.get("macro_calls", 0)
        if definitions > 0 and calls > definitions:
            score += cfg.macro_reuse_bonus
        elif definitions > 0 and calls < definitions:
            score -= cfg.macro_reuse_penalty
        return score

    def callables_rating(self, metrics: Mapping[str, Any]) -> str:
        score = self.callables_score(metrics)
        for grade, limit in zip(GRADES, self.config.callables_rating_limits):
            if score >= limit:
                return grade
        return "D"
