"""Risky, deprecated and debugging callables."""

from typing import Dict, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..config import MetricsConfig
from ..metrics.models import SecurityMetrics


class CallableSecurityAnalyzer:
    """Scores callable usage from 100 down.

    Every template using a risky function costs ``risky_function_penalty``
    per distinct function, every risky filter ``risky_filter_penalty``.
    The score is floored at 0.
    """

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    def analyze(self, results: Sequence[AnalysisResult]) -> SecurityMetrics:
        cfg = self.config
        risks: Dict[str, int] = {}
        score = 100
        deprecated = 0
        debug_calls = 0

        for result in results:
            for name, count in result.get_mapping(MetricKey.FUNCTIONS_DETAIL).items():
                if name in cfg.risky_functions:
                    risks[name] = risks.get(name, 0) + int(count)
                    score -= cfg.risky_function_penalty
            for name, count in result.get_mapping(MetricKey.FILTERS_DETAIL).items():
                if name in cfg.risky_filters:
                    risks[name] = risks.get(name, 0) + int(count)
                    score -= cfg.risky_filter_penalty
            deprecated += result.get_int(MetricKey.DEPRECATED_CALLABLES)
            debug_calls += result.get_int(MetricKey.DEBUG_CALLS)

        return SecurityMetrics(
            score=max(0, score),
            risks=risks,
            deprecated_count=deprecated,
            debug_calls=debug_calls,
        )
