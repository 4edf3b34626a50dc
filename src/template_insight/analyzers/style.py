"""Formatting consistency across templates."""

from typing import Dict, List, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..collectors.code_style import formatting_score
from ..config import MetricsConfig
from ..math.entropy import Entropy
from ..metrics.models import StyleMetrics

LONG_LINES = "longLines"
TRAILING_SPACES = "trailingSpaces"
MIXED_INDENT = "mixedIndent"

# Average line length above which readability starts dropping
READABLE_LINE_LENGTH = 80.0


class StyleConsistencyAnalyzer:
    """Collects style violations and corpus-wide formatting scores."""

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    def analyze(self, results: Sequence[AnalysisResult]) -> StyleMetrics:
        violations: Dict[str, List[str]] = {LONG_LINES: [], TRAILING_SPACES: [], MIXED_INDENT: []}
        scores = []
        for result in results:
            path = result.relative_path
            if result.get_int(MetricKey.MAX_LINE_LENGTH) > self.config.long_line_limit:
                violations[LONG_LINES].append(path)
            if result.get_int(MetricKey.TRAILING_SPACES) > 0:
                violations[TRAILING_SPACES].append(path)
            if result.get_int(MetricKey.MIXED_INDENTATION_LINES) > 0:
                violations[MIXED_INDENT].append(path)
            scores.append(self.file_consistency(result))

        return StyleMetrics(
            violations=violations,
            consistency_score=sum(scores) / len(scores) if scores else 100.0,
            formatting_entropy=self.formatting_entropy(results),
            readability_score=self.readability(results),
        )

    def file_consistency(self, result: AnalysisResult) -> float:
        return formatting_score(
            result.get_int(MetricKey.MIXED_INDENTATION_LINES),
            result.get_int(MetricKey.TRAILING_SPACES),
            result.get_int(MetricKey.MAX_LINE_LENGTH),
            result.get_float(MetricKey.COMMENT_DENSITY),
            result.get_int(MetricKey.LINES, 1),
            self.config.long_line_limit,
        )

    @staticmethod
    def formatting_entropy(results: Sequence[AnalysisResult]) -> float:
        """
        -p log2 p where p is the share of lines with mixed indentation or
        trailing whitespace (capped at 1). 0.0 when there are no lines.
        """
        total = sum(r.get_int(MetricKey.LINES) for r in results)
        if total == 0:
            return 0.0
        anomalies = sum(
            r.get_int(MetricKey.MIXED_INDENTATION_LINES) + r.get_int(MetricKey.TRAILING_SPACES)
            for r in results
        )
        return Entropy.binary(anomalies / total)

    @staticmethod
    def readability(results: Sequence[AnalysisResult]) -> float:
        """Mean per-template readability: short lines and some blank spacing score high."""
        scores = []
        for r in results:
            lines = max(1, r.get_int(MetricKey.LINES, 1))
            spacing = min(1.0, r.get_int(MetricKey.BLANK_LINES) / lines)
            penalty = max(0.0, (r.get_float(MetricKey.AVG_LINE_LENGTH) - READABLE_LINE_LENGTH) / READABLE_LINE_LENGTH)
            scores.append(max(0.0, 1.0 - penalty) * (0.5 + 0.5 * spacing) * 100.0)
        return sum(scores) / len(scores) if scores else 100.0
