"""Overall health score from per-dimension scores."""

from dataclasses import dataclass
from typing import Mapping, Optional

from ..config import MetricsConfig
from ..exceptions import InvalidDimensionError

BAND_DESCRIPTIONS = {
    "exceptional": "Excellent codebase with minimal issues",
    "good": "Good foundation with room for improvement",
    "fair": "Fair quality with several areas needing attention",
    "poor": "Poor quality requiring significant improvements",
    "critical": "Critical issues requiring immediate attention",
}


@dataclass(frozen=True)
class HealthScore:
    """Weighted overall score with its descriptive band."""

    score: float
    band: str
    description: str


class HealthSynthesizer:
    """Weighted average of dimension scores, mapped onto health bands.

    Only the dimensions passed in take part; their weights are renormalized
    so a partial run still yields a 0-100 score.
    """

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    def synthesize(self, scores: Mapping[str, float]) -> HealthScore:
        """
        Combine dimension scores into one health score.

        Raises:
            InvalidDimensionError: If a score is given for an unweighted dimension
        """
        weights = self.config.health_weights
        for dimension in scores:
            if dimension not in weights:
                raise InvalidDimensionError(dimension, weights)

        total_weight = sum(weights[d] for d in scores)
        if total_weight <= 0:
            score = 0.0
        else:
            score = sum(weights[d] * s for d, s in scores.items()) / total_weight

        # The band follows the reported (rounded) score
        score = round(score, 1)
        band = self.band_for(score)
        return HealthScore(score, band, BAND_DESCRIPTIONS.get(band, ""))

    def band_for(self, score: float) -> str:
        for minimum, band in self.config.health_bands:
            if score >= minimum:
                return band
        return self.config.health_fallback_band
