"""Dimension grading and overall health synthesis."""

from .grader import GRADED_DIMENSIONS, DimensionGrader
from .health import BAND_DESCRIPTIONS, HealthScore, HealthSynthesizer

__all__ = [
    "BAND_DESCRIPTIONS",
    "GRADED_DIMENSIONS",
    "DimensionGrader",
    "HealthScore",
    "HealthSynthesizer",
]
