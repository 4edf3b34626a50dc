"""Domain calculators turning per-template metrics into derived scores."""

from .complexity import ComplexityCalculator
from .distribution import DistributionCalculator
from .diversity import DiversityCalculator

__all__ = [
    "ComplexityCalculator",
    "DistributionCalculator",
    "DiversityCalculator",
]
