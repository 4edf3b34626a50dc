"""Mathematical utilities for template corpus analysis."""

from .entropy import Entropy
from .gini import Gini
from .statistics import StatisticalCalculator, StatisticalSummary

__all__ = [
    "Entropy",
    "Gini",
    "StatisticalCalculator",
    "StatisticalSummary",
]
