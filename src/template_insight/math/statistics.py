"""Descriptive statistics over per-template metric values."""

import math
from dataclasses import dataclass, fields
from typing import Sequence, Union

import numpy as np

from .entropy import Entropy
from .gini import Gini

Number = Union[int, float]


@dataclass(frozen=True)
class StatisticalSummary:
    """Summary of a numeric sequence. Every field is 0 for empty input."""

    count: int = 0
    sum: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0
    coefficient_of_variation: float = 0.0
    p25: float = 0.0
    p75: float = 0.0
    p95: float = 0.0
    gini_index: float = 0.0
    entropy: float = 0.0
    min: float = 0.0
    max: float = 0.0
    range: float = 0.0

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class StatisticalCalculator:
    """Pure statistics over a sequence of observations.

    The input is sorted internally, so any permutation of the same values
    yields the same summary.
    """

    @staticmethod
    def calculate(values: Sequence[Number]) -> StatisticalSummary:
        """
        Summarize values: central tendency, spread, percentiles, inequality.

        Args:
            values: Numeric observations (not modified)

        Returns:
            StatisticalSummary; all zeros when values is empty
        """
        if len(values) == 0:
            return StatisticalSummary()

        arr = np.sort(np.asarray(values, dtype=float))
        n = arr.size
        total = float(arr.sum())
        mean = total / n

        std_dev = StatisticalCalculator.std_dev(arr)
        cv = std_dev / mean if mean > 0 else 0.0

        return StatisticalSummary(
            count=n,
            sum=total,
            mean=mean,
            median=StatisticalCalculator.percentile(arr, 50),
            std_dev=std_dev,
            coefficient_of_variation=cv,
            p25=StatisticalCalculator.percentile(arr, 25),
            p75=StatisticalCalculator.percentile(arr, 75),
            p95=StatisticalCalculator.percentile(arr, 95),
            gini_index=Gini.gini_coefficient(arr) if arr[0] >= 0 else 0.0,
            entropy=Entropy.of_values(arr.tolist()),
            min=float(arr[0]),
            max=float(arr[-1]),
            range=float(arr[-1] - arr[0]),
        )

    @staticmethod
    def std_dev(values: Sequence[Number]) -> float:
        """Sample standard deviation (n - 1 denominator); 0.0 for n <= 1."""
        if len(values) <= 1:
            return 0.0
        return float(np.std(np.asarray(values, dtype=float), ddof=1))

    @staticmethod
    def percentile(sorted_values: Sequence[Number], p: float) -> float:
        """
        Percentile by linear interpolation between closest ranks.

        rank = (p / 100) * (n - 1); when rank falls between two order
        statistics the result is interpolated between them.

        Args:
            sorted_values: Values in ascending order
            p: Percentile in [0, 100]

        Returns:
            Interpolated value, 0.0 for empty input
        """
        n = len(sorted_values)
        if n == 0:
            return 0.0
        rank = (p / 100.0) * (n - 1)
        lower = math.floor(rank)
        upper = math.ceil(rank)
        low_value = float(sorted_values[lower])
        if lower == upper:
            return low_value
        weight = rank - lower
        return low_value + weight * (float(sorted_values[upper]) - low_value)
