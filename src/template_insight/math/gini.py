"""Gini coefficient for inequality measurement.

Applied to template sizes, the Gini coefficient shows whether a handful of
templates carry most of the markup.

    G = 0: perfect equality (all templates the same size)
    G -> 1: perfect inequality (one template has all the lines)

Formula (mean absolute difference over all ordered pairs):
    G = sum_i sum_j |x_i - x_j| / (2 * n^2 * mean)
"""

from typing import Sequence, Union

import numpy as np


class Gini:
    """Gini coefficient calculations for inequality measurement."""

    @staticmethod
    def gini_coefficient(values: Sequence[Union[int, float]]) -> float:
        """Compute the Gini coefficient from all pairwise differences.

        Args:
            values: Non-negative observations. May be empty.

        Returns:
            Gini coefficient in [0, 1). 0.0 for empty input or a zero sum.

        Raises:
            ValueError: If values contain negatives.
        """
        if len(values) == 0:
            return 0.0

        arr = np.asarray(values, dtype=float)
        if np.any(arr < 0):
            raise ValueError("Gini requires non-negative values")

        total = float(arr.sum())
        if total <= 0:
            return 0.0

        n = arr.size
        mean = total / n
        # O(n^2) pairwise differences, matching the textbook definition
        pairwise = np.abs(arr[:, None] - arr[None, :]).sum()
        return float(pairwise / (2.0 * n * n * mean))
