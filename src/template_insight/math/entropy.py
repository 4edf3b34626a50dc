"""Information theory: Shannon entropy over values and usage distributions."""

import math
from collections.abc import Mapping
from typing import Iterable, Union


class Entropy:
    """Information entropy calculations."""

    @staticmethod
    def shannon(distribution: Mapping[str, Union[int, float]]) -> float:
        """
        Compute Shannon entropy H(X) = -sum p(x) log2 p(x).

        Args:
            distribution: Dictionary with event -> count mapping

        Returns:
            Entropy in bits, 0.0 when the total is zero
        """
        return Entropy.of_values(distribution.values())

    @staticmethod
    def of_values(values: Iterable[Union[int, float]]) -> float:
        """
        Entropy of the values themselves, each treated as a share of their sum.

        Non-positive values contribute nothing.

        Returns:
            Entropy in bits, 0.0 when the sum is not positive
        """
        values = list(values)
        total = sum(values)
        if total <= 0:
            return 0.0

        entropy = 0.0
        for v in values:
            if v > 0:
                p = v / total
                entropy -= p * math.log2(p)

        return entropy

    @staticmethod
    def binary(p: float) -> float:
        """Single-outcome surprisal term -p log2 p, clamped to p in [0, 1]."""
        p = min(1.0, max(0.0, p))
        if p <= 0.0:
            return 0.0
        return -p * math.log2(p)
