"""Diversity of callable usage: Simpson index and usage entropy."""

from typing import Mapping, Union

from ..math.entropy import Entropy

Count = Union[int, float]


class DiversityCalculator:
    """Diversity measures over a name -> usage count map."""

    @staticmethod
    def simpson_diversity(usage: Mapping[str, Count]) -> float:
        """
        Simpson diversity D = 1 - sum n_i (n_i - 1) / (N (N - 1)).

        The probability that two usages drawn without replacement are of
        different callables. 0.0 when N <= 1.
        """
        total = sum(usage.values())
        if total <= 1:
            return 0.0
        same = sum(n * (n - 1) for n in usage.values())
        return 1.0 - same / (total * (total - 1))

    @staticmethod
    def usage_entropy(usage: Mapping[str, Count]) -> float:
        """Shannon entropy (bits) of the usage distribution, 0.0 when empty."""
        return Entropy.shannon(usage)
