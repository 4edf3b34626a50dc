"""Bucketing of template sizes into fixed line-count ranges."""

from typing import Dict, Iterable, Optional, Union

from ..analysis.result import AnalysisResult, MetricKey
from ..config import MetricsConfig


class DistributionCalculator:
    """Histogram of template line counts over closed-upper-bound ranges."""

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()

    def size_distribution(self, results: Iterable[AnalysisResult]) -> Dict[str, Dict[str, float]]:
        """
        Count templates per size bucket.

        Returns:
            Bucket label -> {"count": int, "percentage": float}, in bucket order.
            A template with exactly 50 lines falls in "0-50".
        """
        return self.bucket_values(r.get_int(MetricKey.LINES) for r in results)

    def bucket_values(self, values: Iterable[Union[int, float]]) -> Dict[str, Dict[str, float]]:
        counts = {label: 0 for label, _ in self.config.size_buckets}
        total = 0
        for value in values:
            total += 1
            counts[self._bucket_for(value)] += 1

        total = max(1, total)
        return {
            label: {"count": count, "percentage": count / total * 100.0}
            for label, count in counts.items()
        }

    def _bucket_for(self, value: Union[int, float]) -> str:
        for label, upper in self.config.size_buckets:
            if upper is None or value <= upper:
                return label
        # Values past the last bounded bucket when no open bucket is configured
        return self.config.size_buckets[-1][0]
