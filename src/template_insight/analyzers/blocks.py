"""Block definition and usage across templates."""

from collections import Counter
from typing import Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..metrics.models import BlockMetrics


class BlockUsageAnalyzer:
    """Matches provided blocks against used blocks over the whole corpus."""

    def analyze(self, results: Sequence[AnalysisResult]) -> BlockMetrics:
        defined: Counter = Counter()
        used: Counter = Counter()
        for result in results:
            defined.update(str(b) for b in result.get_list(MetricKey.PROVIDED_BLOCKS))
            used.update(str(b) for b in result.get_list(MetricKey.USED_BLOCKS))

        orphaned = [name for name in defined if name not in used]
        return BlockMetrics(
            total_defined=sum(defined.values()),
            total_used=sum(used.values()),
            orphaned_blocks=orphaned,
            usage_ratio=len(used) / len(defined) if defined else 0.0,
            average_reuse=sum(used.values()) / len(used) if used else 0.0,
        )
