"""Structural architecture: coupling, roles, orphans and inheritance."""

from typing import Dict, List, Optional, Sequence

from ..analysis.graph import build_dependency_graph, isolated_templates
from ..analysis.result import AnalysisResult, MetricKey
from ..analyzers.blocks import BlockUsageAnalyzer
from ..analyzers.coupling import CouplingAnalyzer
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..metrics.models import DimensionMetrics

DEEP_INHERITANCE = 4


def classify_roles(results: Sequence[AnalysisResult]) -> Dict[str, int]:
    """Count templates as components, pages, layouts or other."""
    roles = {"components": 0, "pages": 0, "layouts": 0, "other": 0}
    for r in results:
        category = r.get_str(MetricKey.FILE_CATEGORY)
        path = r.relative_path
        if category == "component" or "component" in path:
            roles["components"] += 1
        elif category == "page" or "page" in path:
            roles["pages"] += 1
        elif category == "layout" or "layout" in path or "base" in path:
            roles["layouts"] += 1
        else:
            roles["other"] += 1
    return roles


class ArchitectureDimension:
    """Grades component share, orphan share, circular references and inheritance depth."""

    slug = "architecture"
    title = "Architecture"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)
        self.coupling = CouplingAnalyzer()
        self.blocks = BlockUsageAnalyzer()

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        coupling = self.coupling.analyze(results)
        blocks = self.blocks.analyze(results)
        roles = classify_roles(results)
        orphans = isolated_templates(build_dependency_graph(results))
        max_depth = max((r.get_int(MetricKey.INHERITANCE_DEPTH) for r in results), default=0)

        total = sum(roles.values())
        components_ratio = roles["components"] / total if total else 0.0
        orphan_ratio = len(orphans) / total if total else 0.0

        score, grade = self.grader.grade_architecture(
            components_ratio, orphan_ratio, coupling.circular_refs, max_depth
        )
        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "avg_fan_in": round(coupling.avg_fan_in, 2),
                "avg_fan_out": round(coupling.avg_fan_out, 2),
                "instability": round(coupling.instability_index, 2),
                "circular_refs": coupling.circular_refs,
                "orphans": len(orphans),
                "max_inheritance_depth": max_depth,
            },
            detail_metrics={
                "components_ratio": round(components_ratio, 3),
                "orphan_ratio": round(orphan_ratio, 3),
                "max_coupling": coupling.max_coupling,
                "block_usage_ratio": round(blocks.usage_ratio, 3),
                "block_average_reuse": round(blocks.average_reuse, 2),
                "orphaned_blocks": len(blocks.orphaned_blocks),
            },
            distributions={"roles": roles},
            insights=self._insights(orphans, coupling.circular_refs, max_depth, roles),
        )

    @staticmethod
    def _insights(orphans: List[str], circular: int, max_depth: int, roles: Dict[str, int]) -> list:
        insights = []
        if circular > 0:
            insights.append(f"Circular refs detected: {circular}")
        if orphans:
            insights.append(f"Orphaned templates: {len(orphans)}")
        if max_depth > DEEP_INHERITANCE:
            insights.append(f"Deep inheritance chains (max depth: {max_depth})")
        if roles["components"] > roles["pages"]:
            insights.append("Component-oriented architecture")
        return insights
