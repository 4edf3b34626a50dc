"""Inheritance chains, dependencies and cycles between templates."""

from typing import Optional, Sequence

from ..analysis.graph import build_dependency_graph, find_cycles, isolated_templates
from ..analysis.result import AnalysisResult, MetricKey
from ..config import MetricsConfig
from ..grading.grader import DimensionGrader
from ..metrics.models import DimensionMetrics

TOP_CHAINS = 20
TOP_DEPENDENCIES = 15


class RelationshipsDimension:
    """Penalty-scored view of the template dependency graph."""

    slug = "relationships"
    title = "Template Relationships"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.grader = DimensionGrader(self.config)

    def evaluate(self, results: Sequence[AnalysisResult]) -> DimensionMetrics:
        graph = build_dependency_graph(results)
        cycles = find_cycles(graph)
        orphans = isolated_templates(graph)
        orphan_ratio = len(orphans) / len(results) if results else 0.0
        max_depth = max((r.get_int(MetricKey.INHERITANCE_DEPTH) for r in results), default=0)

        score, grade = self.grader.grade_relationships(bool(cycles), orphan_ratio, max_depth)

        chains = sorted(
            (
                {
                    "template": r.relative_path,
                    "extends": r.dependency_targets("extends"),
                    "depth": r.get_int(MetricKey.INHERITANCE_DEPTH),
                }
                for r in results
                if r.dependency_targets("extends")
            ),
            key=lambda row: row["depth"],
            reverse=True,
        )
        dependencies = sorted(
            (
                {"template": path, "count": len(targets), "dependencies": targets[:3]}
                for path, targets in graph.items()
                if targets
            ),
            key=lambda row: row["count"],
            reverse=True,
        )

        insights = []
        if cycles:
            insights.append(f"Circular refs detected: {len(cycles)}")
        if orphans:
            insights.append(f"Orphaned templates: {len(orphans)}")

        return DimensionMetrics(
            name=self.title,
            score=score,
            grade=grade,
            core_metrics={
                "circular_dependencies": len(cycles),
                "orphaned_templates": len(orphans),
                "max_inheritance_depth": max_depth,
            },
            detail_metrics={
                "orphan_ratio": round(orphan_ratio, 3),
                "templates_with_dependencies": len(dependencies),
            },
            distributions={
                "inheritance_chains": chains[:TOP_CHAINS],
                "dependencies": dependencies[:TOP_DEPENDENCIES],
                "orphans": orphans,
                "cycles": [list(edge) for edge in cycles],
            },
            insights=insights,
        )
