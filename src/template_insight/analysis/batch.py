"""Corpus-wide analysis: per-template results plus cross-template insights."""

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import AnalysisError
from ..logging_config import get_logger
from ..scanning.models import TemplateFile
from .graph import (
    DependencyGraph,
    build_dependency_graph,
    find_cycles,
    inheritance_depths,
    reference_counts,
)
from .result import AnalysisResult
from .template_analyzer import TemplateAnalyzer

logger = get_logger(__name__)

# Role heuristics
HUB_REFERENCES = 10
SHARED_COMPONENT_REFERENCES = 5
BASE_TEMPLATE_BLOCKS = 3
HIGHLY_COUPLED_DEPENDENCIES = 5
HOTSPOT_COMPLEXITY = 25
STANDALONE_PAGE_DEPENDENCIES = 2

MOST_REFERENCED = 5


@dataclass(frozen=True)
class AnalysisFailure:
    """A template that could not be analyzed and was left out of the results."""

    relative_path: str
    error: str


@dataclass
class BatchAnalysisResult:
    """Results for every analyzable template plus the dependency graph."""

    results: List[AnalysisResult]
    dependency_graph: DependencyGraph
    analysis_time: float
    failures: List[AnalysisFailure] = field(default_factory=list)

    def architectural_insights(self) -> Dict[str, Any]:
        counts = reference_counts(self.dependency_graph)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        cycles = find_cycles(self.dependency_graph)

        return {
            "most_referenced": dict(ranked[:MOST_REFERENCED]),
            "orphaned_templates": [path for path, count in counts.items() if count == 0],
            "circular_dependencies": [list(edge) for edge in cycles],
            "category_distribution": dict(
                Counter(r.get_str("file_category", "other") for r in self.results)
            ),
            "complexity_by_category": self._complexity_by_category(),
            "architectural_health_score": self._health_score(counts, cycles),
        }

    def performance_insights(self) -> Dict[str, Any]:
        total = len(self.results)
        average = self.analysis_time / total if total else 0.0
        return {
            "total_analysis_time": self.analysis_time,
            "average_per_template": average,
            "slowest_templates": [
                {"template": r.relative_path, "time": r.analysis_time}
                for r in self.results
                if r.analysis_time > average * 2
            ],
            "templates_per_second": total / self.analysis_time if self.analysis_time > 0 else 0.0,
        }

    def _complexity_by_category(self) -> Dict[str, Dict[str, float]]:
        grouped: Dict[str, List[int]] = {}
        for r in self.results:
            grouped.setdefault(r.get_str("file_category", "other"), []).append(
                r.get_int("complexity_score")
            )
        return {
            category: {
                "average": sum(values) / len(values),
                "max": max(values),
                "min": min(values),
                "count": len(values),
            }
            for category, values in grouped.items()
        }

    def _health_score(self, counts: Mapping[str, int], cycles: List[Tuple[str, str]]) -> int:
        score = 100
        score -= sum(1 for c in counts.values() if c == 0) * 5
        score -= len(cycles) * 15
        score -= sum(1 for c in counts.values() if c > 10) * 10
        score -= sum(1 for r in self.results if r.get_int("complexity_score") > 20) * 8
        return max(0, score)


class BatchAnalyzer:
    """Analyzes templates one by one, then adds corpus-level metrics to each.

    Templates that fail to read or parse are logged, recorded as
    ``AnalysisFailure`` and excluded; they never abort the batch.
    """

    def __init__(self, analyzer: Optional[TemplateAnalyzer] = None, encoding: str = "utf-8"):
        self.analyzer = analyzer or TemplateAnalyzer()
        self.encoding = encoding

    def analyze(self, templates: Iterable[TemplateFile]) -> BatchAnalysisResult:
        start = time.perf_counter()
        results: List[AnalysisResult] = []
        failures: List[AnalysisFailure] = []

        for template in templates:
            try:
                results.append(self.analyzer.analyze(template, self.encoding))
            except AnalysisError as e:
                logger.warning("Skipping %s: %s", template.relative_path, e)
                failures.append(AnalysisFailure(template.relative_path, str(e)))

        return self._finish(results, failures, start)

    def analyze_sources(self, sources: Mapping[str, str]) -> BatchAnalysisResult:
        """Analyze in-memory templates keyed by relative path."""
        start = time.perf_counter()
        results: List[AnalysisResult] = []
        failures: List[AnalysisFailure] = []

        for relative_path, source in sources.items():
            try:
                results.append(self.analyzer.analyze_source(relative_path, source))
            except AnalysisError as e:
                logger.warning("Skipping %s: %s", relative_path, e)
                failures.append(AnalysisFailure(relative_path, str(e)))

        return self._finish(results, failures, start)

    def _finish(
        self, results: List[AnalysisResult], failures: List[AnalysisFailure], start: float
    ) -> BatchAnalysisResult:
        graph = build_dependency_graph(results)
        augmented = self._add_cross_template_insights(results, graph)
        elapsed = time.perf_counter() - start
        logger.info(
            "Analyzed %d template(s) in %.2fs (%d failed)", len(augmented), elapsed, len(failures)
        )
        return BatchAnalysisResult(augmented, graph, elapsed, failures)

    def _add_cross_template_insights(
        self, results: List[AnalysisResult], graph: DependencyGraph
    ) -> List[AnalysisResult]:
        counts = reference_counts(graph)
        parents = {
            path: targets[0] if targets else None
            for path, targets in build_dependency_graph(results, kind="extends").items()
        }
        depths = inheritance_depths(parents)

        augmented = []
        for result in results:
            path = result.relative_path
            times_referenced = counts.get(path, 0)
            extra: Dict[str, Any] = {
                "times_referenced": times_referenced,
                "popularity_rank": 1 + sum(1 for c in counts.values() if c > times_referenced),
                "inheritance_depth": depths.get(path, 0),
                "architectural_role": self._role(result, times_referenced),
            }
            extra["coupling_risk"] = self._coupling_risk(result, times_referenced)
            extra["corpus_reusability"] = self._reusability(result)
            extra["potential_issues"] = self._potential_issues(result, extra)
            augmented.append(result.with_metrics(extra))
        return augmented

    @staticmethod
    def _role(result: AnalysisResult, times_referenced: int) -> str:
        category = result.get_str("file_category", "other")
        provided = len(result.get_list("provided_blocks"))
        dependencies = len(result.get_list("dependencies"))
        complexity = result.get_int("complexity_score")

        if times_referenced >= HUB_REFERENCES:
            return "architectural_hub"
        if times_referenced >= SHARED_COMPONENT_REFERENCES and category == "component":
            return "shared_component"
        if provided >= BASE_TEMPLATE_BLOCKS and category == "layout":
            return "base_template"
        if dependencies == 0 and times_referenced == 0:
            return "orphaned"
        if dependencies >= HIGHLY_COUPLED_DEPENDENCIES:
            return "highly_coupled"
        if complexity > HOTSPOT_COMPLEXITY:
            return "complexity_hotspot"
        if category == "page" and dependencies <= STANDALONE_PAGE_DEPENDENCIES:
            return "standalone_page"
        return "standard_template"

    @staticmethod
    def _coupling_risk(result: AnalysisResult, times_referenced: int) -> str:
        complexity = result.get_int("complexity_score")
        risk = len(result.get_list("dependencies")) * 2
        if times_referenced > 10:
            risk += 15
        elif times_referenced > 5:
            risk += 10
        if complexity > 20:
            risk += 10
        elif complexity > 15:
            risk += 5

        if risk >= 30:
            return "high"
        if risk >= 15:
            return "medium"
        return "low"

    @staticmethod
    def _reusability(result: AnalysisResult) -> int:
        complexity = result.get_int("complexity_score")
        lines = result.get_int("lines")
        score = 100 - len(result.get_list("dependencies")) * 5
        if complexity > 15:
            score -= 20
        elif complexity > 10:
            score -= 10
        if lines > 100:
            score -= 15
        elif lines > 50:
            score -= 5
        score += len(result.get_list("provided_blocks")) * 5
        if result.get_str("file_category") == "component":
            score += 10
        return max(0, min(100, score))

    @staticmethod
    def _potential_issues(result: AnalysisResult, extra: Mapping[str, Any]) -> List[Dict[str, str]]:
        issues = []
        complexity = result.get_int("complexity_score")
        if complexity > 25:
            issues.append(_issue("complexity", "high", "Very high complexity detected",
                                 "Break down into smaller templates or components"))
        elif complexity > 15:
            issues.append(_issue("complexity", "medium", "High complexity detected",
                                 "Consider refactoring complex logic"))

        lines = result.get_int("lines")
        if lines > 150:
            issues.append(_issue("size", "high", "Very large template",
                                 "Extract components or break into smaller templates"))
        elif lines > 75:
            issues.append(_issue("size", "medium", "Large template", "Consider component extraction"))

        if extra.get("coupling_risk") == "high":
            issues.append(_issue("coupling", "high", "High coupling detected",
                                 "Reduce dependencies or extract shared functionality"))
        if extra.get("architectural_role") == "orphaned":
            issues.append(_issue("maintenance", "low", "Orphaned template (not referenced)",
                                 "Consider removing if truly unused"))
        return issues


def _issue(kind: str, severity: str, message: str, suggestion: str) -> Dict[str, str]:
    return {"type": kind, "severity": severity, "message": message, "suggestion": suggestion}
