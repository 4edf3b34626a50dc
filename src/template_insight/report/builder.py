"""Assembles dimension metrics, directory rollups and health into a Report."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..analysis.result import AnalysisResult, MetricKey
from ..calculators.complexity import ComplexityCalculator
from ..config import MetricsConfig
from ..dimensions import all_dimensions, get_dimension
from ..grading.health import HealthScore, HealthSynthesizer
from ..metrics.directory import aggregate_by_directory
from ..metrics.hotspots import HotspotDetector
from ..metrics.models import DimensionMetrics
from .models import ChartSection, KeyValueSection, ListSection, Report, ReportSection, TableSection

REPORT_TITLE = "Template Insight Analysis"

# Complexity above which the visual recap counts a file as critical
RECAP_CRITICAL = 20


@dataclass(frozen=True)
class QualityAssessment:
    """Every dimension's metrics plus the synthesized health score."""

    dimensions: Dict[str, DimensionMetrics]
    health: HealthScore
    template_count: int


def dimension_sections(slug: str, metrics: DimensionMetrics) -> List[ReportSection]:
    """Key-value sections for a dimension's core and detail metrics, plus insights."""
    sections: List[ReportSection] = [
        KeyValueSection(f"{metrics.name}: core metrics", metrics.core_metrics, {"dimension": slug}),
    ]
    if metrics.detail_metrics:
        sections.append(
            KeyValueSection(f"{metrics.name}: details", metrics.detail_metrics, {"dimension": slug})
        )
    for name, distribution in metrics.distributions.items():
        section = _distribution_section(f"{metrics.name}: {name}", distribution)
        if section is not None:
            sections.append(section)
    if metrics.insights:
        sections.append(ListSection(f"{metrics.name}: insights", metrics.insights))
    return sections


def _cell(value: Any) -> Any:
    if isinstance(value, float):
        return round(value, 3)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return value


def _distribution_section(title: str, distribution: Any) -> Optional[ReportSection]:
    """Chart for label -> count maps, table for lists of rows, list for plain items."""
    if not distribution:
        return None
    if isinstance(distribution, list):
        if all(isinstance(row, dict) for row in distribution):
            headers = list(distribution[0])
            return TableSection(title, headers, [[_cell(row.get(h)) for h in headers] for row in distribution])
        return ListSection(title, [_cell(item) for item in distribution])
    if not isinstance(distribution, dict):
        return None
    points = []
    for label, value in distribution.items():
        if isinstance(value, dict):
            points.append({"label": str(label), "value": value.get("count", 0),
                           "percentage": value.get("percentage", 0.0)})
        else:
            points.append({"label": str(label), "value": value})
    return ChartSection(title, "bar", points)


class QualityReportBuilder:
    """Builds the full quality report or a single-dimension report."""

    def __init__(
        self,
        config: Optional[MetricsConfig] = None,
        max_dir_depth: int = 2,
        hotspot_limit: int = 5,
    ):
        self.config = config or MetricsConfig()
        self.max_dir_depth = max_dir_depth
        self.hotspot_limit = hotspot_limit
        self.health = HealthSynthesizer(self.config)
        self.hotspots = HotspotDetector(ComplexityCalculator(self.config))

    def assess(self, results: Sequence[AnalysisResult]) -> QualityAssessment:
        dimensions = {
            slug: evaluator.evaluate(results)
            for slug, evaluator in all_dimensions(self.config).items()
        }
        scores = {slug: m.score for slug, m in dimensions.items() if slug in self.config.health_weights}
        return QualityAssessment(dimensions, self.health.synthesize(scores), len(results))

    def build(
        self, results: Sequence[AnalysisResult], assessment: Optional[QualityAssessment] = None
    ) -> Report:
        """
        Full report: each dimension with a header, then directory breakdown,
        hotspots, a visual recap and the final health table.
        """
        assessment = assessment or self.assess(results)
        report = Report(REPORT_TITLE)

        for slug, metrics in assessment.dimensions.items():
            weight = self.config.health_weights.get(slug, 0.0)
            report.add_section(
                ReportSection(
                    f"{metrics.name} Analysis ({metrics.score:.1f}/100)",
                    "dimension_header",
                    {
                        "dimension": slug,
                        "dimension_name": metrics.name,
                        "score": metrics.score,
                        "grade": metrics.grade,
                        "weight": weight,
                        "status": self.health.band_for(metrics.score),
                    },
                )
            )
            for section in dimension_sections(slug, metrics):
                report.add_section(section)

        report.add_section(self._directory_table(results))
        report.add_section(self._hotspot_table(results))
        report.add_section(self._visual_recap(results, assessment))
        report.add_section(self._health_table(assessment))
        return report

    def _directory_table(self, results: Sequence[AnalysisResult]) -> TableSection:
        rows = [
            [
                path,
                d.file_count,
                d.total_lines,
                round(d.avg_complexity, 1),
                d.max_complexity,
                d.critical_count,
                round(d.comment_ratio * 100, 1),
                round(d.indentation_consistency, 1),
            ]
            for path, d in aggregate_by_directory(results, self.max_dir_depth, self.config).items()
        ]
        return TableSection(
            "Directory Breakdown",
            ["Directory", "Files", "Lines", "Avg Cx", "Max Cx", "Critical", "Comments %", "Indent %"],
            rows,
        )

    def _hotspot_table(self, results: Sequence[AnalysisResult]) -> TableSection:
        rows = [
            [h.path, h.complexity, round(h.logic_ratio, 3), round(h.maintainability, 1)]
            for h in self.hotspots.detect(results, self.hotspot_limit)
        ]
        return TableSection("Complexity Hotspots", ["Template", "Complexity", "Logic Ratio", "MI"], rows)

    def _visual_recap(self, results: Sequence[AnalysisResult], assessment: QualityAssessment) -> ChartSection:
        points = []
        for slug, metrics in assessment.dimensions.items():
            point: Dict[str, Any] = {"label": metrics.name, "value": int(round(metrics.score)),
                                     "grade": metrics.grade}
            if slug == "complexity":
                point["mini"] = self._complexity_mini(results)
            elif slug == "template-files":
                point["mini"] = self._files_mini(results)
            points.append(point)
        return ChartSection("Dimension Recap", "score_bars", points, {"max": 100})

    @staticmethod
    def _complexity_mini(results: Sequence[AnalysisResult]) -> str:
        values = [r.get_int(MetricKey.COMPLEXITY_SCORE) for r in results]
        count = len(values)
        avg = sum(values) / count if count else 0.0
        critical = sum(1 for v in values if v > RECAP_CRITICAL) / count * 100 if count else 0.0
        depth = max((r.get_int(MetricKey.MAX_DEPTH) for r in results), default=0)
        return f"avg {avg:.1f} | crit {critical:.0f}% | depth {depth}"

    @staticmethod
    def _files_mini(results: Sequence[AnalysisResult]) -> str:
        lines = [r.get_int(MetricKey.LINES) for r in results]
        avg = sum(lines) / len(lines) if lines else 0.0
        return f"{len(lines)} files | avg {avg:.1f} | max {max(lines, default=0)}"

    @staticmethod
    def _health_table(assessment: QualityAssessment) -> TableSection:
        health = assessment.health
        return TableSection(
            "Final Project Health Score",
            ["Metric", "Score", "Status"],
            [
                ["Overall Health", f"{health.score:.1f}/100", health.band],
                ["Assessment", health.description, ""],
                ["Templates Analyzed", assessment.template_count, ""],
            ],
            {"score": health.score, "band": health.band},
        )


def build_dimension_report(
    slug: str,
    results: Sequence[AnalysisResult],
    config: Optional[MetricsConfig] = None,
    metrics: Optional[DimensionMetrics] = None,
) -> Report:
    """
    Report for a single dimension.

    ``metrics`` skips evaluation when the caller already has them.

    Raises:
        InvalidDimensionError: If slug is not a known dimension
    """
    evaluator = get_dimension(slug, config)
    if metrics is None:
        metrics = evaluator.evaluate(results)
    report = Report(f"{metrics.name} Analysis")
    report.add_section(
        ReportSection(
            f"{metrics.name} ({metrics.score:.1f}/100, grade {metrics.grade})",
            "dimension_header",
            {"dimension": slug, "dimension_name": metrics.name, "score": metrics.score,
             "grade": metrics.grade, "status": HealthSynthesizer(config).band_for(metrics.score)},
        )
    )
    for section in dimension_sections(slug, metrics):
        report.add_section(section)
    return report
