"""Same templates in, same report out."""

import pytest

from template_insight.analysis import BatchAnalyzer
from template_insight.report import QualityReportBuilder


def summary_of(assessment):
    return {
        slug: (metrics.score, metrics.grade)
        for slug, metrics in assessment.dimensions.items()
    }


def hotspot_paths(report):
    table = next(s for s in report.sections if s.title == "Complexity Hotspots")
    return [row[0] for row in table.data["rows"]]


def metrics_by_path(batch):
    return {r.relative_path: dict(r.metrics) for r in batch.results}


class TestRepeatedRuns:
    """Analyzing and reporting twice gives identical output."""

    def test_batch_metrics(self, corpus_sources):
        first = BatchAnalyzer().analyze_sources(corpus_sources)
        second = BatchAnalyzer().analyze_sources(corpus_sources)
        assert metrics_by_path(first) == metrics_by_path(second)
        assert first.dependency_graph == second.dependency_graph

    def test_report(self, corpus_results):
        builder = QualityReportBuilder()
        assert builder.build(corpus_results).to_dict() == builder.build(corpus_results).to_dict()

    def test_fresh_builders_agree(self, corpus_results):
        first = QualityReportBuilder().assess(corpus_results)
        second = QualityReportBuilder().assess(corpus_results)
        assert summary_of(first) == summary_of(second)
        assert first.health == second.health


class TestInputOrder:
    """Template order does not change scores, grades or rankings."""

    @pytest.fixture
    def reversed_sources(self, corpus_sources):
        return dict(reversed(list(corpus_sources.items())))

    def test_batch_metrics(self, corpus_sources, reversed_sources):
        forward = BatchAnalyzer().analyze_sources(corpus_sources)
        backward = BatchAnalyzer().analyze_sources(reversed_sources)
        assert metrics_by_path(forward) == metrics_by_path(backward)

    def test_assessment(self, corpus_results):
        builder = QualityReportBuilder()
        forward = builder.assess(corpus_results)
        backward = builder.assess(list(reversed(corpus_results)))

        assert list(forward.dimensions) == list(backward.dimensions)
        for slug, (score, grade) in summary_of(forward).items():
            assert summary_of(backward)[slug][0] == pytest.approx(score)
            assert summary_of(backward)[slug][1] == grade
        assert backward.health.score == pytest.approx(forward.health.score)
        assert backward.health.band == forward.health.band

    def test_hotspot_order(self, corpus_results):
        builder = QualityReportBuilder()
        forward = hotspot_paths(builder.build(corpus_results))
        backward = hotspot_paths(builder.build(list(reversed(corpus_results))))
        # Only templates with equal complexity may swap places
        assert forward[0] == backward[0] == "pages/home.html"
        complexity = {r.relative_path: r.get_int("complexity_score") for r in corpus_results}
        assert [complexity[p] for p in forward] == [complexity[p] for p in backward]
        assert sorted(forward) == sorted(backward)
