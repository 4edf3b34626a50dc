"""Tests for BatchAnalyzer and the corpus-level insights."""

from template_insight.analysis import BatchAnalyzer
from template_insight.scanning.finder import TemplateFinder


def by_path(results):
    return {r.relative_path: r for r in results}


class TestBatchAnalyzer:
    """Per-template results plus cross-template metrics."""

    def test_every_template_analyzed(self, corpus_batch, corpus_sources):
        assert sorted(r.relative_path for r in corpus_batch.results) == sorted(corpus_sources)
        assert corpus_batch.failures == []
        assert corpus_batch.analysis_time >= 0

    def test_dependency_graph(self, corpus_batch):
        assert corpus_batch.dependency_graph == {
            "layouts/base.html": ["components/nav.html"],
            "pages/home.html": ["layouts/base.html", "macros/forms.html"],
            "pages/about.html": ["pages/home.html"],
            "components/nav.html": [],
            "macros/forms.html": [],
        }

    def test_reference_counts_and_rank(self, corpus_results):
        results = by_path(corpus_results)
        assert results["layouts/base.html"].get_int("times_referenced") == 1
        assert results["pages/about.html"].get_int("times_referenced") == 0
        assert results["layouts/base.html"].get_int("popularity_rank") == 1
        assert results["pages/about.html"].get_int("popularity_rank") == 5

    def test_inheritance_depth_spans_the_corpus(self, corpus_results):
        results = by_path(corpus_results)
        assert results["layouts/base.html"].get_int("inheritance_depth") == 0
        assert results["pages/home.html"].get_int("inheritance_depth") == 1
        assert results["pages/about.html"].get_int("inheritance_depth") == 2

    def test_roles(self, corpus_results):
        results = by_path(corpus_results)
        assert results["layouts/base.html"].get_str("architectural_role") == "base_template"
        assert results["pages/about.html"].get_str("architectural_role") == "standalone_page"
        assert results["macros/forms.html"].get_str("architectural_role") == "standard_template"

    def test_orphan_role_and_issue(self):
        batch = BatchAnalyzer().analyze_sources({"lonely.html": "<p>hi</p>"})
        result = batch.results[0]
        assert result.get_str("architectural_role") == "orphaned"
        assert [i["type"] for i in result.get_list("potential_issues")] == ["maintenance"]
        assert result.get_str("coupling_risk") == "low"

    def test_reference_by_basename(self):
        batch = BatchAnalyzer().analyze_sources(
            {
                "layouts/base.html": "{% block body %}{% endblock %}",
                "page.html": '{% extends "base.html" %}',
            }
        )
        assert batch.dependency_graph["page.html"] == ["layouts/base.html"]

    def test_failures_are_excluded(self):
        batch = BatchAnalyzer().analyze_sources({"ok.html": "fine", "broken.html": "{% if %}"})
        assert [r.relative_path for r in batch.results] == ["ok.html"]
        assert [f.relative_path for f in batch.failures] == ["broken.html"]
        assert "broken.html" in batch.failures[0].error

    def test_analyze_files(self, template_tree):
        batch = BatchAnalyzer().analyze(TemplateFinder().find(template_tree))
        assert len(batch.results) == 5
        assert batch.results[0].relative_path == "components/nav.html"


class TestInsights:
    """architectural_insights and performance_insights."""

    def test_architectural_insights(self, corpus_batch):
        insights = corpus_batch.architectural_insights()
        assert insights["orphaned_templates"] == ["pages/about.html"]
        assert insights["circular_dependencies"] == []
        assert insights["category_distribution"] == {
            "layout": 1,
            "page": 2,
            "component": 1,
            "other": 1,
        }
        assert insights["complexity_by_category"]["page"]["count"] == 2
        assert insights["architectural_health_score"] == 95

    def test_cycles_reported(self):
        batch = BatchAnalyzer().analyze_sources(
            {"a.html": '{% include "b.html" %}', "b.html": '{% include "a.html" %}'}
        )
        insights = batch.architectural_insights()
        assert insights["circular_dependencies"] == [["b.html", "a.html"]]

    def test_performance_insights(self, corpus_batch):
        insights = corpus_batch.performance_insights()
        assert insights["total_analysis_time"] == corpus_batch.analysis_time
        assert insights["templates_per_second"] >= 0
