"""Tests for the dimension evaluators and their registry."""

import pytest

from template_insight.dimensions import (
    DIMENSIONS,
    ArchitectureDimension,
    CallablesDimension,
    CodeStyleDimension,
    ComplexityDimension,
    DimensionEvaluator,
    RelationshipsDimension,
    TemplateFilesDimension,
    all_dimensions,
    get_dimension,
)
from template_insight.dimensions.architecture import classify_roles
from template_insight.dimensions.maintainability import refactor_priority, risk_buckets
from template_insight.exceptions import InvalidDimensionError


class TestRegistry:
    """Slug lookup."""

    def test_report_order(self):
        assert list(DIMENSIONS) == [
            "template-files",
            "complexity",
            "callables",
            "code-style",
            "architecture",
            "maintainability",
            "relationships",
        ]

    def test_get_dimension(self):
        assert isinstance(get_dimension("complexity"), ComplexityDimension)

    def test_unknown_slug(self):
        with pytest.raises(InvalidDimensionError) as exc_info:
            get_dimension("performance")
        assert "complexity" in exc_info.value.valid

    def test_unknown_slug_is_value_error(self):
        with pytest.raises(ValueError):
            get_dimension("nope")

    def test_all_satisfy_protocol(self):
        for slug, evaluator in all_dimensions().items():
            assert isinstance(evaluator, DimensionEvaluator)
            assert evaluator.slug == slug


class TestEvaluateCorpus:
    """Every evaluator on a real template tree."""

    @pytest.mark.parametrize("slug", list(DIMENSIONS))
    def test_score_and_grade(self, slug, corpus_results):
        metrics = get_dimension(slug).evaluate(corpus_results)
        assert 0.0 <= metrics.score <= 100.0
        assert metrics.grade in ("A", "B", "C", "D")
        assert metrics.name == DIMENSIONS[slug].title
        assert metrics.core_metrics

    @pytest.mark.parametrize("slug", list(DIMENSIONS))
    def test_empty_corpus(self, slug):
        metrics = get_dimension(slug).evaluate([])
        assert metrics.grade in ("A", "B", "C", "D")

    def test_relationships_of_clean_tree(self, corpus_results):
        metrics = RelationshipsDimension().evaluate(corpus_results)
        assert (metrics.score, metrics.grade) == (100.0, "A")
        assert metrics.core_metrics["max_inheritance_depth"] == 2
        assert metrics.distributions["inheritance_chains"][0]["template"] == "pages/about.html"
        assert metrics.distributions["cycles"] == []

    def test_relationships_with_cycle(self, make_result):
        results = [
            make_result("a.html", dependencies=[{"template": "b.html", "type": "includes"}]),
            make_result("b.html", dependencies=[{"template": "a.html", "type": "includes"}]),
        ]
        metrics = RelationshipsDimension().evaluate(results)
        assert metrics.score == 70.0
        assert metrics.insights == ["Circular refs detected: 1"]

    def test_architecture_counts(self, corpus_results):
        metrics = ArchitectureDimension().evaluate(corpus_results)
        assert metrics.distributions["roles"] == {"components": 1, "pages": 2, "layouts": 1, "other": 1}
        assert metrics.core_metrics["orphans"] == 0
        assert metrics.detail_metrics["components_ratio"] == 0.2


class TestTemplateFiles:
    """Size spread and directory balance."""

    def test_equal_sizes(self, make_result):
        results = [make_result(f"d{i}/t.html", lines=40) for i in range(4)]
        metrics = TemplateFilesDimension().evaluate(results)
        assert metrics.grade == "A"
        assert metrics.detail_metrics["dir_dominance"] == 0.25
        assert "Balanced sizes (Gini: 0.00)" in metrics.insights

    def test_dominant_directory(self, make_result):
        results = [make_result(f"pages/t{i}.html", lines=40) for i in range(3)]
        metrics = TemplateFilesDimension().evaluate(results)
        assert metrics.detail_metrics["dir_dominance"] == 1.0
        assert metrics.grade == "D"
        assert "One directory dominates (100%)" in metrics.insights

    def test_score_falls_as_one_directory_dominates(self, make_result):
        scores = []
        for directories in (8, 4, 2, 1):
            results = [make_result(f"d{i % directories}/t{i}.html", lines=40) for i in range(8)]
            scores.append(TemplateFilesDimension().evaluate(results).score)
        assert scores == sorted(scores, reverse=True)
        assert scores[0] > scores[-1]

    def test_score_falls_as_sizes_concentrate(self, make_result):
        scores = []
        ginis = []
        for sizes in ([40, 40, 40, 40], [30, 40, 40, 50], [10, 20, 60, 110], [1, 1, 1, 190]):
            results = [make_result(f"d{i}/t.html", lines=n) for i, n in enumerate(sizes)]
            metrics = TemplateFilesDimension().evaluate(results)
            scores.append(metrics.score)
            ginis.append(metrics.detail_metrics["gini_index"])
        assert ginis == sorted(ginis)
        assert scores == sorted(scores, reverse=True)
        assert scores[0] > scores[-1]


class TestComplexity:
    """Buckets, hotspots and insights."""

    def test_bucket_boundaries(self):
        buckets = ComplexityDimension().bucket([0, 5, 6, 15, 16, 25, 26])
        assert buckets == {"simple": 2, "moderate": 2, "complex": 2, "critical": 1}

    def test_critical_insights(self, make_result):
        results = [make_result("a.html", complexity_score=40, lines=100), make_result("b.html", complexity_score=2)]
        metrics = ComplexityDimension().evaluate(results)
        assert metrics.core_metrics["critical_files"] == 1
        assert metrics.insights == ["1 critical file(s)", "Max complexity: 40", "Hotspot: a.html [40]"]
        assert metrics.distributions["hotspots"][0]["path"] == "a.html"

    def test_hotspot_limit(self, make_result):
        results = [make_result(f"t{i}.html", complexity_score=i) for i in range(10)]
        metrics = ComplexityDimension(hotspot_limit=2).evaluate(results)
        assert len(metrics.distributions["hotspots"]) == 2


class TestCallables:
    """Diversity and risk reporting."""

    def test_risky_insights(self, make_result):
        results = [
            make_result("a.html", functions_detail={"dump": 1}, filters_detail={"safe": 4, "e": 2}),
            make_result("b.html", filters_detail={"raw": 2}),
        ]
        metrics = CallablesDimension().evaluate(results)
        assert metrics.insights == ["Risky: safe (4)", "Risky: raw (2)", "Risky: dump (1)"]
        assert metrics.detail_metrics["security_score"] == 100 - 5 - 3 - 3
        assert metrics.core_metrics["total_calls"] == 9

    def test_clean_diverse_usage(self, make_result):
        results = [make_result(filters_detail={"e": 1, "upper": 1, "title": 1, "trim": 1})]
        metrics = CallablesDimension().evaluate(results)
        assert metrics.grade == "A"
        assert metrics.insights == []


class TestCodeStyle:
    """Line length buckets and grading."""

    def test_line_length_buckets(self):
        buckets = CodeStyleDimension().line_length_buckets([80, 81, 120, 121, 161])
        assert {label: b["count"] for label, b in buckets.items()} == {
            "<=80": 1,
            "81-120": 2,
            "121-160": 1,
            ">160": 1,
        }

    def test_mixed_indentation_insight(self, make_result):
        results = [make_result(lines=10, mixed_indentation_lines=1, comment_density=10.0)]
        assert "Mixed indentation in 1 file(s)" in CodeStyleDimension().evaluate(results).insights


class TestMaintainability:
    """Refactor priority."""

    def test_refactor_priority_caps(self, make_result):
        worst = make_result(
            complexity_score=60,
            lines=400,
            dependencies=[{"template": str(i), "type": "includes"} for i in range(6)],
            formatting_consistency_score=0.0,
        )
        assert refactor_priority(worst) == pytest.approx(1.0)

    def test_refactor_priority_clean(self, make_result):
        assert refactor_priority(make_result()) == 0.0

    def test_risk_buckets(self):
        assert risk_buckets([0.9, 0.7, 0.5, 0.35, 0.1]) == {"high": 2, "medium": 2, "low": 1}

    def test_classify_roles_by_path(self, make_result):
        results = [make_result("shared/base.html"), make_result("x/thing.html")]
        assert classify_roles(results) == {"components": 0, "pages": 0, "layouts": 1, "other": 1}
