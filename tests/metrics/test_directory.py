"""Tests for directory rollups."""

import pytest

from template_insight.config import MetricsConfig
from template_insight.metrics import DirectoryMetrics, aggregate_by_directory


class TestAggregateByDirectory:
    """Prefix keys and folding."""

    def test_top_level_directories(self, make_result):
        results = [make_result("components/card.twig", lines=10), make_result("pages/home.twig", lines=20)]
        assert list(aggregate_by_directory(results)) == ["components", "pages"]

    def test_each_top_level_file_counts_once(self, make_result):
        results = [make_result("components/card.twig", lines=10), make_result("pages/home.twig", lines=20)]
        buckets = aggregate_by_directory(results)
        assert [b.file_count for b in buckets.values()] == [1, 1]
        assert buckets["components"].total_lines == 10
        assert buckets["pages"].total_lines == 20

    def test_nested_prefixes_up_to_depth(self, make_result):
        results = [make_result("a/b/c/x.html", lines=5)]
        assert list(aggregate_by_directory(results, max_depth=2)) == ["a", "a/b"]
        assert list(aggregate_by_directory(results, max_depth=5)) == ["a", "a/b", "a/b/c"]

    def test_root_templates_contribute_nothing(self, make_result):
        assert aggregate_by_directory([make_result("index.html", lines=5)]) == {}

    def test_totals(self, make_result):
        results = [
            make_result("pages/a.html", lines=10, blank_lines=2, complexity_score=30),
            make_result("pages/b.html", lines=30, comment_lines=4, complexity_score=10),
            make_result("pages/blog/c.html", lines=20, complexity_score=2),
        ]
        pages = aggregate_by_directory(results)["pages"]
        assert pages.file_count == 3
        assert pages.total_lines == 60
        assert pages.max_complexity == 30
        assert pages.critical_count == 1
        assert pages.avg_complexity == pytest.approx(14.0)
        assert pages.blank_ratio == pytest.approx(2 / 60)
        assert pages.comment_ratio == pytest.approx(4 / 60)

    def test_critical_threshold_from_config(self, make_result):
        results = [make_result("pages/a.html", complexity_score=30)]
        config = MetricsConfig(critical_complexity=40)
        assert aggregate_by_directory(results, config=config)["pages"].critical_count == 0


class TestDirectoryMetrics:
    """Derived ratios."""

    def test_empty_bucket(self):
        bucket = DirectoryMetrics("x")
        assert bucket.avg_lines == 0.0
        assert bucket.blank_ratio == 0.0
        assert bucket.avg_format_score == 0.0
        assert bucket.indentation_consistency == 100.0

    def test_indentation_consistency(self, make_result):
        bucket = DirectoryMetrics("x")
        bucket.add(make_result("x/a.html", lines=20, mixed_indentation_lines=5))
        assert bucket.indentation_consistency == pytest.approx(75.0)

    def test_format_score_defaults_to_clean(self, make_result):
        bucket = DirectoryMetrics("x")
        bucket.add(make_result("x/a.html"))
        bucket.add(make_result("x/b.html", formatting_consistency_score=80.0))
        assert bucket.avg_format_score == pytest.approx(90.0)
