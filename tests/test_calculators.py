"""Tests for the complexity, distribution and diversity calculators."""

import math

import pytest

from template_insight.calculators import (
    ComplexityCalculator,
    DistributionCalculator,
    DiversityCalculator,
)


class TestComplexityCalculator:
    """Tests for ComplexityCalculator."""

    def test_logic_ratio_counts_code_lines(self, make_result):
        result = make_result(lines=20, blank_lines=5, comment_lines=5, conditions=3, loops=2)
        assert ComplexityCalculator().logic_ratio(result) == pytest.approx(0.5)

    def test_logic_ratio_includes_while_and_switch(self, make_result):
        result = make_result(lines=10, conditions=1, whileCount=1, switchCount=2)
        assert ComplexityCalculator().logic_ratio(result) == pytest.approx(0.4)

    def test_code_lines_floored_at_one(self, make_result):
        result = make_result(lines=3, blank_lines=3, conditions=2)
        assert ComplexityCalculator.code_lines(result) == 1
        assert ComplexityCalculator().logic_ratio(result) == 2.0

    def test_decision_density(self, make_result):
        assert ComplexityCalculator().decision_density(make_result(lines=40, complexity_score=10)) == 0.25

    def test_decision_density_empty_file(self, make_result):
        assert ComplexityCalculator().decision_density(make_result(complexity_score=4)) == 4.0

    def test_maintainability_index_formula(self, make_result):
        result = make_result(lines=50, total_line_length=2000, complexity_score=10)
        expected = 171 - 5.2 * math.log(2000) - 0.23 * 10 - 16.2 * math.log(50)
        assert ComplexityCalculator().maintainability_index(result) == pytest.approx(expected)

    def test_maintainability_index_empty_template(self, make_result):
        # Volume and lines both default to 1, so both logarithms vanish
        assert ComplexityCalculator().maintainability_index(make_result()) == pytest.approx(171.0)

    def test_maintainability_index_floored_at_zero(self, make_result):
        result = make_result(lines=100000, total_line_length=10**9, complexity_score=500)
        assert ComplexityCalculator().maintainability_index(result) == 0.0


class TestDistributionCalculator:
    """Tests for DistributionCalculator."""

    def test_one_file_per_bucket(self, make_result):
        results = [make_result(f"t{n}.html", lines=n) for n in (10, 60, 120, 220, 800)]
        distribution = DistributionCalculator().size_distribution(results)
        assert list(distribution) == ["0-50", "51-100", "101-200", "201-500", "500+"]
        assert all(bucket["count"] == 1 for bucket in distribution.values())
        assert distribution["201-500"]["percentage"] == pytest.approx(20.0)

    def test_upper_bounds_are_inclusive(self):
        distribution = DistributionCalculator().bucket_values([50, 51, 500, 501])
        assert distribution["0-50"]["count"] == 1
        assert distribution["51-100"]["count"] == 1
        assert distribution["201-500"]["count"] == 1
        assert distribution["500+"]["count"] == 1

    def test_empty_input(self):
        distribution = DistributionCalculator().size_distribution([])
        assert all(b == {"count": 0, "percentage": 0.0} for b in distribution.values())


class TestDiversityCalculator:
    """Tests for DiversityCalculator."""

    def test_two_equal_names(self):
        usage = {"a": 10, "b": 10, "c": 0}
        assert DiversityCalculator.simpson_diversity(usage) == pytest.approx(1 - 180 / 380)
        assert DiversityCalculator.usage_entropy(usage) == pytest.approx(1.0)

    def test_single_name_has_no_diversity(self):
        assert DiversityCalculator.simpson_diversity({"a": 12}) == 0.0
        assert DiversityCalculator.usage_entropy({"a": 12}) == 0.0

    def test_degenerate_totals(self):
        assert DiversityCalculator.simpson_diversity({}) == 0.0
        assert DiversityCalculator.simpson_diversity({"a": 1}) == 0.0
        assert DiversityCalculator.usage_entropy({}) == 0.0

    def test_all_distinct(self):
        assert DiversityCalculator.simpson_diversity({"a": 1, "b": 1, "c": 1}) == 1.0
