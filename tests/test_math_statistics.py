"""Tests for descriptive statistics."""

import random

import pytest

from template_insight.math.statistics import StatisticalCalculator, StatisticalSummary


class TestCalculate:
    """Tests for StatisticalCalculator.calculate."""

    def test_empty_is_all_zero(self):
        summary = StatisticalCalculator.calculate([])
        assert summary == StatisticalSummary()
        assert all(v == 0 for v in summary.to_dict().values())

    def test_percentiles_interpolate(self):
        summary = StatisticalCalculator.calculate([1, 2, 3, 4, 5, 10])
        assert summary.p25 == pytest.approx(2.25)
        assert summary.median == pytest.approx(3.5)
        assert summary.p75 == pytest.approx(4.75)

    def test_basic_fields(self, normal_values):
        summary = StatisticalCalculator.calculate(normal_values)
        assert summary.count == 8
        assert summary.sum == pytest.approx(40.0)
        assert summary.mean == pytest.approx(5.0)
        assert summary.min == 2.0
        assert summary.max == 9.0
        assert summary.range == 7.0

    def test_sample_std_dev(self, normal_values):
        # Sum of squared deviations is 32; sample variance 32 / 7
        summary = StatisticalCalculator.calculate(normal_values)
        assert summary.std_dev == pytest.approx((32 / 7) ** 0.5)
        assert summary.coefficient_of_variation == pytest.approx(summary.std_dev / 5.0)

    def test_single_value(self):
        summary = StatisticalCalculator.calculate([7])
        assert summary.std_dev == 0.0
        assert summary.median == 7.0
        assert summary.p95 == 7.0

    def test_constant_values(self, constant_values):
        summary = StatisticalCalculator.calculate(constant_values)
        assert summary.std_dev == 0.0
        assert summary.gini_index == 0.0
        assert summary.coefficient_of_variation == 0.0

    def test_zero_mean_has_zero_cv(self):
        assert StatisticalCalculator.calculate([0, 0, 0]).coefficient_of_variation == 0.0

    def test_ordering_invariant(self):
        values = [3, 1, 4, 1, 5, 9, 2, 6, 5, 3]
        summary = StatisticalCalculator.calculate(values)
        assert summary.min <= summary.p25 <= summary.median <= summary.p75 <= summary.p95 <= summary.max
        assert summary.mean >= 0
        assert summary.std_dev >= 0

    def test_permutation_gives_same_summary(self):
        values = [3, 1, 4, 1, 5, 9, 2, 6, 5, 3]
        shuffled = list(values)
        random.Random(7).shuffle(shuffled)
        assert StatisticalCalculator.calculate(values) == StatisticalCalculator.calculate(shuffled)

    def test_input_not_modified(self):
        values = [3, 1, 2]
        StatisticalCalculator.calculate(values)
        assert values == [3, 1, 2]


class TestPercentile:
    """Tests for StatisticalCalculator.percentile."""

    def test_empty(self):
        assert StatisticalCalculator.percentile([], 50) == 0.0

    def test_exact_rank(self):
        assert StatisticalCalculator.percentile([1, 2, 3, 4, 5], 50) == 3.0

    def test_bounds(self):
        assert StatisticalCalculator.percentile([1, 2, 3], 0) == 1.0
        assert StatisticalCalculator.percentile([1, 2, 3], 100) == 3.0
