"""Tests for Gini coefficient calculations."""

import pytest

from template_insight.math.gini import Gini


class TestGiniCoefficient:
    """Tests for Gini.gini_coefficient."""

    def test_empty_returns_zero(self):
        assert Gini.gini_coefficient([]) == 0.0

    def test_single_value_zero(self):
        assert Gini.gini_coefficient([42]) == 0.0

    def test_all_zeros_returns_zero(self):
        assert Gini.gini_coefficient([0, 0, 0, 0]) == 0.0

    def test_negative_values_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            Gini.gini_coefficient([1, -1, 2])

    def test_perfect_equality(self):
        assert Gini.gini_coefficient([5, 5, 5, 5]) == 0.0
        assert Gini.gini_coefficient([10, 10, 10]) == 0.0

    def test_concentrated_values(self):
        # One of four holds everything: sum |xi - xj| = 600, 2 * 16 * 25 = 800
        assert Gini.gini_coefficient([0, 0, 0, 100]) == pytest.approx(0.75)

    def test_known_value(self):
        # Pairs of [1, 3]: |1-3| twice = 4; 2 * n^2 * mean = 2 * 4 * 2 = 16
        assert Gini.gini_coefficient([1, 3]) == pytest.approx(0.25)

    def test_order_does_not_matter(self):
        assert Gini.gini_coefficient([1, 2, 3, 10]) == pytest.approx(
            Gini.gini_coefficient([10, 3, 1, 2])
        )

    def test_result_in_valid_range(self):
        for values in ([1, 1, 1], [1, 2, 3], [0, 0, 100], [5, 10, 15, 20, 80]):
            gini = Gini.gini_coefficient(values)
            assert 0.0 <= gini < 1.0, f"Gini out of range for {values}: {gini}"
