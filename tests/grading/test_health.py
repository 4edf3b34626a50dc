"""Tests for HealthSynthesizer."""

import pytest

from template_insight.config import MetricsConfig
from template_insight.exceptions import InvalidDimensionError
from template_insight.grading import HealthSynthesizer

ALL = ("complexity", "template-files", "relationships", "architecture", "maintainability", "callables", "code-style")


class TestHealthSynthesizer:
    """Weighted overall score."""

    def test_perfect_scores(self):
        health = HealthSynthesizer().synthesize({d: 100.0 for d in ALL})
        assert health.score == 100.0
        assert health.band == "exceptional"
        assert health.description

    def test_weighted_average(self):
        scores = {d: 60.0 for d in ALL}
        scores["complexity"] = 100.0
        # 0.2 * 100 + 0.8 * 60
        assert HealthSynthesizer().synthesize(scores).score == pytest.approx(68.0)

    def test_partial_run_renormalizes(self):
        health = HealthSynthesizer().synthesize({"complexity": 80.0, "callables": 50.0})
        assert health.score == pytest.approx(round((0.2 * 80 + 0.1 * 50) / 0.3, 1))

    def test_single_dimension(self):
        assert HealthSynthesizer().synthesize({"maintainability": 75.0}).score == 75.0

    def test_empty_is_zero(self):
        health = HealthSynthesizer().synthesize({})
        assert health.score == 0.0
        assert health.band == "critical"

    def test_unknown_dimension(self):
        with pytest.raises(InvalidDimensionError):
            HealthSynthesizer().synthesize({"speed": 50.0})

    @pytest.mark.parametrize(
        "score, band",
        [(95, "exceptional"), (90, "exceptional"), (85, "good"), (75, "fair"), (65, "poor"), (10, "critical")],
    )
    def test_bands(self, score, band):
        assert HealthSynthesizer().band_for(score) == band

    def test_custom_weights(self):
        weights = {d: 0.0 for d in ALL}
        weights["complexity"] = 1.0
        config = MetricsConfig(health_weights=weights)
        scores = {d: 0.0 for d in ALL}
        scores["complexity"] = 90.0
        assert HealthSynthesizer(config).synthesize(scores).score == 90.0

    @pytest.mark.parametrize("value", [89.96, 89.99])
    def test_band_follows_reported_score(self, value):
        health = HealthSynthesizer().synthesize({d: value for d in ALL})
        assert health.score == 90.0
        assert health.band == "exceptional"

    def test_just_below_band_boundary(self):
        health = HealthSynthesizer().synthesize({d: 89.94 for d in ALL})
        assert health.score == 89.9
        assert health.band == "good"
