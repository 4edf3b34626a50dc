"""Tests for HotspotDetector."""

from template_insight.metrics import HotspotDetector


class TestHotspotDetector:
    """Complexity ranking."""

    def test_sorted_by_complexity_with_stable_ties(self, make_result):
        results = [
            make_result("a.html", complexity_score=5),
            make_result("b.html", complexity_score=20),
            make_result("c.html", complexity_score=20),
            make_result("d.html", complexity_score=1),
        ]
        hotspots = HotspotDetector().detect(results)
        assert [h.path for h in hotspots] == ["b.html", "c.html", "a.html", "d.html"]

    def test_limit(self, make_result):
        results = [make_result(f"t{i}.html", complexity_score=i) for i in range(10)]
        hotspots = HotspotDetector().detect(results, limit=3)
        assert [h.complexity for h in hotspots] == [9, 8, 7]

    def test_fields(self, make_result):
        hotspot = HotspotDetector().detect(
            [make_result("pages/x.html", complexity_score=8, lines=10, conditions=2)]
        )[0]
        assert hotspot.file == "x.html"
        assert hotspot.path == "pages/x.html"
        assert hotspot.logic_ratio == 0.2
        assert hotspot.maintainability > 0

    def test_empty(self):
        assert HotspotDetector().detect([]) == []
