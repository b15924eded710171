"""
Tests for side-by-side placement, the isolated arc and the viewport.
"""

import itertools
import math

import pytest
from PyQt5.QtCore import QPointF, QRectF

from kgview.composition import CompositionPlacer
from kgview.utils_geom import v_dist


class TestSideBySide:

    def test_left_aligned_with_gap(self):
        first = {"a": QPointF(-50, 0), "b": QPointF(50, 0)}
        second = {"c": QPointF(-10, 5), "d": QPointF(10, 5)}
        placed = CompositionPlacer().place_components([first, second])
        assert placed["a"].x() == pytest.approx(0.0)
        assert placed["b"].x() == pytest.approx(100.0)
        assert placed["c"].x() == pytest.approx(250.0)
        assert placed["d"].x() == pytest.approx(270.0)
        assert placed["c"].y() == pytest.approx(5.0)


class TestIsolatedArc:

    def test_default_main_bounds(self):
        assert CompositionPlacer().main_bounds({}) == (0.0, 0.0, 400.0, 0.0)

    def test_single_node_below_center(self):
        pos = CompositionPlacer().place_isolated(["x"], (0.0, 0.0, 400.0, 0.0))
        assert (pos["x"].x(), pos["x"].y()) == pytest.approx((200.0, 80.0))

    def test_three_nodes(self):
        placer = CompositionPlacer()
        radius, half = placer.arc_geometry(3)
        assert radius == pytest.approx(100.0)
        assert half == pytest.approx(0.9)
        pos = placer.place_isolated(["a", "b", "c"], (0.0, 0.0, 400.0, 0.0))
        assert (pos["b"].x(), pos["b"].y()) == pytest.approx((200.0, 80.0))

    @pytest.mark.parametrize("n", [2, 3, 5, 6, 10, 25, 60])
    def test_spacing(self, n):
        """Arc neighbors keep at least the isolated spacing."""
        ids = [f"n{i}" for i in range(n)]
        pos = CompositionPlacer().place_isolated(ids, (0.0, 0.0, 400.0, 0.0))
        for a, b in itertools.combinations(pos.values(), 2):
            assert v_dist(a, b) >= 60.0 - 1e-6

    def test_capped_angle_widens_radius(self):
        placer = CompositionPlacer()
        radius, half = placer.arc_geometry(10)
        assert half == pytest.approx(0.4 * math.pi)
        step = 2 * half / 9
        assert 2 * radius * math.sin(step / 2) == pytest.approx(60.0)

    def test_arc_below_components(self):
        placer = CompositionPlacer()
        placed = {"a": QPointF(0, -100), "b": QPointF(300, 50)}
        pos = placer.place_isolated(["x"], placer.main_bounds(placed))
        assert (pos["x"].x(), pos["x"].y()) == pytest.approx((150.0, 130.0))


class TestViewport:

    def test_empty(self):
        assert CompositionPlacer().viewport({}) == QRectF(0, 0, 800, 600)

    def test_floor(self):
        vp = CompositionPlacer().viewport({"x": QPointF(200, 80)})
        assert vp == QRectF(140, 20, 400, 300)

    def test_padding(self):
        vp = CompositionPlacer().viewport({"a": QPointF(0, 0), "b": QPointF(1000, 800)})
        assert vp.left() == pytest.approx(-60.0)
        assert vp.top() == pytest.approx(-60.0)
        assert vp.right() == pytest.approx(1060.0)
        assert vp.bottom() == pytest.approx(854.0)

    def test_compose(self):
        layouts = [{"a": QPointF(0, 0), "b": QPointF(100, 0)}]
        positions, vp = CompositionPlacer().compose(layouts, ["z"])
        assert set(positions) == {"a", "b", "z"}
        assert positions["z"].y() == pytest.approx(80.0)
        for p in positions.values():
            assert vp.contains(p)
