"""
Tests for pairwise collision relaxation.
"""

import itertools
import math

import pytest
from PyQt5.QtCore import QPointF

from kgview import LayoutConfig
from kgview.collision import CollisionResolver
from kgview.utils_geom import v_dist


class TestCollisionResolver:

    def test_overlapping_pair_pushed_apart(self):
        """10 apart with min distance 38: one push of 70 each way, then converged."""
        pos = {"a": QPointF(0, 0), "b": QPointF(10, 0)}
        report = CollisionResolver().resolve(pos)
        assert report.converged
        assert report.passes == 2
        assert pos["a"].x() == pytest.approx(-70.0)
        assert pos["b"].x() == pytest.approx(80.0)

    def test_coincident_pair_separated(self):
        pos = {"a": QPointF(5, 5), "b": QPointF(5, 5)}
        report = CollisionResolver().resolve(pos)
        assert report.converged
        assert v_dist(pos["a"], pos["b"]) == pytest.approx(LayoutConfig().min_collision_distance)

    def test_far_apart_untouched(self):
        pos = {"a": QPointF(0, 0), "b": QPointF(100, 0)}
        report = CollisionResolver().resolve(pos)
        assert report.passes == 1 and report.converged
        assert pos["b"] == QPointF(100, 0)

    def test_single_node(self):
        report = CollisionResolver().resolve({"a": QPointF(0, 0)})
        assert report.passes == 0 and report.converged

    def test_pass_cap(self):
        """With no passes allowed the overlap is reported, not resolved."""
        pos = {"a": QPointF(0, 0), "b": QPointF(10, 0)}
        report = CollisionResolver(LayoutConfig(collision_iterations=0)).resolve(pos)
        assert not report.converged
        assert pos["b"] == QPointF(10, 0)

    def test_cluster_converges_or_hits_cap(self):
        """A tight grid either settles below the tolerance or uses every pass."""
        cfg = LayoutConfig()
        pos = {f"n{i}": QPointF((i % 3) * 5.0, (i // 3) * 5.0) for i in range(9)}
        report = CollisionResolver(cfg).resolve(pos)
        if report.converged:
            assert report.max_overlap < cfg.collision_tolerance
        else:
            assert report.passes == cfg.collision_iterations
        assert len({(round(p.x(), 6), round(p.y(), 6)) for p in pos.values()}) == 9

    def test_ring_already_spaced(self):
        """Nodes on a ring wider than the minimum converge on the first pass."""
        pos = {f"n{i}": QPointF(100 * math.cos(i * math.pi / 4), 100 * math.sin(i * math.pi / 4))
               for i in range(8)}
        pos["hub"] = QPointF(0, 0)
        report = CollisionResolver().resolve(pos)
        assert report.converged and report.passes == 1
        min_d = LayoutConfig().min_collision_distance
        for a, b in itertools.combinations(pos.values(), 2):
            assert v_dist(a, b) >= min_d
