"""
Tests for the QPointF vector helpers.
"""

import math

import pytest
from PyQt5.QtCore import QPointF, QRectF

from kgview.utils_geom import (
    bbox_of_points, clamp, rect_center, trimmed_segment, v_angle, v_dist, v_norm_safe, v_polar
)


class TestVectors:

    def test_polar_and_angle(self):
        p = v_polar(10, -math.pi / 2)
        assert p.x() == pytest.approx(0.0, abs=1e-9)
        assert p.y() == pytest.approx(-10.0)
        assert v_angle(p) == pytest.approx(-math.pi / 2)

    def test_polar_with_origin(self):
        p = v_polar(5, 0.0, QPointF(1, 1))
        assert (p.x(), p.y()) == pytest.approx((6.0, 1.0))

    def test_norm_safe_zero_vector(self):
        """Zero-length vectors take the fallback direction."""
        assert v_norm_safe(QPointF(0, 0)) == QPointF(1, 0)
        n = v_norm_safe(QPointF(3, 4))
        assert (n.x(), n.y()) == pytest.approx((0.6, 0.8))

    def test_bbox(self):
        assert bbox_of_points([]) is None
        assert bbox_of_points([QPointF(1, 5), QPointF(-2, 3)]) == (-2, 3, 1, 5)

    def test_rect_center(self):
        assert rect_center(QRectF(0, 0, 10, 20)) == QPointF(5, 10)


class TestClampAndTrim:

    def test_clamp(self):
        assert clamp(5, 0, 10) == 5
        assert clamp(-1, 0, 10) == 0
        assert clamp(11, 0, 10) == 10

    def test_clamp_inverted_interval(self):
        """An inverted interval pins to the lower bound."""
        assert clamp(5, 10, 0) == 10
        assert clamp(20, 10, 0) == 10

    def test_trimmed_segment(self):
        start, end = trimmed_segment(QPointF(0, 0), QPointF(100, 0), 14, 19)
        assert (start.x(), start.y()) == pytest.approx((14.0, 0.0))
        assert (end.x(), end.y()) == pytest.approx((81.0, 0.0))

    def test_trimmed_segment_coincident(self):
        assert trimmed_segment(QPointF(1, 1), QPointF(1, 1), 14, 19) is None

    def test_dist(self):
        assert v_dist(QPointF(0, 0), QPointF(3, 4)) == pytest.approx(5.0)
