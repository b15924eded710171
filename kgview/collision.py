# collision.py

import logging
import math
from typing import Dict, Optional

from PyQt5.QtCore import QPointF

from .config import LayoutConfig
from .utils_geom import EPS

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


class CollisionReport:
    __slots__ = ("passes", "max_overlap", "converged")

    def __init__(self, passes: int, max_overlap: float, converged: bool):
        self.passes = passes
        self.max_overlap = max_overlap
        self.converged = converged

    def __repr__(self):
        return (f"CollisionReport(passes={self.passes}, "
                f"max_overlap={self.max_overlap:.3f}, converged={self.converged})")


class CollisionResolver:
    """
    Pairwise repulsion passes over one component's merged layout.
    Positions are updated in place.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def resolve(self, positions: Dict[str, QPointF]) -> CollisionReport:
        cfg = self.config
        ids = list(positions.keys())
        n = len(ids)
        xs = [positions[k].x() for k in ids]
        ys = [positions[k].y() for k in ids]
        min_dist = cfg.min_collision_distance
        strength = cfg.collision_strength

        passes = 0
        max_overlap = 0.0
        converged = n < 2
        while not converged and passes < cfg.collision_iterations:
            passes += 1
            max_overlap = 0.0
            for i in range(n):
                for j in range(i + 1, n):
                    dx = xs[j] - xs[i]
                    dy = ys[j] - ys[i]
                    dist = math.hypot(dx, dy)
                    if dist >= min_dist:
                        continue
                    overlap = min_dist - dist
                    max_overlap = max(max_overlap, overlap)
                    if dist > EPS:
                        push = strength * overlap / dist * 0.5
                        fx, fy = push * dx, push * dy
                    else:
                        # Coincident pair: split along a per-pair direction
                        ang = GOLDEN_ANGLE * (i + j + 1)
                        fx = math.cos(ang) * min_dist * 0.5
                        fy = math.sin(ang) * min_dist * 0.5
                    xs[i] -= fx; ys[i] -= fy
                    xs[j] += fx; ys[j] += fy
            if max_overlap < cfg.collision_tolerance:
                converged = True

        for k, x, y in zip(ids, xs, ys):
            positions[k] = QPointF(x, y)

        report = CollisionReport(passes, max_overlap, converged)
        if not converged:
            logger.debug("Collision relaxation hit the pass cap: %r", report)
        return report
