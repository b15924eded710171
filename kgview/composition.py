# composition.py

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from PyQt5.QtCore import QPointF, QRectF

from .config import LayoutConfig
from .utils_geom import bbox_of_points

logger = logging.getLogger(__name__)

PI = math.pi


class CompositionPlacer:
    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    # --------------------------
    # Side by side
    # --------------------------
    def place_components(self, layouts: Iterable[Dict[str, QPointF]]) -> Dict[str, QPointF]:
        """
        Shift each component layout right of the previous one. Callers pass
        the layouts largest first.
        """
        placed: Dict[str, QPointF] = {}
        offset_x = 0.0
        for comp in layouts:
            bb = bbox_of_points(comp.values())
            if bb is None:
                continue
            min_x, _, max_x, _ = bb
            shift = offset_x - min_x
            for nid, p in comp.items():
                placed[nid] = QPointF(p.x() + shift, p.y())
            offset_x = max_x + shift + self.config.component_gap
        return placed

    # --------------------------
    # Isolated arc
    # --------------------------
    def main_bounds(self, placed: Dict[str, QPointF]) -> Tuple[float, float, float, float]:
        bb = bbox_of_points(placed.values())
        if bb is None:
            return (0.0, 0.0, self.config.empty_main_width, 0.0)
        return bb

    def arc_geometry(self, count: int) -> Tuple[float, float]:
        """(radius, half_angle) of the isolated arc for count nodes."""
        cfg = self.config
        spacing = cfg.isolated_node_spacing
        radius = max(count * spacing / PI, cfg.isolated_min_radius)
        half = min(cfg.isolated_max_half_angle, (count * spacing) / (2 * radius))
        if count > 1:
            step = 2 * half / (count - 1)
            # The half-angle cap can squeeze neighbors below the spacing; widen the arc
            needed = spacing / (2 * math.sin(step / 2))
            if needed > radius:
                radius = needed
        return radius, half

    def place_isolated(self, isolated: Sequence[str],
                       bounds: Tuple[float, float, float, float]) -> Dict[str, QPointF]:
        positions: Dict[str, QPointF] = {}
        n = len(isolated)
        if n == 0:
            return positions
        min_x, _, max_x, max_y = bounds
        radius, half = self.arc_geometry(n)
        cx = (min_x + max_x) / 2
        arc_y = max_y + self.config.isolated_arc_drop
        cy = arc_y - radius
        start = PI / 2 - half
        step = (2 * half) / (n - 1) if n > 1 else 0.0
        for i, nid in enumerate(isolated):
            angle = PI / 2 if n == 1 else start + step * i
            positions[nid] = QPointF(cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        logger.debug("Placed %d isolated node(s) on arc r=%.1f", n, radius)
        return positions

    # --------------------------
    # Viewport
    # --------------------------
    def viewport(self, positions: Dict[str, QPointF]) -> QRectF:
        cfg = self.config
        bb = bbox_of_points(positions.values())
        if bb is None:
            return QRectF(*cfg.default_viewport)
        min_x, min_y, max_x, max_y = bb
        side = cfg.viewport_padding
        bottom = cfg.node_radius + cfg.label_allowance
        x0, x1 = min_x - side, max_x + side
        y0, y1 = min_y - side, max_y + bottom
        return QRectF(x0, y0, max(x1 - x0, cfg.min_viewport_width),
                      max(y1 - y0, cfg.min_viewport_height))

    def compose(self, component_layouts: List[Dict[str, QPointF]],
                isolated: Sequence[str]):
        placed = self.place_components(component_layouts)
        if isolated:
            placed.update(self.place_isolated(isolated, self.main_bounds(placed)))
        return placed, self.viewport(placed)
