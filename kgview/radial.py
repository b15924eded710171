# radial.py

import logging
import math
from collections import deque
from typing import Dict, List, Optional, Sequence

from PyQt5.QtCore import QPointF

from .centers import CenterAssignment
from .components import GraphStructure
from .config import LayoutConfig
from .utils_geom import v_add, v_angle, v_polar

logger = logging.getLogger(__name__)

PI = math.pi


def center_slots(count: int, gap: float) -> List[QPointF]:
    """Fixed offsets for the hubs of one component."""
    if count <= 0:
        return []
    if count == 1:
        return [QPointF(0.0, 0.0)]
    if count == 2:
        return [QPointF(-gap / 2, 0.0), QPointF(gap / 2, 0.0)]
    if count == 3:
        return [QPointF(0.0, -gap * 0.4),
                QPointF(-gap * 0.5, gap * 0.3),
                QPointF(gap * 0.5, gap * 0.3)]
    step = 2 * PI / count
    return [v_polar(gap * 0.6, -PI / 2 + step * i) for i in range(count)]


class RadialLayoutEngine:
    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    # --------------------------
    # Rings
    # --------------------------
    def layer_radii(self, level_counts: Sequence[int]) -> List[float]:
        cfg = self.config
        radii = [0.0]
        prev = 0.0
        for count in level_counts[1:]:
            r = max(count * cfg.min_node_spacing / (2 * PI), prev + cfg.min_layer_gap)
            if count > cfg.crowded_ring_size:
                r *= 1 + (count - cfg.crowded_ring_size) * cfg.crowded_ring_growth
            radii.append(r)
            prev = r
        return radii

    def _bfs_levels(self, centerId: str, assigned: set, structure: GraphStructure):
        levels: List[List[str]] = []
        parent: Dict[str, str] = {}
        seen = {centerId}
        queue = deque([(centerId, 0)])
        while queue:
            u, lvl = queue.popleft()
            if lvl == len(levels):
                levels.append([])
            levels[lvl].append(u)
            # Only nodes assigned to this hub take part in the hierarchy
            for nb in structure.neighbors(u):
                if nb not in seen and nb in assigned:
                    seen.add(nb)
                    parent[nb] = u
                    queue.append((nb, lvl + 1))
        stray = [nid for nid in assigned if nid not in seen]
        if stray:
            logger.debug("Hub %s: %d assigned node(s) unreachable inside the assignment",
                         centerId, len(stray))
            levels.append(sorted(stray))
        return levels, parent

    def layout_single_center(self, centerId: str, assigned: Sequence[str],
                             structure: GraphStructure) -> Dict[str, QPointF]:
        cfg = self.config
        assigned_set = set(assigned)
        assigned_set.add(centerId)
        levels, parent = self._bfs_levels(centerId, assigned_set, structure)
        radii = self.layer_radii([len(l) for l in levels])

        positions: Dict[str, QPointF] = {centerId: QPointF(0.0, 0.0)}
        for lvl in range(1, len(levels)):
            at_level = levels[lvl]
            radius = radii[lvl]
            if lvl == 1:
                step = 2 * PI / len(at_level)
                for i, nid in enumerate(at_level):
                    r = radius if i % 2 == 0 else radius + cfg.stagger_offset
                    positions[nid] = v_polar(r, -PI / 2 + step * i)
                continue

            by_parent: Dict[Optional[str], List[str]] = {}
            for nid in at_level:
                by_parent.setdefault(parent.get(nid), []).append(nid)

            global_index = 0
            for pid, children in by_parent.items():
                ppos = positions.get(pid) if pid is not None else None
                if ppos is None:
                    for nid in children:
                        angle = (global_index / len(at_level)) * 2 * PI
                        r = radius if global_index % 2 == 0 else radius + cfg.stagger_offset
                        positions[nid] = v_polar(r, angle)
                        global_index += 1
                    continue
                parent_angle = v_angle(ppos)
                span = min(cfg.max_fan_angle, len(children) * cfg.min_angle_per_child)
                start = parent_angle - span / 2
                step = span / (len(children) - 1) if len(children) > 1 else 0.0
                for i, nid in enumerate(children):
                    angle = parent_angle if len(children) == 1 else start + step * i
                    r = radius if global_index % 2 == 0 else radius + cfg.stagger_offset
                    positions[nid] = v_polar(r, angle)
                    global_index += 1
        return positions

    # --------------------------
    # Whole component
    # --------------------------
    def layout_component(self, component: Sequence[str], assignment: CenterAssignment,
                         structure: GraphStructure) -> Dict[str, QPointF]:
        slots = center_slots(len(assignment.centers), self.config.center_slot_gap)
        merged: Dict[str, QPointF] = {}
        for centerId, slot in zip(assignment.centers, slots):
            assigned = assignment.assignedTo(centerId, component)
            sub = self.layout_single_center(centerId, assigned, structure)
            for nid, p in sub.items():
                merged[nid] = v_add(p, slot)
        return merged
