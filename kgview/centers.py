# centers.py

import logging
import math
from collections import deque
from typing import Dict, List, Optional, Sequence

from .components import GraphStructure
from .config import LayoutConfig

logger = logging.getLogger(__name__)


def bfs_distances(start: str, adjacency: Dict[str, List[str]]) -> Dict[str, int]:
    """Hop distance from start to every reachable node."""
    dist = {start: 0}
    queue = deque([start])
    while queue:
        u = queue.popleft()
        for nb in adjacency.get(u, ()):
            if nb not in dist:
                dist[nb] = dist[u] + 1
                queue.append(nb)
    return dist


def degree_stats(component: Sequence[str], degree: Dict[str, int], std_factor: float = 0.5):
    """(mean, population std dev, mean + std_factor * std)"""
    n = len(component)
    if n == 0:
        return 0.0, 0.0, 0.0
    degs = [degree.get(nid, 0) for nid in component]
    mean = sum(degs) / n
    var = sum((d - mean) ** 2 for d in degs) / n
    std = math.sqrt(var)
    return mean, std, mean + std * std_factor


class CenterAssignment:
    __slots__ = ("centers", "node_to_center", "mean", "std_dev", "threshold")

    def __init__(self, centers, node_to_center, mean, std_dev, threshold):
        self.centers: List[str] = centers
        self.node_to_center: Dict[str, str] = node_to_center
        self.mean = mean
        self.std_dev = std_dev
        self.threshold = threshold

    def assignedTo(self, centerId: str, order: Sequence[str]) -> List[str]:
        return [nid for nid in order if self.node_to_center.get(nid) == centerId]

    def __repr__(self):
        return f"CenterAssignment(centers={self.centers})"


class CenterSelector:
    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def _nearest_high_degree(self, start: str, members: set, structure: GraphStructure,
                             threshold: float) -> Optional[str]:
        visited = {start}
        queue = deque([start])
        while queue:
            u = queue.popleft()
            for nb in structure.neighbors(u):
                if nb in visited or nb not in members:
                    continue
                if structure.getDegree(nb) >= threshold:
                    return nb
                visited.add(nb)
                queue.append(nb)
        return None

    def select(self, component: Sequence[str], structure: GraphStructure,
               focusNodeId: Optional[str] = None) -> CenterAssignment:
        cfg = self.config
        members = set(component)
        mean, std, threshold = degree_stats(component, structure.degree, cfg.threshold_std_factor)
        center_count = cfg.center_count_for(len(component))
        by_degree = sorted(component, key=lambda nid: -structure.getDegree(nid))

        centers: List[str] = []
        if not by_degree:
            return CenterAssignment(centers, {}, mean, std, threshold)

        if focusNodeId is not None and focusNodeId in members:
            if structure.getDegree(focusNodeId) >= threshold:
                first = focusNodeId
            else:
                first = self._nearest_high_degree(focusNodeId, members, structure, threshold) \
                    or by_degree[0]
        else:
            first = by_degree[0]
        centers.append(first)

        # One BFS per chosen center; distances reused for scoring and assignment
        dist_maps = [bfs_distances(first, structure.adjacency)]
        while len(centers) < center_count:
            best, best_score = None, -1.0
            for nid in by_degree:
                if nid in centers or structure.getDegree(nid) < mean:
                    continue
                min_dist = min(d.get(nid, math.inf) for d in dist_maps)
                if math.isinf(min_dist):
                    continue
                score = min_dist * (1 + structure.getDegree(nid) / 10.0)
                if score > best_score:
                    best, best_score = nid, score
            if best is None or best_score <= cfg.min_center_score:
                break
            centers.append(best)
            dist_maps.append(bfs_distances(best, structure.adjacency))

        node_to_center: Dict[str, str] = {}
        for nid in component:
            nearest, best_d = centers[0], math.inf
            for c, d in zip(centers, dist_maps):
                dc = d.get(nid, math.inf)
                if dc < best_d:
                    nearest, best_d = c, dc
            node_to_center[nid] = nearest

        logger.debug("Component of %d: centers=%s (threshold %.2f)",
                     len(component), centers, threshold)
        return CenterAssignment(centers, node_to_center, mean, std, threshold)
