# components.py

import logging
from collections import deque
from typing import Dict, Iterable, List, Sequence

from .edge import Edge

logger = logging.getLogger(__name__)


class GraphStructure:
    """Undirected adjacency, degree counts and the component partition."""

    __slots__ = ("adjacency", "degree", "components")

    def __init__(self, adjacency: Dict[str, List[str]], degree: Dict[str, int],
                 components: List[List[str]]):
        self.adjacency = adjacency
        self.degree = degree
        self.components = components

    def getDegree(self, nodeId: str) -> int:
        return self.degree.get(nodeId, 0)

    def neighbors(self, nodeId: str) -> List[str]:
        return self.adjacency.get(nodeId, [])


def build_adjacency(node_ids: Sequence[str], edges: Iterable[Edge]):
    adjacency: Dict[str, List[str]] = {nid: [] for nid in node_ids}
    degree: Dict[str, int] = {nid: 0 for nid in node_ids}
    for e in edges:
        s, t = e.getSourceId(), e.getTargetId()
        if s not in adjacency or t not in adjacency:
            continue
        adjacency[s].append(t)
        adjacency[t].append(s)
        degree[s] += 1
        degree[t] += 1
    return adjacency, degree


def find_components(node_ids: Sequence[str], adjacency: Dict[str, List[str]]) -> List[List[str]]:
    visited = set()
    components: List[List[str]] = []
    for start in node_ids:
        if start in visited:
            continue
        comp = []
        queue = deque([start])
        visited.add(start)
        while queue:
            u = queue.popleft()
            comp.append(u)
            for nb in adjacency.get(u, ()):
                if nb not in visited:
                    visited.add(nb)
                    queue.append(nb)
        components.append(comp)
    # sort() is stable: equal sizes keep discovery order
    components.sort(key=len, reverse=True)
    return components


def is_partition(components: Sequence[Sequence[str]], node_ids: Iterable[str]) -> bool:
    seen = set()
    for comp in components:
        for nid in comp:
            if nid in seen:
                return False
            seen.add(nid)
    return seen == set(node_ids)


class ComponentAnalyzer:

    def analyze(self, node_ids: Sequence[str], edges: Iterable[Edge]) -> GraphStructure:
        adjacency, degree = build_adjacency(node_ids, edges)
        components = find_components(node_ids, adjacency)
        if not is_partition(components, node_ids):
            logger.error("Component partition does not cover the node set exactly "
                         "(%d nodes, %d components)", len(node_ids), len(components))
        logger.debug("Found %d component(s), sizes %s",
                     len(components), [len(c) for c in components[:10]])
        return GraphStructure(adjacency, degree, components)
