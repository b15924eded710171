# query.py

import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .components import build_adjacency, find_components
from .edge import Edge
from .model import GraphModel
from .node import Node

logger = logging.getLogger(__name__)

DIRECTIONS = ("in", "out", "all")


class Highlight:
    """Node ids and edge endpoint pairs to emphasize."""
    __slots__ = ("nodes", "edges")

    def __init__(self, nodes: Iterable[str] = (), edges: Iterable[Tuple[str, str]] = ()):
        self.nodes: Set[str] = set(nodes)
        self.edges: Set[Tuple[str, str]] = set(edges)

    def isEmpty(self) -> bool:
        return not self.nodes and not self.edges

    def hasEdge(self, a: str, b: str) -> bool:
        # Undirected membership test
        return (a, b) in self.edges or (b, a) in self.edges

    def __eq__(self, other) -> bool:
        return isinstance(other, Highlight) and self.nodes == other.nodes and self.edges == other.edges

    def __repr__(self):
        return f"Highlight(nodes={len(self.nodes)}, edges={len(self.edges)})"


class PathResult:
    __slots__ = ("path",)

    def __init__(self, path: Optional[Sequence[str]]):
        self.path: Optional[Tuple[str, ...]] = tuple(path) if path is not None else None

    @classmethod
    def not_found(cls) -> "PathResult":
        return cls(None)

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def hops(self) -> int:
        return len(self.path) - 1 if self.path else -1

    def __bool__(self) -> bool:
        return self.found

    def __repr__(self):
        return f"PathResult({list(self.path)})" if self.found else "PathResult(not found)"


class RankedNode:
    __slots__ = ("nodeId", "name", "degree")

    def __init__(self, nodeId: str, name: str, degree: int):
        self.nodeId = nodeId
        self.name = name
        self.degree = degree

    def __repr__(self):
        return f"RankedNode({self.nodeId!r}, degree={self.degree})"


class GraphQueryEngine:
    """
    Structural queries over the live model. Unknown ids give empty or
    not-found results.
    """

    def __init__(self, model: GraphModel):
        self.model = model

    # --------------------------
    # Adjacency views
    # --------------------------
    def _adjacency(self, direction: str = "all") -> Dict[str, List[str]]:
        if direction not in DIRECTIONS:
            logger.warning("Unknown direction %r, using 'all'", direction)
            direction = "all"
        adj: Dict[str, List[str]] = {nid: [] for nid in self.model.nodeIds()}
        for e in self.model.getEdges():
            s, t = e.getSourceId(), e.getTargetId()
            if s not in adj or t not in adj:
                continue
            if direction in ("all", "out"):
                adj[s].append(t)
            if direction in ("all", "in"):
                adj[t].append(s)
        return adj

    def degrees(self) -> Dict[str, int]:
        # An edge counts for every endpoint that exists, dangling or not
        deg = {nid: 0 for nid in self.model.nodeIds()}
        for e in self.model.getEdges():
            if e.getSourceId() in deg:
                deg[e.getSourceId()] += 1
            if e.getTargetId() in deg:
                deg[e.getTargetId()] += 1
        return deg

    def _induced_edges(self, nodes: Set[str]) -> Set[Tuple[str, str]]:
        return {e.key() for e in self.model.getEdges()
                if e.getSourceId() in nodes and e.getTargetId() in nodes}

    # --------------------------
    # Queries
    # --------------------------
    def neighborsWithinDepth(self, nodeId: str, depth: int, direction: str = "all") -> Highlight:
        if not self.model.hasNode(nodeId):
            return Highlight()
        adj = self._adjacency(direction)
        visited = {nodeId}
        frontier = [nodeId]
        for _ in range(max(0, int(depth))):
            nxt = []
            for u in frontier:
                for nb in adj[u]:
                    if nb not in visited:
                        visited.add(nb)
                        nxt.append(nb)
            if not nxt:
                break
            frontier = nxt
        return Highlight(visited, self._induced_edges(visited))

    def shortestPath(self, a: str, b: str) -> PathResult:
        """
        BFS over the undirected view. Among equal-length paths the one found
        first in edge insertion order wins.
        """
        if not self.model.hasNode(a) or not self.model.hasNode(b):
            return PathResult.not_found()
        if a == b:
            return PathResult([a])
        adj = self._adjacency("all")
        prev: Dict[str, Optional[str]] = {a: None}
        queue = deque([a])
        while queue:
            u = queue.popleft()
            for nb in adj[u]:
                if nb in prev:
                    continue
                prev[nb] = u
                if nb == b:
                    path = [b]
                    while prev[path[-1]] is not None:
                        path.append(prev[path[-1]])
                    path.reverse()
                    return PathResult(path)
                queue.append(nb)
        return PathResult.not_found()

    def allPaths(self, a: str, b: str, maxDepth: int = 5) -> List[List[str]]:
        """Every simple path from a to b with at most maxDepth edges."""
        if not self.model.hasNode(a) or not self.model.hasNode(b) or maxDepth < 0:
            return []
        adj = self._adjacency("all")
        paths: List[List[str]] = []
        path = [a]
        on_path = {a}

        def dfs(u: str):
            if u == b:
                paths.append(list(path))
                return
            if len(path) - 1 >= maxDepth:
                return
            for nb in adj[u]:
                if nb in on_path:
                    continue
                on_path.add(nb)
                path.append(nb)
                dfs(nb)
                path.pop()
                on_path.discard(nb)

        dfs(a)
        return paths

    def connectedComponents(self) -> List[List[str]]:
        ids = self.model.nodeIds()
        adjacency, _ = build_adjacency(ids, self.model.getEdges())
        return find_components(ids, adjacency)

    def coreNodesByDegree(self, limit: int = 10) -> List[RankedNode]:
        deg = self.degrees()
        ranked = sorted(self.model.getNodes(), key=lambda n: -deg[n.getId()])
        return [RankedNode(n.getId(), n.getName(), deg[n.getId()])
                for n in ranked[:max(0, int(limit))]]

    # --------------------------
    # Search and statistics
    # --------------------------
    def searchNodes(self, query: str = "", nodeType: Optional[str] = None) -> List[Node]:
        q = (query or "").strip().lower()
        if not q and not nodeType:
            return []
        hits = []
        for n in self.model.getNodes():
            if nodeType and n.getType() != nodeType:
                continue
            if q and q not in n.getName().lower():
                continue
            hits.append(n)
        return hits

    def searchRelations(self, query: str) -> Dict[str, List[Edge]]:
        """
        Edges whose type label contains query, one per unordered endpoint
        pair, grouped by type label.
        """
        q = (query or "").strip().lower()
        if not q:
            return {}
        seen: Set[Tuple[str, str]] = set()
        grouped: Dict[str, List[Edge]] = {}
        for e in self.model.getEdges():
            label = e.typeLabel()
            if q not in label.lower():
                continue
            pair = e.pairKey()
            if pair in seen:
                continue
            seen.add(pair)
            grouped.setdefault(label, []).append(e)
        return grouped

    def relationHighlight(self, edges: Iterable[Edge]) -> Highlight:
        h = Highlight()
        for e in edges:
            h.nodes.add(e.getSourceId())
            h.nodes.add(e.getTargetId())
            h.edges.add(e.key())
        return h

    def pathHighlight(self, path: Sequence[str]) -> Highlight:
        h = Highlight(path)
        for u, v in zip(path, path[1:]):
            e = self.model.findEdge(u, v)
            if e is not None:
                h.edges.add(e.key())
        return h

    def nodeTypeCounts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for n in self.model.getNodes():
            counts[n.getType()] = counts.get(n.getType(), 0) + 1
        return counts

    def relationTypeCounts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for e in self.model.getEdges():
            counts[e.typeLabel()] = counts.get(e.typeLabel(), 0) + 1
        return counts

    def describePath(self, path: Sequence[str], withRelations: bool = False) -> str:
        names = [self.model.nodeName(nid) for nid in path]
        if not withRelations:
            return " -> ".join(names)
        parts = []
        for i, name in enumerate(names):
            parts.append(name)
            if i < len(names) - 1:
                e = self.model.findEdge(path[i], path[i + 1])
                parts.append(f" -[{e.typeLabel() if e else '?'}]-> ")
        return "".join(parts)
