# model.py

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from PyQt5.QtCore import QPointF, QRectF

from .node import Node
from .edge import Edge

logger = logging.getLogger(__name__)


class GraphModel:
    """
    Current node/edge snapshot plus the derived position map.

    The snapshot is replaced wholesale on every load; positions live next to
    it, keyed by node id, and are never stored on the Node records.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self._index: Dict[str, Node] = {}
        self.positions: Dict[str, QPointF] = {}
        self._original_positions: Dict[str, QPointF] = {}
        self.viewport = QRectF()
        self.components: List[List[str]] = []
        self.centers: List[List[str]] = []
        self.revision = 0

    # --------------------------
    # Snapshot lifecycle
    # --------------------------
    def clear(self):
        self.nodes.clear()
        self.edges.clear()
        self._index.clear()
        self.positions.clear()
        self._original_positions.clear()
        self.viewport = QRectF()
        self.components = []
        self.centers = []
        self.revision += 1

    def load(self, nodes: Iterable[Node], edges: Iterable[Edge]):
        self.clear()
        for n in nodes:
            if n.getId() in self._index:
                logger.warning("Duplicate node id %r ignored", n.getId())
                continue
            self._index[n.getId()] = n
            self.nodes.append(n)
        self.edges = list(edges)
        dangling = sum(1 for e in self.edges
                       if e.getSourceId() not in self._index or e.getTargetId() not in self._index)
        if dangling:
            logger.info("%d edge(s) reference unknown nodes and are left out of the layout", dangling)
        logger.debug("Loaded snapshot: %d nodes, %d edges", len(self.nodes), len(self.edges))

    def load_snapshot(self, snapshot: Mapping):
        self.load_entries(snapshot.get("nodes") or [], snapshot.get("edges") or [])

    def load_entries(self, nodes: Iterable, edges: Iterable):
        """Load Node/Edge records or their dict form; malformed dicts are skipped."""
        self.load([n for n in (_node_entry(raw) for raw in nodes) if n is not None],
                  [e for e in (_edge_entry(raw) for raw in edges) if e is not None])

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def save_to_json(self, filepath) -> bool:
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(self.to_snapshot(), f, ensure_ascii=False, indent=2)
            return True
        except (OSError, TypeError) as e:
            logger.error("Error saving graph to %s: %s", filepath, e)
            return False

    def load_from_json(self, filepath) -> bool:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error loading graph from %s: %s", filepath, e)
            return False
        if not isinstance(data, Mapping):
            logger.error("Error loading graph from %s: top level is not an object", filepath)
            return False
        self.load_snapshot(data)
        return True

    # --------------------------
    # Lookups
    # --------------------------
    def getNodes(self) -> List[Node]:
        return self.nodes

    def getEdges(self) -> List[Edge]:
        return self.edges

    def getNode(self, nodeId: str) -> Optional[Node]:
        return self._index.get(nodeId)

    def hasNode(self, nodeId: str) -> bool:
        return nodeId in self._index

    def nodeIds(self) -> List[str]:
        return [n.getId() for n in self.nodes]

    def nodeName(self, nodeId: str) -> str:
        n = self._index.get(nodeId)
        return n.getName() if n else str(nodeId)

    def incidentEdges(self, nodeId: str) -> List[Edge]:
        return [e for e in self.edges if e.touches(nodeId)]

    def findEdge(self, a: str, b: str) -> Optional[Edge]:
        # Either direction, first in insertion order
        for e in self.edges:
            if (e.getSourceId() == a and e.getTargetId() == b) or \
               (e.getSourceId() == b and e.getTargetId() == a):
                return e
        return None

    # --------------------------
    # Positions
    # --------------------------
    def setLayout(self, positions: Dict[str, QPointF], viewport: QRectF,
                  components=None, centers=None):
        self.positions = {k: QPointF(p) for k, p in positions.items()}
        self._original_positions = {k: QPointF(p) for k, p in positions.items()}
        self.viewport = QRectF(viewport)
        self.components = list(components) if components is not None else []
        self.centers = list(centers) if centers is not None else []
        self.revision += 1

    def getPosition(self, nodeId: str) -> Optional[QPointF]:
        return self.positions.get(nodeId)

    def setPosition(self, nodeId: str, pos: QPointF) -> bool:
        if nodeId not in self.positions:
            return False
        self.positions[nodeId] = QPointF(pos)
        return True

    def restoreOriginalLayout(self):
        self.positions = {k: QPointF(p) for k, p in self._original_positions.items()}

    def getViewport(self) -> QRectF:
        return QRectF(self.viewport)

    def positions_as_dicts(self) -> Dict[str, Dict[str, float]]:
        return {k: {"x": p.x(), "y": p.y()} for k, p in self.positions.items()}

    def viewport_as_dict(self) -> Dict[str, float]:
        r = self.viewport
        return {"x": r.x(), "y": r.y(), "width": r.width(), "height": r.height()}

    # --------------------------
    # Info
    # --------------------------
    def get_stats(self) -> Dict[str, Any]:
        types = {n.getType() for n in self.nodes}
        return {
            "nodes": len(self.nodes),
            "edges": len(self.edges),
            "node_types": len(types),
            "components": len(self.components),
            "positioned": len(self.positions),
        }


def _node_entry(raw) -> Optional[Node]:
    if isinstance(raw, Node):
        return raw
    if not isinstance(raw, Mapping) or raw.get("id") is None:
        logger.warning("Skipping malformed node entry: %r", raw)
        return None
    return Node.from_dict(raw)


def _edge_entry(raw) -> Optional[Edge]:
    if isinstance(raw, Edge):
        return raw
    if (not isinstance(raw, Mapping) or raw.get("sourceId") is None
            or raw.get("targetId") is None):
        logger.warning("Skipping malformed edge entry: %r", raw)
        return None
    return Edge.from_dict(raw)
