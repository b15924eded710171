# engine.py

import logging
from collections.abc import Mapping
from typing import Callable, Dict, Iterable, List, Optional, Union

from PyQt5.QtCore import QPointF

from .config import EngineConfig
from .edge import Edge
from .layout import LayoutPipeline, LayoutResult
from .model import GraphModel
from .node import Node
from .palette import TypePalette
from .query import GraphQueryEngine, Highlight, PathResult, RankedNode
from .viewport import DragOutcome, ViewportController

logger = logging.getLogger(__name__)

NodeLike = Union[Node, Mapping]
EdgeLike = Union[Edge, Mapping]


class GraphEngine:
    """
    Command surface used by the renderers. Owns one GraphModel and the
    current highlight; every query replaces the highlight.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.model = GraphModel()
        self.pipeline = LayoutPipeline(self.config.layout)
        self.queries = GraphQueryEngine(self.model)
        self.view = ViewportController(self.model, self.config.layout.node_radius, self.config.view)
        self.palette = TypePalette()
        self.highlight = Highlight()
        self.focusNodeId: Optional[str] = None
        self.lastLayout: Optional[LayoutResult] = None

        # UI callback hooks
        self.on_layout_changed: Optional[Callable[[], None]] = None
        self.on_highlight_changed: Optional[Callable[[Highlight], None]] = None

    # --------------------------
    # Snapshot + layout
    # --------------------------
    def load(self, snapshot: Mapping) -> LayoutResult:
        self.model.load_snapshot(snapshot)
        return self._relayout(None)

    def load_from_json(self, filepath) -> bool:
        if not self.model.load_from_json(filepath):
            return False
        self._relayout(None)
        return True

    def save_to_json(self, filepath) -> bool:
        return self.model.save_to_json(filepath)

    def layout(self, nodes: Iterable[NodeLike], edges: Iterable[EdgeLike],
               focusNodeId: Optional[str] = None) -> LayoutResult:
        self.model.load_entries(nodes, edges)
        return self._relayout(focusNodeId)

    def recenterOn(self, nodeId: str) -> bool:
        if not self.model.hasNode(nodeId):
            logger.warning("Cannot recenter on unknown node %r", nodeId)
            return False
        self._relayout(nodeId)
        return True

    def resetLayout(self):
        """Drop manual drags and view changes; keep the last computed layout."""
        self.model.restoreOriginalLayout()
        self.view.reset()
        self._notify_layout()

    def _relayout(self, focusNodeId: Optional[str]) -> LayoutResult:
        self.focusNodeId = focusNodeId
        self.lastLayout = self.pipeline.run(self.model, focusNodeId)
        self.view.reset(self.model.getViewport())
        self._set_highlight(Highlight())
        self._notify_layout()
        return self.lastLayout

    def _notify_layout(self):
        if self.on_layout_changed:
            self.on_layout_changed()

    # --------------------------
    # View commands
    # --------------------------
    def pan(self, dx: float, dy: float) -> bool:
        return self.view.pan(dx, dy)

    def zoom(self, factor: float) -> float:
        return self.view.zoom(factor)

    def zoomIn(self) -> float:
        return self.view.zoomIn()

    def zoomOut(self) -> float:
        return self.view.zoomOut()

    def dragStart(self, nodeId: str, pointer: QPointF) -> bool:
        return self.view.dragStart(nodeId, pointer)

    def dragMove(self, pointer: QPointF) -> bool:
        return self.view.dragMove(pointer)

    def dragEnd(self) -> Optional[DragOutcome]:
        return self.view.dragEnd()

    def tick(self) -> bool:
        return self.view.tick()

    # --------------------------
    # Queries (each replaces the highlight)
    # --------------------------
    def _set_highlight(self, h: Highlight) -> Highlight:
        self.highlight = h
        if self.on_highlight_changed:
            self.on_highlight_changed(h)
        return h

    def clearHighlight(self):
        self._set_highlight(Highlight())

    def neighborsWithinDepth(self, nodeId: str, depth: int, direction: str = "all") -> Highlight:
        return self._set_highlight(self.queries.neighborsWithinDepth(nodeId, depth, direction))

    def shortestPath(self, a: str, b: str) -> PathResult:
        result = self.queries.shortestPath(a, b)
        self._set_highlight(self.queries.pathHighlight(result.path) if result else Highlight())
        return result

    def allPaths(self, a: str, b: str, maxDepth: Optional[int] = None) -> List[List[str]]:
        depth = self.config.all_paths_max_depth if maxDepth is None else maxDepth
        paths = self.queries.allPaths(a, b, depth)
        h = Highlight()
        for p in paths:
            ph = self.queries.pathHighlight(p)
            h.nodes |= ph.nodes
            h.edges |= ph.edges
        self._set_highlight(h)
        return paths

    def connectedComponents(self) -> List[List[str]]:
        comps = self.queries.connectedComponents()
        self._set_highlight(Highlight())
        return comps

    def coreNodesByDegree(self, limit: Optional[int] = None) -> List[RankedNode]:
        ranked = self.queries.coreNodesByDegree(self.config.core_nodes_limit if limit is None else limit)
        self._set_highlight(Highlight(r.nodeId for r in ranked))
        return ranked

    def search(self, query: str = "", nodeType: Optional[str] = None,
               recenter: bool = True) -> List[Node]:
        hits = self.queries.searchNodes(query, nodeType)
        if len(hits) == 1 and recenter:
            self.recenterOn(hits[0].getId())
        self._set_highlight(Highlight(n.getId() for n in hits))
        return hits

    def searchRelations(self, query: str) -> Dict[str, List[Edge]]:
        grouped = self.queries.searchRelations(query)
        self._set_highlight(self.queries.relationHighlight(e for edges in grouped.values() for e in edges))
        return grouped

    def highlightRelation(self, a: str, b: str) -> Optional[Edge]:
        e = self.model.findEdge(a, b)
        self._set_highlight(self.queries.relationHighlight([e]) if e is not None else Highlight())
        return e

    def describePath(self, path, withRelations: bool = False) -> str:
        return self.queries.describePath(path, withRelations)

    def nodeTypeCounts(self) -> Dict[str, int]:
        return self.queries.nodeTypeCounts()

    def relationTypeCounts(self) -> Dict[str, int]:
        return self.queries.relationTypeCounts()

    def nodeColor(self, nodeType: str) -> str:
        return self.palette.nodeColor(nodeType)
