# graphwidget.py

import logging
from typing import Dict, List, Optional, Tuple

from PyQt5.QtWidgets import (
    QGraphicsView, QGraphicsScene, QGraphicsEllipseItem, QGraphicsPathItem,
    QGraphicsSimpleTextItem, QMenu
)
from PyQt5.QtWidgets import QGraphicsScene as QGS
from PyQt5.QtCore import Qt, QPointF, QTimer
from PyQt5.QtGui import QPen, QColor, QPainter, QPainterPath, QTransform, QBrush

from .engine import GraphEngine
from .palette import hsl_to_hex
from .utils_geom import v_add, v_dist, v_norm_safe, v_scale, v_sub
from .viewport import EdgeGeometry, edge_geometry

logger = logging.getLogger(__name__)

# Frame timer (~60 FPS); pan/drag updates are applied on each tick
FRAME_MS = 16

ARROW_LEN = 9.0
ARROW_HALF_WIDTH = 4.5

EDGE_COLOR = QColor(148, 163, 184)
EDGE_HIGHLIGHT = QColor("#F97316")
DIM_OPACITY = 0.2


class GraphWidget(QGraphicsView):
    """
    Draws the engine's position map. The scene is in layout coordinates;
    the view transform mirrors ViewportController so pointer math agrees.
    """

    def __init__(self, parent=None, engine: Optional[GraphEngine] = None):
        super().__init__(parent)
        self.engine = engine or GraphEngine()
        scene = QGraphicsScene(self)
        scene.setItemIndexMethod(QGS.NoIndex)
        self.setScene(scene)

        self.setRenderHint(QPainter.Antialiasing)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignCenter)
        self.setViewportUpdateMode(QGraphicsView.SmartViewportUpdate)

        self.background = QColor(255, 255, 255)
        self.showEdgeLabels = True

        self._nodeItems: Dict[str, QGraphicsEllipseItem] = {}
        self._labelItems: Dict[str, QGraphicsSimpleTextItem] = {}
        self._edgeItems: List[Tuple[QGraphicsPathItem, Optional[QGraphicsSimpleTextItem]]] = []

        self.panning = False
        self.lastPanPoint = None
        self.pathSource: Optional[str] = None

        self.engine.on_layout_changed = self.updateGraphScene
        self.engine.on_highlight_changed = lambda _h: self.updateGraphScene()
        self.engine.view.on_view_changed = lambda _r: self._applyViewTransform()
        self.engine.view.on_node_moved = self._onNodeMoved

        self._frameTimer = QTimer(self)
        self._frameTimer.setInterval(FRAME_MS)
        self._frameTimer.timeout.connect(self.engine.tick)
        self._frameTimer.start()

    # --------------------------
    # View transform
    # --------------------------
    def _applyViewTransform(self):
        ctrl = self.engine.view
        ctrl.setSurfaceSize(self.viewport().width(), self.viewport().height())
        self.scene().setSceneRect(ctrl.viewRect())
        t = ctrl.transform()
        self.setTransform(QTransform.fromScale(t.scale, t.scale))
        self.viewport().update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._applyViewTransform()

    def drawBackground(self, painter, rect):
        painter.fillRect(rect, self.background)

    # --------------------------
    # Scene
    # --------------------------
    def _edgePath(self, g: EdgeGeometry) -> QPainterPath:
        path = QPainterPath(g.start)
        path.lineTo(g.end)
        direction = v_norm_safe(v_sub(g.end, g.start))
        base = v_sub(g.end, v_scale(direction, ARROW_LEN))
        normal = QPointF(-direction.y(), direction.x())
        path.moveTo(g.end)
        path.lineTo(v_add(base, v_scale(normal, ARROW_HALF_WIDTH)))
        path.lineTo(v_sub(base, v_scale(normal, ARROW_HALF_WIDTH)))
        path.closeSubpath()
        return path

    def _addEdge(self, g: EdgeGeometry):
        h = self.engine.highlight
        s, t = g.edge.getSourceId(), g.edge.getTargetId()
        hot = h.hasEdge(s, t)
        color = EDGE_HIGHLIGHT if hot else EDGE_COLOR
        pen = QPen(color, 2.5 if hot else 1.2)
        pen.setCosmetic(True)
        item = self.scene().addPath(self._edgePath(g), pen, QBrush(color))
        item.setZValue(-10)
        if not h.isEmpty() and not hot:
            item.setOpacity(DIM_OPACITY)

        label = None
        if self.showEdgeLabels and g.edge.getType():
            label = QGraphicsSimpleTextItem(g.edge.getType())
            r = label.boundingRect()
            label.setPos(g.label.x() - r.width() / 2, g.label.y() - r.height() / 2)
            label.setBrush(QColor(100, 116, 139))
            label.setZValue(-5)
            self.scene().addItem(label)
        self._edgeItems.append((item, label))

    def updateGraphScene(self):
        self.scene().clear()
        self._nodeItems.clear()
        self._labelItems.clear()
        self._edgeItems.clear()

        model = self.engine.model
        radius = self.engine.config.layout.node_radius
        view_cfg = self.engine.config.view
        h = self.engine.highlight

        for e in model.getEdges():
            g = edge_geometry(e, model, radius, view_cfg)
            if g is not None:
                self._addEdge(g)

        for n in model.getNodes():
            pos = model.getPosition(n.getId())
            if pos is None:
                continue
            fill = QColor(hsl_to_hex(self.engine.nodeColor(n.getType())))
            hot = n.getId() in h.nodes
            pen = QPen(QColor("#0F172A") if hot else fill.darker(130), 3 if hot else 1.5)
            pen.setCosmetic(True)
            item = self.scene().addEllipse(-radius, -radius, 2 * radius, 2 * radius, pen, QBrush(fill))
            item.setPos(pos)
            item.setZValue(10)
            item.setToolTip(n.getDescription() or n.getName())
            if not h.isEmpty() and not hot:
                item.setOpacity(DIM_OPACITY)
            self._nodeItems[n.getId()] = item

            text = QGraphicsSimpleTextItem(n.getName())
            r = text.boundingRect()
            text.setPos(pos.x() - r.width() / 2, pos.y() + radius + 4)
            text.setBrush(Qt.black)
            text.setZValue(20)
            self.scene().addItem(text)
            self._labelItems[n.getId()] = text

        logger.debug("Scene rebuilt: %d node item(s), %d edge item(s)",
                     len(self._nodeItems), len(self._edgeItems))
        self._applyViewTransform()

    def _onNodeMoved(self, nodeId: str, pos: QPointF, geoms: List[EdgeGeometry]):
        item = self._nodeItems.get(nodeId)
        if item is None:
            return
        item.setPos(pos)
        label = self._labelItems.get(nodeId)
        if label is not None:
            r = label.boundingRect()
            radius = self.engine.config.layout.node_radius
            label.setPos(pos.x() - r.width() / 2, pos.y() + radius + 4)
        if geoms:
            self.updateEdges({g.edge.key(): g for g in geoms})

    def updateEdges(self, moved: Dict[Tuple[str, str], EdgeGeometry]):
        for item, text in self._edgeItems:
            self.scene().removeItem(item)
            if text is not None:
                self.scene().removeItem(text)
        self._edgeItems = []
        model = self.engine.model
        radius = self.engine.config.layout.node_radius
        for e in model.getEdges():
            g = moved.get(e.key()) or edge_geometry(e, model, radius, self.engine.config.view)
            if g is not None:
                self._addEdge(g)

    # --------------------------
    # Commands
    # --------------------------
    def zoomIn(self):
        self.engine.zoomIn()

    def zoomOut(self):
        self.engine.zoomOut()

    def resetView(self):
        self.engine.resetLayout()

    def toggleEdgeLabels(self):
        self.showEdgeLabels = not self.showEdgeLabels
        self.updateGraphScene()

    def _status(self, text: str, ms: int = 4000):
        parent = self.parent()
        if parent is not None and hasattr(parent, "statusBar"):
            parent.statusBar().showMessage(text, ms)

    # --------------------------
    # Pointer
    # --------------------------
    def findNodeAtPosition(self, scenePos: QPointF) -> Optional[str]:
        radius = self.engine.config.layout.node_radius
        model = self.engine.model
        for n in reversed(model.getNodes()):
            pos = model.getPosition(n.getId())
            if pos is not None and v_dist(pos, scenePos) <= radius:
                return n.getId()
        return None

    def wheelEvent(self, event):
        if event.angleDelta().y() > 0:
            self.engine.zoomIn()
        else:
            self.engine.zoomOut()
        event.accept()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            nodeId = self.findNodeAtPosition(self.mapToScene(event.pos()))
            if nodeId is not None:
                self.engine.dragStart(nodeId, QPointF(event.pos()))
                self.setCursor(Qt.SizeAllCursor)
            else:
                self.panning = True
                self.lastPanPoint = event.pos()
                self.setCursor(Qt.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.engine.view.isDragging():
            self.engine.dragMove(QPointF(event.pos()))
        elif self.panning:
            delta = event.pos() - self.lastPanPoint
            self.lastPanPoint = event.pos()
            self.engine.pan(delta.x(), delta.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            if self.engine.view.isDragging():
                outcome = self.engine.dragEnd()
                if outcome is not None and outcome.isSelection:
                    self._onNodeSelected(outcome.nodeId)
            self.panning = False
            self.setCursor(Qt.ArrowCursor)
        super().mouseReleaseEvent(event)

    def _onNodeSelected(self, nodeId: str):
        if self.pathSource is not None and self.pathSource != nodeId:
            source, self.pathSource = self.pathSource, None
            result = self.engine.shortestPath(source, nodeId)
            if result:
                self._status(self.engine.describePath(result.path, withRelations=True), 8000)
            else:
                self._status("No path found.")
            return
        self.engine.neighborsWithinDepth(nodeId, 1, "all")
        node = self.engine.model.getNode(nodeId)
        if node is not None:
            self._status(f"{node.getName()} [{node.getType()}]")

    def contextMenuEvent(self, event):
        nodeId = self.findNodeAtPosition(self.mapToScene(event.pos()))
        menu = QMenu(self)
        if nodeId is not None:
            menu.addAction("Re-center Layout Here", lambda: self.engine.recenterOn(nodeId))
            menu.addAction("Neighbors (depth 2)",
                           lambda: self.engine.neighborsWithinDepth(nodeId, 2, "all"))
            menu.addAction("Shortest Path From Here...", lambda: self._beginPath(nodeId))
            menu.addSeparator()
        menu.addAction("Clear Highlight", self.engine.clearHighlight)
        menu.addAction("Toggle Edge Labels", self.toggleEdgeLabels)
        menu.addAction("Reset Layout", self.resetView)
        menu.exec_(event.globalPos())

    def _beginPath(self, nodeId: str):
        self.pathSource = nodeId
        self._status("Click the target node.", 6000)

