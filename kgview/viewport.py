# viewport.py

import logging
from typing import Callable, List, Optional

from PyQt5.QtCore import QPointF, QRectF

from .config import ViewConfig
from .edge import Edge
from .model import GraphModel
from .utils_geom import EPS, clamp, rect_center, trimmed_segment, v_dist, v_mid, v_sub

logger = logging.getLogger(__name__)


class EdgeGeometry:
    """Rendered segment of one edge plus its label anchor."""
    __slots__ = ("edge", "start", "end", "label")

    def __init__(self, edge: Edge, start: QPointF, end: QPointF, label: QPointF):
        self.edge = edge
        self.start = start
        self.end = end
        self.label = label

    def __repr__(self):
        return f"EdgeGeometry({self.edge!r})"


def edge_geometry(edge: Edge, model: GraphModel, node_radius: float,
                  config: Optional[ViewConfig] = None) -> Optional[EdgeGeometry]:
    cfg = config or ViewConfig()
    a = model.getPosition(edge.getSourceId())
    b = model.getPosition(edge.getTargetId())
    if a is None or b is None:
        return None
    seg = trimmed_segment(a, b, node_radius + cfg.source_trim_extra,
                          node_radius + cfg.target_trim_extra)
    if seg is None:
        return None
    mid = v_mid(a, b)
    return EdgeGeometry(edge, seg[0], seg[1], QPointF(mid.x(), mid.y() - cfg.edge_label_offset))


class UpdateCoalescer:
    """Keeps at most one pending update; tick() applies it."""

    def __init__(self):
        self._pending: Optional[Callable[[], None]] = None

    def schedule(self, fn: Callable[[], None]):
        self._pending = fn

    def tick(self) -> bool:
        fn = self._pending
        self._pending = None
        if fn is None:
            return False
        fn()
        return True

    def cancel(self):
        self._pending = None


class ViewTransform:
    """Uniform scale + translation, layout space -> surface pixels."""
    __slots__ = ("scale", "dx", "dy")

    def __init__(self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0):
        self.scale = scale
        self.dx = dx
        self.dy = dy

    def map(self, p: QPointF) -> QPointF:
        return QPointF(p.x() * self.scale + self.dx, p.y() * self.scale + self.dy)

    def inverted(self) -> "ViewTransform":
        if abs(self.scale) < EPS:
            return ViewTransform()
        s = 1.0 / self.scale
        return ViewTransform(s, -self.dx * s, -self.dy * s)

    def __repr__(self):
        return f"ViewTransform(scale={self.scale:.4f}, dx={self.dx:.2f}, dy={self.dy:.2f})"


class DragState:
    __slots__ = ("nodeId", "offset", "inverse", "bounds", "start")

    def __init__(self, nodeId, offset, inverse, bounds, start):
        self.nodeId: str = nodeId
        self.offset: QPointF = offset
        self.inverse: ViewTransform = inverse
        self.bounds: QRectF = bounds
        self.start: QPointF = start


class DragOutcome:
    __slots__ = ("nodeId", "moved")

    def __init__(self, nodeId: str, moved: bool):
        self.nodeId = nodeId
        self.moved = moved

    @property
    def isSelection(self) -> bool:
        return not self.moved

    def __repr__(self):
        return f"DragOutcome({self.nodeId!r}, moved={self.moved})"


class ViewportController:
    """
    Pan/zoom over a view rectangle fitted into a surface of known pixel size,
    plus node dragging. Pan and drag updates are applied on tick().
    """

    def __init__(self, model: GraphModel, node_radius: float = 14.0,
                 config: Optional[ViewConfig] = None):
        self.model = model
        self.config = config or ViewConfig()
        self.node_radius = float(node_radius)
        self.surface_w, self.surface_h = self.config.default_surface
        self.initial_view = QRectF(model.getViewport())
        self.view = QRectF(self.initial_view)
        self.zoom_level = 1.0
        self.selectedNodeId: Optional[str] = None
        self.lastEdgeGeometry: List[EdgeGeometry] = []

        self._coalescer = UpdateCoalescer()
        self._pan_dx = 0.0
        self._pan_dy = 0.0
        self._drag: Optional[DragState] = None

        # UI callback hooks
        self.on_view_changed: Optional[Callable[[QRectF], None]] = None
        self.on_node_moved: Optional[Callable[[str, QPointF, List[EdgeGeometry]], None]] = None

    # --------------------------
    # View state
    # --------------------------
    def reset(self, viewport: Optional[QRectF] = None):
        self._coalescer.cancel()
        self._pan_dx = self._pan_dy = 0.0
        self._drag = None
        self.initial_view = QRectF(viewport if viewport is not None else self.model.getViewport())
        self.view = QRectF(self.initial_view)
        self.zoom_level = 1.0
        self._notify_view()

    def setSurfaceSize(self, width: float, height: float):
        if width > 0 and height > 0:
            self.surface_w = float(width)
            self.surface_h = float(height)

    def viewRect(self) -> QRectF:
        return QRectF(self.view)

    def transform(self) -> ViewTransform:
        """Layout space -> surface pixels (fit, keep aspect ratio, centered)."""
        vw, vh = self.view.width(), self.view.height()
        if vw < EPS or vh < EPS:
            return ViewTransform()
        s = min(self.surface_w / vw, self.surface_h / vh)
        tx = (self.surface_w - vw * s) / 2 - self.view.x() * s
        ty = (self.surface_h - vh * s) / 2 - self.view.y() * s
        return ViewTransform(s, tx, ty)

    def inverseTransform(self) -> ViewTransform:
        return self.transform().inverted()

    def toSurface(self, p: QPointF) -> QPointF:
        return self.transform().map(QPointF(p))

    def _notify_view(self):
        if self.on_view_changed:
            self.on_view_changed(QRectF(self.view))

    # --------------------------
    # Pan
    # --------------------------
    def pan(self, dx: float, dy: float) -> bool:
        """Queue a pointer delta in surface pixels."""
        if self._drag is not None:
            return False
        self._pan_dx += dx
        self._pan_dy += dy
        self._coalescer.schedule(self._apply_pan)
        return True

    def _apply_pan(self):
        dx, dy = self._pan_dx, self._pan_dy
        self._pan_dx = self._pan_dy = 0.0
        gain = self.config.pan_gain
        sx = self.view.width() / self.surface_w
        sy = self.view.height() / self.surface_h
        self.view.translate(-dx * sx * gain, -dy * sy * gain)
        self._notify_view()

    # --------------------------
    # Zoom
    # --------------------------
    def zoom(self, factor: float) -> float:
        cfg = self.config
        if factor <= 0:
            logger.warning("Ignoring non-positive zoom factor %r", factor)
            return self.zoom_level
        self.zoom_level = clamp(self.zoom_level * factor, cfg.min_zoom, cfg.max_zoom)
        c = rect_center(self.view)
        w = self.initial_view.width() / self.zoom_level
        h = self.initial_view.height() / self.zoom_level
        self.view = QRectF(c.x() - w / 2, c.y() - h / 2, w, h)
        self._notify_view()
        return self.zoom_level

    def zoomIn(self) -> float:
        return self.zoom(self.config.zoom_step)

    def zoomOut(self) -> float:
        return self.zoom(1.0 / self.config.zoom_step)

    # --------------------------
    # Node drag
    # --------------------------
    def isDragging(self) -> bool:
        return self._drag is not None

    def dragStart(self, nodeId: str, pointer: QPointF) -> bool:
        pos = self.model.getPosition(nodeId)
        if pos is None:
            return False
        self._coalescer.cancel()
        self._pan_dx = self._pan_dy = 0.0
        inverse = self.inverseTransform()
        offset = v_sub(inverse.map(QPointF(pointer)), pos)
        self._drag = DragState(nodeId, offset, inverse, QRectF(self.view), QPointF(pos))
        return True

    def dragMove(self, pointer: QPointF) -> bool:
        if self._drag is None:
            return False
        p = QPointF(pointer)
        self._coalescer.schedule(lambda: self._apply_drag(p))
        return True

    def _apply_drag(self, pointer: QPointF):
        d = self._drag
        if d is None:
            return
        target = v_sub(d.inverse.map(pointer), d.offset)
        pad = self.node_radius + self.config.drag_clamp_padding
        b = d.bounds
        x = clamp(target.x(), b.left() + pad, b.right() - pad)
        y = clamp(target.y(), b.top() + pad, b.bottom() - pad)
        pos = QPointF(x, y)
        self.model.setPosition(d.nodeId, pos)
        geoms = []
        for e in self.model.incidentEdges(d.nodeId):
            g = edge_geometry(e, self.model, self.node_radius, self.config)
            if g is not None:
                geoms.append(g)
        self.lastEdgeGeometry = geoms
        if self.on_node_moved:
            self.on_node_moved(d.nodeId, QPointF(pos), geoms)

    def dragEnd(self) -> Optional[DragOutcome]:
        d = self._drag
        if d is None:
            return None
        self._coalescer.tick()
        self._drag = None
        final = self.model.getPosition(d.nodeId)
        moved = final is not None and v_dist(final, d.start) > EPS
        if not moved:
            self.selectedNodeId = d.nodeId
        return DragOutcome(d.nodeId, moved)

    # --------------------------
    # Frame
    # --------------------------
    def tick(self) -> bool:
        return self._coalescer.tick()
