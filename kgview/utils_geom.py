# utils_geom.py

from PyQt5.QtCore import QPointF, QRectF
from typing import Iterable, Optional, Tuple
import math

EPS = 1e-9

def v_add(a: QPointF, b: QPointF) -> QPointF:
    return QPointF(a.x() + b.x(), a.y() + b.y())

def v_sub(a: QPointF, b: QPointF) -> QPointF:
    return QPointF(a.x() - b.x(), a.y() - b.y())

def v_scale(a: QPointF, s: float) -> QPointF:
    return QPointF(a.x() * s, a.y() * s)

def v_mid(a: QPointF, b: QPointF) -> QPointF:
    return QPointF((a.x() + b.x()) * 0.5, (a.y() + b.y()) * 0.5)

def v_len(a: QPointF) -> float:
    return math.hypot(a.x(), a.y())

def v_norm_safe(a: QPointF, fallback: QPointF = QPointF(1.0, 0.0)) -> QPointF:
    L = v_len(a)
    return fallback if L < EPS else v_scale(a, 1.0 / L)

def v_dist(a: QPointF, b: QPointF) -> float:
    return math.hypot(a.x() - b.x(), a.y() - b.y())

def v_polar(radius: float, angle_rad: float, origin: Optional[QPointF] = None) -> QPointF:
    ox = origin.x() if origin is not None else 0.0
    oy = origin.y() if origin is not None else 0.0
    return QPointF(ox + radius * math.cos(angle_rad), oy + radius * math.sin(angle_rad))

def v_angle(a: QPointF, origin: Optional[QPointF] = None) -> float:
    ox = origin.x() if origin is not None else 0.0
    oy = origin.y() if origin is not None else 0.0
    return math.atan2(a.y() - oy, a.x() - ox)

def bbox_of_points(points: Iterable[QPointF]) -> Optional[Tuple[float, float, float, float]]:
    """
    (min_x, min_y, max_x, max_y) over points, or None when there are none.
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    seen = False
    for p in points:
        seen = True
        min_x = min(min_x, p.x()); max_x = max(max_x, p.x())
        min_y = min(min_y, p.y()); max_y = max(max_y, p.y())
    if not seen:
        return None
    return (min_x, min_y, max_x, max_y)

def rect_center(r: QRectF) -> QPointF:
    return QPointF(r.x() + r.width() * 0.5, r.y() + r.height() * 0.5)

def clamp(v: float, lo: float, hi: float) -> float:
    # lo wins when the interval is inverted (view smaller than the padding)
    if lo > hi:
        return lo
    return lo if v < lo else (hi if v > hi else v)

def trimmed_segment(a: QPointF, b: QPointF, trim_start: float, trim_end: float):
    """
    Return (start, end) of segment ab shortened by trim_start at a and
    trim_end at b, or None when a and b coincide.
    """
    d = v_sub(b, a)
    L = v_len(d)
    if L < EPS:
        return None
    n = v_scale(d, 1.0 / L)
    return v_add(a, v_scale(n, trim_start)), v_sub(b, v_scale(n, trim_end))
