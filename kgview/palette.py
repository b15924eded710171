# palette.py

from typing import Dict

from .node import DEFAULT_NODE_TYPE

PREDEFINED_COLORS = {
    "concept": "#3B82F6",
    "algorithm": "#8B5CF6",
    "application": "#10B981",
    "tool": "#F59E0B",
    "person": "#EC4899",
    "organization": "#6366F1",
    "location": "#14B8A6",
    "event": "#EF4444",
    "technology": "#0EA5E9",
    "theory": "#A855F7",
    "method": "#22C55E",
    DEFAULT_NODE_TYPE: "#64748B",
}

HUE_ROTATION = (210, 280, 150, 30, 330, 180, 0, 45, 260, 120, 300, 60)


class TypePalette:
    """
    Node type -> CSS color string. Unknown types take the next hue in the
    rotation the first time they are seen and keep it afterwards.
    """

    def __init__(self):
        self._assigned: Dict[str, str] = {}

    def nodeColor(self, nodeType: str) -> str:
        key = (nodeType or DEFAULT_NODE_TYPE).lower()
        if key in PREDEFINED_COLORS:
            return PREDEFINED_COLORS[key]
        color = self._assigned.get(key)
        if color is None:
            hue = HUE_ROTATION[len(self._assigned) % len(HUE_ROTATION)]
            color = f"hsl({hue}, 65%, 55%)"
            self._assigned[key] = color
        return color

    def legend(self) -> Dict[str, str]:
        return dict(self._assigned)

    def reset(self):
        self._assigned.clear()


def hsl_to_hex(color: str) -> str:
    """'hsl(h, s%, l%)' -> '#rrggbb'; hex strings pass through."""
    c = color.strip()
    if not c.startswith("hsl"):
        return c
    h, s, l = [float(part.strip().rstrip("%")) for part in c[c.index("(") + 1:c.index(")")].split(",")]
    h, s, l = (h % 360) / 360.0, s / 100.0, l / 100.0

    def channel(n):
        k = (n + h * 12) % 12
        a = s * min(l, 1 - l)
        return l - a * max(-1.0, min(k - 3, 9 - k, 1.0))

    r, g, b = (round(channel(n) * 255) for n in (0, 8, 4))
    return f"#{r:02x}{g:02x}{b:02x}"
