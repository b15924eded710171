# edge.py
from __future__ import annotations
from typing import Any, Dict, Optional, Tuple

DEFAULT_EDGE_TYPE = "related"


class Edge:
    __slots__ = ("_source", "_target", "_type")

    def __init__(self, sourceId: str, targetId: str, edgeType: Optional[str] = None):
        # Direction is kept as declared; loops and parallel edges are allowed
        self._source = str(sourceId)
        self._target = str(targetId)
        self._type = edgeType if edgeType else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        return cls(data["sourceId"], data["targetId"], data.get("type"))

    def to_dict(self) -> Dict[str, Any]:
        d = {"sourceId": self._source, "targetId": self._target}
        if self._type is not None:
            d["type"] = self._type
        return d

    # --- Getters ---
    def getSourceId(self) -> str: return self._source
    def getTargetId(self) -> str: return self._target
    def getType(self) -> Optional[str]: return self._type

    def typeLabel(self) -> str:
        return self._type if self._type is not None else DEFAULT_EDGE_TYPE

    # Convenience: tuple key by endpoint ids
    def key(self) -> Tuple[str, str]:
        return (self._source, self._target)

    def pairKey(self) -> Tuple[str, str]:
        # Unordered endpoint pair
        return tuple(sorted((self._source, self._target)))

    def touches(self, nodeId: str) -> bool:
        return self._source == nodeId or self._target == nodeId

    def __repr__(self):
        return f"E({self._source} -> {self._target})"
