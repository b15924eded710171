# node.py

from typing import Any, Dict, Optional

DEFAULT_NODE_TYPE = "default"


class Node:
    __slots__ = ("_id", "_name", "_type", "_description")

    def __init__(self, nodeId: str, name: Optional[str] = None,
                 nodeType: Optional[str] = None, description: Optional[str] = None):
        self._id = str(nodeId)
        self._name = name if name else self._id
        # Missing or blank type falls back to the sentinel label
        self._type = nodeType if nodeType else DEFAULT_NODE_TYPE
        self._description = description

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        return cls(data["id"], data.get("name"), data.get("type"), data.get("description"))

    def to_dict(self) -> Dict[str, Any]:
        d = {"id": self._id, "name": self._name, "type": self._type}
        if self._description is not None:
            d["description"] = self._description
        return d

    # --- Getters ---
    def getId(self) -> str:
        return self._id

    def getName(self) -> str:
        return self._name

    def getType(self) -> str:
        return self._type

    def getDescription(self) -> Optional[str]:
        return self._description

    def __repr__(self) -> str:
        return f"N({self._id})"
