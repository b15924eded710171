from .config import EngineConfig, LayoutConfig, ViewConfig
from .edge import DEFAULT_EDGE_TYPE, Edge
from .engine import GraphEngine
from .layout import LayoutPipeline, LayoutResult
from .model import GraphModel
from .node import DEFAULT_NODE_TYPE, Node
from .palette import TypePalette
from .query import GraphQueryEngine, Highlight, PathResult, RankedNode
from .viewport import ViewportController

__all__ = [
    "DEFAULT_EDGE_TYPE", "DEFAULT_NODE_TYPE",
    "Edge", "EngineConfig", "GraphEngine", "GraphModel", "GraphQueryEngine",
    "Highlight", "LayoutConfig", "LayoutPipeline", "LayoutResult", "Node",
    "PathResult", "RankedNode", "TypePalette", "ViewConfig", "ViewportController",
]
