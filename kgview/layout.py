# layout.py

import logging
import time
from typing import Dict, List, Optional

from PyQt5.QtCore import QPointF, QRectF

from .centers import CenterAssignment, CenterSelector
from .collision import CollisionReport, CollisionResolver
from .components import ComponentAnalyzer
from .composition import CompositionPlacer
from .config import LayoutConfig
from .model import GraphModel
from .radial import RadialLayoutEngine

logger = logging.getLogger(__name__)


class LayoutResult:
    __slots__ = ("positions", "viewport", "components", "assignments", "isolated", "collisions")

    def __init__(self, positions, viewport, components, assignments, isolated, collisions):
        self.positions: Dict[str, QPointF] = positions
        self.viewport: QRectF = viewport
        self.components: List[List[str]] = components
        self.assignments: List[CenterAssignment] = assignments
        self.isolated: List[str] = isolated
        self.collisions: List[CollisionReport] = collisions

    @property
    def centers(self) -> List[List[str]]:
        return [a.centers for a in self.assignments]


class LayoutPipeline:
    """
    ComponentAnalyzer -> CenterSelector -> RadialLayoutEngine ->
    CollisionResolver -> CompositionPlacer, written back into the model.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        self.analyzer = ComponentAnalyzer()
        self.selector = CenterSelector(self.config)
        self.radial = RadialLayoutEngine(self.config)
        self.resolver = CollisionResolver(self.config)
        self.placer = CompositionPlacer(self.config)

    def compute(self, model: GraphModel, focusNodeId: Optional[str] = None) -> LayoutResult:
        t0 = time.perf_counter()
        structure = self.analyzer.analyze(model.nodeIds(), model.getEdges())
        threshold = self.config.min_radial_component_size

        layouts: List[Dict[str, QPointF]] = []
        assignments: List[CenterAssignment] = []
        collisions: List[CollisionReport] = []
        isolated: List[str] = []
        for comp in structure.components:
            if len(comp) < threshold:
                isolated.extend(comp)
                continue
            focus = focusNodeId if focusNodeId in comp else None
            assignment = self.selector.select(comp, structure, focus)
            positions = self.radial.layout_component(comp, assignment, structure)
            collisions.append(self.resolver.resolve(positions))
            layouts.append(positions)
            assignments.append(assignment)

        positions, viewport = self.placer.compose(layouts, isolated)
        logger.info("Layout: %d nodes, %d radial component(s), %d isolated, %.1f ms",
                    len(positions), len(layouts), len(isolated),
                    (time.perf_counter() - t0) * 1000.0)
        return LayoutResult(positions, viewport, structure.components,
                            assignments, isolated, collisions)

    def run(self, model: GraphModel, focusNodeId: Optional[str] = None) -> LayoutResult:
        result = self.compute(model, focusNodeId)
        model.setLayout(result.positions, result.viewport,
                        components=result.components, centers=result.centers)
        return result
