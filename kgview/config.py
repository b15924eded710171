# config.py

import math
from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class LayoutConfig:
    # Node geometry
    node_radius: float = 14.0

    # Radial rings
    min_node_spacing: float = 80.0
    min_layer_gap: float = 100.0
    stagger_offset: float = 18.0
    max_fan_angle: float = math.pi * 1.5
    min_angle_per_child: float = 0.3
    crowded_ring_size: int = 12
    crowded_ring_growth: float = 0.05

    # Hub selection
    min_radial_component_size: int = 5
    center_count_table: Tuple[Tuple[int, int], ...] = ((25, 1), (60, 2), (100, 3))
    max_centers: int = 4
    threshold_std_factor: float = 0.5
    min_center_score: float = 2.0
    center_slot_gap: float = 300.0

    # Collision relaxation
    collision_iterations: int = 30
    collision_strength: float = 5.0
    collision_padding: float = 10.0
    collision_tolerance: float = 1.0

    # Composition
    component_gap: float = 150.0
    isolated_node_spacing: float = 60.0
    isolated_arc_drop: float = 80.0
    isolated_min_radius: float = 100.0
    isolated_max_half_angle: float = math.pi * 0.4
    empty_main_width: float = 400.0

    # Viewport
    viewport_padding: float = 60.0
    label_allowance: float = 40.0
    min_viewport_width: float = 400.0
    min_viewport_height: float = 300.0
    default_viewport: Tuple[float, float, float, float] = (0.0, 0.0, 800.0, 600.0)

    def __post_init__(self):
        if self.node_radius <= 0:
            raise ValueError("node_radius must be positive")
        if self.collision_iterations < 0:
            raise ValueError("collision_iterations must be >= 0")
        if self.isolated_node_spacing <= 0:
            raise ValueError("isolated_node_spacing must be positive")

    @property
    def min_collision_distance(self) -> float:
        return 2.0 * self.node_radius + self.collision_padding

    def center_count_for(self, size: int) -> int:
        for limit, count in self.center_count_table:
            if size <= limit:
                return count
        return self.max_centers


@dataclass
class ViewConfig:
    zoom_step: float = 1.2
    min_zoom: float = 0.3
    max_zoom: float = 3.0
    pan_gain: float = 1.5
    # Edge trimming so arrowheads stay visible
    source_trim_extra: float = 0.0
    target_trim_extra: float = 5.0
    edge_label_offset: float = 8.0
    drag_clamp_padding: float = 10.0
    default_surface: Tuple[float, float] = (800.0, 600.0)

    def __post_init__(self):
        if not (0 < self.min_zoom <= 1.0 <= self.max_zoom):
            raise ValueError("zoom bounds must satisfy 0 < min_zoom <= 1 <= max_zoom")
        if self.zoom_step <= 1.0:
            raise ValueError("zoom_step must be > 1")


@dataclass
class EngineConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    view: ViewConfig = field(default_factory=ViewConfig)
    all_paths_max_depth: int = 5
    core_nodes_limit: int = 10
