"""
End-to-end tests for the layout pipeline.
"""

import itertools

import pytest
from PyQt5.QtCore import QRectF

from kgview import GraphModel, LayoutConfig, LayoutPipeline
from kgview.utils_geom import v_dist


class TestLayoutPipeline:

    def test_empty_graph(self):
        """No nodes: empty map and the default viewport."""
        model = GraphModel()
        result = LayoutPipeline().run(model)
        assert result.positions == {}
        assert model.getViewport() == QRectF(0, 0, 800, 600)

    def test_small_components_go_to_arc(self, split_model):
        result = LayoutPipeline().run(split_model)
        assert result.components == [["A", "B"], ["C"]]
        assert result.isolated == ["A", "B", "C"]
        assert result.assignments == []
        assert result.positions["B"].y() == pytest.approx(80.0)
        for a, b in itertools.combinations(result.positions.values(), 2):
            assert v_dist(a, b) >= 60.0 - 1e-6

    def test_chain_of_four_is_isolated(self, chain_model):
        result = LayoutPipeline().run(chain_model)
        assert result.isolated == ["A", "B", "C", "D"]

    def test_star_radial(self, star_model):
        result = LayoutPipeline().run(star_model)
        assert result.centers == [["H"]]
        assert result.isolated == []
        assert result.collisions[0].converged
        min_d = LayoutConfig().min_collision_distance
        for a, b in itertools.combinations(result.positions.values(), 2):
            assert v_dist(a, b) >= min_d - 1e-6

    def test_positions_written_to_model(self, star_model):
        result = LayoutPipeline().run(star_model)
        assert set(star_model.positions) == set(star_model.nodeIds())
        assert star_model.getViewport() == result.viewport
        assert star_model.centers == [["H"]]
        vp = star_model.getViewport()
        for p in star_model.positions.values():
            assert vp.contains(p)

    def test_mixed_graph(self, make_model):
        """A radial component plus an arc of leftovers, all inside the viewport."""
        ids = ["H"] + [f"L{i}" for i in range(6)] + ["x", "y", "z"]
        pairs = [("H", f"L{i}") for i in range(6)] + [("x", "y")]
        model = make_model(ids, pairs)
        result = LayoutPipeline().run(model)
        assert result.isolated == ["x", "y", "z"]
        radial_bottom = max(result.positions[n].y() for n in ids[:7])
        assert all(result.positions[n].y() > radial_bottom for n in ("x", "y", "z"))
        for p in result.positions.values():
            assert result.viewport.contains(p)

    def test_focus_changes_first_hub(self, twin_star_model):
        result = LayoutPipeline().compute(twin_star_model, focusNodeId="H2")
        assert result.centers[0][0] == "H2"

    def test_dangling_edges_ignored(self):
        model = GraphModel()
        model.load_snapshot({"nodes": [{"id": "a"}], "edges": [{"sourceId": "a", "targetId": "ghost"}]})
        result = LayoutPipeline().run(model)
        assert list(result.positions) == ["a"]

    def test_every_node_placed(self, twin_star_model):
        result = LayoutPipeline().run(twin_star_model)
        assert set(result.positions) == set(twin_star_model.nodeIds())
