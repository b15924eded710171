"""
Tests for hub selection and node-to-hub assignment.
"""

import pytest

from kgview import LayoutConfig
from kgview.centers import CenterSelector, bfs_distances, degree_stats
from kgview.components import ComponentAnalyzer


def analyze(model):
    return ComponentAnalyzer().analyze(model.nodeIds(), model.getEdges())


class TestDegreeStats:

    def test_star_stats(self, star_model):
        s = analyze(star_model)
        mean, std, threshold = degree_stats(s.components[0], s.degree, 0.5)
        assert mean == pytest.approx(16 / 9)
        assert std > 0
        assert threshold == pytest.approx(mean + 0.5 * std)

    def test_empty(self):
        assert degree_stats([], {}) == (0.0, 0.0, 0.0)

    def test_bfs_distances(self, chain_model):
        s = analyze(chain_model)
        assert bfs_distances("A", s.adjacency) == {"A": 0, "B": 1, "C": 2, "D": 3}


class TestCenterCount:

    @pytest.mark.parametrize("size,count", [(5, 1), (25, 1), (26, 2), (60, 2), (61, 3),
                                            (100, 3), (101, 4), (5000, 4)])
    def test_table(self, size, count):
        assert LayoutConfig().center_count_for(size) == count


class TestSelection:

    def test_star_hub(self, star_model):
        s = analyze(star_model)
        a = CenterSelector().select(s.components[0], s)
        assert a.centers == ["H"]
        assert set(a.node_to_center.values()) == {"H"}

    def test_two_hubs(self, twin_star_model):
        """A second far hub is added; ties in distance go to the earlier hub."""
        s = analyze(twin_star_model)
        comp = s.components[0]
        a = CenterSelector().select(comp, s)
        assert a.centers == ["H1", "H2"]
        assert len(a.centers) <= LayoutConfig().center_count_for(len(comp))
        assert set(a.centers) <= set(comp)
        assert a.node_to_center["a0"] == "H1"
        assert a.node_to_center["b0"] == "H2"
        assert a.node_to_center["p1"] == "H1"
        assert a.node_to_center["p2"] == "H1"
        assert a.node_to_center["p3"] == "H2"

    def test_low_score_stops(self, twin_star_model):
        """A high minimum score keeps a single hub."""
        s = analyze(twin_star_model)
        a = CenterSelector(LayoutConfig(min_center_score=100.0)).select(s.components[0], s)
        assert a.centers == ["H1"]

    def test_focus_high_degree(self, twin_star_model):
        s = analyze(twin_star_model)
        a = CenterSelector().select(s.components[0], s, focusNodeId="H2")
        assert a.centers[0] == "H2"

    def test_focus_low_degree_uses_nearest_hub(self, star_model):
        s = analyze(star_model)
        a = CenterSelector().select(s.components[0], s, focusNodeId="L3")
        assert a.centers == ["H"]

    def test_focus_outside_component_ignored(self, star_model):
        s = analyze(star_model)
        a = CenterSelector().select(s.components[0], s, focusNodeId="elsewhere")
        assert a.centers == ["H"]

    def test_every_node_assigned(self, twin_star_model):
        s = analyze(twin_star_model)
        comp = s.components[0]
        a = CenterSelector().select(comp, s)
        assert set(a.node_to_center) == set(comp)
        assert sum(len(a.assignedTo(c, comp)) for c in a.centers) == len(comp)
