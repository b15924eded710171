"""
Tests for adjacency building and connected components.
"""

from kgview import Edge
from kgview.components import ComponentAnalyzer, build_adjacency, find_components, is_partition


class TestAdjacency:

    def test_dangling_edges_skipped(self):
        """Edges with a missing endpoint add no adjacency or degree."""
        adjacency, degree = build_adjacency(["a", "b"], [Edge("a", "b"), Edge("a", "ghost")])
        assert adjacency == {"a": ["b"], "b": ["a"]}
        assert degree == {"a": 1, "b": 1}

    def test_self_loop_counts_twice(self):
        _, degree = build_adjacency(["a"], [Edge("a", "a")])
        assert degree["a"] == 2


class TestComponents:

    def test_chain_single_component(self, chain_model):
        s = ComponentAnalyzer().analyze(chain_model.nodeIds(), chain_model.getEdges())
        assert s.components == [["A", "B", "C", "D"]]

    def test_sorted_largest_first(self, split_model):
        s = ComponentAnalyzer().analyze(split_model.nodeIds(), split_model.getEdges())
        assert s.components == [["A", "B"], ["C"]]

    def test_stable_for_equal_sizes(self):
        adjacency, _ = build_adjacency(["x", "y", "z"], [])
        assert find_components(["x", "y", "z"], adjacency) == [["x"], ["y"], ["z"]]

    def test_partition(self, twin_star_model):
        ids = twin_star_model.nodeIds()
        s = ComponentAnalyzer().analyze(ids, twin_star_model.getEdges())
        assert is_partition(s.components, ids)
        assert len(s.components) == 1

    def test_is_partition_detects_overlap(self):
        assert not is_partition([["a", "b"], ["b"]], ["a", "b"])
        assert not is_partition([["a"]], ["a", "b"])
