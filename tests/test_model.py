"""
Tests for the graph records and the GraphModel snapshot/position store.
"""

import json

from PyQt5.QtCore import QPointF, QRectF

from kgview import DEFAULT_EDGE_TYPE, DEFAULT_NODE_TYPE, Edge, GraphModel, Node


class TestRecords:
    """Node and Edge defaults and dict conversion."""

    def test_node_defaults(self):
        """Name falls back to the id, type to the default label."""
        n = Node("x")
        assert n.getName() == "x"
        assert n.getType() == DEFAULT_NODE_TYPE
        assert n.getDescription() is None

    def test_node_from_dict(self):
        n = Node.from_dict({"id": "ml", "name": "Machine Learning", "type": "concept"})
        assert (n.getId(), n.getName(), n.getType()) == ("ml", "Machine Learning", "concept")
        assert n.to_dict() == {"id": "ml", "name": "Machine Learning", "type": "concept"}

    def test_edge_type_label(self):
        """Untyped edges report the default relation label."""
        assert Edge("a", "b").getType() is None
        assert Edge("a", "b").typeLabel() == DEFAULT_EDGE_TYPE
        assert Edge("a", "b", "uses").typeLabel() == "uses"

    def test_edge_keys(self):
        e = Edge("b", "a")
        assert e.key() == ("b", "a")
        assert e.pairKey() == ("a", "b")
        assert e.touches("a") and e.touches("b") and not e.touches("c")


class TestSnapshot:
    """Loading snapshots, malformed entries and JSON files."""

    def test_load_snapshot(self, kg_snapshot):
        model = GraphModel()
        model.load_snapshot(kg_snapshot)
        assert len(model.getNodes()) == 7
        assert len(model.getEdges()) == 7
        assert model.getNode("stats").getType() == DEFAULT_NODE_TYPE

    def test_duplicate_ids_keep_first(self):
        model = GraphModel()
        model.load([Node("a", "first"), Node("a", "second")], [])
        assert model.nodeIds() == ["a"]
        assert model.nodeName("a") == "first"

    def test_malformed_entries_skipped(self):
        """Entries that are not mappings or lack ids are dropped, not raised."""
        model = GraphModel()
        model.load_snapshot({
            "nodes": [{"id": "a"}, {"name": "no id"}, "junk", {"id": "b"}],
            "edges": [{"sourceId": "a", "targetId": "b"}, {"sourceId": "a"}, 42],
        })
        assert model.nodeIds() == ["a", "b"]
        assert len(model.getEdges()) == 1

    def test_missing_sections(self):
        model = GraphModel()
        model.load_snapshot({})
        assert model.getNodes() == [] and model.getEdges() == []

    def test_json_roundtrip(self, tmp_path, kg_snapshot):
        model = GraphModel()
        model.load_snapshot(kg_snapshot)
        path = tmp_path / "graph.json"
        assert model.save_to_json(path)

        other = GraphModel()
        assert other.load_from_json(path)
        assert other.to_snapshot() == model.to_snapshot()

    def test_load_from_bad_json(self, tmp_path):
        """I/O and parse failures return False."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        model = GraphModel()
        assert model.load_from_json(path) is False
        assert model.load_from_json(tmp_path / "missing.json") is False

    def test_load_from_json_list_top_level(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        assert GraphModel().load_from_json(path) is False


class TestPositions:
    """Position map, originals and lookups."""

    def test_set_layout_and_restore(self):
        model = GraphModel()
        model.load([Node("a"), Node("b")], [Edge("a", "b")])
        computed = {"a": QPointF(0, 0), "b": QPointF(100, 0)}
        model.setLayout(computed, QRectF(0, 0, 400, 300))

        assert model.setPosition("a", QPointF(5, 5))
        assert model.getPosition("a") == QPointF(5, 5)
        assert computed["a"] == QPointF(0, 0)

        model.restoreOriginalLayout()
        assert model.getPosition("a") == QPointF(0, 0)

    def test_set_position_unknown(self):
        model = GraphModel()
        assert model.setPosition("nope", QPointF(1, 1)) is False

    def test_find_edge_either_direction(self, chain_model):
        assert chain_model.findEdge("B", "A").key() == ("A", "B")
        assert chain_model.findEdge("A", "D") is None

    def test_dicts_and_stats(self):
        model = GraphModel()
        model.load([Node("a", nodeType="t1"), Node("b")], [])
        model.setLayout({"a": QPointF(1, 2), "b": QPointF(3, 4)}, QRectF(0, 0, 10, 20),
                        components=[["a"], ["b"]])
        assert model.positions_as_dicts() == {"a": {"x": 1, "y": 2}, "b": {"x": 3, "y": 4}}
        assert model.viewport_as_dict() == {"x": 0, "y": 0, "width": 10, "height": 20}
        stats = model.get_stats()
        assert stats["nodes"] == 2
        assert stats["node_types"] == 2
        assert stats["components"] == 2

    def test_reload_discards_positions(self, chain_model):
        chain_model.setLayout({"A": QPointF(0, 0)}, QRectF(0, 0, 1, 1))
        chain_model.load([Node("z")], [])
        assert chain_model.getPosition("A") is None
