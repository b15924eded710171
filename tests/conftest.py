"""
Pytest fixtures for kgview tests.

Provides shared graphs:
- chain A-B-C-D
- two small components {A, B} and {C}
- a star with one hub and eight leaves
- two stars joined by a short path (two hubs in one component)
"""

import pytest

from kgview import Edge, GraphEngine, GraphModel, Node


def build_model(node_ids, pairs, types=None):
    """GraphModel from plain ids and (source, target[, type]) tuples."""
    types = types or {}
    model = GraphModel()
    nodes = [Node(nid, nodeType=types.get(nid)) for nid in node_ids]
    edges = [Edge(*p) for p in pairs]
    model.load(nodes, edges)
    return model


def star_ids(hub="H", leaves=8):
    return [hub] + [f"L{i}" for i in range(leaves)]


def star_pairs(hub="H", leaves=8):
    return [(hub, f"L{i}") for i in range(leaves)]


# ============================================================================
# Model fixtures
# ============================================================================

@pytest.fixture
def chain_model():
    return build_model(["A", "B", "C", "D"], [("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def split_model():
    return build_model(["A", "B", "C"], [("A", "B")])


@pytest.fixture
def star_model():
    return build_model(star_ids(), star_pairs())


@pytest.fixture
def twin_star_model():
    ids = ["H1", "H2", "p1", "p2", "p3"]
    ids += [f"a{i}" for i in range(12)] + [f"b{i}" for i in range(12)]
    pairs = [("H1", f"a{i}") for i in range(12)] + [("H2", f"b{i}") for i in range(12)]
    pairs += [("H1", "p1"), ("p1", "p2"), ("p2", "p3"), ("p3", "H2")]
    return build_model(ids, pairs)


@pytest.fixture
def kg_snapshot():
    return {
        "nodes": [
            {"id": "ml", "name": "Machine Learning", "type": "concept"},
            {"id": "dl", "name": "Deep Learning", "type": "concept"},
            {"id": "nn", "name": "Neural Network", "type": "concept"},
            {"id": "cnn", "name": "CNN", "type": "algorithm"},
            {"id": "rnn", "name": "RNN", "type": "algorithm"},
            {"id": "cv", "name": "Computer Vision", "type": "application"},
            {"id": "stats", "name": "Statistics"},
        ],
        "edges": [
            {"sourceId": "dl", "targetId": "ml", "type": "subfield_of"},
            {"sourceId": "nn", "targetId": "dl", "type": "foundation_of"},
            {"sourceId": "cnn", "targetId": "nn", "type": "is_a"},
            {"sourceId": "rnn", "targetId": "nn", "type": "is_a"},
            {"sourceId": "cnn", "targetId": "cv", "type": "applied_to"},
            {"sourceId": "nn", "targetId": "cnn"},
            {"sourceId": "ml", "targetId": "ghost", "type": "mentions"},
        ],
    }


@pytest.fixture
def engine(kg_snapshot):
    e = GraphEngine()
    e.load(kg_snapshot)
    return e


@pytest.fixture
def make_model():
    return build_model
