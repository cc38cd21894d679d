"""Tests for snapshot merging and validation."""

import random

import pytest

from case_board.graph.merge import merge, validate
from case_board.graph.models import Edge, Graph
from conftest import make_node, random_graph


def _edge_keys(graph: Graph) -> list[tuple[str, str]]:
    return [e.key for e in graph.edges]


def test_merge_adds_new_nodes_and_edges():
    """Test an incremental snapshot introducing a new node and edge."""
    existing = Graph(
        nodes=[make_node("A"), make_node("B")],
        edges=[Edge("A", "B", "knows")],
    )
    incoming = Graph(
        nodes=[make_node("B"), make_node("C")],
        edges=[Edge("B", "C", "owns")],
    )

    merged = merge(existing, incoming)

    assert [n.id for n in merged.nodes] == ["A", "B", "C"]
    assert _edge_keys(merged) == [("A", "B"), ("B", "C")]


def test_merge_partial_then_fuller_snapshot():
    """Test {A} followed by {A, B, A->B} yields two nodes and one edge."""
    first = merge(Graph(), Graph(nodes=[make_node("A")]))
    second = merge(
        first,
        Graph(nodes=[make_node("A"), make_node("B")], edges=[Edge("A", "B", "knows")]),
    )

    assert [n.id for n in second.nodes] == ["A", "B"]
    assert [(e.key, e.relation) for e in second.edges] == [(("A", "B"), "knows")]


def test_merge_does_not_mutate_inputs():
    """Test inputs are left untouched."""
    existing = Graph(nodes=[make_node("A")])
    incoming = Graph(nodes=[make_node("B")], edges=[Edge("A", "B")])

    merge(existing, incoming)

    assert [n.id for n in existing.nodes] == ["A"]
    assert existing.edges == []
    assert [n.id for n in incoming.nodes] == ["B"]


def test_merge_skips_same_label_under_new_id():
    """Test that a renamed id for a known entity does not duplicate it."""
    existing = Graph(nodes=[make_node("p1", "Alice Smith")])
    incoming = Graph(nodes=[make_node("person-7", "Alice Smith"), make_node("p2", "Bob Jones")])

    merged = merge(existing, incoming)

    assert [n.id for n in merged.nodes] == ["p1", "p2"]


def test_merge_dedups_within_the_same_batch():
    """Test duplicates inside one incoming snapshot are added once."""
    incoming = Graph(
        nodes=[make_node("x", "Knife"), make_node("x", "Other"), make_node("y", "Knife")],
        edges=[Edge("x", "x"), Edge("x", "x", "again")],
    )

    merged = merge(Graph(), incoming)

    assert [n.id for n in merged.nodes] == ["x"]
    assert len(merged.edges) == 1


def test_merge_keeps_first_relation_for_existing_pair():
    """Test an existing (source, target) pair is not re-added with new text."""
    existing = Graph(nodes=[make_node("A"), make_node("B")], edges=[Edge("A", "B", "knows")])
    incoming = Graph(edges=[Edge("A", "B", "married to"), Edge("B", "A", "knows")])

    merged = merge(existing, incoming)

    assert [(e.key, e.relation) for e in merged.edges] == [
        (("A", "B"), "knows"),
        (("B", "A"), "knows"),
    ]


def test_merge_drops_dangling_incoming_edges():
    """Test edges to nodes that never arrived are dropped."""
    existing = Graph(nodes=[make_node("X")])
    incoming = Graph(edges=[Edge("X", "Y", "knows")])

    merged = merge(existing, incoming)

    assert merged.edges == []


def test_merge_into_empty_graph():
    """Test merging into an empty board is the validated snapshot."""
    incoming = Graph(nodes=[make_node("A"), make_node("B")], edges=[Edge("A", "B"), Edge("A", "Z")])

    merged = merge(Graph(), incoming)

    assert [n.id for n in merged.nodes] == ["A", "B"]
    assert _edge_keys(merged) == [("A", "B")]


def test_validate_drops_dangling_edges():
    """Test validation removes edges whose endpoints are missing."""
    graph = Graph(
        nodes=[make_node("A"), make_node("B")],
        edges=[Edge("A", "B"), Edge("A", "ghost"), Edge("ghost", "B")],
    )

    result = validate(graph)

    assert _edge_keys(result) == [("A", "B")]
    assert len(graph.edges) == 3


@pytest.mark.parametrize("seed", range(20))
def test_merge_is_idempotent(seed):
    """Test merging the same snapshot twice changes nothing."""
    rng = random.Random(seed)
    base = validate(random_graph(rng, max_nodes=20))
    snapshot = random_graph(rng, max_nodes=30, dangling=True)

    once = merge(base, snapshot)
    twice = merge(once, snapshot)

    assert [n.id for n in twice.nodes] == [n.id for n in once.nodes]
    assert _edge_keys(twice) == _edge_keys(once)


@pytest.mark.parametrize("seed", range(20))
def test_merge_is_additive(seed):
    """Test nothing already on the board is removed or reordered."""
    rng = random.Random(seed)
    base = validate(random_graph(rng, max_nodes=20))
    snapshot = random_graph(rng, max_nodes=30, dangling=True)

    merged = merge(base, snapshot)

    assert [n.id for n in merged.nodes[: len(base.nodes)]] == [n.id for n in base.nodes]
    assert _edge_keys(merged)[: len(base.edges)] == _edge_keys(base)


@pytest.mark.parametrize("seed", range(20))
def test_every_edge_references_existing_nodes(seed):
    """Test edge endpoints always exist after validate and merge."""
    rng = random.Random(seed)
    first = random_graph(rng, dangling=True)
    second = random_graph(rng, dangling=True)

    for graph in (validate(first), merge(validate(first), second)):
        ids = graph.node_ids()
        assert all(e.source in ids and e.target in ids for e in graph.edges)


@pytest.mark.parametrize("seed", range(10))
def test_merged_ids_and_labels_are_unique(seed):
    """Test no id or label appears twice after merging overlapping snapshots."""
    rng = random.Random(seed)
    merged = Graph()
    for _ in range(4):
        merged = merge(merged, random_graph(rng, max_nodes=15))

    ids = [n.id for n in merged.nodes]
    labels = [n.label for n in merged.nodes]
    assert len(ids) == len(set(ids))
    assert len(labels) == len(set(labels))
