"""Tests for the force-directed layout engine."""

import math
import random

import numpy as np
import pytest

from case_board.board.layout import LayoutEngine
from case_board.config_loader import PhysicsConfig
from case_board.graph.models import Edge, Graph
from conftest import make_node, random_graph


def _distance(state, i, j) -> float:
    (x1, y1), (x2, y2) = state.position(i), state.position(j)
    return math.hypot(x2 - x1, y2 - y1)


def test_single_node_starts_on_spiral():
    """Test the first node is placed at the spiral's base radius."""
    engine = LayoutEngine()
    state = engine.initialize(Graph(nodes=[make_node("a")]), 800, 600)

    assert state.position(0) == pytest.approx((450.0, 300.0))
    assert state.velocity(0) == (0.0, 0.0)


def test_single_node_stays_finite_and_drifts_to_center():
    """Test one node under gravity alone."""
    engine = LayoutEngine()
    state = engine.initialize(Graph(nodes=[make_node("a")]), 800, 600)

    for _ in range(300):
        engine.step(state)

    assert state.is_finite()
    x, y = state.position(0)
    assert math.hypot(x - 400, y - 300) < 50


def test_spiral_is_deterministic():
    """Test initial placement depends only on node index."""
    engine = LayoutEngine()
    graph = Graph(nodes=[make_node(f"n{i}") for i in range(5)])

    first = engine.initialize(graph, 800, 600)
    second = engine.initialize(graph, 800, 600)

    np.testing.assert_array_equal(first.positions, second.positions)
    cfg = engine.config
    assert first.position(3) == pytest.approx((
        400 + math.cos(cfg.spiral_angle * 3) * (cfg.spiral_base + cfg.spiral_step * 3),
        300 + math.sin(cfg.spiral_angle * 3) * (cfg.spiral_base + cfg.spiral_step * 3),
    ))


def test_connected_pair_settles_near_ideal_length():
    """Test two linked nodes settle near the ideal edge length."""
    engine = LayoutEngine(PhysicsConfig(ideal_length=100))
    graph = Graph(nodes=[make_node("a"), make_node("b")], edges=[Edge("a", "b", "knows")])
    state = engine.initialize(graph, 800, 600)

    for _ in range(300):
        engine.step(state)

    assert 85 <= _distance(state, 0, 1) <= 115


def test_unlinked_pair_pushes_apart():
    """Test repulsion separates nodes without an edge."""
    engine = LayoutEngine()
    state = engine.initialize(Graph(nodes=[make_node("a"), make_node("b")]), 800, 600)
    start = _distance(state, 0, 1)

    for _ in range(50):
        engine.step(state)

    assert _distance(state, 0, 1) > start


def test_internal_forces_balance():
    """Test repulsion and springs sum to zero without gravity."""
    engine = LayoutEngine(PhysicsConfig(center_gravity=0.0))
    rng = random.Random(3)
    graph = random_graph(rng, max_nodes=30)
    graph.edges = [e for e in graph.edges if e.source != e.target]
    state = engine.initialize(graph, 800, 600)

    force = engine.forces(state)

    np.testing.assert_allclose(force.sum(axis=0), [0.0, 0.0], atol=1e-9)


def test_self_loops_exert_no_force():
    """Test a self-loop does not move its node."""
    engine = LayoutEngine(PhysicsConfig(center_gravity=0.0))
    graph = Graph(nodes=[make_node("a")], edges=[Edge("a", "a", "self")])
    state = engine.initialize(graph, 800, 600)

    np.testing.assert_allclose(engine.forces(state), [[0.0, 0.0]])


def test_coincident_nodes_stay_finite():
    """Test nodes sharing one position do not produce NaN."""
    engine = LayoutEngine()
    graph = Graph(nodes=[make_node("a"), make_node("b")], edges=[Edge("a", "b")])
    state = engine.initialize(graph, 800, 600)
    state.positions[:] = (123.0, 456.0)

    for _ in range(10):
        engine.step(state)

    assert state.is_finite()


@pytest.mark.parametrize("seed", range(12))
def test_random_graphs_stay_finite_and_bounded(seed):
    """Test positions stay finite and per-component speed is capped."""
    rng = random.Random(seed)
    engine = LayoutEngine()
    graph = random_graph(rng, max_nodes=50)
    state = engine.initialize(graph, 800, 600)
    np_rng = np.random.default_rng(seed)
    state.positions = np_rng.uniform(-5000, 5000, size=(len(graph.nodes), 2))
    if len(graph.nodes) > 1:
        state.positions[1] = state.positions[0]

    for _ in range(500):
        engine.step(state)
        assert np.abs(state.velocities).max() <= engine.config.max_velocity + 1e-9

    assert state.is_finite()


def test_layout_stabilizes():
    """Test pairwise distances stop changing for a few dozen nodes."""
    rng = random.Random(11)
    nodes = [make_node(f"n{i}") for i in range(30)]
    edges = [Edge(f"n{i}", f"n{rng.randrange(i)}") for i in range(1, 30)]
    edges += [Edge(f"n{rng.randrange(30)}", f"n{rng.randrange(30)}") for _ in range(10)]
    engine = LayoutEngine()
    state = engine.initialize(Graph(nodes=nodes, edges=edges), 800, 600)

    def pairwise():
        delta = state.positions[:, None, :] - state.positions[None, :, :]
        return np.sqrt((delta ** 2).sum(axis=-1))

    for _ in range(1500):
        engine.step(state)
    before = pairwise()
    for _ in range(100):
        engine.step(state)

    assert np.abs(pairwise() - before).max() < 2.0
    assert engine.total_kinetic_energy(state) < 1.0


def test_anchor_is_held_in_place():
    """Test the anchor keeps its position and zero velocity while others move."""
    engine = LayoutEngine()
    graph = Graph(
        nodes=[make_node("a"), make_node("b"), make_node("c")],
        edges=[Edge("a", "b"), Edge("b", "c")],
    )
    state = engine.initialize(graph, 800, 600)
    others_before = state.positions[1:].copy()

    engine.pin(state, 0, 123.0, 456.0)
    for _ in range(50):
        engine.step(state)
        assert state.position(0) == (123.0, 456.0)
        assert state.velocity(0) == (0.0, 0.0)

    assert not np.allclose(state.positions[1:], others_before)

    engine.release(state)
    engine.step(state)
    assert state.anchor is None
    assert state.position(0) != (123.0, 456.0)


def test_hold_anchors_current_position():
    """Test hold pins a node where it already is."""
    engine = LayoutEngine()
    state = engine.initialize(Graph(nodes=[make_node("a"), make_node("b")]), 800, 600)
    state.velocities[0] = (3.0, -2.0)
    where = state.position(0)

    engine.hold(state, 0)

    assert state.anchor == 0
    assert state.position(0) == where
    assert state.velocity(0) == (0.0, 0.0)


def test_add_nodes_keeps_existing_motion():
    """Test merged nodes join on the spiral while old nodes keep position and velocity."""
    engine = LayoutEngine()
    graph = Graph(nodes=[make_node("a"), make_node("b")], edges=[Edge("a", "b")])
    state = engine.initialize(graph, 800, 600)
    for _ in range(20):
        engine.step(state)
    positions = state.positions.copy()
    velocities = state.velocities.copy()

    grown = Graph(
        nodes=graph.nodes + [make_node("c")],
        edges=graph.edges + [Edge("b", "c")],
    )
    engine.add_nodes(state, grown)

    assert state.node_count == 3
    np.testing.assert_array_equal(state.positions[:2], positions)
    np.testing.assert_array_equal(state.velocities[:2], velocities)
    np.testing.assert_allclose(
        state.positions[2], engine.spiral_positions(2, 1, state.center)[0]
    )
    assert state.velocity(2) == (0.0, 0.0)
    assert list(zip(state.edge_sources, state.edge_targets)) == [(0, 1), (1, 2)]


def test_empty_graph_steps():
    """Test stepping an empty simulation is a no-op apart from the frame count."""
    engine = LayoutEngine()
    state = engine.initialize(Graph(), 800, 600)

    engine.step(state)

    assert state.node_count == 0
    assert state.frame == 1
