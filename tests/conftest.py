"""Pytest configuration and shared fixtures."""

import random
from pathlib import Path

import pytest

from case_board.config_loader import Settings
from case_board.graph.models import Edge, Graph, Node, NodeMetadata
from case_board.graph.models import NODE_KINDS

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


class FakeFrameTimer:
    """Stand-in for the Qt frame timer that records start/stop calls."""

    def __init__(self):
        self.active = False
        self.starts = 0
        self.stops = 0

    def start(self) -> None:
        self.active = True
        self.starts += 1

    def stop(self) -> None:
        self.active = False
        self.stops += 1

    def is_active(self) -> bool:
        return self.active


def make_node(node_id: str, label: str | None = None, kind: str = "person", **meta) -> Node:
    return Node(
        id=node_id,
        label=label or node_id,
        kind=kind,
        description=f"{label or node_id} description",
        metadata=NodeMetadata(**meta),
    )


def random_graph(rng: random.Random, max_nodes: int = 50, dangling: bool = False) -> Graph:
    """Random graph with unique ids and labels; optional dangling edges."""
    count = rng.randint(1, max_nodes)
    nodes = [make_node(f"n{i}", kind=rng.choice(NODE_KINDS)) for i in range(count)]
    ids = [n.id for n in nodes]
    pool = ids + (["ghost1", "ghost2"] if dangling else [])
    edges = [
        Edge(rng.choice(pool), rng.choice(pool), rng.choice(["knows", "owns", "saw"]))
        for _ in range(rng.randint(0, count * 2))
    ]
    return Graph(nodes=nodes, edges=edges)


@pytest.fixture
def project_root() -> Path:
    """Return project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def config_path(project_root: Path) -> Path:
    """Return path to config.yaml."""
    return project_root / "config" / "config.yaml"


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def frame_timer() -> FakeFrameTimer:
    return FakeFrameTimer()


@pytest.fixture
def case_graph() -> Graph:
    """Small case: a collision with two drivers, a witness and evidence."""
    nodes = [
        make_node("case", "Smith v. Jones", kind="case"),
        make_node("smith", "Alice Smith", role="Plaintiff", impact_score=9, tags=["driver"]),
        make_node("jones", "Bob Jones", role="Defendant", impact_score=8),
        make_node("witness", "Carol White", role="Hostile Witness", key_quote="I saw the light turn red."),
        make_node("cctv", "CCTV Footage", kind="evidence", impact_score=7),
        make_node("junction", "Main St Junction", kind="location"),
        make_node("crash", "Collision", kind="event"),
    ]
    edges = [
        Edge("smith", "case", "party to"),
        Edge("jones", "case", "party to"),
        Edge("witness", "crash", "witnessed"),
        Edge("cctv", "crash", "recorded"),
        Edge("crash", "junction", "occurred at"),
        Edge("smith", "crash", "involved in"),
        Edge("jones", "crash", "involved in"),
    ]
    return Graph(nodes=nodes, edges=edges)


@pytest.fixture
def test_data_dir(tmp_path: Path) -> Path:
    """Return path to a scratch directory for snapshot files."""
    return tmp_path
