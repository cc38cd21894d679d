"""Force-directed layout engine.

Node positions live in a flat numpy buffer indexed by each node's position
in ``Graph.nodes``. One call to :meth:`LayoutEngine.step` advances the
simulation by a single animation frame:

1. Repulsion between every pair, ``repulsion / max(d^2, min_distance_sq)``.
2. Hooke spring along every edge, ``spring_k * (d - ideal_length)``.
3. Weak gravity toward the viewport center.
4. ``v = clip((v + F) * damping)``, ``pos += v``.

The node under pointer drag (the anchor) skips step 4 and keeps zero
velocity, so the rest of the graph reacts to it as a fixed point.

Repulsion is O(N^2) per frame. That is fine for tens of nodes; the board is
not meant for thousands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from case_board.config_loader import PhysicsConfig
from case_board.graph.models import Graph


@dataclass
class SimulationState:
    """Mutable per-frame state for one graph."""

    positions: np.ndarray                 # (N, 2) simulation space
    velocities: np.ndarray                # (N, 2)
    edge_sources: np.ndarray              # (E,) node indices
    edge_targets: np.ndarray              # (E,) node indices
    center: np.ndarray = field(default_factory=lambda: np.zeros(2))
    anchor: Optional[int] = None
    frame: int = 0

    @property
    def node_count(self) -> int:
        return int(self.positions.shape[0])

    def position(self, index: int) -> tuple[float, float]:
        x, y = self.positions[index]
        return float(x), float(y)

    def velocity(self, index: int) -> tuple[float, float]:
        vx, vy = self.velocities[index]
        return float(vx), float(vy)

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.positions).all() and np.isfinite(self.velocities).all())


def _edge_arrays(graph: Graph) -> tuple[np.ndarray, np.ndarray]:
    index = graph.node_index()
    pairs = [
        (index[e.source], index[e.target])
        for e in graph.edges
        if e.source in index and e.target in index and e.source != e.target
    ]
    if not pairs:
        return np.zeros(0, dtype=np.intp), np.zeros(0, dtype=np.intp)
    arr = np.asarray(pairs, dtype=np.intp)
    return arr[:, 0], arr[:, 1]


class LayoutEngine:
    """Per-frame physics integrator."""

    def __init__(self, config: PhysicsConfig | None = None):
        self.config = config or PhysicsConfig()

    def spiral_positions(self, start: int, count: int, center: np.ndarray) -> np.ndarray:
        """Deterministic spiral points for node indices ``start .. start+count-1``."""
        cfg = self.config
        i = np.arange(start, start + count, dtype=float)
        angle = cfg.spiral_angle * i
        radius = cfg.spiral_base + cfg.spiral_step * i
        return np.column_stack(
            (center[0] + np.cos(angle) * radius, center[1] + np.sin(angle) * radius)
        )

    def initialize(self, graph: Graph, width: float, height: float) -> SimulationState:
        """Fresh state for a replaced graph, spiralling out from the viewport center."""
        n = len(graph.nodes)
        center = np.array([width / 2.0, height / 2.0], dtype=float)
        sources, targets = _edge_arrays(graph)
        return SimulationState(
            positions=self.spiral_positions(0, n, center).reshape(n, 2),
            velocities=np.zeros((n, 2), dtype=float),
            edge_sources=sources,
            edge_targets=targets,
            center=center,
        )

    def add_nodes(self, state: SimulationState, graph: Graph) -> SimulationState:
        """Extend the buffer after an additive merge.

        ``graph.nodes`` must start with the nodes already in ``state``; only
        the new tail gets spiral positions, everything else keeps moving
        from where it is.
        """
        existing = state.node_count
        added = len(graph.nodes) - existing
        if added > 0:
            state.positions = np.vstack(
                (state.positions, self.spiral_positions(existing, added, state.center))
            )
            state.velocities = np.vstack((state.velocities, np.zeros((added, 2))))
        state.edge_sources, state.edge_targets = _edge_arrays(graph)
        return state

    def set_center(self, state: SimulationState, width: float, height: float) -> None:
        state.center = np.array([width / 2.0, height / 2.0], dtype=float)

    # ------------------------------------------------------------------#
    # Forces
    # ------------------------------------------------------------------#
    def forces(self, state: SimulationState) -> np.ndarray:
        """Net force on every node for the current positions."""
        cfg = self.config
        pos = state.positions
        n = pos.shape[0]
        force = np.zeros_like(pos)
        if n == 0:
            return force

        # Repulsion: delta[i, j] points from j to i
        delta = pos[:, np.newaxis, :] - pos[np.newaxis, :, :]
        dist_sq = np.maximum((delta ** 2).sum(axis=-1), cfg.min_distance_sq)
        magnitude = cfg.repulsion / dist_sq
        np.fill_diagonal(magnitude, 0.0)
        force += (delta * (magnitude / np.sqrt(dist_sq))[:, :, np.newaxis]).sum(axis=1)

        # Springs
        if state.edge_sources.size:
            src, tgt = state.edge_sources, state.edge_targets
            edge_vec = pos[tgt] - pos[src]
            dist = np.sqrt((edge_vec ** 2).sum(axis=-1))
            stretch = np.divide(
                cfg.spring_k * (dist - cfg.ideal_length),
                dist,
                out=np.zeros_like(dist),
                where=dist > 0,
            )
            pull = edge_vec * stretch[:, np.newaxis]
            np.add.at(force, src, pull)
            np.add.at(force, tgt, -pull)

        # Center gravity
        force += (state.center - pos) * cfg.center_gravity
        return force

    def step(self, state: SimulationState) -> SimulationState:
        """Advance one frame in place."""
        cfg = self.config
        state.frame += 1
        if state.node_count == 0:
            return state

        force = self.forces(state)
        velocities = (state.velocities + force) * cfg.damping
        np.clip(velocities, -cfg.max_velocity, cfg.max_velocity, out=velocities)

        if state.anchor is not None and 0 <= state.anchor < state.node_count:
            velocities[state.anchor] = 0.0

        state.velocities = velocities
        state.positions = state.positions + velocities
        return state

    # ------------------------------------------------------------------#
    # Pointer overrides
    # ------------------------------------------------------------------#
    def pin(self, state: SimulationState, index: int, x: float, y: float) -> None:
        """Hold node ``index`` at ``(x, y)`` until :meth:`release`."""
        state.anchor = index
        state.positions[index] = (x, y)
        state.velocities[index] = 0.0

    def hold(self, state: SimulationState, index: int) -> None:
        """Anchor node ``index`` where it currently is."""
        x, y = state.position(index)
        self.pin(state, index, x, y)

    def release(self, state: SimulationState) -> None:
        state.anchor = None

    def total_kinetic_energy(self, state: SimulationState) -> float:
        return float(0.5 * (state.velocities ** 2).sum())
