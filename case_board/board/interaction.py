"""Pointer interaction state machine for the board.

States::

    Idle --down on canvas--> PanningCanvas --up/leave--> Idle
    Idle --down on node----> DraggingNode  --up/leave--> Idle

A down+up pair whose travel stays under ``click_threshold`` is a click:
on a node it selects the node, on empty canvas it clears the selection.
Longer gestures are pans or drags and leave the selection alone.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Literal, Optional, Union

import numpy as np

from case_board.board.camera import Camera
from case_board.board.layout import LayoutEngine, SimulationState
from case_board.config_loader import InteractionConfig, RenderConfig
from case_board.graph.models import Graph

logger = logging.getLogger(__name__)

PointerKind = Literal["down", "move", "up", "leave"]


@dataclass(frozen=True)
class PointerEvent:
    """Pointer event in widget (screen) coordinates."""

    kind: PointerKind
    x: float
    y: float


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PanningCanvas:
    origin: tuple[float, float]
    last: tuple[float, float]
    travelled: float = 0.0


@dataclass(frozen=True)
class DraggingNode:
    index: int
    node_id: str
    origin: tuple[float, float]
    pointer: tuple[float, float]
    travelled: float = 0.0


InteractionState = Union[Idle, PanningCanvas, DraggingNode]


def _travel(origin: tuple[float, float], x: float, y: float, previous: float) -> float:
    return max(previous, math.hypot(x - origin[0], y - origin[1]))


class InteractionController:
    """Turns pointer events into pan, zoom, drag and selection."""

    def __init__(
        self,
        camera: Camera,
        engine: LayoutEngine,
        config: InteractionConfig | None = None,
        render: RenderConfig | None = None,
        on_selection_changed: Optional[Callable[[Optional[str]], None]] = None,
    ):
        self.camera = camera
        self.engine = engine
        self.config = config or InteractionConfig()
        self.render = render or RenderConfig()
        self.on_selection_changed = on_selection_changed

        self.state: InteractionState = Idle()
        self.selected_id: Optional[str] = None
        self.hovered_id: Optional[str] = None

    # ------------------------------------------------------------------#
    # Queries
    # ------------------------------------------------------------------#
    @property
    def dragged_id(self) -> Optional[str]:
        return self.state.node_id if isinstance(self.state, DraggingNode) else None

    @property
    def is_panning(self) -> bool:
        return isinstance(self.state, PanningCanvas)

    def hit_test(self, state: SimulationState, graph: Graph, sx: float, sy: float) -> Optional[int]:
        """Index of the topmost node under a screen point.

        Node circles have a fixed screen radius, so the test runs in screen
        space. The selected node is drawn last and therefore wins ties;
        otherwise later nodes sit on top of earlier ones.
        """
        if state.node_count == 0:
            return None

        screen = state.positions * self.camera.zoom + (self.camera.pan_x, self.camera.pan_y)
        dist_sq = ((screen - (sx, sy)) ** 2).sum(axis=1)
        radius = np.full(state.node_count, self.render.node_radius + self.config.hit_padding)

        selected_index = self._index_of(graph, self.selected_id)
        if selected_index is not None:
            radius[selected_index] = (
                self.render.node_radius * self.render.selected_scale + self.config.hit_padding
            )
            if dist_sq[selected_index] <= radius[selected_index] ** 2:
                return selected_index

        hits = np.flatnonzero(dist_sq <= radius ** 2)
        if hits.size == 0:
            return None
        return int(hits[-1])

    @staticmethod
    def _index_of(graph: Graph, node_id: Optional[str]) -> Optional[int]:
        if node_id is None:
            return None
        for i, node in enumerate(graph.nodes):
            if node.id == node_id:
                return i
        return None

    # ------------------------------------------------------------------#
    # Dispatch
    # ------------------------------------------------------------------#
    def handle(self, event: PointerEvent, sim: SimulationState, graph: Graph) -> InteractionState:
        """Apply one pointer event and return the new interaction state."""
        if event.kind == "down":
            self._on_down(event, sim, graph)
        elif event.kind == "move":
            self._on_move(event, sim, graph)
        elif event.kind == "up":
            self._on_up(event, sim, graph)
        elif event.kind == "leave":
            self._end_gesture(sim)
            self._set_hover(None)
        return self.state

    def _on_down(self, event: PointerEvent, sim: SimulationState, graph: Graph) -> None:
        if not isinstance(self.state, Idle):
            self._end_gesture(sim)

        point = (event.x, event.y)
        index = self.hit_test(sim, graph, event.x, event.y)
        if index is None:
            self.state = PanningCanvas(origin=point, last=point)
            return

        # Grabbing a node never starts a canvas pan
        self.state = DraggingNode(
            index=index, node_id=graph.nodes[index].id, origin=point, pointer=point
        )
        self.engine.hold(sim, index)

    def _on_move(self, event: PointerEvent, sim: SimulationState, graph: Graph) -> None:
        state = self.state
        if isinstance(state, PanningCanvas):
            self.camera.pan_by(event.x - state.last[0], event.y - state.last[1])
            self.state = replace(
                state,
                last=(event.x, event.y),
                travelled=_travel(state.origin, event.x, event.y, state.travelled),
            )
        elif isinstance(state, DraggingNode):
            self.state = replace(
                state,
                pointer=(event.x, event.y),
                travelled=_travel(state.origin, event.x, event.y, state.travelled),
            )
            self.sync_anchor(sim)
        else:
            index = self.hit_test(sim, graph, event.x, event.y)
            self._set_hover(graph.nodes[index].id if index is not None else None)

    def _on_up(self, event: PointerEvent, sim: SimulationState, graph: Graph) -> None:
        state = self.state
        if isinstance(state, (PanningCanvas, DraggingNode)):
            travelled = _travel(state.origin, event.x, event.y, state.travelled)
            is_click = travelled < self.config.click_threshold
            if is_click and isinstance(state, DraggingNode):
                self.select(state.node_id)
            elif is_click:
                self.select(None)
        self._end_gesture(sim)

    def _end_gesture(self, sim: SimulationState) -> None:
        if isinstance(self.state, DraggingNode):
            self.engine.release(sim)
        self.state = Idle()

    def sync_anchor(self, sim: SimulationState) -> None:
        """Write the pointer's simulation position onto the dragged node."""
        state = self.state
        if not isinstance(state, DraggingNode) or state.index >= sim.node_count:
            return
        x, y = self.camera.to_simulation(*state.pointer)
        self.engine.pin(sim, state.index, x, y)

    def wheel(self, delta: float, sx: float, sy: float) -> float:
        """Zoom around the cursor; positive delta zooms in."""
        if delta == 0:
            return self.camera.zoom
        factor = self.camera.config.wheel_factor
        return self.camera.zoom_at(factor if delta > 0 else 1.0 / factor, sx, sy)

    # ------------------------------------------------------------------#
    # Selection
    # ------------------------------------------------------------------#
    def select(self, node_id: Optional[str]) -> None:
        if node_id == self.selected_id:
            return
        self.selected_id = node_id
        logger.debug(f"Selection changed to {node_id!r}")
        if self.on_selection_changed:
            self.on_selection_changed(node_id)

    def _set_hover(self, node_id: Optional[str]) -> None:
        self.hovered_id = node_id

    def reset(self) -> None:
        """Back to Idle with no selection or hover (graph swap)."""
        self.state = Idle()
        self.hovered_id = None
        self.select(None)
