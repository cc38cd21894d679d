"""Board session: the single owner of the live simulation.

The session ties the graph, the layout buffer, the camera and the
interaction controller to one frame timer. Everything runs on the UI
thread: the timer's tick and pointer handlers take turns writing into the
same numpy buffer, never concurrently.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from case_board.board.camera import Camera
from case_board.board.interaction import InteractionController, PointerEvent
from case_board.board.layout import LayoutEngine, SimulationState
from case_board.board.render import RenderScene, build_scene
from case_board.config_loader import Settings
from case_board.graph.merge import merge, validate
from case_board.graph.models import Graph, Node

logger = logging.getLogger(__name__)


class FrameTimer(Protocol):
    """Anything that calls ``BoardSession.tick`` once per animation frame."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...


class BoardSession:
    """Graph, simulation state and view state for one mounted board."""

    def __init__(
        self,
        settings: Settings | None = None,
        width: float = 800.0,
        height: float = 600.0,
        timer: Optional[FrameTimer] = None,
        on_selection_changed: Optional[Callable[[Optional[Node]], None]] = None,
    ):
        self.settings = settings or Settings()
        self.width = width
        self.height = height
        self.timer = timer
        self.on_selection_changed = on_selection_changed

        self.engine = LayoutEngine(self.settings.physics)
        self.camera = Camera(self.settings.camera)
        self.controller = InteractionController(
            self.camera,
            self.engine,
            self.settings.interaction,
            self.settings.render,
            on_selection_changed=self._selection_changed,
        )
        self.graph = Graph()
        self.state: SimulationState = self.engine.initialize(self.graph, width, height)

    # ------------------------------------------------------------------#
    # Properties
    # ------------------------------------------------------------------#
    @property
    def is_empty(self) -> bool:
        return self.graph.is_empty

    @property
    def is_running(self) -> bool:
        return self.timer is not None and self.timer.is_active()

    @property
    def selected_node(self) -> Optional[Node]:
        if self.controller.selected_id is None:
            return None
        return self.graph.get_node(self.controller.selected_id)

    # ------------------------------------------------------------------#
    # Graph lifecycle
    # ------------------------------------------------------------------#
    def set_graph(self, graph: Graph) -> None:
        """Replace the whole graph.

        The running loop is stopped before anything else changes; positions,
        velocities, pan, zoom and selection all start over.
        """
        self.stop()
        self.graph = validate(graph)
        self.state = self.engine.initialize(self.graph, self.width, self.height)
        self.camera.reset()
        self.controller.reset()
        logger.info(
            f"Board graph replaced: {len(self.graph.nodes)} nodes, {len(self.graph.edges)} edges"
        )
        if not self.graph.is_empty:
            self.start()

    def merge_snapshot(self, incoming: Graph) -> None:
        """Fold an incremental snapshot in; existing nodes keep their motion."""
        was_empty = self.graph.is_empty
        self.graph = merge(self.graph, incoming)
        self.engine.add_nodes(self.state, self.graph)
        logger.info(
            f"Board snapshot merged: now {len(self.graph.nodes)} nodes, {len(self.graph.edges)} edges"
        )
        if was_empty and not self.graph.is_empty:
            self.start()

    def clear(self) -> None:
        self.set_graph(Graph())

    # ------------------------------------------------------------------#
    # Frame loop
    # ------------------------------------------------------------------#
    def start(self) -> None:
        if self.timer is not None and not self.timer.is_active() and not self.is_empty:
            self.timer.start()

    def stop(self) -> None:
        if self.timer is not None and self.timer.is_active():
            self.timer.stop()

    def shutdown(self) -> None:
        """Stop the loop for good when the view goes away."""
        self.stop()
        self.controller.reset()

    def tick(self) -> None:
        """One animation frame."""
        self.controller.sync_anchor(self.state)
        self.engine.step(self.state)

    def resize(self, width: float, height: float) -> None:
        """Track the viewport; before the first frame the spiral follows its center."""
        self.width = width
        self.height = height
        self.engine.set_center(self.state, width, height)
        if self.state.frame == 0 and self.state.anchor is None:
            self.state.positions = self.engine.spiral_positions(
                0, self.state.node_count, self.state.center
            ).reshape(-1, 2)

    # ------------------------------------------------------------------#
    # View
    # ------------------------------------------------------------------#
    def pointer(self, kind: str, x: float, y: float) -> None:
        self.controller.handle(PointerEvent(kind, x, y), self.state, self.graph)

    def wheel(self, delta: float, x: float, y: float) -> float:
        return self.controller.wheel(delta, x, y)

    def select(self, node_id: Optional[str]) -> None:
        self.controller.select(node_id)

    def fit_to_view(self) -> None:
        points = [self.state.position(i) for i in range(self.state.node_count)]
        self.camera.fit(points, self.width, self.height)

    def reset_view(self) -> None:
        self.camera.reset()

    def scene(self) -> RenderScene:
        return build_scene(
            self.graph,
            self.state,
            self.camera,
            selected_id=self.controller.selected_id,
            hovered_id=self.controller.hovered_id,
            dragged_id=self.controller.dragged_id,
            config=self.settings.render,
        )

    def _selection_changed(self, node_id: Optional[str]) -> None:
        if self.on_selection_changed:
            self.on_selection_changed(self.graph.get_node(node_id) if node_id else None)
