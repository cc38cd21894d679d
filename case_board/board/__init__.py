"""Investigation board core: layout, camera, interaction, scene and session."""

from case_board.board.camera import Camera
from case_board.board.interaction import (
    DraggingNode,
    Idle,
    InteractionController,
    PanningCanvas,
    PointerEvent,
)
from case_board.board.layout import LayoutEngine, SimulationState
from case_board.board.render import RenderScene, build_scene
from case_board.board.session import BoardSession, FrameTimer

__all__ = [
    "Camera",
    "DraggingNode",
    "Idle",
    "InteractionController",
    "PanningCanvas",
    "PointerEvent",
    "LayoutEngine",
    "SimulationState",
    "RenderScene",
    "build_scene",
    "BoardSession",
    "FrameTimer",
]
