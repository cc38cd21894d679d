"""Screen-space scene for the board.

Everything here is already camera-transformed: the painter only draws what
it is given. Node circles keep a fixed pixel radius at every zoom level so
icons stay legible; only their centers move with the camera.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from case_board.board.camera import Camera
from case_board.board.layout import SimulationState
from case_board.config_loader import RenderConfig
from case_board.graph.models import Graph


# Color scheme for different node kinds
NODE_COLORS = {
    "case": "#334155",       # Slate
    "person": "#0ea5e9",     # Sky
    "evidence": "#ec4899",   # Pink
    "location": "#eab308",   # Yellow
    "event": "#ef4444",      # Red
    "statute": "#a07db8",    # Muted purple
}
DEFAULT_NODE_COLOR = "#64748b"

NODE_GLYPHS = {
    "case": "⚖",
    "person": "👤",
    "evidence": "📄",
    "location": "📍",
    "event": "⚠",
    "statute": "§",
}

EDGE_COLOR = "#cbd5e1"
EDGE_LABEL_COLOR = "#94a3b8"
IDLE_RING_COLOR = "#cbd5e1"


@dataclass
class EdgeSprite:
    x1: float
    y1: float
    x2: float
    y2: float
    label: str
    label_x: float
    label_y: float


@dataclass
class NodeSprite:
    node_id: str
    x: float
    y: float
    radius: float
    color: str
    glyph: str
    label: str
    show_label: bool
    selected: bool = False
    hovered: bool = False
    dragging: bool = False
    glow_radius: float = 0.0

    @property
    def ring_color(self) -> str:
        return self.color if self.selected else IDLE_RING_COLOR

    @property
    def ring_width(self) -> float:
        return 4.0 if self.selected else 2.0


@dataclass
class RenderScene:
    edges: list[EdgeSprite] = field(default_factory=list)
    nodes: list[NodeSprite] = field(default_factory=list)
    zoom: float = 1.0
    pan: tuple[float, float] = (0.0, 0.0)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def node_color(kind: str) -> str:
    return NODE_COLORS.get(kind, DEFAULT_NODE_COLOR)


def label_visible(zoom: float, selected: bool, hovered: bool, config: RenderConfig) -> bool:
    """Labels show for the selected or hovered node, or for all nodes when zoomed in."""
    return selected or hovered or zoom > config.label_zoom_threshold


def build_scene(
    graph: Graph,
    state: SimulationState,
    camera: Camera,
    selected_id: Optional[str] = None,
    hovered_id: Optional[str] = None,
    dragged_id: Optional[str] = None,
    config: RenderConfig | None = None,
) -> RenderScene:
    """Transform the live simulation into screen-space sprites."""
    config = config or RenderConfig()
    scene = RenderScene(zoom=camera.zoom, pan=(camera.pan_x, camera.pan_y))
    count = min(len(graph.nodes), state.node_count)
    if count == 0:
        return scene

    screen = [camera.to_screen(*state.position(i)) for i in range(count)]
    index = {graph.nodes[i].id: i for i in range(count)}

    for edge in graph.edges:
        si = index.get(edge.source)
        ti = index.get(edge.target)
        if si is None or ti is None:
            continue
        (x1, y1), (x2, y2) = screen[si], screen[ti]
        scene.edges.append(
            EdgeSprite(
                x1=x1,
                y1=y1,
                x2=x2,
                y2=y2,
                label=edge.relation,
                label_x=(x1 + x2) / 2,
                label_y=(y1 + y2) / 2 - config.edge_label_offset,
            )
        )

    on_top: list[NodeSprite] = []
    for i in range(count):
        node = graph.nodes[i]
        selected = node.id == selected_id
        hovered = node.id == hovered_id
        dragging = node.id == dragged_id
        x, y = screen[i]
        sprite = NodeSprite(
            node_id=node.id,
            x=x,
            y=y,
            radius=config.node_radius * (config.selected_scale if selected else 1.0),
            color=node_color(node.kind),
            glyph=NODE_GLYPHS.get(node.kind, NODE_GLYPHS["evidence"]),
            label=node.label,
            show_label=label_visible(camera.zoom, selected, hovered, config),
            selected=selected,
            hovered=hovered,
            dragging=dragging,
            glow_radius=config.glow_radius if (selected or hovered) else 0.0,
        )
        if selected or dragging:
            on_top.append(sprite)
        else:
            scene.nodes.append(sprite)

    # Selected and dragged nodes paint last
    scene.nodes.extend(sorted(on_top, key=lambda s: s.selected))
    return scene
