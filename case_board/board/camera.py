"""Camera transform between simulation space and screen space.

``screen = simulation * zoom + pan``. Pan is kept in screen pixels, so it is
never scaled by zoom, and zooming never touches simulation coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from case_board.config_loader import CameraConfig


@dataclass
class Camera:
    """Pan/zoom state for one board view."""

    config: CameraConfig = field(default_factory=CameraConfig)
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = field(default=1.0, init=False)

    def __post_init__(self):
        self.zoom = self.clamp_zoom(self.config.initial_zoom)

    # ------------------------------------------------------------------#
    # Transforms
    # ------------------------------------------------------------------#
    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return x * self.zoom + self.pan_x, y * self.zoom + self.pan_y

    def to_simulation(self, sx: float, sy: float) -> tuple[float, float]:
        """Inverse of :meth:`to_screen`."""
        return (sx - self.pan_x) / self.zoom, (sy - self.pan_y) / self.zoom

    # ------------------------------------------------------------------#
    # Zoom
    # ------------------------------------------------------------------#
    def clamp_zoom(self, value: float) -> float:
        return max(self.config.min_zoom, min(self.config.max_zoom, value))

    def set_zoom(self, value: float) -> float:
        """Set zoom, snapping out-of-range requests to the nearest bound."""
        self.zoom = self.clamp_zoom(value)
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self.zoom + self.config.zoom_step)

    def zoom_out(self) -> float:
        return self.set_zoom(self.zoom - self.config.zoom_step)

    def zoom_at(self, factor: float, sx: float, sy: float) -> float:
        """Zoom by ``factor`` keeping the point under ``(sx, sy)`` fixed."""
        graph_x, graph_y = self.to_simulation(sx, sy)
        new_zoom = self.clamp_zoom(self.zoom * factor)
        if new_zoom != self.zoom:
            self.zoom = new_zoom
            self.pan_x = sx - graph_x * self.zoom
            self.pan_y = sy - graph_y * self.zoom
        return self.zoom

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)

    # ------------------------------------------------------------------#
    # Pan
    # ------------------------------------------------------------------#
    def pan_by(self, dx: float, dy: float) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def reset(self) -> None:
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.zoom = self.clamp_zoom(self.config.initial_zoom)

    def fit(self, points: Iterable[tuple[float, float]], width: float, height: float) -> None:
        """Frame every point in the viewport, never zooming in past 100%."""
        points = list(points)
        if not points or width <= 0 or height <= 0:
            return

        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)

        margin = self.config.fit_margin
        graph_width = max_x - min_x + 2 * margin
        graph_height = max_y - min_y + 2 * margin
        self.zoom = self.clamp_zoom(min(width / graph_width, height / graph_height, 1.0))

        center_x = (min_x + max_x) / 2
        center_y = (min_y + max_y) / 2
        self.pan_x = width / 2 - center_x * self.zoom
        self.pan_y = height / 2 - center_y * self.zoom
