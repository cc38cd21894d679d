"""QPainter canvas that drives a BoardSession from a QTimer."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen
from PySide6.QtWidgets import QWidget

from case_board.board.render import EDGE_COLOR, EDGE_LABEL_COLOR, NodeSprite, RenderScene
from case_board.board.session import BoardSession
from case_board.config_loader import Settings
from case_board.graph.models import Graph, Node
from case_board.ui.styles import COLORS

logger = logging.getLogger(__name__)


class QtFrameTimer:
    """FrameTimer backed by a QTimer living on the UI thread."""

    def __init__(self, interval_ms: int, callback, parent=None):
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()


class BoardCanvas(QWidget):
    """Force graph canvas: pan with drag, zoom with wheel, drag and click nodes."""

    selection_changed = Signal(object)  # Node | None
    zoom_changed = Signal(int)  # zoom percent

    def __init__(self, settings: Settings | None = None, parent=None):
        super().__init__(parent)
        self.settings = settings or Settings()
        self._timer = QtFrameTimer(self.settings.render.frame_interval_ms, self._on_frame, self)
        self.session = BoardSession(
            self.settings,
            width=max(self.width(), 1),
            height=max(self.height(), 1),
            timer=self._timer,
            on_selection_changed=self.selection_changed.emit,
        )

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(400, 300)
        self.setCursor(Qt.OpenHandCursor)

        self._bg_color = QColor(COLORS["bg_canvas"])
        self._grid_color = QColor(COLORS["grid"])
        self._edge_pen = QPen(QColor(EDGE_COLOR), 1.5)
        self._edge_label_color = QColor(EDGE_LABEL_COLOR)
        self._edge_font = QFont("Consolas", 7)
        self._glyph_font = QFont("Segoe UI Emoji", 11)
        self._label_font = QFont("Segoe UI", 7, QFont.Bold)

    # ------------------------------------------------------------------#
    # Public API
    # ------------------------------------------------------------------#
    def set_graph(self, graph: Graph) -> None:
        self.session.resize(max(self.width(), 1), max(self.height(), 1))
        self.session.set_graph(graph)
        self.zoom_changed.emit(self.session.camera.zoom_percent)
        self.update()

    def merge_snapshot(self, graph: Graph) -> None:
        self.session.resize(max(self.width(), 1), max(self.height(), 1))
        self.session.merge_snapshot(graph)
        self.update()

    def select(self, node_id: Optional[str]) -> None:
        self.session.select(node_id)
        self.update()

    @property
    def selected_node(self) -> Optional[Node]:
        return self.session.selected_node

    def zoom_in(self) -> None:
        self.session.camera.zoom_in()
        self._after_zoom()

    def zoom_out(self) -> None:
        self.session.camera.zoom_out()
        self._after_zoom()

    def fit_to_view(self) -> None:
        self.session.fit_to_view()
        self._after_zoom()

    def reset_view(self) -> None:
        self.session.reset_view()
        self._after_zoom()

    def shutdown(self) -> None:
        """Stop the frame loop; called when the board is dismissed."""
        self.session.shutdown()
        logger.debug("Board frame loop stopped")

    def _after_zoom(self) -> None:
        self.zoom_changed.emit(self.session.camera.zoom_percent)
        self.update()

    def _on_frame(self) -> None:
        self.session.tick()
        self.update()

    # ------------------------------------------------------------------#
    # Qt events
    # ------------------------------------------------------------------#
    def showEvent(self, event):
        super().showEvent(event)
        self.session.start()

    def hideEvent(self, event):
        self.session.stop()
        super().hideEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.session.resize(self.width(), self.height())

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.session.pointer("down", pos.x(), pos.y())
        self.setCursor(Qt.ClosedHandCursor)
        self.update()
        event.accept()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.session.pointer("move", pos.x(), pos.y())
        if not (event.buttons() & Qt.LeftButton):
            hovered = self.session.controller.hovered_id is not None
            self.setCursor(Qt.PointingHandCursor if hovered else Qt.OpenHandCursor)
        self.update()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.session.pointer("up", pos.x(), pos.y())
        self.setCursor(Qt.OpenHandCursor)
        self.update()
        event.accept()

    def leaveEvent(self, event):
        self.session.pointer("leave", 0.0, 0.0)
        self.setCursor(Qt.OpenHandCursor)
        self.update()
        super().leaveEvent(event)

    def wheelEvent(self, event):
        pos = event.position()
        self.session.wheel(event.angleDelta().y(), pos.x(), pos.y())
        self._after_zoom()
        event.accept()

    # ------------------------------------------------------------------#
    # Painting
    # ------------------------------------------------------------------#
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), self._bg_color)
        self._draw_grid(painter)

        scene = self.session.scene()
        self._draw_edges(painter, scene)
        for sprite in scene.nodes:
            self._draw_node(painter, sprite)
        self._draw_zoom_indicator(painter, scene)
        painter.end()

    def _draw_grid(self, painter: QPainter) -> None:
        spacing = self.settings.render.grid_spacing
        painter.setPen(QPen(self._grid_color, 1))
        x = 0.0
        while x < self.width():
            painter.drawLine(QPointF(x, 0), QPointF(x, self.height()))
            x += spacing
        y = 0.0
        while y < self.height():
            painter.drawLine(QPointF(0, y), QPointF(self.width(), y))
            y += spacing

    def _draw_edges(self, painter: QPainter, scene: RenderScene) -> None:
        painter.setFont(self._edge_font)
        metrics = QFontMetricsF(self._edge_font)
        for edge in scene.edges:
            painter.setPen(self._edge_pen)
            painter.drawLine(QPointF(edge.x1, edge.y1), QPointF(edge.x2, edge.y2))
            if not edge.label:
                continue
            text = edge.label.upper()
            width = metrics.horizontalAdvance(text)
            rect = QRectF(edge.label_x - width / 2 - 2, edge.label_y - metrics.height(),
                          width + 4, metrics.height())
            painter.fillRect(rect, self._bg_color)
            painter.setPen(self._edge_label_color)
            painter.drawText(rect, Qt.AlignCenter, text)

    def _draw_node(self, painter: QPainter, sprite: NodeSprite) -> None:
        center = QPointF(sprite.x, sprite.y)
        color = QColor(sprite.color)

        # Glow
        if sprite.glow_radius > 0:
            glow = QColor(color)
            glow.setAlphaF(0.4 if sprite.selected else 0.2)
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(glow))
            painter.drawEllipse(center, sprite.glow_radius, sprite.glow_radius)

        # Body
        painter.setPen(QPen(QColor(sprite.ring_color), sprite.ring_width))
        painter.setBrush(QBrush(Qt.white))
        painter.drawEllipse(center, sprite.radius, sprite.radius)

        # Icon
        painter.setPen(color)
        painter.setFont(self._glyph_font)
        icon_rect = QRectF(sprite.x - sprite.radius, sprite.y - sprite.radius,
                           sprite.radius * 2, sprite.radius * 2)
        painter.drawText(icon_rect, Qt.AlignCenter, sprite.glyph)

        if sprite.show_label:
            self._draw_label(painter, sprite)

    def _draw_label(self, painter: QPainter, sprite: NodeSprite) -> None:
        text = sprite.label.upper()
        metrics = QFontMetricsF(self._label_font)
        width = metrics.horizontalAdvance(text) + 12
        height = metrics.height() + 6
        rect = QRectF(sprite.x - width / 2, sprite.y + sprite.radius + 6, width, height)

        painter.setPen(QPen(QColor(COLORS["border"]), 1))
        painter.setBrush(QBrush(QColor(255, 255, 255, 230)))
        painter.drawRoundedRect(rect, 3, 3)
        painter.setPen(QColor(COLORS["text_primary"]))
        painter.setFont(self._label_font)
        painter.drawText(rect, Qt.AlignCenter, text)

    def _draw_zoom_indicator(self, painter: QPainter, scene: RenderScene) -> None:
        painter.setPen(QColor(COLORS["text_muted"]))
        painter.setFont(QFont("Segoe UI", 8))
        painter.drawText(10, self.height() - 10, f"Zoom: {scene.zoom:.0%}")
