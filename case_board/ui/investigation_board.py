"""Investigation Board view: header, force graph canvas and detail panel."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from case_board.config_loader import Settings, get_settings
from case_board.graph.models import Graph, Node
from case_board.graph.schema import parse_graph
from case_board.ui.canvas import BoardCanvas
from case_board.ui.detail_panel import DetailPanel
from case_board.ui.styles import get_board_stylesheet

logger = logging.getLogger(__name__)


def format_stats(graph: Graph) -> str:
    """One-line summary like ``12 nodes | 15 edges | 3 events | 5 persons``."""
    parts = [f"{count} {kind}s" for kind, count in sorted(graph.counts_by_kind().items())]
    return " | ".join([f"{len(graph)} nodes", f"{len(graph.edges)} edges", *parts])


class InvestigationBoard(QWidget):
    """Interactive entity graph for a case.

    Hosts get the analyst's deep dive requests through
    ``deep_dive_requested`` (plain text: label and description) and learn
    that the board was dismissed through ``closed``.
    """

    deep_dive_requested = Signal(str)
    closed = Signal()

    def __init__(
        self,
        settings: Settings | None = None,
        on_node_selected: Optional[Callable[[str], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.settings = settings or get_settings()
        self.setStyleSheet(get_board_stylesheet())

        self._setup_ui()

        if on_node_selected is not None:
            self.deep_dive_requested.connect(on_node_selected)
        if on_close is not None:
            self.closed.connect(on_close)

        self._refresh_header()

    def _setup_ui(self):
        """Set up UI components."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        layout.addWidget(self._build_header())

        self.stack = QStackedWidget()

        # Empty state
        placeholder = QWidget()
        placeholder.setObjectName("placeholder")
        placeholder_layout = QVBoxLayout(placeholder)
        placeholder_layout.setAlignment(Qt.AlignCenter)
        icon = QLabel("💼")
        icon.setAlignment(Qt.AlignCenter)
        icon.setStyleSheet("font-size: 32pt; color: #cbd5e1;")
        placeholder_layout.addWidget(icon)
        text = QLabel("NO MAP DATA AVAILABLE")
        text.setObjectName("placeholderText")
        text.setAlignment(Qt.AlignCenter)
        placeholder_layout.addWidget(text)
        placeholder_close = QPushButton("Close")
        placeholder_close.setObjectName("headerButton")
        placeholder_close.clicked.connect(self.close_board)
        placeholder_layout.addWidget(placeholder_close, alignment=Qt.AlignCenter)
        self.stack.addWidget(placeholder)

        # Board area: canvas with the detail panel floating on the right
        self.board_area = QWidget()
        board_layout = QVBoxLayout(self.board_area)
        board_layout.setContentsMargins(0, 0, 0, 0)
        self.canvas = BoardCanvas(self.settings)
        self.canvas.selection_changed.connect(self._on_selection_changed)
        self.canvas.zoom_changed.connect(self._on_zoom_changed)
        board_layout.addWidget(self.canvas)

        self.detail_panel = DetailPanel(self.board_area)
        self.detail_panel.deep_dive_requested.connect(self.deep_dive_requested.emit)
        self.detail_panel.close_requested.connect(lambda: self.canvas.select(None))
        self.board_area.installEventFilter(self)
        self.stack.addWidget(self.board_area)

        layout.addWidget(self.stack, stretch=1)

        # Stats bar
        self.stats_label = QLabel()
        self.stats_label.setObjectName("boardStats")
        self.stats_label.setContentsMargins(12, 6, 12, 6)
        layout.addWidget(self.stats_label)

    def _build_header(self) -> QWidget:
        header = QFrame()
        header.setObjectName("boardHeader")
        header.setFixedHeight(64)
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(24, 8, 24, 8)

        title_col = QVBoxLayout()
        title = QLabel("INVESTIGATION BOARD")
        title.setObjectName("boardTitle")
        title_col.addWidget(title)
        self.subtitle_label = QLabel()
        self.subtitle_label.setObjectName("boardSubtitle")
        title_col.addWidget(self.subtitle_label)
        header_layout.addLayout(title_col)
        header_layout.addStretch()

        def header_button(text: str, tooltip: str, slot) -> QPushButton:
            btn = QPushButton(text)
            btn.setObjectName("headerButton")
            btn.setToolTip(tooltip)
            btn.clicked.connect(slot)
            header_layout.addWidget(btn)
            return btn

        header_button("−", "Zoom out", self._zoom_out)
        self.zoom_label = QLabel()
        self.zoom_label.setObjectName("zoomLabel")
        self.zoom_label.setFixedWidth(48)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        header_layout.addWidget(self.zoom_label)
        header_button("+", "Zoom in", self._zoom_in)
        header_button("⤢", "Fit graph to view", self._fit)
        header_button("⟲", "Reset view", self._reset_view)

        separator = QFrame()
        separator.setFrameShape(QFrame.VLine)
        separator.setStyleSheet("color: #e2e8f0;")
        header_layout.addWidget(separator)

        close_btn = header_button("✕", "Close board", self.close_board)
        close_btn.setObjectName("closeButton")
        return header

    # ------------------------------------------------------------------#
    # Public API
    # ------------------------------------------------------------------#
    @property
    def graph(self) -> Graph:
        return self.canvas.session.graph

    @property
    def is_running(self) -> bool:
        return self.canvas.session.is_running

    def set_graph(self, snapshot: Graph | dict[str, Any]) -> None:
        """Replace the board contents with a complete snapshot."""
        graph = parse_graph(snapshot)
        self.detail_panel.show_node(None)
        if not graph.is_empty:
            self._show_board_page()
        self.canvas.set_graph(graph)
        self._refresh_header()

    def merge_snapshot(self, snapshot: Graph | dict[str, Any]) -> None:
        """Add an incremental snapshot to what is already on the board."""
        graph = parse_graph(snapshot)
        if not graph.is_empty:
            self._show_board_page()
        self.canvas.merge_snapshot(graph)
        self._refresh_header()

    def close_board(self) -> None:
        self.canvas.shutdown()
        self.detail_panel.show_node(None)
        self.closed.emit()

    # ------------------------------------------------------------------#
    # Internals
    # ------------------------------------------------------------------#
    def _refresh_header(self) -> None:
        graph = self.graph
        self.subtitle_label.setText(f"Dynamic Force Graph ({len(graph)} Entities)")
        self.stats_label.setText(format_stats(graph))
        self.zoom_label.setText(f"{self.canvas.session.camera.zoom_percent}%")
        self.stack.setCurrentIndex(0 if graph.is_empty else 1)

    def _show_board_page(self) -> None:
        """Lay the canvas out at its real size before a graph is spiralled onto it."""
        if self.stack.currentWidget() is self.board_area:
            return
        self.stack.setCurrentWidget(self.board_area)
        self.board_area.resize(self.stack.size())
        self.board_area.layout().activate()

    def _on_selection_changed(self, node: Optional[Node]) -> None:
        self.detail_panel.show_node(node)
        self._place_detail_panel()

    def _on_zoom_changed(self, percent: int) -> None:
        self.zoom_label.setText(f"{percent}%")

    def _zoom_in(self) -> None:
        self.canvas.zoom_in()

    def _zoom_out(self) -> None:
        self.canvas.zoom_out()

    def _fit(self) -> None:
        self.canvas.fit_to_view()

    def _reset_view(self) -> None:
        self.canvas.reset_view()

    def _place_detail_panel(self) -> None:
        area = self.board_area.rect()
        width = self.detail_panel.width()
        self.detail_panel.setGeometry(area.right() - width + 1, 0, width, area.height())

    def eventFilter(self, watched, event):
        if watched is self.board_area and event.type() == QEvent.Resize:
            self._place_detail_panel()
        return super().eventFilter(watched, event)

    def closeEvent(self, event):
        self.canvas.shutdown()
        super().closeEvent(event)
