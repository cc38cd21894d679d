"""Read-only dossier for the selected board node."""

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from case_board.graph.models import Node, NodeMetadata


class SectionHeader(QLabel):
    """Small caps section caption."""

    def __init__(self, text: str, parent=None):
        super().__init__(text.upper(), parent)
        self.setObjectName("sectionHeader")


class DetailPanel(QFrame):
    """Floating panel showing a node's metadata with a deep dive action."""

    deep_dive_requested = Signal(str)  # query text for the case chat
    close_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("detailPanel")
        self.setFixedWidth(320)
        self._node: Optional[Node] = None
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        """Set up UI components."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Header: kind, title, role badge, close
        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(24, 24, 24, 16)

        title_col = QVBoxLayout()
        self.kind_label = QLabel()
        self.kind_label.setObjectName("detailKind")
        title_col.addWidget(self.kind_label)

        self.title_label = QLabel()
        self.title_label.setObjectName("detailTitle")
        self.title_label.setWordWrap(True)
        title_col.addWidget(self.title_label)

        self.role_badge = QLabel()
        self.role_badge.setObjectName("roleBadge")
        title_col.addWidget(self.role_badge, alignment=Qt.AlignLeft)
        header_layout.addLayout(title_col, stretch=1)

        close_btn = QPushButton("✕")
        close_btn.setObjectName("headerButton")
        close_btn.setMaximumWidth(30)
        close_btn.clicked.connect(self.close_requested.emit)
        header_layout.addWidget(close_btn, alignment=Qt.AlignTop)
        layout.addWidget(header)

        # Scrollable body
        body = QWidget()
        self.body_layout = QVBoxLayout(body)
        self.body_layout.setContentsMargins(24, 16, 24, 16)
        self.body_layout.setSpacing(18)

        self.body_layout.addWidget(SectionHeader("Dossier"))
        self.description_label = QLabel()
        self.description_label.setObjectName("dossier")
        self.description_label.setWordWrap(True)
        self.body_layout.addWidget(self.description_label)

        # Impact score
        self.impact_box = QWidget()
        impact_layout = QVBoxLayout(self.impact_box)
        impact_layout.setContentsMargins(0, 0, 0, 0)
        impact_header = QHBoxLayout()
        impact_header.addWidget(SectionHeader("Case Relevance"))
        impact_header.addStretch()
        self.impact_value = QLabel()
        self.impact_value.setObjectName("sectionHeader")
        impact_header.addWidget(self.impact_value)
        impact_layout.addLayout(impact_header)
        self.impact_bar = QProgressBar()
        self.impact_bar.setObjectName("impactBar")
        self.impact_bar.setRange(0, 100)
        self.impact_bar.setTextVisible(False)
        impact_layout.addWidget(self.impact_bar)
        self.body_layout.addWidget(self.impact_box)

        # Key quote
        self.quote_label = QLabel()
        self.quote_label.setObjectName("keyQuote")
        self.quote_label.setWordWrap(True)
        self.body_layout.addWidget(self.quote_label)

        # Tags
        self.tags_box = QWidget()
        tags_layout = QVBoxLayout(self.tags_box)
        tags_layout.setContentsMargins(0, 0, 0, 0)
        tags_layout.addWidget(SectionHeader("Tags"))
        self.tags_row = QHBoxLayout()
        self.tags_row.setSpacing(6)
        tags_layout.addLayout(self.tags_row)
        self.body_layout.addWidget(self.tags_box)

        self.body_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidget(body)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.NoFrame)
        layout.addWidget(scroll, stretch=1)

        # Footer: deep dive
        footer = QWidget()
        footer_layout = QVBoxLayout(footer)
        footer_layout.setContentsMargins(24, 16, 24, 24)
        self.deep_dive_btn = QPushButton("💬  DEEP DIVE QUERY")
        self.deep_dive_btn.setObjectName("deepDiveButton")
        self.deep_dive_btn.setCursor(Qt.PointingHandCursor)
        self.deep_dive_btn.clicked.connect(self._on_deep_dive)
        footer_layout.addWidget(self.deep_dive_btn)
        hint = QLabel("Sends entity context to Case Chat")
        hint.setObjectName("deepDiveHint")
        hint.setAlignment(Qt.AlignCenter)
        footer_layout.addWidget(hint)
        layout.addWidget(footer)

    # ------------------------------------------------------------------#
    # Public API
    # ------------------------------------------------------------------#
    @property
    def node(self) -> Optional[Node]:
        return self._node

    def show_node(self, node: Optional[Node]) -> None:
        """Populate the panel for ``node``; hide it for None."""
        self._node = node
        if node is None:
            self.hide()
            return

        meta = node.metadata
        self.kind_label.setText(node.kind.upper())
        self.title_label.setText(node.label)
        self.description_label.setText(node.description or "No description available.")

        if meta.is_empty():
            for widget in (self.role_badge, self.impact_box, self.quote_label, self.tags_box):
                widget.hide()
        else:
            self._show_metadata(meta)
        self.show()
        self.raise_()

    def _show_metadata(self, meta: NodeMetadata) -> None:
        self.role_badge.setText((meta.role or "").upper())
        self.role_badge.setVisible(bool(meta.role))

        if meta.impact_score is not None:
            self.impact_value.setText(f"{meta.impact_score:g}/10")
            self.impact_bar.setValue(round(meta.impact_score * 10))
            self.impact_box.show()
        else:
            self.impact_box.hide()

        self.quote_label.setText(f"❝ {meta.key_quote}" if meta.key_quote else "")
        self.quote_label.setVisible(bool(meta.key_quote))

        self._set_tags(meta.tags)

    def _set_tags(self, tags: list[str]) -> None:
        while self.tags_row.count():
            item = self.tags_row.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        for tag in tags:
            chip = QLabel(f"🏷 {tag}")
            chip.setObjectName("tagChip")
            self.tags_row.addWidget(chip)
        self.tags_row.addStretch()
        self.tags_box.setVisible(bool(tags))

    def _on_deep_dive(self) -> None:
        if self._node is not None:
            self.deep_dive_requested.emit(self._node.deep_dive_query())
