"""Stylesheet for the investigation board - light slate theme with indigo accent."""

COLORS = {
    # Primary accent
    "primary": "#6366f1",           # Indigo
    "primary_hover": "#4f46e5",
    "primary_light": "#e0e7ff",     # Badge background
    "primary_text": "#4338ca",

    # Backgrounds
    "bg_canvas": "#f8fafc",         # Board canvas
    "bg_panel": "#ffffff",
    "bg_header": "#ffffff",
    "bg_muted": "#f1f5f9",
    "grid": "#e2e8f0",

    # Text
    "text_primary": "#1e293b",
    "text_secondary": "#475569",
    "text_muted": "#94a3b8",

    # States
    "error": "#ef4444",
    "error_bg": "#fef2f2",

    # Borders
    "border": "#e2e8f0",
    "border_light": "#cbd5e1",
}

FONT_FAMILY = "'Barlow Condensed', 'Roboto Condensed', 'Arial Narrow', 'Segoe UI', system-ui, sans-serif"
FONT_FAMILY_MONO = "'JetBrains Mono', 'Consolas', monospace"
FONT_FAMILY_SERIF = "'Georgia', 'Times New Roman', serif"


def get_board_stylesheet() -> str:
    """Get stylesheet for the board header, placeholder and detail panel."""
    return f"""
    QWidget#boardHeader {{
        background-color: {COLORS['bg_header']};
        border-bottom: 1px solid {COLORS['border']};
    }}

    QLabel#boardTitle {{
        color: {COLORS['text_primary']};
        font-family: {FONT_FAMILY};
        font-size: 11pt;
        font-weight: bold;
        letter-spacing: 2px;
    }}

    QLabel#boardSubtitle, QLabel#zoomLabel, QLabel#boardStats {{
        color: {COLORS['text_muted']};
        font-family: {FONT_FAMILY_MONO};
        font-size: 8pt;
    }}

    QPushButton#headerButton, QPushButton#closeButton {{
        background-color: transparent;
        color: {COLORS['text_secondary']};
        border: none;
        border-radius: 4px;
        padding: 6px 8px;
    }}

    QPushButton#headerButton:hover {{
        background-color: {COLORS['bg_muted']};
    }}

    QPushButton#closeButton:hover {{
        background-color: {COLORS['error_bg']};
        color: {COLORS['error']};
    }}

    QWidget#placeholder {{
        background-color: {COLORS['bg_canvas']};
    }}

    QLabel#placeholderText {{
        color: {COLORS['text_muted']};
        font-size: 9pt;
        letter-spacing: 3px;
    }}

    QFrame#detailPanel {{
        background-color: {COLORS['bg_panel']};
        border-left: 1px solid {COLORS['border']};
    }}

    QLabel#detailKind, QLabel#sectionHeader {{
        color: {COLORS['text_muted']};
        font-size: 8pt;
        font-weight: bold;
        letter-spacing: 2px;
    }}

    QLabel#detailTitle {{
        color: {COLORS['text_primary']};
        font-family: {FONT_FAMILY};
        font-size: 16pt;
        font-weight: bold;
    }}

    QLabel#roleBadge {{
        background-color: {COLORS['primary_light']};
        color: {COLORS['primary_text']};
        border-radius: 3px;
        padding: 2px 6px;
        font-size: 8pt;
        font-weight: bold;
    }}

    QLabel#dossier {{
        color: {COLORS['text_secondary']};
        font-family: {FONT_FAMILY_SERIF};
        font-size: 10pt;
    }}

    QLabel#keyQuote {{
        background-color: {COLORS['bg_muted']};
        border-left: 2px solid {COLORS['primary']};
        color: {COLORS['text_primary']};
        font-style: italic;
        padding: 8px;
    }}

    QLabel#tagChip {{
        background-color: {COLORS['bg_panel']};
        border: 1px solid {COLORS['border']};
        border-radius: 3px;
        color: {COLORS['text_secondary']};
        padding: 2px 6px;
        font-size: 8pt;
    }}

    QProgressBar#impactBar {{
        background-color: {COLORS['bg_muted']};
        border: none;
        border-radius: 3px;
        max-height: 6px;
    }}

    QProgressBar#impactBar::chunk {{
        background-color: {COLORS['primary']};
        border-radius: 3px;
    }}

    QPushButton#deepDiveButton {{
        background-color: {COLORS['primary']};
        color: white;
        border: none;
        border-radius: 6px;
        padding: 10px;
        font-weight: bold;
        letter-spacing: 2px;
    }}

    QPushButton#deepDiveButton:hover {{
        background-color: {COLORS['primary_hover']};
    }}

    QLabel#deepDiveHint {{
        color: {COLORS['text_muted']};
        font-family: {FONT_FAMILY_MONO};
        font-size: 7pt;
    }}
    """
