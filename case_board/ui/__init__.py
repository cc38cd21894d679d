"""Desktop UI built with PySide6."""

from case_board.ui.investigation_board import InvestigationBoard
from case_board.ui.main import main

__all__ = ["main", "InvestigationBoard"]
