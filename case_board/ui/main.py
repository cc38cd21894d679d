"""Standalone Investigation Board viewer entry point."""

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

from case_board.config_loader import get_settings
from case_board.graph.schema import GraphPayloadError
from case_board.graph.snapshot import load_snapshot
from case_board.ui.investigation_board import InvestigationBoard

logger = logging.getLogger(__name__)


def configure_logging(level: str, log_dir: str | Path) -> None:
    """Log to stderr and to ``<log_dir>/case_board.log``."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_dir / "case_board.log", encoding="utf-8"),
        ],
    )


def main(argv: list[str] | None = None):
    """Main entry point for the desktop viewer."""
    parser = argparse.ArgumentParser(description="Investigation Board - interactive case entity graph")
    parser.add_argument("snapshot", nargs="?", help="Graph snapshot (.json, or .jsonl of incremental snapshots)")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    args = parser.parse_args(argv)

    settings = get_settings(args.config)
    configure_logging(settings.logging.level, settings.paths.logs)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Investigation Board")

    board = InvestigationBoard(
        settings,
        on_node_selected=lambda text: logger.info(f"Deep dive requested: {text}"),
        on_close=app.quit,
    )
    board.resize(1200, 800)
    board.setWindowTitle("Investigation Board")
    board.show()

    if args.snapshot:
        try:
            board.set_graph(load_snapshot(args.snapshot))
        except (FileNotFoundError, GraphPayloadError) as e:
            logger.error(f"Could not load snapshot: {e}")
            QMessageBox.critical(board, "Snapshot Error", str(e))

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
