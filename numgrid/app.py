"""Application entry point and setup for the Number Grid game."""

import logging
import os
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from numgrid.core.engine import RoundEngine
from numgrid.core.progress import ProgressStore
from numgrid.core.rules import load_rules
from numgrid.ui.main_window import MainWindow
from numgrid.ui.round_controller import RoundController


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def start_level_from_env() -> int:
    raw = os.environ.get("NUMGRID_START_LEVEL", "1")
    try:
        return max(1, int(raw))
    except ValueError:
        logging.warning("Ignoring invalid NUMGRID_START_LEVEL=%r", raw)
        return 1


def run() -> None:
    """Initialize the application, load rules and progress, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Number Grid")
    app.setApplicationDisplayName("Number Grid")

    rules = load_rules()
    logging.info("Loaded rules: %s mode, %s cells at level 1", rules.mode, rules.base_size)
    progress_store = ProgressStore()

    controller = RoundController(RoundEngine(rules), progress_store, start_level=start_level_from_env())
    window = MainWindow(controller=controller, progress_store=progress_store)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(900, geometry.width()), min(900, geometry.height()))
    controller.start_level()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
