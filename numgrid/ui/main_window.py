from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from numgrid.core.progress import ProgressStore, level_key
from numgrid.core.round import ClickOutcome, Round, RoundEnded
from numgrid.core.rules import COUNTDOWN
from numgrid.ui.colors import GridColors, timer_color
from numgrid.ui.grid_widget import NumberGridWidget
from numgrid.ui.models import format_seconds
from numgrid.ui.overlays import RoundEndOverlay
from numgrid.ui.round_controller import RoundController


class MainWindow(QMainWindow):
    """Single-screen game window: HUD on top, number grid below.

    All game decisions live in :class:`RoundController`; the window only
    forwards activations and renders whatever the controller reports.
    """

    def __init__(self, controller: RoundController, progress_store: ProgressStore) -> None:
        super().__init__()
        self._controller = controller
        self._progress_store = progress_store
        self._round: Optional[Round] = None

        self.setWindowTitle("Number Grid")
        self._build_ui()

        controller.round_started.connect(self._on_round_started)
        controller.click_resolved.connect(self._on_click_resolved)
        controller.time_changed.connect(self._on_time_changed)
        controller.grid_reshuffled.connect(lambda _changed: self._grid.refresh())
        controller.round_ended.connect(self._on_round_ended)

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("root")
        root.setStyleSheet(
            f"""
            QWidget#root {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {GridColors.BG_TOP}, stop:1 {GridColors.BG_BOTTOM});
            }}
            QLabel {{ color: {GridColors.TEXT_PRIMARY}; font-size: 15px; font-weight: 600; }}
            """
        )

        self._level_label = QLabel("")
        self._level_label.setStyleSheet(f"color: {GridColors.PRIMARY_DARK}; font-size: 20px; font-weight: 900;")
        self._timer_label = QLabel("")
        self._timer_label.setAlignment(Qt.AlignCenter)
        self._result_label = QLabel("")
        self._best_label = QLabel("")
        self._best_label.setStyleSheet(f"color: {GridColors.TEXT_SECONDARY}; font-size: 13px;")
        self._hint_label = QLabel("Click 1 to start. Arrow keys + Enter also work.")
        self._hint_label.setStyleSheet(f"color: {GridColors.TEXT_MUTED}; font-size: 13px;")

        self._restart_btn = QPushButton("Restart")
        self._restart_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._restart_btn.setStyleSheet(
            f"""
            QPushButton {{
                background: {GridColors.PRIMARY};
                color: white;
                padding: 8px 18px;
                border: none;
                border-radius: 12px;
                font-weight: 700;
            }}
            QPushButton:disabled {{ background: {GridColors.TEXT_MUTED}; }}
            """
        )
        self._restart_btn.clicked.connect(self._restart)

        hud = QHBoxLayout()
        hud.setSpacing(16)
        hud.addWidget(self._level_label, 0)
        hud.addStretch(1)
        hud.addWidget(self._timer_label, 0)
        hud.addStretch(1)
        hud.addWidget(self._restart_btn, 0)

        stats = QHBoxLayout()
        stats.addWidget(self._result_label, 1)
        stats.addWidget(self._best_label, 0, Qt.AlignRight)

        self._grid = NumberGridWidget()
        self._grid.cell_activated.connect(self._controller.activate)

        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 18, 24, 18)
        layout.setSpacing(12)
        layout.addLayout(hud)
        layout.addLayout(stats)
        layout.addWidget(self._grid, 1)
        layout.addWidget(self._hint_label, 0, Qt.AlignHCenter)
        self.setCentralWidget(root)

        self._overlay = RoundEndOverlay(root)
        self._overlay.hide()
        self._overlay.closed.connect(self._on_overlay_closed)

        self._restart_shortcut = QShortcut(QKeySequence("Ctrl+R"), self)
        self._restart_shortcut.activated.connect(self._restart)

    def _restart(self) -> None:
        self._overlay.hide()
        self._controller.restart()

    def _on_round_started(self, round_: Round) -> None:
        self._round = round_
        self._overlay.hide()
        self._level_label.setText(f"Level {round_.level}")
        self._restart_btn.setEnabled(False)
        self._grid.set_round(round_)
        self._grid.setFocus()
        self._update_result_label()
        self._update_best_label(round_.level)

    def _on_click_resolved(self, outcome: ClickOutcome) -> None:
        if outcome.ignored:
            return
        if outcome.should_start_timers:
            self._restart_btn.setEnabled(True)
        if not outcome.correct:
            self._grid.flash_wrong(outcome.position)
        self._grid.refresh()
        self._update_result_label()

    def _on_time_changed(self, seconds: float) -> None:
        if self._round is None:
            return
        if self._round.mode == COUNTDOWN:
            text = f"Time left: {format_seconds(seconds)}"
            color = timer_color(seconds, self._round.time_limit)
        else:
            text = f"Time: {format_seconds(seconds)}"
            color = GridColors.PRIMARY
        self._timer_label.setText(text)
        self._timer_label.setStyleSheet(f"color: {color}; font-size: 20px; font-weight: 800;")

    def _on_round_ended(self, result: RoundEnded, new_best: bool) -> None:
        self._restart_btn.setEnabled(True)
        self._update_result_label()
        self._update_best_label(result.level)
        self._overlay.show_result(result, new_best)

    def _on_overlay_closed(self) -> None:
        if self._controller.advance_pending():
            self._controller.advance_now()
        elif self._round is not None and self._round.ended:
            self._controller.restart()

    def _update_result_label(self) -> None:
        if self._round is None:
            return
        r = self._round
        self._result_label.setText(
            f"Score: {r.score} | Correct: {r.correct_click_count} | Wrong: {r.wrong_click_count}"
        )

    def _update_best_label(self, level: int) -> None:
        best = self._progress_store.get_level_best(level_key(level))
        if best.wins == 0:
            self._best_label.setText("Best: -")
            return
        best_time = f" | {best.best_time:.2f} s" if best.best_time is not None else ""
        self._best_label.setText(f"Best: {best.best_score}{best_time}")

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist progress when closing the app."""
        if self._progress_store is not None:
            self._progress_store.save()
        super().closeEvent(event)
