"""Qt glue between the round engine and the widgets: timers, level flow, best scores."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from numgrid.core.engine import RoundEngine
from numgrid.core.progress import ProgressStore, level_key
from numgrid.core.round import ClickOutcome, Round, RoundEnded

logger = logging.getLogger(__name__)


class RoundController(QObject):
    """Runs rounds level after level.

    Owns the tick, reshuffle and level-advance timers. Every (re)start bumps
    a generation counter; timers remember the generation they were armed
    in and their callbacks do nothing once it has moved on, so a timer
    belonging to a replaced round can never touch the new one.
    """

    round_started = Signal(object)  # Round
    click_resolved = Signal(object)  # ClickOutcome
    time_changed = Signal(float)  # displayed seconds
    grid_reshuffled = Signal(object)  # list of changed positions
    round_ended = Signal(object, bool)  # RoundEnded, new best

    def __init__(
        self,
        engine: RoundEngine,
        progress_store: ProgressStore,
        start_level: int = 1,
        clock: Callable[[], float] = time.monotonic,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._progress_store = progress_store
        self._clock = clock
        self._level = max(1, int(start_level))
        self._round: Optional[Round] = None
        self._generation = 0
        self._armed_generation = -1
        self._advance_generation = -1
        self._started_at: Optional[float] = None

        rules = engine.rules
        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(rules.tick_interval_ms)
        self._tick_timer.timeout.connect(self._on_tick)

        self._reshuffle_timer = QTimer(self)
        self._reshuffle_timer.setInterval(rules.reshuffle_interval_ms)
        self._reshuffle_timer.timeout.connect(self._on_reshuffle)

        self._advance_timer = QTimer(self)
        self._advance_timer.setSingleShot(True)
        self._advance_timer.setInterval(rules.advance_delay_ms)
        self._advance_timer.timeout.connect(self._on_advance)

    @property
    def level(self) -> int:
        return self._level

    @property
    def current_round(self) -> Optional[Round]:
        return self._round

    @property
    def generation(self) -> int:
        return self._generation

    def timers_active(self) -> bool:
        return self._tick_timer.isActive() or self._reshuffle_timer.isActive()

    def advance_pending(self) -> bool:
        return self._advance_timer.isActive()

    def start_level(self, level: Optional[int] = None) -> Round:
        """Replace the current round with a fresh one for *level* (default: current level)."""
        if level is not None:
            self._level = max(1, int(level))
        self._stop_all_timers()
        self._generation += 1
        self._started_at = None
        self._round = self._engine.start_round(self._level)
        self.round_started.emit(self._round)
        self.time_changed.emit(self._round.displayed_time)
        return self._round

    def restart(self) -> Round:
        return self.start_level()

    def advance_now(self) -> None:
        """Skip the remaining level-advance delay after a win."""
        if self._advance_timer.isActive():
            self._advance_timer.stop()
            self._on_advance()

    def activate(self, position: int) -> Optional[ClickOutcome]:
        if self._round is None:
            return None
        at = self._elapsed() if self._round.started else None
        outcome = self._engine.on_cell_activated(self._round, position, at=at)
        if outcome.should_start_timers:
            self._start_timers()
        if outcome.should_stop_timers:
            self._stop_round_timers()
        self.click_resolved.emit(outcome)
        if outcome.round_ended is not None:
            self._handle_round_end(outcome.round_ended)
        return outcome

    def _elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return max(0.0, self._clock() - self._started_at)

    def _start_timers(self) -> None:
        self._started_at = self._clock()
        self._armed_generation = self._generation
        self._tick_timer.start()
        self._reshuffle_timer.start()

    def _stop_round_timers(self) -> None:
        self._tick_timer.stop()
        self._reshuffle_timer.stop()

    def _stop_all_timers(self) -> None:
        self._stop_round_timers()
        self._advance_timer.stop()
        self._armed_generation = -1
        self._advance_generation = -1

    def _round_timers_current(self) -> bool:
        return (
            self._round is not None
            and self._armed_generation == self._generation
            and not self._round.ended
        )

    def _on_tick(self) -> None:
        if not self._round_timers_current():
            return
        outcome = self._engine.tick(self._round, self._elapsed())
        self.time_changed.emit(outcome.displayed_time)
        if outcome.should_stop_timers:
            self._stop_round_timers()
        if outcome.round_ended is not None:
            self._handle_round_end(outcome.round_ended)

    def _on_reshuffle(self) -> None:
        if not self._round_timers_current():
            return
        outcome = self._engine.reshuffle_unclicked(self._round)
        if outcome.shuffled:
            self.grid_reshuffled.emit(list(outcome.changed_positions))

    def _on_advance(self) -> None:
        if self._advance_generation != self._generation:
            return
        self.start_level()

    def _handle_round_end(self, result: RoundEnded) -> None:
        new_best = False
        if result.success:
            new_best = self._progress_store.record_win(level_key(result.level), result.score, result.elapsed)
            self._level = result.level + 1
            self._advance_generation = self._generation
            self._advance_timer.start()
            logger.info("Advancing to level %s", self._level)
        self.round_ended.emit(result, new_best)
