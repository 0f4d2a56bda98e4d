from __future__ import annotations

import itertools
import logging
import random
from typing import Callable, List, Optional, Union

from numgrid.core.round import (
    ClickOutcome,
    ReshuffleOutcome,
    Round,
    RoundEnded,
    RoundStarted,
    StaleRoundError,
    TickOutcome,
)
from numgrid.core.rules import COUNTDOWN, GameRules
from numgrid.core.shuffle import fisher_yates, shuffled_range

logger = logging.getLogger(__name__)

RoundEvent = Union[RoundStarted, ClickOutcome, TickOutcome, ReshuffleOutcome]
Listener = Callable[[RoundEvent], None]


class RoundEngine:
    """Drives the number grid round state machine.

    The engine owns no rendering and no timers. Callers feed it clicks,
    ticks from a periodic clock and reshuffle requests from a second
    periodic clock; every call returns an outcome object which is also
    pushed to subscribed listeners.

    Only the most recently started round may be mutated. Passing a round
    that has been replaced raises :class:`StaleRoundError`, so a timer that
    outlives its round fails loudly instead of corrupting state.
    """

    def __init__(self, rules: Optional[GameRules] = None, rng: Optional[random.Random] = None) -> None:
        self._rules = rules or GameRules()
        self._rng = rng or random.Random()
        self._ids = itertools.count(1)
        self._active_id: Optional[int] = None
        self._listeners: List[Listener] = []

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def active_round_id(self) -> Optional[int]:
        return self._active_id

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def is_active(self, round_: Round) -> bool:
        return round_.round_id == self._active_id

    def start_round(self, level: int) -> Round:
        """Create a fresh, not yet started round for *level* and make it active."""
        size = self._rules.grid_size_for_level(level)
        round_ = Round(
            round_id=next(self._ids),
            level=level,
            sequence=shuffled_range(size, self._rng),
            mode=self._rules.mode,
            time_limit=self._rules.time_limit,
        )
        if self._active_id is not None:
            logger.debug("Round %s replaced by round %s", self._active_id, round_.round_id)
        self._active_id = round_.round_id
        logger.info("Level %s round %s ready with %s cells", level, round_.round_id, size)
        self._emit(RoundStarted(round_id=round_.round_id, level=level, size=size))
        return round_

    def on_cell_activated(self, round_: Round, position: int, at: Optional[float] = None) -> ClickOutcome:
        """Apply a click (or Enter) on *position*.

        *at* is the elapsed time in seconds since the round started; it
        feeds the speed bonus and the final time reported on a win.
        """
        self._check_active(round_)
        value = round_.value_at(position)

        if round_.ended:
            return self._emit(ClickOutcome(round_id=round_.round_id, position=position, value=value, ignored=True))

        should_start = False
        if not round_.started:
            if value != 1:
                return self._emit(
                    ClickOutcome(round_id=round_.round_id, position=position, value=value, ignored=True)
                )
            round_.started = True
            round_.elapsed = 0.0
            should_start = True
            logger.info("Round %s started", round_.round_id)

        if position in round_.clicked_positions:
            return self._emit(ClickOutcome(round_id=round_.round_id, position=position, value=value, ignored=True))

        now = round_.elapsed if at is None else max(round_.elapsed, float(at))

        if value == round_.expected:
            points = self._rules.points_correct
            bonus = False
            threshold = self._rules.speed_bonus_threshold
            if threshold > 0 and at is not None and round_.last_correct_at is not None:
                if now - round_.last_correct_at < threshold:
                    points = int(round(points * self._rules.speed_bonus_multiplier))
                    bonus = True

            round_.clicked_positions.add(position)
            round_.expected += 1
            round_.correct_click_count += 1
            round_.score += points
            round_.last_correct_at = now

            ended: Optional[RoundEnded] = None
            if round_.expected > round_.size:
                round_.elapsed = now
                ended = self._finish(round_, success=True)
            return self._emit(
                ClickOutcome(
                    round_id=round_.round_id,
                    position=position,
                    value=value,
                    correct=True,
                    score_delta=points,
                    speed_bonus=bonus,
                    should_start_timers=should_start,
                    should_stop_timers=ended is not None,
                    round_ended=ended,
                )
            )

        before = round_.score
        round_.wrong_click_count += 1
        round_.score = max(0, round_.score - self._rules.penalty_wrong)
        return self._emit(
            ClickOutcome(
                round_id=round_.round_id,
                position=position,
                value=value,
                score_delta=round_.score - before,
                should_start_timers=should_start,
            )
        )

    def tick(self, round_: Round, elapsed_since_start: float) -> TickOutcome:
        """Advance the round clock; loses the round when the countdown runs out."""
        self._check_active(round_)
        if not round_.started or round_.ended:
            return TickOutcome(
                round_id=round_.round_id,
                elapsed=round_.elapsed,
                displayed_time=round_.displayed_time,
            )

        round_.elapsed = max(round_.elapsed, float(elapsed_since_start))
        ended: Optional[RoundEnded] = None
        if round_.mode == COUNTDOWN and round_.remaining <= 0:
            round_.elapsed = max(round_.elapsed, round_.time_limit)
            ended = self._finish(round_, success=False)
        return self._emit(
            TickOutcome(
                round_id=round_.round_id,
                elapsed=round_.elapsed,
                displayed_time=round_.displayed_time,
                should_stop_timers=ended is not None,
                round_ended=ended,
            )
        )

    def reshuffle_unclicked(self, round_: Round) -> ReshuffleOutcome:
        """Re-randomize the numbers on cells that have not been cleared yet."""
        self._check_active(round_)
        if not round_.started or round_.ended:
            return ReshuffleOutcome(round_id=round_.round_id)

        positions = round_.unclicked_positions()
        if len(positions) <= 1:
            return ReshuffleOutcome(round_id=round_.round_id)

        values = fisher_yates([round_.sequence[pos] for pos in positions], self._rng)
        changed = []
        for pos, value in zip(positions, values):
            if round_.sequence[pos] != value:
                round_.sequence[pos] = value
                changed.append(pos)
        logger.debug("Round %s reshuffled %s of %s open cells", round_.round_id, len(changed), len(positions))
        return self._emit(ReshuffleOutcome(round_id=round_.round_id, changed_positions=changed))

    def _finish(self, round_: Round, success: bool) -> RoundEnded:
        round_.ended = True
        round_.won = success
        result = RoundEnded(
            success=success,
            level=round_.level,
            score=round_.score,
            elapsed=round_.elapsed,
            correct_clicks=round_.correct_click_count,
            wrong_clicks=round_.wrong_click_count,
        )
        if success:
            logger.info("Level %s won: score %s in %.2fs", round_.level, round_.score, round_.elapsed)
        else:
            logger.info("Level %s lost on time: score %s", round_.level, round_.score)
        return result

    def _check_active(self, round_: Round) -> None:
        if round_.round_id != self._active_id:
            raise StaleRoundError(
                f"round {round_.round_id} is not the active round ({self._active_id})"
            )

    def _emit(self, event):
        for listener in list(self._listeners):
            listener(event)
        return event
