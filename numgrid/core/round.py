"""Round state and the outcome objects reported to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from numgrid.core.rules import COUNTDOWN


class RoundError(Exception):
    """Base class for contract violations when driving a round."""


class InvalidPositionError(RoundError, IndexError):
    """A position outside ``[0, size)`` was activated."""


class StaleRoundError(RoundError):
    """A round that is no longer the engine's active round was mutated."""


class RoundState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"


@dataclass
class Round:
    """One playthrough of the grid, from generation to win or loss.

    ``sequence[position]`` is the number currently shown at *position*.
    Positions in ``clicked_positions`` are pinned: reshuffles never move them.
    """

    round_id: int
    level: int
    sequence: List[int]
    mode: str = COUNTDOWN
    time_limit: float = 60.0
    expected: int = 1
    clicked_positions: Set[int] = field(default_factory=set)
    elapsed: float = 0.0
    score: int = 0
    correct_click_count: int = 0
    wrong_click_count: int = 0
    started: bool = False
    ended: bool = False
    won: bool = False
    last_correct_at: Optional[float] = None

    @property
    def size(self) -> int:
        return len(self.sequence)

    @property
    def remaining(self) -> float:
        """Seconds left on the countdown (never negative)."""
        return max(0.0, self.time_limit - self.elapsed)

    @property
    def displayed_time(self) -> float:
        """Value shown on the timer: remaining in countdown mode, elapsed otherwise."""
        if self.mode == COUNTDOWN:
            return self.remaining
        return self.elapsed

    @property
    def state(self) -> RoundState:
        if self.ended:
            return RoundState.WON if self.won else RoundState.LOST
        if self.started:
            return RoundState.RUNNING
        return RoundState.NOT_STARTED

    def unclicked_positions(self) -> List[int]:
        return [pos for pos in range(self.size) if pos not in self.clicked_positions]

    def value_at(self, position: int) -> int:
        if not 0 <= position < self.size:
            raise InvalidPositionError(f"position {position} outside grid of {self.size} cells")
        return self.sequence[position]


@dataclass(frozen=True)
class RoundEnded:
    """Terminal result of a round; ``success`` is True for a win."""

    success: bool
    level: int
    score: int
    elapsed: float
    correct_clicks: int
    wrong_clicks: int


@dataclass(frozen=True)
class RoundStarted:
    round_id: int
    level: int
    size: int


@dataclass(frozen=True)
class ClickOutcome:
    """What a single cell activation changed."""

    round_id: int
    position: int
    value: int
    correct: bool = False
    ignored: bool = False
    score_delta: int = 0
    speed_bonus: bool = False
    should_start_timers: bool = False
    should_stop_timers: bool = False
    round_ended: Optional[RoundEnded] = None


@dataclass(frozen=True)
class TickOutcome:
    round_id: int
    elapsed: float
    displayed_time: float
    should_stop_timers: bool = False
    round_ended: Optional[RoundEnded] = None


@dataclass(frozen=True)
class ReshuffleOutcome:
    round_id: int
    changed_positions: List[int] = field(default_factory=list)

    @property
    def shuffled(self) -> bool:
        return bool(self.changed_positions)
