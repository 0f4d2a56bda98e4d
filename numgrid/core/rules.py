from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

COUNTDOWN = "countdown"
ELAPSED = "elapsed"
_MODES = (COUNTDOWN, ELAPSED)

_INT_KEYS = (
    "base_size",
    "size_increment",
    "tick_interval_ms",
    "reshuffle_interval_ms",
    "advance_delay_ms",
    "points_correct",
    "penalty_wrong",
)
_FLOAT_KEYS = ("time_limit", "speed_bonus_threshold", "speed_bonus_multiplier")


@dataclass(frozen=True)
class GameRules:
    """Tunable constants of a round. Times in seconds unless suffixed ``_ms``."""

    base_size: int = 25
    size_increment: int = 5
    mode: str = COUNTDOWN
    time_limit: float = 60.0
    tick_interval_ms: int = 10
    reshuffle_interval_ms: int = 6000
    advance_delay_ms: int = 3000
    points_correct: int = 10
    penalty_wrong: int = 5
    speed_bonus_threshold: float = 0.0
    speed_bonus_multiplier: float = 2.0

    def grid_size_for_level(self, level: int) -> int:
        """Number of cells for *level* (1-based)."""
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        return self.base_size + (level - 1) * self.size_increment


def grid_columns(size: int) -> int:
    """Columns used to lay out *size* cells as a near-square grid."""
    return max(1, math.ceil(math.sqrt(size)))


def default_rules_path() -> Path:
    override = os.environ.get("NUMGRID_RULES")
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parent.parent / "data" / "rules.yaml"


def load_rules(path: Optional[Path] = None) -> GameRules:
    """Load rules from YAML; keys missing from the file keep their defaults."""
    rules_path = path if path is not None else default_rules_path()
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules file not found: {rules_path}")

    raw = yaml.safe_load(rules_path.read_text(encoding="utf-8"))
    if raw is None:
        return GameRules()
    if not isinstance(raw, dict):
        raise ValueError(f"{rules_path.name}: expected a mapping of rule names to values")

    known = {f.name for f in fields(GameRules)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{rules_path.name}: unknown rule(s): {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        try:
            if key in _INT_KEYS:
                values[key] = _as_int(value)
            elif key in _FLOAT_KEYS:
                values[key] = _as_float(value)
            else:
                values[key] = str(value).strip().lower()
        except (TypeError, ValueError):
            raise ValueError(f"{rules_path.name}: invalid value for '{key}': {value!r}") from None

    rules = GameRules(**values)
    _validate(rules, rules_path.name)
    return rules


def _validate(rules: GameRules, source: str) -> None:
    if rules.mode not in _MODES:
        raise ValueError(f"{source}: 'mode' must be one of {', '.join(_MODES)}")
    if rules.base_size < 1:
        raise ValueError(f"{source}: 'base_size' must be >= 1")
    if rules.size_increment < 0:
        raise ValueError(f"{source}: 'size_increment' must be >= 0")
    if rules.mode == COUNTDOWN and rules.time_limit <= 0:
        raise ValueError(f"{source}: 'time_limit' must be positive in countdown mode")
    for key in ("tick_interval_ms", "reshuffle_interval_ms"):
        if getattr(rules, key) <= 0:
            raise ValueError(f"{source}: '{key}' must be positive")
    if rules.advance_delay_ms < 0:
        raise ValueError(f"{source}: 'advance_delay_ms' must be >= 0")
    if rules.points_correct < 0 or rules.penalty_wrong < 0:
        raise ValueError(f"{source}: points and penalties must be >= 0")
    if rules.speed_bonus_threshold < 0 or rules.speed_bonus_multiplier < 1:
        raise ValueError(f"{source}: invalid speed bonus settings")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers here")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("expected a whole number")
    return int(value)


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers here")
    return float(value)
