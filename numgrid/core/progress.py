from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class LevelBest:
    wins: int = 0
    best_score: int = 0
    best_time: Optional[float] = None


def level_key(level: int) -> str:
    return f"level{level}"


class ProgressStore:
    """Best score and best time per level. Persists to disk across app restarts.
    File: ~/.numgrid/progress.json unless another path is given."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".numgrid" / "progress.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._levels = self._load()

    def get_level_best(self, key: str) -> LevelBest:
        return self._levels.get(key, LevelBest())

    def record_win(self, key: str, score: int, elapsed: float) -> bool:
        """Record a won round. Returns True if score or time is a new best."""
        current = self._levels.get(key, LevelBest())
        improved = False
        if score > current.best_score:
            current.best_score = score
            improved = True
        if elapsed > 0 and (current.best_time is None or elapsed < current.best_time):
            current.best_time = elapsed
            improved = True
        current.wins += 1
        self._levels[key] = current
        self._save()
        return improved

    def reset(self) -> None:
        """Clear all stored bests."""
        self._levels = {}
        self._save()

    def save(self) -> None:
        """Persist current state to disk (e.g. on app exit)."""
        self._save()

    def _load(self) -> Dict[str, LevelBest]:
        levels: Dict[str, LevelBest] = {}
        if not self._file_path.exists():
            return levels
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return levels
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed progress file %s", self._file_path)
            return levels

        entries = payload.get("levels", {})
        if not isinstance(entries, dict):
            logger.warning("Ignoring malformed 'levels' in %s", self._file_path)
            return levels

        for key, value in entries.items():
            if not isinstance(value, dict):
                continue
            best_time = value.get("best_time")
            try:
                levels[key] = LevelBest(
                    wins=int(value.get("wins", 0)),
                    best_score=int(value.get("best_score", 0)),
                    best_time=float(best_time) if best_time is not None else None,
                )
            except (TypeError, ValueError) as e:
                logger.warning("Skipping progress entry %s: %s", key, e)
        return levels

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"levels": {key: asdict(value) for key, value in self._levels.items()}}
        try:
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
