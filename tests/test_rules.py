"""Tests for numgrid.core.rules – YAML rules loading and grid sizing."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from numgrid.core.rules import (
    COUNTDOWN,
    ELAPSED,
    GameRules,
    default_rules_path,
    grid_columns,
    load_rules,
)


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# GameRules defaults and sizing
# ---------------------------------------------------------------------------

class TestGameRules:
    def test_defaults(self):
        rules = GameRules()
        assert rules.base_size == 25
        assert rules.size_increment == 5
        assert rules.mode == COUNTDOWN
        assert rules.time_limit == 60.0
        assert rules.reshuffle_interval_ms == 6000
        assert rules.points_correct == 10
        assert rules.penalty_wrong == 5

    def test_grid_size_level_one(self):
        assert GameRules().grid_size_for_level(1) == 25

    def test_grid_size_grows_by_increment(self):
        rules = GameRules(base_size=20, size_increment=5)
        assert rules.grid_size_for_level(2) == 25
        assert rules.grid_size_for_level(4) == 35

    def test_grid_size_rejects_level_zero(self):
        with pytest.raises(ValueError):
            GameRules().grid_size_for_level(0)

    def test_frozen(self):
        rules = GameRules()
        with pytest.raises(AttributeError):
            rules.base_size = 3  # type: ignore[misc]


class TestGridColumns:
    @pytest.mark.parametrize(
        "size, columns",
        [(1, 1), (4, 2), (5, 3), (25, 5), (30, 6), (36, 6), (37, 7)],
    )
    def test_ceil_sqrt(self, size: int, columns: int):
        assert grid_columns(size) == columns


# ---------------------------------------------------------------------------
# load_rules
# ---------------------------------------------------------------------------

class TestLoadRules:
    def test_bundled_rules_file_loads(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("NUMGRID_RULES", raising=False)
        rules = load_rules()
        assert rules.base_size == 25
        assert rules.mode == COUNTDOWN

    def test_partial_file_keeps_defaults(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"base_size": 9, "mode": "Elapsed"})
        rules = load_rules(path)
        assert rules.base_size == 9
        assert rules.mode == ELAPSED
        assert rules.size_increment == 5

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "rules.yaml"
        path.write_text("", encoding="utf-8")
        assert load_rules(path) == GameRules()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", [1, 2, 3])
        with pytest.raises(ValueError, match="mapping"):
            load_rules(path)

    def test_unknown_key(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"grid": 5})
        with pytest.raises(ValueError, match="unknown rule"):
            load_rules(path)

    def test_bad_number(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"base_size": "lots"})
        with pytest.raises(ValueError, match="base_size"):
            load_rules(path)

    def test_fractional_int_rejected(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"base_size": 25.7})
        with pytest.raises(ValueError, match="base_size"):
            load_rules(path)

    def test_whole_float_accepted_for_int(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"base_size": 30.0})
        assert load_rules(path).base_size == 30

    @pytest.mark.parametrize("key", ["base_size", "penalty_wrong", "time_limit", "speed_bonus_multiplier"])
    def test_boolean_rejected(self, tmp_path: Path, key: str):
        path = _write_yaml(tmp_path / "rules.yaml", {key: True})
        with pytest.raises(ValueError, match=key):
            load_rules(path)

    def test_bad_mode(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"mode": "sprint"})
        with pytest.raises(ValueError, match="mode"):
            load_rules(path)

    def test_zero_time_limit_rejected_in_countdown(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"time_limit": 0})
        with pytest.raises(ValueError, match="time_limit"):
            load_rules(path)

    def test_zero_time_limit_allowed_in_elapsed_mode(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "rules.yaml", {"time_limit": 0, "mode": "elapsed"})
        assert load_rules(path).time_limit == 0.0

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = _write_yaml(tmp_path / "custom.yaml", {"base_size": 4})
        monkeypatch.setenv("NUMGRID_RULES", str(path))
        assert default_rules_path() == path
        assert load_rules().base_size == 4
