"""Tests for numgrid.ui.models – cell render models."""

from __future__ import annotations

from numgrid.core.round import Round
from numgrid.ui.models import CellView, build_cell_views, format_seconds


class TestBuildCellViews:
    def test_one_view_per_position(self):
        r = Round(round_id=1, level=1, sequence=[3, 1, 2])
        views = build_cell_views(r)
        assert [v.value for v in views] == [3, 1, 2]
        assert [v.position for v in views] == [0, 1, 2]

    def test_cleared_and_selected(self):
        r = Round(round_id=1, level=1, sequence=[3, 1, 2], clicked_positions={1})
        views = build_cell_views(r, selected=2)
        assert views[1] == CellView(position=1, value=1, cleared=True, selected=False)
        assert views[2].selected is True
        assert views[0].cleared is False


class TestFormatSeconds:
    def test_two_decimals(self):
        assert format_seconds(59.996) == "60.00 s"
        assert format_seconds(1.5) == "1.50 s"

    def test_negative_clamped(self):
        assert format_seconds(-0.01) == "0.00 s"
