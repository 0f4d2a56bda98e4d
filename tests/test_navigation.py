"""Tests for numgrid.core.navigation – keyboard selection cursor."""

from __future__ import annotations

import pytest

from numgrid.core.navigation import GridCursor


class TestGridCursor:
    def test_defaults_to_first_cell(self):
        c = GridCursor(25)
        assert c.position == 0
        assert c.columns == 5

    def test_rejects_empty_grid(self):
        with pytest.raises(ValueError):
            GridCursor(0)

    def test_right_and_left(self):
        c = GridCursor(25)
        assert c.right() == 1
        assert c.left() == 0

    def test_right_wraps_to_start(self):
        c = GridCursor(25, position=24)
        assert c.right() == 0

    def test_left_wraps_to_end(self):
        c = GridCursor(25)
        assert c.left() == 24

    def test_right_crosses_row_boundary(self):
        c = GridCursor(25, position=4)
        assert c.right() == 5

    def test_down_moves_one_row(self):
        c = GridCursor(25, position=2)
        assert c.down() == 7

    def test_up_moves_one_row(self):
        c = GridCursor(25, position=12)
        assert c.up() == 7

    def test_down_wraps(self):
        c = GridCursor(25, position=22)
        assert c.down() == 2

    def test_up_wraps(self):
        c = GridCursor(25, position=1)
        assert c.up() == 21

    def test_partial_last_row_wraps(self):
        # 30 cells -> 6 columns, 5 full rows
        c = GridCursor(30, position=27)
        assert c.down() == 3

    def test_explicit_columns(self):
        c = GridCursor(12, columns=4, position=1)
        assert c.down() == 5

    def test_move_to_wraps(self):
        c = GridCursor(10)
        assert c.move_to(13) == 3

    def test_single_cell_grid(self):
        c = GridCursor(1)
        assert c.right() == 0
        assert c.down() == 0
