from __future__ import annotations

from typing import Optional

from numgrid.core.rules import grid_columns


class GridCursor:
    """Keyboard selection over grid positions in row-major order.

    Left/right step one cell, up/down step one row. Every move wraps around
    the whole grid, so stepping right from the last cell lands on the first.
    """

    def __init__(self, size: int, columns: Optional[int] = None, position: int = 0) -> None:
        if size < 1:
            raise ValueError(f"grid size must be >= 1, got {size}")
        self._size = size
        self._columns = columns if columns is not None else grid_columns(size)
        self._position = position % size

    @property
    def position(self) -> int:
        return self._position

    @property
    def size(self) -> int:
        return self._size

    @property
    def columns(self) -> int:
        return self._columns

    def move_to(self, position: int) -> int:
        self._position = position % self._size
        return self._position

    def left(self) -> int:
        return self._step(-1)

    def right(self) -> int:
        return self._step(1)

    def up(self) -> int:
        return self._step(-self._columns)

    def down(self) -> int:
        return self._step(self._columns)

    def _step(self, delta: int) -> int:
        self._position = (self._position + delta) % self._size
        return self._position
