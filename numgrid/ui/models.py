"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from numgrid.core.round import Round


@dataclass
class CellView:
    """Render state for a single grid cell."""

    position: int
    value: int
    cleared: bool
    selected: bool = False


def build_cell_views(round_: Round, selected: Optional[int] = None) -> List[CellView]:
    return [
        CellView(
            position=pos,
            value=value,
            cleared=pos in round_.clicked_positions,
            selected=pos == selected,
        )
        for pos, value in enumerate(round_.sequence)
    ]


def format_seconds(seconds: float) -> str:
    return f"{max(0.0, seconds):.2f} s"
