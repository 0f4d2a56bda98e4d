"""Number grid widget: painted cells, mouse and keyboard activation."""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt, QRectF, QTimer, Signal
from PySide6.QtGui import QColor, QKeyEvent, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from numgrid.core.navigation import GridCursor
from numgrid.core.round import Round
from numgrid.core.rules import grid_columns
from numgrid.ui.colors import GridColors, blend_hex
from numgrid.ui.models import CellView, build_cell_views


class NumberGridWidget(QWidget):
    """Square-ish grid of numbered cells; cleared cells show in mint."""

    cell_activated = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._round: Optional[Round] = None
        self._cells: List[CellView] = []
        self._columns = 1
        self._cursor: Optional[GridCursor] = None
        self._show_cursor = False
        self._flash_position: Optional[int] = None
        self._flash_token = 0
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(320, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.PointingHandCursor)

    def set_round(self, round_: Round) -> None:
        self._round = round_
        self._columns = grid_columns(round_.size)
        self._cursor = GridCursor(round_.size, self._columns)
        self._show_cursor = False
        self._flash_token += 1
        self._flash_position = None
        self.refresh()

    def refresh(self) -> None:
        """Rebuild cell views from the round and repaint."""
        if self._round is None:
            self._cells = []
        else:
            selected = self._cursor.position if (self._cursor and self._show_cursor) else None
            self._cells = build_cell_views(self._round, selected)
        self.update()

    def flash_wrong(self, position: int, duration_ms: int = 200) -> None:
        """Briefly tint *position* red after a wrong click."""
        self._flash_token += 1
        token = self._flash_token
        self._flash_position = position
        self.update()

        def _clear() -> None:
            if token == self._flash_token:
                self._flash_position = None
                self.update()

        QTimer.singleShot(duration_ms, _clear)

    def _cell_rect(self, position: int) -> QRectF:
        rows = max(1, -(-len(self._cells) // self._columns))
        spacing = 6.0
        side = min(
            (self.width() - spacing * (self._columns + 1)) / self._columns,
            (self.height() - spacing * (rows + 1)) / rows,
        )
        side = max(8.0, side)
        total_w = self._columns * side + (self._columns - 1) * spacing
        total_h = rows * side + (rows - 1) * spacing
        x0 = (self.width() - total_w) / 2
        y0 = (self.height() - total_h) / 2
        row, col = divmod(position, self._columns)
        return QRectF(x0 + col * (side + spacing), y0 + row * (side + spacing), side, side)

    def _position_at(self, x: float, y: float) -> Optional[int]:
        for cell in self._cells:
            if self._cell_rect(cell.position).contains(x, y):
                return cell.position
        return None

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        point = event.position()
        position = self._position_at(point.x(), point.y())
        if position is not None:
            if self._cursor is not None:
                self._cursor.move_to(position)
            self._show_cursor = False
            self.cell_activated.emit(position)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self._cursor is None:
            super().keyPressEvent(event)
            return
        key = event.key()
        moves = {
            Qt.Key.Key_Left: self._cursor.left,
            Qt.Key.Key_Right: self._cursor.right,
            Qt.Key.Key_Up: self._cursor.up,
            Qt.Key.Key_Down: self._cursor.down,
        }
        if key in moves:
            if self._show_cursor:
                moves[key]()
            self._show_cursor = True
            self.refresh()
            return
        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
            self._show_cursor = True
            self.cell_activated.emit(self._cursor.position)
            return
        super().keyPressEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._cells:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        for cell in self._cells:
            rect = self._cell_rect(cell.position)
            radius = max(4.0, rect.width() * 0.16)
            if cell.position == self._flash_position:
                fill = QColor(blend_hex(GridColors.ERROR, GridColors.CELL_BG, 0.35))
                border = QPen(QColor(GridColors.ERROR), 2)
                text_color = QColor(GridColors.TEXT_PRIMARY)
            elif cell.cleared:
                fill = QColor(GridColors.CELL_CLEARED)
                border = QPen(QColor(GridColors.MINT), 2)
                text_color = QColor(GridColors.PRIMARY)
            else:
                fill = QColor(GridColors.CELL_BG)
                border = QPen(QColor(GridColors.CELL_BORDER), 1)
                text_color = QColor(GridColors.TEXT_PRIMARY)
            if cell.selected:
                fill = QColor(GridColors.CELL_SELECTED)
                border = QPen(QColor(GridColors.AMBER), 3)
            painter.setBrush(fill)
            painter.setPen(border)
            painter.drawRoundedRect(rect, radius, radius)

            font = painter.font()
            font.setPixelSize(max(9, int(rect.height() * 0.42)))
            font.setBold(not cell.cleared)
            painter.setFont(font)
            painter.setPen(text_color)
            painter.drawText(rect, Qt.AlignCenter, str(cell.value))
