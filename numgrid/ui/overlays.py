"""In-window overlay shown when a round is won or lost."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QEvent, QObject, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from numgrid.core.round import RoundEnded
from numgrid.ui.colors import GridColors


def round_end_message(result: RoundEnded, new_best: bool) -> tuple[str, str]:
    """Title and body text for the end-of-round card."""
    if result.success:
        title = f"Level {result.level} complete!"
        body = f"Score {result.score} in {result.elapsed:.2f} s. Next level starts shortly."
        if new_best:
            body = f"New best! {body}"
    else:
        title = "Time's up!"
        body = f"Score {result.score}. Try again to reach the next level."
    body += f"\nCorrect: {result.correct_clicks} | Wrong: {result.wrong_clicks}"
    return title, body


class RoundEndOverlay(QWidget):
    """Win / lose card drawn over a dimmed copy of its parent.

    Clicking the dimmed area or the button dismisses it and emits ``closed``.
    """

    closed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("roundEndOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(
            f"""
            QWidget#roundEndOverlay {{ background: rgba(0, 0, 0, 0.2); }}
            QFrame#roundEndCard {{
                background: #ffffff;
                border: 1px solid rgba(0, 131, 143, 0.12);
                border-radius: 20px;
            }}
            QLabel#roundEndIcon {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {GridColors.BG_TOP}, stop:1 #b2ebf2);
                border-radius: 12px;
                font-size: 22px;
                font-weight: 900;
            }}
            QLabel#roundEndTitle {{ color: {GridColors.PRIMARY}; font-size: 18px; font-weight: 800; }}
            QLabel#roundEndMessage {{ color: {GridColors.TEXT_PRIMARY}; font-size: 14px; font-weight: 500; }}
            QPushButton#roundEndButton {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {GridColors.PRIMARY_LIGHT}, stop:1 {GridColors.PRIMARY});
                color: white;
                padding: 10px 16px;
                border: none;
                border-radius: 12px;
                font-weight: 600;
                font-size: 13px;
            }}
            QPushButton#roundEndButton:hover {{ background: {GridColors.PRIMARY}; }}
            """
        )

        card = QFrame()
        card.setObjectName("roundEndCard")
        card.setFixedWidth(440)
        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(20)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 80, 100, 25))
        card.setGraphicsEffect(shadow)

        self._icon_label = QLabel("✓")
        self._icon_label.setObjectName("roundEndIcon")
        self._icon_label.setFixedSize(44, 44)
        self._icon_label.setAlignment(Qt.AlignCenter)

        self._title = QLabel("")
        self._title.setObjectName("roundEndTitle")

        header = QHBoxLayout()
        header.setSpacing(12)
        header.addWidget(self._icon_label, 0)
        header.addWidget(self._title, 0)
        header.addStretch(1)

        self._message = QLabel("")
        self._message.setObjectName("roundEndMessage")
        self._message.setWordWrap(True)

        self._ok_btn = QPushButton("OK")
        self._ok_btn.setObjectName("roundEndButton")
        self._ok_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._ok_btn.clicked.connect(self._dismiss)

        content = QVBoxLayout(card)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(18)
        content.addLayout(header)
        content.addWidget(self._message)
        content.addWidget(self._ok_btn)

        layout = QVBoxLayout(self)
        layout.addWidget(card, 0, Qt.AlignCenter)

        if parent is not None:
            parent.installEventFilter(self)

    def show_result(self, result: RoundEnded, new_best: bool) -> None:
        title, body = round_end_message(result, new_best)
        color = GridColors.PRIMARY if result.success else GridColors.ERROR
        self._icon_label.setText("✓" if result.success else "⏱")
        self._icon_label.setStyleSheet(f"color: {color};")
        self._title.setText(title)
        self._message.setText(body)
        self._ok_btn.setText("Next level" if result.success else "Try again")
        self._cover_parent()
        self.raise_()
        self.show()

    def mousePressEvent(self, event) -> None:
        # clicks that land on the card or its children keep it open
        if self.childAt(event.position().toPoint()) is None:
            self._dismiss()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._cover_parent()
        return super().eventFilter(obj, event)

    def _cover_parent(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def _dismiss(self) -> None:
        self.hide()
        self.closed.emit()
