"""Transparent overlay that draws jump labels over an editor viewport."""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QEvent, Qt
from PySide6.QtWidgets import QGraphicsOpacityEffect, QLabel, QWidget

_LABEL_EMPHASIS_NORMAL = "normal"
_LABEL_EMPHASIS_EMPHASIZED = "emphasized"
_LABEL_EMPHASIS_DIMMED = "dimmed"

# Labels sit slightly above the line so they line up with the text baseline.
_LABEL_BASELINE_SHIFT = 2


@dataclass(frozen=True, slots=True)
class JumpLabelStyle:
    background: str = "#FFD700"
    foreground: str = "#000000"
    border: str = "#000000"
    emphasis_background: str = "#FFA500"
    emphasis_border: str = "#FFFFFF"
    dim_opacity: float = 0.1
    font_family: str = "monospace"
    emphasis_font_step: int = 2


class JumpLabelOverlay(QWidget):
    def __init__(self, parent: QWidget, style: JumpLabelStyle | None = None):
        super().__init__(parent)
        self._style = style or JumpLabelStyle()
        self._labels: list[QLabel] = []
        self._base_font_px: dict[int, int] = {}
        self.setObjectName("jumpLabelOverlay")
        self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WA_NoSystemBackground, True)
        self.setFocusPolicy(Qt.NoFocus)
        self.setGeometry(parent.rect())
        parent.installEventFilter(self)

    @property
    def label_style(self) -> JumpLabelStyle:
        return self._style

    def labels(self) -> list[QLabel]:
        return list(self._labels)

    def add_label(self, text: str, left: float, top: float, font_px: int) -> QLabel:
        label = QLabel(str(text), self)
        label.setObjectName("jumpLabel")
        label.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        label.setTextFormat(Qt.PlainText)
        label.setWordWrap(False)
        effect = QGraphicsOpacityEffect(label)
        effect.setOpacity(1.0)
        label.setGraphicsEffect(effect)
        self._base_font_px[id(label)] = int(font_px)
        self._apply_label_style(label, _LABEL_EMPHASIS_NORMAL)
        label.move(int(left), int(top) - _LABEL_BASELINE_SHIFT)
        label.show()
        self._labels.append(label)
        return label

    def label_font_px(self, label: QLabel) -> int:
        return int(label.property("jumpFontPx") or self._base_font_px.get(id(label), 0))

    def label_opacity(self, label: QLabel) -> float:
        effect = label.graphicsEffect()
        if isinstance(effect, QGraphicsOpacityEffect):
            return float(effect.opacity())
        return 1.0

    def set_label_emphasis(self, label: QLabel, emphasis: str) -> None:
        mode = str(emphasis or _LABEL_EMPHASIS_NORMAL)
        self._apply_label_style(label, mode)
        effect = label.graphicsEffect()
        if isinstance(effect, QGraphicsOpacityEffect):
            effect.setOpacity(self._style.dim_opacity if mode == _LABEL_EMPHASIS_DIMMED else 1.0)
        if mode == _LABEL_EMPHASIS_EMPHASIZED:
            label.raise_()

    def clear(self) -> None:
        for label in self._labels:
            label.hide()
            label.deleteLater()
        self._labels.clear()
        self._base_font_px.clear()

    def dispose(self) -> None:
        self.clear()
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        self.hide()
        self.deleteLater()

    def eventFilter(self, watched, event):
        if watched is self.parentWidget() and event.type() == QEvent.Resize:
            self.setGeometry(watched.rect())
        return super().eventFilter(watched, event)

    def _apply_label_style(self, label: QLabel, mode: str) -> None:
        style = self._style
        font_px = self._base_font_px.get(id(label), 0)
        background = style.background
        border = style.border
        if mode == _LABEL_EMPHASIS_EMPHASIZED:
            font_px += int(style.emphasis_font_step)
            background = style.emphasis_background
            border = style.emphasis_border
        label.setProperty("jumpFontPx", font_px)
        label.setStyleSheet(
            f"""
            QLabel#jumpLabel {{
                background-color: {background};
                color: {style.foreground};
                border: 1px solid {border};
                border-radius: 4px;
                padding: 2px 6px;
                font-family: {style.font_family};
                font-size: {font_px}px;
                font-weight: 900;
            }}
            """
        )
        label.adjustSize()


__all__ = ["JumpLabelStyle", "JumpLabelOverlay"]
