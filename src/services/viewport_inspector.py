"""Line geometry contracts and visible-line candidate extraction.

Hosts expose their line measurements through ``LineGeometrySource``. Which
measurement strategy a widget needs is decided once, in ``line_source_for``,
so candidate extraction never has to inspect the widget type.
"""

from __future__ import annotations

from typing import Protocol

from PySide6.QtCore import QPoint
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from src.core.jump_models import LineCoordinates, RawTarget, ViewBounds

DUPLICATE_ROW_TOLERANCE_PX = 2.0


class LineGeometrySource(Protocol):
    def line_count(self) -> int:
        ...

    def first_visible_line(self) -> int:
        ...

    def coordinates_for_line(self, index: int) -> LineCoordinates | None:
        ...

    def visible_rect(self) -> ViewBounds:
        ...

    def move_cursor_to_line(self, index: int) -> None:
        ...


class _EditorLineSource:
    def __init__(self, editor: QPlainTextEdit | QTextEdit):
        self._editor = editor

    @property
    def editor(self) -> QPlainTextEdit | QTextEdit:
        return self._editor

    def line_count(self) -> int:
        return int(self._editor.document().blockCount())

    def visible_rect(self) -> ViewBounds:
        rect = self._editor.viewport().rect()
        return ViewBounds(top=float(rect.top()), bottom=float(rect.bottom()))

    def move_cursor_to_line(self, index: int) -> None:
        block = self._editor.document().findBlockByNumber(int(index))
        if not block.isValid():
            return
        cursor = QTextCursor(block)
        cursor.movePosition(QTextCursor.StartOfBlock)
        self._editor.setTextCursor(cursor)
        self._editor.ensureCursorVisible()

    def _visible_block(self, index: int):
        if index < 0:
            return None
        block = self._editor.document().findBlockByNumber(int(index))
        if not block.isValid() or not block.isVisible():
            return None
        return block


class PlainTextLineSource(_EditorLineSource):
    """Measures ``QPlainTextEdit`` lines from block bounding geometry."""

    def first_visible_line(self) -> int:
        block = self._editor.firstVisibleBlock()
        if not block.isValid():
            return 0
        return int(block.blockNumber())

    def coordinates_for_line(self, index: int) -> LineCoordinates | None:
        block = self._visible_block(index)
        if block is None:
            return None
        geometry = self._editor.blockBoundingGeometry(block).translated(self._editor.contentOffset())
        left = float(self._editor.cursorRect(QTextCursor(block)).left())
        return LineCoordinates(left=left, top=float(geometry.top()), bottom=float(geometry.bottom()))


class TextEditLineSource(_EditorLineSource):
    """Measures ``QTextEdit`` lines from cursor rectangles."""

    def first_visible_line(self) -> int:
        cursor = self._editor.cursorForPosition(QPoint(0, 0))
        return max(0, int(cursor.blockNumber()))

    def coordinates_for_line(self, index: int) -> LineCoordinates | None:
        block = self._visible_block(index)
        if block is None:
            return None
        rect = self._editor.cursorRect(QTextCursor(block))
        return LineCoordinates(
            left=float(rect.left()),
            top=float(rect.top()),
            bottom=float(rect.top() + rect.height()),
        )


def line_source_for(editor: QPlainTextEdit | QTextEdit) -> LineGeometrySource:
    if isinstance(editor, QPlainTextEdit):
        return PlainTextLineSource(editor)
    if isinstance(editor, QTextEdit):
        return TextEditLineSource(editor)
    raise TypeError(f"No line geometry strategy for {type(editor).__name__}.")


def collect_raw_targets(
    source: LineGeometrySource,
    *,
    duplicate_tolerance: float = DUPLICATE_ROW_TOLERANCE_PX,
) -> list[RawTarget]:
    """Return one candidate per visible, unfolded, on-screen line, top to bottom."""
    bounds = source.visible_rect()
    targets: list[RawTarget] = []
    last_top: float | None = None

    for index in range(max(0, int(source.first_visible_line())), int(source.line_count())):
        coords = source.coordinates_for_line(index)
        if coords is None or coords.height <= 0:
            continue
        if last_top is not None and abs(coords.top - last_top) < duplicate_tolerance:
            continue
        if bounds.excludes(coords):
            if coords.top > bounds.bottom:
                break
            continue
        targets.append(RawTarget(line_index=index, top=coords.top, left=coords.left))
        last_top = coords.top
    return targets


__all__ = [
    "DUPLICATE_ROW_TOLERANCE_PX",
    "LineGeometrySource",
    "PlainTextLineSource",
    "TextEditLineSource",
    "line_source_for",
    "collect_raw_targets",
]
