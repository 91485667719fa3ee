from __future__ import annotations

from typing import Callable, Mapping

from PySide6.QtCore import QRect, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QFont, QKeySequence, QPainter, QShortcut, QTextFormat
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit, QWidget

from HopPyside.widgets.code_folding import get_fold_provider, get_language_id, update_folding as update_editor_folding

# Chords the editor binds itself. Menus may display them but never bind them.
EDITOR_SHORTCUT_ACTIONS: dict[str, tuple[str, ...]] = {
    "action.line_jump": ("Ctrl+;",),
    "action.toggle_fold": ("Ctrl+Shift+[",),
}

FOLD_OPEN_GLYPH = "\u25be"
FOLD_CLOSED_GLYPH = "\u25b8"


# ---------------- Code Editor with line numbers ----------------

class LineNumberArea(QWidget):
    def __init__(self, editor: 'CodeEditor'):
        super().__init__(editor)
        self.codeEditor = editor
    def sizeHint(self):
        return QSize(self.codeEditor.lineNumberAreaWidth(), 0)
    def paintEvent(self, event):
        self.codeEditor.lineNumberAreaPaintEvent(event)
    def mousePressEvent(self, event):
        self.codeEditor.lineNumberAreaMousePressEvent(event)


class CodeEditor(QPlainTextEdit):
    lineJumpRequested = Signal()
    foldStateChanged = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._shortcut_sequences: dict[str, list[str]] = {
            action_id: list(sequence) for action_id, sequence in EDITOR_SHORTCUT_ACTIONS.items()
        }
        self._configured_shortcuts: list[QShortcut] = []
        self._file_path: str | None = None
        self._fold_provider: Callable[[str], list[tuple[int, int]]] | None = None
        self._fold_ranges: dict[int, int] = {}
        self._folded_starts: set[int] = set()
        self._fold_gutter_width = 14
        self._editor_background_color = QColor("#252526")

        self._fold_refresh_timer = QTimer(self)
        self._fold_refresh_timer.setSingleShot(True)
        self._fold_refresh_timer.setInterval(140)
        self._fold_refresh_timer.timeout.connect(self._refresh_fold_ranges)
        self.textChanged.connect(self._schedule_fold_refresh)

        self.lineNumberArea = LineNumberArea(self)
        self.blockCountChanged.connect(self.updateLineNumberAreaWidth)
        self.updateRequest.connect(self.updateLineNumberArea)
        self.cursorPositionChanged.connect(self.highlightCurrentLine)

        self.updateLineNumberAreaWidth(0)
        self.highlightCurrentLine()
        self.setFont(QFont("Courier New", 11))
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self._rebuild_configured_shortcuts()

    def configure_keybindings(self, keybindings: Mapping[str, Mapping[str, list[str]]] | None) -> None:
        """Rebind editor shortcuts from the ``general`` scope; unknown ids are ignored."""
        scoped = keybindings.get("general") if isinstance(keybindings, Mapping) else None
        for action_id, default in EDITOR_SHORTCUT_ACTIONS.items():
            sequence = scoped.get(action_id) if isinstance(scoped, Mapping) else None
            if isinstance(sequence, str):
                sequence = [sequence]
            chords = [str(item).strip() for item in sequence or () if str(item).strip()]
            self._shortcut_sequences[action_id] = chords or list(default)
        self._rebuild_configured_shortcuts()

    def shortcut_sequence(self, action_id: str) -> list[str]:
        return list(self._shortcut_sequences.get(action_id, []))

    def configured_shortcut_texts(self) -> list[str]:
        return [shortcut.key().toString() for shortcut in self._configured_shortcuts]

    def _install_shortcut(self, action_id: str, callback: Callable[[], None]) -> None:
        qseq = QKeySequence(", ".join(self._shortcut_sequences.get(action_id, [])))
        if qseq.isEmpty():
            return
        shortcut = QShortcut(qseq, self)
        shortcut.setContext(Qt.ShortcutContext.WidgetWithChildrenShortcut)
        shortcut.activated.connect(callback)
        self._configured_shortcuts.append(shortcut)

    def _rebuild_configured_shortcuts(self) -> None:
        for shortcut in self._configured_shortcuts:
            shortcut.setEnabled(False)
            shortcut.deleteLater()
        self._configured_shortcuts.clear()
        self._install_shortcut("action.line_jump", self.lineJumpRequested.emit)
        self._install_shortcut("action.toggle_fold", self.toggle_fold_at_cursor)

    def set_editor_font_preferences(self, *, family: str | None = None, point_size: int | None = None) -> None:
        font = self.font()
        if isinstance(family, str) and family.strip():
            font.setFamily(family.strip())
        font.setStyleHint(QFont.StyleHint.Monospace)
        if point_size is not None:
            font.setPointSize(max(1, int(point_size)))
        self.setFont(font)
        self.updateLineNumberAreaWidth(0)

    def file_path(self) -> str | None:
        return self._file_path

    def set_file_path(self, file_path: str | None):
        self._file_path = str(file_path) if file_path else None
        self._apply_fold_provider()

    def is_word_wrap_enabled(self) -> bool:
        return self.lineWrapMode() != QPlainTextEdit.LineWrapMode.NoWrap

    def set_word_wrap_enabled(self, enabled: bool) -> None:
        mode = (
            QPlainTextEdit.LineWrapMode.WidgetWidth
            if bool(enabled)
            else QPlainTextEdit.LineWrapMode.NoWrap
        )
        self.setLineWrapMode(mode)

    def language_id(self) -> str:
        return get_language_id(self._file_path, fallback="plaintext")

    # --------- folding ---------
    def fold_ranges(self) -> dict[int, int]:
        return dict(self._fold_ranges)

    def folded_starts(self) -> set[int]:
        return set(self._folded_starts)

    def _apply_fold_provider(self):
        self._fold_provider = get_fold_provider(self.language_id())
        if self._fold_provider is None:
            self._clear_folding()
            return
        self._schedule_fold_refresh(immediate=True)

    def _clear_folding(self):
        self._fold_refresh_timer.stop()
        self._fold_ranges = {}
        self._folded_starts = set()
        self._set_all_blocks_visible()
        self._refresh_fold_layout()

    def _schedule_fold_refresh(self, immediate: bool = False):
        if self._fold_provider is None:
            return
        if immediate:
            self._fold_refresh_timer.stop()
            self._refresh_fold_ranges()
            return
        self._fold_refresh_timer.start()

    def _refresh_fold_ranges(self):
        update_editor_folding(self)

    def _set_all_blocks_visible(self):
        block = self.document().firstBlock()
        while block.isValid():
            block.setVisible(True)
            block.setLineCount(1)
            block = block.next()

    def _apply_fold_visibility(self):
        self._set_all_blocks_visible()
        for start_block in sorted(self._folded_starts):
            end_block = self._fold_ranges.get(start_block)
            if end_block is None or end_block <= start_block:
                continue
            block = self.document().findBlockByNumber(start_block).next()
            while block.isValid() and block.blockNumber() <= end_block:
                block.setVisible(False)
                block.setLineCount(0)
                block = block.next()
        self._refresh_fold_layout()
        self.foldStateChanged.emit()

    def _refresh_fold_layout(self):
        doc = self.document()
        doc.markContentsDirty(0, max(0, doc.characterCount()))
        self.viewport().update()
        self.lineNumberArea.update()
        self._apply_viewport_margins()

    def toggle_fold_at_block(self, block_number: int) -> bool:
        block_no = int(block_number)
        if block_no not in self._fold_ranges:
            return False
        if block_no in self._folded_starts:
            self._folded_starts.discard(block_no)
        else:
            self._folded_starts.add(block_no)
        self._apply_fold_visibility()
        return True

    def toggle_fold_at_cursor(self) -> bool:
        line = int(self.textCursor().blockNumber())
        # Inside a region, fold the innermost region that contains the cursor.
        owners = [start for start, end in self._fold_ranges.items() if start <= line <= end]
        if not owners:
            return False
        return self.toggle_fold_at_block(max(owners))

    def _visible_block_rows(self, top_limit: float, bottom_limit: float):
        """Yield ``(block_number, top, height)`` for unfolded blocks overlapping the band."""
        block = self.firstVisibleBlock()
        top = self.blockBoundingGeometry(block).translated(self.contentOffset()).top()
        while block.isValid() and top <= bottom_limit:
            height = self.blockBoundingRect(block).height()
            if block.isVisible() and top + height >= top_limit:
                yield block.blockNumber(), top, height
            top += height
            block = block.next()

    def _block_number_at_y(self, y_pos: int) -> int:
        for number, _top, _height in self._visible_block_rows(y_pos, y_pos):
            return int(number)
        return -1

    # --------- gutter ---------
    def lineNumberAreaWidth(self):
        digits = 1
        max_num = max(1, self.blockCount())
        while max_num >= 10:
            max_num //= 10
            digits += 1
        space = 3 + self.fontMetrics().horizontalAdvance("9") * digits
        if self._fold_provider is not None:
            space += int(self._fold_gutter_width)
        return space

    def _apply_viewport_margins(self):
        self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)
        cr = self.contentsRect()
        self.lineNumberArea.setGeometry(QRect(cr.left(), cr.top(), self.lineNumberAreaWidth(), cr.height()))

    def updateLineNumberAreaWidth(self, _):
        self._apply_viewport_margins()

    def updateLineNumberArea(self, rect, dy):
        if dy:
            self.lineNumberArea.scroll(0, dy)
        else:
            self.lineNumberArea.update(0, rect.y(), self.lineNumberArea.width(), rect.height())
        if rect.contains(self.viewport().rect()):
            self.updateLineNumberAreaWidth(0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._apply_viewport_margins()

    def lineNumberAreaPaintEvent(self, event):
        area = event.rect()
        gutter = QColor(self._editor_background_color).darker(125)
        ink = gutter.lighter(155)
        fold_width = int(self._fold_gutter_width) if self._fold_provider is not None else 0
        number_width = max(0, self.lineNumberArea.width() - fold_width - 2)
        line_height = self.fontMetrics().height()

        painter = QPainter(self.lineNumberArea)
        painter.fillRect(area, gutter)
        painter.setPen(ink)
        for number, top, _height in self._visible_block_rows(area.top(), area.bottom()):
            row = QRect(fold_width, int(top), number_width, line_height)
            painter.drawText(row, Qt.AlignRight, str(number + 1))
            if fold_width and number in self._fold_ranges:
                glyph = FOLD_CLOSED_GLYPH if number in self._folded_starts else FOLD_OPEN_GLYPH
                painter.drawText(QRect(0, int(top), fold_width, line_height), Qt.AlignCenter, glyph)
        painter.end()

    def lineNumberAreaMousePressEvent(self, event):
        if event.button() != Qt.LeftButton or self._fold_provider is None:
            event.ignore()
            return
        point = event.position().toPoint()
        if int(point.x()) > int(self._fold_gutter_width):
            event.ignore()
            return
        block_number = self._block_number_at_y(int(point.y()))
        if block_number >= 0 and self.toggle_fold_at_block(block_number):
            event.accept()
            return
        event.ignore()

    def highlightCurrentLine(self):
        selections = []
        if not self.isReadOnly():
            selection = QTextEdit.ExtraSelection()
            line_color = QColor(self._editor_background_color).lighter(130)
            line_color.setAlpha(140)
            selection.format.setBackground(line_color)
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = self.textCursor()
            selection.cursor.clearSelection()
            selections.append(selection)
        self.setExtraSelections(selections)


__all__ = ["LineNumberArea", "CodeEditor"]
