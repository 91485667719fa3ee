from __future__ import annotations

import pytest
from PySide6.QtWidgets import QLabel, QTextEdit

from HopPyside.widgets.code_editor import CodeEditor
from src.core.jump_models import LineCoordinates, ViewBounds
from src.services.viewport_inspector import (
    PlainTextLineSource,
    TextEditLineSource,
    collect_raw_targets,
    line_source_for,
)


class FakeLineSource:
    def __init__(self, coords, *, first=0, bounds=ViewBounds(0.0, 100.0)):
        self.coords = list(coords)
        self.first = first
        self.bounds = bounds
        self.moved_to: list[int] = []

    def line_count(self):
        return len(self.coords)

    def first_visible_line(self):
        return self.first

    def coordinates_for_line(self, index):
        return self.coords[index]

    def visible_rect(self):
        return self.bounds

    def move_cursor_to_line(self, index):
        self.moved_to.append(index)


def _row(top, height=10.0, left=4.0):
    return LineCoordinates(left=left, top=top, bottom=top + height)


def test_collects_lines_top_to_bottom():
    source = FakeLineSource([_row(0), _row(10), _row(20)])
    targets = collect_raw_targets(source)
    assert [t.line_index for t in targets] == [0, 1, 2]
    assert [t.top for t in targets] == [0, 10, 20]
    assert targets[0].left == 4.0


def test_skips_hidden_and_zero_height_lines():
    source = FakeLineSource([_row(0), None, _row(10, height=0), _row(10)])
    assert [t.line_index for t in collect_raw_targets(source)] == [0, 3]


def test_skips_rows_sharing_a_top():
    source = FakeLineSource([_row(0), _row(1.5), _row(12)])
    assert [t.line_index for t in collect_raw_targets(source)] == [0, 2]


def test_stops_below_the_view():
    source = FakeLineSource([_row(0), _row(50), _row(120), _row(130)])
    assert [t.line_index for t in collect_raw_targets(source)] == [0, 1]


def test_starts_from_first_visible_line():
    source = FakeLineSource([_row(-30), _row(-20), _row(-5), _row(5)], first=1)
    # Line 2 overlaps the top edge and is kept; line 1 is fully above it.
    assert [t.line_index for t in collect_raw_targets(source)] == [2, 3]


def test_empty_document():
    assert collect_raw_targets(FakeLineSource([])) == []


def test_line_source_strategy(qt_app):
    assert isinstance(line_source_for(CodeEditor()), PlainTextLineSource)
    assert isinstance(line_source_for(QTextEdit()), TextEditLineSource)
    with pytest.raises(TypeError):
        line_source_for(QLabel())


@pytest.fixture
def shown_editor(qt_app):
    editor = CodeEditor()
    editor.resize(480, 360)
    editor.show()
    qt_app.processEvents()
    yield editor
    editor.close()
    editor.deleteLater()


def test_real_editor_lines_are_ordered_and_on_screen(qt_app, shown_editor):
    shown_editor.setPlainText("\n".join(f"line {i}" for i in range(200)))
    qt_app.processEvents()
    source = line_source_for(shown_editor)
    targets = collect_raw_targets(source)
    bounds = source.visible_rect()

    assert targets
    assert targets[0].line_index == 0
    assert len(targets) < 200
    tops = [t.top for t in targets]
    assert tops == sorted(tops)
    assert all(bounds.top - 50 <= top <= bounds.bottom for top in tops)


def test_real_editor_skips_folded_lines(qt_app, shown_editor):
    shown_editor.setPlainText("def alpha():\n    a = 1\n    b = 2\n    return a + b\n\nx = 3")
    shown_editor.set_file_path("sample.py")
    qt_app.processEvents()
    source = line_source_for(shown_editor)
    assert [t.line_index for t in collect_raw_targets(source)] == [0, 1, 2, 3, 4, 5]

    assert shown_editor.toggle_fold_at_block(0)
    qt_app.processEvents()
    assert [t.line_index for t in collect_raw_targets(source)] == [0, 4, 5]


def test_move_cursor_to_line(qt_app, shown_editor):
    shown_editor.setPlainText("one\ntwo\nthree")
    source = line_source_for(shown_editor)
    source.move_cursor_to_line(2)
    cursor = shown_editor.textCursor()
    assert cursor.blockNumber() == 2
    assert cursor.positionInBlock() == 0
