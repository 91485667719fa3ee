from __future__ import annotations

from HopPyside.widgets.code_editor import CodeEditor
from HopPyside.widgets.code_folding import (
    get_language_id,
    indent_fold_ranges,
    json_fold_ranges,
    markdown_fold_ranges,
    normalize_fold_ranges,
    python_fold_ranges,
)

PY_SOURCE = """class A:
    def f(self):
        return 1

    def g(self):
        if True:
            return 2
"""


def test_language_ids():
    assert get_language_id("a.py") == "python"
    assert get_language_id("notes.MD") == "markdown"
    assert get_language_id("data.yml") == "indent"
    assert get_language_id("unknown.xyz") == "plaintext"
    assert get_language_id(None, fallback="json") == "json"


def test_normalize_drops_empty_and_keeps_widest():
    assert normalize_fold_ranges([(3, 3), (1, 4), (1, 2), (2, 50)], 10) == [(1, 4), (2, 10)]


def test_python_ranges():
    assert python_fold_ranges(PY_SOURCE) == [(1, 7), (2, 3), (5, 7), (6, 7)]


def test_python_syntax_error_uses_indentation():
    assert python_fold_ranges("def broken(:\n    x\n    y\n") == [(1, 3)]


def test_indent_ranges():
    text = "root:\n  child: 1\n  other:\n    deep: 2\nnext: 3\n"
    assert indent_fold_ranges(text) == [(1, 4), (3, 4)]


def test_json_ranges_ignore_braces_in_strings():
    text = '{\n  "a": "{",\n  "b": [\n    1\n  ]\n}'
    assert json_fold_ranges(text) == [(1, 6), (3, 5)]


def test_markdown_ranges():
    text = "# Title\nintro\n## Part\nbody\n```\ncode\n```\n# Next\nend"
    assert markdown_fold_ranges(text) == [(1, 7), (3, 7), (5, 7), (8, 9)]


def test_editor_fold_toggle_hides_blocks(qt_app):
    editor = CodeEditor()
    folds: list[int] = []
    editor.foldStateChanged.connect(lambda: folds.append(1))
    editor.setPlainText(PY_SOURCE)
    editor.set_file_path("module.py")

    assert editor.fold_ranges()[1] == 2
    assert editor.toggle_fold_at_block(1)
    assert editor.folded_starts() == {1}
    assert not editor.document().findBlockByNumber(2).isVisible()
    assert editor.document().findBlockByNumber(3).isVisible()

    assert editor.toggle_fold_at_block(1)
    assert editor.document().findBlockByNumber(2).isVisible()
    assert not editor.toggle_fold_at_block(3)
    assert folds


def test_editor_fold_at_cursor_uses_innermost_region(qt_app):
    editor = CodeEditor()
    editor.setPlainText(PY_SOURCE)
    editor.set_file_path("module.py")
    cursor = editor.textCursor()
    cursor.setPosition(editor.document().findBlockByNumber(6).position())
    editor.setTextCursor(cursor)

    assert editor.toggle_fold_at_cursor()
    assert editor.folded_starts() == {5}


def test_plain_text_files_do_not_fold(qt_app):
    editor = CodeEditor()
    editor.setPlainText(PY_SOURCE)
    editor.set_file_path("notes.txt")
    assert editor.fold_ranges() == {}
    assert not editor.toggle_fold_at_cursor()
