from __future__ import annotations

import pytest
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from src.core.keystrokes import (
    KeyStroke,
    is_composition_event,
    keystroke_from_qt_event,
    resolve_keystroke,
)


@pytest.mark.parametrize("key", ["Shift", "Control", "Alt", "Meta", "CapsLock"])
def test_modifier_keys_are_ignored(key):
    assert resolve_keystroke(KeyStroke(key)) is None


def test_composition_events_are_ignored():
    assert is_composition_event(KeyStroke("a", is_composing=True))
    assert resolve_keystroke(KeyStroke("Process")) is None
    assert resolve_keystroke(KeyStroke("a", key_code=229)) is None


def test_plain_keys_pass_through():
    assert resolve_keystroke(KeyStroke("a")) == "a"
    assert resolve_keystroke(KeyStroke("Escape")) == "Escape"
    assert resolve_keystroke(KeyStroke("")) is None


def _press(key, text="", modifiers=Qt.KeyboardModifier.NoModifier) -> QKeyEvent:
    return QKeyEvent(QEvent.Type.KeyPress, key, modifiers, text)


def test_qt_letter_event(qt_app):
    assert keystroke_from_qt_event(_press(Qt.Key.Key_A, "a")) == KeyStroke("a")


def test_qt_shift_event_is_modifier(qt_app):
    stroke = keystroke_from_qt_event(_press(Qt.Key.Key_Shift, "", Qt.KeyboardModifier.ShiftModifier))
    assert stroke.key == "Shift"
    assert resolve_keystroke(stroke) is None


def test_qt_escape_event_is_named(qt_app):
    stroke = keystroke_from_qt_event(_press(Qt.Key.Key_Escape, "\x1b"))
    assert stroke.key == "Esc"
    assert resolve_keystroke(stroke) == "Esc"


def test_qt_unknown_key_without_text_is_composing(qt_app):
    stroke = keystroke_from_qt_event(_press(Qt.Key.Key_unknown, ""))
    assert stroke.is_composing
    assert resolve_keystroke(stroke) is None


def test_qt_ctrl_chord_is_not_a_label_key(qt_app):
    stroke = keystroke_from_qt_event(_press(Qt.Key.Key_A, "\x01", Qt.KeyboardModifier.ControlModifier))
    assert stroke.key == "Ctrl+A"
