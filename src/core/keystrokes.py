"""Keystroke classification applied before the input resolver."""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent, QKeySequence

MODIFIER_KEY_NAMES: frozenset[str] = frozenset(
    {
        "Shift",
        "Control",
        "Ctrl",
        "Alt",
        "AltGr",
        "AltGraph",
        "Meta",
        "Super",
        "Hyper",
        "OS",
        "CapsLock",
        "Fn",
    }
)
IME_SENTINEL_KEYS: frozenset[str] = frozenset({"Process", "Unidentified"})
IME_LEGACY_KEY_CODE = 229

_QT_MODIFIER_KEYS: dict[int, str] = {
    int(Qt.Key_Shift): "Shift",
    int(Qt.Key_Control): "Control",
    int(Qt.Key_Alt): "Alt",
    int(Qt.Key_AltGr): "AltGr",
    int(Qt.Key_Meta): "Meta",
    int(Qt.Key_Super_L): "Super",
    int(Qt.Key_Super_R): "Super",
    int(Qt.Key_Hyper_L): "Hyper",
    int(Qt.Key_Hyper_R): "Hyper",
    int(Qt.Key_CapsLock): "CapsLock",
    int(Qt.Key_Mode_switch): "AltGr",
}
_QT_COMPOSING_KEYS: frozenset[int] = frozenset({0, int(Qt.Key_unknown)})
_QT_MODIFIER_MASK = (
    Qt.KeyboardModifier.ControlModifier
    | Qt.KeyboardModifier.AltModifier
    | Qt.KeyboardModifier.MetaModifier
)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    is_composing: bool = False
    key_code: int = 0


def is_modifier_key(key: str) -> bool:
    return str(key or "") in MODIFIER_KEY_NAMES


def is_composition_event(stroke: KeyStroke) -> bool:
    if stroke.is_composing:
        return True
    if stroke.key in IME_SENTINEL_KEYS:
        return True
    return int(stroke.key_code or 0) == IME_LEGACY_KEY_CODE


def resolve_keystroke(stroke: KeyStroke) -> str | None:
    """Return the symbol the resolver should see, or ``None`` to drop the event."""
    if is_composition_event(stroke):
        return None
    key = str(stroke.key or "")
    if not key or is_modifier_key(key):
        return None
    return key


def keystroke_from_qt_event(event: QKeyEvent) -> KeyStroke:
    qt_key = int(event.key())
    modifier_name = _QT_MODIFIER_KEYS.get(qt_key)
    if modifier_name is not None:
        return KeyStroke(key=modifier_name)

    text = str(event.text() or "")
    if qt_key in _QT_COMPOSING_KEYS and not text:
        return KeyStroke(key="", is_composing=True)

    held = event.modifiers() & _QT_MODIFIER_MASK
    mods = int(getattr(held, "value", held))
    # Ctrl/Alt/Meta chords are named even when Qt supplies text for them.
    if not mods and len(text) == 1 and text.isprintable():
        return KeyStroke(key=text)

    name = QKeySequence(mods | qt_key).toString(QKeySequence.PortableText)
    return KeyStroke(key=str(name or ""))


__all__ = [
    "MODIFIER_KEY_NAMES",
    "IME_SENTINEL_KEYS",
    "IME_LEGACY_KEY_CODE",
    "KeyStroke",
    "is_modifier_key",
    "is_composition_event",
    "resolve_keystroke",
    "keystroke_from_qt_event",
]
