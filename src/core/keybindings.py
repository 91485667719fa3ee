"""Keybinding catalogue, chord normalization, and conflict detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PySide6.QtGui import QKeySequence

Keybindings = dict[str, dict[str, list[str]]]

_MODIFIER_ORDER = ("Ctrl", "Alt", "Shift", "Meta")
_MODIFIER_ALIASES = {
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "alt": "Alt",
    "option": "Alt",
    "shift": "Shift",
    "meta": "Meta",
    "cmd": "Meta",
    "command": "Meta",
    "super": "Meta",
    "win": "Meta",
}
_KEY_ALIASES = {
    "semicolon": ";",
    "comma": ",",
    "period": ".",
    "bracketleft": "[",
    "bracketright": "]",
    "esc": "Esc",
    "escape": "Esc",
}


@dataclass(frozen=True, slots=True)
class KeybindingAction:
    scope: str
    action_id: str
    action_name: str
    default_sequence: tuple[str, ...]


KEYBINDING_ACTIONS: tuple[KeybindingAction, ...] = (
    KeybindingAction("general", "action.open_file", "Open File", ("Ctrl+O",)),
    KeybindingAction("general", "action.exit", "Exit", ("Ctrl+Q",)),
    KeybindingAction("general", "action.line_jump", "Jump to Line", ("Ctrl+;",)),
    KeybindingAction("general", "action.toggle_fold", "Toggle Fold", ("Ctrl+Shift+[",)),
    KeybindingAction("general", "action.toggle_word_wrap", "Toggle Word Wrap", ("Alt+Z",)),
)


def default_keybindings() -> Keybindings:
    out: Keybindings = {}
    for action in KEYBINDING_ACTIONS:
        out.setdefault(action.scope, {})[action.action_id] = list(action.default_sequence)
    return out


def canonicalize_chord_text(text: str) -> str:
    """Return ``text`` as ``Ctrl+Alt+Shift+Meta+Key``, or ``""`` when it names no key.

    The parse is done by hand because ``QKeySequence`` drops modifiers on some
    punctuation chords such as ``Ctrl+;``. Qt is only asked for the spelling of
    named keys (``pgdown`` -> ``PgDown``).
    """
    raw = str(text or "").strip()
    # A trailing "+" is the plus key itself, not a separator.
    if raw.endswith("++") or raw == "+":
        head, key = raw[:-1], "+"
    else:
        head, _, key = raw.rpartition("+")
    key = key.strip()
    if not key:
        return ""

    modifiers: set[str] = set()
    for part in head.split("+"):
        part = part.strip()
        if not part:
            continue
        name = _MODIFIER_ALIASES.get(part.lower())
        if name is None:
            return ""
        modifiers.add(name)

    alias = _KEY_ALIASES.get(key.lower())
    if alias is not None:
        key = alias
    elif len(key) == 1:
        key = key.upper()
    else:
        spelled = QKeySequence(key).toString(QKeySequence.PortableText).strip()
        if not spelled or "," in spelled:
            return ""
        key = spelled

    return "+".join([name for name in _MODIFIER_ORDER if name in modifiers] + [key])


def normalize_sequence(value: Any) -> list[str]:
    items = [value] if isinstance(value, str) else value if isinstance(value, (list, tuple)) else []
    chords: list[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        for token in item.split(","):
            chord = canonicalize_chord_text(token)
            if chord:
                chords.append(chord)
    return chords


def sequence_to_text(sequence: list[str] | tuple[str, ...]) -> str:
    return ", ".join(normalize_sequence(list(sequence)))


def normalize_keybindings(raw: Any) -> Keybindings:
    merged = default_keybindings()
    if not isinstance(raw, Mapping):
        return merged
    for scope_key, scope_payload in raw.items():
        scope = str(scope_key or "").strip().lower()
        if not scope or not isinstance(scope_payload, Mapping):
            continue
        for action_key, value in scope_payload.items():
            action_id = str(action_key or "").strip()
            sequence = normalize_sequence(value)
            if action_id and sequence:
                merged.setdefault(scope, {})[action_id] = sequence
    return merged


def get_action_sequence(keybindings: Mapping[str, Mapping[str, Any]] | None, *, scope: str, action_id: str) -> list[str]:
    scoped = normalize_keybindings(keybindings).get(str(scope or "").strip().lower(), {})
    return list(scoped.get(str(action_id or "").strip(), []))


def qkeysequence_from_sequence(sequence: list[str] | tuple[str, ...]) -> QKeySequence:
    return QKeySequence(sequence_to_text(sequence))


def find_conflicts(keybindings: Mapping[str, Mapping[str, Any]] | None) -> list[tuple[str, list[KeybindingAction]]]:
    """Group catalogue actions that share a chord within one scope.

    Returns ``(chord, actions)`` pairs in catalogue order, one per shared chord.
    """
    normalized = normalize_keybindings(keybindings)
    owners: dict[tuple[str, str], list[KeybindingAction]] = {}
    for action in KEYBINDING_ACTIONS:
        for chord in normalized.get(action.scope, {}).get(action.action_id, []):
            bucket = owners.setdefault((action.scope, chord), [])
            if action not in bucket:
                bucket.append(action)
    return [(chord, actions) for (_scope, chord), actions in owners.items() if len(actions) > 1]


__all__ = [
    "Keybindings",
    "KeybindingAction",
    "KEYBINDING_ACTIONS",
    "default_keybindings",
    "canonicalize_chord_text",
    "normalize_sequence",
    "sequence_to_text",
    "normalize_keybindings",
    "get_action_sequence",
    "qkeysequence_from_sequence",
    "find_conflicts",
]
