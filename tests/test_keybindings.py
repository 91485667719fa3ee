from __future__ import annotations

import pytest

from src.core.keybindings import (
    canonicalize_chord_text,
    default_keybindings,
    find_conflicts,
    get_action_sequence,
    normalize_keybindings,
    normalize_sequence,
    sequence_to_text,
)


def test_defaults_include_line_jump():
    defaults = default_keybindings()
    assert defaults["general"]["action.line_jump"] == ["Ctrl+;"]
    assert defaults["general"]["action.toggle_fold"] == ["Ctrl+Shift+["]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("ctrl+o", "Ctrl+O"),
        ("Control+semicolon", "Ctrl+;"),
        ("shift+ctrl+[", "Ctrl+Shift+["),
        ("Ctrl++", "Ctrl++"),
        ("cmd+escape", "Meta+Esc"),
        ("Ctrl+", ""),
        ("Hyperdrive+x", ""),
        ("", ""),
    ],
)
def test_canonicalize_chord_text(qt_app, text, expected):
    assert canonicalize_chord_text(text) == expected


def test_named_keys_use_qt_spelling(qt_app):
    assert canonicalize_chord_text("alt+f5") == "Alt+F5"


def test_normalize_sequence(qt_app):
    assert normalize_sequence("ctrl+k, ctrl+j") == ["Ctrl+K", "Ctrl+J"]
    assert normalize_sequence(["Alt+z", "", 5]) == ["Alt+Z"]
    assert normalize_sequence(None) == []
    assert sequence_to_text(["ctrl+k", "ctrl+j"]) == "Ctrl+K, Ctrl+J"


def test_normalize_keybindings_merges_over_defaults(qt_app):
    merged = normalize_keybindings({"General": {"action.exit": "ctrl+w", "action.open_file": []}, "bogus": "x"})
    assert merged["general"]["action.exit"] == ["Ctrl+W"]
    assert merged["general"]["action.open_file"] == ["Ctrl+O"]
    assert merged["general"]["action.line_jump"] == ["Ctrl+;"]
    assert "bogus" not in merged


def test_get_action_sequence(qt_app):
    custom = {"general": {"action.line_jump": ["Alt+J"]}}
    assert get_action_sequence(custom, scope="general", action_id="action.line_jump") == ["Alt+J"]
    assert get_action_sequence(None, scope="general", action_id="action.line_jump") == ["Ctrl+;"]
    assert get_action_sequence({}, scope="general", action_id="action.nope") == []


def test_conflicts_are_grouped_by_chord(qt_app):
    bindings = {"general": {"action.line_jump": ["Ctrl+O"], "action.exit": "ctrl+o"}}
    conflicts = find_conflicts(bindings)
    assert len(conflicts) == 1
    chord, actions = conflicts[0]
    assert chord == "Ctrl+O"
    assert [a.action_id for a in actions] == ["action.open_file", "action.exit", "action.line_jump"]


def test_defaults_have_no_conflicts(qt_app):
    assert find_conflicts(default_keybindings()) == []
