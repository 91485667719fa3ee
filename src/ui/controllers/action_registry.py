"""Central QAction/QMenu construction for the main window."""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMenuBar

from src.core.keybindings import get_action_sequence, normalize_keybindings, qkeysequence_from_sequence

_LOGGER = logging.getLogger("linehop.ui")


class ActionRegistry:
    @staticmethod
    def _register_shortcut_action(
        window: Any,
        action: QAction,
        *,
        scope: str,
        action_ids: tuple[str, ...],
        display_only: bool = False,
    ) -> None:
        specs = getattr(window, "_shortcut_action_specs", None)
        if not isinstance(specs, list):
            specs = []
            window._shortcut_action_specs = specs
        specs.append(
            {
                "action": action,
                "label": action.text(),
                "scope": str(scope or "general"),
                "action_ids": tuple(str(item or "").strip() for item in action_ids if str(item or "").strip()),
                "display_only": bool(display_only),
            }
        )

    @staticmethod
    def apply_keybindings(main_window: Any) -> None:
        window = main_window
        specs = getattr(window, "_shortcut_action_specs", [])
        if not isinstance(specs, list) or not specs:
            return
        keybindings = normalize_keybindings(window.settings_manager.keybindings())

        for spec in specs:
            action = spec.get("action")
            if not isinstance(action, QAction):
                continue
            scope = str(spec.get("scope") or "general")
            action_ids = tuple(spec.get("action_ids") or ())

            seen_texts: set[str] = set()
            sequences = []
            for action_id in action_ids:
                seq = get_action_sequence(keybindings, scope=scope, action_id=action_id)
                qseq = qkeysequence_from_sequence(seq)
                text = qseq.toString()
                if not text or text in seen_texts:
                    continue
                seen_texts.add(text)
                sequences.append(qseq)

            if spec.get("display_only"):
                # The editor owns these shortcuts; the menu only shows them.
                label = str(spec.get("label") or "")
                hint = ", ".join(seq.toString() for seq in sequences)
                action.setText(f"{label}\t{hint}" if hint else label)
                continue
            if not sequences:
                action.setShortcut("")
                continue
            if len(sequences) == 1:
                action.setShortcut(sequences[0])
                continue
            action.setShortcuts(sequences)
        _LOGGER.debug("Applied keybindings to %d menu actions.", len(specs))

    @staticmethod
    def create_actions(main_window) -> None:
        window = main_window
        window._shortcut_action_specs = []

        menubar = QMenuBar(window)
        window.setMenuBar(menubar)

        file_menu = menubar.addMenu("&File")

        act_open = QAction("Open File...", window)
        act_open.triggered.connect(window.open_file_dialog)
        ActionRegistry._register_shortcut_action(window, act_open, scope="general", action_ids=("action.open_file",))
        file_menu.addAction(act_open)

        window.recent_files_menu = file_menu.addMenu("Recent Files")
        window.refresh_recent_files_menu()

        file_menu.addSeparator()

        act_exit = QAction("Exit", window)
        act_exit.triggered.connect(window.close)
        ActionRegistry._register_shortcut_action(window, act_exit, scope="general", action_ids=("action.exit",))
        file_menu.addAction(act_exit)

        navigate_menu = menubar.addMenu("&Navigate")

        act_line_jump = QAction("Jump to Line", window)
        act_line_jump.triggered.connect(window.start_line_jump)
        ActionRegistry._register_shortcut_action(
            window,
            act_line_jump,
            scope="general",
            action_ids=("action.line_jump",),
            display_only=True,
        )
        navigate_menu.addAction(act_line_jump)
        window._act_line_jump = act_line_jump

        act_toggle_fold = QAction("Toggle Fold", window)
        act_toggle_fold.triggered.connect(window.editor.toggle_fold_at_cursor)
        ActionRegistry._register_shortcut_action(
            window,
            act_toggle_fold,
            scope="general",
            action_ids=("action.toggle_fold",),
            display_only=True,
        )
        navigate_menu.addAction(act_toggle_fold)

        view_menu = menubar.addMenu("&View")

        act_word_wrap = QAction("Word Wrap", window)
        act_word_wrap.setCheckable(True)
        act_word_wrap.setChecked(window.editor.is_word_wrap_enabled())
        act_word_wrap.toggled.connect(window.set_word_wrap_enabled)
        ActionRegistry._register_shortcut_action(
            window,
            act_word_wrap,
            scope="general",
            action_ids=("action.toggle_word_wrap",),
        )
        view_menu.addAction(act_word_wrap)
        window._act_word_wrap = act_word_wrap

        ActionRegistry.apply_keybindings(window)
