"""Main application window hosting a single editor with line jump support."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox

from HopPyside.widgets.code_editor import CodeEditor
from src.settings_manager import SettingsManager
from src.settings_store import SettingsStoreError
from src.ui.controllers.action_registry import ActionRegistry
from src.ui.controllers.line_jump_controller import LineJumpController

_LOGGER = logging.getLogger("linehop.ui")


class LineHopWindow(QMainWindow):
    APP_NAME = "LineHop"
    STATUS_TIMEOUT_MS = 2500

    def __init__(self, settings_manager: SettingsManager, parent=None):
        super().__init__(parent)
        self.settings_manager = settings_manager
        self.recent_files_menu = None
        self._shortcut_action_specs: list[dict] = []

        self.setWindowTitle(self.APP_NAME)
        self.resize(960, 720)

        self.editor = CodeEditor(self)
        self.setCentralWidget(self.editor)

        self.line_jump = LineJumpController(self.editor, parent=self)
        self.editor.lineJumpRequested.connect(self.start_line_jump)
        self.line_jump.targetsDropped.connect(self._on_targets_dropped)
        self.line_jump.jumped.connect(self._on_jumped)
        self.line_jump.prefixChanged.connect(self._on_prefix_changed)
        self.line_jump.cancelled.connect(self.statusBar().clearMessage)

        ActionRegistry.create_actions(self)
        self.apply_settings()

        error = self.settings_manager.load_error()
        if error:
            self.statusBar().showMessage(error, self.STATUS_TIMEOUT_MS * 2)

    def apply_settings(self) -> None:
        manager = self.settings_manager
        self.editor.set_editor_font_preferences(
            family=manager.get("editor.font_family"),
            point_size=manager.get("editor.font_size"),
        )
        self.set_word_wrap_enabled(bool(manager.get("editor.word_wrap", False)))
        keybindings = manager.keybindings()
        self.editor.configure_keybindings(keybindings)
        self.line_jump.set_restart_chords(self.editor.shortcut_sequence("action.line_jump"))
        self.line_jump.set_label_style(manager.label_style())
        ActionRegistry.apply_keybindings(self)

    # ---------- line jump ----------

    def start_line_jump(self) -> bool:
        self.editor.setFocus()
        return self.line_jump.initiate_jump()

    def _on_targets_dropped(self, count: int) -> None:
        if not self.settings_manager.report_dropped_targets():
            return
        noun = "line" if count == 1 else "lines"
        self.statusBar().showMessage(f"{count} visible {noun} could not be labelled.", self.STATUS_TIMEOUT_MS)

    def _on_prefix_changed(self, prefix: object) -> None:
        if prefix:
            self.statusBar().showMessage(f"Prefix '{prefix}'")
        else:
            self.statusBar().clearMessage()

    def _on_jumped(self, line_index: int) -> None:
        self.statusBar().showMessage(f"Line {line_index + 1}", self.STATUS_TIMEOUT_MS)

    # ---------- files ----------

    def open_file_dialog(self) -> None:
        recent = self.settings_manager.get("recent_files", [])
        directory = str(Path(recent[0]).parent) if recent else str(Path.cwd())
        path, _ = QFileDialog.getOpenFileName(self, "Open File", directory)
        if path:
            self.open_file(path)

    def open_file(self, file_path: str | Path) -> bool:
        path = Path(file_path).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Could not open '%s': %s", path, exc)
            QMessageBox.warning(self, "Open File", f"Could not open file:\n{path}\n\n{exc}")
            return False

        self.line_jump.cancel()
        self.editor.set_file_path(str(path))
        self.editor.setPlainText(text)
        self.setWindowTitle(f"{path.name} - {self.APP_NAME}")
        self.settings_manager.add_recent_file(path)
        self.refresh_recent_files_menu()
        _LOGGER.info("Opened %s", path)
        return True

    def refresh_recent_files_menu(self) -> None:
        menu = self.recent_files_menu
        if menu is None:
            return
        menu.clear()
        recent = self.settings_manager.get("recent_files", [])
        shown = 0
        for path in recent:
            if not Path(path).is_file():
                continue
            shown += 1
            action = menu.addAction(path)
            action.triggered.connect(lambda _checked=False, p=path: self.open_file(p))
        if shown == 0:
            placeholder = menu.addAction("No Recent Files")
            placeholder.setEnabled(False)

    # ---------- view ----------

    def set_word_wrap_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        self.line_jump.cancel()
        self.editor.set_word_wrap_enabled(enabled)
        action = getattr(self, "_act_word_wrap", None)
        if action is not None and action.isChecked() != enabled:
            action.setChecked(enabled)
        self.settings_manager.set("editor.word_wrap", enabled)

    def closeEvent(self, event):
        self.line_jump.shutdown()
        try:
            self.settings_manager.save_all(only_dirty=True)
        except SettingsStoreError as exc:
            _LOGGER.error("%s", exc)
        super().closeEvent(event)
