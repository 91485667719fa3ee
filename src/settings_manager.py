from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

from HopPyside.widgets.jump_overlay import JumpLabelStyle
from src.core.keybindings import find_conflicts, normalize_keybindings
from src.settings_models import APP_DIRNAME, SettingsPaths, default_app_settings, default_line_jump_settings
from src.settings_store import JsonSettingsStore

APP_DIR_ENV = "LINEHOP_APP_DIR"
MAX_RECENT_FILES = 10

_LOGGER = logging.getLogger("linehop.settings")
_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6})")
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LINE_JUMP_COLOR_KEYS = (
    "label_background",
    "label_foreground",
    "label_border",
    "emphasis_background",
    "emphasis_border",
)


def default_app_dir() -> Path:
    override = os.environ.get(APP_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / APP_DIRNAME


def _valid_color_hex(value: object, fallback: str) -> str:
    text = str(value or "").strip()
    if _COLOR_RE.fullmatch(text):
        return text.upper()
    return fallback


def _bounded_float(value: object, fallback: float, *, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if number != number or number < low or number > high:
        return fallback
    return number


def _bounded_int(value: object, fallback: int, *, low: int, high: int) -> int:
    if isinstance(value, bool):
        return fallback
    try:
        number = int(value)
    except (TypeError, ValueError):
        return fallback
    return max(low, min(high, number))


class SettingsManager:
    def __init__(self, app_dir: str | Path | None = None, *, persistent: bool = True) -> None:
        self.paths = SettingsPaths(app_dir=Path(app_dir).expanduser() if app_dir else default_app_dir())
        self._store = JsonSettingsStore(self.paths.settings_file, default_app_settings(), persistent=persistent)

    @property
    def settings_path(self) -> Path:
        return self.paths.settings_file

    @property
    def store(self) -> JsonSettingsStore:
        return self._store

    def load_error(self) -> str | None:
        return self._store.last_error

    def load_all(self) -> None:
        self._store.load()
        if self._normalize_all():
            self._store.dirty = True
        for chord, actions in find_conflicts(self._store.get("keybindings")):
            _LOGGER.warning(
                "Keybinding conflict: %s is bound to %s.",
                chord,
                ", ".join(repr(action.action_name) for action in actions),
            )

    def save_all(self, *, only_dirty: bool = False) -> bool:
        if only_dirty and not self._store.dirty:
            return False
        self._store.save()
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        changed = self._store.set(key, value)
        if changed:
            self._normalize_all()
        return changed

    def keybindings(self) -> dict[str, dict[str, list[str]]]:
        return normalize_keybindings(self._store.get("keybindings"))

    def label_style(self) -> JumpLabelStyle:
        cfg = self._store.get("line_jump", {})
        return JumpLabelStyle(
            background=cfg["label_background"],
            foreground=cfg["label_foreground"],
            border=cfg["label_border"],
            emphasis_background=cfg["emphasis_background"],
            emphasis_border=cfg["emphasis_border"],
            dim_opacity=float(cfg["dim_opacity"]),
            font_family=str(cfg["font_family"]),
        )

    def report_dropped_targets(self) -> bool:
        return bool(self._store.get("line_jump.report_dropped_targets", True))

    def log_level(self) -> str:
        return str(self._store.get("logging.level", "INFO"))

    def log_to_file(self) -> bool:
        return bool(self._store.get("logging.to_file", True))

    def add_recent_file(self, file_path: str | Path) -> None:
        text = str(Path(file_path).expanduser())
        recent = [item for item in self._store.get("recent_files", []) if item != text]
        recent.insert(0, text)
        self._store.set("recent_files", recent[:MAX_RECENT_FILES])

    def _normalize_all(self) -> bool:
        before = self._store.snapshot()
        data = self._store.data

        defaults = default_line_jump_settings()
        line_jump = data.get("line_jump")
        if not isinstance(line_jump, dict):
            line_jump = dict(defaults)
            data["line_jump"] = line_jump
        for key in _LINE_JUMP_COLOR_KEYS:
            line_jump[key] = _valid_color_hex(line_jump.get(key), defaults[key])
        line_jump["dim_opacity"] = _bounded_float(
            line_jump.get("dim_opacity"), defaults["dim_opacity"], low=0.0, high=1.0
        )
        line_jump["font_family"] = str(line_jump.get("font_family") or "").strip() or defaults["font_family"]
        line_jump["report_dropped_targets"] = bool(line_jump.get("report_dropped_targets", True))

        editor = data.get("editor")
        if not isinstance(editor, dict):
            editor = {}
            data["editor"] = editor
        editor["font_family"] = str(editor.get("font_family") or "").strip() or "Courier New"
        editor["font_size"] = _bounded_int(editor.get("font_size"), 11, low=6, high=72)
        editor["word_wrap"] = bool(editor.get("word_wrap", False))

        log_cfg = data.get("logging")
        if not isinstance(log_cfg, dict):
            log_cfg = {}
            data["logging"] = log_cfg
        level = str(log_cfg.get("level") or "").strip().upper()
        log_cfg["level"] = level if level in _LOG_LEVELS else "INFO"
        log_cfg["to_file"] = bool(log_cfg.get("to_file", True))

        data["keybindings"] = normalize_keybindings(data.get("keybindings"))

        recent = data.get("recent_files")
        if not isinstance(recent, list):
            recent = []
        data["recent_files"] = [str(item) for item in recent if str(item or "").strip()][:MAX_RECENT_FILES]

        return data != before
