from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypedDict

from src.core.keybindings import default_keybindings

SETTINGS_FILENAME = "settings.json"
APP_DIRNAME = ".linehop"


class LineJumpSettings(TypedDict, total=False):
    label_background: str
    label_foreground: str
    label_border: str
    emphasis_background: str
    emphasis_border: str
    dim_opacity: float
    font_family: str
    report_dropped_targets: bool


class EditorSettings(TypedDict, total=False):
    font_family: str
    font_size: int
    word_wrap: bool


class LoggingSettings(TypedDict, total=False):
    level: str
    to_file: bool


class AppSettings(TypedDict, total=False):
    schema_version: int
    line_jump: LineJumpSettings
    editor: EditorSettings
    logging: LoggingSettings
    keybindings: dict[str, dict[str, list[str]]]
    recent_files: list[str]


@dataclass(frozen=True)
class SettingsPaths:
    app_dir: Path

    @property
    def settings_file(self) -> Path:
        return self.app_dir / SETTINGS_FILENAME


def default_line_jump_settings() -> LineJumpSettings:
    return {
        "label_background": "#FFD700",
        "label_foreground": "#000000",
        "label_border": "#000000",
        "emphasis_background": "#FFA500",
        "emphasis_border": "#FFFFFF",
        "dim_opacity": 0.1,
        "font_family": "monospace",
        "report_dropped_targets": True,
    }


def default_app_settings() -> dict[str, Any]:
    defaults: AppSettings = {
        "schema_version": 1,
        "line_jump": default_line_jump_settings(),
        "editor": {
            "font_family": "Courier New",
            "font_size": 11,
            "word_wrap": False,
        },
        "logging": {
            "level": "INFO",
            "to_file": True,
        },
        "keybindings": default_keybindings(),
        "recent_files": [],
    }
    return deepcopy(dict(defaults))
