"""Reusable PySide widgets shared across projects."""

from .code_editor import CodeEditor
from .jump_overlay import JumpLabelOverlay, JumpLabelStyle

__all__ = ["CodeEditor", "JumpLabelOverlay", "JumpLabelStyle"]
