"""Qt-aware controllers used by the main window."""

from .action_registry import ActionRegistry
from .line_jump_controller import JumpSession, LineJumpController

__all__ = [
    "ActionRegistry",
    "JumpSession",
    "LineJumpController",
]
