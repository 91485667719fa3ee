"""Orchestrates one line-jump invocation on an editor widget."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from PySide6.QtCore import QEvent, QObject, Signal
from PySide6.QtGui import QKeyEvent, QKeySequence
from PySide6.QtWidgets import QApplication, QLabel, QPlainTextEdit, QTextEdit

from HopPyside.widgets.jump_overlay import JumpLabelOverlay, JumpLabelStyle
from src.core.input_resolver import Cancel, InputResolver, Jump, ResolverEffect, UpdateVisibility
from src.core.jump_models import AssignmentResult
from src.core.key_scheme import assign_jump_targets
from src.core.keystrokes import KeyStroke, keystroke_from_qt_event, resolve_keystroke
from src.core.label_geometry import font_sizes_for_targets, label_emphasis
from src.services.viewport_inspector import LineGeometrySource, collect_raw_targets, line_source_for

_LOGGER = logging.getLogger("linehop.jump")


@dataclass
class JumpSession:
    assignment: AssignmentResult
    resolver: InputResolver
    overlay: JumpLabelOverlay
    handles: dict[str, QLabel] = field(default_factory=dict)

    @property
    def pending_prefix(self) -> str | None:
        return self.resolver.pending_prefix


class LineJumpController(QObject):
    sessionStarted = Signal(int)  # labelled target count
    targetsDropped = Signal(int)  # candidates past the scheme capacity
    prefixChanged = Signal(object)  # pending prefix or None
    jumped = Signal(int)  # line index
    cancelled = Signal()

    def __init__(
        self,
        editor: QPlainTextEdit | QTextEdit,
        *,
        line_source: LineGeometrySource | None = None,
        label_style: JumpLabelStyle | None = None,
        restart_chords: Iterable[str] = (),
        parent: QObject | None = None,
    ):
        super().__init__(parent if parent is not None else editor)
        self._editor = editor
        self._editor_alive = True
        self._line_source = line_source if line_source is not None else line_source_for(editor)
        self._label_style = label_style or JumpLabelStyle()
        self._session: JumpSession | None = None
        self._key_filter_installed = False
        self._restart_chords: frozenset[str] = frozenset()
        self.set_restart_chords(restart_chords)

        editor.verticalScrollBar().valueChanged.connect(self._on_view_changed)
        editor.horizontalScrollBar().valueChanged.connect(self._on_view_changed)
        editor.textChanged.connect(self._on_view_changed)
        editor.destroyed.connect(self._on_editor_destroyed)

    @property
    def editor(self) -> QPlainTextEdit | QTextEdit:
        return self._editor

    @property
    def session(self) -> JumpSession | None:
        return self._session

    def is_active(self) -> bool:
        return self._session is not None

    def label_style(self) -> JumpLabelStyle:
        return self._label_style

    def set_label_style(self, style: JumpLabelStyle) -> None:
        self._label_style = style

    def restart_chords(self) -> frozenset[str]:
        return self._restart_chords

    def set_restart_chords(self, chords: Iterable[str]) -> None:
        """Chords that restart an active session instead of reaching the resolver.

        Shortcuts cannot fire while a session holds the keyboard, so the
        command's own chords are matched here. Multi-chord sequences are skipped.
        """
        names = set()
        for chord in chords:
            sequence = QKeySequence(str(chord))
            if sequence.count() == 1:
                names.add(sequence.toString(QKeySequence.SequenceFormat.PortableText))
        self._restart_chords = frozenset(names)

    def initiate_jump(self) -> bool:
        self._teardown()
        if not self._editor_alive:
            return False

        raw_targets = collect_raw_targets(self._line_source)
        if not raw_targets:
            _LOGGER.debug("Line jump skipped: no visible lines.")
            return False

        assignment = assign_jump_targets(raw_targets)
        scheme = assignment.scheme
        _LOGGER.debug(
            "Line jump started: %d candidates, %d prefixes (%s), capacity %d.",
            len(raw_targets),
            scheme.prefix_count,
            "".join(scheme.active_prefixes) or "-",
            scheme.capacity,
        )

        overlay = JumpLabelOverlay(self._editor.viewport(), self._label_style)
        handles: dict[str, QLabel] = {}
        for target, font_px in zip(assignment.targets, font_sizes_for_targets(assignment.targets)):
            handles[target.label] = overlay.add_label(target.label, target.left, target.top, font_px)
        overlay.show()
        overlay.raise_()

        self._session = JumpSession(
            assignment=assignment,
            resolver=InputResolver(assignment.targets),
            overlay=overlay,
            handles=handles,
        )
        self._install_key_filter()
        self.sessionStarted.emit(len(assignment))
        if assignment.dropped:
            _LOGGER.debug("Line jump dropped %d candidates past capacity.", assignment.dropped)
            self.targetsDropped.emit(assignment.dropped)
        return True

    def cancel(self) -> bool:
        if self._session is None:
            return False
        self._teardown()
        self.cancelled.emit()
        return True

    def shutdown(self) -> None:
        self._teardown()

    def handle_keystroke(self, stroke: KeyStroke) -> bool:
        """Feed one keystroke to the active session; return True when it was consumed."""
        session = self._session
        if session is None:
            return False
        key = resolve_keystroke(stroke)
        if key is None:
            return False
        self._apply_effect(session, session.resolver.feed(key))
        return True

    def eventFilter(self, watched, event):
        if self._session is not None and event is not None:
            et = event.type()
            if et == QEvent.ShortcutOverride:
                event.accept()
                return True
            if et == QEvent.KeyPress and isinstance(event, QKeyEvent):
                stroke = keystroke_from_qt_event(event)
                if stroke.key in self._restart_chords:
                    _LOGGER.debug("Line jump restarted by %r.", stroke.key)
                    self.initiate_jump()
                    event.accept()
                    return True
                if self.handle_keystroke(stroke):
                    event.accept()
                    return True
        return super().eventFilter(watched, event)

    def _apply_effect(self, session: JumpSession, effect: ResolverEffect) -> None:
        if isinstance(effect, Jump):
            line = effect.target.line_index
            self._teardown()
            self._line_source.move_cursor_to_line(line)
            _LOGGER.debug("Line jump to line %d via %r.", line, effect.target.label)
            self.jumped.emit(line)
            return
        if isinstance(effect, UpdateVisibility):
            self._apply_visibility(session, effect.pending_prefix)
            self.prefixChanged.emit(effect.pending_prefix)
            return
        if isinstance(effect, Cancel):
            _LOGGER.debug("Line jump cancelled by key %r.", effect.key)
            self.cancel()

    def _apply_visibility(self, session: JumpSession, pending_prefix: str | None) -> None:
        for target in session.assignment.targets:
            handle = session.handles.get(target.label)
            if handle is None:
                continue
            session.overlay.set_label_emphasis(handle, label_emphasis(target, pending_prefix).value)

    def _install_key_filter(self) -> None:
        if self._key_filter_installed:
            return
        app = QApplication.instance()
        if app is None:
            return
        app.installEventFilter(self)
        self._key_filter_installed = True

    def _remove_key_filter(self) -> None:
        if not self._key_filter_installed:
            return
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self._key_filter_installed = False

    def _teardown(self) -> None:
        self._remove_key_filter()
        session = self._session
        self._session = None
        if session is None:
            return
        session.resolver.reset()
        if self._editor_alive:
            session.overlay.dispose()

    def _on_view_changed(self, *_args) -> None:
        if self._session is not None:
            _LOGGER.debug("Line jump torn down: editor view changed.")
            self.cancel()

    def _on_editor_destroyed(self, *_args) -> None:
        self._editor_alive = False
        self._teardown()


__all__ = ["JumpSession", "LineJumpController"]
