"""Keystroke-by-keystroke resolution of jump labels.

The resolver has two states: idle, or waiting for the suffix of a pending
prefix. Every keystroke produces exactly one effect. A matching label always
wins over a prefix start, and while a prefix is pending the only accepted
keys are a matching suffix or the same prefix again (which backs out of the
prefix without ending the session). Any other key cancels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from src.core.jump_models import JumpTarget


@dataclass(frozen=True, slots=True)
class Jump:
    target: JumpTarget


@dataclass(frozen=True, slots=True)
class Cancel:
    key: str = ""


@dataclass(frozen=True, slots=True)
class UpdateVisibility:
    pending_prefix: str | None


ResolverEffect = Union[Jump, Cancel, UpdateVisibility]


class InputResolver:
    def __init__(self, targets: Sequence[JumpTarget]):
        self._targets: tuple[JumpTarget, ...] = tuple(targets)
        self._single: dict[str, JumpTarget] = {}
        self._paired: dict[tuple[str, str], JumpTarget] = {}
        for target in self._targets:
            if target.prefix is None:
                self._single[target.char] = target
            else:
                self._paired[(target.prefix, target.char)] = target
        self._prefixes: frozenset[str] = frozenset(prefix for prefix, _char in self._paired)
        self._pending_prefix: str | None = None

    @property
    def targets(self) -> tuple[JumpTarget, ...]:
        return self._targets

    @property
    def pending_prefix(self) -> str | None:
        return self._pending_prefix

    @property
    def is_idle(self) -> bool:
        return self._pending_prefix is None

    def is_prefix(self, key: str) -> bool:
        return key in self._prefixes

    def reset(self) -> None:
        self._pending_prefix = None

    def feed(self, key: str) -> ResolverEffect:
        pending = self._pending_prefix
        if pending is None:
            return self._feed_idle(key)
        return self._feed_pending(pending, key)

    def _feed_idle(self, key: str) -> ResolverEffect:
        target = self._single.get(key)
        if target is not None:
            return Jump(target)
        if key in self._prefixes:
            self._pending_prefix = key
            return UpdateVisibility(key)
        return Cancel(key)

    def _feed_pending(self, prefix: str, key: str) -> ResolverEffect:
        self._pending_prefix = None
        target = self._paired.get((prefix, key))
        if target is not None:
            return Jump(target)
        if key == prefix:
            return UpdateVisibility(None)
        return Cancel(key)


__all__ = [
    "Jump",
    "Cancel",
    "UpdateVisibility",
    "ResolverEffect",
    "InputResolver",
]
