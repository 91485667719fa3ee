"""Value types shared by the line-jump pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineCoordinates:
    left: float
    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True, slots=True)
class ViewBounds:
    top: float
    bottom: float

    def excludes(self, coords: LineCoordinates) -> bool:
        return coords.bottom < self.top or coords.top > self.bottom


@dataclass(frozen=True, slots=True)
class RawTarget:
    line_index: int
    top: float
    left: float


@dataclass(frozen=True, slots=True)
class JumpTarget:
    line_index: int
    top: float
    left: float
    char: str
    label: str
    prefix: str | None = None

    @classmethod
    def from_raw(cls, raw: RawTarget, char: str, prefix: str | None = None) -> "JumpTarget":
        label = f"{prefix}{char}" if prefix is not None else char
        return cls(
            line_index=raw.line_index,
            top=raw.top,
            left=raw.left,
            char=char,
            label=label,
            prefix=prefix,
        )

    @property
    def keystrokes(self) -> tuple[str, ...]:
        if self.prefix is None:
            return (self.char,)
        return (self.prefix, self.char)


@dataclass(frozen=True, slots=True)
class KeyScheme:
    alphabet: tuple[str, ...]
    base_keys: tuple[str, ...]
    active_prefixes: tuple[str, ...]

    @property
    def prefix_count(self) -> int:
        return len(self.active_prefixes)

    @property
    def capacity(self) -> int:
        return len(self.base_keys) + len(self.active_prefixes) * len(self.alphabet)


@dataclass(frozen=True, slots=True)
class AssignmentResult:
    targets: tuple[JumpTarget, ...]
    scheme: KeyScheme
    dropped: int = 0

    def __len__(self) -> int:
        return len(self.targets)


__all__ = [
    "LineCoordinates",
    "ViewBounds",
    "RawTarget",
    "JumpTarget",
    "KeyScheme",
    "AssignmentResult",
]
