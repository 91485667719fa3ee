"""Font sizing and emphasis policy for jump labels."""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

from src.core.jump_models import JumpTarget

MAX_FONT_SIZE = 20
MIN_FONT_SIZE = 12

# Label chrome: 2px padding top and bottom, 1px border top and bottom, and a
# 2px gap kept free between stacked labels.
LABEL_PADDING_V = 4
LABEL_BORDER_V = 2
LABEL_MARGIN = 2
LABEL_VERTICAL_OVERHEAD = LABEL_PADDING_V + LABEL_BORDER_V + LABEL_MARGIN


class LabelEmphasis(str, Enum):
    NORMAL = "normal"
    EMPHASIZED = "emphasized"
    DIMMED = "dimmed"


def font_size_for_gap(
    available: float,
    *,
    max_size: int = MAX_FONT_SIZE,
    min_size: int = MIN_FONT_SIZE,
    overhead: int = LABEL_VERTICAL_OVERHEAD,
) -> int:
    # Stylesheet sizes are whole pixels; round down so the label fits its gap.
    allowed = math.floor(available - overhead)
    if allowed < max_size:
        return max(min_size, allowed)
    return max_size


def compute_label_font_sizes(
    tops: Sequence[float],
    *,
    max_size: int = MAX_FONT_SIZE,
    min_size: int = MIN_FONT_SIZE,
    overhead: int = LABEL_VERTICAL_OVERHEAD,
) -> list[int]:
    """Return one font size per label, sized to the gap below it.

    Only the next label down is consulted. The last label has nothing below
    it and always gets ``max_size``.
    """
    sizes: list[int] = []
    count = len(tops)
    for index in range(count):
        if index + 1 >= count:
            sizes.append(max_size)
            continue
        gap = float(tops[index + 1]) - float(tops[index])
        sizes.append(font_size_for_gap(gap, max_size=max_size, min_size=min_size, overhead=overhead))
    return sizes


def font_sizes_for_targets(targets: Sequence[JumpTarget]) -> list[int]:
    return compute_label_font_sizes([target.top for target in targets])


def label_emphasis(target: JumpTarget, pending_prefix: str | None) -> LabelEmphasis:
    if pending_prefix is None:
        return LabelEmphasis.NORMAL
    if target.label.startswith(pending_prefix):
        return LabelEmphasis.EMPHASIZED
    return LabelEmphasis.DIMMED


__all__ = [
    "MAX_FONT_SIZE",
    "MIN_FONT_SIZE",
    "LABEL_VERTICAL_OVERHEAD",
    "LabelEmphasis",
    "font_size_for_gap",
    "compute_label_font_sizes",
    "font_sizes_for_targets",
    "label_emphasis",
]
