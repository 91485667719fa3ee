from __future__ import annotations

import pytest

from src.core.jump_models import JumpTarget, RawTarget
from src.core.label_geometry import (
    LabelEmphasis,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    compute_label_font_sizes,
    font_size_for_gap,
    label_emphasis,
)


@pytest.mark.parametrize(
    ("gap", "expected"),
    [(40, 20), (28, 20), (27, 19), (24, 16), (20, 12), (10, 12), (0, 12)],
)
def test_font_size_for_gap(gap, expected):
    assert font_size_for_gap(gap) == expected


def test_last_label_always_gets_max_size():
    sizes = compute_label_font_sizes([0, 10, 20])
    assert sizes == [MIN_FONT_SIZE, MIN_FONT_SIZE, MAX_FONT_SIZE]


def test_only_next_label_is_consulted():
    sizes = compute_label_font_sizes([0, 24, 100])
    assert sizes == [16, 20, 20]


def test_no_labels():
    assert compute_label_font_sizes([]) == []


def _target(label: str) -> JumpTarget:
    raw = RawTarget(line_index=0, top=0.0, left=0.0)
    if len(label) == 2:
        return JumpTarget.from_raw(raw, label[1], label[0])
    return JumpTarget.from_raw(raw, label)


def test_emphasis_without_pending_prefix():
    assert label_emphasis(_target("a"), None) is LabelEmphasis.NORMAL
    assert label_emphasis(_target("ja"), None) is LabelEmphasis.NORMAL


def test_emphasis_with_pending_prefix():
    assert label_emphasis(_target("ja"), "j") is LabelEmphasis.EMPHASIZED
    assert label_emphasis(_target("ka"), "j") is LabelEmphasis.DIMMED
    assert label_emphasis(_target("a"), "j") is LabelEmphasis.DIMMED


def test_fractional_gap_rounds_down_to_whole_pixels():
    assert font_size_for_gap(27.5) == 19
    assert font_size_for_gap(27.99) == 19
    assert compute_label_font_sizes([0.0, 27.5, 60.0]) == [19, 20, 20]
