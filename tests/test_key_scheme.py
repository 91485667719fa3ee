from __future__ import annotations

import pytest

from src.core.key_scheme import (
    DEFAULT_ALPHABET,
    assign_jump_targets,
    choose_key_scheme,
    prefix_count_for,
    scheme_capacity,
)


def test_capacity_grows_with_prefixes():
    assert scheme_capacity(0) == 26
    assert scheme_capacity(1) == 51
    assert scheme_capacity(2) == 76
    assert scheme_capacity(17) == 451


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, 0), (1, 0), (26, 0), (27, 1), (51, 1), (52, 2), (451, 17), (1000, 17)],
)
def test_prefix_count_is_minimal(count, expected):
    assert prefix_count_for(count) == expected


def test_no_candidates_yields_empty_assignment(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(0))
    assert len(result) == 0
    assert result.dropped == 0
    assert result.scheme.active_prefixes == ()


@pytest.mark.parametrize("count", [1, 5, 13, 25, 26])
def test_single_keystroke_labels_follow_alphabet(make_raw_targets, count):
    result = assign_jump_targets(make_raw_targets(count))
    assert [t.label for t in result.targets] == list(DEFAULT_ALPHABET[:count])
    assert all(t.prefix is None for t in result.targets)


def test_twenty_seven_candidates_use_prefix_j(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(27))
    labels = [t.label for t in result.targets]
    assert result.scheme.active_prefixes == ("j",)
    assert "j" not in labels
    assert labels[:9] == list("abcdefghi")
    assert labels[9] == "k"
    assert labels[24] == "z"
    assert labels[25:] == ["ja", "jb"]


def test_thirty_candidates_end_with_ja_to_je(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(30))
    tail = result.targets[25:]
    assert [t.label for t in tail] == ["ja", "jb", "jc", "jd", "je"]
    assert [t.line_index for t in tail] == [25, 26, 27, 28, 29]
    assert tail[2].keystrokes == ("j", "c")


def test_second_prefix_is_k(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(52))
    assert result.scheme.active_prefixes == ("j", "k")
    assert len(result.scheme.base_keys) == 24
    assert [t.label for t in result.targets[-2:]] == ["ka", "kb"]


def test_labels_are_unique_and_prefix_free(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(200))
    labels = [t.label for t in result.targets]
    assert len(labels) == len(set(labels))
    prefixes = set(result.scheme.active_prefixes)
    singles = {t.label for t in result.targets if t.prefix is None}
    assert not singles & prefixes


def test_overflow_is_reported_as_dropped(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(500))
    assert len(result) == 451
    assert result.dropped == 49
    assert result.targets[-1].line_index == 450
    assert result.targets[-1].label == "zz"


def test_targets_keep_input_order(make_raw_targets):
    result = assign_jump_targets(make_raw_targets(40))
    assert [t.line_index for t in result.targets] == list(range(40))


def test_custom_alphabet():
    scheme = choose_key_scheme(4, alphabet="abc", prefix_order="c")
    assert scheme.base_keys == ("a", "b")
    assert scheme.active_prefixes == ("c",)
    assert scheme.capacity == 5


@pytest.mark.parametrize(
    ("alphabet", "prefix_order"),
    [("", ""), ("aab", "b"), ("abc", "d"), (["ab"], "")],
)
def test_invalid_layouts_raise(alphabet, prefix_order):
    with pytest.raises(ValueError):
        choose_key_scheme(1, alphabet=alphabet, prefix_order=prefix_order)
