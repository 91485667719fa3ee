"""Label assignment for jump targets.

Targets are labelled in top-to-bottom order. The first targets receive
single-keystroke labels; once the alphabet runs out, a few symbols are carved
out of it as prefixes, each unlocking one two-keystroke label per alphabet
symbol. The smallest prefix count that fits the candidate count is used, so
prefixes only appear when the view actually needs them.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from src.core.jump_models import AssignmentResult, JumpTarget, KeyScheme, RawTarget

DEFAULT_ALPHABET: tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")
DEFAULT_PREFIX_ORDER: tuple[str, ...] = tuple("jklmnopqrstuvwxyz")


def _validated_symbols(symbols: Iterable[str], *, what: str) -> tuple[str, ...]:
    out = tuple(str(symbol) for symbol in symbols)
    for symbol in out:
        if len(symbol) != 1:
            raise ValueError(f"{what} symbols must be single characters, got {symbol!r}.")
    if len(set(out)) != len(out):
        raise ValueError(f"{what} contains duplicate symbols: {''.join(out)!r}.")
    return out


def _validated_layout(
    alphabet: Sequence[str],
    prefix_order: Sequence[str],
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    letters = _validated_symbols(alphabet, what="Alphabet")
    prefixes = _validated_symbols(prefix_order, what="Prefix order")
    if not letters:
        raise ValueError("Alphabet cannot be empty.")
    outside = [symbol for symbol in prefixes if symbol not in letters]
    if outside:
        raise ValueError(f"Prefix symbols not in alphabet: {''.join(outside)!r}.")
    return letters, prefixes


def scheme_capacity(prefix_count: int, alphabet_size: int = len(DEFAULT_ALPHABET)) -> int:
    p = max(0, int(prefix_count))
    size = max(0, int(alphabet_size))
    return (size - p) + p * size


def prefix_count_for(
    candidate_count: int,
    *,
    alphabet_size: int = len(DEFAULT_ALPHABET),
    max_prefixes: int = len(DEFAULT_PREFIX_ORDER),
) -> int:
    needed = max(0, int(candidate_count))
    limit = max(0, min(int(max_prefixes), int(alphabet_size)))
    for p in range(0, limit + 1):
        if scheme_capacity(p, alphabet_size) >= needed:
            return p
    return limit


def choose_key_scheme(
    candidate_count: int,
    *,
    alphabet: Sequence[str] = DEFAULT_ALPHABET,
    prefix_order: Sequence[str] = DEFAULT_PREFIX_ORDER,
) -> KeyScheme:
    letters, prefixes = _validated_layout(alphabet, prefix_order)
    p = prefix_count_for(candidate_count, alphabet_size=len(letters), max_prefixes=len(prefixes))
    active = prefixes[:p]
    base = tuple(symbol for symbol in letters if symbol not in active)
    return KeyScheme(alphabet=letters, base_keys=base, active_prefixes=active)


def assign_jump_targets(
    raw_targets: Sequence[RawTarget],
    *,
    alphabet: Sequence[str] = DEFAULT_ALPHABET,
    prefix_order: Sequence[str] = DEFAULT_PREFIX_ORDER,
) -> AssignmentResult:
    candidates = list(raw_targets)
    scheme = choose_key_scheme(len(candidates), alphabet=alphabet, prefix_order=prefix_order)
    letters = scheme.alphabet
    base_count = len(scheme.base_keys)

    targets: list[JumpTarget] = []
    for index, raw in enumerate(candidates[: scheme.capacity]):
        if index < base_count:
            targets.append(JumpTarget.from_raw(raw, scheme.base_keys[index]))
            continue
        offset = index - base_count
        prefix = scheme.active_prefixes[offset // len(letters)]
        targets.append(JumpTarget.from_raw(raw, letters[offset % len(letters)], prefix))

    return AssignmentResult(
        targets=tuple(targets),
        scheme=scheme,
        dropped=max(0, len(candidates) - len(targets)),
    )


__all__ = [
    "DEFAULT_ALPHABET",
    "DEFAULT_PREFIX_ORDER",
    "scheme_capacity",
    "prefix_count_for",
    "choose_key_scheme",
    "assign_jump_targets",
]
