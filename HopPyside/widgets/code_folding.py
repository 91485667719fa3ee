"""Fold-range providers and the editor folding update helper.

Ranges are 1-based ``(start_line, end_line)`` pairs; the start line stays
visible and the lines after it up to ``end_line`` are hidden when folded.
Hidden lines are not laid out, so they never receive jump labels.
"""

from __future__ import annotations

import ast
import re
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .code_editor import CodeEditor

FoldRegion = tuple[int, int]
FoldProvider = Callable[[str], list[FoldRegion]]

EXT_TO_LANG: dict[str, str] = {
    ".py": "python",
    ".pyw": "python",
    ".pyi": "python",
    ".json": "json",
    ".jsonc": "json",
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "plaintext",
    ".yaml": "indent",
    ".yml": "indent",
}

_ATX_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+\S")
_FENCE_RE = re.compile(r"^\s*(```+|~~~+)")


def get_language_id(file_path: str | Path | None, fallback: str = "plaintext") -> str:
    text = str(file_path or "").strip()
    default = str(fallback or "plaintext").strip().lower() or "plaintext"
    if not text:
        return default
    return EXT_TO_LANG.get(Path(text).suffix.lower(), default)


def normalize_fold_ranges(ranges: list[FoldRegion], line_count: int) -> list[FoldRegion]:
    merged: dict[int, int] = {}
    max_line = max(0, int(line_count))
    for start_raw, end_raw in ranges:
        start = max(1, int(start_raw))
        end = min(max_line, int(end_raw))
        if end <= start:
            continue
        prev = merged.get(start)
        if prev is None or end > prev:
            merged[start] = end
    return sorted(merged.items())


def indent_fold_ranges(source_text: str) -> list[FoldRegion]:
    """Fold every line over the following run of more-indented lines."""
    lines = str(source_text or "").splitlines()
    stack: list[tuple[int, int]] = []
    ranges: list[FoldRegion] = []
    last_content = 0
    for idx, raw in enumerate(lines, start=1):
        stripped = raw.strip()
        if not stripped:
            continue
        indent = len(raw) - len(raw.lstrip(" \t"))
        while stack and indent <= stack[-1][0]:
            _, start_line = stack.pop()
            if last_content > start_line:
                ranges.append((start_line, last_content))
        stack.append((indent, idx))
        last_content = idx
    while stack:
        _, start_line = stack.pop()
        if last_content > start_line:
            ranges.append((start_line, last_content))
    return normalize_fold_ranges(ranges, len(lines))


def python_fold_ranges(source_text: str) -> list[FoldRegion]:
    text = str(source_text or "")
    line_count = len(text.splitlines())
    fold_nodes = (
        ast.FunctionDef,
        ast.AsyncFunctionDef,
        ast.ClassDef,
        ast.If,
        ast.For,
        ast.AsyncFor,
        ast.While,
        ast.With,
        ast.AsyncWith,
        ast.Try,
    )
    try:
        tree = ast.parse(text)
    except SyntaxError:
        return indent_fold_ranges(text)

    ranges: list[FoldRegion] = []
    for node in ast.walk(tree):
        if not isinstance(node, fold_nodes):
            continue
        start = int(getattr(node, "lineno", 0) or 0)
        end = int(getattr(node, "end_lineno", start) or start)
        if end > start:
            ranges.append((start, end))
    return normalize_fold_ranges(ranges, line_count)


def json_fold_ranges(source_text: str) -> list[FoldRegion]:
    text = str(source_text or "")
    ranges: list[FoldRegion] = []
    stack: list[int] = []
    line = 1
    in_string = False
    escaped = False

    for ch in text:
        if ch == "\n":
            line += 1
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append(line)
        elif ch in "}]" and stack:
            start_line = stack.pop()
            if line > start_line:
                ranges.append((start_line, line))
    return normalize_fold_ranges(ranges, len(text.splitlines()))


def markdown_fold_ranges(source_text: str) -> list[FoldRegion]:
    """Fold headings over their section and fenced blocks over their body."""
    lines = str(source_text or "").splitlines()
    line_count = len(lines)
    ranges: list[FoldRegion] = []
    headings: list[tuple[int, int]] = []
    fence_start: int | None = None
    fence_marker = ""

    for idx, line in enumerate(lines, start=1):
        fence = _FENCE_RE.match(line)
        if fence_start is not None:
            if fence and fence.group(1).startswith(fence_marker[0]):
                ranges.append((fence_start, idx))
                fence_start = None
            continue
        if fence:
            fence_start = idx
            fence_marker = fence.group(1)
            continue
        heading = _ATX_HEADING_RE.match(line)
        if heading is None:
            continue
        level = len(heading.group(1))
        while headings and headings[-1][0] >= level:
            _, start_line = headings.pop()
            ranges.append((start_line, idx - 1))
        headings.append((level, idx))

    if fence_start is not None:
        ranges.append((fence_start, line_count))
    for _, start_line in headings:
        ranges.append((start_line, line_count))
    return normalize_fold_ranges(ranges, line_count)


LANGUAGE_FOLD_PROVIDERS: dict[str, FoldProvider] = {
    "python": python_fold_ranges,
    "json": json_fold_ranges,
    "markdown": markdown_fold_ranges,
    "indent": indent_fold_ranges,
}


def get_fold_provider(language_id: str | None) -> FoldProvider | None:
    return LANGUAGE_FOLD_PROVIDERS.get(str(language_id or "").strip().lower())


def compute_folding_regions(editor: "CodeEditor", language_id: str | None) -> list[FoldRegion]:
    provider = get_fold_provider(language_id)
    if provider is None:
        return []
    line_count = max(1, editor.document().blockCount())
    return normalize_fold_ranges(provider(editor.toPlainText()), line_count)


def update_folding(editor: "CodeEditor") -> None:
    language_id = editor.language_id()
    provider = get_fold_provider(language_id)
    editor._fold_provider = provider
    if provider is None:
        editor._clear_folding()
        return

    fold_ranges: dict[int, int] = {}
    for start_line, end_line in compute_folding_regions(editor, language_id):
        fold_ranges[int(start_line) - 1] = int(end_line) - 1
    editor._fold_ranges = fold_ranges
    editor._folded_starts = {line for line in editor._folded_starts if line in fold_ranges}
    editor._apply_fold_visibility()


__all__ = [
    "FoldRegion",
    "FoldProvider",
    "EXT_TO_LANG",
    "get_language_id",
    "normalize_fold_ranges",
    "indent_fold_ranges",
    "python_fold_ranges",
    "json_fold_ranges",
    "markdown_fold_ranges",
    "get_fold_provider",
    "compute_folding_regions",
    "update_folding",
]
