from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from src.core.jump_models import RawTarget  # noqa: E402


@pytest.fixture(scope="session")
def qt_app():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def make_raw_targets():
    def _make(count: int, *, spacing: float = 20.0) -> list[RawTarget]:
        return [RawTarget(line_index=i, top=i * spacing, left=0.0) for i in range(count)]

    return _make
