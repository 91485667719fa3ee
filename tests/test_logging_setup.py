from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from src.logging_setup import (
    LOG_DIR_ENV,
    LOG_FILENAME,
    ROOT_LOGGER_NAME,
    build_rotating_file_handler,
    configure_logging,
    resolve_log_level,
    resolve_logs_dir,
)


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers, level, propagate = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_resolve_log_level():
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("WARNING") == logging.WARNING
    assert resolve_log_level("nonsense") == logging.INFO
    assert resolve_log_level(None) == logging.INFO
    assert resolve_log_level("ERROR", debug_enabled=True) == logging.DEBUG


def test_logs_dir_env_override(monkeypatch, tmp_path):
    target = tmp_path / "logs"
    monkeypatch.setenv(LOG_DIR_ENV, str(target))
    assert resolve_logs_dir() == target
    assert target.is_dir()


def test_rotating_handler_defaults(tmp_path):
    handler = build_rotating_file_handler(tmp_path, "x.log")
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 512 * 1024
        assert handler.backupCount == 4
    finally:
        handler.close()


def test_configure_logging_writes_file(tmp_path, restore_root_logger):
    logger = configure_logging("INFO", log_dir=tmp_path)
    logging.getLogger("linehop.jump").info("hello from jump")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from jump" in (tmp_path / LOG_FILENAME).read_text(encoding="utf-8")


def test_configure_logging_is_idempotent(tmp_path, restore_root_logger):
    configure_logging("INFO", log_dir=tmp_path)
    logger = configure_logging("INFO", debug_enabled=True, log_dir=tmp_path)
    assert len(logger.handlers) == 2
    assert logger.level == logging.DEBUG


def test_console_only(restore_root_logger):
    logger = configure_logging("WARNING", to_file=False)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
