"""Logging configuration for the LineHop application."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "linehop"
LOG_DIR_ENV = "LINEHOP_LOG_DIR"
LOG_FILENAME = "linehop.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_logs_dir(log_dir_name: str = "linehop") -> Path:
    """
    Resolve the directory to store application logs.

    Strategy:
    - Use LINEHOP_LOG_DIR if set.
    - Fall back to XDG state/cache locations.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates: list[Path] = []
    env_override = os.environ.get(LOG_DIR_ENV, "").strip()
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / log_dir_name)
    candidates.append(cache_home / log_dir_name)

    for target in candidates:
        try:
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=max(0, retention - 1),
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(level_name: str | None, *, debug_enabled: bool = False) -> int:
    if debug_enabled:
        return logging.DEBUG
    candidate = getattr(logging, str(level_name or "").strip().upper(), None)
    return candidate if isinstance(candidate, int) else logging.INFO


def configure_logging(
    level_name: str | None = "INFO",
    *,
    debug_enabled: bool = False,
    to_file: bool = True,
    log_dir: Path | None = None,
) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(resolve_log_level(level_name, debug_enabled=debug_enabled))
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if to_file:
        try:
            target_dir = log_dir if log_dir is not None else resolve_logs_dir()
            logger.addHandler(build_rotating_file_handler(target_dir, LOG_FILENAME, formatter=formatter))
        except OSError as exc:
            logger.warning("File logging disabled: %s", exc)
    return logger
