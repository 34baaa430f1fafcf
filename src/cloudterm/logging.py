"""Diagnostic logging for the simulator process.

Simulated command output goes to stdout through the terminal shell; this
module only wires the ``cloudterm`` logger used for diagnostics.
"""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
LOGGER_NAME = "cloudterm"
DEFAULT_LOG_PATH = Path("~/.config/cloudterm/logs/cloudterm.log")
_FALLBACK_LOG_PATH = Path(".cloudterm/logs/cloudterm.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    try:
        resolved = DEFAULT_LOG_PATH.expanduser()
    except RuntimeError:
        return (Path.cwd() / _FALLBACK_LOG_PATH).resolve()
    return resolved if resolved.is_absolute() else resolved.resolve()


def normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized == "WARNING":
        return "WARN"
    return normalized if normalized in LOG_LEVELS else "INFO"


def _resolve_log_file(log_file: str | Path) -> Path:
    try:
        path = Path(log_file).expanduser()
    except RuntimeError:
        path = Path(log_file)
    return path if path.is_absolute() else path.resolve()


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Reset the ``cloudterm`` logger to one console handler plus an optional file.

    The file handler always records DEBUG so command traces survive even when
    the console is kept quiet.
    """
    resolved = LOG_LEVELS[normalize_level(level)]

    logger = py_logging.getLogger(LOGGER_NAME)
    logger.setLevel(py_logging.DEBUG if log_file else resolved)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(py_logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        log_path = _resolve_log_file(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            logger.warning("Log file unavailable: %s", log_path)
        else:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(py_logging.Formatter(_FORMAT))
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger
