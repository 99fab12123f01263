"""Logging utilities for qbdoc commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "qbdoc"

_CONSOLE_FORMAT = "[qbdoc] %(levelname)s %(message)s"
# Verbose runs name the component (qbdoc.inference, qbdoc.routes, ...) that logged.
_VERBOSE_FORMAT = "[qbdoc] %(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the qbdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the qbdoc console handler and an optional file sink.

    The file sink always records debug output, so ``--log-file`` captures
    dropped arguments and hook vetoes even without ``--verbose``.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    logger_level = console_level
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    return logger


def service_log_level() -> str:
    """uvicorn ``log_level`` matching the qbdoc console verbosity."""
    logger = get_logger()
    levels = [
        handler.level
        for handler in logger.handlers
        if type(handler) is logging.StreamHandler and handler.level
    ]
    level = min(levels) if levels else logger.getEffectiveLevel()
    return logging.getLevelName(level).lower()


__all__ = ["configure_logging", "get_logger", "service_log_level"]
