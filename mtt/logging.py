"""Logger hierarchy and handler setup for the mtt command line.

Library modules only call :func:`get_logger`; handlers are installed once per
CLI invocation by :func:`configure_logging`.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "mtt"
_CONSOLE_FORMAT = "[mtt] %(levelname)s %(message)s"
# Verbose runs show which stage emitted each line (e.g. "[mtt.resolver]").
_VERBOSE_CONSOLE_FORMAT = "[%(name)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``mtt.<name>``, or the ``mtt`` logger itself."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def reset_logging() -> logging.Logger:
    """Detach and close every handler on the ``mtt`` logger and restore propagation."""
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    return logger


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send ``mtt`` records to stderr and, when given, to ``log_file``.

    ``verbose`` wins over ``quiet``. The log file always records at the
    console level or below, so a quiet run can still keep a full trace.
    """
    console_level = _console_level(verbose, quiet)
    file_level = min(console_level, logging.INFO)

    logger = reset_logging()
    logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(_VERBOSE_CONSOLE_FORMAT if verbose else _CONSOLE_FORMAT)
    )
    logger.addHandler(console)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    sink = logging.FileHandler(log_file, encoding="utf-8")
    sink.setLevel(file_level)
    sink.setFormatter(logging.Formatter(_FILE_FORMAT))
    logger.addHandler(sink)
    logger.setLevel(file_level)
    return logger


__all__ = ["configure_logging", "get_logger", "reset_logging"]
