"""Tests for mtt.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mtt.logging import configure_logging, get_logger, reset_logging


def test_get_logger_namespaces_under_mtt() -> None:
    assert get_logger().name == "mtt"
    assert get_logger("resolver").name == "mtt.resolver"


def test_configure_logging_replaces_handlers_and_writes_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "mtt.log"

    configure_logging()
    logger = configure_logging(verbose=True, log_file=log_file)
    get_logger("converter").debug("Loaded %d model(s)", 3)

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.flush()
    assert "mtt.converter: Loaded 3 model(s)" in log_file.read_text(encoding="utf-8")


def test_quiet_console_still_logs_info_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "mtt.log"

    logger = configure_logging(quiet=True, log_file=log_file)
    get_logger("emitter").info("Creating file %s", "user.ts")

    console, sink = logger.handlers
    assert console.level == logging.WARNING
    assert sink.level == logging.INFO
    sink.flush()
    assert "mtt.emitter: Creating file user.ts" in log_file.read_text(encoding="utf-8")


def test_verbose_console_names_the_emitting_logger(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)

    get_logger("resolver").debug("ignoring self inheritance")

    assert "[mtt.resolver] DEBUG ignoring self inheritance" in capsys.readouterr().err


def test_reset_logging_closes_handlers(tmp_path: Path) -> None:
    configure_logging(log_file=tmp_path / "mtt.log")

    logger = reset_logging()

    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET
