"""Tests for runtime logging configuration."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from click.testing import CliRunner

from fileproc.cli import cli
from fileproc.config.models import LoggingSettings
from fileproc.logging_setup import LOGGER_NAME, configure_logging


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, "_fileproc_handler", False)]


def test_configure_logging_sets_level_and_is_idempotent() -> None:
    settings = LoggingSettings(level="ERROR")

    configure_logging(settings)
    logger = configure_logging(settings)

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.ERROR
    assert len(_owned_handlers(logger)) == 1


def test_verbose_flag_overrides_configured_level(tmp_path: Path) -> None:
    report = tmp_path / "report.csv"
    report.write_text("name,age\nAnn,30\n", encoding="utf-8")
    env = {"HOME": str(tmp_path), "FILEPROC__LOGGING__LEVEL": "ERROR"}

    result = CliRunner().invoke(cli, ["-v", "detect", str(report)], env=env)

    assert result.exit_code == 0
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG


def test_file_handler_rotates_with_configured_limits(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "fileproc.log"
    settings = LoggingSettings(level="INFO", file=str(log_file), max_size_mb=2, backup_count=5)

    logger = configure_logging(settings)
    logging.getLogger("fileproc.detection").info("detected something")

    rotating = [h for h in _owned_handlers(logger) if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 2 * 1024 * 1024
    assert rotating[0].backupCount == 5
    rotating[0].flush()
    assert "detected something" in log_file.read_text(encoding="utf-8")

    configure_logging(LoggingSettings())
    assert not any(isinstance(h, RotatingFileHandler) for h in _owned_handlers(logger))
