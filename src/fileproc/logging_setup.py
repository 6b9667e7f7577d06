"""Runtime logging configuration for the fileproc CLI."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fileproc.config.models import LoggingSettings

LOGGER_NAME = "fileproc"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_MARKER = "_fileproc_handler"


def configure_logging(settings: LoggingSettings) -> logging.Logger:
    """Attach fileproc's handlers to the package logger.

    Calling this more than once replaces the handlers installed previously.

    Args:
        settings: Logging section of the loaded configuration.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.level))

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(_FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    setattr(stream, _HANDLER_MARKER, True)
    logger.addHandler(stream)

    if settings.file:
        path = Path(settings.file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path,
            maxBytes=settings.max_size_mb * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        rotating.setFormatter(formatter)
        setattr(rotating, _HANDLER_MARKER, True)
        logger.addHandler(rotating)

    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
