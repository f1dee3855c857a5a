"""Logging configuration shared by the web app and the CLI commands."""

from __future__ import annotations

import logging
import sys

from flask.logging import default_handler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(app) -> logging.Logger:
    """Configure the ``affiliate`` logger with one consistently formatted handler.

    The Flask app is created as ``affiliate`` so ``app.logger`` is the root of
    the package's logger tree; module loggers from ``logging.getLogger(__name__)``
    propagate into it.
    """
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = app.logger
    logger.removeHandler(default_handler)
    logger.setLevel(level)

    if not any(getattr(h, "_affiliate", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._affiliate = True
        logger.addHandler(handler)

    return logger
