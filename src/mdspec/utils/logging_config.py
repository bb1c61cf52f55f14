"""Logging setup shared by all mdspec modules."""

from __future__ import annotations

import logging

from mdspec.config import MDSPEC_LOG_LEVEL

_ROOT_LOGGER_NAME = "mdspec"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str = MDSPEC_LOG_LEVEL) -> None:
    """Attach a single stream handler to the package logger.

    Calling this more than once only updates the level.
    """
    global _configured
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the mdspec hierarchy, configuring it on first use."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
