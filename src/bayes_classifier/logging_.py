"""Logging setup for the command-line wrapper.

Library modules only create loggers; handlers are installed here so
importing the package never configures logging on its own.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_HANDLER_NAME = "bayes_classifier"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling this again only updates the level.

    Args:
        level: Level name (``"INFO"``) or number.

    Returns:
        The ``bayes_classifier`` logger.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger("bayes_classifier")
    logger.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
