"""
Logging setup for the `tokel` logger namespace.
"""

import logging
import os
from typing import Optional, TextIO, Union

LOG_LEVEL_ENV = "TOKEL_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "tokel"


def default_level() -> str:
    """Log level from the environment; WARNING when unset or not a level name."""
    level = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    if level not in LOG_LEVELS:
        return "WARNING"
    return level


def setup_logging(level: Union[int, str, None] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the base `tokel` logger once and return it.

    Later calls only adjust the level.
    """
    logger = logging.getLogger("tokel")
    if level is None:
        level = default_level()
    logger.setLevel(level)

    if not any(handler.get_name() == HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
