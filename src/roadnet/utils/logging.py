"""Logging helper.

Wraps Python's standard logging module so that every module of the
package logs with the same format.  Library modules call
``get_logger(__name__)`` once at import time; `World` passes the level
from its configuration to raise or lower verbosity afterwards.
"""

import logging
from typing import Optional, Union

from ..errors import InvalidParameterError

Level = Union[int, str]


def resolve_level(level: Level) -> int:
    """Turn a level name such as ``"debug"`` or a numeric level into an int."""
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise InvalidParameterError(f"unknown log level {level!r}")
    return value


def get_logger(name: str, level: Optional[Level] = None) -> logging.Logger:
    """Return a logger with a single stream handler and the package format.

    New loggers start at INFO.  An explicit ``level`` is applied even to
    a logger that already exists.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='[%(asctime)s] [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(resolve_level(level))
    return logger
