"""
ZGrid — grid/log_setup.py
Logger configuration for the "zgrid" namespace.

Library modules only call get_logger(); handlers are installed by the
application (run.py) through configure_logging().
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_NAME = "zgrid"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the zgrid logger, or a child of it for a dotted module name."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    # grid.session -> zgrid.grid.session
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = "INFO", console: bool = True) -> logging.Logger:
    """Install a stream handler on the zgrid logger. Safe to call repeatedly."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    if logger.handlers:
        return logger

    if console:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    else:
        logger.addHandler(logging.NullHandler())

    logger.debug("logging configured")
    return logger
