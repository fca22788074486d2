"""
Logging wiring for the msggraph package.
Modules log through logging.getLogger(__name__); this attaches one handler to
the package logger so applications can opt in to the engine's trace output.
"""

import logging
from typing import Optional

from msggraph.config.settings import settings

PACKAGE_LOGGER = "msggraph"

_HANDLER_ATTR = "_msggraph_handler"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the `msggraph` logger. Safe to call more than
    once: the handler is installed a single time and only the level changes.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel((level or settings.log_level).upper())

    if not any(getattr(h, _HANDLER_ATTR, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.log_format))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    return logger
