"""Logger configuration for the smartcd CLI.

stdout carries the emitted shell command, so all log output goes to stderr.
"""

from __future__ import annotations

import logging
import os

LOGGER_NAME = "smartcd"
DEBUG_ENV_VAR = "SMARTCD_DEBUG"

_logger: logging.Logger | None = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``smartcd`` logger with a single stderr handler.

    WARNING and above are shown by default; ``verbose`` (or ``SMARTCD_DEBUG=1``)
    lowers the threshold to DEBUG. Repeated calls reconfigure the level only.
    """
    global _logger
    debug = verbose or os.environ.get(DEBUG_ENV_VAR, "") not in ("", "0")
    level = logging.DEBUG if debug else logging.WARNING

    if _logger is not None:
        _logger.setLevel(level)
        for handler in _logger.handlers:
            handler.setLevel(level)
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s [%(levelname)s] %(message)s"))
    logger.addHandler(handler)

    _logger = logger
    return logger

