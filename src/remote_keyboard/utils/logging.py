"""Logging setup for the remote-keyboard command line.

Everything under the ``remote_keyboard`` logger goes to stderr, and to a
file as well when the logging config names one. Calling ``setup_logging``
again replaces the handlers it installed earlier.
"""

from __future__ import annotations

import logging
import sys

from remote_keyboard.config.settings import LoggingConfig

PACKAGE_LOGGER = "remote_keyboard"

# Set on handlers created here so a later call can find and replace them
_OWNED_ATTR = "_remote_keyboard_handler"


def _owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_ATTR, True)
    return handler


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the ``remote_keyboard`` logger from ``config``.

    Handlers added by an earlier call are closed and removed first, so
    each record is emitted once per destination. Handlers installed by
    anything else (pytest's caplog, for instance) are left alone.

    Args:
        config: Logging section of the settings. Defaults to INFO on stderr.

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    level = logging.getLevelName(config.level.upper())
    package_logger.setLevel(level if isinstance(level, int) else logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(_owned(handler))

    package_logger.debug("Logging to %d handler(s) at %s", len(handlers), config.level.upper())
    return package_logger
