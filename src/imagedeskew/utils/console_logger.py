"""Console logging for the command-line front end."""

from __future__ import annotations

import logging
import sys


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
) -> logging.Handler:
    """Attach a stderr handler named *handler_name* to *logger* exactly once.

    Calling it again updates the existing handler's level and points it at
    the current ``sys.stderr``.
    """

    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)
            handler.setLevel(level)
            logger.setLevel(level)
            return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


__all__ = ["ensure_console_logger"]
