"""Logging helpers shared across meshmap modules."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER_NAME = "meshmap"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for *name*, namespaced under ``meshmap``."""

    if name == _ROOT_LOGGER_NAME or name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
) -> logging.Handler:
    """Attach a stderr handler named *handler_name* to *logger* once.

    Calling again with the same name only updates the level, so a CLI that
    is invoked repeatedly in one process never duplicates its output.
    """

    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            handler.setLevel(level)
            logger.setLevel(level)
            return handler

    # The console resolves ``sys.stderr`` on every write, not at install time.
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setLevel(level)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


__all__ = ["ensure_console_logger", "get_logger"]
