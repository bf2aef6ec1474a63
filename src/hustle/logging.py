"""Logging for hustle.

User-facing output (the echoed commands, errors) goes through rich
consoles in the modules that print it. This module only carries the
debug trace: resolved identities, detected modes, argv lists and exit
statuses. Records are rendered by a RichHandler on stderr so they never
interleave with captured command output on stdout.

Debug tracing is off unless HUSTLE_DEBUG is truthy or ``-v`` is passed.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT = "hustle"
DEBUG_ENV = "HUSTLE_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _get_log_level() -> int:
    if os.environ.get(DEBUG_ENV, "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return logging.WARNING


def _make_handler(level: int) -> RichHandler:
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.set_name(ROOT)
    return handler


def _init_logging() -> logging.Logger:
    """Attach the hustle handler once; later calls are no-ops."""
    root_logger = logging.getLogger(ROOT)
    if any(handler.get_name() == ROOT for handler in root_logger.handlers):
        return root_logger

    level = _get_log_level()
    root_logger.setLevel(level)
    root_logger.addHandler(_make_handler(level))
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger in the ``hustle`` namespace (``runner`` -> ``hustle.runner``)."""
    _init_logging()
    if name != ROOT and not name.startswith(f"{ROOT}."):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)


def set_debug(enabled: bool = True) -> None:
    """Switch debug tracing on or off (``-v``)."""
    root_logger = _init_logging()
    level = logging.DEBUG if enabled else logging.WARNING
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if handler.get_name() != ROOT:
            continue
        handler.setLevel(level)
