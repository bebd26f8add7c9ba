"""Logging helpers backed by Rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "clippy"


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route package logs through a Rich handler.

    Args:
        level: Level name such as "DEBUG" or "info"; unknown names fall back to WARNING
        console: Optional console to write to (defaults to stderr)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=False,
        markup=False,
        show_path=False,
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
