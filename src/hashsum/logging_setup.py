"""Logging configuration for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "hashsum-rich"


def configure_logging(level: str, *, console: Console | None = None) -> None:
    """Route ``hashsum`` log records to standard error through rich.

    Args:
        level: Logging level name such as ``WARNING`` or ``DEBUG``.
        console: Console to render into; defaults to a stderr console.

    Raises:
        ValueError: If ``level`` is not a known logging level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown logging level: {level}")

    logger = logging.getLogger("hashsum")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False


__all__ = ["configure_logging"]
