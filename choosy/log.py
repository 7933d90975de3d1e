"""Logging configuration for choosy."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int | str = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """Attach a rich handler to the ``choosy`` logger and set its level.

    Calling this again only updates the level.
    """
    logger = logging.getLogger("choosy")
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
