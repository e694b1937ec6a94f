"""Logging configuration."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

stderr_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route ``svnauto`` log records through a Rich handler on stderr."""

    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=stderr_console,
        markup=False,
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)

    logger = logging.getLogger("svnauto")
    logger.handlers.clear()
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
