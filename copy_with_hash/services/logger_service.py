"""Logging configuration and utilities.

Engine modules log through ``logging.getLogger(__name__)``; only the CLI
installs a handler. Build passes are short, so output goes to the console.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

PACKAGE_LOGGER = "copy_with_hash"

LEVEL_COLORS = {
    "info": "blue",
    "error": "red",
    "warn": "yellow",
    "success": "green",
}


def colorize(level: str, text: str) -> str:
    """
    Wrap text in rich markup for a log level.

    Args:
        level: One of info, error, warn, success
        text: Text to color

    Returns:
        Marked-up text (unchanged for unknown levels)
    """
    color = LEVEL_COLORS.get(level)
    if color is None:
        return text
    return f"[{color}]{text}[/{color}]"


def set_silent(silent: bool) -> None:
    """Mute (or unmute) every logger of this package."""
    logging.getLogger(PACKAGE_LOGGER).disabled = silent


def setup_logging(verbose: bool = False) -> None:
    """
    Route log records to the console through rich.

    Args:
        verbose: Log at DEBUG (with timestamps and source paths) instead of INFO
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    handler = RichHandler(
        console=console,
        markup=True,
        rich_tracebacks=verbose,
        show_time=verbose,
        show_path=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)

    logging.getLogger(__name__).debug(
        f"Logging initialized at {logging.getLevelName(log_level)}"
    )


@contextmanager
def log_performance(operation: str, logger: logging.Logger | None = None) -> Generator[None, None, None]:
    """Log how long the wrapped block took, at DEBUG."""
    logger = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug(f"[{operation}] {time.perf_counter() - start:.3f}s")
