"""Logging setup for ga4lens.

library code just uses logging.getLogger(__name__); the server and cli call
configure_logging() once to get rich's formatted output on the console.
"""

import logging

from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a RichHandler to the package logger. safe to call twice."""
    logger = logging.getLogger("ga4lens")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
    return logger
