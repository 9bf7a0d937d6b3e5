"""Logging setup for TradeJournal."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "tradejournal"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a rich handler to the package logger.

    Calling this again only changes the level.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...).

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
