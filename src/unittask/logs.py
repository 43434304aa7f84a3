"""Logging levels and console handler setup for UnitTask."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

TRACE = 5
CONFIG = 15
SEVERE = logging.ERROR

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(CONFIG, "CONFIG")

LEVELS = {
    "TRACE": TRACE,
    "CONFIG": CONFIG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

ROOT_LOGGER = "unittask"


def resolve_level(name: str) -> int:
    """Translate a level name into its numeric value."""
    try:
        return LEVELS[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name}") from None


def configure_logging(
    level: str = "INFO",
    show_time: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Route UnitTask log records to a rich console handler on stderr."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(resolve_level(level))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=show_time,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    logger.addHandler(handler)
    return logger
