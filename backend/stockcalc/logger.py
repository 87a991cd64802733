"""Logging configuration for the stock calculator."""
import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink at ``level``."""
    logger.remove()
    logger.configure(extra={"name": "stockcalc"})
    logger.add(sys.stderr, format=_FORMAT, level=level.upper(), colorize=None)


def get_logger(name: str):
    """Get a logger with the specified name."""
    return logger.bind(name=name)
