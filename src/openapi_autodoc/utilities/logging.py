"""Logging utilities for openapi-autodoc."""

import logging
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "AutoDoc"


def get_logger(name: str) -> logging.Logger:
    """Get a logger nested under the AutoDoc namespace.

    Args:
        name: the name of the logger, which will be prefixed with 'AutoDoc.'

    Returns:
        a logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | int = "INFO",
) -> None:
    """Configure logging for openapi-autodoc.

    Args:
        level: the log level to use
    """
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Reconfiguring must not stack handlers
    for hdlr in logger.handlers[:]:
        logger.removeHandler(hdlr)

    logger.addHandler(handler)
