"""
Logging configuration.

Library modules log through ``logging.getLogger(__name__)``; only the CLI
calls ``setup_logging`` to attach a handler to the ``acmecheck`` logger.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "acmecheck"

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: str = "WARNING", use_colors: bool = True) -> logging.Logger:
    """
    Configure logging for acmecheck.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        use_colors: Use a Rich handler when stderr is a terminal.

    Returns:
        The configured package logger.
    """
    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root_logger.handlers.clear()

    handler: logging.Handler
    if use_colors and sys.stderr.isatty():
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root_logger.addHandler(handler)
    root_logger.propagate = False
    return root_logger

