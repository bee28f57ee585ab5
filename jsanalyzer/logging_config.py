"""
Logging configuration for jsanalyzer.

Warnings (skipped files, unavailable dependency graph) go to stderr through
a rich handler so they stay out of the report and JSON output on stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "jsanalyzer"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure logging with a rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging

    Returns:
        Configured logger instance for jsanalyzer
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers = [handler]
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the jsanalyzer namespace.

    Args:
        name: Module name (e.g., 'jsanalyzer.facts' or 'facts').
              If None, returns the root jsanalyzer logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
