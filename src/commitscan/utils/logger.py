"""Minimal logging utilities for commitscan.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from commitscan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Growing scan buffer")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "commitscan." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'commitscan.mymodule'
    """
    # Ensure commitscan prefix for consistent namespacing
    if not (name == "commitscan" or name.startswith("commitscan.")):
        name = f"commitscan.{name}"
    return logging.getLogger(name)
