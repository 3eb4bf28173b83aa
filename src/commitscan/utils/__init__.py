"""Utility modules for commitscan.

Provides:
- logger: get_logger for logging
"""

from commitscan.utils.logger import get_logger

__all__ = [
    "get_logger",
]
