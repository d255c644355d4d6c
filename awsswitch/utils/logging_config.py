"""
Logging setup for the awsswitch CLI.
"""

import logging
from typing import Optional

# Choices for the --log-level flag.
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(level_str: str, fmt: Optional[str] = None) -> int:
    """
    Configure root logging from a level name. Safe to call more than once.

    Args:
        level_str: One of "DEBUG", "INFO", "WARNING", "ERROR"; anything else
            falls back to WARNING
        fmt: Optional format string

    Returns:
        The numeric level that was applied
    """
    level = LEVEL_MAP.get((level_str or "WARNING").upper(), logging.WARNING)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    logging.basicConfig(level=level, format=fmt or "%(levelname)s %(name)s: %(message)s")
    logging.getLogger(__name__).debug("Logging configured to %s", logging.getLevelName(level))
    return level
