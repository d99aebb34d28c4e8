"""Minimal logging utilities for GSP.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications (and the ``gsp`` command)
decide where records go.

Example:
    >>> from gsp.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "gsp." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'gsp.mymodule'
    """
    if not (name == "gsp" or name.startswith("gsp.")):
        name = f"gsp.{name}"
    return logging.getLogger(name)


def configure_cli_logging(verbosity: int) -> None:
    """Send log records to stderr for command line use.

    Args:
        verbosity: 0 for warnings only, 1 or more for debug output
    """
    level = logging.DEBUG if verbosity > 0 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(name)s: %(levelname)s: %(message)s",
    )
