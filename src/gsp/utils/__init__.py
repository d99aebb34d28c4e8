"""Utility modules for GSP.

Provides:
- logger: get_logger for namespaced logging
"""

from gsp.utils.logger import configure_cli_logging, get_logger

__all__ = [
    "configure_cli_logging",
    "get_logger",
]
