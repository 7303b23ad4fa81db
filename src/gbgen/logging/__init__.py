"""Logging setup for gbgen.

Provides text or JSON log output to stderr and/or a rotating file.
"""

from gbgen.logging.config import configure_logging
from gbgen.logging.handlers import JSONFormatter, TextFormatter

__all__ = [
    "JSONFormatter",
    "TextFormatter",
    "configure_logging",
]
