"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    20-29: API errors
    40-49: Generation errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for gbgen CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Configuration errors (10-19)
    CONFIG_ERROR = 11
    FILE_EXISTS = 12

    # API errors (20-29)
    API_ERROR = 20
    AUTH_ERROR = 21

    # Generation errors (40-49)
    GENERATION_FAILED = 40
    CANCELLED = 41
    WRITE_FAILED = 42
