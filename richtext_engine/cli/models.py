"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by richtext-engine commands.

    Attributes:
        SUCCESS: Command completed without problems
        GENERAL_ERROR: Unexpected error
        DATA_LOSS: Conversion dropped content and --strict was given
        INVALID_INPUT: Input or options file missing, unreadable or malformed
        VALIDATION_FAILED: Converted output failed round-trip validation,
            or a syntax check reported issues
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    DATA_LOSS = 2
    INVALID_INPUT = 3
    VALIDATION_FAILED = 4
