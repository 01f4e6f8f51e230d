"""Typed exception hierarchy for CLI-related errors.

This module defines the exceptions raised by the command-line layer.
All exceptions inherit from CLIError so that commands can map them to an
exit code in one place.
"""

from typing import Optional

from richtext_engine.errors import EngineError


class CLIError(EngineError):
    """Base exception for all CLI-related errors."""
    pass


class InputFileError(CLIError):
    """Raised when an input, output or options file cannot be accessed."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"File operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class OptionsFileError(CLIError):
    """Raised when an options file is malformed or holds invalid values."""

    def __init__(self, message: str, option_field: Optional[str] = None):
        if option_field:
            full_message = f"Options error in field '{option_field}': {message}"
        else:
            full_message = f"Options error: {message}"
        super().__init__(full_message)
        self.option_field = option_field
        self.original_message = message
