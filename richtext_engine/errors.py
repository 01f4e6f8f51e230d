"""Typed exception hierarchy for content conversion errors.

This module defines all custom exceptions used by the conversion engine.
All exceptions inherit from EngineError base class for easy catching and
include descriptive messages with context to help with debugging.

Only ImportFormatError ever reaches callers of the public conversion
functions. ParseFailure and SanitizeFailure are recovered inside the engine.
"""

from typing import Any, Optional


class EngineError(Exception):
    """Base exception for all richtext-engine errors.

    Use this to catch any application-level error from the engine.
    """
    pass


class ParseFailure(EngineError):
    """Structured Markdown parsing could not interpret the input.

    Never raised to callers: it is recorded on a RenderOutcome and the
    renderer switches to the degraded regex strategy.
    """

    def __init__(self, reason: str):
        super().__init__(f"Structured parse failed: {reason}")
        self.reason = reason


class SanitizeFailure(EngineError):
    """Raised when the sanitizer cannot process its input."""

    def __init__(self, reason: str):
        super().__init__(f"Sanitization failed: {reason}")
        self.reason = reason


class ImportFormatError(EngineError):
    """Raised when malformed data is passed to a conversion entry point."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        if field_name:
            full_message = f"Invalid input for '{field_name}': {message}"
        else:
            full_message = f"Invalid input: {message}"
        super().__init__(full_message)
        self.field_name = field_name
        self.original_message = message


def require_text(value: Any, field_name: str) -> str:
    """Check that an argument handed to the public API is a string.

    Args:
        value: Argument to check
        field_name: Parameter name used in the error message

    Returns:
        The value unchanged

    Raises:
        ImportFormatError: If value is not a str
    """
    if not isinstance(value, str):
        raise ImportFormatError(
            f"expected str, got {type(value).__name__}",
            field_name=field_name,
        )
    return value
