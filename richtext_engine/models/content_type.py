"""Content type verdict produced by the classifier."""

from enum import Enum


class ContentType(str, Enum):
    """Kind of text handed to the engine.

    Values compare equal to their lowercase names so callers can use
    either ``ContentType.HTML`` or ``"html"``.
    """
    HTML = "html"
    MARKDOWN = "markdown"
    MIXED = "mixed"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value
