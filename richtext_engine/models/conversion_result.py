"""Conversion result data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ConversionResult:
    """Result of a Markdown ↔ HTML conversion.

    Contains the converted content along with fidelity information about
    what the target format could not represent.

    Attributes:
        content: Converted content (empty on total failure, never None)
        warnings: Fidelity notes in the order they were detected
        data_loss: True if at least one warning reports dropped content
        original_length: Character count of the input
        converted_length: Character count of the output
        metadata: Additional data about the conversion (e.g. renderer used)
    """
    content: str
    warnings: List[str] = field(default_factory=list)
    data_loss: bool = False
    original_length: int = 0
    converted_length: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.data_loss and not self.warnings:
            raise ValueError("data_loss requires at least one warning")

    @classmethod
    def build(
        cls,
        original: str,
        content: str,
        warnings: List[str],
        data_loss: bool = False,
        **metadata: Any,
    ) -> "ConversionResult":
        """Create a result, deriving both length fields from the texts.

        Args:
            original: Input text of the conversion
            content: Converted text
            warnings: Fidelity warnings collected during conversion
            data_loss: Whether any warning reports dropped content
            **metadata: Extra metadata entries

        Returns:
            ConversionResult with lengths filled in
        """
        return cls(
            content=content,
            warnings=list(warnings),
            data_loss=data_loss,
            original_length=len(original),
            converted_length=len(content),
            metadata=dict(metadata),
        )
