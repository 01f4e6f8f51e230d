"""Human-readable summaries of conversion results."""

from richtext_engine.errors import ImportFormatError
from richtext_engine.models import ConversionResult


def get_conversion_stats(result: ConversionResult) -> str:
    """Summarize a conversion result on one line.

    Example:
        >>> get_conversion_stats(ConversionResult(
        ...     content="x", warnings=["w1"], data_loss=True,
        ...     original_length=100, converted_length=90))
        'Original: 100 chars, Converted: 90 chars, Data loss: Yes, Warnings: 1'

    Args:
        result: Result of any conversion

    Returns:
        Deterministic summary string

    Raises:
        ImportFormatError: If result is not a ConversionResult
    """
    if not isinstance(result, ConversionResult):
        raise ImportFormatError(
            f"expected ConversionResult, got {type(result).__name__}",
            field_name='result',
        )
    stats = [
        f"Original: {result.original_length} chars",
        f"Converted: {result.converted_length} chars",
        f"Data loss: {'Yes' if result.data_loss else 'No'}",
        f"Warnings: {len(result.warnings)}",
    ]
    return ", ".join(stats)
