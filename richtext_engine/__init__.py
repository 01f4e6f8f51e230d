"""Content conversion and classification engine for rich-text editors.

Public API:
    detect_content_type(text) -> ContentType
    markdown_to_html(markdown, options=None) -> ConversionResult
    html_to_markdown(html, options=None) -> ConversionResult
    sanitize(html) -> str
    validate_conversion(original, converted, from_mode, to_mode) -> bool
    get_conversion_stats(result) -> str
"""

from richtext_engine.content_converter import (
    detect_content_type,
    get_conversion_stats,
    html_to_markdown,
    markdown_to_html,
    sanitize,
    validate_conversion,
)
from richtext_engine.errors import EngineError, ImportFormatError
from richtext_engine.models import ContentType, ConversionOptions, ConversionResult, GFMOptions

__version__ = "0.1.0"

__all__ = [
    'ContentType',
    'ConversionOptions',
    'ConversionResult',
    'EngineError',
    'GFMOptions',
    'ImportFormatError',
    'detect_content_type',
    'get_conversion_stats',
    'html_to_markdown',
    'markdown_to_html',
    'sanitize',
    'validate_conversion',
]
