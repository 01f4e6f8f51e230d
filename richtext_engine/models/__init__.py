"""Data models for conversion inputs, options and results."""

from richtext_engine.models.content_type import ContentType
from richtext_engine.models.conversion_options import ConversionOptions, PRESERVABLE_TAGS
from richtext_engine.models.conversion_result import ConversionResult
from richtext_engine.models.gfm_options import GFMOptions
from richtext_engine.models.sanitize_policy import DEFAULT_SANITIZE_POLICY, SanitizePolicy

__all__ = [
    'ContentType',
    'ConversionOptions',
    'ConversionResult',
    'DEFAULT_SANITIZE_POLICY',
    'GFMOptions',
    'PRESERVABLE_TAGS',
    'SanitizePolicy',
]
