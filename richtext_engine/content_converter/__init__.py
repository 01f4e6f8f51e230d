"""Content conversion module for Markdown ↔ HTML conversion.

This module provides the classifier, the GFM renderer (markdown-it-py), the
allow-list sanitizer (bleach), the reverse converter (markdownify), and the
validation and diagnostics helpers that report conversion fidelity.
"""

from .classifier import detect_content_type
from .diagnostics import get_conversion_stats
from .html_to_markdown import HtmlToMarkdownConverter, html_to_markdown
from .markdown_renderer import GFMRenderer, RenderOutcome, RenderStrategy, markdown_to_html
from .sanitizer import HtmlSanitizer, sanitize
from .syntax_checks import (
    is_gfm_table_row,
    is_task_list_item,
    parse_task_list_item,
    validate_html,
    validate_markdown,
)
from .validator import validate_conversion

__all__ = [
    'GFMRenderer',
    'HtmlSanitizer',
    'HtmlToMarkdownConverter',
    'RenderOutcome',
    'RenderStrategy',
    'detect_content_type',
    'get_conversion_stats',
    'html_to_markdown',
    'is_gfm_table_row',
    'is_task_list_item',
    'markdown_to_html',
    'parse_task_list_item',
    'sanitize',
    'validate_conversion',
    'validate_html',
    'validate_markdown',
]
