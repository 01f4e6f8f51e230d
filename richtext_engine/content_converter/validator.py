"""Heuristic round-trip validation of conversions.

validate_conversion is a smoke test, not a semantic diff. It compares the
amount of visible, non-whitespace text on both sides of a conversion, so
stripping redundant whitespace or markup never fails validation.
"""

import logging
import re

from bs4 import BeautifulSoup

from richtext_engine.content_converter.classifier import strip_html_comments
from richtext_engine.content_converter.emoji_table import EmojiTable
from richtext_engine.content_converter.post_processor import EMOJI_SHORTCODE
from richtext_engine.errors import require_text
from richtext_engine.models import ContentType

logger = logging.getLogger(__name__)

# Converted text must keep at least this share of the visible characters
MIN_RETENTION_RATIO = 0.5

# Word-count drift above this share is logged
WORD_DRIFT_WARNING_RATIO = 0.1

# Content known to vanish in HTML → Markdown conversion
_DROPPED_HTML = re.compile(
    r'<(script|style|iframe|object|embed|canvas|svg|video|audio|select|textarea)\b',
    re.IGNORECASE,
)
_HTML_HEADING = re.compile(r'<h[1-6][^>]*>', re.IGNORECASE)
_ATX_HEADING = re.compile(r'^#{1,6}\s+', re.MULTILINE)

_MD_IMAGE = re.compile(r'!\[([^\[\]\n]*)\]\([^()\n]*\)')
_MD_LINK = re.compile(r'\[([^\[\]\n]*)\]\([^()\n]*\)')
_MD_TAG = re.compile(r'</?[A-Za-z][^<>]*>')
_MD_MARKUP = re.compile(r'[#*_~`>|\\\[\]-]')


def _html_visible_text(text: str) -> str:
    soup = BeautifulSoup(text, "html.parser")
    for tag in soup.find_all(['script', 'style']):
        tag.decompose()
    return soup.get_text(' ')


def _expand_shortcodes(text: str) -> str:
    emoji_table = EmojiTable()

    def glyph(match):
        return emoji_table.get(match.group(1), match.group(0))

    return EMOJI_SHORTCODE.sub(glyph, text)


def _markdown_visible_text(text: str) -> str:
    # Comments are sanitized away and shortcodes render as one glyph
    text = _expand_shortcodes(strip_html_comments(text)[1])
    text = _MD_IMAGE.sub(r'\1', text)
    text = _MD_LINK.sub(r'\1', text)
    text = _MD_TAG.sub(' ', text)
    return _MD_MARKUP.sub(' ', text)


def visible_text(text: str, mode: str) -> str:
    """Approximate the text a reader would see for the given format.

    Args:
        text: Content in the given format
        mode: One of the ContentType values; anything else is plain text

    Returns:
        Text with markup removed
    """
    mode = str(mode).lower()
    if mode == ContentType.HTML.value:
        return _html_visible_text(text)
    if mode in (ContentType.MARKDOWN.value, ContentType.MIXED.value):
        return _markdown_visible_text(text)
    return text


def _char_count(text: str) -> int:
    return len(re.sub(r'\s+', '', text))


def validate_conversion(original: str, converted: str, from_mode: str, to_mode: str) -> bool:
    """Check that a conversion plausibly preserved its content.

    Args:
        original: Input of the conversion
        converted: Output of the conversion
        from_mode: Format of original (html, markdown, mixed, plain)
        to_mode: Format of converted

    Returns:
        False if converted is empty for non-empty input, or if it keeps
        too little of the visible text where no loss was expected

    Raises:
        ImportFormatError: If original or converted is not a string
    """
    require_text(original, 'original')
    require_text(converted, 'converted')

    if not original.strip():
        return True
    if not converted.strip():
        logger.info("Conversion produced empty output for non-empty input")
        return False

    from_mode = str(from_mode).lower()
    to_mode = str(to_mode).lower()
    original_text = visible_text(original, from_mode)
    converted_text = visible_text(converted, to_mode)

    original_words = len(original_text.split())
    converted_words = len(converted_text.split())
    if original_words:
        drift = abs(original_words - converted_words) / original_words
        if drift > WORD_DRIFT_WARNING_RATIO:
            logger.info(f"Significant word count difference detected: {drift * 100:.1f}%")

    if from_mode == ContentType.HTML.value and to_mode == ContentType.MARKDOWN.value:
        if _HTML_HEADING.search(original) and not _ATX_HEADING.search(converted):
            logger.info("Headers may not have been converted properly")
        if _DROPPED_HTML.search(original):
            # Loss is expected and already reported as data_loss
            return True

    original_chars = _char_count(original_text)
    if original_chars == 0:
        return True
    retention = _char_count(converted_text) / original_chars
    if retention < MIN_RETENTION_RATIO:
        logger.info(
            f"Converted text keeps {retention:.0%} of visible content "
            f"({from_mode} -> {to_mode}), below {MIN_RETENTION_RATIO:.0%}"
        )
        return False
    return True
