"""Heuristic classification of text as HTML, Markdown, mixed or plain.

The classifier counts structural signals for each format and combines the
two counts into a ContentType. A signal only counts when it has a plausible
shape: comparison operators such as ``a < b and c > d`` never look like HTML.
"""

import logging
import re
from typing import Set, Tuple

from richtext_engine.errors import require_text
from richtext_engine.models import ContentType

logger = logging.getLogger(__name__)

# Elements that never have a closing tag
VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})

KNOWN_ELEMENTS = VOID_ELEMENTS | frozenset({
    'a', 'abbr', 'article', 'aside', 'audio', 'b', 'blockquote', 'body',
    'button', 'canvas', 'caption', 'code', 'dd', 'del', 'details', 'div',
    'dl', 'dt', 'em', 'figcaption', 'figure', 'footer', 'form', 'h1', 'h2',
    'h3', 'h4', 'h5', 'h6', 'head', 'header', 'html', 'i', 'iframe', 'ins',
    'kbd', 'label', 'li', 'main', 'mark', 'nav', 'object', 'ol', 'option',
    'p', 'pre', 's', 'samp', 'script', 'section', 'select', 'small', 'span',
    'strong', 'style', 'sub', 'summary', 'sup', 'svg', 'table', 'tbody',
    'td', 'textarea', 'tfoot', 'th', 'thead', 'title', 'tr', 'u', 'ul',
    'var', 'video',
})

# <name attr="v" ...> or <name/>; the name must follow '<' directly
_OPEN_TAG = re.compile(
    r'<([A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*)'
    r'(\s[^<>]*?)?(/?)>'
)
_CLOSE_TAG = re.compile(r'</([A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*)\s*>')
_COMMENT_OPEN = '<!--'
_COMMENT_CLOSE = '-->'

MARKDOWN_PATTERNS = [
    ('heading', re.compile(r'^\s{0,3}#{1,6}\s+\S', re.MULTILINE)),
    ('bold', re.compile(r'\*\*(?=\S)[^*\n]+?(?<=\S)\*\*|__(?=\S)[^_\n]+?(?<=\S)__')),
    ('italic', re.compile(r'(?<![*\w])\*(?=[^\s*])[^*\n]+(?<=[^\s*])\*(?![*\w])')),
    ('strikethrough', re.compile(r'~~(?=\S)[^~\n]+?(?<=\S)~~')),
    ('inline_code', re.compile(r'(?<!`)`[^`\n]+`(?!`)')),
    ('image', re.compile(r'!\[[^\[\]\n]*\]\([^()\s]+[^()\n]*\)')),
    ('link', re.compile(r'(?<!!)\[[^\[\]\n]+\]\([^()\s]+[^()\n]*\)')),
    ('bullet_list', re.compile(r'^\s{0,3}[-*+]\s+\S', re.MULTILINE)),
    ('ordered_list', re.compile(r'^\s{0,3}\d{1,9}[.)]\s+\S', re.MULTILINE)),
    ('fenced_code', re.compile(r'^\s{0,3}(```|~~~)', re.MULTILINE)),
    ('blockquote', re.compile(r'^\s{0,3}>\s?\S', re.MULTILINE)),
    ('table', re.compile(r'^[ \t]*\|?[ \t]*:?-{3,}:?[ \t]*(\|[ \t]*:?-{3,}:?[ \t]*)+\|?[ \t]*$', re.MULTILINE)),
]


def strip_html_comments(text: str) -> Tuple[int, str]:
    """Replace closed HTML comments with a space.

    Returns:
        Number of comments removed and the remaining text
    """
    parts = []
    count = 0
    position = 0
    while True:
        start = text.find(_COMMENT_OPEN, position)
        if start == -1:
            break
        end = text.find(_COMMENT_CLOSE, start + len(_COMMENT_OPEN))
        if end == -1:
            # No later opener can be closed either
            break
        parts.append(text[position:start])
        parts.append(' ')
        count += 1
        position = end + len(_COMMENT_CLOSE)
    parts.append(text[position:])
    return count, ''.join(parts)


def count_html_signals(text: str) -> int:
    """Count HTML structures that are unlikely to be accidental.

    Void elements and self-closing tags count on their own. Other open
    tags only count when a matching close tag exists.

    Args:
        text: Text to inspect

    Returns:
        Number of HTML signals found
    """
    signals, text = strip_html_comments(text)

    closed: Set[str] = {m.group(1).lower() for m in _CLOSE_TAG.finditer(text)}
    for match in _OPEN_TAG.finditer(text):
        name = match.group(1).lower()
        self_closing = match.group(3) == '/'
        is_known = name in KNOWN_ELEMENTS or '-' in name
        if not is_known:
            continue
        if name in VOID_ELEMENTS or self_closing or name in closed:
            signals += 1
    return signals


def count_markdown_signals(text: str) -> int:
    """Count distinct Markdown constructs present in text.

    Args:
        text: Text to inspect

    Returns:
        Number of Markdown patterns that matched at least once
    """
    # Tags would otherwise feed the emphasis and blockquote patterns
    stripped = _CLOSE_TAG.sub(' ', _OPEN_TAG.sub(' ', strip_html_comments(text)[1]))
    matched = [name for name, pattern in MARKDOWN_PATTERNS if pattern.search(stripped)]
    if matched:
        logger.debug(f"Markdown signals: {', '.join(matched)}")
    return len(matched)


def detect_content_type(text: str) -> ContentType:
    """Classify text as HTML, Markdown, mixed or plain.

    Args:
        text: Arbitrary input text

    Returns:
        ContentType verdict

    Raises:
        ImportFormatError: If text is not a string
    """
    require_text(text, 'text')
    trimmed = text.strip()
    if not trimmed:
        return ContentType.PLAIN

    html_signals = count_html_signals(trimmed)
    markdown_signals = count_markdown_signals(trimmed)
    logger.debug(f"Classifier signals: html={html_signals}, markdown={markdown_signals}")

    if html_signals > 0 and markdown_signals > 0:
        return ContentType.MIXED
    if html_signals > 0:
        return ContentType.HTML
    if markdown_signals > 0:
        return ContentType.MARKDOWN
    return ContentType.PLAIN
