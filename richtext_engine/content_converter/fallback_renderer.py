"""Degraded regex-based Markdown renderer.

Used when the structured markdown-it parse fails. The rules below are
applied in order: code is stashed first so later patterns cannot touch it,
headings are resolved before emphasis, and paragraph wrapping comes last.
The renderer never raises; output is always sanitized by the caller.
"""

import html
import logging
import re
from typing import List, Set

from richtext_engine.content_converter.slugs import slugify, unique_slug

logger = logging.getLogger(__name__)

_FENCED_CODE = re.compile(r'^(```|~~~)[ \t]*([\w+#.-]*)[^\n]*\n(.*?)(?:^\1[ \t]*$|\Z)', re.MULTILINE | re.DOTALL)
_INLINE_CODE = re.compile(r'`([^`\n]+)`')
_HEADING = re.compile(r'^[ \t]{0,3}(#{1,6})[ \t]+(.+?)[ \t#]*$', re.MULTILINE)
_PLACEHOLDER = '\x00{}\x00'
_PLACEHOLDER_PATTERN = re.compile('\x00(\\d+)\x00')

# (pattern, replacement) pairs in priority order
INLINE_RULES = [
    (re.compile(r'\*\*\*(.+?)\*\*\*'), r'<strong><em>\1</em></strong>'),
    (re.compile(r'\*\*(.+?)\*\*'), r'<strong>\1</strong>'),
    (re.compile(r'__(.+?)__'), r'<strong>\1</strong>'),
    (re.compile(r'\*(.+?)\*'), r'<em>\1</em>'),
    (re.compile(r'~~(.+?)~~'), r'<del>\1</del>'),
]

BLOCK_RULES = [
    (re.compile(r'^[ \t]*[-*+][ \t]+\[[xX]\][ \t]+(.*)$', re.MULTILINE),
     r'<li class="task-list-item"><input type="checkbox" class="task-list-item-checkbox" disabled checked> \1</li>'),
    (re.compile(r'^[ \t]*[-*+][ \t]+\[ \][ \t]+(.*)$', re.MULTILINE),
     r'<li class="task-list-item"><input type="checkbox" class="task-list-item-checkbox" disabled> \1</li>'),
    (re.compile(r'!\[([^\]]*)\]\(([^)\s]+)[^)]*\)'), r'<img src="\2" alt="\1">'),
    (re.compile(r'\[([^\]]+)\]\(([^)\s]+)[^)]*\)'), r'<a href="\2">\1</a>'),
    # Not preceded by a quote (href="...") or '>' (link text)
    (re.compile(r'(?<!["\'=>])(https?://[^\s<>"\']+[^\s<>"\'.,;:!?)])'), r'<a href="\1">\1</a>'),
]

_TABLE_SEPARATOR = re.compile(r'^[ \t]*\|?[ \t]*:?-+:?[ \t]*(\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$')
_TABLE_ROW = re.compile(r'^[ \t]*\|(.+)\|[ \t]*$')
_LIST_ITEM = re.compile(r'^[ \t]*(?:[-*+]|\d+\.)[ \t]+(.*)$')
_BLOCK_START = re.compile(r'^\s*<(h[1-6]|ul|ol|li|table|tr|pre|blockquote|div)\b')


def _heading_replacer(seen: Set[str]):
    def replace(match: re.Match) -> str:
        level = len(match.group(1))
        text = match.group(2)
        return f'<h{level} id="{unique_slug(slugify(text), seen)}">{text}</h{level}>'
    return replace


def _table_row(line: str) -> str:
    cells = [cell.strip() for cell in _TABLE_ROW.match(line).group(1).split('|')]
    return '<tr>' + ''.join(f'<td>{cell}</td>' for cell in cells) + '</tr>'


def _convert_lines(text: str) -> str:
    """Turn pipe-table rows and list items into naive HTML rows/items."""
    output: List[str] = []
    open_block = None

    def close():
        nonlocal open_block
        if open_block == 'table':
            output.append('</tbody></table>')
        elif open_block == 'list':
            output.append('</ul>')
        open_block = None

    for line in text.split('\n'):
        if _TABLE_ROW.match(line):
            if _TABLE_SEPARATOR.match(line):
                continue
            if open_block != 'table':
                close()
                output.append('<table><tbody>')
                open_block = 'table'
            output.append(_table_row(line))
            continue

        item = _LIST_ITEM.match(line)
        if item or line.lstrip().startswith('<li'):
            if open_block != 'list':
                close()
                output.append('<ul>')
                open_block = 'list'
            output.append(f'<li>{item.group(1)}</li>' if item else line.strip())
            continue

        close()
        output.append(line)
    close()
    return '\n'.join(output)


def _wrap_paragraphs(text: str) -> str:
    blocks = []
    for block in re.split(r'\n{2,}', text):
        block = block.strip()
        if not block:
            continue
        if _BLOCK_START.match(block) or _PLACEHOLDER_PATTERN.fullmatch(block):
            blocks.append(block)
        else:
            blocks.append('<p>' + block.replace('\n', '<br>') + '</p>')
    return '\n'.join(blocks)


def render_fallback(markdown: str) -> str:
    """Render Markdown with fixed regex substitutions.

    Args:
        markdown: Markdown source

    Returns:
        Best-effort HTML (unsanitized)
    """
    stash: List[str] = []

    def keep(fragment: str) -> str:
        stash.append(fragment)
        return _PLACEHOLDER.format(len(stash) - 1)

    def fenced(match: re.Match) -> str:
        language = match.group(2)
        attrs = f' class="language-{html.escape(language)}"' if language else ''
        return '\n\n' + keep(f'<pre><code{attrs}>{html.escape(match.group(3))}</code></pre>') + '\n\n'

    try:
        text = markdown.replace('\r\n', '\n')
        text = _FENCED_CODE.sub(fenced, text)
        text = _INLINE_CODE.sub(lambda m: keep(f'<code>{html.escape(m.group(1))}</code>'), text)
        text = _HEADING.sub(_heading_replacer(set()), text)
        for pattern, replacement in INLINE_RULES:
            text = pattern.sub(replacement, text)
        for pattern, replacement in BLOCK_RULES:
            text = pattern.sub(replacement, text)
        text = _convert_lines(text)
        text = _wrap_paragraphs(text)
        text = re.sub(r'<p>\s*</p>', '', text)
        return _PLACEHOLDER_PATTERN.sub(lambda m: stash[int(m.group(1))], text)
    except Exception as e:
        # Last resort: the escaped source as a single paragraph
        logger.warning(f"Fallback renderer failed, emitting escaped text: {e}")
        return '<p>' + html.escape(markdown).replace('\n', '<br>') + '</p>'
