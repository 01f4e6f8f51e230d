"""GitHub-style post-processing of rendered HTML.

Runs after the structured renderer has serialized Markdown to HTML and
applies the features GitHub adds on top of plain GFM output: emoji
shortcodes, bare-URL autolinks, table and code-block wrappers, and a single
checkbox form for task-list items.
"""

import logging
import re
from typing import Callable, List, Mapping, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

logger = logging.getLogger(__name__)

EMOJI_SHORTCODE = re.compile(r':([a-z0-9_+\-]+):')
BARE_URL = re.compile(r'https?://[^\s<>"\']+')
RAW_TASK_MARKER = re.compile(r'^\s*\[([ xX])\]\s+')

# Characters that end a sentence rather than a URL
_URL_TRAILING_PUNCTUATION = '.,;:!?)\'"'

TABLE_WRAPPER_CLASS = "table-wrapper"
TABLE_CLASS = "gfm-table"
CODE_WRAPPER_CLASS = "code-block-wrapper"
CODE_BLOCK_CLASS = "code-block"
TASK_ITEM_CLASS = "task-list-item"
TASK_CHECKBOX_CLASS = "task-list-item-checkbox"


def _inside(node, names) -> bool:
    return any(parent.name in names for parent in node.parents)


def _plain_strings(soup: BeautifulSoup, skip) -> List[NavigableString]:
    """Collect text nodes (not comments/CDATA) outside the skipped elements."""
    return [
        s for s in soup.find_all(string=True)
        if type(s) is NavigableString and not _inside(s, skip)
    ]


def _replace_text(node: NavigableString, pattern, build: Callable[[re.Match], Optional[list]]) -> None:
    """Split a text node around pattern matches.

    ``build`` returns the replacement pieces (strings or Tags) for a match,
    or None to leave the matched text as it is.
    """
    text = str(node)
    pieces = []
    last = 0
    for match in pattern.finditer(text):
        replacement = build(match)
        if replacement is None:
            continue
        pieces.append(text[last:match.start()])
        pieces.extend(replacement)
        last = match.end()
    if not pieces:
        return
    pieces.append(text[last:])

    for piece in pieces:
        if isinstance(piece, str):
            if not piece:
                continue
            piece = NavigableString(piece)
        node.insert_before(piece)
    node.extract()


class GFMPostProcessor:
    """Applies GitHub-style features to rendered HTML.

    Attributes:
        emoji_table: Mapping of shortcode name to glyph
    """

    def __init__(self, emoji_table: Mapping[str, str]):
        self.emoji_table = emoji_table
        self.parser = "html.parser"

    def process(self, html: str) -> str:
        """Run every post-processing step over an HTML fragment.

        Args:
            html: HTML produced by the structured renderer

        Returns:
            Post-processed HTML
        """
        soup = BeautifulSoup(html, self.parser)
        self.expand_emoji(soup)
        self.autolink_urls(soup)
        self.wrap_tables(soup)
        self.normalize_task_items(soup)
        self.wrap_code_blocks(soup)
        return str(soup)

    def expand_emoji(self, soup: BeautifulSoup) -> None:
        """Replace :name: shortcodes outside code with glyphs."""
        def build(match):
            glyph = self.emoji_table.get(match.group(1))
            return None if glyph is None else [glyph]

        for node in _plain_strings(soup, ('code', 'pre')):
            if ':' in node:
                _replace_text(node, EMOJI_SHORTCODE, build)

    def autolink_urls(self, soup: BeautifulSoup) -> None:
        """Wrap bare http(s) URLs that are not already linked."""
        def build(match):
            url = match.group(0).rstrip(_URL_TRAILING_PUNCTUATION)
            if url in ('http://', 'https://'):
                return None
            link = soup.new_tag('a', href=url)
            link.string = url
            return [link, match.group(0)[len(url):]]

        for node in _plain_strings(soup, ('a', 'code', 'pre')):
            if 'http' in node:
                _replace_text(node, BARE_URL, build)

    def wrap_tables(self, soup: BeautifulSoup) -> None:
        for table in soup.find_all('table'):
            classes = table.get('class', [])
            if TABLE_CLASS not in classes:
                table['class'] = classes + [TABLE_CLASS]
            parent = table.parent
            if parent is not None and parent.name == 'div' and TABLE_WRAPPER_CLASS in parent.get('class', []):
                continue
            table.wrap(soup.new_tag('div', attrs={'class': TABLE_WRAPPER_CLASS}))

    def normalize_task_items(self, soup: BeautifulSoup) -> None:
        """Give every task-list item the same checkbox markup."""
        for li in soup.find_all('li'):
            checkbox = li.find('input', attrs={'type': 'checkbox'})
            if checkbox is not None and self._is_leading(li, checkbox):
                checked = checkbox.has_attr('checked')
                checkbox.decompose()
                self._mark_task_item(soup, li, checked)
                continue

            first = self._first_text(li)
            if first is None:
                continue
            match = RAW_TASK_MARKER.match(str(first))
            if match:
                first.replace_with(NavigableString(str(first)[match.end():]))
                self._mark_task_item(soup, li, match.group(1).lower() == 'x')

    def wrap_code_blocks(self, soup: BeautifulSoup) -> None:
        for pre in soup.find_all('pre'):
            classes = [c for c in pre.get('class', []) if c != CODE_BLOCK_CLASS]
            code = pre.find('code', recursive=False)
            if code is not None:
                languages = [c for c in code.get('class', []) if c.startswith('language-')]
                classes += [c for c in languages if c not in classes]
            pre['class'] = [CODE_BLOCK_CLASS] + classes

            parent = pre.parent
            if parent is not None and parent.name == 'div' and CODE_WRAPPER_CLASS in parent.get('class', []):
                continue
            pre.wrap(soup.new_tag('div', attrs={'class': CODE_WRAPPER_CLASS}))

    def _mark_task_item(self, soup: BeautifulSoup, li: Tag, checked: bool) -> None:
        classes = [c for c in li.get('class', []) if c not in ('enabled', TASK_ITEM_CLASS)]
        li['class'] = [TASK_ITEM_CLASS] + classes

        attrs = {'type': 'checkbox', 'class': TASK_CHECKBOX_CLASS, 'disabled': ''}
        if checked:
            attrs['checked'] = ''
        checkbox = soup.new_tag('input', attrs=attrs)

        # Loose lists put the item text inside a <p>
        target = li.p if li.p is not None and li.p is li.find(True) else li
        first = self._first_text(target)
        if first is not None:
            first.replace_with(NavigableString(' ' + str(first).lstrip()))
        target.insert(0, checkbox)

    @staticmethod
    def _first_text(element: Tag) -> Optional[NavigableString]:
        for node in element.descendants:
            if type(node) is NavigableString:
                if node.strip():
                    return node
            elif isinstance(node, Tag) and node.name in ('ul', 'ol', 'input'):
                return None
        return None

    @staticmethod
    def _is_leading(li: Tag, checkbox: Tag) -> bool:
        """Whether the checkbox precedes all text of the list item."""
        for node in li.descendants:
            if node is checkbox:
                return True
            if type(node) is NavigableString and node.strip():
                return False
        return False
