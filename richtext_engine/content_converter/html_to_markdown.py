"""HTML → Markdown conversion using markdownify.

The converter produces GFM output (ATX headings, ``-`` bullets, pipe
tables, fenced code with language tags) and reports every construct the
Markdown cannot carry. Elements that cannot be represented at all
(scripts, embeds, form controls, event handlers, inline styles, styling
containers) are dropped and set ``data_loss``; constructs that are only
reformatted produce informational warnings.
"""

import logging
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from markdownify import MarkdownConverter as BaseMarkdownConverter

from richtext_engine.content_converter.post_processor import (
    CODE_WRAPPER_CLASS,
    TABLE_WRAPPER_CLASS,
)
from richtext_engine.errors import require_text
from richtext_engine.models import PRESERVABLE_TAGS, ConversionOptions, ConversionResult

logger = logging.getLogger(__name__)

SCRIPT_TAGS = frozenset({'script', 'style', 'noscript', 'template'})
EMBED_TAGS = frozenset({'iframe', 'object', 'embed', 'canvas', 'svg', 'video', 'audio', 'math'})
FORM_CONTROL_TAGS = frozenset({'input', 'button', 'select', 'textarea'})
INLINE_FORMAT_TAGS = frozenset({'strong', 'b', 'em', 'i', 'del', 's', 'strike', 'code'})
# Wrapper classes the renderer adds itself; they carry no author styling
RENDERER_CLASSES = frozenset({TABLE_WRAPPER_CLASS, CODE_WRAPPER_CLASS})

_COMMENT_PLACEHOLDER = "RTECOMMENT{}PLACEHOLDER"
_COMMENT_PLACEHOLDER_PATTERN = re.compile(r'RTECOMMENT(\d+)PLACEHOLDER')
_LANGUAGE_CLASS = re.compile(r'^(?:language|lang)-(.+)$')
_UNESCAPED_PIPE = re.compile(r'(?<!\\)\|')
_TASK_MARKER_SPACING = re.compile(r'^(\s*[-*+] \[[ x]\]) {2,}', re.MULTILINE)


def _code_language(el: Tag) -> str:
    """Find the language-X class on a <pre> or its <code> child."""
    candidates = [el]
    code = el.find('code')
    if code is not None:
        candidates.append(code)
    for tag in candidates:
        for css_class in tag.get('class', []):
            match = _LANGUAGE_CLASS.match(css_class)
            if match:
                return match.group(1)
    return ''


class _GFMMarkdownConverter(BaseMarkdownConverter):
    """markdownify converter producing GitHub-Flavored Markdown."""

    def __init__(self, **options):
        # Set defaults for clean GFM output
        options.setdefault('heading_style', 'atx')  # Use # style headings
        options.setdefault('bullets', '-')  # Use - for bullets
        options.setdefault('strong_em_symbol', '*')  # Use * for bold/italic
        options.setdefault('code_language_callback', _code_language)
        options.setdefault('preserve_unknown_tags', False)
        super().__init__(**options)

    def _is_in_table_cell(self, parent_tags):
        """Check if we're inside a table cell based on parent tags."""
        return 'td' in parent_tags or 'th' in parent_tags

    def convert_p(self, el, text, parent_tags):
        """Convert paragraph, separating paragraphs inside table cells."""
        text = text.strip()
        if not text:
            return ''

        # Newline marks the break; _convert_cell turns it into <br>
        if self._is_in_table_cell(parent_tags):
            return text + '\n'

        if '_inline' in parent_tags:
            return ' ' + text + ' '
        return '\n\n%s\n\n' % text

    def _convert_cell(self, el, text):
        colspan = 1
        if 'colspan' in el.attrs and el['colspan'].isdigit():
            colspan = max(1, min(1000, int(el['colspan'])))
        cell_text = text.strip().replace('\n', '<br>')
        while '<br><br>' in cell_text:
            cell_text = cell_text.replace('<br><br>', '<br>')
        while cell_text.endswith('<br>'):
            cell_text = cell_text.removesuffix('<br>')
        cell_text = _UNESCAPED_PIPE.sub(r'\\|', cell_text)
        return ' ' + cell_text + ' |' * colspan

    def convert_td(self, el, text, parent_tags):
        """Convert table cell, escaping pipes and keeping line breaks."""
        return self._convert_cell(el, text)

    def convert_th(self, el, text, parent_tags):
        """Convert table header cell, escaping pipes and keeping line breaks."""
        return self._convert_cell(el, text)

    def convert_br(self, el, text, parent_tags):
        """Convert <br> tags, preserving them in table cells."""
        if self._is_in_table_cell(parent_tags):
            return '<br>'
        if '_inline' in parent_tags:
            return ' '
        if self.options['newline_style'].lower() == 'backslash':
            return '\\\n'
        return '  \n'

    def convert_input(self, el, text, parent_tags):
        """Convert task-list checkboxes to [x] / [ ] markers."""
        if el.get('type', '').lower() != 'checkbox':
            return ''
        return '[x] ' if el.has_attr('checked') else '[ ] '

    def convert_img(self, el, text, parent_tags):
        """Convert images, keeping them inside headings and table cells."""
        return super().convert_img(el, text, set(parent_tags) - {'_inline'})

    def convert_u(self, el, text, parent_tags):
        """Keep underline as inline HTML."""
        if not text.strip():
            return text
        return f'<u>{text}</u>'

    def _preserved_inline(self, el, text):
        """Keep the tag as inline HTML when preserving unknown tags, else flatten it."""
        if self.options['preserve_unknown_tags'] and text.strip():
            return f'<{el.name}>{text}</{el.name}>'
        return text

    def convert_sup(self, el, text, parent_tags):
        """Convert superscript via _preserved_inline."""
        return self._preserved_inline(el, text)

    def convert_sub(self, el, text, parent_tags):
        """Convert subscript via _preserved_inline."""
        return self._preserved_inline(el, text)

    def convert_mark(self, el, text, parent_tags):
        """Convert highlighted text via _preserved_inline."""
        return self._preserved_inline(el, text)

    def convert_kbd(self, el, text, parent_tags):
        """Convert keyboard input via _preserved_inline."""
        return self._preserved_inline(el, text)

    def convert_var(self, el, text, parent_tags):
        """Convert variable names via _preserved_inline."""
        return self._preserved_inline(el, text)

    def convert_samp(self, el, text, parent_tags):
        """Convert sample output via _preserved_inline."""
        return self._preserved_inline(el, text)


class _WarningCollector:
    """Keeps one warning per message in first-detection order."""

    def __init__(self):
        self.messages: Dict[str, bool] = {}

    def add(self, message: str, lossy: bool) -> None:
        if message in self.messages:
            self.messages[message] = self.messages[message] or lossy
        else:
            self.messages[message] = lossy

    @property
    def warnings(self) -> List[str]:
        return list(self.messages)

    @property
    def data_loss(self) -> bool:
        return any(self.messages.values())


class HtmlToMarkdownConverter:
    """Converts HTML to GFM and reports fidelity.

    Attributes:
        options: ConversionOptions controlling raw-HTML preservation
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options if options is not None else ConversionOptions()
        self.parser = "html.parser"

    def convert(self, html: str) -> ConversionResult:
        """Convert HTML to Markdown.

        Args:
            html: HTML fragment or document

        Returns:
            ConversionResult with Markdown content and fidelity warnings
        """
        if not html.strip():
            return ConversionResult.build(html, "", [])

        collector = _WarningCollector()
        try:
            soup = BeautifulSoup(html, self.parser)
            self.scan(soup, collector)
            comments = self._prepare(soup)
            markdown = _GFMMarkdownConverter(
                preserve_unknown_tags=self.options.preserve_unknown_tags,
            ).convert_soup(soup)
            markdown = self._restore_comments(markdown, comments)
            markdown = _TASK_MARKER_SPACING.sub(r'\1 ', markdown)
            markdown = re.sub(r'\n{3,}', '\n\n', markdown).strip()
        except Exception as e:
            logger.warning(f"HTML to Markdown conversion failed, returning plain text: {e}")
            collector.add(f"Conversion failed, returned plain text: {e}", lossy=True)
            markdown = _plain_text(html)

        return ConversionResult.build(
            html,
            markdown,
            collector.warnings,
            data_loss=collector.data_loss,
        )

    def scan(self, soup: BeautifulSoup, collector: _WarningCollector) -> None:
        """Record fidelity warnings for the document in document order."""
        for node in soup.descendants:
            if isinstance(node, Comment):
                if self.options.preserve_comments:
                    collector.add("HTML comments kept verbatim", lossy=False)
                else:
                    collector.add("HTML comments removed", lossy=False)
                continue
            if not isinstance(node, Tag):
                continue
            if self._inside_removed(node):
                continue
            self._scan_tag(node, collector)

    def _scan_tag(self, tag: Tag, collector: _WarningCollector) -> None:
        name = tag.name

        if name in SCRIPT_TAGS:
            collector.add(f"Removed <{name}> element and its content - no Markdown equivalent", lossy=True)
            return
        if name in EMBED_TAGS:
            collector.add(f"Removed embedded <{name}> element - no Markdown equivalent", lossy=True)
            return
        if name in FORM_CONTROL_TAGS and not self._is_checkbox(tag):
            collector.add(f"Removed form control <{name}> - no Markdown equivalent", lossy=True)
            return
        if name == 'form':
            collector.add("Form wrapper <form> dropped - contents kept as text", lossy=True)

        if any(attr.lower().startswith('on') for attr in tag.attrs):
            collector.add("Inline event handlers removed - scripts cannot be represented in Markdown", lossy=True)
        if tag.has_attr('style'):
            collector.add("Inline styles detected - will be lost in Markdown conversion", lossy=True)
        if self._is_styling_container(tag):
            collector.add(
                "Styling containers (div/span with class, id or style) flattened - presentation lost",
                lossy=True,
            )

        if name in INLINE_FORMAT_TAGS and name != 'code' and tag.find_parent(list(INLINE_FORMAT_TAGS - {name})):
            collector.add("Nested inline formatting may not round-trip exactly", lossy=False)
        elif name == 'u':
            collector.add("Underline kept as inline HTML", lossy=False)
        elif name in PRESERVABLE_TAGS:
            if self.options.preserve_unknown_tags:
                collector.add(f"Tag <{name}> kept as inline HTML", lossy=False)
            else:
                collector.add(f"Tag <{name}> has no Markdown equivalent - kept as text", lossy=False)
        elif name in ('td', 'th') and (tag.has_attr('colspan') or tag.has_attr('rowspan')):
            collector.add("Merged table cells (colspan/rowspan) approximated", lossy=False)

    def _prepare(self, soup: BeautifulSoup) -> List[str]:
        """Drop unrepresentable elements; swap comments for placeholders.

        Returns:
            Comment texts indexed by placeholder number
        """
        removable = SCRIPT_TAGS | EMBED_TAGS
        for tag in soup.find_all(True):
            if tag.decomposed:
                continue
            if tag.name in removable or (tag.name in FORM_CONTROL_TAGS and not self._is_checkbox(tag)):
                tag.decompose()
        for form in soup.find_all('form'):
            form.unwrap()

        comments: List[str] = []
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            if self.options.preserve_comments:
                comment.replace_with(NavigableString(_COMMENT_PLACEHOLDER.format(len(comments))))
                comments.append(f"<!--{comment}-->")
            else:
                comment.extract()
        return comments

    @staticmethod
    def _restore_comments(markdown: str, comments: List[str]) -> str:
        if not comments:
            return markdown
        return _COMMENT_PLACEHOLDER_PATTERN.sub(lambda m: comments[int(m.group(1))], markdown)

    @staticmethod
    def _is_checkbox(tag: Tag) -> bool:
        return tag.name == 'input' and tag.get('type', '').lower() == 'checkbox'

    @staticmethod
    def _inside_removed(tag: Tag) -> bool:
        return any(parent.name in SCRIPT_TAGS | EMBED_TAGS for parent in tag.parents)

    @staticmethod
    def _is_styling_container(tag: Tag) -> bool:
        if tag.name not in ('div', 'span'):
            return False
        # Highlighter token spans inside code blocks
        if tag.name == 'span' and tag.find_parent(['pre', 'code']) is not None:
            return False
        classes = set(tag.get('class', []))
        if classes and classes <= RENDERER_CLASSES and not tag.has_attr('id'):
            return False
        return bool(classes) or tag.has_attr('id') or tag.has_attr('style')


def _plain_text(html: str) -> str:
    """Visible text of a document, used when conversion fails."""
    try:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup.find_all(list(SCRIPT_TAGS | EMBED_TAGS)):
            tag.decompose()
        text = soup.get_text('\n')
    except Exception:
        text = re.sub(r'<(script|style)\b.*?</\1\s*>', '', html, flags=re.DOTALL | re.IGNORECASE)
        text = re.sub(r'<[^>]*>', '', text)
    return re.sub(r'\n{3,}', '\n\n', text).strip()


def html_to_markdown(html: str, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Convert HTML to GitHub-Flavored Markdown.

    Args:
        html: HTML input
        options: Optional ConversionOptions

    Returns:
        ConversionResult; data_loss is set when content was dropped

    Raises:
        ImportFormatError: If html is not a string
    """
    require_text(html, 'html')
    return HtmlToMarkdownConverter(options).convert(html)
