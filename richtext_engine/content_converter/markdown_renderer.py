"""Markdown → HTML rendering with GitHub-Flavored-Markdown extensions.

Two render strategies exist:

- STRUCTURED: markdown-it-py parses the source into tokens (CommonMark plus
  GFM tables, strikethrough and task lists), renders them with heading ids
  and syntax highlighting, and GFMPostProcessor adds GitHub-style markup.
- FALLBACK: the regex renderer in fallback_renderer.

The structured attempt reports its result as a RenderOutcome. A failed
outcome selects the fallback strategy; no exception crosses that boundary.
Both strategies are sanitized before the ConversionResult is built.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from richtext_engine.content_converter.emoji_table import EmojiTable
from richtext_engine.content_converter.fallback_renderer import render_fallback
from richtext_engine.content_converter.highlighting import (
    PygmentsTokenizers,
    TokenizerMapping,
    highlight_code,
)
from richtext_engine.content_converter.post_processor import TASK_CHECKBOX_CLASS, GFMPostProcessor
from richtext_engine.content_converter.sanitizer import sanitize
from richtext_engine.content_converter.slugs import slugify
from richtext_engine.errors import ParseFailure, require_text
from richtext_engine.models import ConversionResult, GFMOptions

logger = logging.getLogger(__name__)

# Feature warnings, in reporting order
FEATURE_HTML = "HTML tags detected in Markdown - may affect rendering"
FEATURE_LINK_TITLES = "Link titles detected"
FEATURE_IMAGE_TITLES = "Image titles detected"
FEATURE_TABLES = "Tables detected"
FEATURE_CODE_BLOCKS = "Code blocks detected"
FEATURE_TASK_LISTS = "Task lists detected"
FEATURE_ORDER = [
    FEATURE_HTML,
    FEATURE_LINK_TITLES,
    FEATURE_IMAGE_TITLES,
    FEATURE_TABLES,
    FEATURE_CODE_BLOCKS,
    FEATURE_TASK_LISTS,
]

# Source patterns used when no token stream is available
SOURCE_FEATURE_PATTERNS = [
    (FEATURE_HTML, re.compile(r'<[A-Za-z/!][^<>]*>')),
    (FEATURE_LINK_TITLES, re.compile(r'(?<!!)\[[^\[\]\n]*\]\([^()\s]+\s+"[^"\n]*"\)')),
    (FEATURE_IMAGE_TITLES, re.compile(r'!\[[^\[\]\n]*\]\([^()\s]+\s+"[^"\n]*"\)')),
    (FEATURE_TABLES, re.compile(r'^[ \t]*\|.*\|.*$', re.MULTILINE)),
    (FEATURE_CODE_BLOCKS, re.compile(r'^\s{0,3}(```|~~~)', re.MULTILINE)),
    (FEATURE_TASK_LISTS, re.compile(r'^[ \t]*[-*+]\s+\[[ xX]\]\s', re.MULTILINE)),
]


class RenderStrategy(str, Enum):
    """Which renderer produced the HTML."""
    STRUCTURED = "structured"
    FALLBACK = "fallback"


@dataclass
class RenderOutcome:
    """Result of one render attempt.

    Attributes:
        strategy: Renderer that produced (or failed to produce) the HTML
        html: Rendered, unsanitized HTML (empty when the attempt failed)
        features: Feature warnings detected while rendering
        failure: ParseFailure when the attempt did not succeed
    """
    strategy: RenderStrategy
    html: str = ""
    features: List[str] = field(default_factory=list)
    failure: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _ordered(found) -> List[str]:
    return [feature for feature in FEATURE_ORDER if feature in found]


def detect_source_features(markdown: str) -> List[str]:
    """Detect GFM feature usage from raw Markdown text."""
    found = {message for message, pattern in SOURCE_FEATURE_PATTERNS if pattern.search(markdown)}
    return _ordered(found)


def detect_token_features(tokens) -> List[str]:
    """Detect GFM feature usage from a markdown-it token stream."""
    found = set()
    pending = list(tokens)
    while pending:
        token = pending.pop()
        if token.children:
            pending.extend(token.children)
        if token.type in ('html_block', 'html_inline'):
            # The tasklists plugin emits its checkbox as inline HTML
            if TASK_CHECKBOX_CLASS not in token.content:
                found.add(FEATURE_HTML)
        elif token.type == 'link_open' and token.attrGet('title'):
            found.add(FEATURE_LINK_TITLES)
        elif token.type == 'image' and token.attrGet('title'):
            found.add(FEATURE_IMAGE_TITLES)
        elif token.type == 'table_open':
            found.add(FEATURE_TABLES)
        elif token.type in ('fence', 'code_block'):
            found.add(FEATURE_CODE_BLOCKS)
        elif token.type == 'list_item_open' and 'task-list-item' in str(token.attrGet('class') or ''):
            found.add(FEATURE_TASK_LISTS)
    return _ordered(found)


class GFMRenderer:
    """Renders Markdown to HTML for one set of options.

    A new markdown-it instance is built per renderer, so renderers share
    no state and can be used from several threads.

    Attributes:
        options: Rendering options
        tokenizers: Language id → tokenizer mapping for fenced code
        emoji_table: Shortcode name → glyph mapping
    """

    def __init__(
        self,
        options: Optional[GFMOptions] = None,
        tokenizers: Optional[TokenizerMapping] = None,
        emoji_table: Optional[Mapping[str, str]] = None,
    ):
        self.options = options if options is not None else GFMOptions()
        self.tokenizers = tokenizers if tokenizers is not None else PygmentsTokenizers()
        self.emoji_table = emoji_table if emoji_table is not None else EmojiTable()

    def build_parser(self) -> MarkdownIt:
        """Create a markdown-it parser configured for self.options."""
        opts = self.options
        config = {
            'html': True,
            'breaks': opts.breaks,
            'typographer': opts.smartypants,
        }
        if opts.syntax_highlight:
            config['highlight'] = self._highlight

        md = MarkdownIt('commonmark', config)
        if opts.gfm_enabled:
            md.enable('strikethrough')
            if opts.tables_enabled:
                md.enable('table')
            md.use(tasklists_plugin)
        if opts.smartypants:
            md.enable(['replacements', 'smartquotes'])
        if opts.header_ids:
            md.use(anchors_plugin, min_level=1, max_level=6, slug_func=slugify)
        return md

    def render_structured(self, markdown: str) -> RenderOutcome:
        """Attempt the structured render.

        Returns:
            RenderOutcome; on failure its ``failure`` explains why
        """
        try:
            md = self.build_parser()
            tokens = md.parse(markdown)
            html = md.renderer.render(tokens, md.options, {})
            if not isinstance(html, str):
                raise TypeError(f"renderer returned {type(html).__name__}")
            if tokens and not html.strip():
                raise ValueError("renderer produced no output for non-empty token stream")
            html = GFMPostProcessor(self.emoji_table).process(html)
        except Exception as e:
            failure = ParseFailure(str(e) or type(e).__name__)
            logger.warning(f"{failure}; switching to degraded renderer")
            return RenderOutcome(strategy=RenderStrategy.STRUCTURED, failure=failure)

        return RenderOutcome(
            strategy=RenderStrategy.STRUCTURED,
            html=html,
            features=detect_token_features(tokens),
        )

    def render_degraded(self, markdown: str, reason: str = "") -> RenderOutcome:
        """Render with the regex fallback; never fails."""
        features = detect_source_features(markdown)
        notice = "Structured rendering failed; used degraded renderer"
        if reason:
            notice += f": {reason}"
        return RenderOutcome(
            strategy=RenderStrategy.FALLBACK,
            html=render_fallback(markdown),
            features=features + [notice],
        )

    def render(self, markdown: str) -> RenderOutcome:
        """Render Markdown, selecting the strategy from the structured outcome."""
        outcome = self.render_structured(markdown)
        if outcome.ok:
            return outcome
        return self.render_degraded(markdown, outcome.failure.reason)

    def _highlight(self, code: str, language: str, _attrs: str) -> str:
        # Empty string tells markdown-it to escape the block itself
        return highlight_code(code, language, self.tokenizers) or ""


def markdown_to_html(
    markdown: str,
    options: Optional[GFMOptions] = None,
    tokenizers: Optional[TokenizerMapping] = None,
    emoji_table: Optional[Mapping[str, str]] = None,
) -> ConversionResult:
    """Convert Markdown to sanitized HTML.

    Args:
        markdown: Markdown source
        options: Rendering options (defaults to GFMOptions())
        tokenizers: Optional language → tokenizer mapping
        emoji_table: Optional shortcode → glyph mapping

    Returns:
        ConversionResult with sanitized HTML; data_loss is always False

    Raises:
        ImportFormatError: If markdown is not a string or options has the
            wrong type
    """
    require_text(markdown, 'markdown')
    if options is not None and not isinstance(options, GFMOptions):
        options = GFMOptions.from_dict(options)

    renderer = GFMRenderer(options, tokenizers=tokenizers, emoji_table=emoji_table)
    outcome = renderer.render(markdown)
    html = sanitize(outcome.html)

    logger.debug(
        f"Rendered {len(markdown)} chars of Markdown to {len(html)} chars of HTML "
        f"({outcome.strategy.value})"
    )
    return ConversionResult.build(
        markdown,
        html,
        outcome.features,
        data_loss=False,
        renderer=outcome.strategy.value,
    )
