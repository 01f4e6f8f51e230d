"""Options for HTML → Markdown conversion."""

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class ConversionOptions:
    """Options controlling what the reverse converter keeps as raw HTML.

    Attributes:
        preserve_comments: Keep HTML comments verbatim in the Markdown
        preserve_unknown_tags: Keep inline tags without a Markdown
            equivalent (see PRESERVABLE_TAGS) as inline HTML
    """
    preserve_comments: bool = False
    preserve_unknown_tags: bool = False


# Inline tags that Markdown renderers pass through untouched
PRESERVABLE_TAGS: FrozenSet[str] = frozenset({
    'sup', 'sub', 'mark', 'kbd', 'var', 'samp',
})
