"""Allow-list policy consumed by the HTML sanitizer.

The policy is plain data so it can be audited and tested apart from the
filter that applies it.
"""

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class SanitizePolicy:
    """Allow-list for HTML sanitization.

    Attributes:
        allowed_tags: Elements kept in the output (others are unwrapped)
        allowed_attributes: Attributes kept on any allowed element
        allow_data_attributes: Whether data-* attributes survive
        allowed_protocols: URL schemes permitted in href/src
        drop_content_tags: Elements removed together with their content
    """
    allowed_tags: FrozenSet[str]
    allowed_attributes: FrozenSet[str]
    allow_data_attributes: bool = False
    allowed_protocols: FrozenSet[str] = frozenset({'http', 'https', 'mailto'})
    drop_content_tags: FrozenSet[str] = frozenset({
        'script', 'style', 'iframe', 'object', 'embed', 'noscript',
        'template', 'svg', 'math', 'textarea', 'select', 'button',
    })

    def allows_attribute(self, name: str) -> bool:
        """Check whether an attribute name passes the policy."""
        name = name.lower()
        if name.startswith('data-'):
            return self.allow_data_attributes
        return name in self.allowed_attributes


DEFAULT_SANITIZE_POLICY = SanitizePolicy(
    allowed_tags=frozenset({
        'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
        'p', 'br', 'strong', 'em', 'u', 's', 'del',
        'a', 'img', 'ul', 'ol', 'li', 'blockquote',
        'code', 'pre',
        'table', 'thead', 'tbody', 'tr', 'th', 'td',
        'div', 'span', 'input',
    }),
    allowed_attributes=frozenset({
        'href', 'src', 'alt', 'title', 'class', 'id',
        'type', 'checked', 'disabled',
    }),
    allow_data_attributes=False,
)
