"""Allow-list HTML sanitizer.

HtmlSanitizer applies a SanitizePolicy in two passes:

1. BeautifulSoup removes elements whose content must never survive
   (script, style, embedded objects) together with that content.
2. bleach strips every remaining tag and attribute that is not on the
   allow-list and drops URLs with a scheme outside the permitted protocols.

The module-level ``sanitize`` function uses the fixed default policy and
fails closed: if anything goes wrong it returns the escaped text of the
input, never the input itself.
"""

import html
import logging

import bleach
from bs4 import BeautifulSoup, Comment

from richtext_engine.errors import SanitizeFailure, require_text
from richtext_engine.models import DEFAULT_SANITIZE_POLICY, SanitizePolicy

logger = logging.getLogger(__name__)

# Inputs above this size are refused rather than processed
MAX_SANITIZE_INPUT_CHARS = 5_000_000

# Attributes whose value is a URL
URL_ATTRIBUTES = frozenset({'href', 'src'})


class HtmlSanitizer:
    """Generic allow-list filter driven by a SanitizePolicy.

    Example:
        >>> sanitizer = HtmlSanitizer(DEFAULT_SANITIZE_POLICY)
        >>> sanitizer.clean('<p onclick="x()">Hi<script>bad()</script></p>')
        '<p>Hi</p>'
    """

    def __init__(self, policy: SanitizePolicy = DEFAULT_SANITIZE_POLICY):
        self.policy = policy
        self.parser = "html.parser"

    def clean(self, markup: str) -> str:
        """Sanitize markup according to the policy.

        Args:
            markup: Untrusted HTML

        Returns:
            HTML containing only allowed tags, attributes and URLs

        Raises:
            SanitizeFailure: If the input cannot be processed
        """
        if len(markup) > MAX_SANITIZE_INPUT_CHARS:
            raise SanitizeFailure(
                f"input of {len(markup)} chars exceeds limit of {MAX_SANITIZE_INPUT_CHARS}"
            )
        if not markup:
            return ""

        try:
            stripped = self._drop_content_tags(markup)
            return bleach.clean(
                stripped,
                tags=set(self.policy.allowed_tags),
                attributes=self._attribute_filter,
                protocols=set(self.policy.allowed_protocols),
                strip=True,
                strip_comments=True,
            )
        except SanitizeFailure:
            raise
        except Exception as e:
            raise SanitizeFailure(str(e) or type(e).__name__) from e

    def _drop_content_tags(self, markup: str) -> str:
        """Remove dangerous elements along with everything inside them."""
        soup = BeautifulSoup(markup, self.parser)
        for tag in soup.find_all(list(self.policy.drop_content_tags)):
            tag.decompose()
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()
        return str(soup)

    def _attribute_filter(self, tag: str, name: str, value: str) -> bool:
        """bleach attribute callback: keep only allow-listed attributes."""
        # URL schemes are checked by bleach against `protocols` afterwards
        return self.policy.allows_attribute(name)


def sanitize(markup: str) -> str:
    """Sanitize HTML with the fixed engine policy.

    Args:
        markup: Untrusted HTML

    Returns:
        Sanitized HTML; on internal failure, the HTML-escaped input text

    Raises:
        ImportFormatError: If markup is not a string
    """
    require_text(markup, 'html')
    try:
        return HtmlSanitizer(DEFAULT_SANITIZE_POLICY).clean(markup)
    except SanitizeFailure as e:
        logger.error(f"{e}; returning escaped text")
        return html.escape(markup)
    except Exception:
        logger.exception("Unexpected sanitizer error; returning escaped text")
        return html.escape(markup)
