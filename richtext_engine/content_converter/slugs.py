"""Heading slug generation shared by both render strategies."""

import re
from typing import Set

_STRIP_TAGS = re.compile(r'<[^>]+>')
_NON_SLUG_CHARS = re.compile(r'[^\w\- ]', re.UNICODE)


def slugify(text: str) -> str:
    """Convert heading text to a GitHub-style anchor id.

    Lower-cases, drops punctuation and markup, and turns spaces into
    hyphens: ``"Hello, World!"`` becomes ``"hello-world"``.
    """
    text = _STRIP_TAGS.sub('', text).strip().lower()
    text = _NON_SLUG_CHARS.sub('', text)
    return text.replace(' ', '-')


def unique_slug(slug: str, seen: Set[str]) -> str:
    """Return slug, or slug-N for the first N that has not been used.

    Records the returned value in ``seen``.
    """
    candidate = slug
    index = 1
    while candidate in seen:
        candidate = f"{slug}-{index}"
        index += 1
    seen.add(candidate)
    return candidate
