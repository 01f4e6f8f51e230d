"""Syntax tokenizers for fenced code blocks.

The renderer receives tokenizers as a plain mapping from language id to a
callable returning marked-up HTML spans. Nothing is registered globally;
tests and callers can pass a dict of their own.
"""

import logging
from functools import partial
from typing import Callable, Iterator, Mapping, Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_all_lexers, get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], str]
TokenizerMapping = Mapping[str, Tokenizer]


def _tokenize(lexer, code: str) -> str:
    # nowrap: the renderer supplies <pre><code class="language-x">
    return highlight(code, lexer, HtmlFormatter(nowrap=True))


class PygmentsTokenizers(Mapping):
    """Read-only mapping of language aliases to Pygments tokenizers.

    Lookups for languages Pygments does not know raise KeyError, so
    ``tokenizers.get(lang)`` returns None for them.
    """

    def __getitem__(self, language: str) -> Tokenizer:
        if not language:
            raise KeyError(language)
        try:
            lexer = get_lexer_by_name(language.lower())
        except ClassNotFound:
            raise KeyError(language)
        return partial(_tokenize, lexer)

    def __iter__(self) -> Iterator[str]:
        for _name, aliases, _patterns, _mimetypes in get_all_lexers():
            yield from aliases

    def __len__(self) -> int:
        return sum(1 for _ in self)


def highlight_code(code: str, language: str, tokenizers: TokenizerMapping) -> Optional[str]:
    """Tokenize a code block using its declared language.

    Args:
        code: Raw code block content
        language: Declared language identifier (may be empty)
        tokenizers: Mapping of language id to tokenizer

    Returns:
        Highlighted HTML, or None when the block should pass through
        unhighlighted (unknown language or tokenizer error)
    """
    if not language:
        return None

    tokenizer = tokenizers.get(language)
    if tokenizer is None:
        logger.debug(f"No tokenizer for language '{language}', leaving block unhighlighted")
        return None

    try:
        return tokenizer(code)
    except Exception as e:
        logger.warning(f"Tokenizer for '{language}' failed, leaving block unhighlighted: {e}")
        return None
