"""Emoji shortcode lookup backed by the emoji package."""

from typing import Iterator, Mapping

import emoji


class EmojiTable(Mapping):
    """Read-only mapping from shortcode names to emoji glyphs.

    Names are given without the surrounding colons (``"smile"``), using
    the GitHub-style aliases known to the emoji package.

    Example:
        >>> EmojiTable()['thumbsup']
        '👍'
    """

    def __getitem__(self, name: str) -> str:
        shortcode = f":{name}:"
        glyph = emoji.emojize(shortcode, language='alias')
        if glyph == shortcode:
            raise KeyError(name)
        return glyph

    def __iter__(self) -> Iterator[str]:
        for data in emoji.EMOJI_DATA.values():
            for alias in data.get('alias', []):
                yield alias.strip(':')

    def __len__(self) -> int:
        return sum(1 for _ in self)
