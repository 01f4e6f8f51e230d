"""Unit tests for content_converter.emoji_table module."""

import pytest

from richtext_engine.content_converter.emoji_table import EmojiTable


class TestEmojiTable:
    """Test cases for EmojiTable mapping."""

    def test_lookup_alias(self):
        """GitHub-style aliases resolve to glyphs."""
        table = EmojiTable()

        assert table['thumbsup'] == '👍'
        assert table['rocket'] == '🚀'

    def test_unknown_name(self):
        """Unknown names raise KeyError and get() gives None."""
        table = EmojiTable()

        with pytest.raises(KeyError):
            table['not_a_real_emoji_name']
        assert table.get('not_a_real_emoji_name') is None

    def test_membership(self):
        """'in' checks work through the Mapping interface."""
        assert 'rocket' in EmojiTable()

    def test_iteration_yields_bare_names(self):
        """Iterated names carry no colons."""
        names = set(EmojiTable())

        assert 'thumbsup' in names
        assert not any(name.startswith(':') for name in names)
