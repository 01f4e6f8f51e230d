"""Rendering options for the GitHub-Flavored-Markdown renderer."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from richtext_engine.errors import ImportFormatError


# camelCase spellings accepted for compatibility with editor settings
_CAMEL_CASE_ALIASES = {
    'smartLists': 'smart_lists',
    'headerIds': 'header_ids',
    'syntaxHighlight': 'syntax_highlight',
}


@dataclass(frozen=True)
class GFMOptions:
    """Options for a single Markdown → HTML render.

    Attributes:
        tables: Render pipe tables
        breaks: Soft line breaks become <br>
        pedantic: Strict original Markdown.pl semantics (no GFM extensions)
        gfm: Enable GFM extensions (tables, strikethrough, task lists)
        smart_lists: Cosmetic list normalization
        smartypants: Typographic quotes and dashes
        header_ids: Generate slug ids on headings
        syntax_highlight: Tokenize fenced code by declared language
    """
    tables: bool = True
    breaks: bool = True
    pedantic: bool = False
    gfm: bool = True
    smart_lists: bool = True
    smartypants: bool = False
    header_ids: bool = True
    syntax_highlight: bool = True

    @property
    def gfm_enabled(self) -> bool:
        """Whether GFM grammar extensions are active for this render."""
        return self.gfm and not self.pedantic

    @property
    def tables_enabled(self) -> bool:
        return self.tables and self.gfm_enabled

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GFMOptions":
        """Build options from a mapping, filling in defaults.

        Args:
            data: Option names (snake_case or camelCase) to booleans

        Returns:
            GFMOptions instance

        Raises:
            ImportFormatError: If a key is unknown or a value is not a bool
        """
        if not isinstance(data, Mapping):
            raise ImportFormatError(
                f"options must be a mapping, got {type(data).__name__}",
                field_name='options',
            )

        known = {f.name for f in fields(cls)}
        values: Dict[str, bool] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                raise ImportFormatError(f"unknown option '{key}'", field_name=key)
            if not isinstance(value, bool):
                raise ImportFormatError(
                    f"expected a boolean, got {type(value).__name__}",
                    field_name=key,
                )
            values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)
