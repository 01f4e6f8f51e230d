"""Unit tests for models module."""

from dataclasses import FrozenInstanceError

import pytest

from richtext_engine.errors import ImportFormatError
from richtext_engine.models import (
    ContentType,
    ConversionOptions,
    ConversionResult,
    GFMOptions,
    SanitizePolicy,
)


class TestConversionResult:
    """Test cases for ConversionResult dataclass."""

    def test_defaults(self):
        """Only content is required."""
        result = ConversionResult(content="x")

        assert result.warnings == []
        assert result.data_loss is False
        assert result.original_length == 0
        assert result.converted_length == 0
        assert result.metadata == {}

    def test_default_lists_not_shared(self):
        """Each instance gets its own warnings list."""
        a = ConversionResult(content="a")
        b = ConversionResult(content="b")
        a.warnings.append("w")

        assert b.warnings == []

    def test_data_loss_requires_warning(self):
        """data_loss without a warning is rejected."""
        with pytest.raises(ValueError):
            ConversionResult(content="x", data_loss=True)

    def test_build_derives_lengths(self):
        """build() fills both length fields and metadata."""
        result = ConversionResult.build("hello", "hi", ["w"], data_loss=True, renderer="structured")

        assert result.original_length == 5
        assert result.converted_length == 2
        assert result.data_loss is True
        assert result.metadata == {"renderer": "structured"}

    def test_build_copies_warnings(self):
        """The caller's warning list is not aliased."""
        warnings = ["w"]
        result = ConversionResult.build("a", "b", warnings)
        warnings.append("later")

        assert result.warnings == ["w"]


class TestContentType:
    """Test cases for ContentType enum."""

    def test_values(self):
        """The four verdicts have lowercase values."""
        assert [t.value for t in ContentType] == ["html", "markdown", "mixed", "plain"]

    def test_str(self):
        """str() gives the value."""
        assert str(ContentType.MIXED) == "mixed"


class TestGFMOptions:
    """Test cases for GFMOptions dataclass."""

    def test_defaults(self):
        """Defaults match the editor's settings."""
        options = GFMOptions()

        assert options.to_dict() == {
            'tables': True,
            'breaks': True,
            'pedantic': False,
            'gfm': True,
            'smart_lists': True,
            'smartypants': False,
            'header_ids': True,
            'syntax_highlight': True,
        }

    def test_frozen(self):
        """Options cannot be mutated after creation."""
        options = GFMOptions()
        with pytest.raises(FrozenInstanceError):
            options.tables = False

    def test_pedantic_disables_gfm(self):
        """pedantic wins over gfm and tables."""
        options = GFMOptions(pedantic=True)

        assert options.gfm_enabled is False
        assert options.tables_enabled is False

    def test_tables_require_gfm(self):
        """Tables need GFM extensions."""
        assert GFMOptions(gfm=False).tables_enabled is False

    def test_from_dict_fills_defaults(self):
        """Missing keys take defaults."""
        options = GFMOptions.from_dict({'breaks': False})

        assert options.breaks is False
        assert options.tables is True

    def test_from_dict_accepts_camel_case(self):
        """camelCase editor settings are understood."""
        options = GFMOptions.from_dict({'headerIds': False, 'syntaxHighlight': False, 'smartLists': False})

        assert options.header_ids is False
        assert options.syntax_highlight is False
        assert options.smart_lists is False

    def test_from_dict_unknown_key(self):
        """Unknown keys are rejected with the key name."""
        with pytest.raises(ImportFormatError) as exc_info:
            GFMOptions.from_dict({'emoji': True})

        assert exc_info.value.field_name == 'emoji'

    def test_from_dict_non_bool_value(self):
        """Values must be booleans."""
        with pytest.raises(ImportFormatError) as exc_info:
            GFMOptions.from_dict({'tables': 'yes'})

        assert exc_info.value.field_name == 'tables'
        assert "expected a boolean, got str" in str(exc_info.value)

    def test_from_dict_non_mapping(self):
        """A non-mapping is rejected."""
        with pytest.raises(ImportFormatError):
            GFMOptions.from_dict(['tables'])

    def test_round_trip_through_dict(self):
        """to_dict output is accepted by from_dict."""
        options = GFMOptions(smartypants=True, breaks=False)

        assert GFMOptions.from_dict(options.to_dict()) == options


class TestConversionOptions:
    """Test cases for ConversionOptions dataclass."""

    def test_defaults(self):
        """Raw HTML preservation is off by default."""
        options = ConversionOptions()

        assert options.preserve_comments is False
        assert options.preserve_unknown_tags is False


class TestSanitizePolicy:
    """Test cases for SanitizePolicy dataclass."""

    def test_allows_attribute(self):
        """Attribute checks are case-insensitive."""
        policy = SanitizePolicy(allowed_tags=frozenset({'p'}), allowed_attributes=frozenset({'class'}))

        assert policy.allows_attribute('CLASS') is True
        assert policy.allows_attribute('style') is False

    def test_data_attributes(self):
        """data-* follows allow_data_attributes."""
        strict = SanitizePolicy(allowed_tags=frozenset(), allowed_attributes=frozenset())
        lenient = SanitizePolicy(
            allowed_tags=frozenset(), allowed_attributes=frozenset(), allow_data_attributes=True,
        )

        assert strict.allows_attribute('data-x') is False
        assert lenient.allows_attribute('data-x') is True
