"""Integration tests for the public engine API.

Exercises the six exposed operations together, the way an editor calls
them, through the package's top-level imports.
"""

import pytest

from richtext_engine import (
    ContentType,
    ConversionResult,
    ImportFormatError,
    detect_content_type,
    get_conversion_stats,
    html_to_markdown,
    markdown_to_html,
    sanitize,
    validate_conversion,
)
from tests.fixtures.sample_html import XSS_VECTORS
from tests.fixtures.sample_markdown import (
    SAMPLE_MARKDOWN_ALL_FEATURES,
    SAMPLE_MARKDOWN_MALICIOUS,
    SAMPLE_MARKDOWN_SIMPLE,
)


class TestClassification:
    """Verdicts for the canonical documents."""

    @pytest.mark.parametrize("text,expected", [
        ("<div><p>Hello <strong>world</strong></p></div>", ContentType.HTML),
        ("# Hello\n\n**bold** text.", ContentType.MARKDOWN),
        ("# Hello\n\n<div>mixed</div>", ContentType.MIXED),
        ("Just plain text.", ContentType.PLAIN),
    ])
    def test_canonical_documents(self, text, expected):
        """Each canonical document gets its expected verdict."""
        assert detect_content_type(text) == expected

    def test_rendered_html_detected_as_html(self):
        """Renderer output classifies as HTML."""
        html = markdown_to_html(SAMPLE_MARKDOWN_SIMPLE).content

        assert detect_content_type(html) == ContentType.HTML


class TestConversionProperties:
    """Properties that hold across conversions."""

    @pytest.mark.parametrize("text", ["Alpha", "Two words", "Déjà vu"])
    def test_heading_text_survives(self, text):
        """An ATX heading renders as a heading with the same text."""
        html = markdown_to_html(f"# {text}").content

        assert f">{text}</h1>" in html

    @pytest.mark.parametrize("text", ["X", "bold words"])
    def test_strong_both_directions(self, text):
        """Strong emphasis maps to ** and back."""
        assert f"**{text}**" in html_to_markdown(f"<strong>{text}</strong>").content
        assert f"<strong>{text}</strong>" in markdown_to_html(f"**{text}**").content

    def test_script_in_html_is_data_loss(self):
        """Scripts are dropped, reported, and never leak."""
        result = html_to_markdown('<div><script>alert(1)</script><p>Content</p></div>')

        assert result.data_loss is True
        assert len(result.warnings) > 0
        assert 'alert(1)' not in result.content
        assert result.content == 'Content'

    def test_data_loss_implies_warnings(self):
        """No conversion reports loss without saying why."""
        documents = [
            '<p style="color:red">x</p>',
            '<form><input type="text"></form>',
            '<video src="a.mp4"></video><p>x</p>',
        ]
        for document in documents:
            result = html_to_markdown(document)
            assert result.data_loss is True
            assert result.warnings

    def test_conversions_are_deterministic(self):
        """Identical input gives identical results."""
        assert markdown_to_html(SAMPLE_MARKDOWN_ALL_FEATURES) == markdown_to_html(SAMPLE_MARKDOWN_ALL_FEATURES)
        assert html_to_markdown('<p style="a">b</p>') == html_to_markdown('<p style="a">b</p>')

    def test_content_never_none(self):
        """Both directions always return text content."""
        for result in (markdown_to_html(""), html_to_markdown(""), markdown_to_html("x")):
            assert isinstance(result, ConversionResult)
            assert isinstance(result.content, str)


class TestSafety:
    """Rendered and sanitized output never carries active content."""

    @pytest.mark.parametrize("vector", XSS_VECTORS)
    def test_markdown_with_embedded_vectors(self, vector):
        """Raw HTML inside Markdown is sanitized like any other HTML."""
        html = markdown_to_html(f"# Title\n\n{vector}\n").content

        assert '<script' not in html.lower()
        assert 'onerror=' not in html
        assert 'data-' not in html

    def test_malicious_markdown(self):
        """The malicious sample renders harmless."""
        html = markdown_to_html(SAMPLE_MARKDOWN_MALICIOUS).content

        assert '<script' not in html
        assert 'href="javascript:' not in html

    def test_sanitize_output_is_stable(self):
        """Sanitized output passes through sanitize unchanged."""
        for vector in XSS_VECTORS:
            once = sanitize(vector)
            assert sanitize(once) == once


class TestDiagnosticsAndValidation:
    """Stats and validation over real conversions."""

    def test_stats_line(self):
        """Stats contain all four fields."""
        result = ConversionResult(
            content="x", warnings=["w1"], data_loss=True, original_length=100, converted_length=90,
        )

        stats = get_conversion_stats(result)

        for part in ("Original: 100 chars", "Converted: 90 chars", "Data loss: Yes", "Warnings: 1"):
            assert part in stats

    def test_empty_output_is_invalid(self):
        """Empty output from non-empty input fails validation."""
        assert validate_conversion("# Hello World\n\nThis is a test.", "", "markdown", "html") is False

    def test_real_conversion_validates(self):
        """A real rendering passes validation."""
        result = markdown_to_html(SAMPLE_MARKDOWN_SIMPLE)

        assert validate_conversion(SAMPLE_MARKDOWN_SIMPLE, result.content, "markdown", "html") is True

    @pytest.mark.parametrize("operation", [
        detect_content_type,
        markdown_to_html,
        html_to_markdown,
        sanitize,
        get_conversion_stats,
    ])
    def test_non_string_input_rejected(self, operation):
        """Every exposed operation rejects malformed input."""
        with pytest.raises(ImportFormatError):
            operation(None)
