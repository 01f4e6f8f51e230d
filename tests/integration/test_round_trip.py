"""Integration tests for Markdown → HTML → Markdown round trips."""

import pytest

from richtext_engine import html_to_markdown, markdown_to_html, sanitize, validate_conversion
from tests.fixtures.sample_markdown import (
    SAMPLE_MARKDOWN_SIMPLE,
    SAMPLE_MARKDOWN_TASKS,
    SAMPLE_MARKDOWN_WITH_CODE,
    SAMPLE_MARKDOWN_WITH_TABLES,
)


def _round_trip(markdown):
    html = markdown_to_html(markdown).content
    return html, html_to_markdown(html)


class TestMinimalFeatureRoundTrip:
    """Headings, emphasis, links and images survive a round trip."""

    @pytest.mark.parametrize("markdown,expected", [
        ("# Title", "# Title"),
        ("## Sub heading", "## Sub heading"),
        ("Some **bold** text", "**bold**"),
        ("Some *soft* text", "*soft*"),
        ("[link](https://example.com)", "[link](https://example.com)"),
        ("![logo](https://example.com/logo.png)", "![logo](https://example.com/logo.png)"),
        ("# T ![i](a.png)", "# T ![i](a.png)"),
        ("| h |\n| --- |\n| ![i](a.png) |", "| ![i](a.png) |"),
    ])
    def test_construct_preserved(self, markdown, expected):
        """The construct reappears after sanitize, render and convert back."""
        html = markdown_to_html(sanitize(markdown)).content

        result = html_to_markdown(html)

        assert expected in result.content
        assert result.data_loss is False


class TestDocumentRoundTrip:
    """Whole documents keep their structure."""

    def test_simple_document(self):
        """Headings and lists come back."""
        html, result = _round_trip(SAMPLE_MARKDOWN_SIMPLE)

        for expected in ("# Test Page", "## Section 1", "- Item 1", "1. First", "3. Third"):
            assert expected in result.content
        assert result.warnings == []
        assert validate_conversion(html, result.content, "html", "markdown") is True

    def test_table_document(self):
        """Table wrappers added by the renderer do not count as loss."""
        _html, result = _round_trip(SAMPLE_MARKDOWN_WITH_TABLES)

        assert "| Name | Role |" in result.content
        assert "| Ada | Engineer |" in result.content
        assert result.data_loss is False

    def test_code_document(self):
        """Highlighted code comes back as a fenced block with its language."""
        _html, result = _round_trip(SAMPLE_MARKDOWN_WITH_CODE)

        assert "```python" in result.content
        assert "def greet(name):" in result.content
        assert result.data_loss is False

    def test_task_document(self):
        """Task checkboxes come back as markers."""
        _html, result = _round_trip(SAMPLE_MARKDOWN_TASKS)

        assert "- [x] Write tests" in result.content
        assert "- [ ] Ship release" in result.content
        assert result.data_loss is False
