"""Unit tests for content_converter.fallback_renderer module."""

from unittest.mock import patch

from richtext_engine.content_converter.fallback_renderer import render_fallback


class TestFallbackBlocks:
    """Test cases for block-level regex rules."""

    def test_heading_with_id(self):
        """ATX headings become h tags with slug ids."""
        assert render_fallback("# Title") == '<h1 id="title">Title</h1>'

    def test_heading_levels(self):
        """The number of hashes sets the heading level."""
        assert render_fallback("### Deep one") == '<h3 id="deep-one">Deep one</h3>'

    def test_duplicate_headings_are_suffixed(self):
        """Repeated headings get -1, -2 suffixes."""
        html = render_fallback("# A\n\n# A\n\n# A")

        assert 'id="a"' in html
        assert 'id="a-1"' in html
        assert 'id="a-2"' in html

    def test_fenced_code_is_escaped_and_untouched(self):
        """Fenced code keeps its text literally."""
        html = render_fallback("```python\nprint(1 < 2)\n**x**\n```")

        assert '<pre><code class="language-python">print(1 &lt; 2)\n**x**\n</code></pre>' in html
        assert '<strong>' not in html

    def test_unterminated_fence_runs_to_end(self):
        """A fence without a closing marker swallows the rest of the text."""
        html = render_fallback("```\nstill code")

        assert '<pre><code>still code</code></pre>' in html

    def test_table_rows(self):
        """Pipe rows become a table; the separator row disappears."""
        html = render_fallback("| a | b |\n|---|---|\n| 1 | 2 |")

        assert html.startswith('<table><tbody>')
        assert '<tr><td>a</td><td>b</td></tr>' in html
        assert '<tr><td>1</td><td>2</td></tr>' in html
        assert '---' not in html

    def test_bullet_list(self):
        """Consecutive list items share one list."""
        html = render_fallback("- one\n- two")

        assert html == '<ul>\n<li>one</li>\n<li>two</li>\n</ul>'

    def test_task_items(self):
        """Task markers become disabled checkboxes."""
        html = render_fallback("- [x] done\n- [ ] todo")

        assert html.count('class="task-list-item-checkbox"') == 2
        assert html.count('disabled checked>') == 1
        assert html.startswith('<ul>')

    def test_paragraphs_and_line_breaks(self):
        """Blank lines split paragraphs; single newlines become <br>."""
        html = render_fallback("a\nb\n\nc")

        assert html == '<p>a<br>b</p>\n<p>c</p>'

    def test_empty_input(self):
        """Empty source renders to an empty string."""
        assert render_fallback("") == ""


class TestFallbackInline:
    """Test cases for inline regex rules."""

    def test_emphasis(self):
        """Bold, italic and strikethrough are recognized."""
        html = render_fallback("**b** and *i* and ~~s~~")

        assert html == '<p><strong>b</strong> and <em>i</em> and <del>s</del></p>'

    def test_bold_italic(self):
        """Triple asterisks nest strong and em."""
        assert render_fallback("***x***") == '<p><strong><em>x</em></strong></p>'

    def test_inline_code_escaped(self):
        """Inline code is escaped and shielded from emphasis."""
        html = render_fallback("Use `<x> *y*` here")

        assert html == '<p>Use <code>&lt;x&gt; *y*</code> here</p>'

    def test_link(self):
        """Inline links become anchors without being autolinked twice."""
        html = render_fallback("[Docs](https://example.com)")

        assert html == '<p><a href="https://example.com">Docs</a></p>'

    def test_image(self):
        """Images become img tags."""
        html = render_fallback("![Logo](logo.png)")

        assert html == '<p><img src="logo.png" alt="Logo"></p>'

    def test_bare_url_excludes_trailing_period(self):
        """Bare URLs are linked without sentence punctuation."""
        html = render_fallback("see https://example.com.")

        assert html == '<p>see <a href="https://example.com">https://example.com</a>.</p>'


class TestFallbackFailure:
    """Test cases for the last-resort path."""

    def test_internal_error_returns_escaped_source(self):
        """An internal error yields the escaped source in one paragraph."""
        with patch(
            'richtext_engine.content_converter.fallback_renderer._convert_lines',
            side_effect=RuntimeError("broken"),
        ):
            html = render_fallback("<b>x</b>\ny")

        assert html == '<p>&lt;b&gt;x&lt;/b&gt;<br>y</p>'
