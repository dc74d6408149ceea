"""Unit tests for inline_styles.py.

Covers HTML escaping, each pass of the inline cascade, the fixed link
attributes, and the inputs whose output only makes sense once you know
the passes run one after another.
"""

import pytest

from mdsurface.converter.inline_styles import (
    LINK_REL,
    LINK_TARGET,
    escape_html_text,
    render_inline,
)

# =========================================================================
# escape_html_text
# =========================================================================

class TestEscapeHtmlText:
    """Tests for escape_html_text."""

    def test_escapes_angle_brackets(self):
        assert escape_html_text("<b>") == "&lt;b&gt;"

    def test_ampersand_escaped_first(self):
        assert escape_html_text("&lt;") == "&amp;lt;"

    def test_quotes_untouched(self):
        assert escape_html_text("\"it's\"") == "\"it's\""

    def test_empty_string(self):
        assert escape_html_text("") == ""


# =========================================================================
# render_inline: single styles
# =========================================================================

class TestSingleStyles:

    def test_plain_text_unchanged(self):
        assert render_inline("hello world") == "hello world"

    def test_bold(self):
        assert render_inline("This is **bold** text") == "This is <strong>bold</strong> text"

    def test_italic(self):
        assert render_inline("This is *italic* text") == "This is <em>italic</em> text"

    def test_bold_italic(self):
        assert render_inline("***both***") == "<strong><em>both</em></strong>"

    def test_code_span(self):
        assert render_inline("run `ls -la` now") == "run <code>ls -la</code> now"

    def test_link(self):
        assert render_inline("This is a [link](https://example.com)") == (
            'This is a <a href="https://example.com" target="_blank" '
            'rel="noopener noreferrer">link</a>'
        )

    def test_link_attributes_constants(self):
        assert LINK_TARGET == "_blank"
        assert LINK_REL == "noopener noreferrer"

    def test_multiple_styles_on_one_line(self):
        result = render_inline("**a** and *b* and `c`")
        assert result == "<strong>a</strong> and <em>b</em> and <code>c</code>"

    def test_two_code_spans(self):
        assert render_inline("`a` and `b`") == "<code>a</code> and <code>b</code>"


# =========================================================================
# render_inline: escaping
# =========================================================================

class TestEscaping:

    def test_script_tag_escaped(self):
        assert render_inline('<script>alert("xss")</script>') == (
            '&lt;script&gt;alert("xss")&lt;/script&gt;'
        )

    def test_existing_entity_escaped_again(self):
        assert render_inline("&amp;") == "&amp;amp;"

    def test_markup_inside_code_span_escaped(self):
        assert render_inline("`<b>`") == "<code>&lt;b&gt;</code>"

    def test_ampersand_in_link_url(self):
        assert render_inline("[a](http://x?a=1&b=2)") == (
            '<a href="http://x?a=1&amp;b=2" target="_blank" '
            'rel="noopener noreferrer">a</a>'
        )

    def test_quote_in_link_url_cannot_close_attribute(self):
        result = render_inline('[x](a"b)')
        assert 'href="a&quot;b"' in result


# =========================================================================
# render_inline: cascade behaviour
# =========================================================================

class TestCascade:

    def test_code_span_content_not_styled(self):
        assert render_inline("`**x**`") == "<code>**x**</code>"

    def test_code_span_inside_bold(self):
        assert render_inline("**a `b` c**") == "<strong>a <code>b</code> c</strong>"

    def test_mismatched_delimiters(self):
        assert render_inline("**a*b**c*") == "*<em>a</em>b*<em>c</em>"

    def test_bold_label_inside_link(self):
        assert render_inline("[**b**](u)") == (
            '<a href="u" target="_blank" rel="noopener noreferrer"><strong>b</strong></a>'
        )

    @pytest.mark.parametrize("line", ["****", "a ** b", "**bold", "``", "[x]", "[x](", "*"])
    def test_unmatched_syntax_left_literal(self, line):
        assert render_inline(line) == line

    def test_empty_string(self):
        assert render_inline("") == ""

    def test_quote_in_code_span_escaped(self):
        assert render_inline('`"q"`') == "<code>&quot;q&quot;</code>"

    def test_code_span_in_link_url_cannot_close_attribute(self):
        result = render_inline('[x](`a"onclick=alert(1)`)')
        assert '"onclick' not in result
        assert "&quot;onclick" in result
