"""Markdown ↔ markup conversion pipeline.

Public API:

- :func:`render_inline`: one line of markdown → escaped, styled markup.
- :func:`classify`: markdown document → ordered block elements.
- :func:`render_block` / :func:`render_blocks`: block elements → markup.
- :func:`serialize_markdown`: edited surface tree → markdown.
- :class:`MarkdownToMarkupConverter`: classify + render in one call.
"""

from mdsurface.converter.block_classifier import classify, classify_line
from mdsurface.converter.block_renderer import escape_html, render_block, render_blocks
from mdsurface.converter.inline_styles import escape_html_text, render_inline
from mdsurface.converter.md_serializer import (
    serialize_block,
    serialize_inline,
    serialize_markdown,
)
from mdsurface.converter.md_to_markup import MarkdownToMarkupConverter

__all__ = [
    "MarkdownToMarkupConverter",
    "classify",
    "classify_line",
    "escape_html",
    "escape_html_text",
    "render_block",
    "render_blocks",
    "render_inline",
    "serialize_block",
    "serialize_inline",
    "serialize_markdown",
]
