"""mdsurface: markdown to rich-text surface conversion and back.

Public re-exports
-----------------

* **Forward pipeline:** :func:`render_inline`, :func:`classify`,
  :func:`render_blocks`, :class:`MarkdownToMarkupConverter`
* **Reverse pipeline:** :func:`serialize_markdown`, :func:`parse_markup`
* **Caret:** :class:`Selection`, :func:`get_caret_offset`,
  :func:`set_caret_offset`
* **Session:** :class:`MarkdownEditor`, :class:`EditorConfig`
* **Errors and models**

Usage::

    from mdsurface import classify, render_blocks

    markup = render_blocks(classify("# Hello\\n\\nWorld"))
    # '<h1>Hello</h1><br /><p>World</p>'
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from mdsurface.config import DEFAULT_SAVE_FILENAME, DEFAULT_SAVE_MEDIA_TYPE, EditorConfig

# ── Conversion ──────────────────────────────────────────────────────────
from mdsurface.converter import (
    MarkdownToMarkupConverter,
    classify,
    escape_html,
    escape_html_text,
    render_block,
    render_blocks,
    render_inline,
    serialize_block,
    serialize_inline,
    serialize_markdown,
)

# ── Session ─────────────────────────────────────────────────────────────
from mdsurface.editor import MarkdownEditor

# ── Errors ──────────────────────────────────────────────────────────────
from mdsurface.errors import (
    CaretPositionError,
    DetachedNodeError,
    ErrorCode,
    MdSurfaceError,
)

# ── Models ──────────────────────────────────────────────────────────────
from mdsurface.models import BlockElement, BlockType, RenderResult, SavedDocument

# ── Surface ─────────────────────────────────────────────────────────────
from mdsurface.surface import (
    Element,
    Position,
    Selection,
    Text,
    get_caret_offset,
    parse_markup,
    set_caret_offset,
    text_content,
    to_markup,
)

__all__ = [
    # Configuration
    "EditorConfig",
    "DEFAULT_SAVE_FILENAME",
    "DEFAULT_SAVE_MEDIA_TYPE",
    # Conversion
    "MarkdownToMarkupConverter",
    "classify",
    "escape_html",
    "escape_html_text",
    "render_block",
    "render_blocks",
    "render_inline",
    "serialize_block",
    "serialize_inline",
    "serialize_markdown",
    # Session
    "MarkdownEditor",
    # Errors
    "MdSurfaceError",
    "ErrorCode",
    "CaretPositionError",
    "DetachedNodeError",
    # Models
    "BlockElement",
    "BlockType",
    "RenderResult",
    "SavedDocument",
    # Surface
    "Element",
    "Text",
    "Position",
    "Selection",
    "get_caret_offset",
    "set_caret_offset",
    "parse_markup",
    "text_content",
    "to_markup",
]
