"""Render block elements to HTML markup.

One element maps to exactly one fragment; :func:`render_blocks` joins the
fragments in order with no separator.  Element content is already
markup-safe for every type except ``codeblock``, whose raw source is
escaped here.  Unknown or missing types render as paragraphs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from collections.abc import Callable as _Callable

from mdsurface.models import HEADING_TYPES, BlockElement


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` for embedding raw text in markup."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def _render_heading(element: BlockElement) -> str:
    tag = element.type
    return f"<{tag}>{element.content}</{tag}>"


def _render_ul(element: BlockElement) -> str:
    return f"<ul><li>{element.content}</li></ul>"


def _render_ol(element: BlockElement) -> str:
    return f"<ol><li>{element.content}</li></ol>"


def _render_blockquote(element: BlockElement) -> str:
    return f"<blockquote>{element.content}</blockquote>"


def _render_codeblock(element: BlockElement) -> str:
    return f"<pre><code>{escape_html(element.content)}</code></pre>"


def _render_hr(element: BlockElement) -> str:
    return "<hr />"


def _render_br(element: BlockElement) -> str:
    return "<br />"


def _render_paragraph(element: BlockElement) -> str:
    return f"<p>{element.content}</p>"


_BLOCK_RENDERERS: dict[str, _Callable[[BlockElement], str]] = {
    **{tag: _render_heading for tag in HEADING_TYPES},
    "ul": _render_ul,
    "ol": _render_ol,
    "blockquote": _render_blockquote,
    "codeblock": _render_codeblock,
    "hr": _render_hr,
    "br": _render_br,
    "p": _render_paragraph,
}


def render_block(element: BlockElement | Mapping) -> str:
    """Render one block element to its markup fragment.

    Plain ``{type, content, level?}`` dicts are accepted as well.

    >>> render_block(BlockElement(type="ul", content="Item"))
    '<ul><li>Item</li></ul>'
    """
    if isinstance(element, Mapping):
        element = BlockElement.from_dict(dict(element))
    renderer = _BLOCK_RENDERERS.get(element.type or "", _render_paragraph)
    return renderer(element)


def render_blocks(elements: Iterable[BlockElement | Mapping]) -> str:
    """Render every element in order and concatenate the fragments."""
    return "".join(render_block(element) for element in elements)
