"""Edited surface tree to Markdown.

This is the inverse of the forward pipeline.  Two mutually recursive
passes walk the tree:

* :func:`serialize_inline` turns a node into a string, mapping
  ``strong``/``b``, ``em``/``i``, ``code``, ``a`` and ``br`` back to their
  markdown syntax and flattening every other element into its children.
* :func:`serialize_block` turns one top-level node into one or more
  markdown lines.

List and quote containers are expected to hold a single item each, the
shape the block renderer produces.  Multi-item containers still
serialize (one line per direct ``li``), but arbitrary nested markup is
not guaranteed to survive a round trip.

Usage::

    from mdsurface.surface.markup_parser import parse_markup
    from mdsurface.converter.md_serializer import serialize_markdown

    md = serialize_markdown(parse_markup("<h1>Title</h1><p><em>hi</em></p>"))
    # "# Title\\n*hi*"
"""

from __future__ import annotations

from collections.abc import Callable as _Callable

from mdsurface.surface.tree import Element, Node, Text, text_content

FENCE = "```"


def escape_backticks(text: str) -> str:
    """Backslash-escape every backtick in *text*."""
    return text.replace("`", "\\`")


# ---------------------------------------------------------------------------
# Inline pass
# ---------------------------------------------------------------------------

def _children_text(element: Element) -> str:
    return "".join(serialize_inline(child) for child in element.children)


def _inline_strong(element: Element, inner: str) -> str:
    return f"**{inner}**"


def _inline_emphasis(element: Element, inner: str) -> str:
    return f"*{inner}*"


def _inline_code(element: Element, inner: str) -> str:
    return f"`{escape_backticks(inner)}`"


def _inline_link(element: Element, inner: str) -> str:
    href = element.get("href") or ""
    return f"[{inner}]({href})"


def _inline_break(element: Element, inner: str) -> str:
    return "\n"


_INLINE_SERIALIZERS: dict[str, _Callable[[Element, str], str]] = {
    "strong": _inline_strong,
    "b": _inline_strong,
    "em": _inline_emphasis,
    "i": _inline_emphasis,
    "code": _inline_code,
    "a": _inline_link,
    "br": _inline_break,
}


def serialize_inline(node: Node) -> str:
    """Serialize *node* and its descendants as inline markdown.

    Text passes through verbatim.  Elements outside the inline vocabulary
    contribute their children's text with no wrapper.
    """
    if isinstance(node, Text):
        return node.data
    if not isinstance(node, Element):
        return ""
    inner = _children_text(node)
    handler = _INLINE_SERIALIZERS.get(node.tag)
    if handler is None:
        return inner
    return handler(node, inner)


# ---------------------------------------------------------------------------
# Block pass
# ---------------------------------------------------------------------------

def _block_heading(element: Element) -> list[str]:
    level = int(element.tag[1])
    return [f"{'#' * level} {serialize_inline(element)}"]


def _block_quote(element: Element) -> list[str]:
    return [f"> {line}" for line in serialize_inline(element).split("\n")]


def _block_pre(element: Element) -> list[str]:
    code = text_content(element)
    if code.endswith("\n"):
        code = code[:-1]
    return [FENCE, code, FENCE]


def _block_unordered(element: Element) -> list[str]:
    items = [f"- {serialize_inline(li)}" for li in element.child_elements("li")]
    return items or ["- "]


def _block_ordered(element: Element) -> list[str]:
    items = [
        f"{index}. {serialize_inline(li)}"
        for index, li in enumerate(element.child_elements("li"), start=1)
    ]
    return items or ["1. "]


def _block_rule(element: Element) -> list[str]:
    return ["---"]


def _block_break(element: Element) -> list[str]:
    return [""]


def _block_paragraph(element: Element) -> list[str]:
    return [serialize_inline(element)]


_BLOCK_SERIALIZERS: dict[str, _Callable[[Element], list[str]]] = {
    **{f"h{n}": _block_heading for n in range(1, 7)},
    "blockquote": _block_quote,
    "pre": _block_pre,
    "ul": _block_unordered,
    "ol": _block_ordered,
    "hr": _block_rule,
    "br": _block_break,
    "p": _block_paragraph,
    "div": _block_paragraph,
}


def serialize_block(node: Node) -> list[str]:
    """Serialize one top-level surface node into markdown lines.

    A bare text node (typed straight into the surface before any
    re-render) becomes one line, or an empty line when it is only
    whitespace.
    """
    if isinstance(node, Text):
        return [node.data] if node.data.strip() else [""]
    if not isinstance(node, Element):
        return []
    handler = _BLOCK_SERIALIZERS.get(node.tag, _block_paragraph)
    return handler(node)


def serialize_markdown(root: Element) -> str:
    """Rebuild canonical markdown from the children of *root*.

    Returns
    -------
    str
        The lines of every top-level child joined by ``"\\n"``, or ``""``
        when every line is blank.
    """
    lines = [line for child in root.children for line in serialize_block(child)]
    if all(line.strip() == "" for line in lines):
        return ""
    return "\n".join(lines)
