"""Classify raw markdown into an ordered list of block elements.

The classifier is a single forward pass over the source lines.  Apart
from fenced code blocks it keeps no state between lines: every list
item, quote line and blank line becomes its own element, so adjacent
items are never merged into one container.  The serializer relies on
that one-item-per-container shape when it rebuilds markdown.

Rules, first match wins (fence toggling beats everything):

- ```` ``` ```` opens or closes a fenced code block
- inside a fence every line is code, verbatim
- ``#``..``######`` followed by a space -> ``h1``..``h6``
- ``-``, ``*`` or ``+`` followed by whitespace -> ``ul``
- digits, ``.`` and whitespace -> ``ol``
- ``> `` -> ``blockquote``
- exactly ``---``, ``***`` or ``___`` -> ``hr``
- blank after trimming -> ``br``
- anything else -> ``p``
"""

from __future__ import annotations

import re

from mdsurface.converter.inline_styles import render_inline
from mdsurface.models import BlockElement, BlockType, Document

FENCE = "```"

_HEADING_RE = re.compile(r"(#{1,6}) ")
_UNORDERED_RE = re.compile(r"[-*+]\s")
_ORDERED_RE = re.compile(r"\d+\.\s")
_RULE_RE = re.compile(r"---|\*\*\*|___")
_QUOTE_PREFIX = "> "


def split_lines(text: str) -> list[str]:
    """Split *text* into lines, treating ``\\r\\n`` like ``\\n``."""
    return text.replace("\r\n", "\n").split("\n")


def classify_line(line: str) -> BlockElement:
    """Classify one line that is known to be outside a fenced block."""
    heading = _HEADING_RE.match(line)
    if heading:
        level = len(heading.group(1))
        return BlockElement(
            type=BlockType.heading(level).value,
            content=render_inline(line[heading.end():]),
            level=level,
        )

    if _UNORDERED_RE.match(line):
        return BlockElement(type=BlockType.UL.value, content=render_inline(line[2:]))

    ordered = _ORDERED_RE.match(line)
    if ordered:
        return BlockElement(
            type=BlockType.OL.value,
            content=render_inline(line[ordered.end():]),
        )

    if line.startswith(_QUOTE_PREFIX):
        return BlockElement(
            type=BlockType.BLOCKQUOTE.value,
            content=render_inline(line[len(_QUOTE_PREFIX):]),
        )

    if _RULE_RE.fullmatch(line):
        return BlockElement(type=BlockType.HR.value, content="")

    if line.strip() == "":
        return BlockElement(type=BlockType.BR.value, content="")

    return BlockElement(type=BlockType.P.value, content=render_inline(line))


def _code_block(lines: list[str], language: str) -> BlockElement:
    return BlockElement(
        type=BlockType.CODEBLOCK.value,
        content="\n".join(lines),
        level=1 if language else 0,
        language=language,
    )


def classify(text: str) -> Document:
    """Parse a full markdown document into block elements.

    Parameters
    ----------
    text:
        The raw markdown source.

    Returns
    -------
    list[BlockElement]
        One element per source line, in order, except that fence lines
        produce nothing and the lines between a pair of fences produce a
        single ``codeblock``.  A fence left open at the end of the input
        takes the rest of the document as its content.

    Examples
    --------
    >>> [e.type for e in classify("# Title\\n\\ntext")]
    ['h1', 'br', 'p']
    """
    elements: Document = []
    in_fence = False
    fence_lines: list[str] = []
    fence_language = ""

    for line in split_lines(text):
        if line.startswith(FENCE):
            if in_fence:
                elements.append(_code_block(fence_lines, fence_language))
                in_fence = False
            else:
                in_fence = True
                fence_language = line[len(FENCE):].strip()
                fence_lines = []
            continue

        if in_fence:
            fence_lines.append(line)
            continue

        elements.append(classify_line(line))

    if in_fence:
        elements.append(_code_block(fence_lines, fence_language))

    return elements
