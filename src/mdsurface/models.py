"""Public data models for mdsurface.

This module contains the block element produced by the classifier, the
enum of block types, and the small result types returned by the
conversion pipeline and the editing session.  All types are plain
dataclasses with no behaviour beyond what is needed for structural
equality and hashing (where frozen).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """Every block type the classifier can emit."""

    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"

    UL = "ul"
    """One unordered list item.  Adjacent items are never grouped."""

    OL = "ol"
    """One ordered list item.  Adjacent items are never grouped."""

    BLOCKQUOTE = "blockquote"
    """One quoted line."""

    CODEBLOCK = "codeblock"
    """A fenced code block.  Its content is raw, unescaped source."""

    HR = "hr"
    BR = "br"
    """A blank source line."""

    P = "p"

    @classmethod
    def heading(cls, level: int) -> BlockType:
        """Return the heading type for *level* (1-6)."""
        if not 1 <= level <= 6:
            raise ValueError(f"heading level must be between 1 and 6, got {level}")
        return cls(f"h{level}")


HEADING_TYPES: frozenset[str] = frozenset(f"h{n}" for n in range(1, 7))
"""String values of the six heading types."""


# ---------------------------------------------------------------------------
# Block elements
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BlockElement:
    """One structural unit of a parsed document.

    Attributes
    ----------
    type:
        A :class:`BlockType` value (``"h1"`` ... ``"p"``).  Stored as a
        plain string so unknown types coming from other producers can
        still be rendered (they fall back to a paragraph).
    content:
        For every type except ``codeblock`` this is markup-safe text:
        HTML-escaped with inline styles applied.  For ``codeblock`` it is
        the raw source between the fences, joined by ``"\\n"``.
    level:
        Heading level 1-6 for headings.  For ``codeblock`` it is ``1``
        when a language tag followed the opening fence, else ``0``.
        ``None`` for every other type.
    language:
        The info string after the opening fence of a ``codeblock``
        (trimmed).  Empty for every other type.
    """

    type: str
    content: str
    level: int | None = None
    language: str = ""

    def __post_init__(self) -> None:
        # Accept BlockType members but always store the plain string value.
        if isinstance(self.type, BlockType):
            object.__setattr__(self, "type", self.type.value)

    def to_dict(self) -> dict:
        """Return the ``{type, content, level?}`` wire form."""
        data: dict = {"type": self.type, "content": self.content}
        if self.level is not None:
            data["level"] = self.level
        return data

    @classmethod
    def from_dict(cls, data: dict) -> BlockElement:
        """Build an element from the ``{type, content, level?}`` wire form.

        A missing ``type`` becomes ``""``, which renders as a paragraph.
        """
        return cls(
            type=data.get("type") or "",
            content=data.get("content") or "",
            level=data.get("level"),
        )


Document = list[BlockElement]
"""An ordered sequence of block elements.  Order is significant."""


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------

@dataclass
class RenderResult:
    """Output of :meth:`MarkdownToMarkupConverter.convert`.

    Attributes
    ----------
    elements:
        The classified block elements, in document order.
    markup:
        The concatenated HTML fragments for *elements*.  Empty when the
        source text is blank.
    """

    elements: Document = field(default_factory=list)
    markup: str = ""


@dataclass(frozen=True)
class SavedDocument:
    """A text blob carrying the current markdown, ready to be downloaded.

    Attributes
    ----------
    content:
        The markdown source.
    filename:
        Suggested download name.
    media_type:
        MIME type of the blob.
    encoding:
        Codec used to produce :attr:`data`.
    """

    content: str
    filename: str = "document.md"
    media_type: str = "text/markdown"
    encoding: str = "utf-8"

    @property
    def data(self) -> bytes:
        """The encoded blob body."""
        return self.content.encode(self.encoding)

    @property
    def size(self) -> int:
        """Size of :attr:`data` in bytes."""
        return len(self.data)
