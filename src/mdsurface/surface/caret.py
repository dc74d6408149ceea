"""Caret positions that survive a full re-render of the surface.

A re-render throws away every node of the surface, so a caret cannot be
kept as a node reference.  Instead it is captured as a *caret offset*:
the number of text characters preceding it, counted over the text
leaves in document order.  After the new tree is in place the offset is
mapped back onto the closest text position.

Always call in this order around a replacement::

    offset = get_caret_offset(root, selection)
    root.replace_children(new_nodes)
    set_caret_offset(root, selection, offset)

Caret positions use DOM boundary-point semantics: in a :class:`Text`
node the offset is a character index, in an :class:`Element` it is a
child index.
"""

from __future__ import annotations

from dataclasses import dataclass

from mdsurface.errors import CaretPositionError
from mdsurface.surface.tree import (
    Element,
    Node,
    Text,
    contains,
    iter_nodes,
    iter_text_nodes,
    text_content,
)

# Elements the caret steps out of before moving on to the next character.
INLINE_TAGS: frozenset[str] = frozenset({"strong", "b", "em", "i", "code", "a", "span"})


@dataclass(frozen=True)
class Position:
    """A collapsed caret: a node plus an offset inside it."""

    node: Node
    offset: int


def _max_offset(node: Node) -> int:
    if isinstance(node, Text):
        return len(node.data)
    if isinstance(node, Element):
        return len(node.children)
    return 0


class Selection:
    """The live caret of one surface.  Holds at most one collapsed range."""

    def __init__(self) -> None:
        self._position: Position | None = None

    def __repr__(self) -> str:
        return f"Selection({self._position!r})"

    @property
    def position(self) -> Position | None:
        return self._position

    @property
    def range_count(self) -> int:
        return 0 if self._position is None else 1

    def collapse(self, node: Node, offset: int) -> None:
        """Place the caret at *offset* inside *node*.

        Raises
        ------
        CaretPositionError
            If *offset* is negative or beyond what *node* can hold.
        """
        limit = _max_offset(node)
        if not 0 <= offset <= limit:
            raise CaretPositionError(
                f"offset {offset} is outside 0..{limit} for {node!r}",
                context={"offset": offset, "length": limit, "node": repr(node)},
            )
        self._position = Position(node, offset)

    def remove_all_ranges(self) -> None:
        self._position = None


# ---------------------------------------------------------------------------
# Capture / restore
# ---------------------------------------------------------------------------

def _length_before(root: Element, target: Node) -> int:
    total = 0
    for node in iter_nodes(root):
        if node is target:
            break
        if isinstance(node, Text):
            total += len(node.data)
    return total


def offset_of(root: Element, position: Position) -> int:
    """Text characters under *root* that precede *position*."""
    node, offset = position.node, position.offset
    if isinstance(node, Text):
        return _length_before(root, node) + offset
    if isinstance(node, Element) and offset < len(node.children):
        return _length_before(root, node.children[offset])
    return _length_before(root, node) + len(text_content(node))


def get_caret_offset(root: Element, selection: Selection) -> int:
    """Capture the caret as a count of preceding text characters.

    Returns ``0`` when there is no caret or the caret lies outside
    *root*.
    """
    position = selection.position
    if position is None or not contains(root, position.node):
        return 0
    return offset_of(root, position)


def set_caret_offset(root: Element, selection: Selection, offset: int) -> None:
    """Restore a caret captured by :func:`get_caret_offset`.

    Text leaves are scanned in document order; the caret goes into the
    first leaf whose end reaches *offset*.  When *offset* is beyond the
    total text length the caret is placed at the very end of *root*.
    """
    current = 0
    for text in iter_text_nodes(root):
        length = len(text.data)
        if current + length >= offset:
            selection.collapse(text, max(0, offset - current))
            return
        current += length
    selection.collapse(root, len(root.children))


# ---------------------------------------------------------------------------
# Arrow-key motion
# ---------------------------------------------------------------------------

def _is_inline(node: Node, root: Element) -> bool:
    return (
        isinstance(node, Element)
        and node is not root
        and node.parent is not None
        and node.tag in INLINE_TAGS
    )


def _text_after(root: Element, position: Position) -> Text | None:
    """First text leaf starting at or after an element boundary."""
    node, offset = position.node, position.offset
    if isinstance(node, Element) and offset < len(node.children):
        start: Node = node.children[offset]
        seen = False
        for candidate in iter_nodes(root):
            if candidate is start:
                seen = True
            if seen and isinstance(candidate, Text):
                return candidate
        return None
    return _next_text(root, node)


def _next_text(root: Element, node: Node) -> Text | None:
    """First text leaf after *node*'s subtree."""
    inside = {id(n) for n in iter_nodes(node)}
    passed = False
    for candidate in iter_nodes(root):
        if id(candidate) in inside:
            passed = True
            continue
        if passed and isinstance(candidate, Text):
            return candidate
    return None


def _previous_text(root: Element, node: Node) -> Text | None:
    """Last text leaf before *node* in document order."""
    previous: Text | None = None
    for candidate in iter_nodes(root):
        if candidate is node:
            return previous
        if isinstance(candidate, Text):
            previous = candidate
    return previous


def _top_level(root: Element, node: Node) -> Node:
    current = node
    while current.parent is not None and current.parent is not root:
        current = current.parent
    return current


def _same_block(root: Element, a: Node, b: Node) -> bool:
    return _top_level(root, a) is _top_level(root, b)


def move_right(root: Element, selection: Selection) -> None:
    """Move the caret one step to the right.

    At the end of the last text inside an inline element (``strong``,
    ``em``, ...) the caret first steps out of that element, so the next
    typed character lands after it rather than inside it.
    """
    position = selection.position
    if position is None or not contains(root, position.node):
        return
    node, offset = position.node, position.offset

    if isinstance(node, Text):
        if offset < len(node.data):
            selection.collapse(node, offset + 1)
            return
        parent = node.parent
        if parent is not None and _is_inline(parent, root) and parent.children[-1] is node:
            selection.collapse(parent.parent, parent.index_in_parent() + 1)
            return
        following = _next_text(root, node)
        if following is not None:
            step = 1 if _same_block(root, node, following) else 0
            selection.collapse(following, min(step, len(following.data)))
        return

    following = _text_after(root, position)
    if following is not None:
        selection.collapse(following, min(1, len(following.data)))


def move_left(root: Element, selection: Selection) -> None:
    """Move the caret one step to the left, mirroring :func:`move_right`."""
    position = selection.position
    if position is None or not contains(root, position.node):
        return
    node, offset = position.node, position.offset

    if isinstance(node, Text):
        if offset > 0:
            selection.collapse(node, offset - 1)
            return
        parent = node.parent
        if parent is not None and _is_inline(parent, root) and parent.children[0] is node:
            selection.collapse(parent.parent, parent.index_in_parent())
            return
        preceding = _previous_text(root, node)
        if preceding is not None:
            step = 1 if _same_block(root, node, preceding) else 0
            selection.collapse(preceding, max(0, len(preceding.data) - step))
        return

    if isinstance(node, Element) and offset < len(node.children):
        anchor: Node = node.children[offset]
    else:
        anchor = node
        last_inside = None
        for candidate in iter_text_nodes(node):
            last_inside = candidate
        if last_inside is not None:
            selection.collapse(last_inside, max(0, len(last_inside.data) - 1))
            return
    preceding = _previous_text(root, anchor)
    if preceding is not None:
        selection.collapse(preceding, max(0, len(preceding.data) - 1))


def move_to_start(root: Element, selection: Selection) -> None:
    set_caret_offset(root, selection, 0)


def move_to_end(root: Element, selection: Selection) -> None:
    set_caret_offset(root, selection, len(text_content(root)))
