"""Low-level edits applied at the caret of a surface.

These mimic what a browser does to a contenteditable element before the
editor sees its input event: characters go into the text leaf under the
caret, or into a new leaf when the caret sits between elements.
"""

from __future__ import annotations

from mdsurface.errors import DetachedNodeError
from mdsurface.surface.caret import INLINE_TAGS, Position, Selection, offset_of, set_caret_offset
from mdsurface.surface.tree import Element, Node, Text, contains, iter_text_nodes, text_content


def _caret_or_end(root: Element, selection: Selection) -> Position:
    position = selection.position
    if position is None:
        return Position(root, len(root.children))
    if not contains(root, position.node):
        raise DetachedNodeError(
            "the caret is not inside the editable surface",
            context={"node": repr(position.node)},
        )
    return position


def insert_text(root: Element, selection: Selection, text: str) -> None:
    """Insert *text* at the caret and leave the caret right after it.

    With no caret the text is appended at the end of *root*.

    Raises
    ------
    DetachedNodeError
        If the caret belongs to a node outside *root*.
    """
    if not text:
        return
    position = _caret_or_end(root, selection)
    node, offset = position.node, position.offset

    if isinstance(node, Text):
        node.data = node.data[:offset] + text + node.data[offset:]
        selection.collapse(node, offset + len(text))
        return

    if not isinstance(node, Element):
        return
    before = node.children[offset - 1] if offset > 0 else None
    after = node.children[offset] if offset < len(node.children) else None
    if node is root and isinstance(before, Element) and before.tag == "br" and "\n" not in text:
        # A blank line's placeholder break gives way to the first typed text.
        leaf = Text(text)
        root.insert(offset, leaf)
        root.remove(before)
        selection.collapse(leaf, len(text))
    elif isinstance(before, Text):
        before.data += text
        selection.collapse(before, len(before.data))
    elif isinstance(after, Text):
        after.data = text + after.data
        selection.collapse(after, len(text))
    else:
        leaf = Text(text)
        node.insert(offset, leaf)
        selection.collapse(leaf, len(text))


def _drop_emptied_inline(root: Element, selection: Selection, leaf: Text) -> None:
    """Remove inline elements left with no text once *leaf* is emptied.

    The caret moves to the boundary where the outermost removed element
    used to be.
    """
    if leaf.data:
        return
    node: Node = leaf
    while (
        node.parent is not None
        and node.parent is not root
        and node.parent.tag in INLINE_TAGS
        and text_content(node.parent) == ""
    ):
        node = node.parent
    if node is leaf or node.parent is None:
        return
    container = node.parent
    index = node.index_in_parent()
    container.remove(node)
    selection.collapse(container, index)


def _delete_char_ending_at(root: Element, selection: Selection, offset: int) -> None:
    current = 0
    for leaf in iter_text_nodes(root):
        length = len(leaf.data)
        if length and current + length >= offset:
            cut = offset - current - 1
            leaf.data = leaf.data[:cut] + leaf.data[cut + 1:]
            selection.collapse(leaf, cut)
            _drop_emptied_inline(root, selection, leaf)
            return
        current += length


def _top_level_block(root: Element, node: Node) -> Node:
    current = node
    while current.parent is not None and current.parent is not root:
        current = current.parent
    return current


def _join(root: Element, previous: Node, block: Node) -> None:
    """Append *block*'s content to *previous* and drop *block*."""
    if isinstance(previous, Text) and isinstance(block, Text):
        previous.data += block.data
        root.remove(block)
    elif isinstance(previous, Element) and isinstance(block, Element):
        for child in list(block.children):
            previous.append(child)
        root.remove(block)
    elif isinstance(previous, Element):
        previous.append(block)
    elif isinstance(block, Element):
        index = block.index_in_parent()
        root.remove(block)
        for shift, child in enumerate(list(block.children)):
            root.insert(index + shift, child)


def delete_backward(root: Element, selection: Selection) -> None:
    """Delete the character before the caret (the Backspace key).

    At the start of a top-level block the block is joined onto the one
    before it.  A previous block holding no text (a blank line or a rule)
    is removed instead.  Nothing happens at the very start of the surface.
    An inline element (``strong``, ``code``, ...) whose last character is
    deleted goes away with it.
    """
    position = _caret_or_end(root, selection)
    node, index = position.node, position.offset

    if isinstance(node, Text) and index > 0:
        node.data = node.data[: index - 1] + node.data[index:]
        selection.collapse(node, index - 1)
        _drop_emptied_inline(root, selection, node)
        return

    offset = offset_of(root, position)

    if node is root:
        if index == 0:
            return
        previous = root.children[index - 1]
        if text_content(previous) == "":
            root.remove(previous)
            selection.collapse(root, index - 1)
        else:
            _delete_char_ending_at(root, selection, offset)
        return

    block = _top_level_block(root, node)
    block_start = offset_of(root, Position(root, block.index_in_parent()))
    if offset > block_start:
        _delete_char_ending_at(root, selection, offset)
        return

    block_index = block.index_in_parent()
    if block_index == 0:
        return
    previous = root.children[block_index - 1]
    if text_content(previous) == "":
        root.remove(previous)
    else:
        _join(root, previous, block)
    set_caret_offset(root, selection, offset)
