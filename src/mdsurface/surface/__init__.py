"""The editable surface: a labeled tree, its markup parser and its caret."""

from mdsurface.surface.caret import (
    Position,
    Selection,
    get_caret_offset,
    move_left,
    move_right,
    set_caret_offset,
)
from mdsurface.surface.editing import delete_backward, insert_text
from mdsurface.surface.markup_parser import parse_markup
from mdsurface.surface.tree import (
    Element,
    Node,
    Text,
    iter_text_nodes,
    text_content,
    to_markup,
)

__all__ = [
    "Element",
    "Node",
    "Position",
    "Selection",
    "Text",
    "delete_backward",
    "get_caret_offset",
    "insert_text",
    "iter_text_nodes",
    "move_left",
    "move_right",
    "parse_markup",
    "set_caret_offset",
    "text_content",
    "to_markup",
]
