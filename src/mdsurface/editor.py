"""Headless editing session over a rich-text surface.

:class:`MarkdownEditor` plays the part of the contenteditable wiring: it
owns one surface tree and its caret, applies keystrokes and pastes to
the tree the way a browser would, and then runs the round trip

    surface → markdown → blocks → markup → surface

with the caret captured before and restored after the tree replacement.
Raw markdown is the only persisted state; the surface is rebuilt from it
on every change.

Usage::

    from mdsurface import MarkdownEditor

    editor = MarkdownEditor()
    editor.focus()
    editor.type("**abc**")
    editor.press_key("ArrowRight")
    editor.type("def")
    editor.markup      # '<p><strong>abc</strong>def</p>'
    editor.markdown    # '**abc**def'
"""

from __future__ import annotations

from collections.abc import Callable as _Callable

from mdsurface.config import EditorConfig
from mdsurface.converter.block_classifier import classify, split_lines
from mdsurface.converter.md_serializer import serialize_markdown
from mdsurface.converter.md_to_markup import MarkdownToMarkupConverter
from mdsurface.models import Document, RenderResult, SavedDocument
from mdsurface.observability import get_logger, resolve_metrics, set_level
from mdsurface.surface.caret import (
    Selection,
    get_caret_offset,
    move_left,
    move_right,
    move_to_end,
    move_to_start,
    set_caret_offset,
)
from mdsurface.surface.editing import delete_backward, insert_text
from mdsurface.surface.markup_parser import parse_markup
from mdsurface.surface.tree import (
    VOID_TAGS,
    Element,
    Node,
    Text,
    contains,
    iter_text_nodes,
    text_content,
    to_markup,
)

log = get_logger("mdsurface.editor")

SURFACE_TAG = "div"

# Stands in for the caret while the surface is serialized to find its line.
_CARET_MARKER = "\ue000"


class MarkdownEditor:
    """One editing session: markdown source, rendered surface and caret.

    Parameters
    ----------
    config:
        Session configuration.  Defaults to ``EditorConfig()``.
    markdown:
        Initial markdown source.  It is rendered immediately.
    """

    def __init__(self, config: EditorConfig | None = None, markdown: str = "") -> None:
        self._config = config or EditorConfig()
        self._converter = MarkdownToMarkupConverter(self._config)
        self._metrics = resolve_metrics(self._config.metrics)
        set_level(log, self._config.log_level)

        self.surface = Element(SURFACE_TAG)
        self.selection = Selection()
        self._focused = False
        self._markdown = markdown
        self._result = RenderResult()
        self._key_handlers: dict[str, _Callable[[], None]] = {
            "ArrowRight": lambda: move_right(self.surface, self.selection),
            "ArrowLeft": lambda: move_left(self.surface, self.selection),
            "Home": lambda: move_to_start(self.surface, self.selection),
            "End": lambda: move_to_end(self.surface, self.selection),
            "Tab": lambda: self._edit(insert_text, self._config.tab_text),
            "Enter": self._press_enter,
            "Backspace": lambda: self._edit(delete_backward),
        }
        self.render()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def markdown(self) -> str:
        """The current markdown source of truth."""
        return self._markdown

    @property
    def markup(self) -> str:
        """The surface's inner markup, as a browser's ``innerHTML``."""
        return to_markup(self.surface)

    @property
    def elements(self) -> Document:
        """Block elements of the current markdown."""
        return self._result.elements

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def caret_offset(self) -> int:
        """Text characters preceding the caret."""
        return get_caret_offset(self.surface, self.selection)

    def focus(self) -> None:
        """Focus the surface, putting the caret at the end if it has none."""
        self._focused = True
        position = self.selection.position
        if position is None or not contains(self.surface, position.node):
            move_to_end(self.surface, self.selection)

    def blur(self) -> None:
        self._focused = False

    # ------------------------------------------------------------------
    # Forward pipeline
    # ------------------------------------------------------------------

    def set_markdown(self, markdown: str) -> None:
        """Replace the markdown source (e.g. from a plain text field)."""
        self._markdown = markdown
        self.render()

    def render(self) -> None:
        """Rebuild the surface from the markdown, keeping the caret.

        The tree is left untouched when it already matches the rendered
        markup, so the caret keeps its exact node.
        """
        self._result = self._converter.convert(self._markdown)
        fresh = parse_markup(self._result.markup)
        if to_markup(fresh) == to_markup(self.surface):
            log.debug("surface already current", extra={"extra_fields": {"op": "render"}})
            return

        caret = get_caret_offset(self.surface, self.selection) if self._focused else None
        self.surface.replace_children(list(fresh.children))
        self._metrics.increment("mdsurface.surface_renders_total")

        if caret is not None:
            total = len(text_content(self.surface))
            last = self.surface.children[-1] if self.surface.children else None
            if caret > total and last is not None and text_content(last) == "":
                self._place_at_block_start(last)
            else:
                set_caret_offset(self.surface, self.selection, min(caret, total))
        elif self.selection.position is not None and not contains(
            self.surface, self.selection.position.node
        ):
            self.selection.remove_all_ranges()

        log.debug(
            "surface re-rendered",
            extra={"extra_fields": {
                "op": "render",
                "blocks": len(self.surface.children),
                "caret": caret,
            }},
        )

    def _place_at_block_start(self, block: Node) -> None:
        """Put the caret at the start of the top-level *block*.

        A block with text takes the caret before its first character.  A
        void block (a blank line's break or a rule) takes it right after
        the block, and an empty heading, quote or list item takes it
        inside its innermost element.
        """
        first = next(iter_text_nodes(block), None)
        if first is not None:
            self.selection.collapse(first, 0)
            return
        if not isinstance(block, Element) or block.tag in VOID_TAGS:
            self.selection.collapse(self.surface, block.index_in_parent() + 1)
            return
        target = block
        while True:
            inner = [child for child in target.child_elements() if child.tag not in VOID_TAGS]
            if not inner:
                break
            target = inner[-1]
        self.selection.collapse(target, len(target.children))

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def handle_input(self) -> None:
        """Serialize the edited surface and re-render when the markdown changed."""
        markdown = serialize_markdown(self.surface)
        if markdown == self._markdown:
            return
        self._markdown = markdown
        self.render()

    def _edit(self, operation: _Callable[..., None], *args: str) -> None:
        if not self._focused:
            self.focus()
        operation(self.surface, self.selection, *args)
        self.handle_input()

    def _press_enter(self) -> None:
        """Split the line at the caret and continue on the new line.

        The inserted newline disappears from the text once the line
        becomes two blocks, so the caret is placed by markdown line
        rather than by text offset.
        """
        if not self._focused:
            self.focus()
        insert_text(self.surface, self.selection, "\n")
        line = self._caret_line()
        previous = self._markdown
        self.handle_input()
        if line is None or self._markdown == previous:
            return
        index = self._block_index(line)
        if index < len(self.surface.children):
            self._place_at_block_start(self.surface.children[index])

    def _caret_line(self) -> int | None:
        """Markdown line number holding the caret, or ``None`` inside code."""
        position = self.selection.position
        if position is None or not isinstance(position.node, Text):
            return None
        node, offset = position.node, position.offset
        ancestor = node.parent
        while ancestor is not None:
            if ancestor.tag == "pre":
                return None
            ancestor = ancestor.parent

        data = node.data
        if node.parent is self.surface and not data.strip():
            # Serialized as a single blank line, whatever its newlines.
            offset = 0
        node.data = data[:offset] + _CARET_MARKER + data[offset:]
        try:
            marked = serialize_markdown(self.surface)
        finally:
            node.data = data
        found = marked.find(_CARET_MARKER)
        if found < 0:
            return None
        return marked[:found].count("\n")

    def _block_index(self, line: int) -> int:
        """Index of the top-level block rendered from markdown *line*."""
        if line == 0:
            return 0
        return len(classify("\n".join(split_lines(self._markdown)[:line])))

    def type(self, text: str) -> None:
        """Type *text* one character at a time, as separate input events."""
        for char in text:
            self._edit(insert_text, char)

    def press_key(self, key: str) -> None:
        """Press a named key.

        Supported: ``ArrowRight``, ``ArrowLeft``, ``Home``, ``End``,
        ``Tab``, ``Enter`` and ``Backspace``.  Any other key is ignored.
        """
        handler = self._key_handlers.get(key)
        if handler is None:
            log.debug("key ignored", extra={"extra_fields": {"op": "key", "key": key}})
            return
        handler()

    def paste(self, text: str) -> None:
        """Insert plain *text* at the caret as a single input event."""
        if not text:
            return
        self._edit(insert_text, text)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self) -> SavedDocument:
        """Package the current markdown as a downloadable blob."""
        document = SavedDocument(
            content=self._markdown,
            filename=self._config.save_filename,
            media_type=self._config.save_media_type,
            encoding=self._config.save_encoding,
        )
        self._metrics.increment("mdsurface.saves_total")
        log.info(
            "document saved",
            extra={"extra_fields": {
                "op": "save",
                "filename": document.filename,
                "bytes": document.size,
            }},
        )
        return document
