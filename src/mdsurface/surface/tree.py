"""A minimal labeled tree standing in for a live editable surface.

The serializer and the caret mapper only need a generic tree: elements
with a tag, attributes and ordered children, and text leaves.  Nodes keep
a ``parent`` link so a caret position can be located and moved without
searching from the root.

Node equality is identity: two text nodes with the same data are still
different caret targets.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

# Elements serialized without a closing tag.
VOID_TAGS: frozenset[str] = frozenset({"br", "hr", "img", "input", "meta", "link", "wbr"})


class Node:
    """Common base for :class:`Element` and :class:`Text`."""

    __slots__ = ("parent",)

    def __init__(self) -> None:
        self.parent: Element | None = None

    def index_in_parent(self) -> int:
        """Position of this node among its parent's children."""
        if self.parent is None:
            raise ValueError("node has no parent")
        for index, child in enumerate(self.parent.children):
            if child is self:
                return index
        raise ValueError("node is not listed among its parent's children")


class Text(Node):
    """A text leaf.  ``data`` holds decoded characters, not markup."""

    __slots__ = ("data",)

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def __repr__(self) -> str:
        return f"Text({self.data!r})"


class Element(Node):
    """An element node with a lower-case tag, attributes and children."""

    __slots__ = ("tag", "attrs", "children")

    def __init__(
        self,
        tag: str,
        attrs: dict[str, str] | None = None,
        children: Iterable[Node] = (),
    ) -> None:
        super().__init__()
        self.tag = tag.lower()
        self.attrs: dict[str, str] = dict(attrs or {})
        self.children: list[Node] = []
        for child in children:
            self.append(child)

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, children={len(self.children)})"

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return attribute *name*, or *default* when it is absent."""
        return self.attrs.get(name, default)

    def append(self, node: Node) -> Node:
        """Append *node* as the last child, moving it from any old parent."""
        return self.insert(len(self.children), node)

    def insert(self, index: int, node: Node) -> Node:
        """Insert *node* before the child at *index*."""
        if isinstance(node, Element) and (node is self or contains(node, self)):
            raise ValueError("cannot insert an element into its own subtree")
        if node.parent is not None:
            if node.parent is self and node.index_in_parent() < index:
                index -= 1
            node.parent.remove(node)
        self.children.insert(index, node)
        node.parent = self
        return node

    def remove(self, node: Node) -> None:
        """Remove the direct child *node*."""
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                node.parent = None
                return
        raise ValueError("node is not a child of this element")

    def replace_children(self, nodes: Iterable[Node]) -> None:
        """Drop every current child and adopt *nodes* in order."""
        for child in self.children:
            child.parent = None
        self.children = []
        for node in list(nodes):
            self.append(node)

    def child_elements(self, tag: str | None = None) -> list[Element]:
        """Direct element children, optionally filtered by *tag*."""
        return [
            child
            for child in self.children
            if isinstance(child, Element) and (tag is None or child.tag == tag)
        ]


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield *root* and every descendant in depth-first document order."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Element):
            stack.extend(reversed(node.children))


def iter_text_nodes(root: Node) -> Iterator[Text]:
    """Yield the text leaves under *root* in document order."""
    for node in iter_nodes(root):
        if isinstance(node, Text):
            yield node


def text_content(node: Node) -> str:
    """Concatenated text of every text leaf under *node*."""
    if isinstance(node, Text):
        return node.data
    return "".join(text.data for text in iter_text_nodes(node))


def contains(root: Node, node: Node) -> bool:
    """``True`` when *node* is *root* or one of its descendants."""
    current: Node | None = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False


# ---------------------------------------------------------------------------
# Markup output
# ---------------------------------------------------------------------------

def _escape_text(data: str) -> str:
    return data.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def outer_markup(node: Node) -> str:
    """Markup for *node* itself, including its own tag."""
    if isinstance(node, Text):
        return _escape_text(node.data)
    if not isinstance(node, Element):
        raise TypeError(f"expected Element or Text, got {type(node).__name__}")
    attrs = "".join(f' {name}="{_escape_attr(value)}"' for name, value in node.attrs.items())
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{to_markup(node)}</{node.tag}>"


def to_markup(element: Element) -> str:
    """Inner markup of *element*: its children serialized in order."""
    return "".join(outer_markup(child) for child in element.children)
