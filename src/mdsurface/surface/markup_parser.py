"""Parse HTML fragments into surface trees.

BeautifulSoup with the stdlib ``html.parser`` backend does the
tokenizing; this module only converts its tree into
:class:`~mdsurface.surface.tree.Element` / :class:`Text` nodes.  Entities
are decoded into text, comments and doctypes are dropped, and adjacent
text runs are merged so each run of characters is one caret target.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from mdsurface.surface.tree import Element, Node, Text

ROOT_TAG = "div"


def _convert(source: Tag, target: Element) -> None:
    for child in source.children:
        if isinstance(child, Tag):
            element = Element(child.name, {k: _attr_value(v) for k, v in child.attrs.items()})
            _convert(child, element)
            target.append(element)
        elif isinstance(child, PreformattedString):
            # Comments, CDATA, doctypes and processing instructions.
            continue
        elif isinstance(child, NavigableString):
            _append_text(target, str(child))


def _attr_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value)
    return str(value)


def _append_text(target: Element, data: str) -> None:
    if not data:
        return
    last: Node | None = target.children[-1] if target.children else None
    if isinstance(last, Text):
        last.data += data
    else:
        target.append(Text(data))


def parse_markup(markup: str, root_tag: str = ROOT_TAG) -> Element:
    """Parse an HTML fragment and return it wrapped in a root element.

    Parameters
    ----------
    markup:
        An HTML fragment, e.g. the output of
        :func:`~mdsurface.converter.block_renderer.render_blocks`.
    root_tag:
        Tag of the synthetic root that receives the fragment's top-level
        nodes.  Defaults to ``"div"``, the editable surface container.

    Returns
    -------
    Element
        The root element.  Its children are the fragment's top-level
        nodes, in order.
    """
    root = Element(root_tag)
    if not markup:
        return root
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    _convert(soup, root)
    return root

