"""Unit tests for the surface tree: structure edits, traversal, markup."""

import pytest

from mdsurface.surface.tree import (
    Element,
    Text,
    contains,
    iter_nodes,
    iter_text_nodes,
    outer_markup,
    text_content,
    to_markup,
)


@pytest.fixture
def paragraph():
    """<p>ab<strong>cd</strong>ef</p>"""
    return Element("p", children=[Text("ab"), Element("strong", children=[Text("cd")]), Text("ef")])


class TestStructure:

    def test_constructor_sets_parents(self, paragraph):
        assert all(child.parent is paragraph for child in paragraph.children)

    def test_tag_lower_cased(self):
        assert Element("P").tag == "p"

    def test_append_moves_node(self):
        a, b = Element("p"), Element("p")
        leaf = a.append(Text("x"))
        b.append(leaf)
        assert a.children == []
        assert b.children == [leaf]
        assert leaf.parent is b

    def test_insert_within_same_parent(self):
        first, second, third = Text("1"), Text("2"), Text("3")
        parent = Element("p", children=[first, second, third])
        parent.insert(3, first)
        assert parent.children == [second, third, first]

    def test_insert_into_own_subtree_rejected(self):
        outer = Element("div")
        inner = outer.append(Element("p"))
        with pytest.raises(ValueError):
            inner.append(outer)
        with pytest.raises(ValueError):
            outer.append(outer)

    def test_remove_non_child_rejected(self):
        with pytest.raises(ValueError):
            Element("p").remove(Text("x"))

    def test_index_in_parent(self, paragraph):
        assert [child.index_in_parent() for child in paragraph.children] == [0, 1, 2]
        with pytest.raises(ValueError):
            Text("orphan").index_in_parent()

    def test_replace_children(self, paragraph):
        old = list(paragraph.children)
        new = Text("z")
        paragraph.replace_children([new])
        assert paragraph.children == [new]
        assert all(node.parent is None for node in old)

    def test_child_elements_filter(self):
        ul = Element("ul", children=[Element("li"), Text(" "), Element("li"), Element("span")])
        assert len(ul.child_elements()) == 3
        assert len(ul.child_elements("li")) == 2

    def test_get_attribute(self):
        link = Element("a", {"href": "u"})
        assert link.get("href") == "u"
        assert link.get("title") is None

    def test_equal_text_nodes_are_distinct(self):
        assert Text("x") != Text("x")


class TestTraversal:

    def test_document_order(self, paragraph):
        tags = [getattr(n, "tag", None) or n.data for n in iter_nodes(paragraph)]
        assert tags == ["p", "ab", "strong", "cd", "ef"]

    def test_text_nodes(self, paragraph):
        assert [t.data for t in iter_text_nodes(paragraph)] == ["ab", "cd", "ef"]

    def test_text_content(self, paragraph):
        assert text_content(paragraph) == "abcdef"
        assert text_content(Text("q")) == "q"

    def test_contains(self, paragraph):
        inner = paragraph.children[1].children[0]
        assert contains(paragraph, inner)
        assert contains(paragraph, paragraph)
        assert not contains(paragraph, Text("cd"))


class TestMarkup:

    def test_inner_markup(self, paragraph):
        assert to_markup(Element("div", children=[paragraph])) == "<p>ab<strong>cd</strong>ef</p>"

    def test_text_escaped(self):
        assert outer_markup(Text("<a & b>")) == "&lt;a &amp; b&gt;"

    def test_attributes_escaped(self):
        link = Element("a", {"href": 'x"y&z'}, [Text("t")])
        assert outer_markup(link) == '<a href="x&quot;y&amp;z">t</a>'

    def test_void_tags(self):
        assert outer_markup(Element("br")) == "<br>"
        assert outer_markup(Element("hr")) == "<hr>"

    def test_unknown_node_type(self):
        with pytest.raises(TypeError):
            outer_markup(object())
