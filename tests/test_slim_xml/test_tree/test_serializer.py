"""Tests for compact and indented serialization."""

from slim_xml.shared import OutputMode
from slim_xml.tree import (
    XmlElement,
    serialize_element,
    to_compact_string,
    to_indented_string,
)


def _catalog() -> XmlElement:
    root = XmlElement("catalog")
    book = XmlElement("book")
    book.set_attribute("id", "b1")
    book.append_child(XmlElement("title", "Dune"))
    book.append_child(XmlElement("reprint"))
    root.append_child(book)
    root.append_child(XmlElement("note", "end"))
    return root


class TestCompactSerialization:
    """Test compact output."""

    def test_empty_element_is_self_closing(self):
        """Test element without value and children."""
        assert to_compact_string(XmlElement("empty")) == "<empty/>"

    def test_self_closing_with_attributes(self):
        """Test attributes on a self-closing element."""
        element = XmlElement("empty")
        element.set_attribute("k", "v")

        assert to_compact_string(element) == "<empty k='v'/>"

    def test_value_element(self):
        """Test element holding a value."""
        assert to_compact_string(XmlElement("root", "hello")) == "<root>hello</root>"

    def test_value_is_verbatim(self):
        """Test whitespace in values is kept."""
        assert to_compact_string(XmlElement("v", "  a b ")) == "<v>  a b </v>"

    def test_nested_tree(self):
        """Test nested output without inserted whitespace."""
        assert to_compact_string(_catalog()) == (
            "<catalog><book id='b1'><title>Dune</title><reprint/></book>"
            "<note>end</note></catalog>"
        )

    def test_attribute_order_follows_calls(self):
        """Test attributes are written in call order, duplicates included."""
        element = XmlElement("item", "x")
        for name, value in [("z", "1"), ("a", "2"), ("z", "3")]:
            element.set_attribute(name, value)

        assert to_compact_string(element) == "<item z='1' a='2' z='3'>x</item>"

    def test_close_tag_form(self):
        """Test close tags carry no trailing slash."""
        assert "</root>" in to_compact_string(XmlElement("root", "x"))
        assert "</root/>" not in to_compact_string(XmlElement("root", "x"))


class TestIndentedSerialization:
    """Test indented output."""

    def test_nested_tree(self):
        """Test indentation per depth and placement of close tags."""
        assert to_indented_string(_catalog()) == (
            "<catalog>\n"
            "  <book id='b1'>\n"
            "    <title>Dune</title>\n"
            "    <reprint/>\n"
            "  </book>\n"
            "  <note>end</note>\n"
            "</catalog>\n"
        )

    def test_self_closing_leaf_on_own_line(self):
        """Test a self-closing child renders on one line without close tag."""
        root = XmlElement("root")
        root.append_child(XmlElement("empty"))

        assert to_indented_string(root) == "<root>\n  <empty/>\n</root>\n"

    def test_starting_level(self):
        """Test a non-zero starting level indents the first line."""
        assert to_indented_string(XmlElement("v", "x"), level=2) == "    <v>x</v>\n"

    def test_custom_indent_unit(self):
        """Test a different indent unit."""
        root = XmlElement("root")
        root.append_child(XmlElement("a", "1"))

        assert to_indented_string(root, indent_unit="\t") == "<root>\n\t<a>1</a>\n</root>\n"

    def test_element_methods_delegate(self):
        """Test the element convenience methods."""
        root = _catalog()

        assert root.to_string() == to_compact_string(root)
        assert root.to_pretty_string() == to_indented_string(root)


class TestSerializeElement:
    """Test mode selection."""

    def test_modes(self):
        """Test each output mode."""
        root = XmlElement("root")
        root.append_child(XmlElement("a", "1"))

        assert serialize_element(root) == "<root><a>1</a></root>"
        assert serialize_element(root, OutputMode.INDENTED) == (
            "<root>\n  <a>1</a>\n</root>\n"
        )
