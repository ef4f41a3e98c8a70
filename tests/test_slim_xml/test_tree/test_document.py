"""Tests for the XmlDocument container."""

import pytest

from slim_xml.shared import (
    XML_HEADER,
    DocumentConfig,
    ErrorKind,
    InvariantViolationError,
    MalformedXmlError,
    OutputMode,
    XmlIOError,
)
from slim_xml.tree import XmlDocument, XmlElement, split_declaration

FLAT_DOCUMENT = XML_HEADER + "<root>hello</root>"
NESTED_DOCUMENT = "<root><item id='1'>a</item><item id='2'>b</item></root>"


class TestDocumentScenarios:
    """End-to-end parse and serialize scenarios."""

    def test_flat_element_round_trip(self):
        """Test a flat document reproduces byte-identical compact output."""
        doc = XmlDocument.from_string(FLAT_DOCUMENT)

        assert doc.root.name == "root"
        assert doc.root.value == "hello"
        assert doc.root.children == []
        assert doc.to_string() == FLAT_DOCUMENT

    def test_nested_with_attributes(self):
        """Test siblings, attributes and lookup order."""
        doc = XmlDocument.from_string(NESTED_DOCUMENT)
        items = doc.root.find_all_children("item")

        assert len(doc.root.children) == 2
        assert items == doc.root.children
        assert [item.attributes[0] for item in items] == [("id", "1"), ("id", "2")]
        assert [item.value for item in items] == ["a", "b"]

    def test_self_closing_leaf_indented(self):
        """Test a self-closing leaf renders on its own line."""
        doc = XmlDocument.from_string("<root><empty/></root>")
        empty = doc.root.children[0]
        doc.set_beautify_output(True)

        assert empty.name == "empty"
        assert empty.value == ""
        assert empty.attributes == []
        assert doc.to_string() == XML_HEADER + "<root>\n  <empty/>\n</root>\n"

    def test_malformed_attribute(self):
        """Test an unquoted attribute value fails naming the tag."""
        with pytest.raises(MalformedXmlError) as exc_info:
            XmlDocument.from_string("<tag attr=oops>x</tag>")

        assert exc_info.value.tag_name == "tag"

    def test_built_tree_round_trip(self):
        """Test a tree built through the API survives serialize and parse."""
        root = XmlElement("config")
        server = XmlElement("server")
        server.set_attribute("host", "localhost")
        server.set_attribute("port", "8080")
        server.set_attribute("host", "backup")
        server.append_child(XmlElement("name", "primary"))
        server.append_child(XmlElement("disabled"))
        root.append_child(server)
        root.append_child(XmlElement("timeout", "30"))
        doc = XmlDocument(root)

        for beautify in (False, True):
            doc.set_beautify_output(beautify)
            reparsed = XmlDocument.from_string(doc.to_string())

            assert reparsed.root == root
            assert [a.name for a in reparsed.root.children[0].attributes] == [
                "host", "port", "host"
            ]

    def test_round_trip_structural_equality(self):
        """Test parse(serialize(doc)) equals doc in both modes."""
        doc = XmlDocument.from_string(
            "<catalog><book id='b1' lang='en'><title>Dune</title><reprint/></book>"
            "<note>end</note></catalog>"
        )
        for beautify in (False, True):
            doc.set_beautify_output(beautify)
            reparsed = XmlDocument.from_string(doc.to_string())

            assert reparsed.root == doc.root


class TestDocumentConstruction:
    """Test building documents programmatically."""

    def test_wraps_root(self):
        """Test a document takes an existing root element."""
        root = XmlElement("root", "x")
        doc = XmlDocument(root)

        assert doc.root is root
        assert doc.declaration is None
        assert doc.output_mode is OutputMode.COMPACT
        assert str(doc) == XML_HEADER + "<root>x</root>"

    def test_rejects_non_element(self):
        """Test the root must be an element."""
        with pytest.raises(TypeError, match="XmlElement instance"):
            XmlDocument("root")  # type: ignore

    def test_rejects_owned_root(self):
        """Test an element already in a tree cannot become a root."""
        parent = XmlElement("parent")
        child = XmlElement("child")
        parent.append_child(child)

        with pytest.raises(InvariantViolationError, match="already belongs"):
            XmlDocument(child)

    def test_root_cannot_join_another_tree(self):
        """Test the root of a document cannot be appended elsewhere."""
        doc = XmlDocument(XmlElement("root"))
        other = XmlElement("other")

        with pytest.raises(InvariantViolationError, match="root of a document"):
            other.append_child(doc.root)

        assert doc.root.parent is None
        assert other.children == []

    def test_root_cannot_serve_two_documents(self):
        """Test one element cannot be the root of two documents."""
        root = XmlElement("root")
        XmlDocument(root)

        with pytest.raises(InvariantViolationError, match="already the root"):
            XmlDocument(root)

    def test_parsed_root_is_owned(self):
        """Test parsed documents own their root as well."""
        doc = XmlDocument.from_string("<root/>")

        with pytest.raises(InvariantViolationError):
            XmlElement("other").append_child(doc.root)

    def test_config_output_mode(self):
        """Test the configured mode is the initial output mode."""
        doc = XmlDocument(XmlElement("root"), DocumentConfig.pretty())

        assert doc.beautify_output is True
        doc.set_beautify_output(False)
        assert doc.beautify_output is False

    def test_without_declaration(self):
        """Test the header can be switched off."""
        config = DocumentConfig().override(serialization__include_declaration=False)
        doc = XmlDocument(XmlElement("root", "x"), config)

        assert doc.to_string() == "<root>x</root>"

    def test_declaration_is_kept(self):
        """Test the parsed declaration is remembered."""
        doc = XmlDocument.from_string(FLAT_DOCUMENT)

        assert doc.declaration == XML_HEADER.strip()

    def test_document_without_declaration(self):
        """Test a buffer with only an element parses."""
        doc = XmlDocument.from_string("<root>x</root>")

        assert doc.declaration is None
        assert doc.to_string() == XML_HEADER + "<root>x</root>"


class TestDocumentLookup:
    """Test lookups and statistics."""

    def test_find_and_equal_range(self):
        """Test root-level lookups."""
        doc = XmlDocument.from_string(NESTED_DOCUMENT)

        assert doc.find("item").value == "a"
        assert doc.find("missing") is None
        assert [item.value for item in doc.equal_range("item")] == ["a", "b"]

    def test_iter_elements(self):
        """Test document order traversal."""
        doc = XmlDocument.from_string(NESTED_DOCUMENT)

        assert [element.name for element in doc.iter_elements()] == [
            "root", "item", "item"
        ]

    def test_statistics(self):
        """Test tree statistics."""
        doc = XmlDocument.from_string(
            "<root><a k='1' j='2'>x</a><b><c/></b></root>"
        )
        stats = doc.statistics()

        assert stats.element_count == 4
        assert stats.attribute_count == 2
        assert stats.max_depth == 2
        assert stats.value_elements == 1
        assert stats.empty_elements == 1
        assert stats.parent_elements == 2

    def test_static_tag_lookups(self):
        """Test the string lookup helpers."""
        text = "<r><i>1</i><i>2</i></r>"

        assert XmlDocument.get_value_by_tag(text, "i") == "1"
        assert XmlDocument.get_value_by_tag(text, "i", 4) == "2"
        assert XmlDocument.get_xml_data_by_tag(text, "i", 4) == "<i>2</i>"


class TestDocumentFiles:
    """Test loading and saving files."""

    def test_save_and_load(self, tmp_path):
        """Test a saved document loads back equal."""
        path = tmp_path / "doc.xml"
        doc = XmlDocument.from_string(NESTED_DOCUMENT)
        doc.save_to_file(path)

        assert path.read_text(encoding="utf-8") == XML_HEADER + NESTED_DOCUMENT
        assert XmlDocument.from_file(path).root == doc.root

    def test_save_truncates(self, tmp_path):
        """Test saving replaces existing content."""
        path = tmp_path / "doc.xml"
        path.write_text("x" * 500, encoding="utf-8")
        XmlDocument(XmlElement("root")).save_to_file(path)

        assert path.read_text(encoding="utf-8") == XML_HEADER + "<root/>"

    def test_save_indented(self, tmp_path):
        """Test the output mode applies to saved files."""
        path = tmp_path / "doc.xml"
        doc = XmlDocument.from_string("<root><a>1</a></root>")
        doc.set_beautify_output()
        doc.save_to_file(str(path))

        assert path.read_text(encoding="utf-8") == XML_HEADER + "<root>\n  <a>1</a>\n</root>\n"

    def test_load_missing_file(self, tmp_path):
        """Test opening a file that does not exist."""
        path = tmp_path / "missing.xml"

        with pytest.raises(XmlIOError, match="Could not open xml file") as exc_info:
            XmlDocument.from_file(path)

        assert exc_info.value.kind is ErrorKind.IO
        assert exc_info.value.path == str(path)
        assert exc_info.value.reason

    def test_save_into_missing_directory(self, tmp_path):
        """Test writing where the file cannot be created."""
        path = tmp_path / "no_such_dir" / "doc.xml"

        with pytest.raises(XmlIOError, match="Could not create xml file"):
            XmlDocument(XmlElement("root")).save_to_file(path)

    def test_load_undecodable_file(self, tmp_path):
        """Test bytes that are not valid in the configured encoding."""
        path = tmp_path / "latin.xml"
        path.write_bytes(b"<root>\xff\xfe</root>")

        with pytest.raises(XmlIOError, match="Could not decode"):
            XmlDocument.from_file(path)

    def test_load_utf8_with_byte_order_mark(self, tmp_path):
        """Test a leading byte order mark is ignored."""
        path = tmp_path / "bom.xml"
        path.write_bytes(b"\xef\xbb\xbf" + (XML_HEADER + NESTED_DOCUMENT).encode("utf-8"))

        doc = XmlDocument.from_file(path)

        assert doc.declaration == XML_HEADER.strip()
        assert len(doc.root.children) == 2

    def test_byte_order_mark_without_declaration(self):
        """Test a byte order mark directly before the root element."""
        doc = XmlDocument.from_string("\ufeff<root>x</root>")

        assert doc.root.value == "x"

    def test_load_with_encoding(self, tmp_path):
        """Test a configured file encoding."""
        path = tmp_path / "latin.xml"
        path.write_bytes("<root>café</root>".encode("latin-1"))
        config = DocumentConfig().override(io__encoding="latin-1")

        assert XmlDocument.from_file(path, config).root.value == "café"

    def test_load_malformed_file(self, tmp_path):
        """Test parse errors surface from file loading."""
        path = tmp_path / "bad.xml"
        path.write_text("<root>", encoding="utf-8")

        with pytest.raises(MalformedXmlError):
            XmlDocument.from_file(path)

    def test_io_error_is_os_error(self, tmp_path):
        """Test I/O errors can be caught as OSError."""
        with pytest.raises(OSError):
            XmlDocument.from_file(tmp_path / "missing.xml")


class TestSplitDeclaration:
    """Test declaration handling."""

    def test_split(self):
        """Test declaration and body are separated."""
        assert split_declaration(FLAT_DOCUMENT) == (XML_HEADER.strip(), "\n<root>hello</root>")

    def test_no_declaration(self):
        """Test buffers without declaration are returned untouched."""
        assert split_declaration("<root/>") == (None, "<root/>")

    def test_strip_disabled(self):
        """Test splitting can be turned off."""
        assert split_declaration(FLAT_DOCUMENT, strip=False) == (None, FLAT_DOCUMENT)

    def test_unterminated_declaration(self):
        """Test a declaration without '?>'."""
        with pytest.raises(MalformedXmlError, match="not terminated"):
            split_declaration("<?xml version='1.0' <root/>")
