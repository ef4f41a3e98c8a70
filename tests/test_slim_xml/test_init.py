"""Tests for the top-level package API."""

import slim_xml


class TestPackageInit:
    """Test package level exports."""

    def test_version(self):
        """Test package metadata."""
        assert slim_xml.__version__ == "0.1.0"
        assert slim_xml.__author__

    def test_all_exports_exist(self):
        """Test every name in __all__ is importable."""
        for name in slim_xml.__all__:
            assert hasattr(slim_xml, name), name

    def test_quick_start(self):
        """Test the basic parse, mutate and serialize flow."""
        doc = slim_xml.parse("<root><item id='1'>a</item></root>")
        item = slim_xml.XmlElement("item", "b")
        item.set_attribute("id", "2")
        doc.root.append_child(item)

        assert slim_xml.serialize(doc.root) == (
            "<root><item id='1'>a</item><item id='2'>b</item></root>"
        )

    def test_errors_share_base(self):
        """Test every error class derives from XmlError."""
        for error_class in (
            slim_xml.MalformedXmlError,
            slim_xml.InvariantViolationError,
            slim_xml.XmlIOError,
        ):
            assert issubclass(error_class, slim_xml.XmlError)
