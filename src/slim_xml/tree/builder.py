"""Recursive tree building from XML text.

The builder treats the first tag in its input as the element being built, then
either stores the element content as a scalar value or splits it into top-level
child elements and recurses into each of them.
"""

from typing import Optional

from slim_xml.scanner import (
    element_span,
    has_child_elements,
    locate_open_tag,
    parse_tag_header,
    top_level_child_tags,
    value_span,
)
from slim_xml.shared import (
    InvariantViolationError,
    MalformedXmlError,
    ParseConfig,
    get_logger,
)
from slim_xml.tree.element import XmlElement

PREVIEW_LENGTH = 40  # Max length of offending text quoted in errors


class XmlTreeBuilder:
    """Builds :class:`XmlElement` trees from element text.

    Args:
        config: Parse configuration; defaults to ``ParseConfig()``
        correlation_id: Optional correlation ID for request tracking
    """

    def __init__(
        self,
        config: Optional[ParseConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or ParseConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tree_builder")

    def build(self, xml_string: str) -> XmlElement:
        """Build the element whose open tag is the first tag of ``xml_string``.

        Args:
            xml_string: Text of a single element, without declaration

        Returns:
            Root of the built tree

        Raises:
            MalformedXmlError: If the text cannot be parsed
        """
        self._check_leading_content(xml_string)
        return self._build_element(xml_string, 0)

    def _check_leading_content(self, xml_string: str) -> None:
        start = xml_string.find("<")
        leading = (xml_string if start == -1 else xml_string[:start]).strip()
        if not leading:
            return
        if self.config.leading_content == "reject":
            raise MalformedXmlError(
                f"Unexpected content before the root element: {leading[:PREVIEW_LENGTH]!r}"
            )
        self.logger.warning(
            "Skipping content before the root element",
            extra={"skipped_characters": len(leading)}
        )

    def _build_element(self, xml_string: str, depth: int) -> XmlElement:
        if depth >= self.config.max_depth:
            raise MalformedXmlError(
                f"Element nesting exceeds the maximum depth of {self.config.max_depth}"
            )

        header = locate_open_tag(xml_string)
        if not header:
            raise MalformedXmlError("No element found in xml data")
        if header[0] in "?!":
            raise MalformedXmlError(
                f"Unsupported markup <{header[:PREVIEW_LENGTH]}> where an element was expected"
            )

        tag = parse_tag_header(header)
        try:
            element = XmlElement(tag.name)
        except InvariantViolationError as e:
            raise MalformedXmlError(
                f"xml data is corrupted due to tag name {tag.name!r}: {e}",
                tag_name=tag.name,
            ) from e
        for attribute_name, attribute_value in tag.attributes:
            try:
                element.set_attribute(attribute_name, attribute_value)
            except InvariantViolationError as e:
                raise MalformedXmlError(
                    f"xml data is corrupted due to attribute in tag {tag.name}: {e}",
                    tag_name=tag.name,
                ) from e

        self.logger.debug(
            "Building element",
            extra={
                "tag": tag.name,
                "depth": depth,
                "attribute_count": len(tag.attributes),
                "self_closing": tag.self_closing,
            }
        )

        if tag.self_closing:
            return element

        start = xml_string.find("<")
        if not has_child_elements(xml_string, tag.name, start):
            element.set_value(value_span(xml_string, tag.name, start))
            return element

        content = value_span(xml_string, tag.name, start)
        for child_tag in top_level_child_tags(content):
            child_string = element_span(content, child_tag.name, child_tag.offset)
            element.append_child(self._build_element(child_string, depth + 1))
        return element
