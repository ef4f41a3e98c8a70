"""Document container for slim XML trees.

An :class:`XmlDocument` owns one root element, remembers the declaration it was
parsed with, and knows how to serialize itself (compact or indented) and how to
load from and save to files.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from slim_xml.scanner import element_span, value_span
from slim_xml.shared import (
    DocumentConfig,
    DocumentStatistics,
    InvariantViolationError,
    MalformedXmlError,
    OutputMode,
    XmlIOError,
    get_logger,
)
from slim_xml.tree.builder import XmlTreeBuilder
from slim_xml.tree.element import XmlElement
from slim_xml.tree.serializer import serialize_element

PathType = Union[str, Path]
BYTE_ORDER_MARK = "\ufeff"


class XmlDocument:
    """Root XML document container.

    Args:
        root: Root element; the document takes ownership of it, so it can no
            longer be appended to another element or used as another root
        config: Document configuration; defaults to ``DocumentConfig()``
        declaration: Declaration text the document was parsed with, if any
        correlation_id: Optional correlation ID for request tracking

    Examples:
        >>> doc = XmlDocument.from_string(
        ...     '<?xml version="1.0" encoding="UTF-8" standalone="yes" ?>\\n'
        ...     '<root>hello</root>'
        ... )
        >>> doc.root.value
        'hello'
    """

    def __init__(
        self,
        root: XmlElement,
        config: Optional[DocumentConfig] = None,
        declaration: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        if not isinstance(root, XmlElement):
            raise TypeError("Document root must be an XmlElement instance")
        if root.parent is not None:
            raise InvariantViolationError(
                f"Element {root.name} already belongs to element {root.parent.name}"
            )
        if root._document_root:
            raise InvariantViolationError(
                f"Element {root.name} is already the root of a document"
            )
        root._document_root = True
        self._root = root
        self.config = config or DocumentConfig()
        self.declaration = declaration
        self.correlation_id = correlation_id
        self.output_mode = self.config.output_mode
        self.logger = get_logger(__name__, correlation_id, "xml_document")

    @property
    def root(self) -> XmlElement:
        """The root element."""
        return self._root

    @property
    def beautify_output(self) -> bool:
        """Check if the document serializes in indented form."""
        return self.output_mode is OutputMode.INDENTED

    def set_beautify_output(self, enabled: bool = True) -> None:
        """Switch between indented and compact serialization."""
        self.output_mode = OutputMode.INDENTED if enabled else OutputMode.COMPACT

    @classmethod
    def from_string(
        cls,
        xml_data: str,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> "XmlDocument":
        """Parse a complete document buffer.

        A leading byte order mark is dropped. A leading ``<?...?>`` declaration
        is split off and kept as ``declaration``; the rest must hold exactly one
        root element.

        Raises:
            MalformedXmlError: If the buffer cannot be parsed
        """
        config = config or DocumentConfig()
        logger = get_logger(__name__, correlation_id, "xml_document")
        logger.info("Parsing document", extra={"content_length": len(xml_data)})

        if xml_data.startswith(BYTE_ORDER_MARK):
            xml_data = xml_data[len(BYTE_ORDER_MARK):]

        declaration, body = split_declaration(xml_data, config.parse.strip_declaration)
        try:
            root = XmlTreeBuilder(config.parse, correlation_id).build(body)
        except MalformedXmlError as e:
            logger.error("Document parse failed", extra={"reason": str(e)})
            raise

        return cls(root, config, declaration, correlation_id)

    @classmethod
    def from_file(
        cls,
        file_path: PathType,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> "XmlDocument":
        """Load and parse a document from a file.

        Raises:
            XmlIOError: If the file cannot be opened or decoded
            MalformedXmlError: If the content cannot be parsed
        """
        config = config or DocumentConfig()
        path_obj = Path(file_path)
        logger = get_logger(__name__, correlation_id, "xml_document")
        logger.info("Loading document", extra={"file_path": str(path_obj)})

        try:
            xml_data = path_obj.read_text(encoding=config.io.encoding)
        except OSError as e:
            reason = e.strerror or str(e)
            logger.error("Could not open xml file", extra={"file_path": str(path_obj)})
            raise XmlIOError(
                f"Could not open xml file {path_obj}: {reason}",
                path=str(path_obj),
                reason=reason,
            ) from e
        except UnicodeDecodeError as e:
            logger.error("Could not decode xml file", extra={"file_path": str(path_obj)})
            raise XmlIOError(
                f"Could not decode xml file {path_obj} as {config.io.encoding}: {e.reason}",
                path=str(path_obj),
                reason=e.reason,
            ) from e

        return cls.from_string(xml_data, config, correlation_id)

    def to_string(self) -> str:
        """Serialize the document, declaration header first."""
        serialization = self.config.serialization
        body = serialize_element(self._root, self.output_mode, serialization.indent_unit)
        if not serialization.include_declaration:
            return body
        return serialization.declaration + body

    def __str__(self) -> str:
        return self.to_string()

    def save_to_file(self, file_path: PathType) -> None:
        """Write the serialized document to ``file_path``, truncating it.

        Raises:
            XmlIOError: If the file cannot be created or written
        """
        path_obj = Path(file_path)
        try:
            path_obj.write_text(self.to_string(), encoding=self.config.io.encoding)
        except OSError as e:
            reason = e.strerror or str(e)
            self.logger.error("Could not create xml file", extra={"file_path": str(path_obj)})
            raise XmlIOError(
                f"Could not create xml file {path_obj}: {reason}",
                path=str(path_obj),
                reason=reason,
            ) from e

        self.logger.info("Document saved", extra={"file_path": str(path_obj)})

    def find(self, name: str) -> Optional[XmlElement]:
        """Find the first child of the root with matching name."""
        return self._root.find_first_child(name)

    def equal_range(self, name: str) -> List[XmlElement]:
        """Find all children of the root with matching name."""
        return self._root.find_all_children(name)

    def iter_elements(self) -> List[XmlElement]:
        """List all elements in document order."""
        return self._root.iter_elements()

    def statistics(self) -> DocumentStatistics:
        """Calculate document-wide statistics."""
        stats = DocumentStatistics()
        self._collect_statistics(self._root, 0, stats)
        return stats

    def _collect_statistics(
        self, element: XmlElement, depth: int, stats: DocumentStatistics
    ) -> None:
        stats.element_count += 1
        stats.attribute_count += len(element.attributes)
        stats.max_depth = max(stats.max_depth, depth)
        if element.is_empty:
            stats.empty_elements += 1
        elif not element.children:
            stats.value_elements += 1
        for child in element.children:
            self._collect_statistics(child, depth + 1, stats)

    @staticmethod
    def get_value_by_tag(xml_string: str, tag_name: str, initial_pos: int = 0) -> str:
        """Return the content of ``tag_name`` found at or after ``initial_pos``."""
        return value_span(xml_string, tag_name, initial_pos)

    @staticmethod
    def get_xml_data_by_tag(xml_string: str, tag_name: str, initial_pos: int = 0) -> str:
        """Return the full element text of ``tag_name`` found at or after ``initial_pos``."""
        return element_span(xml_string, tag_name, initial_pos)


def split_declaration(xml_data: str, strip: bool = True) -> Tuple[Optional[str], str]:
    """Split a document buffer into its declaration and the element text.

    Args:
        xml_data: Complete document text
        strip: When False the buffer is returned untouched

    Returns:
        ``(declaration, body)``; declaration is None when the buffer has none

    Raises:
        MalformedXmlError: If a ``<?`` declaration is never closed by ``?>``
    """
    stripped = xml_data.lstrip()
    if not strip or not stripped.startswith("<?"):
        return None, xml_data

    end = stripped.find("?>")
    if end == -1:
        raise MalformedXmlError("Document declaration is not terminated by '?>'")
    return stripped[:end + 2], stripped[end + 2:]
