"""Module-level parsing API for slim XML documents.

Simple functions for the common cases: parse a buffer, a path or an open file
into an :class:`XmlDocument`, and serialize a document or element back to text.
Failures are raised as :class:`XmlError` subclasses; nothing is recovered.
"""

from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from slim_xml.shared import (
    DocumentConfig,
    OutputMode,
    XmlIOError,
    get_logger,
)
from slim_xml.tree import XmlDocument, XmlElement, serialize_element

# Type definitions for input data
InputType = Union[str, bytes, Path, BinaryIO, TextIO]
SerializableType = Union[XmlDocument, XmlElement]


def parse(
    input_data: InputType,
    config: Optional[DocumentConfig] = None,
    correlation_id: Optional[str] = None,
) -> XmlDocument:
    """Parse a document from a buffer, a path or a file-like object.

    Args:
        input_data: XML text as ``str`` or ``bytes``, a ``Path``, or an object
            with a ``read`` method
        config: Optional document configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Parsed XmlDocument

    Raises:
        MalformedXmlError: If the content cannot be parsed
        XmlIOError: If the content cannot be read or decoded
        TypeError: If the input type is not supported

    Examples:
        >>> parse("<root><item>value</item></root>").find("item").value
        'value'
    """
    if isinstance(input_data, Path):
        return parse_file(input_data, config=config, correlation_id=correlation_id)
    if isinstance(input_data, (str, bytes)):
        return parse_string(
            _decode(input_data, config), config=config, correlation_id=correlation_id
        )
    if hasattr(input_data, "read"):
        content = input_data.read()
        return parse_string(
            _decode(content, config), config=config, correlation_id=correlation_id
        )
    raise TypeError(f"Unsupported input type {type(input_data).__name__}")


def parse_string(
    xml_string: str,
    config: Optional[DocumentConfig] = None,
    correlation_id: Optional[str] = None,
) -> XmlDocument:
    """Parse a complete document held in a string.

    Examples:
        >>> doc = parse_string("<root><item id='1'>a</item></root>")
        >>> doc.find("item").get_attribute("id")
        '1'
    """
    return XmlDocument.from_string(xml_string, config, correlation_id)


def parse_file(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[DocumentConfig] = None,
    correlation_id: Optional[str] = None,
) -> XmlDocument:
    """Load and parse a document from a file.

    Args:
        file_path: Path to the XML file
        encoding: Optional encoding override for this call
        config: Optional document configuration
        correlation_id: Optional correlation ID for request tracking
    """
    config = config or DocumentConfig()
    if encoding:
        config = config.override(io__encoding=encoding)
    return XmlDocument.from_file(file_path, config, correlation_id)


def serialize(
    target: SerializableType,
    mode: Optional[OutputMode] = None,
) -> str:
    """Serialize a document or an element.

    Documents are written with their declaration header and, unless ``mode`` is
    given, their own output mode. Elements are written without a header and
    default to compact output.
    """
    if isinstance(target, XmlDocument):
        if mode is None:
            return target.to_string()
        previous_mode = target.output_mode
        target.output_mode = mode
        try:
            return target.to_string()
        finally:
            target.output_mode = previous_mode
    if isinstance(target, XmlElement):
        return serialize_element(target, mode or OutputMode.COMPACT)
    raise TypeError(f"Cannot serialize object of type {type(target).__name__}")


def _decode(content: Union[str, bytes], config: Optional[DocumentConfig]) -> str:
    if isinstance(content, str):
        return content
    encoding = (config or DocumentConfig()).io.encoding
    try:
        return content.decode(encoding)
    except UnicodeDecodeError as e:
        logger = get_logger(__name__, None, "parse")
        logger.error("Could not decode xml data", extra={"encoding": encoding})
        raise XmlIOError(
            f"Could not decode xml data as {encoding}: {e.reason}",
            reason=e.reason,
        ) from e
