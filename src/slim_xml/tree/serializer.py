"""Serialization of element trees to XML text.

Two pre-order tree walks are provided: compact output with no inserted
whitespace, and indented output with one element per line. Attribute values are
written verbatim in single quotes, without escaping.
"""

from typing import TYPE_CHECKING, List

from slim_xml.shared.config import OutputMode

if TYPE_CHECKING:
    from slim_xml.tree.element import XmlElement

DEFAULT_INDENT_UNIT = "  "


def create_open_tag(element: "XmlElement") -> str:
    """Render ``<name attr='value'...`` followed by ``/>`` or ``>``."""
    parts = ["<", element.name]
    for attribute in element.attributes:
        parts.append(f" {attribute.name}='{attribute.value}'")
    parts.append("/>" if element.is_empty else ">")
    return "".join(parts)


def create_close_tag(element: "XmlElement") -> str:
    """Render ``</name>``."""
    return f"</{element.name}>"


def to_compact_string(element: "XmlElement") -> str:
    """Serialize ``element`` and its subtree without inserted whitespace.

    Examples:
        >>> from slim_xml.tree.element import XmlElement
        >>> to_compact_string(XmlElement("empty"))
        '<empty/>'
    """
    parts: List[str] = []
    _write_compact(element, parts)
    return "".join(parts)


def to_indented_string(
    element: "XmlElement",
    level: int = 0,
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> str:
    """Serialize ``element`` with one element per line.

    Open tags are indented by ``indent_unit`` per nesting level. Elements holding
    a value stay on a single line; close tags of elements with children get the
    same indentation as their open tag. Every line ends with a newline.

    Args:
        element: Root of the subtree to serialize
        level: Nesting depth of ``element``
        indent_unit: Whitespace added per level

    Returns:
        Indented XML text
    """
    parts: List[str] = []
    _write_indented(element, level, indent_unit, parts)
    return "".join(parts)


def serialize_element(
    element: "XmlElement",
    mode: OutputMode = OutputMode.COMPACT,
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> str:
    """Serialize ``element`` using the requested layout."""
    if mode is OutputMode.INDENTED:
        return to_indented_string(element, 0, indent_unit)
    return to_compact_string(element)


def _write_compact(element: "XmlElement", parts: List[str]) -> None:
    parts.append(create_open_tag(element))
    if element.is_empty:
        return
    if element.children:
        for child in element.children:
            _write_compact(child, parts)
    else:
        parts.append(element.value)
    parts.append(create_close_tag(element))


def _write_indented(
    element: "XmlElement", level: int, indent_unit: str, parts: List[str]
) -> None:
    indent = indent_unit * level
    parts.append(indent)
    parts.append(create_open_tag(element))
    if element.is_empty:
        parts.append("\n")
        return
    if element.children:
        parts.append("\n")
        for child in element.children:
            _write_indented(child, level + 1, indent_unit, parts)
        parts.append(indent)
    else:
        parts.append(element.value)
    parts.append(create_close_tag(element))
    parts.append("\n")
