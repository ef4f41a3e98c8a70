"""Element tree model for slim XML documents.

Key Components:
    XmlElement: Element with attributes and either a value or children
    XmlTreeBuilder: Recursive construction of element trees from text
    XmlDocument: Root container with declaration, output mode and file I/O
    serializer: Compact and indented tree walks
"""

from .builder import XmlTreeBuilder
from .document import XmlDocument, split_declaration
from .element import Attribute, XmlElement
from .serializer import serialize_element, to_compact_string, to_indented_string

__all__ = [
    "Attribute",
    "XmlDocument",
    "XmlElement",
    "XmlTreeBuilder",
    "serialize_element",
    "split_declaration",
    "to_compact_string",
    "to_indented_string",
]
