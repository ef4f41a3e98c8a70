"""Slim XML.

A minimal in-memory XML document model: parse a document into a tree of
elements, build and mutate the tree programmatically, and serialize it back to
compact or indented text.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file(), serialize()
- Level 2: Document and element classes - XmlDocument, XmlElement
- Level 3: Tag scanning utilities - slim_xml.scanner
"""

__version__ = "0.1.0"
__author__ = "Slim XML Team"

from .api import parse, parse_file, parse_string, serialize
from .shared import (
    DocumentConfig,
    ErrorKind,
    InvariantViolationError,
    MalformedXmlError,
    OutputMode,
    XmlError,
    XmlIOError,
)
from .tree import Attribute, XmlDocument, XmlElement

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "parse_string",
    "parse_file",
    "serialize",

    # Level 2: Document model
    "Attribute",
    "XmlDocument",
    "XmlElement",

    # Configuration and errors
    "DocumentConfig",
    "OutputMode",
    "ErrorKind",
    "XmlError",
    "MalformedXmlError",
    "InvariantViolationError",
    "XmlIOError",
]
