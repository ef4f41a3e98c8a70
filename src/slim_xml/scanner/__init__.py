"""Tag scanning layer for slim XML parsing.

Key Components:
    locate_open_tag: Raw header of the first tag in a buffer
    parse_tag_header: Attribute micro-parser
    value_span / element_span: Content and full-element lookups by tag name
    top_level_child_tags: Top-level element discovery within a span
"""

from .tag_scanner import (
    ChildTag,
    TagHeader,
    element_span,
    has_child_elements,
    locate_open_tag,
    parse_tag_header,
    tag_name_of,
    top_level_child_tags,
    value_span,
)

__all__ = [
    "ChildTag",
    "TagHeader",
    "element_span",
    "has_child_elements",
    "locate_open_tag",
    "parse_tag_header",
    "tag_name_of",
    "top_level_child_tags",
    "value_span",
]
