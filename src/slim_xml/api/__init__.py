"""Public parsing API for slim XML documents."""

from .parser import parse, parse_file, parse_string, serialize

__all__ = [
    "parse",
    "parse_file",
    "parse_string",
    "serialize",
]
