"""Stateless tag scanning over raw XML text buffers.

All functions here are pure: they take a string (and offsets into it) and
return substrings, offsets or small tuples describing what they found. The
recursive tree builder is layered on top of them, and ``value_span`` and
``element_span`` double as standalone lookup utilities.

Known limitations of the scanning approach:
    - ``>`` inside attribute values and ``<`` inside text values are not
      supported; any ``<`` in an element's content is taken as child markup.
    - Close tags must be written exactly as ``</name>``.
"""

from typing import List, NamedTuple, Tuple

from slim_xml.shared.errors import MalformedXmlError

# Characters allowed directly after "<name" in an open tag
_TAG_NAME_TERMINATORS = frozenset(" \t\r\n>/")
_QUOTES = ("'", '"')


class TagHeader(NamedTuple):
    """Parsed content of an open tag."""

    name: str
    attributes: List[Tuple[str, str]]
    self_closing: bool


class ChildTag(NamedTuple):
    """A top-level element found inside a span."""

    name: str
    offset: int


def locate_open_tag(buffer: str) -> str:
    """Return the raw header of the first tag in ``buffer``.

    The header is the text between the first ``<`` and the following ``>``,
    i.e. the tag name, its attributes and an optional trailing ``/``.

    Args:
        buffer: Text to scan

    Returns:
        Header text, or an empty string if no ``<``/``>`` pair exists

    Examples:
        >>> locate_open_tag("  <item id='1'>a</item>")
        "item id='1'"
    """
    start = buffer.find("<")
    if start == -1:
        return ""
    end = buffer.find(">", start + 1)
    if end == -1:
        return ""
    return buffer[start + 1:end]


def tag_name_of(header: str) -> str:
    """Extract the tag name from a raw open tag header."""
    if header.endswith("/"):
        header = header[:-1]
    parts = header.split(None, 1)
    return parts[0] if parts else ""


def parse_tag_header(header: str) -> TagHeader:
    """Split an open tag header into name, attributes and self-closing flag.

    Attribute values may be quoted with either quote character; the value runs
    to the next occurrence of the same quote. Attribute order is preserved and
    duplicate names are kept.

    Args:
        header: Header text as returned by :func:`locate_open_tag`

    Returns:
        TagHeader for the tag

    Raises:
        MalformedXmlError: If the tag name is empty or an attribute is corrupt
            (no quoted value after ``=``, unterminated quote, missing ``=``)
    """
    if "=" not in header:
        name = tag_name_of(header)
        if not name:
            raise MalformedXmlError(f"Empty tag name in tag <{header}>")
        return TagHeader(name, [], header.endswith("/"))

    split = _first_whitespace(header)
    name = header[:split] if split != -1 else ""
    if not name:
        raise MalformedXmlError(
            f"xml data is corrupted: no tag name before attributes in tag <{header}>"
        )

    attributes: List[Tuple[str, str]] = []
    self_closing = False
    cursor = split + 1
    length = len(header)
    while cursor < length:
        char = header[cursor]
        if char.isspace():
            cursor += 1
            continue
        if char == "/":
            self_closing = True
            break

        name_start = cursor
        while cursor < length and not header[cursor].isspace() and header[cursor] != "=":
            cursor += 1
        attribute_name = header[name_start:cursor]
        if not attribute_name:
            raise MalformedXmlError(
                f"xml data is corrupted due to empty attribute name in tag {name}",
                tag_name=name,
            )

        quote_pos = _find_quote(header, cursor)
        if quote_pos == -1:
            raise MalformedXmlError(
                f"xml data is corrupted due to attribute '{attribute_name}' in tag {name}",
                tag_name=name,
            )
        if header[cursor:quote_pos].strip() != "=":
            raise MalformedXmlError(
                f"xml data is corrupted due to attribute '{attribute_name}' "
                f"without '=' in tag {name}",
                tag_name=name,
            )

        quote = header[quote_pos]
        value_end = header.find(quote, quote_pos + 1)
        if value_end == -1:
            raise MalformedXmlError(
                f"xml data is corrupted due to unterminated value of attribute "
                f"'{attribute_name}' in tag {name}",
                tag_name=name,
            )
        attributes.append((attribute_name, header[quote_pos + 1:value_end]))
        cursor = value_end + 1

    return TagHeader(name, attributes, self_closing)


def value_span(buffer: str, tag_name: str, from_pos: int = 0) -> str:
    """Return the content between the open and matching close tag of ``tag_name``.

    Args:
        buffer: Text to scan
        tag_name: Name of the element whose content is wanted
        from_pos: Offset to start searching for the open tag

    Returns:
        Content text verbatim; empty if the tag is absent or self-closing

    Raises:
        MalformedXmlError: If the open tag is unterminated or never closed

    Examples:
        >>> value_span("<a><b>x</b></a>", "b")
        'x'
    """
    start = _find_open_tag(buffer, tag_name, from_pos)
    if start == -1:
        return ""
    open_end = _open_tag_end(buffer, tag_name, start)
    if buffer[open_end - 1] == "/":
        return ""
    close_pos = _require_matching_close(buffer, tag_name, open_end + 1)
    return buffer[open_end + 1:close_pos]


def element_span(buffer: str, tag_name: str, from_pos: int = 0) -> str:
    """Return the full text of the element ``tag_name``, open through close tag.

    Args:
        buffer: Text to scan
        tag_name: Name of the element wanted
        from_pos: Offset to start searching for the open tag

    Returns:
        Element text; empty if the tag is absent

    Raises:
        MalformedXmlError: If the open tag is unterminated or never closed
    """
    start = _find_open_tag(buffer, tag_name, from_pos)
    if start == -1:
        return ""
    open_end = _open_tag_end(buffer, tag_name, start)
    if buffer[open_end - 1] == "/":
        return buffer[start:open_end + 1]
    close_pos = _require_matching_close(buffer, tag_name, open_end + 1)
    return buffer[start:close_pos + len(tag_name) + 3]


def has_child_elements(buffer: str, tag_name: str, from_pos: int = 0) -> bool:
    """Check whether the content of ``tag_name`` contains any markup."""
    return "<" in value_span(buffer, tag_name, from_pos)


def top_level_child_tags(span: str) -> List[ChildTag]:
    """List the top-level elements inside ``span`` in document order.

    Each element found is skipped as a whole (through its matching close tag,
    or its ``/>``), so tags nested inside it are never reported. Text between
    elements is ignored.

    Args:
        span: Element content as returned by :func:`value_span`

    Returns:
        ChildTag entries with the name and offset of each element's ``<``

    Raises:
        MalformedXmlError: On a stray close tag or an element left open
    """
    tags: List[ChildTag] = []
    cursor = 0
    while True:
        start = span.find("<", cursor)
        if start == -1:
            break
        end = span.find(">", start + 1)
        if end == -1:
            raise MalformedXmlError(f"Unterminated tag in element content at offset {start}")

        header = span[start + 1:end]
        if header.startswith("/"):
            raise MalformedXmlError(
                f"Unexpected closing tag <{header}> in element content",
                tag_name=header[1:],
            )
        name = tag_name_of(header)
        if not name:
            raise MalformedXmlError(f"Empty tag name in element content at offset {start}")
        tags.append(ChildTag(name, start))

        if header.endswith("/"):
            cursor = end + 1
        else:
            close_pos = _require_matching_close(span, name, end + 1)
            cursor = close_pos + len(name) + 3
    return tags


def _first_whitespace(text: str) -> int:
    for index, char in enumerate(text):
        if char.isspace():
            return index
    return -1


def _find_quote(text: str, start: int) -> int:
    positions = [pos for pos in (text.find(quote, start) for quote in _QUOTES) if pos != -1]
    return min(positions) if positions else -1


def _find_open_tag(buffer: str, tag_name: str, from_pos: int) -> int:
    marker = "<" + tag_name
    pos = buffer.find(marker, from_pos)
    while pos != -1:
        after = pos + len(marker)
        if after >= len(buffer) or buffer[after] in _TAG_NAME_TERMINATORS:
            return pos
        pos = buffer.find(marker, pos + 1)
    return -1


def _open_tag_end(buffer: str, tag_name: str, start: int) -> int:
    end = buffer.find(">", start)
    if end == -1:
        raise MalformedXmlError(f"Unterminated open tag <{tag_name}", tag_name=tag_name)
    return end


def _find_matching_close(buffer: str, tag_name: str, from_pos: int) -> int:
    """Offset of the close tag pairing with an open tag that ended before ``from_pos``.

    Same-name elements opened in between are counted so that nesting pairs up.
    """
    close_tag = f"</{tag_name}>"
    depth = 0
    cursor = from_pos
    while True:
        close_pos = buffer.find(close_tag, cursor)
        if close_pos == -1:
            return -1
        open_pos = _find_open_tag(buffer, tag_name, cursor)
        if open_pos != -1 and open_pos < close_pos:
            open_end = buffer.find(">", open_pos)
            if buffer[open_end - 1] != "/":
                depth += 1
            cursor = open_end + 1
            continue
        if depth == 0:
            return close_pos
        depth -= 1
        cursor = close_pos + len(close_tag)


def _require_matching_close(buffer: str, tag_name: str, from_pos: int) -> int:
    close_pos = _find_matching_close(buffer, tag_name, from_pos)
    if close_pos == -1:
        raise MalformedXmlError(f"Missing closing tag </{tag_name}>", tag_name=tag_name)
    return close_pos
