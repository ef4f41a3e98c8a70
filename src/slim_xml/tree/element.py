"""Element tree node for slim XML documents.

An :class:`XmlElement` holds a name, an ordered attribute list and either a
scalar text value or an ordered list of child elements, never both. Children
are owned by exactly one parent: appending an element that already belongs to
a tree, or that is the root of a document, is rejected.

State is only changed through the mutation methods. ``children`` and
``attributes`` return copies, so editing those lists leaves the element
untouched.

References returned by :meth:`XmlElement.find_first_child` and
:meth:`XmlElement.find_all_children` point at live children. They stay valid
only until the next structural mutation (``append_child`` or ``remove_child``)
of that parent and must not be kept across one.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from slim_xml.shared.errors import InvariantViolationError
from slim_xml.tree.serializer import to_compact_string, to_indented_string

# Characters that would end a name early when the tree is written back out
_NAME_BREAKING_CHARACTERS = frozenset("=<>/")


class Attribute(NamedTuple):
    """A single ``name='value'`` pair."""

    name: str
    value: str


def _check_name(name: str, kind: str, context: str = "") -> None:
    if not name:
        raise InvariantViolationError(f"{kind} name cannot be empty{context}")
    if name[0] in "?!" or any(
        char.isspace() or char in _NAME_BREAKING_CHARACTERS for char in name
    ):
        raise InvariantViolationError(
            f"{kind} name {name!r} contains characters not allowed in a tag{context}"
        )


@dataclass(init=False, repr=False)
class XmlElement:
    """Represents a single XML element in the document tree.

    Equality is structural: two elements are equal when their names, values,
    attributes and children compare equal, recursively. Tree ownership is not
    part of the comparison.

    Args:
        name: Tag name; must not be empty or contain whitespace, ``=``, ``<``,
            ``>`` or ``/``
        value: Initial scalar value
        attributes: Initial ``(name, value)`` pairs, in order
        children: Initial child elements; ownership is taken

    Examples:
        >>> item = XmlElement("item", "a")
        >>> item.set_attribute("id", "1")
        >>> root = XmlElement("root")
        >>> root.append_child(item)
        >>> root.to_string()
        "<root><item id='1'>a</item></root>"
    """

    _name: str
    _value: str
    _attributes: List[Attribute]
    _children: List["XmlElement"]
    _parent: Optional["XmlElement"] = field(default=None, compare=False)
    _document_root: bool = field(default=False, compare=False)

    def __init__(
        self,
        name: str,
        value: str = "",
        attributes: Iterable[Tuple[str, str]] = (),
        children: Iterable["XmlElement"] = (),
    ) -> None:
        _check_name(name, "Element")
        initial_children = list(children)
        if value and initial_children:
            raise InvariantViolationError(
                f"Element {name} may hold either a value or child elements, not both"
            )

        self._name = name
        self._value = value
        self._attributes = []
        self._children = []
        self._parent = None
        self._document_root = False

        for attribute_name, attribute_value in attributes:
            self.set_attribute(attribute_name, attribute_value)
        for child in initial_children:
            self.append_child(child)

    def __repr__(self) -> str:
        return (
            f"XmlElement(name={self._name!r}, value={self._value!r}, "
            f"attributes={self._attributes!r}, children={self._children!r})"
        )

    @property
    def name(self) -> str:
        """Tag name."""
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self.set_name(name)

    @property
    def value(self) -> str:
        """Scalar text value; assignment goes through :meth:`set_value`."""
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self.set_value(value)

    @property
    def attributes(self) -> List[Attribute]:
        """Copy of the attribute list, in insertion order."""
        return list(self._attributes)

    @property
    def children(self) -> List["XmlElement"]:
        """Copy of the child list, in document order."""
        return list(self._children)

    @property
    def parent(self) -> Optional["XmlElement"]:
        """Element owning this one, or None for a detached or root element."""
        return self._parent

    @property
    def has_children(self) -> bool:
        """Check if this element holds child elements."""
        return len(self._children) > 0

    @property
    def is_empty(self) -> bool:
        """Check if this element has neither value nor children."""
        return not self._value and not self._children

    def set_name(self, name: str) -> None:
        """Rename the element."""
        _check_name(name, "Element")
        self._name = name

    def set_value(self, value: str) -> None:
        """Set the scalar text value.

        Raises:
            InvariantViolationError: If the element already has children
        """
        if self._children:
            raise InvariantViolationError(
                f"Element {self._name} has child elements and cannot hold a value"
            )
        self._value = value

    def set_attribute(self, name: str, value: str) -> None:
        """Append an attribute; duplicates are kept in call order.

        Raises:
            InvariantViolationError: If the name is empty or malformed, or the
                value is empty
        """
        _check_name(name, "Attribute", f" (element {self._name})")
        if not value:
            raise InvariantViolationError(
                f"Attribute value cannot be empty (attribute {name} of element {self._name})"
            )
        self._attributes.append(Attribute(name, value))

    add_attribute = set_attribute

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute with the given name."""
        for attribute in self._attributes:
            if attribute.name == name:
                return attribute.value
        return default

    def append_child(self, child: "XmlElement") -> None:
        """Append a child element, transferring ownership to this element.

        Raises:
            TypeError: If child is not an XmlElement
            InvariantViolationError: If this element holds a value, if the child
                already has a parent or is the root of a document, or if the
                append would create a cycle
        """
        if not isinstance(child, XmlElement):
            raise TypeError("Child must be an XmlElement instance")
        if self._value:
            raise InvariantViolationError(
                f"Element {self._name} holds a value and cannot have child elements"
            )
        if child._parent is not None:
            raise InvariantViolationError(
                f"Element {child._name} already belongs to element {child._parent._name}"
            )
        if child._document_root:
            raise InvariantViolationError(
                f"Element {child._name} is the root of a document"
            )

        node: Optional[XmlElement] = self
        while node is not None:
            if node is child:
                raise InvariantViolationError(
                    f"Element {child._name} cannot be appended to itself or a descendant"
                )
            node = node._parent

        child._parent = self
        self._children.append(child)

    def remove_child(self, child: "XmlElement") -> bool:
        """Remove a child element (matched by identity) and release ownership."""
        for index, existing in enumerate(self._children):
            if existing is child:
                del self._children[index]
                child._parent = None
                return True
        return False

    def find_first_child(self, name: str) -> Optional["XmlElement"]:
        """Find first direct child with matching name."""
        for child in self._children:
            if child._name == name:
                return child
        return None

    find = find_first_child

    def find_all_children(self, name: str) -> List["XmlElement"]:
        """Find all direct children with matching name, in document order."""
        return [child for child in self._children if child._name == name]

    equal_range = find_all_children

    def iter_elements(self) -> List["XmlElement"]:
        """List this element and all descendants in document order."""
        elements = [self]
        for child in self._children:
            elements.extend(child.iter_elements())
        return elements

    def get_depth(self) -> int:
        """Get depth of this element in its tree (root = 0)."""
        if self._parent is None:
            return 0
        return self._parent.get_depth() + 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {"name": self._name}
        if self._attributes:
            result["attributes"] = [list(attribute) for attribute in self._attributes]
        if self._value:
            result["value"] = self._value
        if self._children:
            result["children"] = [child.to_dict() for child in self._children]
        return result

    def to_string(self) -> str:
        """Serialize the subtree without any inserted whitespace."""
        return to_compact_string(self)

    def to_pretty_string(self, level: int = 0, indent_unit: str = "  ") -> str:
        """Serialize the subtree one element per line, indented by depth."""
        return to_indented_string(self, level, indent_unit)

    @classmethod
    def from_string(cls, xml_string: str) -> "XmlElement":
        """Build an element tree from the text of a single element.

        Raises:
            MalformedXmlError: If the text cannot be parsed
        """
        from slim_xml.tree.builder import XmlTreeBuilder

        return XmlTreeBuilder().build(xml_string)
