"""Exception taxonomy for slim XML parsing and tree manipulation.

Every failure raised by the package derives from :class:`XmlError` and carries
an :class:`ErrorKind`, so callers can distinguish malformed input, I/O failures
and contract violations without inspecting messages.
"""

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    """Categories of failure."""

    MALFORMED_SYNTAX = auto()     # Input text cannot be parsed
    IO = auto()                   # File could not be read or written
    INVARIANT_VIOLATION = auto()  # Caller broke a tree contract


class XmlError(Exception):
    """Base exception for all slim XML errors."""

    kind: ErrorKind = ErrorKind.MALFORMED_SYNTAX


class MalformedXmlError(XmlError, ValueError):
    """Raised when the input buffer is not parseable.

    Args:
        message: Human readable description
        tag_name: Name of the tag being parsed when the error was found
    """

    kind = ErrorKind.MALFORMED_SYNTAX

    def __init__(self, message: str, tag_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.tag_name = tag_name


class InvariantViolationError(XmlError):
    """Raised when a mutation would break the element tree invariants."""

    kind = ErrorKind.INVARIANT_VIOLATION


class XmlIOError(XmlError, OSError):
    """Raised when a document cannot be loaded from or saved to a file.

    Args:
        message: Human readable description including the system error text
        path: File path involved in the failed operation
        reason: Underlying system error description
    """

    kind = ErrorKind.IO

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason
