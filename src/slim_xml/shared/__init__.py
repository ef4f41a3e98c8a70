"""Shared utilities for slim XML parsing.

This module provides the error taxonomy, configuration objects, result types
and logging helpers used across the scanner, tree and API layers.
"""

from .config import (
    XML_HEADER,
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    IOConfig,
    OutputMode,
    ParseConfig,
    SerializationConfig,
)
from .errors import (
    ErrorKind,
    InvariantViolationError,
    MalformedXmlError,
    XmlError,
    XmlIOError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DocumentStatistics,
    PerformanceMetrics,
)

__all__ = [
    "XML_HEADER",
    "ConfigError",
    "ConfigValidationError",
    "DocumentConfig",
    "IOConfig",
    "OutputMode",
    "ParseConfig",
    "SerializationConfig",
    "ErrorKind",
    "InvariantViolationError",
    "MalformedXmlError",
    "XmlError",
    "XmlIOError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DocumentStatistics",
    "PerformanceMetrics",
]
