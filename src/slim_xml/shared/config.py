"""Configuration classes for slim XML parsing and serialization.

This module provides configuration objects for the parser, the serializer and
file I/O, grouped under an immutable :class:`DocumentConfig`.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional

XML_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="yes" ?>\n'

_SECTIONS = ("parse", "serialization", "io")
_LEADING_CONTENT_POLICIES = ("reject", "skip")
_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class OutputMode(Enum):
    """Serialization layout options."""

    COMPACT = auto()    # No inserted whitespace
    INDENTED = auto()   # One element per line, indented per depth


@dataclass
class ParseConfig:
    """Configuration for building trees from text."""

    # What to do with non-whitespace text before the root open tag
    leading_content: str = "reject"
    max_depth: int = 500
    strip_declaration: bool = True

    def __post_init__(self) -> None:
        """Validate parse configuration."""
        if self.leading_content not in _LEADING_CONTENT_POLICIES:
            raise ValueError(
                f"leading_content must be one of {list(_LEADING_CONTENT_POLICIES)}"
            )
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class SerializationConfig:
    """Configuration for writing trees back to text."""

    output_mode: OutputMode = OutputMode.COMPACT
    indent_unit: str = "  "
    include_declaration: bool = True
    declaration: str = XML_HEADER

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        if self.indent_unit.strip():
            raise ValueError("indent_unit must contain only whitespace")
        if self.include_declaration and not self.declaration.startswith("<?"):
            raise ValueError("declaration must start with '<?'")


@dataclass
class IOConfig:
    """Configuration for file loading and saving."""

    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate I/O configuration."""
        if not self.encoding:
            raise ValueError("encoding cannot be empty")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class DocumentConfig:
    """Complete configuration for documents.

    Immutable; use :meth:`override` to derive modified copies.
    """

    parse: ParseConfig = field(default_factory=ParseConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    io: IOConfig = field(default_factory=IOConfig)

    logging_level: str = "WARNING"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.parse.__post_init__()
            self.serialization.__post_init__()
            self.io.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.logging_level not in _LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(_LOGGING_LEVELS)}",
                field_name="logging_level",
            )

    @property
    def output_mode(self) -> OutputMode:
        """Shortcut for the configured serialization layout."""
        return self.serialization.output_mode

    def override(self, **kwargs: Any) -> "DocumentConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``section__field``

        Returns:
            New DocumentConfig instance with overrides applied

        Example:
            >>> config = DocumentConfig()
            >>> pretty = config.override(serialization__output_mode=OutputMode.INDENTED)
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                if section not in _SECTIONS:
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}",
                        field_name=key,
                        suggestions=list(_SECTIONS),
                    )
                nested_overrides.setdefault(section, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for section, values in nested_overrides.items():
                new_fields[section] = replace(getattr(self, section), **values)
            new_fields.update(top_level)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored; missing keys keep their defaults.
        """
        serialization_data = dict(data.get("serialization", {}))
        if isinstance(serialization_data.get("output_mode"), str):
            mode_name = serialization_data["output_mode"].upper()
            try:
                serialization_data["output_mode"] = OutputMode[mode_name]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown output mode: {mode_name}",
                    field_name="serialization.output_mode",
                    suggestions=[mode.name for mode in OutputMode],
                ) from e

        try:
            return cls(
                parse=_build_section(ParseConfig, data.get("parse", {})),
                serialization=_build_section(SerializationConfig, serialization_data),
                io=_build_section(IOConfig, data.get("io", {})),
                logging_level=data.get("logging_level", "WARNING"),
                name=data.get("name"),
            )
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "DocumentConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def compact(cls) -> "DocumentConfig":
        """Preset producing single-line output."""
        return cls(name="compact")

    @classmethod
    def pretty(cls) -> "DocumentConfig":
        """Preset producing indented output."""
        return cls(
            serialization=SerializationConfig(output_mode=OutputMode.INDENTED),
            name="pretty",
        )


def _build_section(section_class: type, values: Dict[str, Any]) -> Any:
    known = section_class.__dataclass_fields__
    return section_class(**{key: value for key, value in values.items() if key in known})
