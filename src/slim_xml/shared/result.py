"""Statistics and performance result objects.

Plain dataclasses describing a parsed tree and the cost of producing it; used by
the profiling tools and the command line ``stats`` command.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class DocumentStatistics:
    """Shape statistics for an element tree."""

    element_count: int = 0
    attribute_count: int = 0
    max_depth: int = 0
    value_elements: int = 0
    empty_elements: int = 0

    @property
    def parent_elements(self) -> int:
        """Number of elements that hold children."""
        return self.element_count - self.value_elements - self.empty_elements

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary representation."""
        result = asdict(self)
        result["parent_elements"] = self.parent_elements
        return result


@dataclass
class PerformanceMetrics:
    """Performance metrics for parse and serialize operations."""

    processing_time_ms: float = 0.0
    memory_used_bytes: int = 0
    characters_processed: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def memory_per_character(self) -> float:
        """Calculate memory usage per character."""
        if self.characters_processed == 0:
            return 0.0
        return self.memory_used_bytes / self.characters_processed

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        result = asdict(self)
        result["characters_per_second"] = self.characters_per_second
        return result
