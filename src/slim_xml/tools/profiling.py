"""Performance profiling tools for slim XML documents.

Measures wall time and resident memory of the parse and serialize phases.
Memory is sampled from the current process with psutil.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psutil

from slim_xml.shared import DocumentConfig, PerformanceMetrics, get_logger
from slim_xml.tree import XmlDocument


@dataclass
class PhasePerformance:
    """Performance metrics for one profiled phase."""

    phase_name: str
    start_time: float
    end_time: float = 0.0
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    characters: int = 0

    @property
    def duration_ms(self) -> float:
        """Processing duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Memory usage change in bytes."""
        return self.memory_end - self.memory_start

    def to_metrics(self) -> PerformanceMetrics:
        """Convert to the shared metrics type."""
        return PerformanceMetrics(
            processing_time_ms=self.duration_ms,
            memory_used_bytes=max(self.memory_delta, 0),
            characters_processed=self.characters,
        )


@dataclass
class ProfilingSession:
    """Container for one profiled operation and its phases."""

    session_id: str
    phases: List[PhasePerformance] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        """Sum of all phase durations in milliseconds."""
        return sum(phase.duration_ms for phase in self.phases)

    def phase(self, name: str) -> Optional[PhasePerformance]:
        """Find a phase by name."""
        for phase in self.phases:
            if phase.phase_name == name:
                return phase
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to dictionary representation."""
        return {
            "session_id": self.session_id,
            "total_duration_ms": self.total_duration_ms,
            "phases": {
                phase.phase_name: phase.to_metrics().to_dict() for phase in self.phases
            },
            "metadata": dict(self.metadata),
        }


class PerformanceProfiler:
    """Profiler for parse and serialize operations.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> session = profiler.profile_parse("<root><item>a</item></root>")
        >>> session.phase("parse").characters
        27
    """

    def __init__(self, enable_memory_tracking: bool = True) -> None:
        """Initialize performance profiler.

        Args:
            enable_memory_tracking: Whether to sample process memory around phases
        """
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "performance_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def _memory(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def _start_phase(self, name: str, characters: int) -> PhasePerformance:
        return PhasePerformance(
            phase_name=name,
            start_time=time.perf_counter(),
            memory_start=self._memory(),
            characters=characters,
        )

    def _end_phase(self, phase: PhasePerformance) -> None:
        phase.end_time = time.perf_counter()
        phase.memory_end = self._memory()

    def profile_parse(
        self,
        xml_data: str,
        config: Optional[DocumentConfig] = None,
        session_id: Optional[str] = None,
    ) -> ProfilingSession:
        """Parse ``xml_data`` and serialize the result, timing both phases.

        Raises:
            MalformedXmlError: If the content cannot be parsed
        """
        session = ProfilingSession(session_id or f"session_{len(self.sessions) + 1}")

        phase = self._start_phase("parse", len(xml_data))
        document = XmlDocument.from_string(xml_data, config)
        self._end_phase(phase)
        session.phases.append(phase)

        session.phases.append(self._profile_serialize_phase(document))
        session.metadata["element_count"] = document.statistics().element_count
        self._finish(session)
        return session

    def profile_serialize(
        self, document: XmlDocument, session_id: Optional[str] = None
    ) -> ProfilingSession:
        """Serialize ``document``, timing the operation."""
        session = ProfilingSession(session_id or f"session_{len(self.sessions) + 1}")
        session.phases.append(self._profile_serialize_phase(document))
        self._finish(session)
        return session

    def _profile_serialize_phase(self, document: XmlDocument) -> PhasePerformance:
        phase = self._start_phase("serialize", 0)
        output = document.to_string()
        self._end_phase(phase)
        phase.characters = len(output)
        return phase

    def _finish(self, session: ProfilingSession) -> None:
        self.sessions.append(session)
        self.logger.info(
            "Profiling session finished",
            extra={
                "session_id": session.session_id,
                "duration_ms": session.total_duration_ms,
                "phase_count": len(session.phases),
                "memory_tracking": self.enable_memory_tracking,
            }
        )

    def clear_sessions(self) -> None:
        """Forget all recorded sessions."""
        self.sessions.clear()
