"""Tests for performance profiling tools."""

import pytest

from slim_xml.shared import MalformedXmlError
from slim_xml.tools import PerformanceProfiler, PhasePerformance, ProfilingSession
from slim_xml.tree import XmlDocument

SAMPLE = "<root><item>a</item></root>"


class TestPhasePerformance:
    """Test PhasePerformance calculations."""

    def test_duration_and_memory(self):
        """Test derived values."""
        phase = PhasePerformance(
            phase_name="parse",
            start_time=1.0,
            end_time=1.5,
            memory_start=1000,
            memory_end=1500,
            characters=10,
        )

        assert phase.duration_ms == 500.0
        assert phase.memory_delta == 500

    def test_to_metrics_clamps_negative_memory(self):
        """Test freed memory is reported as zero usage."""
        phase = PhasePerformance("parse", 0.0, 0.1, memory_start=2000, memory_end=1000)

        assert phase.to_metrics().memory_used_bytes == 0


class TestProfilingSession:
    """Test ProfilingSession."""

    def test_total_and_lookup(self):
        """Test phase totals and lookup by name."""
        session = ProfilingSession("s1")
        session.phases.append(PhasePerformance("parse", 0.0, 0.002))
        session.phases.append(PhasePerformance("serialize", 0.0, 0.001))

        assert session.total_duration_ms == pytest.approx(3.0)
        assert session.phase("serialize").phase_name == "serialize"
        assert session.phase("missing") is None

    def test_to_dict(self):
        """Test dictionary conversion."""
        session = ProfilingSession("s1", metadata={"element_count": 2})
        session.phases.append(PhasePerformance("parse", 0.0, 0.001, characters=5))
        data = session.to_dict()

        assert data["session_id"] == "s1"
        assert data["phases"]["parse"]["characters_processed"] == 5
        assert data["metadata"] == {"element_count": 2}


class TestPerformanceProfiler:
    """Test PerformanceProfiler."""

    def test_profile_parse(self):
        """Test both phases are recorded."""
        profiler = PerformanceProfiler()
        session = profiler.profile_parse(SAMPLE)

        assert [phase.phase_name for phase in session.phases] == ["parse", "serialize"]
        assert session.phase("parse").characters == 27
        assert session.phase("serialize").characters > 27
        assert session.metadata["element_count"] == 2
        assert session.total_duration_ms >= 0
        assert profiler.sessions == [session]

    def test_profile_serialize(self):
        """Test serialize-only profiling."""
        profiler = PerformanceProfiler(enable_memory_tracking=False)
        session = profiler.profile_serialize(XmlDocument.from_string(SAMPLE), "custom")

        assert session.session_id == "custom"
        assert session.phase("serialize").memory_delta == 0

    def test_session_ids_and_clear(self):
        """Test generated session IDs and clearing."""
        profiler = PerformanceProfiler(enable_memory_tracking=False)
        first = profiler.profile_parse(SAMPLE)
        second = profiler.profile_parse(SAMPLE)

        assert (first.session_id, second.session_id) == ("session_1", "session_2")
        profiler.clear_sessions()
        assert profiler.sessions == []

    def test_profile_parse_malformed(self):
        """Test parse failures propagate."""
        profiler = PerformanceProfiler(enable_memory_tracking=False)

        with pytest.raises(MalformedXmlError):
            profiler.profile_parse("<root>")
        assert profiler.sessions == []
