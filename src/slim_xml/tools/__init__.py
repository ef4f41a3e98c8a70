"""Developer tools for slim XML documents."""

from .profiling import PerformanceProfiler, PhasePerformance, ProfilingSession

__all__ = [
    "PerformanceProfiler",
    "PhasePerformance",
    "ProfilingSession",
]
