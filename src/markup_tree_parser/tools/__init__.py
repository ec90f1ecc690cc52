"""Developer tools for Markup Tree Parser."""

from .profiling import (
    LayerPerformance,
    PerformanceProfiler,
    PerformanceReport,
    ProfilingSession,
)

__all__ = [
    "LayerPerformance",
    "PerformanceProfiler",
    "PerformanceReport",
    "ProfilingSession",
]
