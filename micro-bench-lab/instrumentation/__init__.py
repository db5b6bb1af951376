"""
Instrumentation module for micro-benchmarking.

Provides timing utilities and sample aggregation.
"""

from .timing import (
    MedianPolicy,
    SampleCollector,
    SampleResult,
    Timer,
    clock_resolution_ms,
    timed,
)

__all__ = [
    "MedianPolicy",
    "SampleCollector",
    "SampleResult",
    "Timer",
    "clock_resolution_ms",
    "timed",
]
