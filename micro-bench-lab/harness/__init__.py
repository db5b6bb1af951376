"""
Micro-benchmark harness.

Provides the benchmark runner and result reporting.
"""

from .errors import (
    BenchmarkError,
    ConfigurationError,
    TimerUnavailableError,
)

from .runner import (
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkRunner,
    BenchmarkSummary,
    ScenarioRunner,
    bench,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    JSONReporter,
)

__all__ = [
    # Errors
    "BenchmarkError",
    "ConfigurationError",
    "TimerUnavailableError",
    # Runner
    "BenchmarkConfig",
    "BenchmarkResult",
    "BenchmarkRunner",
    "BenchmarkSummary",
    "ScenarioRunner",
    "bench",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "JSONReporter",
]
