"""
Exceptions raised by the benchmark harness.

Failures raised by the timed callable itself are never wrapped; they
propagate to the caller unchanged.
"""


class BenchmarkError(Exception):
    """Base class for harness errors."""


class ConfigurationError(BenchmarkError, ValueError):
    """Invalid benchmark configuration (e.g. a non-positive sample size)."""


class TimerUnavailableError(BenchmarkError, RuntimeError):
    """The host clock cannot resolve millisecond intervals."""
