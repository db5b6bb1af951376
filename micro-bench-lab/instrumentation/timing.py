"""
Timing utilities for micro-benchmarking.

Provides:
- Timer / timed: monotonic wall-clock measurement of a block of calls
- SampleResult: the per-call mean latency observed by one sample
- SampleCollector: ordering and reduction of samples to summary statistics
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class MedianPolicy(Enum):
    """How the median of a run is selected."""

    # Element at index len // 2 of the finish-ordered samples
    FINISH_ORDER = "finish_order"
    # Conventional median of the value-sorted deltas
    SORTED = "sorted"


@dataclass(frozen=True)
class SampleResult:
    """Outcome of one sample: a block of back-to-back calls."""

    mean_delta_ms: float
    end: float  # perf_counter timestamp, seconds; ordering only

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mean_delta_ms": self.mean_delta_ms,
            "end": self.end,
        }


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer"):
        self.name = name
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = time.perf_counter()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = time.perf_counter()
        self._running = False
        return self

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        end = self.end_time if not self._running else time.perf_counter()
        return (end - self.start_time) * 1000

    def to_sample(self, iterations: int) -> SampleResult:
        """Convert a stopped timer to the mean latency of `iterations` calls."""
        return SampleResult(
            mean_delta_ms=self.elapsed_ms / iterations,
            end=self.end_time,
        )


@contextmanager
def timed(name: str = "operation") -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    Usage:
        with timed("my_operation") as timer:
            # do work
        print(f"Elapsed: {timer.elapsed_ms}ms")
    """
    timer = Timer(name).start()
    try:
        yield timer
    finally:
        timer.stop()


def clock_resolution_ms() -> float:
    """Resolution of the clock used by Timer, in milliseconds."""
    return time.get_clock_info("perf_counter").resolution * 1000


class SampleCollector:
    """Collects samples from one run and reduces them to statistics."""

    def __init__(self):
        self.samples: list[SampleResult] = []

    def add(self, sample: SampleResult) -> None:
        """Add a sample."""
        self.samples.append(sample)

    def clear(self) -> None:
        """Clear all collected samples."""
        self.samples.clear()

    @property
    def count(self) -> int:
        """Number of collected samples."""
        return len(self.samples)

    def ordered(self) -> list[SampleResult]:
        """Samples sorted by finish time (stable for equal timestamps)."""
        return sorted(self.samples, key=lambda s: s.end)

    def deltas_ms(self) -> list[float]:
        """Per-call mean latencies in finish order."""
        return [s.mean_delta_ms for s in self.ordered()]

    def percentile(self, values: list[float], p: float) -> float:
        """Calculate percentile of a list of values."""
        if not values:
            return 0.0
        sorted_values = sorted(values)
        k = (len(sorted_values) - 1) * (p / 100)
        f = int(k)
        c = f + 1 if f + 1 < len(sorted_values) else f
        return sorted_values[f] + (k - f) * (sorted_values[c] - sorted_values[f])

    def median(self, policy: MedianPolicy = MedianPolicy.FINISH_ORDER) -> float:
        """Median latency under the given selection policy.

        FINISH_ORDER reads index len // 2 from the finish-ordered samples,
        so for even counts it is the upper-middle sample by completion
        order rather than the midpoint of the sorted values.
        """
        if not self.samples:
            return 0.0
        if policy is MedianPolicy.SORTED:
            return self.percentile(self.deltas_ms(), 50)
        ordered = self.ordered()
        return ordered[len(ordered) // 2].mean_delta_ms

    def stats(self, policy: MedianPolicy = MedianPolicy.FINISH_ORDER) -> dict:
        """Calculate min/max/mean/median over the collected samples."""
        deltas = self.deltas_ms()
        if not deltas:
            return {"count": 0, "min_ms": 0.0, "max_ms": 0.0, "mean_ms": 0.0, "median_ms": 0.0}

        low, high = min(deltas), max(deltas)
        # Float summation can land a hair outside the observed range
        mean = min(max(sum(deltas) / len(deltas), low), high)

        return {
            "count": len(deltas),
            "min_ms": low,
            "max_ms": high,
            "mean_ms": mean,
            "median_ms": self.median(policy),
        }
