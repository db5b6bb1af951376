"""Tests for the timer and sample reduction in instrumentation.timing."""

from __future__ import annotations

import time

import pytest
from instrumentation.timing import (
    MedianPolicy,
    SampleCollector,
    SampleResult,
    Timer,
    clock_resolution_ms,
    timed,
)


def _collector(*pairs: tuple[float, float]) -> SampleCollector:
    """Build a collector from (end, mean_delta_ms) pairs, added as given."""
    collector = SampleCollector()
    for end, delta in pairs:
        collector.add(SampleResult(mean_delta_ms=delta, end=end))
    return collector


class TestTimer:
    def test_elapsed_is_measured_in_milliseconds(self) -> None:
        timer = Timer("sleep").start()
        time.sleep(0.01)
        timer.stop()

        assert 5.0 <= timer.elapsed_ms < 1000.0

    def test_timed_stops_on_exit(self) -> None:
        with timed("block") as timer:
            pass

        frozen = timer.elapsed_ms
        time.sleep(0.005)
        assert timer.elapsed_ms == frozen
        assert timer.end_time >= timer.start_time

    def test_timed_stops_when_block_raises(self) -> None:
        with pytest.raises(RuntimeError):
            with timed("boom") as timer:
                raise RuntimeError("boom")

        assert timer.end_time >= timer.start_time
        assert timer.end_time > 0

    def test_to_sample_divides_by_iterations(self) -> None:
        timer = Timer()
        timer.start_time, timer.end_time = 10.0, 10.5

        sample = timer.to_sample(iterations=100)

        assert sample.mean_delta_ms == pytest.approx(5.0)
        assert sample.end == 10.5

    def test_clock_resolution_is_positive(self) -> None:
        assert clock_resolution_ms() > 0


class TestSampleCollector:
    def test_ordered_sorts_by_finish_time(self) -> None:
        collector = _collector((3.0, 30.0), (1.0, 10.0), (2.0, 20.0))

        assert [s.end for s in collector.ordered()] == [1.0, 2.0, 3.0]
        assert collector.deltas_ms() == [10.0, 20.0, 30.0]

    def test_ordering_is_stable_for_equal_timestamps(self) -> None:
        collector = _collector((1.0, 7.0), (1.0, 3.0), (0.5, 9.0))

        assert collector.deltas_ms() == [9.0, 7.0, 3.0]

    def test_finish_order_median_reads_upper_middle_by_completion(self) -> None:
        collector = _collector((1.0, 5.0), (2.0, 1.0), (3.0, 4.0), (4.0, 2.0))

        assert collector.median(MedianPolicy.FINISH_ORDER) == 4.0

    def test_finish_order_median_ignores_value_order(self) -> None:
        # Largest value finished in the middle slot
        collector = _collector((1.0, 1.0), (2.0, 100.0), (3.0, 2.0))

        assert collector.median(MedianPolicy.FINISH_ORDER) == 100.0
        assert collector.median(MedianPolicy.SORTED) == 2.0

    def test_sorted_median_averages_middle_pair(self) -> None:
        collector = _collector((1.0, 5.0), (2.0, 1.0), (3.0, 4.0), (4.0, 2.0))

        assert collector.median(MedianPolicy.SORTED) == pytest.approx(3.0)

    def test_stats(self) -> None:
        collector = _collector((2.0, 4.0), (1.0, 2.0), (3.0, 6.0))

        stats = collector.stats()

        assert stats == {
            "count": 3,
            "min_ms": 2.0,
            "max_ms": 6.0,
            "mean_ms": pytest.approx(4.0),
            "median_ms": 4.0,
        }

    def test_mean_of_identical_values_stays_in_range(self) -> None:
        collector = _collector((1.0, 0.1), (2.0, 0.1), (3.0, 0.1))

        stats = collector.stats()

        assert stats["min_ms"] <= stats["mean_ms"] <= stats["max_ms"]
        assert stats["mean_ms"] == 0.1

    def test_empty_collector(self) -> None:
        collector = SampleCollector()

        assert collector.count == 0
        assert collector.stats()["count"] == 0
        assert collector.median() == 0.0

    def test_clear(self) -> None:
        collector = _collector((1.0, 1.0))
        collector.clear()

        assert collector.count == 0

    @pytest.mark.parametrize(
        ("p", "expected"),
        [(0, 1.0), (50, 2.5), (100, 4.0)],
    )
    def test_percentile_interpolates(self, p: float, expected: float) -> None:
        assert SampleCollector().percentile([4.0, 1.0, 3.0, 2.0], p) == pytest.approx(expected)
