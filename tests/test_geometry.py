"""Tests for the geometry workloads and their benchmark suite."""

from __future__ import annotations

import numpy as np
import pytest
from benchmarks.geometry import (
    GEOMETRY_BENCHMARKS,
    GRID_COMPARISON_DEFAULTS,
    GeometryBenchmarkSuite,
    left_product,
    make_left_product,
    point_grid,
    scale_matrix,
)
from harness.runner import BenchmarkRunner
from instrumentation.timing import MedianPolicy

from tests.helpers import CaptureSink


def test_point_grid_is_row_major() -> None:
    points = point_grid(4)

    assert points.shape == (16, 2)
    assert points[:5].tolist() == [[0, 0], [0, 1], [0, 2], [0, 3], [1, 0]]
    assert points[-1].tolist() == [3, 3]


def test_scale_matrix() -> None:
    assert scale_matrix(1, 2).tolist() == [[1, 0], [0, 2]]


def test_left_product_scales_each_point() -> None:
    result = left_product(scale_matrix(1, 2), point_grid(4))

    expected = np.array([[i, 2 * j] for i in range(4) for j in range(4)])
    np.testing.assert_array_equal(result, expected)


def test_left_product_applies_full_matrix() -> None:
    mat = np.array([[0, -1], [1, 0]])
    points = np.array([[1, 0], [0, 1]])

    assert left_product(mat, points).tolist() == [[0, 1], [-1, 0]]


def test_factories_return_zero_argument_callables() -> None:
    fn = make_left_product(8)

    assert fn() is None


class TestGeometryBenchmarkSuite:
    def test_build_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown geometry benchmark"):
            GeometryBenchmarkSuite().build("rotate")

    @pytest.mark.asyncio
    async def test_run_all(self) -> None:
        runner = BenchmarkRunner(verbose=False, sink=CaptureSink())
        suite = GeometryBenchmarkSuite(grid_size=4, runner=runner)

        results = await suite.run_all({"sample_size": 2, "iterations": 2})

        assert [r.name for r in results] == list(GEOMETRY_BENCHMARKS)
        assert all(len(r.samples) == 2 for r in results)

    @pytest.mark.asyncio
    async def test_grid_size_comparison(self) -> None:
        runner = BenchmarkRunner(verbose=False, sink=CaptureSink())
        suite = GeometryBenchmarkSuite(runner=runner)

        results = await suite.run_grid_size_comparison(
            sizes=(2, 4), config={"sample_size": 1, "iterations": 1}
        )

        assert [r.name for r in results] == [
            "left_product_2x2",
            "point_loop_2x2",
            "left_product_4x4",
            "point_loop_4x4",
        ]

    @pytest.mark.asyncio
    async def test_partial_overrides_keep_comparison_defaults(self) -> None:
        runner = BenchmarkRunner(verbose=False, sink=CaptureSink())
        suite = GeometryBenchmarkSuite(runner=runner)

        results = await suite.run_grid_size_comparison(
            sizes=(2,), config={"median_policy": "sorted", "iterations": None}
        )

        for result in results:
            assert result.config.sample_size == GRID_COMPARISON_DEFAULTS["sample_size"]
            assert result.config.iterations == GRID_COMPARISON_DEFAULTS["iterations"]
            assert result.config.median_policy is MedianPolicy.SORTED
