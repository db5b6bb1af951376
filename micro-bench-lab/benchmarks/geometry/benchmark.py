"""
Geometry benchmarks - point grids and 2x2 matrix transforms.

Mirrors the demo page workload: build a grid of integer points, build
a scaling matrix diag(1, 2), and apply it to every point with a left
product. Each `make_*` factory does its setup once and returns the
zero-argument callable that gets timed.
"""

from typing import Callable, Optional

import numpy as np

from harness.runner import BenchmarkConfig, BenchmarkResult, BenchmarkRunner, ConfigLike


def point_grid(size: int = 4) -> np.ndarray:
    """Integer points (i, j) for 0 <= i, j < size, row-major, shape (size**2, 2)."""
    i, j = np.meshgrid(np.arange(size), np.arange(size), indexing="ij")
    return np.column_stack([i.ravel(), j.ravel()]).astype(np.int64)


def scale_matrix(sx: int = 1, sy: int = 2) -> np.ndarray:
    """2x2 integer matrix with (sx, sy) on the diagonal."""
    mat = np.zeros((2, 2), dtype=np.int64)
    mat[0, 0] = sx
    mat[1, 1] = sy
    return mat


def left_product(mat: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Apply `mat` to each row of `points` (mat @ p for every p)."""
    return points @ mat.T


def make_point_grid(grid_size: int = 4) -> Callable[[], None]:
    def run() -> None:
        point_grid(grid_size)

    return run


def make_matrix_construction() -> Callable[[], None]:
    def run() -> None:
        scale_matrix(1, 2)

    return run


def make_left_product(grid_size: int = 4) -> Callable[[], None]:
    points = point_grid(grid_size)
    mat = scale_matrix(1, 2)

    def run() -> None:
        left_product(mat, points)

    return run


def make_point_loop(grid_size: int = 4) -> Callable[[], None]:
    """Per-point Python loop, the unvectorized counterpart of left_product."""
    points = [tuple(p) for p in point_grid(grid_size).tolist()]
    a, d = 1, 2

    def run() -> None:
        [(a * x, d * y) for x, y in points]

    return run


GEOMETRY_BENCHMARKS: dict[str, Callable[..., Callable[[], None]]] = {
    "point_grid": make_point_grid,
    "matrix_construction": make_matrix_construction,
    "left_product": make_left_product,
    "point_loop": make_point_loop,
}


# Applied under any partial overrides passed to run_grid_size_comparison
GRID_COMPARISON_DEFAULTS = {"sample_size": 20, "iterations": 50}


class GeometryBenchmarkSuite:
    """Suite of geometry workload benchmarks."""

    def __init__(
        self,
        grid_size: int = 4,
        runner: Optional[BenchmarkRunner] = None,
    ):
        self.grid_size = grid_size
        self.runner = runner or BenchmarkRunner()

    def build(self, name: str, grid_size: Optional[int] = None) -> Callable[[], None]:
        """Build the timed callable for a named geometry benchmark."""
        if name not in GEOMETRY_BENCHMARKS:
            raise ValueError(f"Unknown geometry benchmark: {name}")
        factory = GEOMETRY_BENCHMARKS[name]
        if name == "matrix_construction":
            return factory()
        return factory(grid_size or self.grid_size)

    async def run_all(self, config: ConfigLike = None) -> list[BenchmarkResult]:
        """Benchmark every geometry workload at the suite's grid size."""
        results = []
        for name in GEOMETRY_BENCHMARKS:
            results.append(await self.runner.run_benchmark(name, self.build(name), config))
        return results

    async def run_grid_size_comparison(
        self,
        sizes: tuple[int, ...] = (4, 16, 64),
        config: ConfigLike = None,
    ) -> list[BenchmarkResult]:
        """Compare vectorized and looped transforms as the grid grows."""
        if not isinstance(config, BenchmarkConfig):
            overrides = {k: v for k, v in (config or {}).items() if v is not None}
            config = {**GRID_COMPARISON_DEFAULTS, **overrides}
        results = []
        for size in sizes:
            for name in ("left_product", "point_loop"):
                label = f"{name}_{size}x{size}"
                results.append(
                    await self.runner.run_benchmark(label, self.build(name, size), config)
                )
        return results
