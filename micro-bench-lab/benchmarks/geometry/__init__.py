"""
Geometry benchmarks - point grids and matrix left products.
"""

from .benchmark import (
    GEOMETRY_BENCHMARKS,
    GRID_COMPARISON_DEFAULTS,
    GeometryBenchmarkSuite,
    left_product,
    make_left_product,
    make_matrix_construction,
    make_point_grid,
    make_point_loop,
    point_grid,
    scale_matrix,
)

__all__ = [
    "GEOMETRY_BENCHMARKS",
    "GRID_COMPARISON_DEFAULTS",
    "GeometryBenchmarkSuite",
    "left_product",
    "make_left_product",
    "make_matrix_construction",
    "make_point_grid",
    "make_point_loop",
    "point_grid",
    "scale_matrix",
]
