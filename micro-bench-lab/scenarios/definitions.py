"""
Predefined benchmark scenarios.

Groups the geometry workloads into categories:
1. Construction (building points and matrices)
2. Transform (applying a matrix to a point grid)
"""

import functools
from dataclasses import dataclass, field
from typing import Callable, Optional

from benchmarks.geometry import (
    make_left_product,
    make_matrix_construction,
    make_point_grid,
    make_point_loop,
)


@dataclass
class Scenario:
    """Definition of a benchmark scenario."""

    name: str
    description: str
    category: str
    factory: Callable[[], Callable[[], None]]
    sample_size: int = 100
    iterations: int = 100
    metadata: dict = field(default_factory=dict)

    def build(self) -> Callable[[], None]:
        """Build a fresh timed callable."""
        return self.factory()

    def default_config(self) -> dict:
        return {"sample_size": self.sample_size, "iterations": self.iterations}

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "sample_size": self.sample_size,
            "iterations": self.iterations,
            "metadata": self.metadata,
        }


# ============================================================================
# Category 1: Construction
# ============================================================================

CONSTRUCTION_SCENARIOS = [
    Scenario(
        name="construct_point_grid",
        description="Build the 4x4 grid of integer points",
        category="construction",
        factory=functools.partial(make_point_grid, 4),
    ),
    Scenario(
        name="construct_scale_matrix",
        description="Build the diag(1, 2) integer matrix",
        category="construction",
        factory=make_matrix_construction,
    ),
    Scenario(
        name="construct_large_grid",
        description="Build a 64x64 grid of integer points",
        category="construction",
        factory=functools.partial(make_point_grid, 64),
        sample_size=50,
        iterations=20,
        metadata={"grid_size": 64},
    ),
]

# ============================================================================
# Category 2: Transform
# ============================================================================

TRANSFORM_SCENARIOS = [
    Scenario(
        name="left_product_4x4",
        description="Left product of diag(1, 2) over the 4x4 grid",
        category="transform",
        factory=functools.partial(make_left_product, 4),
        metadata={"grid_size": 4},
    ),
    Scenario(
        name="left_product_64x64",
        description="Left product of diag(1, 2) over a 64x64 grid",
        category="transform",
        factory=functools.partial(make_left_product, 64),
        sample_size=50,
        iterations=20,
        metadata={"grid_size": 64},
    ),
    Scenario(
        name="point_loop_4x4",
        description="Per-point Python loop over the 4x4 grid",
        category="transform",
        factory=functools.partial(make_point_loop, 4),
        metadata={"grid_size": 4},
    ),
]

# ============================================================================
# Scenario Registry
# ============================================================================

ALL_SCENARIOS = {
    "construction": CONSTRUCTION_SCENARIOS,
    "transform": TRANSFORM_SCENARIOS,
}


def get_scenario(name: str) -> Optional[Scenario]:
    """Get a scenario by name."""
    for category_scenarios in ALL_SCENARIOS.values():
        for scenario in category_scenarios:
            if scenario.name == name:
                return scenario
    return None


def get_scenarios_by_category(category: str) -> list[Scenario]:
    """Get all scenarios in a category."""
    return ALL_SCENARIOS.get(category, [])


def list_scenarios() -> dict[str, list[str]]:
    """List all available scenarios by category."""
    return {
        category: [s.name for s in scenarios]
        for category, scenarios in ALL_SCENARIOS.items()
    }


def get_baseline_scenarios() -> list[Scenario]:
    """One representative scenario from each category."""
    return [
        CONSTRUCTION_SCENARIOS[0],  # construct_point_grid
        TRANSFORM_SCENARIOS[0],     # left_product_4x4
    ]
