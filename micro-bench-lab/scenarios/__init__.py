"""
Scenario definitions for micro-benchmarking.
"""

from .definitions import (
    Scenario,
    ALL_SCENARIOS,
    CONSTRUCTION_SCENARIOS,
    TRANSFORM_SCENARIOS,
    get_scenario,
    get_scenarios_by_category,
    list_scenarios,
    get_baseline_scenarios,
)

__all__ = [
    "Scenario",
    "ALL_SCENARIOS",
    "CONSTRUCTION_SCENARIOS",
    "TRANSFORM_SCENARIOS",
    "get_scenario",
    "get_scenarios_by_category",
    "list_scenarios",
    "get_baseline_scenarios",
]
