"""
Example workloads for the micro-benchmark harness.

Each submodule provides factories for zero-argument timed callables.
"""

from . import geometry

__all__ = [
    "geometry",
]
