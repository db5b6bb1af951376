from __future__ import annotations

import pytest

from tests.helpers import CallCounter, CaptureSink


@pytest.fixture
def counter() -> CallCounter:
    return CallCounter()


@pytest.fixture
def sink() -> CaptureSink:
    return CaptureSink()


@pytest.fixture(autouse=True)
def clear_microbench_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "MICROBENCH_SAMPLE_SIZE",
        "MICROBENCH_ITERATIONS",
        "MICROBENCH_MEDIAN_POLICY",
        "MICROBENCH_RESULTS_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
