"""Tests for the command-line entry point."""

from __future__ import annotations

import json

import main
import pytest
from instrumentation.timing import MedianPolicy


def test_list(capsys: pytest.CaptureFixture[str]) -> None:
    main.main(["list"])

    out = capsys.readouterr().out
    assert "construction:" in out
    assert "  left_product_4x4" in out


def test_run_writes_json(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    main.main(
        [
            "run",
            "left_product_4x4",
            "--samples", "3",
            "--iterations", "2",
            "--quiet",
            "--json",
            "--output-dir", str(tmp_path),
        ]
    )

    assert "left_product_4x4" in capsys.readouterr().out
    (path,) = tmp_path.glob("left_product_4x4_*.json")
    data = json.loads(path.read_text())
    assert data["config"]["sample_size"] == 3
    assert data["config"]["iterations"] == 2


def test_environment_configures_runs(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MICROBENCH_SAMPLE_SIZE", "2")
    monkeypatch.setenv("MICROBENCH_ITERATIONS", "1")

    main.main(["baseline", "--quiet", "--json", "--output-dir", str(tmp_path)])

    files = sorted(tmp_path.glob("*.json"))
    assert len(files) == 2
    assert all(json.loads(p.read_text())["config"]["sample_size"] == 2 for p in files)


def test_unknown_scenario_exits_nonzero(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["run", "missing"])

    assert excinfo.value.code == 1
    assert "Unknown scenario(s): missing" in capsys.readouterr().out


def test_invalid_samples_exit_nonzero(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["run", "left_product_4x4", "--samples", "0", "--quiet"])

    assert excinfo.value.code == 1
    assert "sample_size must be >= 1" in capsys.readouterr().out


def test_geometry_merges_environment_over_suite_defaults(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    from benchmarks.geometry import GeometryBenchmarkSuite

    seen = []

    async def fake_comparison(self, sizes=(4, 16, 64), config=None):
        seen.append(config)
        return []

    monkeypatch.setattr(GeometryBenchmarkSuite, "run_grid_size_comparison", fake_comparison)
    monkeypatch.setenv("MICROBENCH_MEDIAN_POLICY", "sorted")

    main.main(["geometry", "--quiet"])

    assert seen == [{"median_policy": MedianPolicy.SORTED}]
