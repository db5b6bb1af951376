"""
Benchmark orchestrator for micro-benchmarks of zero-argument callables.

Each run fans out one asyncio task per sample, joins them through a
task group, and reduces the per-sample mean latencies to a summary.
"""

import asyncio
import json
import logging
import os
from collections.abc import Coroutine, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from harness.errors import ConfigurationError, TimerUnavailableError
from instrumentation.timing import (
    MedianPolicy,
    SampleCollector,
    SampleResult,
    clock_resolution_ms,
    timed,
)

logger = logging.getLogger(__name__)

# Coarsest clock resolution that still yields meaningful per-sample timings
MAX_CLOCK_RESOLUTION_MS = 1.0

ENV_SAMPLE_SIZE = "MICROBENCH_SAMPLE_SIZE"
ENV_ITERATIONS = "MICROBENCH_ITERATIONS"
ENV_MEDIAN_POLICY = "MICROBENCH_MEDIAN_POLICY"

_CONFIG_KEYS = ("sample_size", "iterations", "median_policy")


def parse_median_policy(value: Union[str, MedianPolicy]) -> MedianPolicy:
    """Resolve a policy from an enum member or its string value."""
    if isinstance(value, MedianPolicy):
        return value
    try:
        return MedianPolicy(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in MedianPolicy)
        raise ConfigurationError(
            f"Unknown median policy {value!r} (expected one of: {choices})"
        ) from None


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    sample_size: int = 100
    iterations: int = 100
    median_policy: MedianPolicy = MedianPolicy.FINISH_ORDER

    def validate(self) -> "BenchmarkConfig":
        """Reject non-positive or non-integer counts."""
        for key in ("sample_size", "iterations"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{key} must be an integer, got {value!r}")
            if value < 1:
                raise ConfigurationError(f"{key} must be >= 1, got {value}")
        self.median_policy = parse_median_policy(self.median_policy)
        return self

    @property
    def total_calls(self) -> int:
        """Number of times the timed callable is invoked per run."""
        return self.sample_size * self.iterations

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "sample_size": self.sample_size,
            "iterations": self.iterations,
            "median_policy": self.median_policy.value,
        }

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "BenchmarkConfig":
        """Build a config from a mapping; omitted or None keys keep defaults."""
        unknown = sorted(set(values) - set(_CONFIG_KEYS))
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in values.items() if v is not None})

    @classmethod
    def from_env(cls, **overrides: Any) -> "BenchmarkConfig":
        """Build a config from MICROBENCH_* environment variables.

        Keyword overrides that are not None take precedence over the
        environment.
        """
        values = env_overrides()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_mapping(values).validate()


def env_overrides() -> dict[str, Any]:
    """Config values set through MICROBENCH_* environment variables."""
    values: dict[str, Any] = {}
    for key, env_var in (("sample_size", ENV_SAMPLE_SIZE), ("iterations", ENV_ITERATIONS)):
        raw = os.getenv(env_var, "").strip()
        if not raw:
            continue
        try:
            values[key] = int(raw)
        except ValueError:
            raise ConfigurationError(f"{env_var} must be an integer, got {raw!r}") from None

    policy = os.getenv(ENV_MEDIAN_POLICY, "").strip()
    if policy:
        values["median_policy"] = parse_median_policy(policy)

    return values


ConfigLike = Union[BenchmarkConfig, Mapping[str, Any], None]


def resolve_config(config: ConfigLike) -> BenchmarkConfig:
    """Normalize a caller-supplied config and validate it."""
    if config is None:
        return BenchmarkConfig()
    if isinstance(config, BenchmarkConfig):
        # Validate a copy; the caller's object is left as passed
        return replace(config).validate()
    if isinstance(config, Mapping):
        return BenchmarkConfig.from_mapping(config).validate()
    raise ConfigurationError(f"Unsupported config type: {type(config).__name__}")


@dataclass(frozen=True)
class BenchmarkSummary:
    """Summary statistics of one named benchmark run, in milliseconds."""

    name: str
    min: float
    max: float
    mean: float
    median: float

    def to_dict(self) -> dict:
        """Convert summary to dictionary."""
        return {
            "name": self.name,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "median": self.median,
        }


@dataclass
class BenchmarkResult:
    """Full record of a benchmark run, as produced by BenchmarkRunner."""

    config: BenchmarkConfig
    summary: BenchmarkSummary
    samples: list[SampleResult]
    start_time: datetime
    end_time: datetime
    metadata: dict = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.summary.name

    @property
    def duration_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "config": self.config.to_dict(),
            "summary": self.summary.to_dict(),
            "samples": [s.to_dict() for s in self.samples],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration_seconds,
            "metadata": self.metadata,
        }

    def save(self, path: Path) -> None:
        """Save result to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


# Type aliases for timed callables and diagnostic sinks
BenchmarkFn = Callable[[], Any]
Sink = Callable[[str], None]


def log_sink(message: str) -> None:
    """Default diagnostic sink: the module logger at DEBUG level."""
    logger.debug("Per-sample mean deltas (ms):\n%s", message)


def check_clock() -> None:
    """Fail if the host clock is too coarse to time a sample."""
    resolution = clock_resolution_ms()
    if resolution > MAX_CLOCK_RESOLUTION_MS:
        raise TimerUnavailableError(
            f"perf_counter resolution is {resolution:.3f}ms; "
            f"at most {MAX_CLOCK_RESOLUTION_MS:.0f}ms is required"
        )


async def _time_sample(
    name: str,
    fn: BenchmarkFn,
    iterations: int,
    aborted: asyncio.Event,
) -> Optional[SampleResult]:
    # Queued samples skip their loop once any sample has failed
    if aborted.is_set():
        return None
    try:
        # Never awaits: the call loop must run uninterrupted
        with timed(name) as timer:
            for _ in range(iterations):
                fn()
    except BaseException:
        aborted.set()
        raise
    return timer.to_sample(iterations)


async def collect_samples(name: str, fn: BenchmarkFn, config: BenchmarkConfig) -> SampleCollector:
    """Time `config.sample_size` samples and join them.

    All sample tasks are created before any of them runs. If the callable
    raises, the samples that have not started yet are skipped and the
    first error is re-raised as-is.
    """
    collector = SampleCollector()
    aborted = asyncio.Event()
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(_time_sample(name, fn, config.iterations, aborted))
                for _ in range(config.sample_size)
            ]
    except ExceptionGroup as errors:
        logger.debug("Benchmark %r aborted: %d sample(s) failed", name, len(errors.exceptions))
        raise errors.exceptions[0] from None

    for task in tasks:
        collector.add(task.result())
    return collector


def summarize(
    name: str,
    collector: SampleCollector,
    policy: MedianPolicy = MedianPolicy.FINISH_ORDER,
    sink: Optional[Sink] = None,
) -> BenchmarkSummary:
    """Reduce collected samples to a summary, dumping the raw deltas to `sink`."""
    (sink or log_sink)(json.dumps(collector.deltas_ms(), indent=4))
    stats = collector.stats(policy)
    return BenchmarkSummary(
        name=name,
        min=stats["min_ms"],
        max=stats["max_ms"],
        mean=stats["mean_ms"],
        median=stats["median_ms"],
    )


def bench(
    name: str,
    fn: BenchmarkFn,
    config: ConfigLike = None,
    *,
    sink: Optional[Sink] = None,
) -> Coroutine[Any, Any, BenchmarkSummary]:
    """Time `fn` and return an awaitable resolving to its summary.

    Configuration and clock errors are raised immediately, before any
    sample is scheduled. Errors raised by `fn` surface when the returned
    coroutine is awaited.

    Usage:
        summary = await bench("noop", lambda: None, {"sample_size": 5, "iterations": 10})
    """
    resolved = resolve_config(config)
    check_clock()
    return _run_bench(name, fn, resolved, sink)


async def _run_bench(
    name: str,
    fn: BenchmarkFn,
    config: BenchmarkConfig,
    sink: Optional[Sink],
) -> BenchmarkSummary:
    collector = await collect_samples(name, fn, config)
    return summarize(name, collector, config.median_policy, sink)


class BenchmarkRunner:
    """Orchestrates named benchmark runs and keeps their full results."""

    def __init__(
        self,
        verbose: bool = True,
        sink: Optional[Sink] = None,
    ):
        self.verbose = verbose
        self.sink = sink
        self._benchmarks: dict[str, tuple[BenchmarkFn, ConfigLike]] = {}

    def register(self, name: str, fn: BenchmarkFn, config: ConfigLike = None) -> None:
        """Register a benchmark function, optionally with its own config."""
        self._benchmarks[name] = (fn, config)

    def list_benchmarks(self) -> list[str]:
        """List registered benchmark names."""
        return list(self._benchmarks.keys())

    async def run_benchmark(
        self,
        name: str,
        fn: BenchmarkFn,
        config: ConfigLike = None,
    ) -> BenchmarkResult:
        """Run a complete benchmark and keep its samples."""
        config = resolve_config(config)
        check_clock()

        if self.verbose:
            print(f"\nRunning benchmark: {name}")
            print(f"  Samples: {config.sample_size}")
            print(f"  Iterations per sample: {config.iterations}")
            print(f"  Median policy: {config.median_policy.value}")

        start_time = datetime.now()
        collector = await collect_samples(name, fn, config)
        end_time = datetime.now()
        summary = summarize(name, collector, config.median_policy, self.sink)

        logger.info(
            "Benchmark %r: %d samples x %d iterations in %.3fs",
            name,
            config.sample_size,
            config.iterations,
            (end_time - start_time).total_seconds(),
        )

        if self.verbose:
            print(f"\nResults for {name}:")
            print(f"  min:    {summary.min:.6f}ms")
            print(f"  median: {summary.median:.6f}ms")
            print(f"  mean:   {summary.mean:.6f}ms")
            print(f"  max:    {summary.max:.6f}ms")

        return BenchmarkResult(
            config=config,
            summary=summary,
            samples=collector.ordered(),
            start_time=start_time,
            end_time=end_time,
        )

    async def run_all(self, config: ConfigLike = None) -> dict[str, BenchmarkResult]:
        """Run all registered benchmarks sequentially.

        A benchmark registered with its own config uses it; the rest use
        `config`.
        """
        results = {}

        for name, (fn, own_config) in self._benchmarks.items():
            results[name] = await self.run_benchmark(
                name,
                fn,
                own_config if own_config is not None else config,
            )

        return results


class ScenarioRunner:
    """Runs named scenarios with default and overridden configurations."""

    def __init__(self, runner: BenchmarkRunner):
        self.runner = runner
        self._scenarios: dict[str, dict] = {}

    def register_scenario(
        self,
        name: str,
        fn: BenchmarkFn,
        description: str = "",
        default_config: Optional[dict] = None,
    ) -> None:
        """Register a scenario for testing."""
        self._scenarios[name] = {
            "fn": fn,
            "description": description,
            "default_config": default_config or {},
        }

    def list_scenarios(self) -> list[str]:
        return list(self._scenarios.keys())

    async def run_scenario(
        self,
        name: str,
        config_overrides: Optional[dict] = None,
    ) -> BenchmarkResult:
        """Run a specific scenario."""
        if name not in self._scenarios:
            raise ValueError(f"Unknown scenario: {name}")

        scenario = self._scenarios[name]
        config = scenario["default_config"].copy()
        if config_overrides:
            config.update({k: v for k, v in config_overrides.items() if v is not None})

        result = await self.runner.run_benchmark(name, scenario["fn"], config)
        result.metadata["description"] = scenario["description"]
        return result

    async def run_many(
        self,
        names: list[str],
        config_overrides: Optional[dict] = None,
    ) -> dict[str, BenchmarkResult]:
        """Run several scenarios in order, skipping unknown names."""
        results = {}

        for name in names:
            if name not in self._scenarios:
                logger.warning("Unknown scenario %r, skipping", name)
                continue
            results[name] = await self.run_scenario(name, config_overrides)

        return results
