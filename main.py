#!/usr/bin/env python3
"""
Micro Bench Lab - Main entry point for running benchmarks.

Usage:
    python main.py [command] [scenarios...] [options]

Commands:
    list        - List available scenarios
    run         - Run the named scenarios
    baseline    - Run one representative scenario per category
    all         - Run every scenario
    geometry    - Compare vectorized and looped transforms across grid sizes
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add micro-bench-lab to path for package imports
sys.path.insert(0, str(Path(__file__).parent / "micro-bench-lab"))

from harness.reporter import ChartReporter, ConsoleReporter, JSONReporter  # noqa: E402
from harness.runner import (  # noqa: E402
    BenchmarkResult,
    BenchmarkRunner,
    ScenarioRunner,
    env_overrides,
)

logger = logging.getLogger("microbench")


def config_overrides(args) -> dict:
    """Environment values overridden by explicit command-line options."""
    overrides = env_overrides()
    cli = {
        "sample_size": args.samples,
        "iterations": args.iterations,
        "median_policy": args.median_policy,
    }
    overrides.update({k: v for k, v in cli.items() if v is not None})
    return overrides


def build_scenario_runner(args) -> ScenarioRunner:
    from scenarios import ALL_SCENARIOS

    runner = BenchmarkRunner(verbose=not args.quiet)
    scenario_runner = ScenarioRunner(runner)
    for scenarios in ALL_SCENARIOS.values():
        for scenario in scenarios:
            scenario_runner.register_scenario(
                scenario.name,
                scenario.build(),
                description=scenario.description,
                default_config=scenario.default_config(),
            )
    return scenario_runner


def report(args, results: list[BenchmarkResult]) -> None:
    """Print the summary table and write any requested artifacts."""
    reporter = ConsoleReporter(use_color=sys.stdout.isatty())
    print(reporter.summary_table([r.summary for r in results]))

    if args.json:
        json_reporter = JSONReporter(args.output_dir)
        for result in results:
            path = json_reporter.save_result(result)
            logger.info("Saved %s", path)

    if args.charts and results:
        chart_reporter = ChartReporter(args.output_dir / "charts")
        for result in results:
            chart_reporter.latency_distribution(result)
        path = chart_reporter.comparison_bar_chart([r.summary for r in results])
        logger.info("Saved charts to %s", path.parent if path else args.output_dir)


async def list_available(args):
    """List available scenarios."""
    from scenarios import list_scenarios

    for category, names in list_scenarios().items():
        print(f"{category}:")
        for name in names:
            print(f"  {name}")


async def run_named_scenarios(args):
    """Run the scenarios named on the command line."""
    if not args.scenarios:
        raise ValueError("run: at least one scenario name is required")

    scenario_runner = build_scenario_runner(args)
    unknown = [n for n in args.scenarios if n not in scenario_runner.list_scenarios()]
    if unknown:
        raise ValueError(f"Unknown scenario(s): {', '.join(unknown)}")

    results = await scenario_runner.run_many(args.scenarios, config_overrides(args))
    report(args, list(results.values()))


async def run_baseline_scenarios(args):
    """Run one representative scenario from each category."""
    from scenarios import get_baseline_scenarios

    scenario_runner = build_scenario_runner(args)
    names = [s.name for s in get_baseline_scenarios()]
    results = await scenario_runner.run_many(names, config_overrides(args))
    report(args, list(results.values()))


async def run_all_scenarios(args):
    """Run every registered scenario."""
    scenario_runner = build_scenario_runner(args)
    results = await scenario_runner.run_many(
        scenario_runner.list_scenarios(), config_overrides(args)
    )
    report(args, list(results.values()))


async def run_geometry_comparison(args):
    """Compare vectorized and looped transforms across grid sizes."""
    from benchmarks.geometry import GeometryBenchmarkSuite

    runner = BenchmarkRunner(verbose=not args.quiet)
    suite = GeometryBenchmarkSuite(runner=runner)
    overrides = config_overrides(args)
    results = await suite.run_grid_size_comparison(config=overrides)
    report(args, results)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Micro Bench Lab - Time small callables and summarize their latency",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py list
    python main.py run left_product_4x4 point_loop_4x4 --samples 50
    python main.py baseline --json
    python main.py all --median-policy sorted --charts
        """,
    )

    parser.add_argument(
        "command",
        choices=["list", "run", "baseline", "all", "geometry"],
        help="What to run",
    )
    parser.add_argument(
        "scenarios",
        nargs="*",
        help="Scenario names (for the run command)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Samples per benchmark (default: scenario setting, or 100)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Calls per sample (default: scenario setting, or 100)",
    )
    parser.add_argument(
        "--median-policy",
        choices=["finish_order", "sorted"],
        default=None,
        help="Median selection (default: finish_order)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(os.getenv("MICROBENCH_RESULTS_DIR", "results")),
        help="Directory to save results (default: results/)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Save each result as JSON",
    )
    parser.add_argument(
        "--charts",
        action="store_true",
        help="Save latency charts",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final summary table",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (DEBUG dumps per-sample latencies)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "list": list_available,
        "run": run_named_scenarios,
        "baseline": run_baseline_scenarios,
        "all": run_all_scenarios,
        "geometry": run_geometry_comparison,
    }

    try:
        asyncio.run(commands[args.command](args))
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
