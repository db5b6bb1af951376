"""
Results presentation for benchmark summaries.

Provides CLI tables, JSON export and matplotlib charts.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from harness.runner import BenchmarkResult, BenchmarkSummary


def safe_filename(name: str, default: str = "unnamed") -> str:
    """Turn a benchmark name into a single path component.

    Path separators and ".." are replaced, so the file always lands
    directly in the reporter's output directory.
    """
    for sep in {"/", "\\", os.sep, os.altsep or "/"}:
        name = name.replace(sep, "_")
    name = name.replace("..", "_").replace("\0", "_").strip()
    return name or default


class ConsoleReporter:
    """Generates console/CLI reports."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def format_duration(self, ms: float) -> str:
        """Format a duration for display, picking a readable unit."""
        if ms < 0.001:
            return f"{ms * 1_000_000:.1f}ns"
        if ms < 1:
            return f"{ms * 1000:.2f}us"
        if ms < 1000:
            return f"{ms:.2f}ms"
        return f"{ms / 1000:.2f}s"

    def single_result(self, result: BenchmarkResult) -> str:
        """Generate report for a single benchmark result."""
        summary = result.summary
        lines = []
        lines.append(self._color(f"\n{'=' * 60}", "blue"))
        lines.append(self._color(f"Benchmark: {summary.name}", "bold"))
        lines.append(self._color(f"{'=' * 60}", "blue"))

        lines.append("\nConfiguration:")
        lines.append(f"  Samples: {result.config.sample_size}")
        lines.append(f"  Iterations: {result.config.iterations}")
        lines.append(f"  Median policy: {result.config.median_policy.value}")

        lines.append("\nPer-call Latency:")
        lines.append(f"  {'Min:':<8} {self.format_duration(summary.min)}")
        lines.append(f"  {'Median:':<8} {self.format_duration(summary.median)}")
        lines.append(f"  {'Mean:':<8} {self.format_duration(summary.mean)}")
        lines.append(f"  {'Max:':<8} {self.format_duration(summary.max)}")

        lines.append("\nExecution:")
        lines.append(f"  Total calls: {result.config.total_calls}")
        lines.append(f"  Total duration: {result.duration_seconds:.3f}s")

        return "\n".join(lines)

    def summary_table(self, summaries: list[BenchmarkSummary]) -> str:
        """Generate a comparison table for multiple summaries."""
        if not summaries:
            return "No results to display"

        headers = ["Benchmark", "Min", "Median", "Mean", "Max"]
        col_widths = [30, 12, 12, 12, 12]

        lines = []
        lines.append(self._color(f"\n{'=' * sum(col_widths)}", "blue"))
        lines.append(self._color("Benchmark Summary", "bold"))
        lines.append(self._color(f"{'=' * sum(col_widths)}", "blue"))

        header_row = ""
        for i, header in enumerate(headers):
            header_row += f"{header:<{col_widths[i]}}"
        lines.append(self._color(header_row, "bold"))
        lines.append("-" * sum(col_widths))

        fastest = min(s.median for s in summaries)
        for summary in summaries:
            name = summary.name[:27] + "..." if len(summary.name) > 30 else summary.name
            row = [f"{name:<{col_widths[0]}}"]
            for i, value in enumerate((summary.min, summary.median, summary.mean, summary.max), start=1):
                row.append(f"{self.format_duration(value):<{col_widths[i]}}")
            line = "".join(row)
            if len(summaries) > 1 and summary.median == fastest:
                line = self._color(line, "green")
            lines.append(line)

        return "\n".join(lines)


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")

    def latency_distribution(
        self,
        result: BenchmarkResult,
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Histogram of per-sample mean deltas with the median marked."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        deltas = [s.mean_delta_ms for s in result.samples]
        if not deltas:
            return None

        fig, ax = plt.subplots(figsize=(10, 6))
        ax.hist(deltas, bins=20, edgecolor="black", alpha=0.7)
        ax.axvline(
            result.summary.median,
            color="r",
            linestyle="--",
            label=f"median: {result.summary.median:.6f}ms",
        )
        ax.axvline(
            result.summary.mean,
            color="orange",
            linestyle="--",
            label=f"mean: {result.summary.mean:.6f}ms",
        )

        ax.set_xlabel("Mean per-call latency (ms)")
        ax.set_ylabel("Samples")
        ax.set_title(f"Latency Distribution: {result.name}")
        ax.legend()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or f"{safe_filename(result.name)}_latency_dist.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath

    def comparison_bar_chart(
        self,
        summaries: list[BenchmarkSummary],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Bar chart of median and mean latency per benchmark."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np

        if not summaries:
            return None

        names = [s.name for s in summaries]
        medians = [s.median for s in summaries]
        means = [s.mean for s in summaries]

        x = np.arange(len(names))
        width = 0.35

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.bar(x - width / 2, medians, width, label="median", color="steelblue")
        ax.bar(x + width / 2, means, width, label="mean", color="coral")

        ax.set_xlabel("Benchmark")
        ax.set_ylabel("Latency (ms)")
        ax.set_title("Latency Comparison")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")
        ax.legend()

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or "comparison_bar_chart.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath


class JSONReporter:
    """Exports results as JSON for further analysis."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results")

    def save_result(self, result: BenchmarkResult) -> Path:
        """Save a single result to JSON."""
        timestamp = result.start_time.strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{safe_filename(result.name)}_{timestamp}.json"
        result.save(filepath)
        return filepath

    def save_summaries(
        self,
        summaries: list[BenchmarkSummary],
        name: str = "summary",
    ) -> Path:
        """Save several summaries into one JSON file."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{name}_{timestamp}.json"

        data = {
            "name": name,
            "timestamp": timestamp,
            "summaries": [s.to_dict() for s in summaries],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def load_result(self, filepath: Path) -> dict:
        """Load a result from JSON."""
        with open(filepath) as f:
            return json.load(f)

    def load_all_results(self, pattern: str = "*.json") -> list[dict]:
        """Load all results matching a pattern."""
        return [self.load_result(p) for p in sorted(self.output_dir.glob(pattern))]
