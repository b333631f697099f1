#!/usr/bin/env python3
"""
Tally Performance Benchmark

Times parsing and evaluation of Tally sheets.

Usage:
    python benchmark.py                      # Run all benchmarks
    python benchmark.py --iterations 5000    # Override iteration counts
    python benchmark.py --profile            # Run with profiling
    python benchmark.py --save results.json  # Save results as JSON
"""

import argparse
import cProfile
import json
import pstats
import statistics
import sys
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List

# Add src to path so we can import tally
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from tally import TallySheet  # pylint: disable=wrong-import-position


@dataclass
class BenchmarkResult:
    """Result from a single benchmark run."""
    name: str
    category: str
    lines: List[str]
    iterations: int
    total_time: float
    mean_time: float
    median_time: float
    min_time: float
    max_time: float
    std_dev: float
    ops_per_sec: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class Benchmark:
    """Individual benchmark: one sheet evaluated repeatedly."""

    def __init__(self, name: str, category: str, lines: List[str], iterations: int = 1000, warmup: int = 10):
        self.name = name
        self.category = category
        self.lines = lines
        self.iterations = iterations
        self.warmup = warmup

    def run(self, sheet: TallySheet, iterations: int | None = None) -> BenchmarkResult:
        """Run the benchmark and return results."""
        count = iterations if iterations is not None else self.iterations

        for _ in range(self.warmup):
            sheet.evaluate_lines(self.lines)

        times = []
        for _ in range(count):
            start = time.perf_counter()
            sheet.evaluate_lines(self.lines)
            times.append(time.perf_counter() - start)

        mean_time = statistics.mean(times)
        return BenchmarkResult(
            name=self.name,
            category=self.category,
            lines=self.lines,
            iterations=count,
            total_time=sum(times),
            mean_time=mean_time,
            median_time=statistics.median(times),
            min_time=min(times),
            max_time=max(times),
            std_dev=statistics.stdev(times) if len(times) > 1 else 0.0,
            ops_per_sec=1.0 / mean_time if mean_time > 0 else 0.0
        )


BENCHMARKS = [
    Benchmark("Single literal", "parse", ["55"]),
    Benchmark("Precedence chain", "parse", ["1 + 2 * 3 - 4 / 5 % 6 ^ 2"]),
    Benchmark("Nested groups", "parse", ["((((1 + 2) * 3) - 4) / (5 + (6 * (7 - 8))))"]),
    Benchmark("Definition with functions", "evaluate", ["var_def: pow(25, 5 / 2.0) * (1e2 + 2.2)"]),
    Benchmark("Rounding and trig", "evaluate", ["roundprec(sin(pi / 4) * 100, 0.25)", "floor(cos(tau) * 3.7)"]),
    Benchmark(
        "Budget sheet",
        "sheet",
        [
            "rent: 1_250",
            "food: 72.5 * 4",
            "transport: 3.2 * 22",
            "total: rent + food + transport",
            "per_day: round_prec(total / 30, 2)",
            "max(per_day, 50)",
        ],
        iterations=500
    ),
]


def run_benchmarks(benchmarks: List[Benchmark], iterations: int | None) -> List[BenchmarkResult]:
    """Run every benchmark with a fresh sheet."""
    sheet = TallySheet()
    results = []
    for benchmark in benchmarks:
        print(f"Running: {benchmark.name}...", end=" ", flush=True)
        result = benchmark.run(sheet, iterations)
        print(f"{result.mean_time * 1_000_000:.1f}us")
        results.append(result)

    return results


def print_results(results: List[BenchmarkResult]) -> None:
    """Print formatted results table."""
    print("\n" + "=" * 80)
    print("BENCHMARK RESULTS")
    print("=" * 80)
    print(f"{'Benchmark':<32} {'Mean':<12} {'Median':<12} {'Min':<12} {'Max':<12}")
    print("-" * 80)

    for result in results:
        name = result.name[:30] + ".." if len(result.name) > 32 else result.name
        print(
            f"{name:<32} {result.mean_time * 1e6:<12.2f} {result.median_time * 1e6:<12.2f} "
            f"{result.min_time * 1e6:<12.2f} {result.max_time * 1e6:<12.2f}"
        )

    print("-" * 80)
    print("Times in microseconds")


def save_results(results: List[BenchmarkResult], filename: str) -> None:
    """Save results to JSON file."""
    output = {
        'timestamp': datetime.now().isoformat(),
        'python_version': sys.version,
        'results': [r.to_dict() for r in results]
    }

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(output, f, indent=2)

    print(f"\nResults saved to: {filename}")


def profile_benchmarks(benchmarks: List[Benchmark]) -> None:
    """Run each benchmark's sheet under the profiler."""
    sheet = TallySheet()
    profiler = cProfile.Profile()

    profiler.enable()
    for benchmark in benchmarks:
        for _ in range(100):
            sheet.evaluate_lines(benchmark.lines)

    profiler.disable()

    s = StringIO()
    stats = pstats.Stats(profiler, stream=s)
    stats.sort_stats('cumulative')
    stats.print_stats(30)

    print("\n" + "=" * 80)
    print("PROFILING RESULTS (Top 30 functions by cumulative time)")
    print("=" * 80)
    print(s.getvalue())


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Tally Performance Benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--iterations',
        type=int,
        metavar='N',
        help='Override the number of timed iterations per benchmark'
    )
    parser.add_argument(
        '--profile',
        action='store_true',
        help='Run with profiling enabled'
    )
    parser.add_argument(
        '--save',
        metavar='FILE',
        help='Save results to JSON file'
    )

    args = parser.parse_args()

    if args.profile:
        profile_benchmarks(BENCHMARKS)
        return 0

    results = run_benchmarks(BENCHMARKS, args.iterations)
    print_results(results)

    if args.save:
        save_results(results, args.save)

    return 0


if __name__ == '__main__':
    sys.exit(main())
