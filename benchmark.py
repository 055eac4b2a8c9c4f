#!/usr/bin/env python3
"""
Automated benchmarking script for rangecount.
Runs the counter over several input sizes and segment counts and collects
performance metrics.
"""

import argparse
import csv
import json
import sys
from datetime import datetime
from pathlib import Path

from rangecount.common.errors import RangeCountError
from rangecount.coordinator.job_manager import count_file_concurrently
from rangecount.coordinator.metrics import MetricsCollector

# Configuration
RESULTS_DIR = Path("benchmark_results")
INPUT_DIR = Path("shared") / "input"

# Benchmark configurations
BENCHMARKS = [
    # Experiment 1: Input Size Scaling (fixed parallelism)
    {"name": "input_size_small", "input": "story_sm.txt", "segments": 4,
     "description": "Small input (4KB), baseline"},
    {"name": "input_size_medium", "input": "story_medium.txt", "segments": 4,
     "description": "Medium input (~1MB)"},
    {"name": "input_size_large", "input": "story_large.txt", "segments": 4,
     "description": "Large input (~10MB)"},

    # Experiment 2: Segment Scaling (fixed input)
    {"name": "segment_scaling_1", "input": "story_large.txt", "segments": 1,
     "description": "1 segment"},
    {"name": "segment_scaling_2", "input": "story_large.txt", "segments": 2,
     "description": "2 segments"},
    {"name": "segment_scaling_4", "input": "story_large.txt", "segments": 4,
     "description": "4 segments"},
    {"name": "segment_scaling_8", "input": "story_large.txt", "segments": 8,
     "description": "8 segments"},
]


def run_benchmark(config, run_number=1):
    """Run a single benchmark configuration; returns a result dict or None."""
    print(f"\n{'='*70}")
    print(f"Benchmark: {config['name']} (Run {run_number})")
    print(f"Description: {config['description']}")
    print(f"{'='*70}")

    input_path = INPUT_DIR / config["input"]
    if not input_path.exists():
        print(f"❌ Input file not found: {input_path}")
        print("   Run scripts/generate_benchmark_inputs.py first. Skipping...")
        return None

    collector = MetricsCollector()
    success = True
    try:
        count_file_concurrently(str(input_path), config["segments"], metrics=collector)
    except RangeCountError as e:
        print(f"  ❌ Run failed: {e}")
        success = False

    metrics = collector.all_metrics()[0]
    print(f"  {'✓' if success else '✗'} {metrics.total_time_seconds:.3f}s, "
          f"{metrics.unique_words} unique / {metrics.total_words} total words")

    return {
        "benchmark_name": config["name"],
        "description": config["description"],
        "run_number": run_number,
        "timestamp": datetime.now().isoformat(),
        "input_file": str(input_path),
        "input_size_bytes": metrics.file_size_bytes,
        "input_size_mb": round(metrics.file_size_bytes / 1024 / 1024, 2),
        "num_segments": config["segments"],
        "success": success,
        "total_runtime_seconds": round(metrics.total_time_seconds, 4),
        "throughput_mbps": round(metrics.throughput_mbps, 3),
        "unique_words": metrics.unique_words,
        "total_words": metrics.total_words,
        "memory_rss_mb": round(metrics.memory_rss_bytes / 1024 / 1024, 1),
    }


def save_results(results, timestamp):
    """Save results to JSON and CSV files."""
    RESULTS_DIR.mkdir(exist_ok=True)

    json_file = RESULTS_DIR / f"benchmark_results_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"\n✓ Results saved to: {json_file}")

    csv_file = RESULTS_DIR / f"benchmark_results_{timestamp}.csv"
    if results:
        fieldnames = list(results[0].keys())
        with open(csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)
        print(f"✓ Results saved to: {csv_file}")

    return json_file, csv_file


def print_summary(results):
    """Print a summary table of results."""
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")
    print(f"{'Benchmark':<25} {'Segments':>8} {'Size MB':>8} {'Runtime':>10} {'Status':>8}")
    print(f"{'-'*70}")

    for r in results:
        print(f"{r['benchmark_name']:<25} {r['num_segments']:>8} {r['input_size_mb']:>8.2f} "
              f"{r['total_runtime_seconds']:>9.3f}s {'✓' if r['success'] else '✗':>8}")

    print(f"{'='*70}")
    successful = sum(1 for r in results if r['success'])
    print(f"Total: {len(results)} runs, {successful} successful, "
          f"{len(results) - successful} failed")


def main(argv=None):
    """Main benchmarking workflow."""
    parser = argparse.ArgumentParser(description="Benchmark rangecount")
    parser.add_argument("--runs", type=int, default=3, help="Runs per benchmark (default: 3)")
    args = parser.parse_args(argv)

    print("=" * 70)
    print("rangecount Performance Benchmark Suite")
    print("=" * 70)

    runs_per_benchmark = max(1, args.runs)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    all_results = []

    for config in BENCHMARKS:
        for run in range(1, runs_per_benchmark + 1):
            result = run_benchmark(config, run_number=run)
            if result:
                all_results.append(result)

    if not all_results:
        print("\n❌ No results collected")
        return 1

    json_file, _ = save_results(all_results, timestamp)
    print_summary(all_results)
    print(f"\nGenerate plots: python plot_results.py {json_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
