#!/usr/bin/env python3
"""
Plot rangecount benchmark results: runtime and throughput per segment
count, speedup over the single-segment run, and runtime per input size.
"""

import argparse
import json
from collections import defaultdict
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

PLOTS_DIR = Path("benchmark_results/plots")
SEGMENT_PREFIX = 'segment_scaling_'
SIZE_PREFIX = 'input_size_'


def load_results(json_file):
    with open(json_file) as f:
        return json.load(f)


def aggregate_runs(results):
    """
    Group successful runs by benchmark name.
    Returns dict: benchmark_name -> {num_segments, input_size_mb, avg/std/min/max runtime, ...}
    """
    by_benchmark = defaultdict(list)
    for r in results:
        if r['success']:
            by_benchmark[r['benchmark_name']].append(r)

    aggregated = {}
    for name, runs in by_benchmark.items():
        runtimes = np.array([r['total_runtime_seconds'] for r in runs])
        throughputs = np.array([r['throughput_mbps'] for r in runs])
        aggregated[name] = {
            'benchmark_name': name,
            'description': runs[0]['description'],
            'num_segments': runs[0]['num_segments'],
            'input_size_mb': runs[0]['input_size_mb'],
            'avg_runtime': float(runtimes.mean()),
            'std_runtime': float(runtimes.std()),
            'min_runtime': float(runtimes.min()),
            'max_runtime': float(runtimes.max()),
            'avg_throughput': float(throughputs.mean()),
            'num_runs': len(runs)
        }
    return aggregated


def _series(aggregated, prefix, x_key, y_key):
    return sorted((v[x_key], v[y_key], v['std_runtime'])
                  for k, v in aggregated.items() if k.startswith(prefix))


def speedups(aggregated, prefix=SEGMENT_PREFIX):
    """Speedup of each segment count relative to the smallest one, sorted by segments."""
    data = _series(aggregated, prefix, 'num_segments', 'avg_runtime')
    if len(data) < 2:
        return []
    baseline = data[0][1]
    return [(segments, baseline / runtime if runtime > 0 else 0.0) for segments, runtime, _ in data]


def _save(fig, output_file):
    fig.tight_layout()
    fig.savefig(output_file, dpi=150)
    plt.close(fig)
    print(f"✓ Saved: {output_file}")


def plot_segments(aggregated, output_file):
    """Runtime (with std error bars) and throughput against segment count, side by side."""
    runtime = _series(aggregated, SEGMENT_PREFIX, 'num_segments', 'avg_runtime')
    if not runtime:
        print("⚠️  No segment scaling data found")
        return
    throughput = _series(aggregated, SEGMENT_PREFIX, 'num_segments', 'avg_throughput')
    segments, seconds, stds = zip(*runtime)

    fig, (left, right) = plt.subplots(1, 2, figsize=(12, 5))
    left.errorbar(segments, seconds, yerr=stds, marker='s', capsize=4)
    left.set_xlabel('Segments')
    left.set_ylabel('Runtime (s)')
    left.set_xticks(segments)
    right.plot(segments, [t for _, t, _ in throughput], marker='o', color='seagreen')
    right.set_xlabel('Segments')
    right.set_ylabel('Throughput (MB/s)')
    right.set_xticks(segments)
    for ax in (left, right):
        ax.grid(True, alpha=0.3)
    _save(fig, output_file)


def plot_speedup(aggregated, output_file):
    data = speedups(aggregated)
    if not data:
        print("⚠️  Need at least two segment counts for a speedup plot")
        return
    segments, actual = zip(*data)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(segments, actual, marker='o', label='Measured')
    ax.plot(segments, [s / segments[0] for s in segments], linestyle='--', color='gray',
            label='Linear')
    ax.set_xlabel('Segments')
    ax.set_ylabel('Speedup')
    ax.set_xticks(segments)
    ax.legend()
    ax.grid(True, alpha=0.3)
    _save(fig, output_file)


def plot_input_sizes(aggregated, output_file):
    data = _series(aggregated, SIZE_PREFIX, 'input_size_mb', 'avg_runtime')
    if not data:
        print("⚠️  No input size data found")
        return
    sizes, seconds, stds = zip(*data)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.errorbar(sizes, seconds, yerr=stds, marker='o', capsize=4)
    ax.set_xlabel('Input size (MB)')
    ax.set_ylabel('Runtime (s)')
    ax.grid(True, alpha=0.3)
    _save(fig, output_file)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Plot rangecount benchmark results")
    parser.add_argument("results", help="JSON file written by benchmark.py")
    parser.add_argument("--out", default=str(PLOTS_DIR), help="Output directory (default: %(default)s)")
    args = parser.parse_args(argv)

    if not Path(args.results).exists():
        print(f"❌ File not found: {args.results}")
        return 1

    aggregated = aggregate_runs(load_results(args.results))
    print(f"✓ Aggregated into {len(aggregated)} benchmarks")

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    plot_segments(aggregated, out_dir / "segment_scaling.png")
    plot_speedup(aggregated, out_dir / "speedup.png")
    plot_input_sizes(aggregated, out_dir / "input_size_scaling.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
