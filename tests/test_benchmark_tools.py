"""
Tests for the benchmark runner and result aggregation
"""

import json
import os
import sys
from pathlib import Path

import pytest

# Benchmark scripts live at the repository root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import benchmark


def make_run(name, segments, runtime, success=True):
    return {
        'benchmark_name': name,
        'description': name,
        'num_segments': segments,
        'input_size_mb': 9.6,
        'success': success,
        'total_runtime_seconds': runtime,
        'throughput_mbps': 9.6 / runtime,
    }


class TestBenchmarkRunner:

    def test_run_benchmark_records_result(self, temp_dir, sample_text, monkeypatch):
        monkeypatch.setattr(benchmark, 'INPUT_DIR', Path(temp_dir))
        with open(os.path.join(temp_dir, 'story_sm.txt'), 'w') as f:
            f.write(sample_text)

        config = {"name": "input_size_small", "input": "story_sm.txt", "segments": 2,
                  "description": "test"}
        result = benchmark.run_benchmark(config)

        assert result['success'] is True
        assert result['num_segments'] == 2
        assert result['total_words'] == 32
        assert result['input_size_bytes'] == len(sample_text)

    def test_missing_input_is_skipped(self, temp_dir, monkeypatch):
        monkeypatch.setattr(benchmark, 'INPUT_DIR', Path(temp_dir))
        config = {"name": "x", "input": "absent.txt", "segments": 2, "description": "x"}
        assert benchmark.run_benchmark(config) is None

    def test_save_results_writes_json_and_csv(self, temp_dir, monkeypatch):
        monkeypatch.setattr(benchmark, 'RESULTS_DIR', Path(temp_dir))
        results = [make_run('segment_scaling_1', 1, 2.0)]

        json_file, csv_file = benchmark.save_results(results, "20260101_000000")

        with open(json_file) as f:
            assert json.load(f) == results
        assert csv_file.read_text().startswith("benchmark_name,")


class TestAggregation:

    @pytest.fixture
    def plot_results(self):
        pytest.importorskip("numpy")
        pytest.importorskip("matplotlib")
        import plot_results
        return plot_results

    def test_aggregate_runs(self, plot_results):
        results = [
            make_run('segment_scaling_1', 1, 4.0),
            make_run('segment_scaling_1', 1, 6.0),
            make_run('segment_scaling_1', 1, 100.0, success=False),
            make_run('segment_scaling_4', 4, 2.0),
        ]

        aggregated = plot_results.aggregate_runs(results)

        assert set(aggregated) == {'segment_scaling_1', 'segment_scaling_4'}
        assert aggregated['segment_scaling_1']['avg_runtime'] == pytest.approx(5.0)
        assert aggregated['segment_scaling_1']['std_runtime'] == pytest.approx(1.0)
        assert aggregated['segment_scaling_1']['num_runs'] == 2

    def test_speedups_relative_to_fewest_segments(self, plot_results):
        aggregated = plot_results.aggregate_runs([
            make_run('segment_scaling_4', 4, 2.0),
            make_run('segment_scaling_1', 1, 6.0),
            make_run('segment_scaling_2', 2, 4.0),
        ])

        assert plot_results.speedups(aggregated) == [
            (1, pytest.approx(1.0)), (2, pytest.approx(1.5)), (4, pytest.approx(3.0))
        ]

    def test_speedups_need_two_points(self, plot_results):
        aggregated = plot_results.aggregate_runs([make_run('segment_scaling_1', 1, 6.0)])
        assert plot_results.speedups(aggregated) == []

    def test_main_writes_plots(self, plot_results, temp_dir):
        results_file = os.path.join(temp_dir, 'results.json')
        with open(results_file, 'w') as f:
            json.dump([
                make_run('segment_scaling_1', 1, 6.0),
                make_run('segment_scaling_2', 2, 4.0),
                make_run('input_size_small', 2, 1.0),
            ], f)
        out_dir = os.path.join(temp_dir, 'plots')

        assert plot_results.main([results_file, '--out', out_dir]) == 0

        assert sorted(os.listdir(out_dir)) == [
            'input_size_scaling.png', 'segment_scaling.png', 'speedup.png'
        ]

    def test_main_missing_results_file(self, plot_results, temp_dir):
        assert plot_results.main([os.path.join(temp_dir, 'absent.json')]) == 1
