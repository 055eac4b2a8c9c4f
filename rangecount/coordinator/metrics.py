"""
Performance metrics collection for counting runs.
"""

import json
import time
from dataclasses import dataclass, asdict, field
from typing import Dict, List, Optional, Sequence

import psutil

from rangecount.worker.range_counter import RangeResult


@dataclass
class RunMetrics:
    """Metrics for a single counting run."""

    run_id: str
    file_path: str
    file_size_bytes: int
    num_segments: int
    overlap_bytes: int
    start_time: float
    end_time: float = 0.0
    counting_end: float = 0.0
    range_times_ms: Dict[int, int] = field(default_factory=dict)
    unique_words: int = 0
    total_words: int = 0
    memory_rss_bytes: int = 0
    succeeded: bool = False

    @property
    def total_time_seconds(self) -> float:
        """Total run time in seconds."""
        return self.end_time - self.start_time

    @property
    def counting_time_seconds(self) -> float:
        """Time spent before consolidation started."""
        return self.counting_end - self.start_time

    @property
    def throughput_mbps(self) -> float:
        """Input megabytes processed per second."""
        if self.total_time_seconds <= 0:
            return 0.0
        return (self.file_size_bytes / (1024 * 1024)) / self.total_time_seconds

    def to_dict(self) -> dict:
        """Convert metrics to dictionary."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        data['throughput_mbps'] = self.throughput_mbps
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


class MetricsCollector:
    """Collects and manages metrics for counting runs."""

    def __init__(self):
        self.run_metrics: Dict[str, RunMetrics] = {}
        self.process = psutil.Process()

    def start_run(self, run_id: str, file_path: str, num_segments: int, overlap_bytes: int):
        """Initialize metrics tracking for a new run."""
        self.run_metrics[run_id] = RunMetrics(
            run_id=run_id,
            file_path=file_path,
            file_size_bytes=0,
            num_segments=num_segments,
            overlap_bytes=overlap_bytes,
            start_time=time.time()
        )

    def record_file_size(self, run_id: str, file_size: int):
        """Record the size the run partitioned, taken from the open descriptor."""
        metrics = self.run_metrics.get(run_id)
        if metrics:
            metrics.file_size_bytes = file_size

    def end_counting(self, run_id: str, results: Sequence[RangeResult]):
        """Mark the end of the counting phase and record per-range timings."""
        metrics = self.run_metrics.get(run_id)
        if metrics:
            metrics.counting_end = time.time()
            metrics.range_times_ms = {r.range_id: r.execution_time_ms for r in results}

    def end_run(self, run_id: str, consolidated: Optional[Dict[str, int]], succeeded: bool = True):
        """Mark run completion and record table sizes and memory use."""
        metrics = self.run_metrics.get(run_id)
        if not metrics:
            return

        metrics.end_time = time.time()
        if not metrics.counting_end:
            metrics.counting_end = metrics.end_time
        metrics.succeeded = succeeded
        metrics.memory_rss_bytes = self.process.memory_info().rss
        if consolidated:
            metrics.unique_words = len(consolidated)
            metrics.total_words = sum(consolidated.values())

    def get_metrics(self, run_id: str) -> Optional[RunMetrics]:
        """Retrieve metrics for a specific run."""
        return self.run_metrics.get(run_id)

    def all_metrics(self) -> List[RunMetrics]:
        return list(self.run_metrics.values())
