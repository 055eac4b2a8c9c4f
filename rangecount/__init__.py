"""
rangecount: segmented, concurrent word-frequency counting.

Splits a file into byte ranges, counts each range on its own worker
thread and merges the per-range tables into one.
"""

from rangecount.common.errors import (
    ConfigurationError,
    FileAccessError,
    RangeCountError,
    SegmentCountError,
)
from rangecount.coordinator.dispatcher import RangeDispatcher, RangeResult
from rangecount.coordinator.job_manager import count_file_concurrently
from rangecount.coordinator.partitioner import FileRange, partition_file_by_bytes
from rangecount.worker.consolidator import Consolidator, merge_tables
from rangecount.worker.range_counter import count_words_in_owned_range

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Consolidator",
    "FileAccessError",
    "FileRange",
    "RangeCountError",
    "RangeDispatcher",
    "RangeResult",
    "SegmentCountError",
    "count_file_concurrently",
    "count_words_in_owned_range",
    "merge_tables",
    "partition_file_by_bytes",
]
