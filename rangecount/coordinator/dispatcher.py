"""
Range Dispatcher
Runs one RangeCounter per FileRange on a thread pool and joins on all of them
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence

from rangecount.common import config
from rangecount.common.errors import SegmentCountError
from rangecount.coordinator.partitioner import FileRange
from rangecount.worker.range_counter import RangeCounter, RangeResult

logger = logging.getLogger(__name__)

__all__ = ["RangeDispatcher", "RangeResult"]


class RangeDispatcher:
    """Fans ranges out to worker threads and collects their results"""

    def __init__(self, max_workers: Optional[int] = None, buffer_size: Optional[int] = None):
        """
        Args:
            max_workers: Cap on concurrent threads; defaults to config.MAX_WORKERS,
                and to one thread per range when that is unset
            buffer_size: Bytes per read passed through to each RangeCounter
        """
        self.max_workers = max_workers if max_workers is not None else config.MAX_WORKERS
        self.buffer_size = buffer_size

    def _pool_size(self, num_ranges: int) -> int:
        if self.max_workers is None or self.max_workers < 1:
            return num_ranges
        return min(self.max_workers, num_ranges)

    def run_all(self, ranges: Sequence[FileRange], fd: int) -> List[RangeResult]:
        """
        Count every range concurrently

        Args:
            ranges: Ranges from partition_file_by_bytes
            fd: Read-only descriptor shared by all workers

        Returns:
            One RangeResult per range, ordered by range_id

        Raises:
            SegmentCountError: If any range failed; no results are returned
        """
        if not ranges:
            return []

        pool_size = self._pool_size(len(ranges))
        logger.debug(f"Dispatching {len(ranges)} ranges on {pool_size} threads")

        results: List[RangeResult] = []
        with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="range") as executor:
            futures = [
                executor.submit(RangeCounter(rng, fd, self.buffer_size).execute)
                for rng in ranges
            ]

            for future in as_completed(futures):
                result = future.result()
                if not result.succeeded:
                    for pending in futures:
                        pending.cancel()
                    raise SegmentCountError(result.range_id, result.error) from result.error
                results.append(result)

        results.sort(key=lambda r: r.range_id)
        return results
