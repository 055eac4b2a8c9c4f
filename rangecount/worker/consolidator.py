"""
Result Consolidator
Merges per-range word tables into one table; the merge is a pointwise sum,
so the order of the inputs never changes the outcome
"""

import logging
import threading
from typing import Iterable, Mapping, Sequence

from rangecount.worker.range_counter import RangeResult, WordCount

logger = logging.getLogger(__name__)


def merge_tables(tables: Iterable[Mapping[str, int]]) -> WordCount:
    """
    Sum word tables into a freshly built table

    Args:
        tables: Word -> count mappings; left untouched

    Returns:
        New dict with the summed counts
    """
    merged: WordCount = {}
    for table in tables:
        for word, count in table.items():
            merged[word] = merged.get(word, 0) + count
    return merged


class Consolidator:
    """Holds the most recent consolidated table behind a lock"""

    def __init__(self):
        self._consolidated: WordCount = {}
        self._lock = threading.Lock()

    def consolidate(self, results: Sequence[RangeResult]) -> WordCount:
        """
        Merge the tables of all range results

        Each call replaces the stored table rather than adding to it.

        Args:
            results: Successful RangeResults, in any order

        Returns:
            Copy of the consolidated table

        Raises:
            ValueError: If any result carries an error
        """
        failed = [r.range_id for r in results if not r.succeeded]
        if failed:
            raise ValueError(f"Cannot consolidate failed ranges: {failed}")

        merged = merge_tables(r.table for r in results)
        logger.debug(f"Consolidated {len(results)} ranges into {len(merged)} unique words")

        with self._lock:
            self._consolidated = merged
        return dict(merged)

    def get_consolidated(self) -> WordCount:
        """Return a copy of the last consolidated table"""
        with self._lock:
            return dict(self._consolidated)
