"""
Range Counter
Reads one byte range of the input through a positioned reader, extracts
ASCII-letter words and counts the ones whose first byte the range owns
"""

import logging
import os
import string
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from rangecount.common import config
from rangecount.coordinator.partitioner import FileRange

logger = logging.getLogger(__name__)

WordCount = Dict[str, int]

_LETTERS = frozenset(string.ascii_letters.encode('ascii'))
_UPPER_A = ord('A')
_UPPER_Z = ord('Z')
_CASE_SHIFT = ord('a') - ord('A')


@dataclass(frozen=True)
class RangeResult:
    """Outcome of counting one range; created once by its worker"""
    range_id: int
    start_byte: int
    end_byte: int  # exclusive end of the owned range
    table: Mapping[str, int] = field(default_factory=dict)
    error: Optional[BaseException] = None
    execution_time_ms: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'table', MappingProxyType(dict(self.table)))

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def total_words(self) -> int:
        return sum(self.table.values())


class SectionReader:
    """
    Reads [offset, offset + length) of a shared file descriptor

    Every read is an os.pread at this reader's own position, so any number
    of readers can share one descriptor without disturbing each other.
    """

    def __init__(self, fd: int, offset: int, length: int):
        self.fd = fd
        self._pos = offset
        self._end = offset + length

    def read(self, size: int = -1) -> bytes:
        remaining = self._end - self._pos
        if remaining <= 0:
            return b""
        if size < 0 or size > remaining:
            size = remaining

        data = os.pread(self.fd, size, self._pos)
        self._pos += len(data)
        return data


def count_words_in_owned_range(reader, absolute_start: int, owned_end: int,
                               range_start: Optional[int] = None,
                               buffer_size: Optional[int] = None) -> WordCount:
    """
    Count the words a range owns

    A word is a maximal run of ASCII letters. It is counted only if its first
    byte lies in [range_start, owned_end); a word that starts inside the
    range but runs past owned_end is still counted in full from the overlap.

    Args:
        reader: Object with read(size) returning b"" at end of window
        absolute_start: File offset of the reader's first byte
        owned_end: Exclusive end of the owned range
        range_start: First owned offset; defaults to absolute_start. Pass a
            larger value when the reader starts early to see left context.
        buffer_size: Bytes per read call

    Returns:
        Lowercased word -> count

    Raises:
        OSError: Propagated from the reader; no partial table is returned
    """
    if range_start is None:
        range_start = absolute_start
    if buffer_size is None:
        buffer_size = config.READ_BUFFER_SIZE

    counts: WordCount = {}
    offset = absolute_start
    in_word = False
    word_start = 0
    word = bytearray()

    def flush():
        if range_start <= word_start < owned_end:
            key = word.decode('ascii')
            counts[key] = counts.get(key, 0) + 1

    while True:
        chunk = reader.read(buffer_size)
        if not chunk:
            break

        for b in chunk:
            if b in _LETTERS:
                if not in_word:
                    in_word = True
                    word_start = offset
                    word.clear()
                if _UPPER_A <= b <= _UPPER_Z:
                    b += _CASE_SHIFT
                word.append(b)
            elif in_word:
                flush()
                in_word = False
            offset += 1

    if in_word:
        flush()

    return counts


class RangeCounter:
    """Counts a single FileRange against a shared file descriptor"""

    def __init__(self, file_range: FileRange, fd: int, buffer_size: Optional[int] = None):
        """
        Args:
            file_range: Range this worker owns
            fd: Read-only descriptor shared by all workers
            buffer_size: Bytes per read; defaults to config.READ_BUFFER_SIZE
        """
        self.file_range = file_range
        self.fd = fd
        self.buffer_size = buffer_size

    def execute(self) -> RangeResult:
        """
        Count the range

        Returns:
            RangeResult with the table, or with `error` set if reading failed
        """
        rng = self.file_range
        start_time = time.time()
        logger.debug(f"Range {rng.range_id}: counting [{rng.start}, {rng.end}) reading to {rng.read_end}")

        try:
            # One byte of left context tells us whether the range begins mid-word
            read_start = max(rng.start - 1, 0)
            reader = SectionReader(self.fd, read_start, rng.read_end - read_start)
            table = count_words_in_owned_range(
                reader,
                absolute_start=read_start,
                owned_end=rng.end,
                range_start=rng.start,
                buffer_size=self.buffer_size
            )
        except Exception as e:
            execution_time = int((time.time() - start_time) * 1000)
            logger.error(f"Range {rng.range_id} failed: {e}")
            return RangeResult(
                range_id=rng.range_id,
                start_byte=rng.start,
                end_byte=rng.end,
                error=e,
                execution_time_ms=execution_time
            )

        execution_time = int((time.time() - start_time) * 1000)
        logger.debug(f"Range {rng.range_id}: {len(table)} unique words in {execution_time}ms")

        return RangeResult(
            range_id=rng.range_id,
            start_byte=rng.start,
            end_byte=rng.end,
            table=table,
            execution_time_ms=execution_time
        )
