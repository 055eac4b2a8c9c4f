"""
Range Partitioner
Splits a file of known size into contiguous byte ranges, one per worker,
each extended by a read-ahead overlap window
"""

from dataclasses import dataclass
from typing import List

from rangecount.common.errors import ConfigurationError


@dataclass(frozen=True)
class FileRange:
    """A contiguous byte range owned by a single worker"""
    range_id: int
    start: int
    end: int       # exclusive end of the owned range
    read_end: int  # exclusive end to read (end + overlap)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def read_length(self) -> int:
        return self.read_end - self.start

    @property
    def overlap(self) -> int:
        return self.read_end - self.end


def partition_file_by_bytes(file_size: int, num_segments: int, overlap: int) -> List[FileRange]:
    """
    Split [0, file_size) into num_segments contiguous ranges

    Range i covers floor(i * size / n) to floor((i + 1) * size / n), so the
    ranges tile the file exactly even when the size does not divide evenly.
    Every range except the last may read up to `overlap` bytes past its
    owned end, capped at the file size.

    Args:
        file_size: Size of the input in bytes
        num_segments: Requested number of ranges
        overlap: Read-ahead window in bytes

    Returns:
        Ranges ordered by range_id (1-based); empty for an empty file

    Raises:
        ConfigurationError: If num_segments < 1 or overlap < 0
    """
    if num_segments < 1:
        raise ConfigurationError(f"segments must be >= 1, got {num_segments}")
    if overlap < 0:
        raise ConfigurationError(f"overlap must be >= 0, got {overlap}")
    if file_size <= 0:
        return []

    # Avoid empty ranges on tiny files
    if num_segments > file_size:
        num_segments = max(file_size, 1)

    ranges = []
    for i in range(num_segments):
        start = (i * file_size) // num_segments
        end = ((i + 1) * file_size) // num_segments
        read_end = end
        if i != num_segments - 1:
            read_end = min(end + overlap, file_size)

        ranges.append(FileRange(
            range_id=i + 1,
            start=start,
            end=end,
            read_end=read_end
        ))

    return ranges
