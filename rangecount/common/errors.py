"""
Error types raised by the counting core.
"""

from typing import Optional


class RangeCountError(Exception):
    """Base class for all counting failures."""


class ConfigurationError(RangeCountError, ValueError):
    """Invalid run parameters, detected before any I/O."""


class FileAccessError(RangeCountError):
    """The input file could not be opened or stat'ed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SegmentCountError(RangeCountError):
    """A worker failed while reading its range."""

    def __init__(self, range_id: int, cause: BaseException):
        super().__init__(f"segment {range_id}: {cause}")
        self.range_id = range_id
        self.cause = cause
