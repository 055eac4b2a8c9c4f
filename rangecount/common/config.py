"""
Runtime configuration.

Every value can be overridden through the environment so the CLI, the
benchmark runner and the tests share one source of defaults.
"""

import os
from typing import Optional

import psutil


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


# Bytes read past a range's owned end so a boundary-crossing word can be finished
OVERLAP_BYTES = _int_from_env('RANGECOUNT_OVERLAP_BYTES', 64 * 1024)

# Chunk size for each positioned read
READ_BUFFER_SIZE = _int_from_env('RANGECOUNT_READ_BUFFER', 32 * 1024)

# Upper bound on the thread pool; None means one thread per range
MAX_WORKERS = _int_from_env('RANGECOUNT_MAX_WORKERS', None)

LOG_LEVEL = os.getenv('RANGECOUNT_LOG_LEVEL', 'INFO').upper()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def default_segment_count() -> int:
    """Segment count used when the caller does not choose one."""
    configured = _int_from_env('RANGECOUNT_SEGMENTS', None)
    if configured is not None:
        return configured
    return psutil.cpu_count(logical=True) or 4
