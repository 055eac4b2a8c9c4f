"""
Job Manager for counting runs
Validates a request, opens the input once, partitions it, dispatches the
ranges and consolidates the results, tracking each job's status
"""

import logging
import os
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from rangecount.common import config
from rangecount.common.errors import ConfigurationError, FileAccessError
from rangecount.coordinator.dispatcher import RangeDispatcher
from rangecount.coordinator.metrics import MetricsCollector
from rangecount.coordinator.partitioner import FileRange, partition_file_by_bytes
from rangecount.worker.consolidator import Consolidator
from rangecount.worker.range_counter import RangeResult, WordCount

logger = logging.getLogger(__name__)


class JobStatus(Enum):
    """Status of a counting job"""
    PENDING = "pending"
    PARTITIONING = "partitioning"
    COUNTING = "counting"
    CONSOLIDATING = "consolidating"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class CountJob:
    """Represents one count over one file"""
    job_id: str
    file_path: str
    num_segments: int
    overlap: int
    status: JobStatus = JobStatus.PENDING
    file_size: int = 0
    ranges: List[FileRange] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0
    error_message: str = ""


class JobManager:
    """Creates and runs counting jobs"""

    def __init__(self, dispatcher: Optional[RangeDispatcher] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.jobs: Dict[str, CountJob] = {}
        self.lock = threading.Lock()
        self.dispatcher = dispatcher or RangeDispatcher()
        self.consolidator = Consolidator()
        self.metrics = metrics

    def create_job(self, file_path: str, num_segments: int,
                   overlap: Optional[int] = None, job_id: Optional[str] = None) -> CountJob:
        """
        Register a new job

        Raises:
            ConfigurationError: If num_segments < 1 or overlap < 0
        """
        if overlap is None:
            overlap = config.OVERLAP_BYTES
        if num_segments < 1:
            raise ConfigurationError(f"segments must be >= 1, got {num_segments}")
        if overlap < 0:
            raise ConfigurationError(f"overlap must be >= 0, got {overlap}")

        job = CountJob(
            job_id=job_id or str(uuid.uuid4()),
            file_path=str(file_path),
            num_segments=num_segments,
            overlap=overlap
        )
        with self.lock:
            self.jobs[job.job_id] = job
        return job

    def _set_status(self, job: CountJob, status: JobStatus):
        with self.lock:
            job.status = status
        logger.debug(f"Job {job.job_id} -> {status.value}")

    def run_job(self, job: CountJob) -> Tuple[List[RangeResult], WordCount]:
        """
        Run a job to completion

        Returns:
            (results ordered by range_id, consolidated table)

        Raises:
            FileAccessError: If the file cannot be opened or stat'ed
            SegmentCountError: If any range fails

        Any exception marks the job FAILED before it propagates.
        """
        job.start_time = time.time()
        if self.metrics:
            self.metrics.start_run(job.job_id, job.file_path, job.num_segments, job.overlap)

        try:
            results, consolidated = self._execute(job)
        except Exception as e:
            with self.lock:
                job.status = JobStatus.FAILED
                job.error_message = str(e)
                job.end_time = time.time()
            logger.error(f"Job {job.job_id} failed: {e}")
            if self.metrics:
                self.metrics.end_run(job.job_id, None, succeeded=False)
            raise

        with self.lock:
            job.status = JobStatus.COMPLETED
            job.end_time = time.time()
        if self.metrics:
            self.metrics.end_run(job.job_id, consolidated)

        logger.info(f"Job {job.job_id} completed: {len(results)} ranges, "
                    f"{len(consolidated)} unique words in {job.end_time - job.start_time:.3f}s")
        return results, consolidated

    def _execute(self, job: CountJob) -> Tuple[List[RangeResult], WordCount]:
        try:
            fd = os.open(job.file_path, os.O_RDONLY)
        except OSError as e:
            raise FileAccessError(f"open file: {e}", job.file_path) from e

        try:
            try:
                job.file_size = os.fstat(fd).st_size
            except OSError as e:
                raise FileAccessError(f"stat file: {e}", job.file_path) from e
            if self.metrics:
                self.metrics.record_file_size(job.job_id, job.file_size)

            self._set_status(job, JobStatus.PARTITIONING)
            job.ranges = partition_file_by_bytes(job.file_size, job.num_segments, job.overlap)
            logger.info(f"Job {job.job_id}: {job.file_size} bytes in {len(job.ranges)} ranges")

            self._set_status(job, JobStatus.COUNTING)
            results = self.dispatcher.run_all(job.ranges, fd)
        finally:
            os.close(fd)

        if self.metrics:
            self.metrics.end_counting(job.job_id, results)

        self._set_status(job, JobStatus.CONSOLIDATING)
        consolidated = self.consolidator.consolidate(results)
        return results, consolidated

    def get_job_status(self, job_id: str) -> Optional[Dict]:
        """Get current job status"""
        with self.lock:
            job = self.jobs.get(job_id)
            if not job:
                return None

            return {
                'status': job.status.value,
                'file_path': job.file_path,
                'file_size': job.file_size,
                'num_ranges': len(job.ranges),
                'error_message': job.error_message
            }


def count_file_concurrently(file_path: str, num_segments: int,
                            overlap: Optional[int] = None,
                            metrics: Optional[MetricsCollector] = None,
                            max_workers: Optional[int] = None) -> Tuple[List[RangeResult], WordCount]:
    """
    Count word frequencies in a file using num_segments concurrent workers

    Args:
        file_path: Input file
        num_segments: Number of byte ranges (and workers)
        overlap: Read-ahead window; defaults to config.OVERLAP_BYTES
        metrics: Optional collector the run is recorded in
        max_workers: Optional cap on worker threads

    Returns:
        (range results ordered by range_id, consolidated word table).
        An empty file yields ([], {}).

    Raises:
        ConfigurationError: If num_segments < 1
        FileAccessError: If the file cannot be opened or stat'ed
        SegmentCountError: If any worker fails to read its range
    """
    manager = JobManager(dispatcher=RangeDispatcher(max_workers=max_workers), metrics=metrics)
    job = manager.create_job(file_path, num_segments, overlap)
    return manager.run_job(job)
