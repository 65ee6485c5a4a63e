"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pool.py
Fixed-size pool of hashing threads fed from one shared queue.

Each worker repeatedly takes the next unclaimed path, hashes it and submits
the digest to the DedupIndex. A file that cannot be read is reported as a
hash warning and skipped; it never stops the pool. run() blocks until every
worker has exited.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from clonespotter.core.interfaces import (
    ContentHasher, DuplicateIndex, ProgressCallback, StoppedFlag, WarningCallback
)
from clonespotter.core.models import DEFAULT_WORKERS, ScanStage, ScanWarning, WarningKind

logger = logging.getLogger(__name__)


@dataclass
class PoolReport:
    """Counters for one pool run."""
    processed: int = 0
    hashed: int = 0
    failed: int = 0
    cancelled: bool = False


class WorkerPool:
    """
    Distributes candidate paths over `workers` threads.

    Work is pulled from a queue rather than statically partitioned, so one
    large file only occupies the worker that claimed it.
    """

    _SENTINEL = object()

    def __init__(self, hasher: ContentHasher, index: DuplicateIndex, workers: int = DEFAULT_WORKERS):
        self.hasher = hasher
        self.index = index
        self.workers = workers if isinstance(workers, int) and workers > 0 else DEFAULT_WORKERS

        self._progress_lock = threading.Lock()
        self._report = PoolReport()

    def run(
        self,
        paths: Sequence[str],
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None,
        warning_callback: Optional[WarningCallback] = None
    ) -> PoolReport:
        """
        Processes every path exactly once and returns when all workers are done.

        Args:
            paths: Candidate file paths, in the order they are queued.
            stopped_flag: When it returns True, workers stop claiming new paths;
                          a file already being hashed is finished first.
            progress_callback: Called once per finished file (success or failure)
                               with ("hashing", completed, total).
            warning_callback: Receives a HASH warning for every unreadable file.
        """
        self._report = PoolReport()
        total = len(paths)
        if total == 0:
            return self._report

        work_queue: "queue.Queue[object]" = queue.Queue()
        for path in paths:
            work_queue.put(path)

        thread_count = min(self.workers, total)
        for _ in range(thread_count):
            work_queue.put(self._SENTINEL)

        logger.debug(f"Starting {thread_count} hashing workers for {total} files")

        threads: List[threading.Thread] = []
        for i in range(thread_count):
            thread = threading.Thread(
                target=self._worker,
                args=(work_queue, total, stopped_flag, progress_callback, warning_callback),
                name=f"clonespotter-hasher-{i}",
                daemon=True
            )
            threads.append(thread)
            thread.start()

        for thread in threads:
            thread.join()

        if stopped_flag and stopped_flag() and self._report.processed < total:
            self._report.cancelled = True
            logger.debug(f"Hashing cancelled after {self._report.processed}/{total} files")

        return self._report

    def _worker(
        self,
        work_queue: "queue.Queue[object]",
        total: int,
        stopped_flag: Optional[StoppedFlag],
        progress_callback: Optional[ProgressCallback],
        warning_callback: Optional[WarningCallback]
    ) -> None:
        while True:
            item = work_queue.get()
            if item is self._SENTINEL:
                break
            if stopped_flag and stopped_flag():
                break

            path = str(item)
            hashed = self._process(path, warning_callback)
            self._complete(hashed, total, progress_callback)

    def _process(self, path: str, warning_callback: Optional[WarningCallback]) -> bool:
        """Hashes one file and submits it. False if the file had to be skipped."""
        try:
            digest = self.hasher.compute_hash(path)
        except Exception as e:
            logger.warning(f"Skipping {path}: {e}")
            if warning_callback:
                try:
                    warning_callback(ScanWarning(kind=WarningKind.HASH, path=path, message=str(e)))
                except Exception:
                    logger.exception("Error in warning handler")
            return False

        result = self.index.observe(path, digest)
        if result.is_duplicate:
            logger.debug(f"Duplicate: {path} == {result.original}")
        return True

    def _complete(self, hashed: bool, total: int, progress_callback: Optional[ProgressCallback]) -> None:
        with self._progress_lock:
            self._report.processed += 1
            if hashed:
                self._report.hashed += 1
            else:
                self._report.failed += 1

            if progress_callback:
                try:
                    progress_callback(ScanStage.HASHING.value, self._report.processed, total)
                except Exception:
                    logger.exception("Error in progress handler")
