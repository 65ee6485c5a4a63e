"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/finder.py
Implements the duplicate finder as a strict phase pipeline:
    collecting -> hashing -> aggregating

Collecting is single-threaded. Hashing fans the candidate list out over a
WorkerPool that feeds one DedupIndex. Aggregating is a pure pass over the
finished pair list. Only ScanError (bad root) escapes; per-entry problems are
collected as warnings.
"""
import time
import logging
import threading
from typing import List, Optional

from clonespotter.core.collector import FileCollectorImpl
from clonespotter.core.filters import PathFilter
from clonespotter.core.hasher import HasherImpl
from clonespotter.core.index import DedupIndex
from clonespotter.core.interfaces import (
    DuplicateFinder, ProgressCallback, StoppedFlag, WarningCallback
)
from clonespotter.core.models import ScanError, ScanParams, ScanResult, ScanStage, ScanWarning
from clonespotter.core.pool import WorkerPool
from clonespotter.core.stats import StatsAggregator

logger = logging.getLogger(__name__)


# =============================
# Main Finder Class
# =============================
class DuplicateFinderImpl(DuplicateFinder):
    """
    Runs one full scan per find_duplicates() call.
    The DedupIndex is reset at the start of every scan; no state survives between runs.
    """
    def __init__(self, index: Optional[DedupIndex] = None):
        self.index = index or DedupIndex()
        self.stage = ScanStage.IDLE
        self._files: List[str] = []

    def find_duplicates(
        self,
        params: ScanParams,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None,
        warning_callback: Optional[WarningCallback] = None
    ) -> ScanResult:
        """
        Main scan pipeline.
        Args:
            params: Scan configuration
            stopped_flag (Optional[Callable[[], bool]]): Function that returns True if operation should be stopped.
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per phase.
            warning_callback (Optional[Callable[[ScanWarning], None]]): Receives recoverable problems.
        Returns:
            ScanResult
        Raises:
            ScanError: root directory missing, not a directory, or unreadable.
        """
        result = ScanResult()
        total_start_time = time.time()
        warnings_lock = threading.Lock()
        self.index.reset()
        self._files = []

        def record_warning(warning: ScanWarning) -> None:
            with warnings_lock:
                result.warnings.append(warning)
            if warning_callback:
                warning_callback(warning)

        # Phase 1: collect candidate paths
        self.stage = ScanStage.COLLECTING
        logger.info(f"Scanning {params.root_dir} with {params.algorithm.value}, {params.workers} workers")
        collector = FileCollectorImpl(
            root_dir=params.root_dir,
            path_filter=PathFilter(params.excluded_dirs),
            follow_symlinks=params.follow_symlinks
        )
        start_time = time.time()
        try:
            self._files = collector.collect(
                stopped_flag=stopped_flag,
                progress_callback=progress_callback,
                warning_callback=record_warning
            )
        except ScanError:
            self.stage = ScanStage.FAILED
            raise
        result.phase_times[ScanStage.COLLECTING.value] = time.time() - start_time
        result.files_scanned = len(self._files)

        if stopped_flag and stopped_flag():
            return self._finish_cancelled(result, total_start_time)

        # Phase 2: hash in parallel
        self.stage = ScanStage.HASHING
        pool = WorkerPool(
            hasher=HasherImpl(params.algorithm),
            index=self.index,
            workers=params.workers
        )
        start_time = time.time()
        report = pool.run(
            self._files,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            warning_callback=record_warning
        )
        result.phase_times[ScanStage.HASHING.value] = time.time() - start_time
        result.files_hashed = report.hashed

        if report.cancelled:
            return self._finish_cancelled(result, total_start_time)

        # Phase 3: aggregate
        self.stage = ScanStage.AGGREGATING
        start_time = time.time()
        result.pairs = self.index.pairs()
        result.groups, result.stats = StatsAggregator.aggregate(result.pairs)
        result.phase_times[ScanStage.AGGREGATING.value] = time.time() - start_time

        # Finalize
        result.total_time = time.time() - total_start_time
        self.stage = ScanStage.DONE
        logger.info(
            f"Scan completed: {result.stats.total_duplicates} duplicates of "
            f"{result.stats.unique_originals} originals, {result.warning_count} warnings"
        )
        return result

    def get_files(self) -> List[str]:
        """Candidate paths from the last scan."""
        return list(self._files)

    def _finish_cancelled(self, result: ScanResult, total_start_time: float) -> ScanResult:
        """Cancelled scans report what was found so far, flagged as incomplete."""
        result.cancelled = True
        result.pairs = self.index.pairs()
        result.groups, result.stats = StatsAggregator.aggregate(result.pairs)
        result.total_time = time.time() - total_start_time
        self.stage = ScanStage.DONE
        logger.debug("Scan cancelled by user")
        return result
