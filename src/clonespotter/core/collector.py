"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/collector.py
Implements directory traversal for the duplicate finder.
Features:
- Walks the tree with os.walk in sorted order, so one run is reproducible
- Prunes excluded directories before os.walk descends into them
- Skips symbolic links and special files (FIFOs, sockets, devices)
- Reports unreadable entries as traversal warnings instead of failing
"""

import os
import time
import logging
from typing import List, Optional

from clonespotter.core.filters import PathFilter
from clonespotter.core.interfaces import (
    FileCollector, ProgressCallback, StoppedFlag, WarningCallback
)
from clonespotter.core.models import ScanError, ScanStage, ScanWarning, WarningKind

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000


class FileCollectorImpl(FileCollector):
    """
    Walks a root directory and returns the flat list of candidate file paths.

    Exclusion fragments are matched against the full joined path, root
    included: a root that itself lives under e.g. "./dist_release" yields nothing
    when "dist" is excluded.

    Attributes:
        root_dir: Root directory to walk
        path_filter: Exclusion filter applied to directories and files
        follow_symlinks: Descend into symlinked directories and hash symlinked files
    """

    def __init__(
        self,
        root_dir: str,
        path_filter: Optional[PathFilter] = None,
        follow_symlinks: bool = False
    ):
        self.root_dir = root_dir
        self.path_filter = path_filter if path_filter is not None else PathFilter()
        self.follow_symlinks = follow_symlinks

    def collect(self,
                stopped_flag: Optional[StoppedFlag] = None,
                progress_callback: Optional[ProgressCallback] = None,
                warning_callback: Optional[WarningCallback] = None) -> List[str]:
        """
        Single-pass traversal with throttled progress updates.
        Returns candidate paths in traversal order.

        Raises:
            ScanError: If the root does not exist, is not a directory,
                       or cannot be listed at all.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        logger.debug(f"Filters: {self.path_filter!r}, follow_symlinks={self.follow_symlinks}")

        self._validate_root()

        if stopped_flag and stopped_flag():
            logger.debug("Collection cancelled before start")
            return []

        found_files: List[str] = []
        root_failure: List[OSError] = []
        progress_counter = 0
        root_norm = os.path.normpath(self.root_dir)

        def on_walk_error(error: OSError) -> None:
            failed = getattr(error, "filename", None) or self.root_dir
            if os.path.normpath(str(failed)) == root_norm:
                root_failure.append(error)
                return
            self._warn(warning_callback, str(failed), error)

        start_time = time.time()

        for root, dirs, files in os.walk(self.root_dir, topdown=True,
                                         onerror=on_walk_error,
                                         followlinks=self.follow_symlinks):
            if stopped_flag and stopped_flag():
                logger.debug("Collection interrupted by user")
                return []

            # Prune BEFORE os.walk enters them; sorting keeps the order stable
            dirs[:] = sorted(d for d in dirs if self._accept_dir(os.path.join(root, d)))

            for filename in sorted(files):
                path = os.path.join(root, filename)
                if self._accept_file(path, warning_callback):
                    found_files.append(path)
                    progress_counter += 1

                    if progress_callback and progress_counter >= PROGRESS_INTERVAL:
                        progress_callback(ScanStage.COLLECTING.value, len(found_files), None)
                        progress_counter = 0

        if root_failure:
            error_msg = f"Cannot read directory {self.root_dir}: {root_failure[0]}"
            logger.error(error_msg)
            raise ScanError(error_msg) from root_failure[0]

        if progress_callback:
            progress_callback(ScanStage.COLLECTING.value, len(found_files), len(found_files))

        logger.debug(f"Total collection time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Collection completed. Found {len(found_files)} files.")
        return found_files

    def _validate_root(self) -> None:
        if not os.path.exists(self.root_dir):
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise ScanError(error_msg)
        if not os.path.isdir(self.root_dir):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise ScanError(error_msg)

    def _accept_dir(self, path: str) -> bool:
        """Exclusion check and recursion stop in one step."""
        if self.path_filter.is_excluded(path):
            logger.debug(f"Skipping excluded directory: {path}")
            return False
        return True

    def _accept_file(self, path: str, warning_callback: Optional[WarningCallback]) -> bool:
        if self.path_filter.is_excluded(path):
            logger.debug(f"Skipping excluded file: {path}")
            return False

        try:
            if os.path.islink(path) and not self.follow_symlinks:
                logger.debug(f"Skipping symbolic link: {path}")
                return False
            if not os.path.isfile(path):
                if os.path.lexists(path) and not os.path.exists(path):
                    self._warn(warning_callback, path, "broken symbolic link")
                else:
                    logger.debug(f"Skipping special file: {path}")
                return False
        except OSError as e:
            self._warn(warning_callback, path, e)
            return False

        return True

    @staticmethod
    def _warn(warning_callback: Optional[WarningCallback], path: str, error) -> None:
        warning = ScanWarning(kind=WarningKind.TRAVERSAL, path=path, message=str(error))
        logger.warning(f"Could not read {path}: {error}")
        if warning_callback:
            try:
                warning_callback(warning)
            except Exception:
                logger.exception("Error in warning handler")
