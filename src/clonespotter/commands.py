"""
Unified command orchestrator for duplicate scans.
This is the SINGLE source of truth for the scan workflow — used by the CLI and by library callers.
No console dependencies — pure Python.
"""
from typing import List, Optional, Callable

from clonespotter.core.finder import DuplicateFinderImpl
from clonespotter.core.models import ScanParams, ScanResult, ScanWarning


class ScanCommand:
    """
    Orchestrates the scan workflow:
    1. Validate root directory (ScanError if unusable)
    2. Collect candidate files with exclusions applied
    3. Hash them on the worker pool and aggregate duplicates

    Usage:
        params = ScanParams.from_user_input("~/Downloads", "sha256", "tmp,cache")
        command = ScanCommand()
        result = command.execute(
            params,
            progress_callback=cli_progress_printer,
            warning_callback=cli_warning_printer
        )
    """

    def __init__(self):
        self._finder = DuplicateFinderImpl()
        self._files: List[str] = []  # Local state storage

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None,
            warning_callback: Optional[Callable[[ScanWarning], None]] = None
    ) -> ScanResult:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)
            warning_callback: (warning: ScanWarning) -> None

        Returns:
            ScanResult with groups, statistics and warnings

        Raises:
            ScanError: If the root directory is missing or not a directory
        """
        result = self._finder.find_duplicates(
            params,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            warning_callback=warning_callback
        )
        self._files = self._finder.get_files()
        return result

    def get_files(self) -> List[str]:
        """Get collected candidate paths after execution."""
        return self._files.copy()  # Return copy to prevent external mutation
