"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` so that
components can be swapped in tests without inheritance.

Key Components:
---------------
- HashAlgorithmImpl: Factory for incremental digest objects (hashlib / xxhash style).
- ContentHasher: Interface for computing the full-content digest of a file.
- FileCollector: Interface for walking a root directory into candidate paths.
- DuplicateIndex: Interface for the shared digest -> original table.
- DuplicateFinder: Interface for the main engine coordinating all phases.
"""

from typing import Protocol, List, Optional, Callable
from clonespotter.core.models import (
    ObserveResult,
    DuplicatePair,
    ScanParams,
    ScanResult,
    ScanWarning,
)

ProgressCallback = Callable[[str, int, Optional[int]], None]
WarningCallback = Callable[[ScanWarning], None]
StoppedFlag = Callable[[], bool]


# ===== Interfaces =====

class DigestState(Protocol):
    """Running digest state, as returned by hashlib.new() or xxhash.xxh3_128()."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithmImpl(Protocol):
    """
    Interface for pluggable digest algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the duplicate detection logic.
    """
    def new(self) -> DigestState:
        """Returns a fresh incremental digest object."""
        ...


class ContentHasher(Protocol):
    """Interface for hashing the full byte stream of a file."""
    def compute_hash(self, path: str) -> str: ...


class FileCollector(Protocol):
    """
    Interface for walking file systems and collecting candidate paths.
    """
    def collect(
        self,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None,
        warning_callback: Optional[WarningCallback] = None
    ) -> List[str]:
        """
        Collect files from the configured root directory.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).
            warning_callback: Optional sink for entries that could not be read.

        Returns:
            Flat list of file paths that survived exclusion filtering.
        """
        ...


class DuplicateIndex(Protocol):
    """
    Interface for the digest table shared by all hashing workers.
    Only the atomic observe() operation is exposed.
    """
    def observe(self, path: str, digest: str) -> ObserveResult: ...

    def pairs(self) -> List[DuplicatePair]: ...


class DuplicateFinder(Protocol):
    """
    Interface for the main engine.

    Runs collecting -> hashing -> aggregating and returns the grouped result.
    """
    def find_duplicates(
        self,
        params: ScanParams,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None,
        warning_callback: Optional[WarningCallback] = None
    ) -> ScanResult:
        """
        Run the full scan for the given parameters.

        Args:
            params: Scan configuration (root, algorithm, exclusions, workers).
            stopped_flag: Optional function to check for cancellation.
            progress_callback: Optional callback for progress updates (stage, current, total).
            warning_callback: Optional sink for recoverable per-entry problems.

        Returns:
            ScanResult with pairs, groups, statistics and collected warnings.

        Raises:
            ScanError: If the root directory is missing or not a directory.
        """
        ...
