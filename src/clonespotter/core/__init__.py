"""
Core duplicate detection engine — collector, hasher, index, worker pool and aggregator.

This package contains the performance-critical foundation of clonespotter:
- FileCollectorImpl: sorted directory traversal with exclusion pruning
- HasherImpl: streaming full-content digests (MD5, SHA-1, SHA-256, SHA-512, xxHash128)
- DedupIndex: lock-guarded digest -> original table, first writer wins
- WorkerPool: fixed set of hashing threads consuming one shared queue
- StatsAggregator: groups duplicate pairs and computes summary counts
- DuplicateFinderImpl: collecting -> hashing -> aggregating pipeline

All components are pure Python with no console dependencies — suitable for CLI and library usage.
"""

from .filters import PathFilter
from .collector import FileCollectorImpl
from .hasher import HasherImpl, HashlibAlgorithmImpl, XXHash128AlgorithmImpl
from .index import DedupIndex
from .pool import WorkerPool, PoolReport
from .stats import StatsAggregator
from .finder import DuplicateFinder, DuplicateFinderImpl
from .models import (
    HashAlgorithm, ScanStage, WarningKind, ScanError, ScanWarning, DuplicatePair,
    ObserveResult, ScanStatistics, ScanResult, ScanParams,
    DEFAULT_WORKERS, DEFAULT_EXCLUDED_DIRS)

__all__ = [
    "PathFilter",
    "FileCollectorImpl",
    "HasherImpl",
    "HashlibAlgorithmImpl",
    "XXHash128AlgorithmImpl",
    "DedupIndex",
    "WorkerPool",
    "PoolReport",
    "StatsAggregator",
    "DuplicateFinder",
    "DuplicateFinderImpl",
    "HashAlgorithm",
    "ScanStage",
    "WarningKind",
    "ScanError",
    "ScanWarning",
    "DuplicatePair",
    "ObserveResult",
    "ScanStatistics",
    "ScanResult",
    "ScanParams",
    "DEFAULT_WORKERS",
    "DEFAULT_EXCLUDED_DIRS",
]
