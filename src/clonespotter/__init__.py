"""
Clone Spotter — finds duplicate files by content digest.

Core features:
- Content-based detection: MD5, SHA-1, SHA-256, SHA-512 or xxHash128 digests
- Parallel hashing on a fixed pool of worker threads
- Substring-based directory exclusions (node_modules, .git, dist, build by default)
- JSON report mapping each original to its duplicates
- CLI interface with an interactive mode
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("clonespotter")
except Exception:
    __version__ = "2.0.0"

# Public API — only what users should import directly
from clonespotter.commands import ScanCommand
from clonespotter.core import (
    ScanParams, ScanResult, ScanError, ScanWarning, HashAlgorithm, DuplicatePair, ScanStatistics
)
from clonespotter.utils.convert_utils import ConvertUtils
from clonespotter.services import ReportService

__all__ = [
    "ScanCommand",
    "ScanParams",
    "ScanResult",
    "ScanError",
    "ScanWarning",
    "HashAlgorithm",
    "DuplicatePair",
    "ScanStatistics",
    "ConvertUtils",
    "ReportService",
    "__version__",
]
