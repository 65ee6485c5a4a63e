"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for content-based duplicate detection.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


# =============================
# Enums
# =============================

class HashAlgorithm(Enum):
    """
    Digest algorithm used to fingerprint file content.
    """
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            HashAlgorithm.MD5: "MD5",
            HashAlgorithm.SHA1: "SHA-1",
            HashAlgorithm.SHA256: "SHA-256",
            HashAlgorithm.SHA512: "SHA-512",
            HashAlgorithm.XXH128: "xxHash128",
        }
        return mapping.get(self, self.value)

    @property
    def digest_size(self) -> int:
        """Digest length in bytes (hex string is twice as long)."""
        mapping = {
            HashAlgorithm.MD5: 16,
            HashAlgorithm.SHA1: 20,
            HashAlgorithm.SHA256: 32,
            HashAlgorithm.SHA512: 64,
            HashAlgorithm.XXH128: 16,
        }
        return mapping[self]

    @classmethod
    def default(cls) -> "HashAlgorithm":
        return cls.MD5

    @classmethod
    def is_valid(cls, selector: Optional[str]) -> bool:
        """Strict check used by the CLI before a scan is configured."""
        if not selector:
            return False
        return selector.strip().lower() in {a.value for a in cls}

    @classmethod
    def parse(cls, selector) -> "HashAlgorithm":
        """
        Case-insensitive lookup. Unknown selectors fall back to the default
        (MD5) instead of failing, so a bad config value never aborts a scan.
        """
        if isinstance(selector, cls):
            return selector
        if isinstance(selector, str):
            key = selector.strip().lower()
            for algorithm in cls:
                if algorithm.value == key:
                    return algorithm
        return cls.default()

    def __repr__(self) -> str:
        return self.value


class ScanStage(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    HASHING = "hashing"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


class WarningKind(str, Enum):
    TRAVERSAL = "traversal"
    HASH = "hash"


# =============================
# Errors and warning events
# =============================

class ScanError(RuntimeError):
    """Fatal scan failure: the root directory is missing or not a directory."""


@dataclass(frozen=True)
class ScanWarning:
    """
    A recoverable problem met during a scan.
    Reported to the caller instead of being raised.
    """
    kind: WarningKind
    path: str
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.path}: {self.message}"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class DuplicatePair:
    """
    `original` is the first path seen with a digest, `duplicate` any later one.
    """
    original: str
    duplicate: str

    def to_dict(self) -> Dict[str, str]:
        return {"original": self.original, "duplicate": self.duplicate}


@dataclass(frozen=True)
class ObserveResult:
    """Outcome of DedupIndex.observe(): either a new original or a duplicate of one."""
    original: Optional[str] = None

    @property
    def is_new_original(self) -> bool:
        return self.original is None

    @property
    def is_duplicate(self) -> bool:
        return self.original is not None

    @staticmethod
    def new_original() -> "ObserveResult":
        return ObserveResult()

    @staticmethod
    def duplicate_of(original: str) -> "ObserveResult":
        return ObserveResult(original=original)


# original path -> duplicate paths in discovery order
DuplicateGroups = Dict[str, List[str]]


@dataclass(frozen=True)
class ScanStatistics:
    """
    Summary counts derived from the grouped duplicates.
    total_duplicate_files == total_duplicates + unique_originals
    """
    total_duplicates: int = 0
    unique_originals: int = 0
    total_duplicate_files: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalDuplicates": self.total_duplicates,
            "uniqueOriginals": self.unique_originals,
            "totalDuplicateFiles": self.total_duplicate_files,
        }


@dataclass
class ScanResult:
    """
    Everything a finished (or cancelled) scan hands back to the caller.
    """
    pairs: List[DuplicatePair] = field(default_factory=list)
    groups: DuplicateGroups = field(default_factory=dict)
    stats: ScanStatistics = field(default_factory=ScanStatistics)
    warnings: List[ScanWarning] = field(default_factory=list)
    files_scanned: int = 0
    files_hashed: int = 0
    cancelled: bool = False
    phase_times: Dict[str, float] = field(default_factory=dict)
    total_time: float = 0.0

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def warnings_of(self, kind: WarningKind) -> List[ScanWarning]:
        return [w for w in self.warnings if w.kind == kind]

    def print_summary(self) -> str:
        labels = {
            ScanStage.COLLECTING.value: "📁 Collecting",
            ScanStage.HASHING.value: "🔍 Hashing",
            ScanStage.AGGREGATING.value: "📊 Aggregating",
        }

        lines = [
            "📊 Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Files scanned: {self.files_scanned}",
            f"Files hashed: {self.files_hashed}",
            f"Warnings: {self.warning_count}",
        ]
        for phase, duration in self.phase_times.items():
            label = labels.get(phase, phase.title())
            lines.append(f"{label}: {duration:.3f}s")

        return "\n".join(lines)


"""
Scan configuration with built-in validation.
Interface-agnostic: constructed once by the caller and threaded through
every core component.
"""

DEFAULT_WORKERS = 4
DEFAULT_EXCLUDED_DIRS = ("node_modules", ".git", ".DS_Store", "dist", "build")


def clean_dir_path(path: str) -> str:
    """Expands a leading ~ to the user's home directory."""
    if not path:
        return path
    return os.path.expanduser(path.strip())


@dataclass
class ScanParams:
    """Parameters for a duplicate scan with validation."""
    root_dir: str
    algorithm: HashAlgorithm = HashAlgorithm.MD5
    excluded_dirs: List[str] = field(default_factory=list)
    workers: int = DEFAULT_WORKERS
    follow_symlinks: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        self.algorithm = HashAlgorithm.parse(self.algorithm)

        # Keep order, drop blanks and repeats
        normalized = []
        for fragment in self.excluded_dirs:
            fragment = fragment.strip()
            if fragment and fragment not in normalized:
                normalized.append(fragment)
        self.excluded_dirs = normalized

        try:
            workers = int(self.workers)
        except (TypeError, ValueError):
            workers = DEFAULT_WORKERS
        self.workers = workers if workers > 0 else DEFAULT_WORKERS

    @staticmethod
    def from_user_input(
            root_dir: str,
            algorithm: str = HashAlgorithm.MD5.value,
            exclude_str: str = "",
            workers=DEFAULT_WORKERS,
            use_default_excludes: bool = True,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing and interactive prompts.
        """
        excluded = list(DEFAULT_EXCLUDED_DIRS) if use_default_excludes else []
        if exclude_str:
            excluded.extend(d.strip() for d in exclude_str.split(",") if d.strip())

        return ScanParams(
            root_dir=clean_dir_path(root_dir),
            algorithm=HashAlgorithm.parse(algorithm),
            excluded_dirs=excluded,
            workers=workers,
        )
