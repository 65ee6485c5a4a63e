"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/index.py
Shared digest table used by the hashing workers.

The first path observed for a digest becomes its original for the lifetime
of the scan. Every later path with the same digest produces one
DuplicatePair. Under several workers, which path wins a digest depends on
scheduling; only the set of duplicate relations is stable across runs.
"""

import threading
from typing import Dict, List

from clonespotter.core.interfaces import DuplicateIndex
from clonespotter.core.models import DuplicatePair, ObserveResult


class DedupIndex(DuplicateIndex):
    """
    Digest -> original path table plus the list of duplicate pairs.
    Both are mutated only inside observe(), under a single lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._originals: Dict[str, str] = {}
        self._pairs: List[DuplicatePair] = []
        self._seen_paths: Dict[str, set] = {}

    def observe(self, path: str, digest: str) -> ObserveResult:
        """
        Atomically records `path` under `digest`.

        Returns:
            ObserveResult.new_original() if the digest was unknown,
            otherwise ObserveResult.duplicate_of(original).
        """
        with self._lock:
            original = self._originals.get(digest)
            if original is None:
                self._originals[digest] = path
                self._seen_paths[digest] = {path}
                return ObserveResult.new_original()

            seen = self._seen_paths[digest]
            if path not in seen:
                # A path re-submitted for the same digest is not a new duplicate
                seen.add(path)
                self._pairs.append(DuplicatePair(original=original, duplicate=path))
            return ObserveResult.duplicate_of(original)

    def pairs(self) -> List[DuplicatePair]:
        """Snapshot of the pairs recorded so far, in discovery order."""
        with self._lock:
            return list(self._pairs)

    def reset(self) -> None:
        """Drops all state; called at the start of every scan."""
        with self._lock:
            self._originals.clear()
            self._pairs.clear()
            self._seen_paths.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._originals)

    def __repr__(self):
        return f"<DedupIndex digests={len(self._originals)}, pairs={len(self._pairs)}>"
