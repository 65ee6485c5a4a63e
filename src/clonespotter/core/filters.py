"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/filters.py
Exclusion filter for directory entries.
"""

from typing import Iterable, Tuple


class PathFilter:
    """
    Decides whether a directory entry is skipped.

    Matching is plain substring search over the path string it is given, not
    per-segment comparison: with "build" excluded, both "src/build/x" and
    "src/rebuild.log" are skipped.
    """

    def __init__(self, excluded_dirs: Iterable[str] = ()):
        self.excluded_dirs: Tuple[str, ...] = tuple(d for d in excluded_dirs if d)

    def is_excluded(self, path: str) -> bool:
        """True if any excluded fragment occurs anywhere in `path`."""
        if not self.excluded_dirs:
            return False
        path_str = str(path)
        return any(fragment in path_str for fragment in self.excluded_dirs)

    def __repr__(self):
        return f"<PathFilter excluded={list(self.excluded_dirs)}>"
