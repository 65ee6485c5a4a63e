"""
core/stats.py
Pure functions turning the finished pair list into groups and summary counts.
"""

from typing import Iterable, Tuple

from clonespotter.core.models import DuplicateGroups, DuplicatePair, ScanStatistics


class StatsAggregator:
    @staticmethod
    def group_duplicates(pairs: Iterable[DuplicatePair]) -> DuplicateGroups:
        """
        Groups duplicates under their original.
        Originals and duplicates both keep first-seen order; nothing is sorted.
        """
        groups: DuplicateGroups = {}
        for pair in pairs:
            groups.setdefault(pair.original, []).append(pair.duplicate)
        return groups

    @staticmethod
    def compute_statistics(groups: DuplicateGroups) -> ScanStatistics:
        total_duplicates = sum(len(dups) for dups in groups.values())
        unique_originals = len(groups)
        return ScanStatistics(
            total_duplicates=total_duplicates,
            unique_originals=unique_originals,
            total_duplicate_files=total_duplicates + unique_originals,
        )

    @staticmethod
    def aggregate(pairs: Iterable[DuplicatePair]) -> Tuple[DuplicateGroups, ScanStatistics]:
        groups = StatsAggregator.group_duplicates(pairs)
        return groups, StatsAggregator.compute_statistics(groups)
