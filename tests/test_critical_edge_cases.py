"""
Edge cases where the file system changes under a running scan.
None of them may abort the scan or lose results for other files.
"""
import os

from clonespotter.core.collector import FileCollectorImpl
from clonespotter.core.finder import DuplicateFinderImpl
from clonespotter.core.models import ScanParams, WarningKind
from clonespotter.core.pool import WorkerPool
from clonespotter.core.hasher import HasherImpl
from clonespotter.core.index import DedupIndex


class TestFilesystemRaces:

    def test_file_deleted_after_walk_before_hash(self, tmp_path):
        """A vanished candidate becomes a hash warning; remaining duplicates are still paired."""
        for name in ["a.txt", "b.txt", "c.txt"]:
            (tmp_path / name).write_bytes(b"same")

        paths = FileCollectorImpl(str(tmp_path)).collect()
        os.remove(paths[1])
        warnings = []

        index = DedupIndex()
        report = WorkerPool(HasherImpl(), index, workers=2).run(paths, warning_callback=warnings.append)

        assert report.failed == 1
        assert [w.kind for w in warnings] == [WarningKind.HASH]
        assert warnings[0].path == paths[1]
        assert len(index.pairs()) == 1

    def test_large_file_hashed_in_chunks(self, tmp_path):
        """Files far larger than one chunk are read incrementally and still match."""
        blob = os.urandom(1024) * 300
        (tmp_path / "big1.bin").write_bytes(blob)
        (tmp_path / "big2.bin").write_bytes(blob)
        (tmp_path / "big3.bin").write_bytes(blob + b"!")

        result = DuplicateFinderImpl().find_duplicates(ScanParams(root_dir=str(tmp_path), workers=1))

        assert result.groups == {str(tmp_path / "big1.bin"): [str(tmp_path / "big2.bin")]}

    def test_identical_names_different_content(self, tmp_path):
        """Names never matter: same name in two folders with different bytes is not a duplicate."""
        (tmp_path / "x").mkdir()
        (tmp_path / "y").mkdir()
        (tmp_path / "x" / "photo.jpg").write_bytes(b"one")
        (tmp_path / "y" / "photo.jpg").write_bytes(b"two")
        (tmp_path / "y" / "renamed.jpg").write_bytes(b"one")

        result = DuplicateFinderImpl().find_duplicates(ScanParams(root_dir=str(tmp_path), workers=1))

        assert result.groups == {
            str(tmp_path / "x" / "photo.jpg"): [str(tmp_path / "y" / "renamed.jpg")]
        }

    def test_repeated_scans_do_not_accumulate(self, tmp_path):
        (tmp_path / "a").write_bytes(b"1")
        (tmp_path / "b").write_bytes(b"1")
        finder = DuplicateFinderImpl()
        params = ScanParams(root_dir=str(tmp_path))

        for _ in range(5):
            result = finder.find_duplicates(params)

        assert len(result.pairs) == 1
        assert len(finder.index) == 1
