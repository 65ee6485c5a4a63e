"""
Unit tests for WorkerPool.
Verifies that every path is processed exactly once, failures are absorbed,
progress is reported per file and cancellation stops claiming new work.
"""
import threading
import time

import pytest

from clonespotter.core.hasher import HasherImpl
from clonespotter.core.index import DedupIndex
from clonespotter.core.models import DEFAULT_WORKERS, WarningKind
from clonespotter.core.pool import WorkerPool


class FakeHasher:
    """Digest = content mapping; raises OSError for paths listed in `broken`."""

    def __init__(self, digests, broken=(), delay=0.0):
        self.digests = digests
        self.broken = set(broken)
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def compute_hash(self, path):
        with self._lock:
            self.calls.append(path)
        if self.delay:
            time.sleep(self.delay)
        if path in self.broken:
            raise OSError(f"Failed to read {path}: Permission denied")
        return self.digests[path]


class TestWorkerPool:

    @pytest.mark.parametrize("workers", [1, 4, 16])
    def test_each_path_processed_exactly_once(self, workers):
        paths = [f"f{i}" for i in range(100)]
        hasher = FakeHasher({p: f"d{i % 10}" for i, p in enumerate(paths)})
        index = DedupIndex()

        report = WorkerPool(hasher, index, workers=workers).run(paths)

        assert sorted(hasher.calls) == sorted(paths)
        assert report.processed == 100
        assert report.hashed == 100
        assert report.failed == 0
        assert len(index.pairs()) == 90

    @pytest.mark.parametrize("workers", [0, -3, None, "8"])
    def test_invalid_worker_count_coerced_to_default(self, workers):
        pool = WorkerPool(FakeHasher({}), DedupIndex(), workers=workers)
        assert pool.workers == DEFAULT_WORKERS

    def test_empty_path_list(self):
        report = WorkerPool(FakeHasher({}), DedupIndex()).run([])
        assert report.processed == 0
        assert not report.cancelled

    def test_failure_is_warned_and_skipped(self):
        """An unreadable file yields a HASH warning and does not stop other workers."""
        paths = ["a", "b", "c", "d"]
        hasher = FakeHasher({"a": "x", "b": "x", "c": "y", "d": "x"}, broken=["b"])
        index = DedupIndex()
        warnings = []

        report = WorkerPool(hasher, index, workers=2).run(paths, warning_callback=warnings.append)

        assert report.processed == 4
        assert report.hashed == 3
        assert report.failed == 1
        assert len(warnings) == 1
        assert warnings[0].kind == WarningKind.HASH
        assert warnings[0].path == "b"
        assert "b" not in {p.duplicate for p in index.pairs()}
        assert len(index.pairs()) == 1

    def test_unexpected_hasher_error_does_not_kill_pool(self):
        class ExplodingHasher:
            def compute_hash(self, path):
                if path == "bad":
                    raise ValueError("boom")
                return "same"

        index = DedupIndex()
        warnings = []
        report = WorkerPool(ExplodingHasher(), index, workers=3).run(
            ["a", "bad", "b", "c"], warning_callback=warnings.append
        )

        assert report.processed == 4
        assert report.failed == 1
        assert len(index.pairs()) == 2
        assert len(warnings) == 1

    def test_progress_one_unit_per_file_including_failures(self):
        paths = [f"f{i}" for i in range(20)]
        hasher = FakeHasher({p: p for p in paths}, broken=["f3", "f7"])
        calls = []

        WorkerPool(hasher, DedupIndex(), workers=4).run(
            paths, progress_callback=lambda stage, current, total: calls.append((stage, current, total))
        )

        assert len(calls) == 20
        assert [c[1] for c in calls] == list(range(1, 21))
        assert all(stage == "hashing" and total == 20 for stage, _, total in calls)

    def test_progress_callback_error_is_tolerated(self):
        def bad_progress(stage, current, total):
            raise RuntimeError("display gone")

        paths = ["a", "b"]
        report = WorkerPool(FakeHasher({"a": "1", "b": "1"}), DedupIndex(), workers=2).run(
            paths, progress_callback=bad_progress
        )

        assert report.processed == 2

    def test_cancellation_stops_claiming_new_files(self):
        """Once stopped, in-flight files finish but no new file is started."""
        paths = [f"f{i}" for i in range(50)]
        hasher = FakeHasher({p: p for p in paths}, delay=0.01)
        stop = threading.Event()

        def progress(stage, current, total):
            if current >= 3:
                stop.set()

        report = WorkerPool(hasher, DedupIndex(), workers=2).run(
            paths, stopped_flag=stop.is_set, progress_callback=progress
        )

        assert report.cancelled
        assert report.processed < 50
        assert len(hasher.calls) == report.processed

    def test_real_hasher_on_files(self, hello_world):
        paths = [str(hello_world / n) for n in ["a.txt", "b.txt", "c.txt"]]
        index = DedupIndex()

        WorkerPool(HasherImpl(), index, workers=1).run(paths)

        pairs = index.pairs()
        assert len(pairs) == 1
        assert pairs[0].original == paths[0]
        assert pairs[0].duplicate == paths[1]
