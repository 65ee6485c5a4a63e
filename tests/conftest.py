"""
Shared fixtures for duplicate finder tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'clonespotter' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate scenarios:
    - 3 identical files (one in a subdirectory)
    - 2 identical files with different content
    - 2 unique files
    - 2 empty files (identical zero-byte content)
    - 1 duplicate hidden inside node_modules (excluded by default)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.bin"
    files["dup2_b"] = temp_dir / "dup2_b.bin"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["empty1"] = temp_dir / "empty1.txt"
    files["empty1"].write_bytes(b"")
    files["empty2"] = temp_dir / "empty2.txt"
    files["empty2"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)  # Same as dup1_a/b

    modules = temp_dir / "node_modules" / "pkg"
    modules.mkdir(parents=True)
    files["module_dup"] = modules / "index.txt"
    files["module_dup"].write_bytes(content_b)  # Same as dup2_a/b

    return files


@pytest.fixture
def hello_world(temp_dir) -> Path:
    """a.txt="hello", b.txt="hello", c.txt="world"."""
    (temp_dir / "a.txt").write_bytes(b"hello")
    (temp_dir / "b.txt").write_bytes(b"hello")
    (temp_dir / "c.txt").write_bytes(b"world")
    return temp_dir
