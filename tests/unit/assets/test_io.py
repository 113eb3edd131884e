"""Unit tests for output file I/O."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from sanity.assets import (
    atomic_write_bytes,
    atomic_write_text,
    clear_directory,
    copy_file,
    ensure_dir,
)


class TestAtomicWrite:
    """Tests for atomic_write_bytes/text."""

    def test_creates_parents(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c.txt"
        atomic_write_text(target, "hello")
        assert target.read_text() == "hello"

    def test_replaces_existing(self, tmp_path: Path):
        target = tmp_path / "c.txt"
        target.write_text("old")
        atomic_write_bytes(target, b"new")
        assert target.read_bytes() == b"new"

    def test_no_temp_files_left(self, tmp_path: Path):
        atomic_write_text(tmp_path / "c.txt", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["c.txt"]

    def test_failed_write_keeps_previous(self, tmp_path: Path):
        """Test a failure during replace leaves the old file and no temp file."""
        target = tmp_path / "c.txt"
        target.write_text("old")
        with patch("sanity.assets.io.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write_text(target, "new")
        assert target.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["c.txt"]

    def test_mode(self, tmp_path: Path):
        target = tmp_path / "c.txt"
        atomic_write_text(target, "x", mode=0o600)
        assert os.stat(target).st_mode & 0o777 == 0o600


class TestCopyFile:
    """Tests for copy_file()."""

    def test_copies_bytes(self, tmp_path: Path):
        source = tmp_path / "src.bin"
        source.write_bytes(b"\x00\x01\x02")
        dest = tmp_path / "out" / "dst.bin"
        copy_file(source, dest)
        assert dest.read_bytes() == b"\x00\x01\x02"

    def test_missing_source_raises(self, tmp_path: Path):
        with pytest.raises(OSError):
            copy_file(tmp_path / "nope", tmp_path / "out")
        assert not (tmp_path / "out").exists()


class TestClearDirectory:
    """Tests for clear_directory()."""

    def test_missing_directory(self, tmp_path: Path):
        assert clear_directory(tmp_path / "dist") == 0

    def test_removes_children_keeps_root(self, tmp_path: Path):
        root = tmp_path / "dist"
        ensure_dir(root / "nested" / "deeper")
        (root / "index.html").write_text("x")
        (root / "nested" / "a.css").write_text("y")

        assert clear_directory(root) == 2
        assert root.is_dir()
        assert list(root.iterdir()) == []
