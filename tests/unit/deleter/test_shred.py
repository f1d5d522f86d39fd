"""Unit tests for secure erasure.

Tests for overwrite passes, symlink handling, and directory shredding.
"""

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from nuke.deleter.shred import CHUNK_SIZE, SHRED_PASSES, shred_file, shred_tree
from nuke.errors import NukeIOError

_real_open = open


class _RecordingFile:
    """File wrapper counting the bytes written through it."""

    def __init__(self, f: Any, written: list[int]) -> None:
        self._f = f
        self._written = written

    def write(self, data: bytes) -> int:
        self._written.append(len(data))
        return self._f.write(data)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._f, name)

    def __enter__(self) -> "_RecordingFile":
        return self

    def __exit__(self, *exc: object) -> None:
        self._f.close()


class TestShredFile:
    """Tests for shred_file function."""

    def test_three_full_passes_then_unlink(self, tmp_path: Path) -> None:
        """A 3 MB file receives three full-length passes and is removed."""
        size = 3 * 1024 * 1024
        target = tmp_path / "secret.bin"
        target.write_bytes(b"S" * size)
        written: list[int] = []

        def recording_open(path: str, mode: str) -> _RecordingFile:
            return _RecordingFile(_real_open(path, mode), written)

        with (
            patch("nuke.deleter.shred.open", side_effect=recording_open, create=True),
            patch("nuke.deleter.shred.os.fsync", wraps=os.fsync) as fsync,
        ):
            shred_file(str(target), size)

        assert sum(written) == SHRED_PASSES * size
        assert max(written) <= CHUNK_SIZE
        assert fsync.call_count == SHRED_PASSES
        assert not target.exists()

    def test_final_zero_pass_content(self, tmp_path: Path) -> None:
        """With two passes the last one leaves only zeros behind."""
        target = tmp_path / "f.bin"
        target.write_bytes(b"\xff" * 5000)

        with patch("nuke.deleter.shred.os.unlink"):
            shred_file(str(target), 5000, passes=2, chunk_size=1024)

        assert target.read_bytes() == bytes(5000)

    def test_random_pass_changes_content(self, tmp_path: Path) -> None:
        """A single pass overwrites the data with random bytes."""
        original = b"A" * 4096
        target = tmp_path / "f.bin"
        target.write_bytes(original)

        with patch("nuke.deleter.shred.os.unlink"):
            shred_file(str(target), len(original), passes=1)

        data = target.read_bytes()
        assert len(data) == len(original)
        assert data != original

    def test_empty_file(self, tmp_path: Path) -> None:
        """Empty files are simply removed."""
        target = tmp_path / "empty"
        target.touch()

        shred_file(str(target), 0)

        assert not target.exists()

    def test_symlink_not_written_through(self, tmp_path: Path) -> None:
        """Shredding a symlink removes the link and leaves its target intact."""
        real = tmp_path / "real.txt"
        real.write_text("keep me")
        link = tmp_path / "link"
        link.symlink_to(real)

        shred_file(str(link), 7)

        assert not link.is_symlink()
        assert real.read_text() == "keep me"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises NukeIOError."""
        with pytest.raises(NukeIOError, match="Failed to shred"):
            shred_file(str(tmp_path / "missing"), 10)


class TestShredTree:
    """Tests for shred_tree function."""

    def test_shreds_all_files(self, tmp_path: Path) -> None:
        """Every file is shredded and the tree removed."""
        root = tmp_path / "tree"
        (root / "a" / "b").mkdir(parents=True)
        (root / "one.txt").write_text("1")
        (root / "a" / "two.txt").write_text("22")
        (root / "a" / "b" / "three.txt").write_text("333")

        count = shred_tree(str(root))

        assert count == 3
        assert not root.exists()

    def test_symlinked_directory_not_followed(self, tmp_path: Path) -> None:
        """Links to directories are unlinked, their targets untouched."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "keep.txt").write_text("keep")
        root = tmp_path / "tree"
        root.mkdir()
        (root / "link").symlink_to(outside)

        shred_tree(str(root))

        assert not root.exists()
        assert (outside / "keep.txt").read_text() == "keep"

    def test_missing_tree(self, tmp_path: Path) -> None:
        """A missing directory raises NukeIOError."""
        with pytest.raises(NukeIOError):
            shred_tree(str(tmp_path / "missing"))
