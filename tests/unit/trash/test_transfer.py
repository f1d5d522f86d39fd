"""Unit tests for the rename-or-copy transfer protocol."""

import errno
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from nuke.errors import NukeIOError, PartialMoveError
from nuke.trash.transfer import copy_path, move_path, path_size, remove_path


def _cross_device(src: str, dst: str) -> None:
    raise OSError(errno.EXDEV, "Invalid cross-device link", src)


class TestMovePath:
    """Tests for move_path function."""

    def test_rename_file(self, tmp_path: Path) -> None:
        """A same-volume move renames the file."""
        src = tmp_path / "a.txt"
        src.write_text("content")
        dst = tmp_path / "b.txt"

        move_path(str(src), str(dst))

        assert not src.exists()
        assert dst.read_text() == "content"

    def test_cross_device_file_falls_back_to_copy(self, tmp_path: Path) -> None:
        """When rename fails the file is copied and the source removed."""
        src = tmp_path / "a.bin"
        src.write_bytes(b"\x00\x01payload")
        dst = tmp_path / "b.bin"

        with patch("nuke.trash.transfer.os.rename", side_effect=_cross_device):
            move_path(str(src), str(dst))

        assert not src.exists()
        assert dst.read_bytes() == b"\x00\x01payload"

    def test_cross_device_tree_falls_back_to_copy(self, tmp_path: Path) -> None:
        """Directory trees are copied recursively, symlinks preserved."""
        src = tmp_path / "tree"
        (src / "sub").mkdir(parents=True)
        (src / "sub" / "f.txt").write_text("nested")
        (src / "link").symlink_to("sub/f.txt")
        dst = tmp_path / "moved"

        with patch("nuke.trash.transfer.os.rename", side_effect=_cross_device):
            move_path(str(src), str(dst))

        assert not src.exists()
        assert (dst / "sub" / "f.txt").read_text() == "nested"
        assert (dst / "link").is_symlink()
        assert os.readlink(dst / "link") == "sub/f.txt"

    def test_copy_failure_cleans_up(self, tmp_path: Path) -> None:
        """A failed copy leaves the source intact and no partial copy."""
        src = tmp_path / "a.txt"
        src.write_text("content")
        dst = tmp_path / "b.txt"

        with (
            patch("nuke.trash.transfer.os.rename", side_effect=_cross_device),
            patch("nuke.trash.transfer.copy_path", side_effect=OSError("disk full")),
            pytest.raises(NukeIOError, match="Failed to copy"),
        ):
            move_path(str(src), str(dst))

        assert src.read_text() == "content"
        assert not dst.exists()

    def test_remove_failure_discards_file_copy(self, tmp_path: Path) -> None:
        """If the source file cannot be removed the copy is discarded."""
        src = tmp_path / "a.txt"
        src.write_text("content")
        dst = tmp_path / "b.txt"

        def remove_all_but_source(path: str) -> None:
            if path == str(src):
                raise PermissionError(errno.EACCES, "Permission denied", path)
            remove_path(path)

        with (
            patch("nuke.trash.transfer.os.rename", side_effect=_cross_device),
            patch("nuke.trash.transfer.remove_path", side_effect=remove_all_but_source),
            pytest.raises(NukeIOError, match="Failed to remove original"),
        ):
            move_path(str(src), str(dst))

        assert src.exists()
        assert not dst.exists()

    def test_remove_failure_keeps_tree_copy(self, tmp_path: Path) -> None:
        """A tree whose source is only partly removed keeps the full copy."""
        src = tmp_path / "tree"
        src.mkdir()
        (src / "one.txt").write_text("1")
        (src / "two.txt").write_text("2")
        dst = tmp_path / "moved"

        def remove_one_then_fail(path: str) -> None:
            if path != str(src):
                remove_path(path)
                return
            os.unlink(src / "one.txt")
            raise PermissionError(errno.EACCES, "Permission denied", path)

        with (
            patch("nuke.trash.transfer.os.rename", side_effect=_cross_device),
            patch("nuke.trash.transfer.remove_path", side_effect=remove_one_then_fail),
            pytest.raises(PartialMoveError) as exc_info,
        ):
            move_path(str(src), str(dst))

        assert exc_info.value.dst == str(dst)
        assert sorted(os.listdir(dst)) == ["one.txt", "two.txt"]
        assert os.listdir(src) == ["two.txt"]


class TestHelpers:
    """Tests for copy_path, remove_path and path_size."""

    def test_copy_and_remove_file(self, tmp_path: Path) -> None:
        """copy_path and remove_path handle plain files."""
        src = tmp_path / "a.txt"
        src.write_text("x")
        dst = tmp_path / "b.txt"

        copy_path(str(src), str(dst))
        remove_path(str(src))

        assert dst.read_text() == "x"
        assert not src.exists()

    def test_remove_symlink_keeps_target(self, tmp_path: Path) -> None:
        """Removing a symlink to a directory leaves the directory alone."""
        target = tmp_path / "dir"
        target.mkdir()
        (target / "f").write_text("x")
        link = tmp_path / "link"
        link.symlink_to(target)

        remove_path(str(link))

        assert not link.is_symlink()
        assert (target / "f").exists()

    def test_path_size_file(self, tmp_path: Path) -> None:
        """path_size of a file is its length."""
        target = tmp_path / "f"
        target.write_bytes(b"x" * 300)

        assert path_size(str(target)) == 300

    def test_path_size_directory(self, tmp_path: Path) -> None:
        """path_size of a directory sums contained files."""
        root = tmp_path / "d"
        (root / "sub").mkdir(parents=True)
        (root / "a").write_bytes(b"x" * 100)
        (root / "sub" / "b").write_bytes(b"x" * 250)

        assert path_size(str(root)) == 350

    def test_path_size_missing(self, tmp_path: Path) -> None:
        """path_size of a missing path raises OSError."""
        with pytest.raises(OSError):
            path_size(str(tmp_path / "missing"))
