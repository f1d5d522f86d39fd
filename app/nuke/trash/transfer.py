"""Moving data in and out of the trash.

A move is a two-step protocol: an atomic rename is attempted first;
when it fails (typically because source and destination live on
different volumes) the data is copied and the source removed. The
fallback is not atomic: a crash between copy and removal leaves both
copies behind. If removing a source file fails, the copy is deleted
again; if removing a source tree fails midway, the complete copy is
kept.
"""

import logging
import os
import shutil

from nuke.errors import NukeIOError, PartialMoveError

logger = logging.getLogger(__name__)


def move_path(src: str, dst: str) -> None:
    """Move a file, symlink, or directory tree to a new location.

    Args:
        src: Existing source path.
        dst: Destination path (must not exist).

    Raises:
        PartialMoveError: If a tree was copied but the source could only be
            partly removed; ``dst`` then holds the complete copy.
        NukeIOError: If both the rename and the copy fallback fail.
    """
    try:
        os.rename(src, dst)
        return
    except OSError as e:
        logger.debug("Rename %s -> %s failed (%s), falling back to copy", src, dst, e)

    try:
        copy_path(src, dst)
    except OSError as e:
        # Never leave a partial copy in place of nothing
        _discard(dst)
        msg = f"Failed to copy {src} to {dst}: {e}"
        raise NukeIOError(msg) from e

    is_tree = os.path.isdir(src) and not os.path.islink(src)
    try:
        remove_path(src)
    except OSError as e:
        if is_tree:
            # The original may be partially removed; the copy is the only full one
            logger.warning("Kept complete copy of %s at %s", src, dst)
            raise PartialMoveError(src, dst, str(e)) from e
        _discard(dst)
        msg = f"Failed to remove original {src} after copy: {e}"
        raise NukeIOError(msg) from e


def copy_path(src: str, dst: str) -> None:
    """Copy a file or directory tree, preserving symlinks and metadata.

    Raises:
        OSError: If any part of the copy fails.
    """
    if os.path.isdir(src) and not os.path.islink(src):
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst, follow_symlinks=False)


def remove_path(path: str) -> None:
    """Remove a file, symlink, or directory tree.

    Raises:
        OSError: If removal fails.
    """
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.unlink(path)


def path_size(path: str) -> int:
    """Compute the size of a path, summing file sizes for directories.

    Unreadable entries inside a directory are ignored.

    Args:
        path: File or directory path.

    Returns:
        Size in bytes.

    Raises:
        OSError: If the path itself cannot be statted.
    """
    st = os.lstat(path)
    if not os.path.isdir(path) or os.path.islink(path):
        return st.st_size

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, filename)).st_size
            except OSError:
                continue
    return total


def _discard(path: str) -> None:
    if not os.path.lexists(path):
        return
    try:
        remove_path(path)
    except OSError as e:
        logger.warning("Could not clean up partial copy %s: %s", path, e)
