"""Secure erasure by overwriting before unlinking.

Each file receives a fixed number of overwrite passes over its recorded
size: even passes write random bytes, odd passes write zeros, and every
pass is synced to disk before the next starts. This only guarantees the
passes were executed; copy-on-write filesystems and flash controllers
may still retain the old blocks.
"""

import logging
import os
import secrets
from typing import BinaryIO

from nuke.errors import NukeIOError

logger = logging.getLogger(__name__)

SHRED_PASSES = 3
CHUNK_SIZE = 64 * 1024

_ZEROS = bytes(CHUNK_SIZE)


def shred_file(
    path: str,
    size: int,
    *,
    passes: int = SHRED_PASSES,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """Overwrite a file in place, then unlink it.

    Symbolic links are unlinked without writing through them.

    Args:
        path: File to erase.
        size: Number of bytes to overwrite per pass (the size recorded at
            scan time; the file is not re-statted between passes).
        passes: Number of overwrite passes.
        chunk_size: Bytes written per write call.

    Raises:
        NukeIOError: If opening, writing, syncing, or unlinking fails.
    """
    try:
        if os.path.islink(path):
            os.unlink(path)
            return

        with open(path, "r+b") as f:
            for pass_index in range(passes):
                _overwrite_pass(f, size, pass_index, chunk_size)

        os.unlink(path)
    except OSError as e:
        msg = f"Failed to shred {path}: {e}"
        raise NukeIOError(msg) from e

    logger.debug("Shredded %s (%d bytes, %d passes)", path, size, passes)


def _overwrite_pass(f: BinaryIO, size: int, pass_index: int, chunk_size: int) -> None:
    """Write one full-length pass from offset 0 and sync it."""
    f.seek(0)
    remaining = size
    while remaining > 0:
        length = min(chunk_size, remaining)
        if pass_index % 2 == 0:
            chunk = secrets.token_bytes(length)
        else:
            chunk = _ZEROS[:length] if length <= len(_ZEROS) else bytes(length)
        written = f.write(chunk)
        remaining -= written
    f.flush()
    os.fsync(f.fileno())


def shred_tree(path: str, *, passes: int = SHRED_PASSES) -> int:
    """Shred every regular file below a directory, then remove the tree.

    Directories are removed bottom-up once emptied; symbolic links are
    unlinked, never followed.

    Args:
        path: Directory to erase.
        passes: Number of overwrite passes per file.

    Returns:
        Number of files shredded.

    Raises:
        NukeIOError: If any file cannot be shredded or any directory removed.
    """
    shredded = 0
    try:
        for dirpath, dirnames, filenames in os.walk(path, topdown=False):
            for filename in filenames:
                file_path = os.path.join(dirpath, filename)
                st = os.lstat(file_path)
                shred_file(file_path, st.st_size, passes=passes)
                shredded += 1
            for dirname in dirnames:
                child = os.path.join(dirpath, dirname)
                if os.path.islink(child):
                    os.unlink(child)
                else:
                    os.rmdir(child)
        os.rmdir(path)
    except OSError as e:
        msg = f"Failed to remove {path}: {e}"
        raise NukeIOError(msg) from e

    return shredded
