"""Protected paths that must never be deleted.

Three kinds of entries are supported:
- Absolute paths ("/usr", "~/.ssh") protect the path itself and its
  critical children (bin, sbin, lib, etc directly below it).
- Relative names (".git", "node_modules") protect any path containing
  that component, and everything below it.
- Glob patterns ("~/.config/*", "*.kdbx") are matched with fnmatch.

Patterns starting with ~ are expanded to the user's home directory.
"""

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path

DEFAULT_PROTECTED_PATHS: list[str] = [
    # Root and system directories
    "/",
    "/bin",
    "/sbin",
    "/usr",
    "/usr/bin",
    "/usr/sbin",
    "/usr/lib",
    "/usr/local",
    "/etc",
    "/var",
    "/lib",
    "/lib64",
    "/boot",
    "/sys",
    "/proc",
    "/dev",
    "/run",
    "/tmp",
    # macOS
    "/System",
    "/Library",
    "/Applications",
    "/private",
    "/cores",
    # User sensitive directories
    "~/.ssh",
    "~/.gnupg",
    "~/.config",
    "~/.local/share",
    "~/Library",
    # Version control
    ".git",
    # Often expensive to rebuild
    "node_modules",
]

_CRITICAL_CHILDREN: tuple[str, ...] = ("bin", "sbin", "lib", "etc")

_GLOB_CHARS = frozenset("*?[]")


def is_glob_pattern(value: str) -> bool:
    """Check if a string contains glob metacharacters."""
    return any(c in _GLOB_CHARS for c in value)


def _expand(pattern: str) -> str:
    if pattern == "~" or pattern.startswith("~/"):
        return str(Path.home()) + pattern[1:]
    return pattern


def is_protected_path(path: str | Path, extra: Iterable[str] = ()) -> bool:
    """Check if a path is protected and must not be deleted.

    Args:
        path: Path to check (made absolute and normalized).
        extra: Additional protected entries (e.g. from the config file).

    Returns:
        True if the path matches any protected entry.
    """
    target = os.path.normpath(os.path.abspath(path))
    components = target.split(os.sep)

    for raw in [*DEFAULT_PROTECTED_PATHS, *extra]:
        pattern = _expand(raw)

        if is_glob_pattern(pattern):
            if fnmatch.fnmatch(target, pattern):
                return True
            continue

        if not os.path.isabs(pattern):
            # Relative entry: any path component equal to it
            if pattern in components:
                return True
            continue

        protected = os.path.normpath(pattern)
        if target == protected:
            return True

        prefix = protected.rstrip(os.sep) + os.sep
        if target.startswith(prefix):
            first = target[len(prefix) :].split(os.sep, 1)[0]
            if protected != os.sep and first in _CRITICAL_CHILDREN:
                return True

    return False
