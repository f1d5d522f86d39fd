"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from nuke.trash.store import TrashStore


class MutableClock:
    """Clock whose current time can be moved by tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> MutableClock:
    """Clock starting at a fixed instant."""
    return MutableClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def trash_root(tmp_path: Path) -> Path:
    """Root directory for an isolated trash store."""
    return tmp_path / "trash"


@pytest.fixture
def store(trash_root: Path, clock: MutableClock) -> TrashStore:
    """Trash store rooted in a temporary directory."""
    return TrashStore(root=trash_root, clock=clock)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory holding files to be deleted."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory creating a file with given content and optional age."""

    def _make(path: Path, content: bytes = b"data", mtime: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and data homes at a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path
