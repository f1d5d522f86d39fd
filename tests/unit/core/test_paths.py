"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from nuke.core.paths import (
    APP_NAME,
    ensure_config_dir,
    ensure_dir,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_theme_path,
    get_trash_dir,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_custom_config_dir(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestGetDataDir:
    """Tests for get_data_dir and the trash location."""

    def test_default_data_dir(self) -> None:
        """get_data_dir returns default path when XDG_DATA_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_data_dir()

        assert result == Path.home() / ".local" / "share" / APP_NAME

    def test_trash_dir_under_data_dir(self, tmp_path: Path) -> None:
        """The trash lives in the data directory."""
        with patch.dict(os.environ, {"XDG_DATA_HOME": str(tmp_path)}):
            result = get_trash_dir()

        assert result == tmp_path / APP_NAME / "trash"


class TestFilePaths:
    """Tests for config and theme file paths."""

    def test_config_and_theme_paths(self, tmp_path: Path) -> None:
        """Config and theme files live in the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"
            assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestEnsureDir:
    """Tests for ensure_dir and ensure_config_dir."""

    def test_creates_nested(self, tmp_path: Path) -> None:
        """Missing parents are created."""
        target = tmp_path / "a" / "b"

        assert ensure_dir(target, "test") == target
        assert target.is_dir()

    def test_existing_is_fine(self, tmp_path: Path) -> None:
        """An existing directory is returned unchanged."""
        assert ensure_dir(tmp_path, "test") == tmp_path

    def test_failure_raises_runtime_error(self, tmp_path: Path) -> None:
        """A file in the way raises RuntimeError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(RuntimeError, match="Cannot create test directory"):
            ensure_dir(blocker / "sub", "test")

    def test_ensure_config_dir(self, isolated_env: Path) -> None:
        """ensure_config_dir creates the XDG config directory."""
        result = ensure_config_dir()

        assert result == isolated_env / "config" / APP_NAME
        assert result.is_dir()
