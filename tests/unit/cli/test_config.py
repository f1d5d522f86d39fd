"""Unit tests for config CLI commands.

Tests for nuke config show, init, and path.
"""

import tomllib
from pathlib import Path

from nuke.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _config_path(env: Path) -> Path:
    return env / "config" / "nuke" / "config.toml"


class TestConfigPath:
    """Tests for nuke config path."""

    def test_prints_xdg_path(self, isolated_env: Path) -> None:
        """The config location follows XDG_CONFIG_HOME."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.output.strip() == str(_config_path(isolated_env))


class TestConfigInit:
    """Tests for nuke config init."""

    def test_writes_defaults(self, isolated_env: Path) -> None:
        """init writes a config file with default values."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        data = tomllib.loads(_config_path(isolated_env).read_text())
        assert data["trash_retention_days"] == 30
        assert data["workers"] == 8

    def test_existing_not_overwritten(self, isolated_env: Path) -> None:
        """An existing file is kept unless --force is given."""
        path = _config_path(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text("workers = 2\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert path.read_text() == "workers = 2\n"

    def test_force_overwrites(self, isolated_env: Path) -> None:
        """--force replaces an existing file."""
        path = _config_path(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text("workers = 2\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert tomllib.loads(path.read_text())["workers"] == 8


class TestConfigShow:
    """Tests for nuke config show."""

    def test_shows_values(self, isolated_env: Path) -> None:
        """Effective values and protected paths are printed."""
        path = _config_path(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text('workers = 5\nprotected_paths = ["/srv/keep"]\n')

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "workers              = 5" in result.output
        assert "/srv/keep" in result.output
        assert "node_modules" in result.output

    def test_invalid_config(self, isolated_env: Path) -> None:
        """A broken config exits with code 1."""
        path = _config_path(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text("unknown_key = 1\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
