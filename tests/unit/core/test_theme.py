"""Unit tests for theme management."""

from pathlib import Path

import pytest
from nuke.core.theme import ThemeColors, get_rich_theme, load_theme
from pydantic import ValidationError


class TestThemeColors:
    """Tests for ThemeColors model."""

    def test_defaults_valid(self) -> None:
        """Default colors are valid hex codes."""
        colors = ThemeColors()

        assert colors.error.startswith("#")
        assert colors.trashed.startswith("#")
        assert colors.directory.startswith("#")

    @pytest.mark.parametrize("value", ["red", "#12", "#zzzzzz", "123456"])
    def test_invalid_colors(self, value: str) -> None:
        """Non-hex colors are rejected."""
        with pytest.raises(ValidationError):
            ThemeColors(error=value)

    def test_short_hex_accepted(self) -> None:
        """#RGB is accepted."""
        assert ThemeColors(info="#abc").info == "#abc"


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing theme file gives the defaults."""
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_partial_override(self, tmp_path: Path) -> None:
        """Only the given colors are overridden."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nerror = "#ff0000"\n')

        colors = load_theme(path)

        assert colors.error == "#ff0000"
        assert colors.success == ThemeColors().success

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        """Invalid colors fall back to the defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nerror = "crimson"\n')

        assert load_theme(path) == ThemeColors()

    def test_broken_toml_falls_back(self, tmp_path: Path) -> None:
        """Unparseable files fall back to the defaults."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert load_theme(path) == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_styles_present(self) -> None:
        """Every style used by the CLI is defined."""
        theme = get_rich_theme(ThemeColors())

        for name in ("info", "warning", "error", "success", "muted", "directory", "bold_header"):
            assert name in theme.styles
