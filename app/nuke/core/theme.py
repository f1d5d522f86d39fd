"""Theme management for the nuke CLI.

Colors default to the values below and can be overridden, fully or
partially, by a ``[colors]`` table in ~/.config/nuke/theme.toml.
"""

import logging
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from nuke.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")

# Styles rendered in bold regardless of the configured color
_BOLD_STYLES = frozenset({"error", "directory", "bold_header"})


class ThemeColors(BaseModel):
    """Colors used by the nuke CLI, as #RRGGBB or #RGB hex codes."""

    model_config = ConfigDict(extra="forbid")

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    directory: str = "#0e8ac8"
    file: str = "#ffffff"
    trashed: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object) -> str:
        """Reject anything that is not a hex color code."""
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"invalid hex color {v!r}, expected #RGB or #RRGGBB"
            raise ValueError(msg)
        return v.strip()


def _read_overrides(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table, ignoring unreadable files and non-string values."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors with user overrides applied.

    Args:
        path: Theme file to read. If None, uses ~/.config/nuke/theme.toml.

    Returns:
        ThemeColors with the overrides, or the defaults if they are invalid.
    """
    theme_path = path or get_theme_path()
    overrides = _read_overrides(theme_path)
    if not overrides:
        return ThemeColors()

    try:
        colors = ThemeColors(**overrides)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()
    logger.debug("Loaded theme overrides from %s", theme_path)
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich theme whose style names match the ThemeColors fields.

    ``bold_header`` is derived from ``header``.
    """
    colors = colors or load_theme()
    palette = colors.model_dump()
    palette["bold_header"] = colors.header

    return Theme(
        {
            name: f"bold {color}" if name in _BOLD_STYLES else color
            for name, color in palette.items()
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the process-wide Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
