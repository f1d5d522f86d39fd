"""XDG-compliant path management for nuke.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and trash storage.

XDG defaults:
- Config: ~/.config/nuke/
- Data:   ~/.local/share/nuke/ (the trash lives under trash/)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "nuke"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/nuke/ (or XDG_CONFIG_HOME/nuke/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Get the data directory path.

    Returns:
        Path to ~/.local/share/nuke/ (or XDG_DATA_HOME/nuke/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/nuke/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/nuke/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_trash_dir() -> Path:
    """Get the trash root directory.

    The trash root holds two subdirectories: ``files/`` with the staged
    data and ``meta/`` with one JSON record per staged item.

    Returns:
        Path to ~/.local/share/nuke/trash/.
    """
    return get_data_dir() / "trash"


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return ensure_dir(get_config_dir(), "config")
