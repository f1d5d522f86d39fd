"""User configuration for nuke.

Configuration is stored in ~/.config/nuke/config.toml. Every key is
optional; a missing file means defaults.

Example:
    protected_paths = ["~/Projects/important", "*.kdbx"]
    trash_retention_days = 30
    trash_max_size_mb = 5000
    auto_cleanup = true
    workers = 8
"""

import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nuke.core.paths import ensure_dir, get_config_path
from nuke.errors import NukeError


class NukeConfig(BaseModel):
    """Configuration for nuke.

    Attributes:
        protected_paths: Extra protected paths, added to the built-in list.
        trash_retention_days: Days a trashed item is kept before eviction.
        trash_max_size_mb: Size cap for the trash in MiB.
        auto_cleanup: Run the retention sweep after every soft-delete batch.
        workers: Default number of concurrent deletion workers.
        trash_dir: Override for the trash root directory.
    """

    model_config = ConfigDict(extra="forbid")

    protected_paths: Annotated[
        list[str],
        Field(default_factory=list, description="Additional protected paths"),
    ]
    trash_retention_days: Annotated[
        int,
        Field(ge=0, description="Retention period in days"),
    ] = 30
    trash_max_size_mb: Annotated[
        int,
        Field(ge=0, description="Maximum trash size in MiB"),
    ] = 5000
    auto_cleanup: Annotated[
        bool,
        Field(description="Evict old trash items after soft deletes"),
    ] = True
    workers: Annotated[
        int,
        Field(ge=1, le=256, description="Concurrent deletion workers (1-256)"),
    ] = 8
    trash_dir: Annotated[
        Path | None,
        Field(description="Trash root (None = ~/.local/share/nuke/trash)"),
    ] = None


class ConfigError(NukeError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> NukeConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated NukeConfig (defaults if the file does not exist).

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return NukeConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return NukeConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: NukeConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    Creates the parent directory if it doesn't exist.

    Args:
        config: Configuration to save.
        path: Target path. If None, uses the default path.

    Returns:
        Path the configuration was written to.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        ensure_dir(config_path.parent, "config")
        data = config.model_dump(mode="json", exclude_none=True)
        with open(config_path, "wb") as f:
            tomli_w.dump(data, f)
    except (OSError, RuntimeError) as e:
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
