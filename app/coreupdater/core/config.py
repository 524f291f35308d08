"""Updater configuration and settings.

This module provides the configuration model and I/O functions that
tell the updater where cores and core info files live and where the
build service publishes its listings.

Configuration is stored in ~/.config/coreupdater/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from coreupdater.core.paths import get_config_path, get_default_cores_dir, get_default_info_dir
from coreupdater.core.sorting import SortMode

# Default build service location for cores
DEFAULT_BUILDBOT_URL = "https://buildbot.libretro.com/nightly/linux/x86_64/latest"


class UpdaterConfig(BaseModel):
    """Configuration for the core updater.

    Attributes:
        cores_dir: Directory cores are installed into.
        info_dir: Directory holding core info files.
        buildbot_url: Base URL of the network build service.
        sort_mode: Ordering of the core list ('grouped' or 'alphabetical').
        show_experimental: Whether experimental cores are displayed.
    """

    model_config = ConfigDict(extra="forbid")

    cores_dir: Annotated[
        str,
        Field(
            default_factory=lambda: str(get_default_cores_dir()),
            min_length=1,
            description="Core installation directory",
        ),
    ]
    info_dir: Annotated[
        str,
        Field(
            default_factory=lambda: str(get_default_info_dir()),
            min_length=1,
            description="Core info file directory",
        ),
    ]
    buildbot_url: Annotated[
        str,
        Field(min_length=1, description="Build service base URL"),
    ] = DEFAULT_BUILDBOT_URL
    sort_mode: Annotated[
        SortMode,
        Field(description="Core list ordering"),
    ] = SortMode.GROUPED
    show_experimental: Annotated[
        bool,
        Field(description="Display experimental cores"),
    ] = True

    @field_validator("buildbot_url")
    @classmethod
    def validate_buildbot_url(cls, v: str) -> str:
        """Validate that the build service URL has a scheme."""
        if "://" not in v:
            msg = f"buildbot_url must include a scheme (e.g. https://), got '{v}'"
            raise ValueError(msg)
        return v.rstrip("/")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> UpdaterConfig:
    """Load updater configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated UpdaterConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return UpdaterConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> UpdaterConfig:
    """Load the configuration, falling back to defaults if it doesn't exist.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated UpdaterConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return UpdaterConfig()


def save_config(config: UpdaterConfig, path: Path | None = None) -> Path:
    """Save updater configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The UpdaterConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    # Ensure parent directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        # Cleanup temp file on failure
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
