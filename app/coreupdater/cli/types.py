"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from coreupdater.core.config import ConfigError, UpdaterConfig, load_config_or_default
from coreupdater.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def resolve_config(
    config_path: Path | None,
    *,
    cores_dir: str | None = None,
    info_dir: str | None = None,
    buildbot_url: str | None = None,
) -> UpdaterConfig:
    """Load the configuration and apply command-line overrides.

    Args:
        config_path: Explicit config file path (None = default location).
        cores_dir: Override for the core installation directory.
        info_dir: Override for the core info directory.
        buildbot_url: Override for the build service URL.

    Returns:
        Effective UpdaterConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded or is invalid.
    """
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    overrides: dict[str, str] = {}
    if cores_dir:
        overrides["cores_dir"] = cores_dir
    if info_dir:
        overrides["info_dir"] = info_dir
    if buildbot_url:
        overrides["buildbot_url"] = buildbot_url

    if not overrides:
        return config

    try:
        return UpdaterConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as e:
        print_error(f"Invalid option: {e}")
        raise typer.Exit(code=1) from e
