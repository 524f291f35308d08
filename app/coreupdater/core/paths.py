"""XDG locations used by coreupdater.

- Config: $XDG_CONFIG_HOME/coreupdater/ (default ~/.config/coreupdater/)
  holding config.toml and an optional theme.toml.
- Cache: $XDG_CACHE_HOME/coreupdater/ (default ~/.cache/coreupdater/)
  holding the default cores/ and info/ directories.
"""

import os
from pathlib import Path

# Directory name under each XDG base directory
APP_NAME = "coreupdater"


def _xdg_app_dir(env_var: str, fallback: str) -> Path:
    """Resolve an XDG base directory and append the application name."""
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / fallback
    return root / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return _xdg_app_dir("XDG_CONFIG_HOME", ".config")


def get_cache_dir() -> Path:
    """Get the cache directory."""
    return _xdg_app_dir("XDG_CACHE_HOME", ".cache")


def get_config_path() -> Path:
    """Get the default configuration file path (config.toml)."""
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path (theme.toml)."""
    return get_config_dir() / "theme.toml"


def get_default_cores_dir() -> Path:
    """Get the directory cores are installed into when none is configured."""
    return get_cache_dir() / "cores"


def get_default_info_dir() -> Path:
    """Get the core info directory used when none is configured."""
    return get_cache_dir() / "info"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
