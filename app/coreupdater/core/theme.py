"""Color theme for the core list display.

Colors come from the bundled ``data/theme.toml``; any subset of them can
be overridden in the user theme file. Invalid user colors fall back to
the built-in palette rather than aborting the command.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from coreupdater.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex_color(value: str) -> str:
    color = value.strip()
    if not color.startswith("#"):
        msg = f"color must start with '#', got '{value}'"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"color must be #RGB or #RRGGBB format, got '{value}'"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color '{value}'"
        raise ValueError(msg) from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex_color)]


class ThemeColors(BaseModel):
    """Palette used by the CLI.

    General purpose colors are followed by the colors of the core list
    rows (group headers, stable and experimental cores).
    """

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    manufacturer_header: HexColor = "#c1ff62"
    console_header: HexColor = "#0e8ac8"
    core_stable: HexColor = "#69B9A1"
    core_experimental: HexColor = "#faf870"


# Style attributes prepended to a palette color
_STYLE_ATTRIBUTES: dict[str, str] = {
    "error": "bold",
    "manufacturer_header": "bold",
    "console_header": "italic",
    "core_stable": "bold",
}


def get_bundled_theme_path() -> Path:
    """Get the path of the theme shipped with the package."""
    return resources.files("coreupdater.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Non-string values are ignored.

    Returns:
        Color mapping, or None if the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table: Any = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the palette, applying user overrides on top of the bundled theme."""
    colors = _load_toml_colors(Path(get_bundled_theme_path())) or {}

    user_colors = _load_toml_colors(get_user_theme_path())
    if user_colors:
        logger.debug("Applying %d user theme colors", len(user_colors))
        colors.update(user_colors)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich theme from a palette.

    Besides one style per palette color, the theme defines the
    ``bold_header`` and ``dim`` helper styles used by tables.

    Args:
        colors: Palette to use (loaded with load_theme() if None).

    Returns:
        Rich Theme instance.
    """
    if colors is None:
        colors = load_theme()
    palette = colors.model_dump()

    styles = {
        name: f"{_STYLE_ATTRIBUTES[name]} {color}" if name in _STYLE_ATTRIBUTES else color
        for name, color in palette.items()
    }
    styles["bold_header"] = f"bold {palette['header']}"
    styles["dim"] = palette["muted"]

    return Theme(styles)


# Module-level cached theme instance
_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading and caching it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
