"""Color theme for trash listings and messages.

The bundled ``data/theme.toml`` holds the defaults. A user theme at
``~/.config/trashctl/theme.toml`` may override any subset of its ``[colors]``
table. Invalid themes are reported and replaced by the defaults.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from trashctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

# File-type styles used by the listing, keyed by ThemeColors field
_ENTRY_ATTRIBUTES: dict[str, str] = {
    "directory": "bold",
    "symlink": "",
    "broken_link": "underline",
    "executable": "bold",
    "fifo": "",
    "socket": "bold",
    "file": "",
}


class ThemeColors(BaseModel):
    """Colors for trashctl output, as #RGB or #RRGGBB hex codes."""

    model_config = ConfigDict(extra="forbid")

    # Messages
    header: str = "#69b9a1"
    info: str = "#0ec1c8"
    success: str = "#03b971"
    error: str = "#f53263"

    # Listing
    eln: str = "#faf870"
    directory: str = "#0e8ac8"
    symlink: str = "#0ec1c8"
    broken_link: str = "#f53263"
    executable: str = "#03b971"
    fifo: str = "#d44ebc"
    socket: str = "#d44ebc"
    file: str = "#ffffff"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that every color is a hex code."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        digits = color[1:]
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(digits, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        # Rich only parses the six-digit form
        if len(digits) == 3:
            color = "#" + "".join(c * 2 for c in digits)
        return color.lower()


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped with the package."""
    return Path(str(resources.files("trashctl.data").joinpath("theme.toml")))


def read_theme_file(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are skipped.

    Args:
        path: Theme file to read.

    Returns:
        Color names mapped to values, or None if the file is missing,
        unreadable or not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge the user theme over the bundled one.

    Args:
        user_path: User theme file. Defaults to ~/.config/trashctl/theme.toml.

    Returns:
        Validated colors; the built-in defaults if the merge is invalid.
    """
    colors = read_theme_file(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing; the installation may be corrupted")
        colors = {}

    user_path = user_path or get_user_theme_path()
    overrides = read_theme_file(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme, using default colors: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by the shared consoles.

    Args:
        colors: Colors to use. Loads the configured theme when None.
    """
    colors = colors or load_theme()

    styles: dict[str, str] = {
        "bold_header": f"bold {colors.header}",
        "info": colors.info,
        "success": colors.success,
        "error": f"bold {colors.error}",
        "eln": colors.eln,
    }
    for field, attributes in _ENTRY_ATTRIBUTES.items():
        color = getattr(colors, field)
        styles[f"entry.{field}"] = f"{attributes} {color}".strip()

    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
