"""trashctl configuration and settings.

This module provides the configuration model and I/O functions for
trashctl: where the trash lives, how listings are filtered and ordered,
and how much is echoed after a batch.

Configuration is stored in ~/.config/trashctl/config.toml
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from trashctl.core.paths import get_config_path, get_default_trash_dir
from trashctl.ordering.models import SortKey, SortSettings
from trashctl.ordering.scan import EntryFilter

logger = logging.getLogger(__name__)


class TrashConfig(BaseModel):
    """Configuration for trashctl.

    Instances are built once per invocation and treated as read-only;
    changes go through ``model_copy(update=...)`` and :func:`save_config`.

    Attributes:
        trash_dir: Root of the trash area (None = ~/.local/share/Trash).
        sort: Listing order. ``none`` uses plain alphabetic order.
        sort_reverse: Invert the listing order.
        dirs_first: List directories before other entries.
        case_sensitive: Distinguish case when ordering names.
        unicode: Order names with locale collation.
        show_hidden: Include hidden entries in listings.
        filter: Regular expression; matching names are left out of listings.
        light_mode: Do not fetch owner/group metadata.
        print_removed_files: Echo the names of trashed files after a batch.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    trash_dir: Annotated[
        Path | None,
        Field(description="Trash root directory (None = XDG data dir)"),
    ] = None
    sort: Annotated[
        SortKey,
        Field(description="Listing order"),
    ] = SortKey.NONE
    sort_reverse: bool = False
    dirs_first: bool = True
    case_sensitive: bool = False
    unicode: bool = True
    show_hidden: bool = False
    filter: Annotated[
        str | None,
        Field(description="Regular expression excluding names from listings"),
    ] = None
    light_mode: bool = False
    print_removed_files: bool = True

    @field_validator("filter")
    @classmethod
    def validate_filter(cls, v: str | None) -> str | None:
        """Validate that the filter is a compilable regular expression."""
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            msg = f"invalid filter pattern {v!r}: {e}"
            raise ValueError(msg) from None
        return v

    @property
    def effective_trash_dir(self) -> Path:
        """Trash root actually in use."""
        if self.trash_dir is not None:
            return self.trash_dir.expanduser()
        return get_default_trash_dir()

    def sort_settings(self) -> SortSettings:
        """Build the entry comparator settings for this configuration."""
        return SortSettings(
            key=self.sort,
            reverse=self.sort_reverse,
            dirs_first=self.dirs_first,
            case_sensitive=self.case_sensitive,
            use_locale=self.unicode,
            light_mode=self.light_mode,
        )

    def entry_filter(self) -> EntryFilter:
        """Build the directory-entry filter for this configuration."""
        return EntryFilter(show_hidden=self.show_hidden, exclude=self.filter)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the config file content is invalid."""


def load_config(path: Path | None = None) -> TrashConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TrashConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return TrashConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TrashConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: TrashConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TrashConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: TrashConfig) -> dict[str, object]:
    """Convert TrashConfig to a dictionary for TOML serialization.

    Only non-default values are included to keep the file clean.

    Args:
        config: The TrashConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump(mode="json", exclude_defaults=True)
    return {key: value for key, value in data.items() if value is not None}
