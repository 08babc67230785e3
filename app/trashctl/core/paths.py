"""Locations of the trashctl configuration and of the trash area.

Configuration lives in ``$XDG_CONFIG_HOME/trashctl`` (``~/.config/trashctl``).
The trash itself is the shared ``$XDG_DATA_HOME/Trash`` used by desktop
trash cans, with payloads under ``files/`` and records under ``info/``.
"""

import os
from pathlib import Path

APP_NAME = "trashctl"

TRASH_DIR_NAME = "Trash"
FILES_SUBDIR = "files"
INFO_SUBDIR = "info"

# Trash directories are private to their owner
TRASH_DIR_MODE = 0o700


def _xdg_home(env_var: str, fallback: str) -> Path:
    # An empty variable counts as unset
    value = os.environ.get(env_var)
    return Path(value) if value else Path.home() / fallback


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    return _xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    return get_config_dir() / "theme.toml"


def get_default_trash_dir() -> Path:
    """Trash root used when neither the command line nor the config names one.

    Returns:
        ``$XDG_DATA_HOME/Trash``, by default ``~/.local/share/Trash``.
    """
    return _xdg_home("XDG_DATA_HOME", ".local/share") / TRASH_DIR_NAME


def ensure_trash_dirs(trash_dir: Path) -> Path:
    """Create the trash root with its payload and info areas.

    Directories that already exist are left as they are; new ones are
    created with owner-only permissions.

    Args:
        trash_dir: Root of the trash area.

    Returns:
        The trash root.

    Raises:
        RuntimeError: If an area cannot be created.
    """
    for subdir in (FILES_SUBDIR, INFO_SUBDIR):
        area = trash_dir / subdir
        try:
            area.mkdir(mode=TRASH_DIR_MODE, parents=True, exist_ok=True)
        except PermissionError as e:
            msg = f"Cannot create trash {subdir} directory {area}: Permission denied"
            raise RuntimeError(msg) from e
        except OSError as e:
            msg = f"Cannot create trash {subdir} directory {area}: {e.strerror or e}"
            raise RuntimeError(msg) from e
    return trash_dir
