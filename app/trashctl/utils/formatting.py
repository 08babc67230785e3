"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich, including the
colorized, ELN-numbered listing of trashed files.
"""

import os
import stat
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from trashctl.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system(), highlight=False)
err_console = Console(
    theme=get_theme(), stderr=True, color_system=_detect_color_system(), highlight=False
)


def entry_style(path: str) -> str:
    """Pick the listing style for a filesystem entry.

    Args:
        path: Path to the entry (symlinks are not followed).

    Returns:
        Name of a theme style (``entry.*``).
    """
    try:
        st = os.lstat(path)
    except OSError:
        return "entry.broken_link"

    mode = st.st_mode
    if stat.S_ISDIR(mode):
        return "entry.directory"
    if stat.S_ISLNK(mode):
        return "entry.symlink" if os.path.exists(path) else "entry.broken_link"
    if stat.S_ISFIFO(mode):
        return "entry.fifo"
    if stat.S_ISSOCK(mode):
        return "entry.socket"
    if mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
        return "entry.executable"
    return "entry.file"


def print_listing(names: list[str], directory: Path, *, out: Console | None = None) -> None:
    """Print names with right-aligned 1-based ELNs, colored by file type.

    Args:
        names: Entry names in listing order.
        directory: Directory containing the entries (used for styling).
        out: Console to print to. Defaults to the shared stdout console.
    """
    target = out or console
    width = len(str(len(names)))
    for eln, name in enumerate(names, start=1):
        line = Text.assemble(
            (f"{eln:>{width}}", "eln"),
            " ",
            (name, entry_style(str(directory / name))),
        )
        target.print(line)


def abbreviate_path(path: str) -> str:
    """Shorten a path for display.

    The home directory is replaced by "~" and a leading "./" is dropped.
    """
    home = str(Path.home())
    if path == home:
        return "~"
    if path.startswith(home + os.sep):
        return "~" + path[len(home) :]
    if path.startswith("./"):
        return path[2:]
    return path


def print_header(message: str) -> None:
    """Print a bold section header."""
    console.print(f"[bold_header]{escape(message)}[/]\n")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
