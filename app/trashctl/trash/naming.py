"""Collision-safe names for trashed items.

A trashed payload is stored as ``<basename>.<suffix>``, where the suffix is
the deletion time formatted ``%Y%m%d%H%M%S``. When the composed name plus
the ``.trashinfo`` extension would exceed the filesystem's name limit, the
basename is trimmed byte-wise and marked with a trailing ``~``.
"""

import logging
import os
from datetime import datetime
from pathlib import Path

from trashctl.trash.models import INFO_SUFFIX, TrashLayout

logger = logging.getLogger(__name__)

SUFFIX_FORMAT = "%Y%m%d%H%M%S"
TRIM_MARKER = b"~"
DEFAULT_NAME_MAX = 255

# Upper bound for the counter appended to a colliding suffix
MAX_COLLISIONS = 10_000


def date_suffix(moment: datetime | None = None) -> str:
    """Format the disambiguation suffix for a deletion time.

    Args:
        moment: Deletion time. Defaults to the current local time.

    Returns:
        Fixed-width 14 character timestamp (e.g. "20240131235959").
    """
    return (moment or datetime.now()).strftime(SUFFIX_FORMAT)


def name_max(directory: Path) -> int:
    """Return the maximum file name length in bytes for ``directory``."""
    try:
        return os.pathconf(directory, "PC_NAME_MAX")
    except (OSError, ValueError):
        return DEFAULT_NAME_MAX


def compose_item_name(basename: str, suffix: str, limit: int = DEFAULT_NAME_MAX) -> str:
    """Build ``<basename>.<suffix>``, trimmed to fit ``limit`` bytes.

    The budget accounts for the ``.trashinfo`` extension of the matching
    info record. Trimming is byte-oriented and may split a multibyte
    character; the trimmed basename ends with ``~``.

    Args:
        basename: Original file name (no directory component).
        suffix: Disambiguation suffix.
        limit: Maximum name length in bytes.

    Returns:
        The trashed item name.

    Raises:
        ValueError: If the basename is empty or the suffix alone exceeds the limit.
    """
    if not basename:
        msg = "Cannot compose a trash name from an empty file name"
        raise ValueError(msg)

    raw = os.fsencode(basename)
    tail = os.fsencode(f".{suffix}{INFO_SUFFIX}")
    excess = len(raw) + len(tail) - limit
    if excess > 0:
        keep = len(raw) - excess - len(TRIM_MARKER)
        if keep < 1:
            msg = f"Suffix {suffix!r} leaves no room for a file name"
            raise ValueError(msg)
        raw = raw[:keep] + TRIM_MARKER
        logger.debug("Trimmed %r to %r to fit %d bytes", basename, raw, limit)

    return f"{os.fsdecode(raw)}.{suffix}"


def unique_item_name(layout: TrashLayout, basename: str, suffix: str) -> str:
    """Find a trash name not yet used by a payload or an info record.

    The plain ``<basename>.<suffix>`` is tried first; on a collision a
    counter is appended to the suffix (``<suffix>.1``, ``<suffix>.2``, ...).

    Raises:
        FileExistsError: If no free name is found.
        ValueError: If the basename cannot be turned into a name.
    """
    limit = name_max(layout.files_dir)
    for counter in range(MAX_COLLISIONS):
        candidate_suffix = suffix if counter == 0 else f"{suffix}.{counter}"
        name = compose_item_name(basename, candidate_suffix, limit)
        if not os.path.lexists(layout.payload_path(name)) and not os.path.lexists(
            layout.info_path(name)
        ):
            return name
    msg = f"No free trash name for {basename!r} with suffix {suffix}"
    raise FileExistsError(msg)
