"""Directory scanning with entry filtering and ordering.

Provides the directory-entry filter used by listings (self/parent entries,
hidden entries, an optional exclusion pattern) and helpers that return a
directory's entries in a deterministic order.
"""

import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass

from trashctl.ordering.compare import Comparator, sort_entries, sort_names
from trashctl.ordering.models import EntryInfo, SortSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntryFilter:
    """Decides which directory entries appear in a listing.

    Attributes:
        show_hidden: Include names starting with a dot.
        exclude: Regular expression; names it matches are skipped.
    """

    show_hidden: bool = False
    exclude: str | None = None

    def __post_init__(self) -> None:
        """Validate the exclusion pattern after initialization."""
        if self.exclude is not None:
            try:
                re.compile(self.exclude)
            except re.error as e:
                msg = f"Invalid exclusion pattern {self.exclude!r}: {e}"
                raise ValueError(msg) from e

    def accepts(self, name: str) -> bool:
        """Check whether ``name`` passes the filter.

        Args:
            name: Entry name (basename).

        Returns:
            False for "." and "..", for hidden names unless shown, and for
            names matching the exclusion pattern; True otherwise.
        """
        if name in (".", ".."):
            return False
        if self.exclude is not None and re.search(self.exclude, name):
            return False
        return self.show_hidden or not name.startswith(".")


def iter_names(directory: str, entry_filter: EntryFilter | None = None) -> Iterator[str]:
    """Yield the names of ``directory``'s entries that pass ``entry_filter``.

    Args:
        directory: Directory to read.
        entry_filter: Filter to apply. None accepts every entry.

    Yields:
        Entry names in the order the filesystem returns them.

    Raises:
        OSError: If the directory cannot be read.
    """
    with os.scandir(directory) as it:
        for entry in it:
            if entry_filter is None or entry_filter.accepts(entry.name):
                yield entry.name


def scan_names(
    directory: str,
    compare: Comparator,
    entry_filter: EntryFilter | None = None,
) -> list[str]:
    """Return filtered entry names sorted with a name comparator.

    Raises:
        OSError: If the directory cannot be read.
    """
    names = sort_names(iter_names(directory, entry_filter), compare)
    logger.debug("Scanned %d entries in %s", len(names), directory)
    return names


def scan_entries(
    directory: str,
    settings: SortSettings,
    entry_filter: EntryFilter | None = None,
) -> list[EntryInfo]:
    """Return filtered entries with metadata, sorted per ``settings``.

    Entries that vanish or cannot be stat'ed between the directory read and
    the stat are skipped with a warning.

    Raises:
        OSError: If the directory cannot be read.
    """
    infos: list[EntryInfo] = []
    for name in iter_names(directory, entry_filter):
        try:
            infos.append(
                EntryInfo.from_path(os.path.join(directory, name), light=settings.light_mode)
            )
        except OSError as e:
            logger.warning("Cannot stat %s: %s", name, e)
    return sort_entries(infos, settings)


def count_entries(directory: str) -> int:
    """Count every entry of ``directory`` except "." and "..".

    Hidden entries and filtered entries are counted too.

    Raises:
        OSError: If the directory cannot be read.
    """
    return sum(1 for _ in iter_names(directory))
