"""Data structures for ordering directory entries.

Defines the sort keys understood by the entry comparator, the per-entry
metadata snapshot it compares, and the immutable settings bundle that
selects and tunes a comparison.
"""

import os
import stat
from dataclasses import dataclass
from enum import Enum


class SortKey(str, Enum):
    """Sort key for directory listings.

    The declaration order doubles as the numeric index accepted by the
    ``sort`` command (none=0 ... group=11).

    Attributes:
        NONE: Keep scan order.
        NAME: Natural name order.
        SIZE: File size.
        ATIME: Last access time.
        BTIME: Birth time (falls back to ctime where unavailable).
        CTIME: Last status change time.
        MTIME: Last modification time.
        VERSION: Natural version order ("file2" before "file10").
        EXTENSION: File name extension, case-insensitive.
        INODE: Inode number.
        OWNER: Owner user ID.
        GROUP: Owner group ID.
    """

    NONE = "none"
    NAME = "name"
    SIZE = "size"
    ATIME = "atime"
    BTIME = "btime"
    CTIME = "ctime"
    MTIME = "mtime"
    VERSION = "version"
    EXTENSION = "extension"
    INODE = "inode"
    OWNER = "owner"
    GROUP = "group"

    @property
    def index(self) -> int:
        """Numeric index of this key."""
        return list(SortKey).index(self)

    @classmethod
    def from_index(cls, index: int) -> "SortKey":
        """Look up a sort key by its numeric index.

        Raises:
            ValueError: If the index is out of range.
        """
        members = list(cls)
        if not 0 <= index < len(members):
            msg = f"Sort index must be between 0 and {len(members) - 1}, got {index}"
            raise ValueError(msg)
        return members[index]


# True when the platform exposes a real birth time through stat()
HAS_BIRTHTIME: bool = hasattr(os.stat_result, "st_birthtime")


@dataclass(frozen=True, slots=True)
class EntryInfo:
    """Metadata snapshot of a single directory entry.

    Attributes:
        name: Entry name (basename, no directory component).
        is_dir: Whether the entry is a directory (symlinks are not followed).
        size: Size in bytes.
        atime: Access time (seconds since the epoch).
        btime: Birth time, or ctime where the platform lacks birth time.
        ctime: Status change time.
        mtime: Modification time.
        inode: Inode number.
        uid: Owner user ID (0 when metadata was fetched in light mode).
        gid: Owner group ID (0 when metadata was fetched in light mode).
    """

    name: str
    is_dir: bool = False
    size: int = 0
    atime: float = 0.0
    btime: float = 0.0
    ctime: float = 0.0
    mtime: float = 0.0
    inode: int = 0
    uid: int = 0
    gid: int = 0

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result, *, light: bool = False) -> "EntryInfo":
        """Build an EntryInfo from an ``lstat`` result.

        Args:
            name: Entry name.
            st: Result of ``os.lstat`` on the entry.
            light: Reduced-metadata mode; owner and group are not recorded.

        Returns:
            EntryInfo populated from the stat result.
        """
        btime = getattr(st, "st_birthtime", st.st_ctime)
        return cls(
            name=name,
            is_dir=stat.S_ISDIR(st.st_mode),
            size=st.st_size,
            atime=st.st_atime,
            btime=btime,
            ctime=st.st_ctime,
            mtime=st.st_mtime,
            inode=st.st_ino,
            uid=0 if light else st.st_uid,
            gid=0 if light else st.st_gid,
        )

    @classmethod
    def from_path(cls, path: str, *, light: bool = False) -> "EntryInfo":
        """Build an EntryInfo by stat'ing ``path`` without following symlinks.

        Raises:
            OSError: If the entry cannot be stat'ed.
        """
        return cls.from_stat(os.path.basename(path), os.lstat(path), light=light)


@dataclass(frozen=True, slots=True)
class SortSettings:
    """Immutable bundle of ordering options.

    Attributes:
        key: Primary sort key.
        reverse: Invert the final comparison result.
        dirs_first: Directories sort before everything else.
        case_sensitive: Name comparison distinguishes case.
        use_locale: Final name tie-break uses locale collation instead of
            codepoint order.
        light_mode: Owner/group metadata is unavailable; those keys degrade
            to name order.
    """

    key: SortKey = SortKey.NAME
    reverse: bool = False
    dirs_first: bool = True
    case_sensitive: bool = False
    use_locale: bool = True
    light_mode: bool = False

    @property
    def effective_key(self) -> SortKey:
        """Sort key actually applied, after light-mode degradation."""
        if self.light_mode and self.key in (SortKey.OWNER, SortKey.GROUP):
            return SortKey.NAME
        return self.key
