"""Data structures for the trash area and its items.

This module defines the trash layout (root, payload area, info area), the
parsed trash info record, and the per-item result of batch operations.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from trashctl.core.paths import FILES_SUBDIR, INFO_SUBDIR, ensure_trash_dirs
from trashctl.trash.errors import ErrorKind, TrashError

# Suffix of trash info records
INFO_SUFFIX = ".trashinfo"


@dataclass(frozen=True, slots=True)
class TrashLayout:
    """Location of a trash area.

    Built once per invocation and passed to every trash operation.

    Attributes:
        trash_dir: Root of the trash area.
        files_dir: Directory holding trashed payloads.
        info_dir: Directory holding ``.trashinfo`` records.
    """

    trash_dir: Path
    files_dir: Path
    info_dir: Path

    @classmethod
    def from_root(cls, trash_dir: Path) -> "TrashLayout":
        """Build the layout for a trash root.

        The root is made absolute but symlinks are kept, so ancestry checks
        compare against the path the user configured.
        """
        root = Path(os.path.abspath(trash_dir))
        return cls(trash_dir=root, files_dir=root / FILES_SUBDIR, info_dir=root / INFO_SUBDIR)

    def ensure(self) -> "TrashLayout":
        """Create the trash directories if they don't exist.

        Raises:
            RuntimeError: If a directory cannot be created.
        """
        ensure_trash_dirs(self.trash_dir)
        return self

    def payload_path(self, name: str) -> Path:
        """Path of a trashed payload."""
        return self.files_dir / name

    def info_path(self, name: str) -> Path:
        """Path of the info record belonging to a trashed payload."""
        return self.info_dir / f"{name}{INFO_SUFFIX}"


@dataclass(frozen=True, slots=True)
class TrashInfo:
    """Parsed content of a ``.trashinfo`` record.

    Attributes:
        original_path: Absolute path the item was trashed from.
        deletion_date: Local time of deletion, None if the field is absent
            or unparseable.
    """

    original_path: str
    deletion_date: datetime | None = None

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not os.path.isabs(self.original_path):
            msg = f"Original path must be absolute: {self.original_path!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TrashItem:
    """A trashed payload paired with its info record.

    Attributes:
        name: Name of the payload in the files area.
        payload: Full path of the payload.
        info_file: Full path of the info record.
    """

    name: str
    payload: Path
    info_file: Path

    @classmethod
    def from_layout(cls, layout: TrashLayout, name: str) -> "TrashItem":
        """Build the item for a payload name inside ``layout``."""
        return cls(name=name, payload=layout.payload_path(name), info_file=layout.info_path(name))


@dataclass(frozen=True, slots=True)
class TrashActionResult:
    """Result of a single item in a batch trash operation.

    Attributes:
        target: The path or trashed name that was operated on.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        kind: Category of the failure, None on success.
        destination: Where the item ended up (payload path for put,
            original path for restore), None if not applicable.
    """

    target: str
    success: bool
    error: str | None = None
    kind: ErrorKind | None = None
    destination: str | None = None

    @classmethod
    def ok(cls, target: str, destination: str | None = None) -> "TrashActionResult":
        """Build a successful result."""
        return cls(target=target, success=True, destination=destination)

    @classmethod
    def failed(cls, target: str, error: TrashError) -> "TrashActionResult":
        """Build a failed result from a trash error."""
        return cls(target=target, success=False, error=str(error), kind=error.kind)
