"""Trash can: safe deletion and restoration of files.

This module provides the trash layout and item models, the relocation
safety validator, the trash engine, and the interactive ELN selection
session.
"""

from trashctl.trash.engine import TrashEngine, working_directory
from trashctl.trash.errors import (
    AlreadyExistsError,
    CorruptMetadataError,
    CrossDeviceError,
    ErrorKind,
    ForbiddenPathError,
    ImmutableError,
    InvalidSelectionError,
    MetadataWriteError,
    NotFoundError,
    PermissionDeniedError,
    RelocationError,
    StaleMetadataError,
    TrashError,
    UnsupportedTypeError,
    WorkingDirectoryError,
)
from trashctl.trash.models import TrashActionResult, TrashInfo, TrashItem, TrashLayout
from trashctl.trash.selection import (
    BatchOutcome,
    Selection,
    SelectionKind,
    SelectionMode,
    SelectionSession,
    SessionReport,
    parse_selection,
)
from trashctl.trash.validator import CheckStatus, RelocationCheck, check_relocatable

__all__ = [
    "AlreadyExistsError",
    "BatchOutcome",
    "CheckStatus",
    "CorruptMetadataError",
    "CrossDeviceError",
    "ErrorKind",
    "ForbiddenPathError",
    "ImmutableError",
    "InvalidSelectionError",
    "MetadataWriteError",
    "NotFoundError",
    "PermissionDeniedError",
    "RelocationCheck",
    "RelocationError",
    "Selection",
    "SelectionKind",
    "SelectionMode",
    "SelectionSession",
    "SessionReport",
    "StaleMetadataError",
    "TrashActionResult",
    "TrashEngine",
    "TrashError",
    "TrashInfo",
    "TrashItem",
    "TrashLayout",
    "UnsupportedTypeError",
    "WorkingDirectoryError",
    "check_relocatable",
    "parse_selection",
    "working_directory",
]
