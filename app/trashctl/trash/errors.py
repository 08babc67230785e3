"""Exceptions raised by trash operations.

Every exception derives from TrashError and carries an ErrorKind so batch
results and the CLI can report failures by category.
"""

import errno
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a trash operation failure.

    Attributes:
        NOT_FOUND: A path or trashed item does not exist.
        PERMISSION_DENIED: Missing write/execute permission somewhere on the path.
        IMMUTABLE: The immutable attribute is set on the file or directory.
        UNSUPPORTED_TYPE: Block/character devices and unknown file types.
        CROSS_DEVICE: Source and destination live on different filesystems.
        ALREADY_EXISTS: A restore destination is occupied.
        CORRUPT_METADATA: A trash info record is missing, unreadable or invalid.
        INVALID_SELECTION: Interactive input does not form a valid selection.
        FORBIDDEN: The trash area itself or one of its ancestors was targeted.
        STALE_METADATA: A payload was restored but its record could not be removed.
        WORKING_DIRECTORY: The working directory could not be restored.
        IO_ERROR: Any other operating system error.
    """

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    IMMUTABLE = "immutable"
    UNSUPPORTED_TYPE = "unsupported_type"
    CROSS_DEVICE = "cross_device"
    ALREADY_EXISTS = "already_exists"
    CORRUPT_METADATA = "corrupt_metadata"
    INVALID_SELECTION = "invalid_selection"
    FORBIDDEN = "forbidden"
    STALE_METADATA = "stale_metadata"
    WORKING_DIRECTORY = "working_directory"
    IO_ERROR = "io_error"


class TrashError(Exception):
    """Base exception for trash operations.

    Attributes:
        path: Path the failure is about, if any.
    """

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(TrashError):
    """Raised when a path or trashed item does not exist."""

    kind = ErrorKind.NOT_FOUND


class PermissionDeniedError(TrashError):
    """Raised when write/execute permission is missing.

    Attributes:
        offending: Every path that failed the permission check.
    """

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(
        self,
        message: str,
        path: str | None = None,
        offending: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, path)
        self.offending = offending


class ImmutableError(TrashError):
    """Raised when the immutable attribute forbids moving a file."""

    kind = ErrorKind.IMMUTABLE


class UnsupportedTypeError(TrashError):
    """Raised for file types that cannot be trashed (block/char devices)."""

    kind = ErrorKind.UNSUPPORTED_TYPE


class CrossDeviceError(TrashError):
    """Raised when a rename crosses filesystems.

    Handled internally by falling back to an external move; only surfaces
    if nothing handles it.
    """

    kind = ErrorKind.CROSS_DEVICE


class AlreadyExistsError(TrashError):
    """Raised when a restore destination is already occupied."""

    kind = ErrorKind.ALREADY_EXISTS


class CorruptMetadataError(TrashError):
    """Raised when a trash info record is missing, unreadable or invalid."""

    kind = ErrorKind.CORRUPT_METADATA


class InvalidSelectionError(TrashError):
    """Raised when interactive selection input is malformed.

    Attributes:
        token: The offending input token.
    """

    kind = ErrorKind.INVALID_SELECTION

    def __init__(self, message: str, token: str) -> None:
        super().__init__(message)
        self.token = token


class ForbiddenPathError(TrashError):
    """Raised when asked to trash the trash area or one of its ancestors."""

    kind = ErrorKind.FORBIDDEN


class RelocationError(TrashError):
    """Raised when an external move or removal command fails."""


class MetadataWriteError(TrashError):
    """Raised when the info record of a freshly moved payload cannot be written.

    Attributes:
        cleanup_error: Set when removing the orphaned payload failed as well;
            the payload is then left in the files area.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        cleanup_error: BaseException | None = None,
    ) -> None:
        super().__init__(message, path)
        self.cleanup_error = cleanup_error


class StaleMetadataError(TrashError):
    """Raised when a restored payload's info record could not be removed.

    The payload itself is already back at its original location.
    """

    kind = ErrorKind.STALE_METADATA


class WorkingDirectoryError(TrashError):
    """Raised when the working directory cannot be determined or restored."""

    kind = ErrorKind.WORKING_DIRECTORY


_ERRNO_MAP: dict[int, type[TrashError]] = {
    errno.ENOENT: NotFoundError,
    errno.ENOTDIR: NotFoundError,
    errno.EACCES: PermissionDeniedError,
    errno.EPERM: PermissionDeniedError,
    errno.EROFS: PermissionDeniedError,
    errno.EEXIST: AlreadyExistsError,
    errno.ENOTEMPTY: AlreadyExistsError,
    errno.EXDEV: CrossDeviceError,
}


def error_from_oserror(exc: OSError, path: str, context: str | None = None) -> TrashError:
    """Translate an OSError into the matching TrashError subclass.

    Args:
        exc: The operating system error.
        path: Path the operation was working on.
        context: Optional prefix for the message (e.g. the command name).

    Returns:
        A TrashError whose message names the path and the system error text.
    """
    error_cls = _ERRNO_MAP.get(exc.errno or 0, TrashError)
    reason = exc.strerror or str(exc)
    message = f"{path}: {reason}"
    if context:
        message = f"{context}: {message}"
    return error_cls(message, path)
