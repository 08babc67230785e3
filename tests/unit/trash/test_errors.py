"""Unit tests for trash error types."""

import errno

import pytest
from trashctl.trash.errors import (
    AlreadyExistsError,
    CrossDeviceError,
    ErrorKind,
    MetadataWriteError,
    NotFoundError,
    PermissionDeniedError,
    TrashError,
    error_from_oserror,
)


class TestErrorFromOSError:
    """Tests for error_from_oserror function."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (errno.ENOENT, NotFoundError),
            (errno.ENOTDIR, NotFoundError),
            (errno.EACCES, PermissionDeniedError),
            (errno.EPERM, PermissionDeniedError),
            (errno.EROFS, PermissionDeniedError),
            (errno.EEXIST, AlreadyExistsError),
            (errno.ENOTEMPTY, AlreadyExistsError),
            (errno.EXDEV, CrossDeviceError),
        ],
    )
    def test_errno_mapping(self, code: int, expected: type[TrashError]) -> None:
        """Known errno values map to their specific error class."""
        error = error_from_oserror(OSError(code, "reason"), "/tmp/x")

        assert type(error) is expected
        assert error.path == "/tmp/x"

    def test_unknown_errno_is_io_error(self) -> None:
        """Unmapped errno values fall back to the base class."""
        error = error_from_oserror(OSError(errno.EIO, "Input/output error"), "/tmp/x")

        assert type(error) is TrashError
        assert error.kind == ErrorKind.IO_ERROR

    def test_message_names_path_and_reason(self) -> None:
        """The message is "path: reason", optionally prefixed."""
        exc = OSError(errno.ENOENT, "No such file or directory")

        assert str(error_from_oserror(exc, "/a")) == "/a: No such file or directory"
        assert str(error_from_oserror(exc, "/a", "chdir")) == (
            "chdir: /a: No such file or directory"
        )


class TestErrorAttributes:
    """Tests for error subclasses carrying extra data."""

    def test_permission_denied_offending(self) -> None:
        """PermissionDeniedError keeps every offending path."""
        error = PermissionDeniedError("denied", "/top", ("/top/a", "/top/b"))

        assert error.offending == ("/top/a", "/top/b")
        assert error.kind == ErrorKind.PERMISSION_DENIED

    def test_metadata_write_cleanup_error(self) -> None:
        """MetadataWriteError exposes the cleanup failure."""
        cleanup = OSError(errno.EACCES, "Permission denied")
        error = MetadataWriteError("write failed", "/x", cleanup_error=cleanup)

        assert error.cleanup_error is cleanup
        assert isinstance(error, TrashError)
