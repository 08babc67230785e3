"""Permission and safety checks for relocating files.

A trash move is a rename, which only needs write and execute permission on
the directories being mutated. A rename can still succeed while a nested
subdirectory is unwritable, leaving a tree that cannot be moved back, so
directories are swept recursively before they are accepted.
"""

import errno
import logging
import os
import stat
import struct
import sys
from dataclasses import dataclass
from enum import Enum

from trashctl.trash.errors import (
    ImmutableError,
    NotFoundError,
    PermissionDeniedError,
    TrashError,
    UnsupportedTypeError,
)

logger = logging.getLogger(__name__)

# linux/fs.h
FS_IOC_GETFLAGS = 0x80086601
FS_IMMUTABLE_FL = 0x00000010

_WX = os.W_OK | os.X_OK


class CheckStatus(Enum):
    """Outcome of a relocation check.

    Attributes:
        OK: The path may be relocated.
        DENIED: Missing write/execute permission somewhere.
        IMMUTABLE: The immutable attribute is set.
        NOT_FOUND: The path does not exist.
        UNSUPPORTED: Block/character device or unknown file type.
    """

    OK = "ok"
    DENIED = "denied"
    IMMUTABLE = "immutable"
    NOT_FOUND = "not_found"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class RelocationCheck:
    """Result of checking whether a path may be relocated.

    Attributes:
        status: Outcome of the check.
        path: The checked path (trailing separator stripped).
        reason: Human-readable explanation when the status is not OK.
        offending: Every path that failed a permission check.
        notices: Degraded-capability notices (e.g. immutable bit not
            supported on this filesystem). These never fail the check.
    """

    status: CheckStatus
    path: str
    reason: str | None = None
    offending: tuple[str, ...] = ()
    notices: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """Check if the path may be relocated."""
        return self.status == CheckStatus.OK

    def raise_for_status(self) -> None:
        """Raise the TrashError matching a failed check.

        Raises:
            NotFoundError: The path does not exist.
            PermissionDeniedError: Permission is missing (lists offenders).
            ImmutableError: The immutable attribute is set.
            UnsupportedTypeError: The file type cannot be trashed.
        """
        message = self.reason or self.path
        match self.status:
            case CheckStatus.OK:
                return
            case CheckStatus.NOT_FOUND:
                raise NotFoundError(message, self.path)
            case CheckStatus.DENIED:
                raise PermissionDeniedError(message, self.path, self.offending)
            case CheckStatus.IMMUTABLE:
                raise ImmutableError(message, self.path)
            case CheckStatus.UNSUPPORTED:
                raise UnsupportedTypeError(message, self.path)
        raise TrashError(message, self.path)


def strip_trailing_sep(path: str) -> str:
    """Remove trailing path separators, keeping a lone root separator."""
    stripped = path.rstrip(os.sep)
    return stripped or path[:1]


def parent_dir(path: str) -> str:
    """Return the parent directory of an absolute path.

    A direct child of the filesystem root has the root as its parent.
    """
    parent = os.path.dirname(strip_trailing_sep(path))
    return parent or os.sep


def is_immutable(path: str) -> bool | None:
    """Check the immutable attribute of ``path``.

    Uses the FS_IOC_GETFLAGS ioctl on Linux and ``st_flags`` on BSD and
    macOS.

    Returns:
        True or False, or None when the platform or filesystem does not
        support the attribute.

    Raises:
        OSError: If the file cannot be opened or stat'ed.
    """
    if sys.platform.startswith("linux"):
        import fcntl

        fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK | getattr(os, "O_NOFOLLOW", 0))
        try:
            buf = fcntl.ioctl(fd, FS_IOC_GETFLAGS, struct.pack("i", 0))
        except OSError as e:
            if e.errno in (errno.ENOTTY, errno.EOPNOTSUPP, errno.EINVAL, errno.ENOSYS):
                return None
            raise
        finally:
            os.close(fd)
        (flags,) = struct.unpack("i", buf[:4])
        return bool(flags & FS_IMMUTABLE_FL)

    st = os.lstat(path)
    st_flags = getattr(st, "st_flags", None)
    if st_flags is None:
        return None
    return bool(st_flags & (stat.UF_IMMUTABLE | stat.SF_IMMUTABLE))


def _has_entries(directory: str) -> bool:
    """Check whether a directory holds anything besides "." and ".."."""
    try:
        with os.scandir(directory) as it:
            return next(it, None) is not None
    except OSError:
        return False


def sweep_permissions(directory: str) -> list[str]:
    """Collect every subdirectory of ``directory`` lacking write+execute.

    The whole tree is walked; a failing subdirectory does not stop the
    sweep. Symlinks are not followed and files are not checked.

    Args:
        directory: Directory whose subtree is checked (not itself).

    Returns:
        Offending subdirectory paths, in walk order. Empty if all pass.
    """
    offending: list[str] = []
    try:
        with os.scandir(directory) as it:
            subdirs = [entry.path for entry in it if entry.is_dir(follow_symlinks=False)]
    except OSError as e:
        logger.debug("Cannot read %s during permission sweep: %s", directory, e)
        return offending

    for subdir in subdirs:
        if not os.access(subdir, _WX):
            logger.debug("Permission sweep: %s lacks write/execute", subdir)
            offending.append(subdir)
        offending.extend(sweep_permissions(subdir))
    return offending


def _check_parent(path: str, notices: tuple[str, ...] = ()) -> RelocationCheck:
    parent = parent_dir(path)
    if os.access(parent, _WX):
        return RelocationCheck(CheckStatus.OK, path, notices=notices)
    return RelocationCheck(
        CheckStatus.DENIED,
        path,
        reason=f"{parent}: Permission denied",
        offending=(parent,),
        notices=notices,
    )


def _check_immutable(path: str, kind: str) -> RelocationCheck | tuple[str, ...]:
    """Run the immutability check.

    Returns:
        A failed RelocationCheck, or the notices gathered on success.
    """
    try:
        immutable = is_immutable(path)
    except OSError as e:
        return RelocationCheck(
            CheckStatus.DENIED,
            path,
            reason=f"{path}: Cannot check immutable attribute: {e.strerror or e}",
            offending=(path,),
        )
    if immutable is None:
        notice = f"{path}: Immutable attribute not supported"
        logger.debug("%s", notice)
        return (notice,)
    if immutable:
        return RelocationCheck(CheckStatus.IMMUTABLE, path, reason=f"{path}: {kind} is immutable")
    return ()


def check_relocatable(path: str) -> RelocationCheck:
    """Decide whether ``path`` may be moved out of its directory.

    Regular files: immutable attribute, then parent write+execute.
    Directories: immutable attribute, parent write+execute, then (when not
    empty) their own write+execute and a recursive sweep of every
    subdirectory. Symlinks, sockets and FIFOs: parent write+execute only.
    Block and character devices are always rejected.

    Args:
        path: Absolute path to check. A trailing separator is ignored.

    Returns:
        RelocationCheck describing the outcome.
    """
    path = strip_trailing_sep(path)
    try:
        st = os.lstat(path)
    except OSError as e:
        missing = e.errno in (errno.ENOENT, errno.ENOTDIR)
        status = CheckStatus.NOT_FOUND if missing else CheckStatus.DENIED
        return RelocationCheck(status, path, reason=f"{path}: {e.strerror or e}")

    mode = st.st_mode

    if stat.S_ISDIR(mode):
        immutable = _check_immutable(path, "Directory")
        if isinstance(immutable, RelocationCheck):
            return immutable
        parent_check = _check_parent(path, immutable)
        if not parent_check.ok or not _has_entries(path):
            return parent_check
        if not os.access(path, _WX):
            return RelocationCheck(
                CheckStatus.DENIED,
                path,
                reason=f"{path}: Permission denied",
                offending=(path,),
                notices=immutable,
            )
        offending = sweep_permissions(path)
        if offending:
            return RelocationCheck(
                CheckStatus.DENIED,
                path,
                reason=f"{path}: Permission denied on {len(offending)} subdirectory(ies)",
                offending=tuple(offending),
                notices=immutable,
            )
        return parent_check

    if stat.S_ISREG(mode):
        immutable = _check_immutable(path, "File")
        if isinstance(immutable, RelocationCheck):
            return immutable
        return _check_parent(path, immutable)

    # Symlinks, sockets and FIFOs carry no immutable attribute
    if stat.S_ISLNK(mode) or stat.S_ISSOCK(mode) or stat.S_ISFIFO(mode):
        return _check_parent(path)

    if stat.S_ISBLK(mode):
        description = "Block device"
    elif stat.S_ISCHR(mode):
        description = "Character device"
    else:
        description = "Unknown file type"
    return RelocationCheck(
        CheckStatus.UNSUPPORTED,
        path,
        reason=f"{path} ({description}): Unsupported file type",
    )
