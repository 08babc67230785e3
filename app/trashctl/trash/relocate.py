"""Moving and deleting trash payloads.

Two implementations share the Relocator interface: NativeRelocator uses
rename(2) and in-process removal; SubprocessRelocator runs ``mv`` and
``rm -rf`` and is used when a rename crosses filesystems. Callers use
DefaultRelocator, which picks between them.
"""

import logging
import os
import shutil
from typing import Protocol

from trashctl.trash.errors import CrossDeviceError, RelocationError, error_from_oserror
from trashctl.utils.shell import run_command

logger = logging.getLogger(__name__)


class Relocator(Protocol):
    """Capability to move a path and to delete a tree."""

    def relocate(self, source: str, destination: str) -> None:
        """Move ``source`` to ``destination``.

        Raises:
            TrashError: If the move fails.
        """
        ...

    def delete_tree(self, path: str) -> None:
        """Delete ``path`` (recursively if it is a directory).

        Raises:
            TrashError: If the removal fails.
        """
        ...


class NativeRelocator:
    """Relocator backed by rename(2), shutil.rmtree and unlink."""

    def relocate(self, source: str, destination: str) -> None:
        try:
            os.rename(source, destination)
        except OSError as e:
            raise error_from_oserror(e, source) from e

    def delete_tree(self, path: str) -> None:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.unlink(path)
        except OSError as e:
            raise error_from_oserror(e, path) from e


class SubprocessRelocator:
    """Relocator backed by the external ``mv`` and ``rm`` commands.

    Commands run synchronously to completion; there is no timeout.
    """

    def relocate(self, source: str, destination: str) -> None:
        self._run(["mv", "--", source, destination], source, "Error moving file")

    def delete_tree(self, path: str) -> None:
        self._run(["rm", "-rf", "--", path], path, "Error removing file")

    @staticmethod
    def _run(args: list[str], path: str, failure: str) -> None:
        try:
            result = run_command(args)
        except OSError as e:
            msg = f"{path}: {failure}: {e}"
            raise RelocationError(msg, path) from e
        if not result.success:
            msg = f"{path}: {failure}: {result.detail}"
            raise RelocationError(msg, path)


class DefaultRelocator:
    """Rename in place, falling back to ``mv`` across filesystems.

    After a fallback move the result is verified at both ends: the
    destination must exist and the source must be gone.

    Attributes:
        _native: Fast path used for every operation.
        _fallback: Used only when the fast path reports a cross-device move.
    """

    def __init__(
        self,
        native: Relocator | None = None,
        fallback: Relocator | None = None,
    ) -> None:
        """Initialize the DefaultRelocator.

        Args:
            native: Relocator for the fast path. Defaults to NativeRelocator.
            fallback: Relocator for cross-device moves. Defaults to
                SubprocessRelocator.
        """
        self._native = native or NativeRelocator()
        self._fallback = fallback or SubprocessRelocator()

    def relocate(self, source: str, destination: str) -> None:
        try:
            self._native.relocate(source, destination)
            return
        except CrossDeviceError:
            logger.warning("%s: cross-device move, falling back to mv", source)

        self._fallback.relocate(source, destination)

        if not os.path.lexists(destination):
            msg = f"{source}: Move reported success but {destination} does not exist"
            raise RelocationError(msg, source)
        if os.path.lexists(source):
            msg = f"{source}: Move reported success but the source still exists"
            raise RelocationError(msg, source)

    def delete_tree(self, path: str) -> None:
        self._native.delete_tree(path)
