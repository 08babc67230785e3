"""Trash engine: moving items into and out of the trash can.

Handles the lifecycle of trashed items: collision-safe naming, the payload
move, the info record, restoration to the original location and permanent
erasure. Single-item operations raise TrashError subclasses; the ``*_many``
variants return one TrashActionResult per item and never abort the batch.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime

from trashctl.core.config import TrashConfig
from trashctl.ordering import SortKey, listing_comparator, scan_entries, scan_names
from trashctl.ordering.scan import count_entries
from trashctl.trash.errors import (
    AlreadyExistsError,
    CorruptMetadataError,
    ForbiddenPathError,
    MetadataWriteError,
    NotFoundError,
    PermissionDeniedError,
    StaleMetadataError,
    TrashError,
    WorkingDirectoryError,
    error_from_oserror,
)
from trashctl.trash.info import read_info, write_info
from trashctl.trash.models import TrashActionResult, TrashItem, TrashLayout
from trashctl.trash.naming import date_suffix, unique_item_name
from trashctl.trash.relocate import DefaultRelocator, Relocator
from trashctl.trash.validator import check_relocatable, parent_dir, strip_trailing_sep

logger = logging.getLogger(__name__)


def current_directory() -> str:
    """Return the working directory, failing cleanly if it was removed.

    Raises:
        WorkingDirectoryError: If the directory cannot be determined.
    """
    try:
        return os.getcwd()
    except OSError as e:
        msg = f"Cannot determine the current working directory: {e.strerror or e}"
        raise WorkingDirectoryError(msg) from e


@contextmanager
def working_directory(path: str) -> Iterator[str]:
    """Temporarily change the working directory to ``path``.

    The previous working directory is restored on every exit path.

    Yields:
        The previous working directory.

    Raises:
        TrashError: If ``path`` cannot be entered.
        WorkingDirectoryError: If the current directory cannot be determined
            or the previous one cannot be restored.
    """
    previous = current_directory()

    try:
        os.chdir(path)
    except OSError as e:
        raise error_from_oserror(e, path) from e

    try:
        yield previous
    finally:
        try:
            os.chdir(previous)
        except OSError as e:
            msg = f"{previous}: Cannot restore working directory: {e.strerror or e}"
            raise WorkingDirectoryError(msg, previous) from e


def _is_within(path: str, directory: str) -> bool:
    return path.startswith(directory.rstrip(os.sep) + os.sep)


class TrashEngine:
    """Performs trash, restore and erase operations on one trash area.

    Attributes:
        layout: The trash area operated on.
        config: Listing and naming configuration.
    """

    def __init__(
        self,
        layout: TrashLayout,
        config: TrashConfig | None = None,
        relocator: Relocator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the TrashEngine.

        Args:
            layout: Trash area to operate on. Its directories must exist.
            config: Listing configuration. Defaults to TrashConfig().
            relocator: Move/delete implementation. Defaults to
                DefaultRelocator (rename with ``mv`` fallback).
            clock: Source of deletion timestamps.
        """
        self.layout = layout
        self.config = config or TrashConfig()
        self._relocator = relocator or DefaultRelocator()
        self._clock = clock

    # =========================================================================
    # Trashing
    # =========================================================================

    def _check_target(self, path: str) -> None:
        """Refuse the trash area itself, its ancestors and its contents.

        Symlinked parent directories are resolved; the final component is
        not, so a symlink pointing into the trash can still be trashed.
        """
        trash_dir = str(self.layout.trash_dir)
        resolved = os.path.join(os.path.realpath(parent_dir(path)), os.path.basename(path))
        for trash in {trash_dir, os.path.realpath(trash_dir)}:
            for candidate in {path, resolved}:
                if candidate == trash or _is_within(trash, candidate):
                    msg = f"Cannot trash '{path}'"
                    raise ForbiddenPathError(msg, path)
                if _is_within(candidate, trash):
                    msg = f"{path}: Use 'trash del' to remove trashed files"
                    raise ForbiddenPathError(msg, path)

    def put(
        self,
        path: str,
        *,
        cwd: str | None = None,
        deletion_date: datetime | None = None,
    ) -> TrashItem:
        """Move a file into the trash can.

        Args:
            path: File to trash. Relative paths resolve against ``cwd``.
            cwd: Base directory for relative paths. Defaults to the current directory.
            deletion_date: Deletion time shared by a batch. Defaults to now.

        Returns:
            The newly created TrashItem.

        Raises:
            ForbiddenPathError: The path is the trash area, an ancestor of
                it, or inside it.
            NotFoundError: The path does not exist.
            PermissionDeniedError: Write/execute permission is missing.
            ImmutableError: The immutable attribute is set.
            UnsupportedTypeError: The path is a block or character device.
            WorkingDirectoryError: A relative path was given and the current
                directory no longer exists.
            RelocationError: The cross-device fallback move failed.
            MetadataWriteError: The info record could not be written; the
                moved payload was deleted unless ``cleanup_error`` is set.
        """
        if not path:
            msg = "Empty path"
            raise NotFoundError(msg, path)

        absolute = path if os.path.isabs(path) else os.path.join(cwd or current_directory(), path)
        absolute = strip_trailing_sep(os.path.normpath(absolute))
        self._check_target(absolute)

        check = check_relocatable(absolute)
        for notice in check.notices:
            logger.debug("%s", notice)
        check.raise_for_status()

        moment = deletion_date or self._clock()
        basename = os.path.basename(absolute)
        try:
            name = unique_item_name(self.layout, basename, date_suffix(moment))
        except (ValueError, FileExistsError) as e:
            raise TrashError(f"{absolute}: {e}", absolute) from e

        item = TrashItem.from_layout(self.layout, name)
        self._relocator.relocate(absolute, str(item.payload))
        logger.info("Moved %s to %s", absolute, item.payload)

        try:
            write_info(item.info_file, absolute, moment)
        except OSError as e:
            self._undo_put(item, absolute, e)

        return item

    def _undo_put(self, item: TrashItem, original: str, write_error: OSError) -> None:
        """Remove a payload whose info record could not be written, then raise."""
        message = f"{item.info_file}: {write_error.strerror or write_error}"
        try:
            self._relocator.delete_tree(str(item.payload))
        except TrashError as cleanup_error:
            logger.error(
                "Cannot remove %s after failed info write; remove it manually",
                item.payload,
            )
            msg = f"{message} (cleanup failed: {cleanup_error}; remove {item.payload} manually)"
            raise MetadataWriteError(msg, original, cleanup_error) from write_error
        logger.warning("Removed %s after failed info write", item.payload)
        raise MetadataWriteError(message, original) from write_error

    def put_many(self, paths: Iterable[str], *, cwd: str | None = None) -> list[TrashActionResult]:
        """Trash several files with one shared deletion timestamp.

        Args:
            paths: Files to trash.
            cwd: Base directory for relative paths.

        Returns:
            List of TrashActionResult, one per input path.
        """
        moment = self._clock()
        results: list[TrashActionResult] = []
        for path in paths:
            try:
                item = self.put(path, cwd=cwd, deletion_date=moment)
            except TrashError as e:
                logger.debug("Trashing %s failed: %s", path, e)
                results.append(TrashActionResult.failed(path, e))
                continue
            results.append(TrashActionResult.ok(path, str(item.payload)))
        return results

    # =========================================================================
    # Restoring and erasing
    # =========================================================================

    def _item(self, name: str) -> TrashItem:
        if not name or name in (".", "..") or os.sep in name:
            msg = f"{name}: No such trashed file"
            raise NotFoundError(msg, name)
        return TrashItem.from_layout(self.layout, name)

    def restore(self, name: str) -> str:
        """Move a trashed item back to its original location.

        Args:
            name: Name of the item in the files area.

        Returns:
            The original path the item was restored to.

        Raises:
            NotFoundError: Neither payload nor record exists, or the
                destination's parent directory is missing.
            CorruptMetadataError: One half of the item is missing, or the
                record is unreadable or invalid. Nothing is touched.
            PermissionDeniedError: The destination's parent is not writable.
            AlreadyExistsError: The destination is occupied.
            RelocationError: The cross-device fallback move failed.
            StaleMetadataError: The payload was restored but the record
                could not be removed.
        """
        item = self._item(name)
        has_payload = os.path.lexists(item.payload)
        has_info = os.path.lexists(item.info_file)
        if not has_payload and not has_info:
            msg = f"{name}: No such trashed file"
            raise NotFoundError(msg, name)
        if not has_info:
            msg = f"Info file for '{name}' not found. Try restoring the file manually"
            raise CorruptMetadataError(msg, name)
        if not has_payload:
            msg = f"{name}: Info file exists but the trashed file is missing"
            raise CorruptMetadataError(msg, name)

        destination = read_info(item.info_file).original_path

        parent = parent_dir(destination)
        if not os.path.isdir(parent):
            msg = f"{parent}: No such directory"
            raise NotFoundError(msg, parent)
        if not os.access(parent, os.W_OK | os.X_OK):
            msg = f"{parent}: Permission denied"
            raise PermissionDeniedError(msg, parent, (parent,))
        if os.path.lexists(destination):
            msg = f"{destination}: Destination file exists"
            raise AlreadyExistsError(msg, destination)

        self._relocator.relocate(str(item.payload), destination)
        logger.info("Restored %s to %s", name, destination)

        try:
            item.info_file.unlink()
        except OSError as e:
            msg = f"{item.info_file}: Error removing info file: {e.strerror or e}"
            raise StaleMetadataError(msg, str(item.info_file)) from e

        return destination

    def restore_many(self, names: Iterable[str]) -> list[TrashActionResult]:
        """Restore several trashed items.

        Returns:
            List of TrashActionResult, one per input name.
        """
        results: list[TrashActionResult] = []
        for name in names:
            try:
                destination = self.restore(name)
            except TrashError as e:
                logger.debug("Restoring %s failed: %s", name, e)
                results.append(TrashActionResult.failed(name, e))
                continue
            results.append(TrashActionResult.ok(name, destination))
        return results

    def erase(self, name: str) -> None:
        """Permanently delete a trashed item and its record.

        Raises:
            NotFoundError: The payload or the record is missing; the message
                names the missing half and nothing is deleted.
            TrashError: A removal failed.
        """
        item = self._item(name)
        missing = [
            str(path) for path in (item.payload, item.info_file) if not os.path.lexists(path)
        ]
        if missing:
            msg = f"{name}: Missing {' and '.join(missing)}"
            raise NotFoundError(msg, missing[0])

        self._relocator.delete_tree(str(item.payload))
        self._relocator.delete_tree(str(item.info_file))
        logger.info("Erased %s", name)

    def erase_many(self, names: Iterable[str]) -> list[TrashActionResult]:
        """Erase several trashed items.

        Returns:
            List of TrashActionResult, one per input name.
        """
        results: list[TrashActionResult] = []
        for name in names:
            try:
                self.erase(name)
            except TrashError as e:
                logger.debug("Erasing %s failed: %s", name, e)
                results.append(TrashActionResult.failed(name, e))
                continue
            results.append(TrashActionResult.ok(name))
        return results

    def erase_all(self) -> list[TrashActionResult]:
        """Erase every listed item, in listing order.

        Raises:
            WorkingDirectoryError: If the working directory cannot be restored.
            TrashError: If the files area cannot be read.
        """
        return self.erase_many(self.list_names())

    # =========================================================================
    # Listing
    # =========================================================================

    def list_names(self) -> list[str]:
        """Return trashed item names in listing order.

        The files area is scanned from inside it; hidden entries and names
        matching the configured filter are left out.

        Raises:
            WorkingDirectoryError: If the working directory cannot be restored.
            TrashError: If the files area cannot be read.
        """
        config = self.config
        entry_filter = config.entry_filter()
        files_dir = str(self.layout.files_dir)
        with working_directory(files_dir):
            try:
                if config.sort == SortKey.NONE:
                    compare = listing_comparator(
                        unicode=config.unicode,
                        case_sensitive=config.case_sensitive,
                        reverse=config.sort_reverse,
                    )
                    return scan_names(".", compare, entry_filter)
                entries = scan_entries(".", config.sort_settings(), entry_filter)
            except OSError as e:
                raise error_from_oserror(e, files_dir) from e
        return [entry.name for entry in entries]

    def count(self) -> int:
        """Number of trashed items, hidden ones included.

        Raises:
            TrashError: If the files area cannot be read.
        """
        try:
            return count_entries(str(self.layout.files_dir))
        except OSError as e:
            raise error_from_oserror(e, str(self.layout.files_dir)) from e
