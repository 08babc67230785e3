"""Reading and writing ``.trashinfo`` records.

Record format::

    [Trash Info]
    Path=<percent-encoded absolute original path>
    DeletionDate=YYYY-MM-DDTHH:MM:SS

Records are written with zero-padded date fields. The reader accepts
unpadded fields too and only insists on a usable ``Path=`` entry.
"""

import logging
import os
import re
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from urllib.parse import quote, unquote_to_bytes

from trashctl.trash.errors import CorruptMetadataError, NotFoundError
from trashctl.trash.models import TrashInfo

logger = logging.getLogger(__name__)

INFO_HEADER = "[Trash Info]"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_DATE_PATTERN = re.compile(r"^\s*(\d+)-(\d+)-(\d+)T(\d+):(\d+):(\d+)\s*$")


def encode_path(path: str) -> str:
    """Percent-encode a path for a ``Path=`` entry.

    Bytes outside the unreserved set are escaped; ``/`` is kept.
    """
    return quote(os.fsencode(path), safe="/")


def decode_path(value: str) -> str:
    """Reverse :func:`encode_path`.

    Undecodable bytes are kept through the filesystem encoding's error
    handler, so any name that could be trashed can be restored.
    """
    return os.fsdecode(unquote_to_bytes(value))


def format_info(original_path: str, deletion_date: datetime) -> str:
    """Render the text of a trash info record."""
    return (
        f"{INFO_HEADER}\n"
        f"Path={encode_path(original_path)}\n"
        f"DeletionDate={deletion_date.strftime(DATE_FORMAT)}\n"
    )


def _parse_date(value: str) -> datetime | None:
    match = _DATE_PATTERN.match(value)
    if not match:
        return None
    try:
        return datetime(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def parse_info(text: str, source: str = "<trashinfo>") -> TrashInfo:
    """Parse the text of a trash info record.

    Args:
        text: Record content.
        source: Name of the record, used in error messages.

    Returns:
        TrashInfo with the decoded original path.

    Raises:
        CorruptMetadataError: If the ``Path=`` entry is missing or empty, or
            decodes to a relative path.
    """
    raw_path: str | None = None
    deletion_date: datetime | None = None

    lines = text.splitlines()
    if not lines or lines[0].strip() != INFO_HEADER:
        logger.debug("%s: missing %s header", source, INFO_HEADER)

    for line in lines:
        if line.startswith("Path="):
            raw_path = line[len("Path=") :]
        elif line.startswith("DeletionDate="):
            deletion_date = _parse_date(line[len("DeletionDate=") :])

    if not raw_path:
        msg = f"{source}: No original path recorded"
        raise CorruptMetadataError(msg, source)

    original_path = decode_path(raw_path)
    if not os.path.isabs(original_path):
        msg = f"{source}: Original path is not absolute: {original_path!r}"
        raise CorruptMetadataError(msg, source)

    return TrashInfo(original_path=original_path, deletion_date=deletion_date)


def read_info(info_file: Path) -> TrashInfo:
    """Read and parse a trash info record.

    Raises:
        NotFoundError: If the record does not exist.
        CorruptMetadataError: If the record is unreadable or invalid.
    """
    try:
        text = info_file.read_text(encoding="utf-8", errors="surrogateescape")
    except FileNotFoundError as e:
        msg = f"{info_file}: Info file not found"
        raise NotFoundError(msg, str(info_file)) from e
    except OSError as e:
        msg = f"{info_file}: {e.strerror or e}"
        raise CorruptMetadataError(msg, str(info_file)) from e
    return parse_info(text, str(info_file))


def write_info(info_file: Path, original_path: str, deletion_date: datetime) -> Path:
    """Write a trash info record.

    The record is written atomically by first writing to a temporary file
    in the info directory and then using os.replace() for atomic rename.

    Args:
        info_file: Destination of the record.
        original_path: Absolute path the item was trashed from.
        deletion_date: Local deletion time.

    Returns:
        Path of the written record.

    Raises:
        OSError: If the record cannot be written.
    """
    content = format_info(original_path, deletion_date)
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=info_file.parent,
            prefix=".",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
        os.replace(tmp_path, info_file)
    except OSError:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise

    logger.debug("Wrote trash info %s", info_file)
    return info_file
