"""Unit tests for trash item naming.

Tests the date suffix, byte-oriented trimming, and collision counters.
"""

import os
from datetime import datetime
from unittest.mock import patch

import pytest
from trashctl.trash.models import TrashLayout
from trashctl.trash.naming import compose_item_name, date_suffix, name_max, unique_item_name


class TestDateSuffix:
    """Tests for date_suffix function."""

    def test_fixed_width(self) -> None:
        """Every field is zero-padded to a 14 character stamp."""
        assert date_suffix(datetime(2024, 1, 2, 3, 4, 5)) == "20240102030405"

    def test_defaults_to_now(self) -> None:
        """Without a moment, the current time is used."""
        assert len(date_suffix()) == 14


class TestComposeItemName:
    """Tests for compose_item_name function."""

    def test_short_name(self) -> None:
        """Short names get the suffix appended after a dot."""
        assert compose_item_name("note.txt", "20240131123045") == "note.txt.20240131123045"

    def test_trimmed_to_fit_with_info_extension(self) -> None:
        """Long names are trimmed so name.suffix.trashinfo fits the limit."""
        suffix = "20240131123045"
        name = compose_item_name("x" * 300, suffix, 255)

        assert name.endswith(f"~.{suffix}")
        assert len(os.fsencode(name + ".trashinfo")) == 255

    def test_exact_fit_not_trimmed(self) -> None:
        """A name that exactly fits is kept whole."""
        suffix = "20240131123045"
        basename = "y" * (255 - len(suffix) - len(".") - len(".trashinfo"))

        assert compose_item_name(basename, suffix, 255) == f"{basename}.{suffix}"

    def test_trimming_is_byte_oriented(self) -> None:
        """Trimming counts bytes, not characters."""
        suffix = "20240131123045"
        name = compose_item_name("é" * 200, suffix, 255)

        assert len(os.fsencode(name + ".trashinfo")) <= 255
        assert os.fsencode(name).endswith(b"~." + suffix.encode())

    def test_empty_basename(self) -> None:
        """An empty basename is rejected."""
        with pytest.raises(ValueError, match="empty file name"):
            compose_item_name("", "20240131123045")

    def test_no_room(self) -> None:
        """A limit too small for the suffix is rejected."""
        with pytest.raises(ValueError, match="no room"):
            compose_item_name("file", "20240131123045", 20)


class TestNameMax:
    """Tests for name_max function."""

    def test_fallback(self, layout: TrashLayout) -> None:
        """Falls back to 255 when pathconf is unavailable."""
        with patch("trashctl.trash.naming.os.pathconf", side_effect=OSError("nope")):
            assert name_max(layout.files_dir) == 255


class TestUniqueItemName:
    """Tests for unique_item_name function."""

    def test_free_name(self, layout: TrashLayout) -> None:
        """The plain name is used when nothing collides."""
        assert unique_item_name(layout, "a.txt", "20240131123045") == "a.txt.20240131123045"

    def test_payload_collision(self, layout: TrashLayout) -> None:
        """A counter is appended when the payload name is taken."""
        (layout.files_dir / "a.txt.20240131123045").write_text("")

        assert unique_item_name(layout, "a.txt", "20240131123045") == "a.txt.20240131123045.1"

    def test_info_collision(self, layout: TrashLayout) -> None:
        """A leftover info record also counts as a collision."""
        (layout.info_dir / "a.txt.20240131123045.trashinfo").write_text("")
        (layout.files_dir / "a.txt.20240131123045.1").write_text("")

        assert unique_item_name(layout, "a.txt", "20240131123045") == "a.txt.20240131123045.2"
