"""Unit tests for ordering comparators.

Tests natural name order, version and extension order, the entry
comparator with its sort keys, and the reversal law.
"""

from itertools import permutations
from unittest.mock import patch

import pytest
from trashctl.ordering.compare import (
    codepoint_compare,
    entry_compare,
    extension_compare,
    insensitive_compare,
    listing_comparator,
    name_compare,
    reversed_compare,
    skip_name_prefix,
    sort_entries,
    sort_names,
    version_compare,
)
from trashctl.ordering.models import EntryInfo, SortKey, SortSettings


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _punctuation_blind_strcoll(a: str, b: str) -> int:
    # Collates like glibc locales that ignore punctuation on the first pass
    ka = "".join(ch for ch in a if ch.isalnum())
    kb = "".join(ch for ch in b if ch.isalnum())
    return (ka > kb) - (ka < kb)


def _assert_strict_total_order(names: list[str], **options: bool) -> None:
    for a, b in permutations(names, 2):
        assert name_compare(a, b, **options) != 0
        assert _sign(name_compare(a, b, **options)) == -_sign(name_compare(b, a, **options))
    for a, b, c in permutations(names, 3):
        if name_compare(a, b, **options) < 0 and name_compare(b, c, **options) < 0:
            assert name_compare(a, c, **options) < 0


class TestSkipNamePrefix:
    """Tests for skip_name_prefix function."""

    def test_strips_leading_symbols(self) -> None:
        """Leading non-alphanumeric characters are dropped."""
        assert skip_name_prefix("__init__.py") == "init__.py"
        assert skip_name_prefix(".bashrc") == "bashrc"

    def test_keeps_all_symbol_name(self) -> None:
        """A name without letters or digits is kept whole."""
        assert skip_name_prefix("@@!") == "@@!"


class TestNameCompare:
    """Tests for name_compare function."""

    def test_embedded_numbers_natural(self) -> None:
        """file2 sorts before file10."""
        assert name_compare("file2", "file10", use_locale=False) < 0
        assert name_compare("file10", "file2", use_locale=False) > 0

    def test_leading_numbers_by_value(self) -> None:
        """Leading digit runs compare numerically."""
        assert name_compare("9.txt", "10.txt", use_locale=False) < 0
        assert name_compare("100", "20", use_locale=False) > 0

    def test_leading_numbers_unbounded(self) -> None:
        """Numbers beyond 64 bits still compare by value."""
        big = "1" + "0" * 40
        assert name_compare(big, big + "0", use_locale=False) < 0

    def test_prefix_is_ignored(self) -> None:
        """Names compare as if their symbol prefix was absent."""
        assert name_compare("_beta", "alpha", use_locale=False) > 0

    def test_case_insensitive_by_default(self) -> None:
        """Upper and lower case compare equal before the tie-break."""
        assert name_compare("Apple", "banana", use_locale=False) < 0
        assert name_compare("apple", "Banana", use_locale=False) < 0

    def test_case_sensitive(self) -> None:
        """Upper case sorts before lower case when case-sensitive."""
        assert name_compare("banana", "Cherry", case_sensitive=True, use_locale=False) > 0

    def test_distinct_names_never_equal(self) -> None:
        """Names differing only in case still get a strict order."""
        assert name_compare("a", "A", use_locale=False) != 0
        assert name_compare("a", "a", use_locale=False) == 0

    def test_symbol_only_names_strict_total_order(self) -> None:
        """Names without alphanumerics are ordered antisymmetrically and transitively."""
        names = ["@@x", "!!y", "@@", "!!", "#"]
        for a, b in permutations(names, 2):
            assert _sign(name_compare(a, b, use_locale=False)) == -_sign(
                name_compare(b, a, use_locale=False)
            )
            assert name_compare(a, b, use_locale=False) != 0
        for a, b, c in permutations(names, 3):
            if name_compare(a, b, use_locale=False) < 0 and name_compare(b, c, use_locale=False) < 0:
                assert name_compare(a, c, use_locale=False) < 0

    def test_punctuation_ignoring_collation_stays_transitive(self) -> None:
        """Numbers inside names cannot be overruled by collating the whole name."""
        names = ["p2", "p10", "p-15", "p-3", "P2", "p02", "q1", "p1a", "p1-b"]

        with patch(
            "trashctl.ordering.compare.locale.strcoll", side_effect=_punctuation_blind_strcoll
        ):
            assert name_compare("p2", "p10") < 0
            assert name_compare("p-15", "p10") > 0
            assert name_compare("p-15", "p2") > 0
            _assert_strict_total_order(names)
            _assert_strict_total_order(names, case_sensitive=True)

    @pytest.mark.parametrize("use_locale", [True, False])
    def test_mixed_names_strict_total_order(self, use_locale: bool) -> None:
        """Mixed letters, digits and symbols form a strict total order."""
        names = ["file1", "File01", "file1a", "file10", "10", "9z", "a-b", "a_b", "ab", "_x"]

        _assert_strict_total_order(names, use_locale=use_locale)


class TestVersionCompare:
    """Tests for version_compare function."""

    def test_numeric_runs(self) -> None:
        """Digit runs compare by value."""
        assert version_compare("file2", "file10") < 0
        assert version_compare("v1.10.0", "v1.9.3") > 0

    def test_leading_zeros_first(self) -> None:
        """Equal values with more leading zeros sort first."""
        assert version_compare("a007", "a7") < 0

    def test_text_runs_lexical(self) -> None:
        """Text runs compare lexically."""
        assert version_compare("alpha1", "beta1") < 0

    def test_prefix_shorter_first(self) -> None:
        """A name that is a prefix of another sorts first."""
        assert version_compare("file", "file1") < 0


class TestExtensionCompare:
    """Tests for extension_compare function."""

    def test_no_extension_first(self) -> None:
        """Names without an extension sort before names with one."""
        assert extension_compare("Makefile", "a.c") < 0
        assert extension_compare("a.c", "Makefile") > 0

    def test_leading_dot_is_not_extension(self) -> None:
        """A dot in first position does not start an extension."""
        assert extension_compare(".bashrc", "a.sh") < 0

    def test_case_insensitive(self) -> None:
        """Extensions compare without regard to case."""
        assert extension_compare("a.TXT", "b.txt") == 0
        assert extension_compare("a.c", "b.H") < 0


class TestEntryCompare:
    """Tests for entry_compare function."""

    def test_dirs_first(self) -> None:
        """Directories precede files regardless of the sort key."""
        directory = EntryInfo(name="zzz", is_dir=True, size=1)
        file = EntryInfo(name="aaa", size=0)
        settings = SortSettings(key=SortKey.SIZE, use_locale=False)

        assert entry_compare(directory, file, settings) < 0

    def test_dirs_first_disabled(self) -> None:
        """Without dirs-first, the sort key alone decides."""
        directory = EntryInfo(name="zzz", is_dir=True)
        file = EntryInfo(name="aaa")
        settings = SortSettings(key=SortKey.NAME, dirs_first=False, use_locale=False)

        assert entry_compare(directory, file, settings) > 0

    @pytest.mark.parametrize(
        ("key", "field"),
        [
            (SortKey.SIZE, "size"),
            (SortKey.ATIME, "atime"),
            (SortKey.BTIME, "btime"),
            (SortKey.CTIME, "ctime"),
            (SortKey.MTIME, "mtime"),
            (SortKey.INODE, "inode"),
            (SortKey.OWNER, "uid"),
            (SortKey.GROUP, "gid"),
        ],
    )
    def test_numeric_keys(self, key: SortKey, field: str) -> None:
        """Metadata keys compare numerically before the name."""
        small = EntryInfo(name="b", **{field: 1})
        large = EntryInfo(name="a", **{field: 2})
        settings = SortSettings(key=key, use_locale=False)

        assert entry_compare(small, large, settings) < 0

    def test_tie_falls_back_to_name(self) -> None:
        """Equal keys are ordered by name."""
        a = EntryInfo(name="a", size=5)
        b = EntryInfo(name="b", size=5)
        settings = SortSettings(key=SortKey.SIZE, use_locale=False)

        assert entry_compare(a, b, settings) < 0

    def test_light_mode_owner_degrades_to_name(self) -> None:
        """Owner order becomes name order in light mode."""
        a = EntryInfo(name="a", uid=2)
        b = EntryInfo(name="b", uid=1)
        settings = SortSettings(key=SortKey.OWNER, light_mode=True, use_locale=False)

        assert settings.effective_key == SortKey.NAME
        assert entry_compare(a, b, settings) < 0

    def test_reverse_flips_sign(self) -> None:
        """Reverse inverts the result of the key comparison."""
        a = EntryInfo(name="a", size=1)
        b = EntryInfo(name="b", size=2)
        forward = SortSettings(key=SortKey.SIZE, use_locale=False)
        backward = SortSettings(key=SortKey.SIZE, reverse=True, use_locale=False)

        assert entry_compare(a, b, forward) < 0
        assert entry_compare(a, b, backward) > 0

    def test_reverse_keeps_dirs_first(self) -> None:
        """Reversal does not move directories after files."""
        directory = EntryInfo(name="d", is_dir=True)
        file = EntryInfo(name="f")
        settings = SortSettings(key=SortKey.NAME, reverse=True, use_locale=False)

        assert entry_compare(directory, file, settings) < 0


class TestReversalLaw:
    """sign(reversed(a, b)) == -sign(cmp(a, b)) for every comparator."""

    NAMES = ["file2", "file10", "Alpha", "alpha", ".hidden", "@@x", "!!y", "b.TXT", "a.txt"]

    @pytest.mark.parametrize(
        "compare",
        [
            codepoint_compare,
            insensitive_compare,
            version_compare,
            lambda a, b: name_compare(a, b, use_locale=False),
        ],
    )
    def test_reversed_compare(self, compare) -> None:
        """reversed_compare is a sign flip."""
        flipped = reversed_compare(compare)
        for a, b in permutations(self.NAMES, 2):
            assert _sign(flipped(a, b)) == -_sign(compare(a, b))

    def test_entry_compare_reverse(self) -> None:
        """Reversed entry settings flip every pairwise result."""
        entries = [EntryInfo(name=name, size=len(name) % 3) for name in self.NAMES]
        forward = SortSettings(key=SortKey.SIZE, use_locale=False)
        backward = SortSettings(key=SortKey.SIZE, reverse=True, use_locale=False)
        for a, b in permutations(entries, 2):
            assert _sign(entry_compare(a, b, backward)) == -_sign(entry_compare(a, b, forward))


class TestListingComparator:
    """Tests for listing_comparator and the sort helpers."""

    def test_codepoint_order(self) -> None:
        """Case-sensitive listings put upper case first."""
        compare = listing_comparator(unicode=False, case_sensitive=True)
        assert sort_names(["b", "B", "a"], compare) == ["B", "a", "b"]

    def test_insensitive_ignores_leading_dot(self) -> None:
        """Case-insensitive listings ignore the dot of hidden names."""
        compare = listing_comparator(unicode=False)
        assert sort_names(["c", ".b", "A"], compare) == ["A", ".b", "c"]

    def test_reverse(self) -> None:
        """Reversed listings come out backwards."""
        compare = listing_comparator(unicode=False, case_sensitive=True, reverse=True)
        assert sort_names(["a", "c", "b"], compare) == ["c", "b", "a"]

    def test_sort_entries_none_keeps_order(self) -> None:
        """SortKey.NONE leaves entries in scan order."""
        entries = [EntryInfo(name="b"), EntryInfo(name="a")]
        result = sort_entries(entries, SortSettings(key=SortKey.NONE))
        assert [e.name for e in result] == ["b", "a"]

    def test_sort_entries_version(self) -> None:
        """Version order sorts numbered names naturally."""
        entries = [EntryInfo(name=n) for n in ["file10", "file2", "file1"]]
        result = sort_entries(entries, SortSettings(key=SortKey.VERSION, use_locale=False))
        assert [e.name for e in result] == ["file1", "file2", "file10"]
