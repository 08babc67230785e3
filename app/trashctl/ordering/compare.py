"""Comparison primitives for ordering directory entries.

Every comparator here is a three-way function returning a negative number,
zero or a positive number, and each one ends in a byte-wise tie-break so
distinct names never compare equal. Reversal is always a sign flip of the
final result, never an operand swap, which keeps equal-key runs in the same
relative order in both directions.
"""

import locale
import os
import re
from collections.abc import Callable, Iterable
from functools import cmp_to_key

from trashctl.ordering.models import EntryInfo, SortKey, SortSettings

Comparator = Callable[[str, str], int]

_DIGIT_RUNS = re.compile(r"([0-9]+)")


def three_way(a: object, b: object) -> int:
    """Plain three-way comparison of two orderable values."""
    return (a > b) - (a < b)  # type: ignore[operator]


def _bytes_compare(a: str, b: str) -> int:
    return three_way(os.fsencode(a), os.fsencode(b))


def _collate(a: str, b: str, use_locale: bool) -> int:
    if use_locale:
        return three_way(locale.strcoll(a, b), 0)
    return _bytes_compare(a, b)


def skip_name_prefix(name: str) -> str:
    """Drop leading characters that are neither ASCII letters nor digits.

    A name made only of such characters is returned unchanged.
    """
    for i, ch in enumerate(name):
        if ch.isascii() and ch.isalnum():
            return name[i:]
    return name


def _runs_compare(runs_a: list[str], runs_b: list[str], use_locale: bool) -> int:
    """Compare two names split into alternating text and digit runs.

    Runs are compared pairwise: digit runs by value, differing text runs by
    collation of those runs alone. The first difference decides; a name that
    runs out first sorts first.
    """
    for i, (pa, pb) in enumerate(zip(runs_a, runs_b, strict=False)):
        if i % 2:
            ret = three_way(int(pa), int(pb))
        elif pa == pb:
            continue
        else:
            ret = _collate(pa, pb, use_locale)
        if ret:
            return ret
    return three_way(len(runs_a), len(runs_b))


def name_compare(
    a: str,
    b: str,
    *,
    case_sensitive: bool = False,
    use_locale: bool = True,
) -> int:
    """Natural name comparison.

    Leading non-alphanumeric runs are skipped on both names. The remainders
    are split into text and digit runs; numbers compare by value (arbitrary
    size, so "file2" sorts before "file10") and text runs by collation.
    Unless case-sensitive, case-folded runs are compared first and case only
    breaks ties. The raw bytes of the original names decide last, so the
    result is a strict total order.

    Args:
        a: First name.
        b: Second name.
        case_sensitive: Distinguish upper and lower case.
        use_locale: Collate with the current locale instead of byte order.

    Returns:
        Negative, zero or positive, like ``strcmp``.
    """
    runs_a = _DIGIT_RUNS.split(skip_name_prefix(a))
    runs_b = _DIGIT_RUNS.split(skip_name_prefix(b))

    ret = 0
    if not case_sensitive:
        ret = _runs_compare(
            [run.casefold() for run in runs_a],
            [run.casefold() for run in runs_b],
            use_locale,
        )
    if ret == 0:
        ret = _runs_compare(runs_a, runs_b, use_locale)
    if ret == 0:
        ret = _bytes_compare(a, b)
    return ret


def version_compare(a: str, b: str) -> int:
    """Natural version comparison.

    Names are split into alternating text and digit runs. Text runs compare
    lexically, digit runs by numeric value (a run with more leading zeros
    sorts first on a tie), so "file2" sorts before "file10".
    """
    parts_a = _DIGIT_RUNS.split(a)
    parts_b = _DIGIT_RUNS.split(b)

    for i, (pa, pb) in enumerate(zip(parts_a, parts_b, strict=False)):
        if i % 2:
            ret = three_way(int(pa), int(pb)) or three_way(len(pb), len(pa))
        else:
            ret = three_way(pa, pb)
        if ret:
            return ret

    return three_way(len(parts_a), len(parts_b)) or _bytes_compare(a, b)


def _extension(name: str) -> str | None:
    dot = name.rfind(".")
    if dot <= 0:
        return None
    return name[dot + 1 :]


def extension_compare(a: str, b: str) -> int:
    """Compare names by extension, case-insensitively.

    The extension is whatever follows the last dot that is not the first
    character. Names without an extension sort first. Returns zero when
    both extensions match, leaving the tie to the caller.
    """
    ext_a = _extension(a)
    ext_b = _extension(b)
    if ext_a is None and ext_b is None:
        return 0
    if ext_a is None:
        return -1
    if ext_b is None:
        return 1
    return three_way(ext_a.lower(), ext_b.lower())


def entry_compare(a: EntryInfo, b: EntryInfo, settings: SortSettings) -> int:
    """Compare two entries according to ``settings``.

    Directories-first is applied before the sort key and is not affected by
    reversal. Ties on the sort key fall through to :func:`name_compare`.
    """
    if settings.dirs_first and a.is_dir != b.is_dir:
        return -1 if a.is_dir else 1

    key = settings.effective_key
    ret = 0
    match key:
        case SortKey.SIZE:
            ret = three_way(a.size, b.size)
        case SortKey.ATIME:
            ret = three_way(a.atime, b.atime)
        case SortKey.BTIME:
            ret = three_way(a.btime, b.btime)
        case SortKey.CTIME:
            ret = three_way(a.ctime, b.ctime)
        case SortKey.MTIME:
            ret = three_way(a.mtime, b.mtime)
        case SortKey.VERSION:
            ret = version_compare(a.name, b.name)
        case SortKey.EXTENSION:
            ret = extension_compare(a.name, b.name)
        case SortKey.INODE:
            ret = three_way(a.inode, b.inode)
        case SortKey.OWNER:
            ret = three_way(a.uid, b.uid)
        case SortKey.GROUP:
            ret = three_way(a.gid, b.gid)
        case _:
            pass

    if ret == 0:
        ret = name_compare(
            a.name,
            b.name,
            case_sensitive=settings.case_sensitive,
            use_locale=settings.use_locale,
        )

    return -ret if settings.reverse else ret


# =============================================================================
# Alphabetic listing orders
# =============================================================================


def collate_compare(a: str, b: str) -> int:
    """Locale collation order, byte order on ties."""
    return three_way(locale.strcoll(a, b), 0) or _bytes_compare(a, b)


def codepoint_compare(a: str, b: str) -> int:
    """Case-sensitive byte order, independent of the locale."""
    return _bytes_compare(a, b)


def insensitive_compare(a: str, b: str) -> int:
    """Case-insensitive order that ignores the leading dot of hidden names."""
    ka = a[1:] if a.startswith(".") else a
    kb = b[1:] if b.startswith(".") else b
    return three_way(ka.casefold(), kb.casefold()) or _bytes_compare(a, b)


def reversed_compare(compare: Comparator) -> Comparator:
    """Wrap a comparator so its result is sign-flipped."""

    def _reversed(a: str, b: str) -> int:
        return -compare(a, b)

    return _reversed


def listing_comparator(
    *,
    unicode: bool = True,
    case_sensitive: bool = False,
    reverse: bool = False,
) -> Comparator:
    """Select the alphabetic comparator used for plain name listings.

    Args:
        unicode: Use locale collation (handles non-ASCII names).
        case_sensitive: When not using locale collation, compare bytes
            instead of case-folded names.
        reverse: Invert the order.

    Returns:
        A three-way comparator over names.
    """
    if unicode:
        compare: Comparator = collate_compare
    elif case_sensitive:
        compare = codepoint_compare
    else:
        compare = insensitive_compare
    return reversed_compare(compare) if reverse else compare


def sort_names(names: Iterable[str], compare: Comparator) -> list[str]:
    """Return ``names`` sorted with a three-way comparator."""
    return sorted(names, key=cmp_to_key(compare))


def sort_entries(entries: Iterable[EntryInfo], settings: SortSettings) -> list[EntryInfo]:
    """Return ``entries`` sorted according to ``settings``.

    ``SortKey.NONE`` keeps the input order.
    """
    if settings.key == SortKey.NONE:
        return list(entries)

    def _compare(a: EntryInfo, b: EntryInfo) -> int:
        return entry_compare(a, b, settings)

    return sorted(entries, key=cmp_to_key(_compare))
