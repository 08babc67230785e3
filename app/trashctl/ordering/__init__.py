"""Ordering of directory entries.

This module provides the natural-name, version and metadata comparators,
the directory-entry filter, and scanning helpers that return entries in a
deterministic, optionally reversed order.
"""

from trashctl.ordering.compare import (
    Comparator,
    entry_compare,
    extension_compare,
    listing_comparator,
    name_compare,
    sort_entries,
    sort_names,
    version_compare,
)
from trashctl.ordering.models import EntryInfo, SortKey, SortSettings
from trashctl.ordering.scan import EntryFilter, count_entries, scan_entries, scan_names

__all__ = [
    "Comparator",
    "EntryFilter",
    "EntryInfo",
    "SortKey",
    "SortSettings",
    "count_entries",
    "entry_compare",
    "extension_compare",
    "listing_comparator",
    "name_compare",
    "scan_entries",
    "scan_names",
    "sort_entries",
    "sort_names",
    "version_compare",
]
