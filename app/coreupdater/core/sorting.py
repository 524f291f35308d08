"""Ordering of core updater lists.

Two ordering modes are supported:

- ``GROUPED``: cores are ordered by manufacturer, then console model
  (using the classifier rule table), and synthetic header rows are
  injected at every manufacturer and console model boundary.
- ``ALPHABETICAL``: cores are ordered by display name only, without
  header rows.

Both modes use stable sorts, so entries that compare equal keep their
ingestion order.
"""

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from coreupdater.core.classifier import classify
from coreupdater.models.entry import CoreEntry

logger = logging.getLogger(__name__)

# Sort key types: headers and packages share the leading group element
SortKey = tuple[int | str, ...]

_HEADER_GROUP = 0
_PACKAGE_GROUP = 1


class SortMode(str, Enum):
    """Available list ordering modes."""

    GROUPED = "grouped"
    ALPHABETICAL = "alphabetical"


def grouped_sort_key(entry: CoreEntry) -> SortKey:
    """Build the grouped ordering key of an entry.

    Headers sort before packages, manufacturer headers before console
    headers, and headers of one kind by label. Packages are ordered by
    manufacturer priority, manufacturer, console priority, console
    model, console type, release year, and finally display name. All
    string comparisons are case-insensitive.

    Args:
        entry: Entry to build the key for.

    Returns:
        Tuple usable as a sort key.
    """
    if entry.is_header:
        kind = 0 if entry.is_manufacturer_header else 1
        return (_HEADER_GROUP, kind, entry.display_name.lower())

    rule = classify(entry.display_name)
    return (
        _PACKAGE_GROUP,
        rule.manufacturer_priority,
        rule.manufacturer.lower(),
        rule.console_priority,
        rule.console_model.lower(),
        rule.console_type.lower(),
        rule.release_year,
        entry.display_name.lower(),
    )


def compare_grouped(a: CoreEntry, b: CoreEntry) -> int:
    """Compare two entries in grouped order.

    Returns:
        Negative if a sorts first, positive if b sorts first, 0 if equal.
    """
    key_a = grouped_sort_key(a)
    key_b = grouped_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def alphabetical_sort_key(entry: CoreEntry) -> str:
    """Build the alphabetical ordering key of an entry."""
    return entry.display_name.lower()


def inject_headers(
    entries: Iterable[CoreEntry],
    try_reserve: Callable[[int], bool],
) -> list[CoreEntry] | None:
    """Insert manufacturer and console model headers into a sorted list.

    Walks the sorted package entries and emits a manufacturer header
    whenever the manufacturer changes and a console header whenever
    the console model changes (always after a new manufacturer).

    Args:
        entries: Package entries in grouped order.
        try_reserve: Called with the required total size before each
            append; returning False abandons the injection.

    Returns:
        New list with headers, or None if a reservation failed.
    """
    result: list[CoreEntry] = []
    current_manufacturer: str | None = None
    current_console: str | None = None

    def _emit(entry: CoreEntry) -> bool:
        if not try_reserve(len(result) + 1):
            return False
        result.append(entry)
        return True

    for entry in entries:
        if entry.is_header:
            continue

        rule = classify(entry.display_name)

        if current_manufacturer is None or current_manufacturer.lower() != rule.manufacturer.lower():
            if not _emit(CoreEntry.manufacturer_header(rule.manufacturer)):
                return None
            current_manufacturer = rule.manufacturer
            current_console = None

        if current_console is None or current_console.lower() != rule.console_model.lower():
            if not _emit(CoreEntry.console_header(rule.console_model, rule.release_year)):
                return None
            current_console = rule.console_model

        if not _emit(entry):
            return None

    return result


def sort_entries(
    entries: Iterable[CoreEntry],
    mode: SortMode,
    try_reserve: Callable[[int], bool],
) -> list[CoreEntry]:
    """Order entries according to a sort mode.

    Existing header rows are dropped before ordering, so sorting an
    already grouped list does not duplicate headers. If header
    injection is abandoned, the sorted packages are returned without
    headers.

    Args:
        entries: Entries to order.
        mode: Ordering mode.
        try_reserve: Capacity reservation callback used while injecting headers.

    Returns:
        Newly ordered list of entries.
    """
    packages = [entry for entry in entries if not entry.is_header]

    if mode == SortMode.ALPHABETICAL:
        return sorted(packages, key=alphabetical_sort_key)

    ordered = sorted(packages, key=grouped_sort_key)
    with_headers = inject_headers(ordered, try_reserve)
    if with_headers is None:
        logger.warning("Header injection abandoned; keeping %d sorted entries", len(ordered))
        return ordered
    return with_headers
