"""Core updater list container and ingestion.

This module provides the CoreUpdaterList class, which holds the ordered
entries offered to the user for installation together with the
provenance of the list, and the two ingestion front ends that populate
it: network build service listings and play feature delivery (PFD)
core names.

Each ingestion call rebuilds the list from scratch. Broken candidates
(malformed listing lines, duplicate names, unresolvable paths) are
discarded individually; only a call that yields no entries at all is
treated as a failure.
"""

import logging
import sys
from collections.abc import Iterable, Iterator
from typing import Any

from coreupdater.core.info import InfoReader
from coreupdater.core.listing import parse_crc, parse_date, split_listing_line
from coreupdater.core.resolver import (
    LocalPathUtils,
    PathUtils,
    build_entry,
    resolves_symlinks,
)
from coreupdater.core.sorting import SortMode, sort_entries
from coreupdater.models.entry import CoreEntry, ListProvenance

logger = logging.getLogger(__name__)


class CoreListError(Exception):
    """Base exception for core updater list errors."""


class EmptyListingError(CoreListError):
    """Raised when ingestion input is missing or empty."""


class NoEntriesError(CoreListError):
    """Raised when no valid entries survive ingestion."""


class CoreUpdaterList:
    """Ordered list of core updater entries.

    A list is always homogeneous: it is produced entirely by one
    ingestion call, whose provenance governs path resolution for every
    entry it holds.

    Attributes:
        max_entries: Capacity limit for the list (None = unbounded).
    """

    def __init__(
        self,
        max_entries: int | None = None,
        path_utils: PathUtils | None = None,
        info_reader: InfoReader | None = None,
    ) -> None:
        """Initialize an empty list.

        Args:
            max_entries: Optional capacity limit. Reservations beyond it
                fail the same way an allocation failure would.
            path_utils: Path operations used during ingestion.
            info_reader: Core info reader used during ingestion.
        """
        self.max_entries = max_entries
        self._path_utils: PathUtils = path_utils or LocalPathUtils()
        self._info_reader = info_reader
        self._entries: list[CoreEntry] = []
        self._provenance = ListProvenance.UNKNOWN

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CoreEntry]:
        return iter(tuple(self._entries))

    @property
    def provenance(self) -> ListProvenance:
        """Ingestion source of the current contents."""
        return self._provenance

    @property
    def entries(self) -> tuple[CoreEntry, ...]:
        """Snapshot of the current entries."""
        return tuple(self._entries)

    @property
    def package_count(self) -> int:
        """Number of real (non-header) entries."""
        return sum(1 for entry in self._entries if not entry.is_header)

    def reset(self) -> None:
        """Remove all entries and clear the provenance."""
        self._entries = []
        self._provenance = ListProvenance.UNKNOWN

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_index(self, idx: int) -> CoreEntry | None:
        """Fetch the entry at an index, or None if out of range."""
        if idx < 0 or idx >= len(self._entries):
            return None
        return self._entries[idx]

    def get_by_filename(self, remote_filename: str) -> CoreEntry | None:
        """Fetch the package entry with a remote file name.

        Header rows never match.

        Args:
            remote_filename: File name as advertised by the source.

        Returns:
            Matching entry, or None if not found.
        """
        if not remote_filename:
            return None

        for entry in self._entries:
            if not entry.is_header and entry.remote_filename == remote_filename:
                return entry

        return None

    def get_by_core_path(self, local_core_path: str) -> CoreEntry | None:
        """Fetch the package entry installed at a local path.

        The query path is canonicalized with the symlink policy of the
        list's provenance before comparison. Comparison ignores case on
        Windows.

        Args:
            local_core_path: Path of an installed core.

        Returns:
            Matching entry, or None if not found.
        """
        if not local_core_path or not self._entries:
            return None

        real_path = self._path_utils.resolve_realpath(
            local_core_path, resolves_symlinks(self._provenance)
        )
        if not real_path:
            return None

        case_insensitive = sys.platform == "win32"
        if case_insensitive:
            real_path = real_path.lower()

        for entry in self._entries:
            if not entry.local_core_path:
                continue
            candidate = entry.local_core_path.lower() if case_insensitive else entry.local_core_path
            if candidate == real_path:
                return entry

        return None

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def try_reserve(self, count: int) -> bool:
        """Check that the list may grow to hold ``count`` entries.

        Args:
            count: Total number of entries required.

        Returns:
            True if the capacity is available, False otherwise.
        """
        if self.max_entries is not None and count > self.max_entries:
            return False
        return True

    def push_entry(self, entry: CoreEntry) -> bool:
        """Append a fully resolved entry to the end of the list.

        Args:
            entry: Entry to append.

        Returns:
            True if appended, False if capacity could not be reserved
            (existing entries are left untouched).
        """
        if not self.try_reserve(len(self._entries) + 1):
            logger.debug("Capacity exhausted, dropping core %r", entry.remote_filename)
            return False

        try:
            self._entries.append(entry)
        except MemoryError:
            logger.debug("Out of memory, dropping core %r", entry.remote_filename)
            return False

        return True

    def add_buildbot_entry(
        self,
        cores_dir: str,
        info_dir: str,
        buildbot_url: str,
        date_str: str,
        crc_str: str,
        filename: str,
    ) -> bool:
        """Parse a single buildbot listing and add it to the list.

        A core that is already listed is skipped; this is not an error.

        Args:
            cores_dir: Directory cores are installed into.
            info_dir: Directory holding core info files.
            buildbot_url: Base URL of the build service.
            date_str: Build date field of the listing.
            crc_str: CRC32 field of the listing.
            filename: File name field of the listing.

        Returns:
            True if an entry was added, False if the candidate was discarded.
        """
        if self.get_by_filename(filename) is not None:
            logger.debug("Skipping duplicate core %r", filename)
            return False

        date = parse_date(date_str)
        if date is None:
            logger.debug("Skipping core %r with invalid date %r", filename, date_str)
            return False

        crc = parse_crc(crc_str)
        if crc is None:
            logger.debug("Skipping core %r with invalid crc %r", filename, crc_str)
            return False

        entry = build_entry(
            filename,
            cores_dir,
            info_dir,
            ListProvenance.BUILDBOT,
            buildbot_url=buildbot_url,
            date=date,
            crc=crc,
            path_utils=self._path_utils,
            info_reader=self._info_reader,
        )
        if entry is None:
            return False

        return self.push_entry(entry)

    def add_pfd_entry(self, cores_dir: str, info_dir: str, filename: str) -> bool:
        """Add a single play feature delivery core to the list.

        PFD cores carry no build date or checksum.

        Args:
            cores_dir: Directory cores are installed into.
            info_dir: Directory holding core info files.
            filename: Core file name reported by feature delivery.

        Returns:
            True if an entry was added, False if the candidate was discarded.
        """
        if not filename:
            return False

        if self.get_by_filename(filename) is not None:
            logger.debug("Skipping duplicate core %r", filename)
            return False

        entry = build_entry(
            filename,
            cores_dir,
            info_dir,
            ListProvenance.PFD,
            path_utils=self._path_utils,
            info_reader=self._info_reader,
        )
        if entry is None:
            return False

        return self.push_entry(entry)

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    def parse_network_data(
        self,
        data: bytes | str | None,
        cores_dir: str,
        info_dir: str,
        buildbot_url: str,
        *,
        length: int | None = None,
        sort_mode: SortMode = SortMode.GROUPED,
    ) -> int:
        """Populate the list from a buildbot core listing.

        The listing holds one ``<date> <crc> <filename>`` record per
        line. Lines with fewer than three fields, or whose fields fail
        to parse, are skipped. The buffer may be truncated by the
        network layer, so only its first ``length`` units are read and
        a broken last line is simply discarded.

        Args:
            data: Raw listing (bytes are decoded as UTF-8).
            cores_dir: Directory cores are installed into.
            info_dir: Directory holding core info files.
            buildbot_url: Base URL of the build service.
            length: Number of bytes/characters of ``data`` to read.
            sort_mode: Ordering applied once all lines are read.

        Returns:
            Number of entries in the list after sorting (including headers).

        Raises:
            EmptyListingError: If the listing is empty or has no lines.
            NoEntriesError: If no line yielded a valid entry.
        """
        if not data or (length is not None and length < 1):
            raise EmptyListingError("Core listing is empty")

        if length is not None:
            data = data[:length]

        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data

        self.reset()

        if "\n" not in text:
            raise EmptyListingError("Core listing contains no complete lines")

        for raw_line in text.split("\n"):
            line = raw_line.rstrip("\r")
            if not line:
                continue

            fields = split_listing_line(line)
            if fields is None:
                logger.debug("Skipping malformed listing line: %r", line[:100])
                continue

            date_str, crc_str, filename = fields
            self.add_buildbot_entry(cores_dir, info_dir, buildbot_url, date_str, crc_str, filename)

        return self._finish_ingestion(ListProvenance.BUILDBOT, sort_mode)

    def parse_pfd_data(
        self,
        filenames: Iterable[str] | None,
        cores_dir: str,
        info_dir: str,
        *,
        sort_mode: SortMode = SortMode.GROUPED,
    ) -> int:
        """Populate the list from play feature delivery core names.

        Args:
            filenames: Core file names reported by feature delivery.
            cores_dir: Directory cores are installed into.
            info_dir: Directory holding core info files.
            sort_mode: Ordering applied once all names are read.

        Returns:
            Number of entries in the list after sorting (including headers).

        Raises:
            EmptyListingError: If no file names were given.
            NoEntriesError: If no name yielded a valid entry.
        """
        names = list(filenames) if filenames is not None else []
        if not names:
            raise EmptyListingError("Feature delivery core list is empty")

        self.reset()

        for filename in names:
            if not filename:
                continue
            self.add_pfd_entry(cores_dir, info_dir, filename)

        return self._finish_ingestion(ListProvenance.PFD, sort_mode)

    def _finish_ingestion(self, provenance: ListProvenance, sort_mode: SortMode) -> int:
        """Sort freshly ingested entries and record their provenance."""
        if not self._entries:
            raise NoEntriesError(f"No valid cores found in {provenance.value} listing")

        self.sort(sort_mode)
        self._provenance = provenance

        logger.debug(
            "Ingested %d cores from %s listing (%d rows)",
            self.package_count,
            provenance.value,
            len(self._entries),
        )
        return len(self._entries)

    # -------------------------------------------------------------------------
    # Ordering / export
    # -------------------------------------------------------------------------

    def sort(self, mode: SortMode = SortMode.GROUPED) -> None:
        """Reorder the list in place.

        The new ordering replaces the current entries in one step; if
        header injection fails, the list holds the sorted entries
        without headers.

        Args:
            mode: Ordering mode.
        """
        self._entries = sort_entries(self._entries, mode, self.try_reserve)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "provenance": self._provenance.value,
            "summary": {
                "cores": self.package_count,
                "rows": len(self._entries),
                "experimental": sum(
                    1 for e in self._entries if e.is_experimental and not e.is_header
                ),
            },
            "entries": [entry.to_dict() for entry in self._entries],
        }
