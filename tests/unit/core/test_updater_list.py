"""Unit tests for the core updater list container.

Tests for ingestion of buildbot listings and PFD core names, lookups,
capacity handling, and ordering.
"""

import os
from pathlib import Path

import pytest
from coreupdater.core.info import StaticInfoReader
from coreupdater.core.sorting import SortMode
from coreupdater.core.updater_list import (
    CoreListError,
    CoreUpdaterList,
    EmptyListingError,
    NoEntriesError,
)
from coreupdater.models.entry import ListProvenance, ReleaseDate


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[str, str]:
    """Core and info directories."""
    cores = tmp_path / "cores"
    info = tmp_path / "info"
    cores.mkdir()
    info.mkdir()
    return str(cores), str(info)


@pytest.fixture
def core_list(info_reader: StaticInfoReader) -> CoreUpdaterList:
    """Empty list backed by the sample info records."""
    return CoreUpdaterList(info_reader=info_reader)


class TestExceptions:
    """Tests for the list exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Ingestion errors derive from CoreListError."""
        assert issubclass(EmptyListingError, CoreListError)
        assert issubclass(NoEntriesError, CoreListError)


class TestParseNetworkData:
    """Tests for CoreUpdaterList.parse_network_data."""

    def test_parse_listing(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """Every valid line yields one entry, grouped with headers."""
        cores, info = dirs

        total = core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        assert core_list.provenance == ListProvenance.BUILDBOT
        assert core_list.package_count == 5
        assert total == len(core_list)
        assert [e.display_name for e in core_list] == [
            "=== Nintendo ===",
            "--- Super Nintendo Entertainment System (1990) ---",
            "Nintendo - SNES / SFC (Snes9x - Current)",
            "--- Nintendo 64 (1996) ---",
            "Nintendo - Nintendo 64 (Mupen64Plus-Next)",
            "--- Game Boy (1989) ---",
            "Nintendo - Game Boy Advance (mGBA)",
            "=== Sony ===",
            "--- PlayStation (1994) ---",
            "Sony - PlayStation (PCSX ReARMed)",
            "=== Sega ===",
            "--- Sega Genesis/Mega Drive (1988) ---",
            "Sega - MS/GG/MD/CD (Genesis Plus GX)",
        ]

    def test_entry_fields(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """Entries carry parsed date, checksum, and resolved paths."""
        cores, info = dirs
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        entry = core_list.get_by_filename("snes9x_libretro.so.zip")

        assert entry is not None
        assert entry.date == ReleaseDate(2021, 7, 4)
        assert entry.crc == 0x1A2B3C4D
        assert entry.remote_core_path == f"{buildbot_url}/snes9x_libretro.so.zip"
        assert entry.local_core_path == os.path.realpath(os.path.join(cores, "snes9x_libretro.so"))
        assert entry.local_info_path == os.path.join(info, "snes9x_libretro.info")
        assert entry.description == "A portable SNES emulator"

    def test_zero_crc_line_discarded(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """A zero checksum discards its line while the rest is kept."""
        cores, info = dirs
        data = "2021-07-04 1a2b3c4d snes9x_libretro.so\n2021-07-05 00000000 mgba_libretro.so\n"

        total = core_list.parse_network_data(data, cores, info, buildbot_url)

        assert total == 3
        assert core_list.package_count == 1
        assert core_list.get_by_filename("mgba_libretro.so") is None
        entry = core_list.get_index(2)
        assert entry is not None
        assert entry.remote_filename == "snes9x_libretro.so"
        assert entry.crc == 0x1A2B3C4D
        assert entry.date == ReleaseDate(2021, 7, 4)
        assert core_list.entries[0].is_manufacturer_header
        assert core_list.entries[1].is_console_header

    def test_malformed_lines_skipped(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """Short lines and bad dates are skipped."""
        cores, info = dirs
        data = (
            "garbage\n"
            "2021-07 1a2b3c4d mgba_libretro.so.zip\n"
            "2021-07-04 zzzz pcsx_rearmed_libretro.so.zip\n"
            "2021-07-04 1a2b3c4d snes9x_libretro.so.zip\n"
        )

        core_list.parse_network_data(data, cores, info, buildbot_url)

        assert core_list.package_count == 1

    def test_duplicates_skipped(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """A repeated file name keeps only its first entry."""
        cores, info = dirs
        data = (
            "2021-07-04 1a2b3c4d snes9x_libretro.so.zip\n"
            "2021-08-01 2b3c4d5e snes9x_libretro.so.zip\n"
        )

        core_list.parse_network_data(data, cores, info, buildbot_url)

        assert core_list.package_count == 1
        entry = core_list.get_by_filename("snes9x_libretro.so.zip")
        assert entry is not None
        assert entry.crc == 0x1A2B3C4D

    def test_bytes_and_crlf(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """Byte buffers with CRLF line endings are accepted."""
        cores, info = dirs
        data = b"2021-07-04 1a2b3c4d snes9x_libretro.so.zip\r\n"

        core_list.parse_network_data(data, cores, info, buildbot_url)

        assert core_list.get_by_filename("snes9x_libretro.so.zip") is not None

    def test_length_limits_buffer(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """Only the first length units of the buffer are read."""
        cores, info = dirs
        first_line = sample_listing.split("\n")[0]

        core_list.parse_network_data(
            sample_listing, cores, info, buildbot_url, length=len(first_line) + 1
        )

        assert core_list.package_count == 1

    def test_missing_last_newline(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """A final line without newline is still read."""
        cores, info = dirs
        data = "2021-07-04 1a2b3c4d snes9x_libretro.so.zip\n2021-07-05 2b3c4d5e mgba_libretro.so.zip"

        core_list.parse_network_data(data, cores, info, buildbot_url)

        assert core_list.package_count == 2

    @pytest.mark.parametrize("data", [None, "", b""])
    def test_empty_input(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str, data: object
    ) -> None:
        """Empty input raises EmptyListingError."""
        cores, info = dirs
        with pytest.raises(EmptyListingError):
            core_list.parse_network_data(data, cores, info, buildbot_url)  # type: ignore[arg-type]

    def test_zero_length(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """A zero length raises EmptyListingError."""
        cores, info = dirs
        with pytest.raises(EmptyListingError):
            core_list.parse_network_data(sample_listing, cores, info, buildbot_url, length=0)

    def test_no_newline_clears_previous_contents(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """Input without any line break fails after the list is reset."""
        cores, info = dirs
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        with pytest.raises(EmptyListingError, match="no complete lines"):
            core_list.parse_network_data(
                "2021-07-04 1a2b3c4d snes9x_libretro.so.zip", cores, info, buildbot_url
            )

        assert len(core_list) == 0
        assert core_list.provenance == ListProvenance.UNKNOWN

    def test_filename_with_nul_skipped(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """A file name containing a NUL character only drops its own line."""
        cores, info = dirs
        data = (
            b"2021-07-04 1a2b3c4d snes9x_libretro.so\n"
            b"2021-07-04 1a2b3c4d bad\x00name_libretro.so\n"
        )

        core_list.parse_network_data(data, cores, info, buildbot_url)

        assert core_list.package_count == 1
        assert core_list.get_by_filename("snes9x_libretro.so") is not None

    def test_oversized_date_component_kept(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """A date component with thousands of digits does not abort ingestion."""
        cores, info = dirs
        data = (
            "2021-07-04 1a2b3c4d snes9x_libretro.so\n"
            + "9" * 5000
            + "-07-04 1a2b3c4d mgba_libretro.so\n"
        )

        core_list.parse_network_data(data, cores, info, buildbot_url)

        assert core_list.package_count == 2

    def test_no_valid_entries(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], buildbot_url: str
    ) -> None:
        """A listing without valid lines raises NoEntriesError."""
        cores, info = dirs
        with pytest.raises(NoEntriesError):
            core_list.parse_network_data("garbage\nmore garbage\n", cores, info, buildbot_url)
        assert len(core_list) == 0

    def test_idempotent(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """Ingesting the same buffer twice yields identical output."""
        cores, info = dirs

        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)
        first = core_list.entries
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        assert core_list.entries == first

    def test_alphabetical_mode(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """Alphabetical mode produces no headers."""
        cores, info = dirs

        total = core_list.parse_network_data(
            sample_listing, cores, info, buildbot_url, sort_mode=SortMode.ALPHABETICAL
        )

        assert total == 5
        assert not any(e.is_header for e in core_list)
        assert core_list.entries[0].display_name == "Nintendo - Game Boy Advance (mGBA)"


class TestParsePfdData:
    """Tests for CoreUpdaterList.parse_pfd_data."""

    def test_parse_pfd(self, core_list: CoreUpdaterList, dirs: tuple[str, str]) -> None:
        """Feature delivery names build a PFD list."""
        cores, info = dirs

        core_list.parse_pfd_data(
            ["snes9x_libretro_android.so", "pcsx_rearmed_libretro_android.so", ""],
            cores,
            info,
        )

        assert core_list.provenance == ListProvenance.PFD
        assert core_list.package_count == 2
        entry = core_list.get_by_filename("snes9x_libretro_android.so")
        assert entry is not None
        assert entry.display_name == "Nintendo - SNES / SFC (Snes9x - Current)"
        assert entry.remote_core_path == ""
        assert entry.crc == 0
        assert entry.date.is_set is False
        assert entry.local_info_path == os.path.join(info, "snes9x_libretro.info")

    def test_duplicates_skipped(self, core_list: CoreUpdaterList, dirs: tuple[str, str]) -> None:
        """Repeated names are added once."""
        cores, info = dirs
        core_list.parse_pfd_data(["a_libretro_android.so", "a_libretro_android.so"], cores, info)
        assert core_list.package_count == 1

    @pytest.mark.parametrize("names", [None, []])
    def test_empty(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], names: list[str] | None
    ) -> None:
        """No names raises EmptyListingError."""
        cores, info = dirs
        with pytest.raises(EmptyListingError):
            core_list.parse_pfd_data(names, cores, info)

    def test_no_valid_entries(self, core_list: CoreUpdaterList) -> None:
        """Unresolvable names raise NoEntriesError."""
        with pytest.raises(NoEntriesError):
            core_list.parse_pfd_data(["a_libretro_android.so"], "", "")


class TestLookup:
    """Tests for index, filename, and core path lookups."""

    @pytest.fixture
    def filled(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> CoreUpdaterList:
        cores, info = dirs
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)
        return core_list

    def test_get_index(self, filled: CoreUpdaterList) -> None:
        """get_index returns entries by position."""
        entry = filled.get_index(0)
        assert entry is not None
        assert entry.display_name == "=== Nintendo ==="

    @pytest.mark.parametrize("idx", [-1, 13, 100])
    def test_get_index_out_of_range(self, filled: CoreUpdaterList, idx: int) -> None:
        """Out of range indices yield None."""
        assert filled.get_index(idx) is None

    def test_get_by_filename_skips_headers(self, filled: CoreUpdaterList) -> None:
        """Header labels are not matched as file names."""
        assert filled.get_by_filename("=== Nintendo ===") is None
        assert filled.get_by_filename("") is None
        assert filled.get_by_filename("missing.so.zip") is None

    def test_get_by_core_path(self, filled: CoreUpdaterList, dirs: tuple[str, str]) -> None:
        """Installed cores are found by their local path."""
        cores, _ = dirs
        entry = filled.get_by_core_path(os.path.join(cores, "mgba_libretro.so"))
        assert entry is not None
        assert entry.remote_filename == "mgba_libretro.so.zip"

    def test_get_by_core_path_through_symlink(
        self, filled: CoreUpdaterList, dirs: tuple[str, str], tmp_path: Path
    ) -> None:
        """Buildbot lookups resolve symlinks in the query path."""
        cores, _ = dirs
        link = tmp_path / "cores_link"
        link.symlink_to(cores)

        entry = filled.get_by_core_path(str(link / "mgba_libretro.so"))

        assert entry is not None
        assert entry.remote_filename == "mgba_libretro.so.zip"

    def test_get_by_core_path_missing(self, filled: CoreUpdaterList) -> None:
        """Unknown and empty paths yield None."""
        assert filled.get_by_core_path("/nowhere/core.so") is None
        assert filled.get_by_core_path("") is None

    def test_pfd_lookup_is_literal(
        self, core_list: CoreUpdaterList, dirs: tuple[str, str], tmp_path: Path
    ) -> None:
        """PFD lookups do not resolve symlinks."""
        cores, info = dirs
        link = tmp_path / "cores_link"
        link.symlink_to(cores)
        core_list.parse_pfd_data(["snes9x_libretro_android.so"], cores, info)

        assert core_list.get_by_core_path(os.path.join(cores, "snes9x_libretro_android.so"))
        assert core_list.get_by_core_path(str(link / "snes9x_libretro_android.so")) is None

    def test_lookup_on_empty_list(self) -> None:
        """An empty list finds nothing."""
        core_list = CoreUpdaterList()
        assert core_list.get_index(0) is None
        assert core_list.get_by_core_path("/cores/a.so") is None


class TestCapacity:
    """Tests for capacity reservation and push_entry."""

    def test_try_reserve_unbounded(self) -> None:
        """Without a limit every reservation succeeds."""
        assert CoreUpdaterList().try_reserve(10_000) is True

    def test_try_reserve_bounded(self) -> None:
        """Reservations beyond max_entries fail."""
        core_list = CoreUpdaterList(max_entries=2)
        assert core_list.try_reserve(2) is True
        assert core_list.try_reserve(3) is False

    def test_full_list_drops_entries_and_headers(
        self,
        info_reader: StaticInfoReader,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """A full list keeps earlier entries and sorts them without headers."""
        cores, info = dirs
        core_list = CoreUpdaterList(max_entries=2, info_reader=info_reader)

        total = core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        assert total == 2
        assert [e.remote_filename for e in core_list] == [
            "snes9x_libretro.so.zip",
            "mgba_libretro.so.zip",
        ]
        assert not any(e.is_header for e in core_list)


class TestStateAndExport:
    """Tests for reset, sort, and to_dict."""

    def test_initial_state(self) -> None:
        """A new list is empty with unknown provenance."""
        core_list = CoreUpdaterList()
        assert len(core_list) == 0
        assert core_list.provenance == ListProvenance.UNKNOWN
        assert core_list.package_count == 0

    def test_reset(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """reset clears entries and provenance."""
        cores, info = dirs
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        core_list.reset()

        assert len(core_list) == 0
        assert core_list.provenance == ListProvenance.UNKNOWN

    def test_resort(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """A grouped list can be re-sorted alphabetically and back."""
        cores, info = dirs
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)
        grouped = core_list.entries

        core_list.sort(SortMode.ALPHABETICAL)
        assert len(core_list) == 5

        core_list.sort(SortMode.GROUPED)
        assert core_list.entries == grouped

    def test_to_dict(
        self,
        core_list: CoreUpdaterList,
        dirs: tuple[str, str],
        buildbot_url: str,
        sample_listing: str,
    ) -> None:
        """to_dict summarizes the list."""
        cores, info = dirs
        core_list.parse_network_data(sample_listing, cores, info, buildbot_url)

        result = core_list.to_dict()

        assert result["provenance"] == "buildbot"
        assert result["summary"] == {"cores": 5, "rows": 13, "experimental": 1}
        assert len(result["entries"]) == 13
