"""Core updater list entry models.

This module defines the immutable value types that make up a core
updater list: installable core entries, synthetic header rows, and
the release date attached to network build listings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Largest value representable by an unsigned 32-bit checksum
CRC_MAX = 0xFFFFFFFF

# Header rows omit the release year unless it falls inside this range
_HEADER_YEAR_MIN = 0
_HEADER_YEAR_MAX = 9999


class ListProvenance(Enum):
    """Ingestion source of a core updater list.

    Attributes:
        UNKNOWN: List has not been populated yet (or was reset).
        BUILDBOT: List was parsed from a network build service listing.
        PFD: List was built from cores available via play feature delivery.
    """

    UNKNOWN = "unknown"
    BUILDBOT = "buildbot"
    PFD = "pfd"


@dataclass(frozen=True, slots=True)
class ReleaseDate:
    """Build date of a core as advertised by the build service.

    All components are zero when the date is unset.
    """

    year: int = 0
    month: int = 0
    day: int = 0

    def __post_init__(self) -> None:
        """Validate date components after initialization."""
        if self.year < 0 or self.month < 0 or self.day < 0:
            msg = f"Date components must be non-negative, got {self.year}-{self.month}-{self.day}"
            raise ValueError(msg)

    @property
    def is_set(self) -> bool:
        """Check if any date component has been set."""
        return bool(self.year or self.month or self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, slots=True)
class CoreEntry:
    """A single row of a core updater list.

    An entry is either a real, installable core package or a synthetic
    header row used to group packages by manufacturer or console model.
    Entries are created fully formed and never mutated afterwards.

    Attributes:
        remote_filename: File name advertised by the source (dedup key).
        remote_core_path: URL-encoded download location (buildbot only).
        local_core_path: Canonical install path of the core.
        local_info_path: Path of the core info file for this core.
        display_name: Human-readable core name.
        description: Human-readable core description.
        licenses: License identifiers, or None if no license data exists.
        is_experimental: True if the core info file is missing or incomplete.
        crc: CRC32 checksum of the remote file (0 = unset).
        date: Build date of the remote file.
        is_manufacturer_header: True for manufacturer group headers.
        is_console_header: True for console model group headers.
    """

    remote_filename: str
    display_name: str
    remote_core_path: str = ""
    local_core_path: str = ""
    local_info_path: str = ""
    description: str = ""
    licenses: tuple[str, ...] | None = field(default=None)
    is_experimental: bool = False
    crc: int = 0
    date: ReleaseDate = field(default_factory=ReleaseDate)
    is_manufacturer_header: bool = False
    is_console_header: bool = False

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.remote_filename:
            msg = "Entry filename cannot be empty"
            raise ValueError(msg)
        if self.is_manufacturer_header and self.is_console_header:
            msg = "Entry cannot be both a manufacturer and a console header"
            raise ValueError(msg)
        if not 0 <= self.crc <= CRC_MAX:
            msg = f"CRC must fit in 32 bits, got {self.crc:#x}"
            raise ValueError(msg)

    @classmethod
    def manufacturer_header(cls, manufacturer: str) -> "CoreEntry":
        """Create a manufacturer-level header row.

        Args:
            manufacturer: Manufacturer name (e.g., 'Nintendo').

        Returns:
            Header entry labelled with a banner form of the name.

        Raises:
            ValueError: If the manufacturer name is empty.
        """
        if not manufacturer:
            msg = "Manufacturer name cannot be empty"
            raise ValueError(msg)
        label = f"=== {manufacturer} ==="
        return cls(remote_filename=label, display_name=label, is_manufacturer_header=True)

    @classmethod
    def console_header(cls, console_model: str, release_year: int = 0) -> "CoreEntry":
        """Create a console model-level header row.

        The release year is only shown when it is a plausible value.

        Args:
            console_model: Console model name (e.g., 'Nintendo 64').
            release_year: Console release year.

        Returns:
            Header entry labelled with the model name (and year).

        Raises:
            ValueError: If the console model name is empty.
        """
        if not console_model:
            msg = "Console model name cannot be empty"
            raise ValueError(msg)
        if _HEADER_YEAR_MIN < release_year < _HEADER_YEAR_MAX:
            label = f"--- {console_model} ({release_year}) ---"
        else:
            label = f"--- {console_model} ---"
        return cls(remote_filename=label, display_name=label, is_console_header=True)

    @property
    def is_header(self) -> bool:
        """Check if this entry is a synthetic header row."""
        return self.is_manufacturer_header or self.is_console_header

    @property
    def licenses_display(self) -> str:
        """Return licenses as a comma-separated string."""
        if not self.licenses:
            return ""
        return ", ".join(self.licenses)

    @property
    def crc_hex(self) -> str:
        """Return the checksum as an 8-digit hex string, or '' if unset."""
        if not self.crc:
            return ""
        return f"{self.crc:08x}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "remote_filename": self.remote_filename,
            "remote_core_path": self.remote_core_path,
            "local_core_path": self.local_core_path,
            "local_info_path": self.local_info_path,
            "display_name": self.display_name,
            "description": self.description,
            "licenses": list(self.licenses) if self.licenses is not None else None,
            "is_experimental": self.is_experimental,
            "crc": self.crc_hex or None,
            "date": str(self.date) if self.date.is_set else None,
            "is_manufacturer_header": self.is_manufacturer_header,
            "is_console_header": self.is_console_header,
        }
