"""Core info file reading.

Core info files are small ``key = "value"`` text files shipped next to
the cores. Only the handful of keys needed by the updater list are
extracted here:

    display_name = "Nintendo - SNES / SFC (Snes9x - Current)"
    description = "A portable SNES emulator"
    license = "Non-commercial|GPLv2"
    is_experimental = "false"
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CoreInfoRecord:
    """Metadata read from a core info file.

    Attributes:
        display_name: Human-readable core name (if present).
        description: Core description (if present).
        licenses: Pipe-delimited license string (if present).
        is_experimental: Whether the core is flagged experimental.
    """

    display_name: str | None = None
    description: str | None = None
    licenses: str | None = None
    is_experimental: bool = False


class InfoReader(Protocol):
    """Source of core info metadata."""

    def read(self, info_path: str) -> CoreInfoRecord | None:
        """Read the metadata for a core info path, or None if not found."""
        ...


class CoreInfoFileReader:
    """Reads core info records from ``.info`` files on disk."""

    # Matches: key = "value" (quotes optional)
    _LINE_PATTERN = re.compile(r'^\s*([A-Za-z0-9_]+)\s*=\s*(?:"(.*)"|(.*?))\s*$')

    def read(self, info_path: str) -> CoreInfoRecord | None:
        """Read and parse a core info file.

        Args:
            info_path: Path to the core info file.

        Returns:
            CoreInfoRecord if the file exists and is readable, None otherwise.
        """
        path = Path(info_path)
        if not path.is_file():
            return None

        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Failed to read core info file %s: %s", info_path, e)
            return None

        return self.parse(text)

    def parse(self, text: str) -> CoreInfoRecord:
        """Parse the contents of a core info file.

        Args:
            text: File contents.

        Returns:
            CoreInfoRecord with whichever keys were present.
        """
        values: dict[str, str] = {}

        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            match = self._LINE_PATTERN.match(stripped)
            if not match:
                logger.debug("Skipping malformed core info line: %r", stripped[:100])
                continue

            key = match.group(1)
            value = match.group(2) if match.group(2) is not None else match.group(3)
            values[key] = value

        return CoreInfoRecord(
            display_name=values.get("display_name") or None,
            description=values.get("description") or None,
            licenses=values.get("license") or None,
            is_experimental=values.get("is_experimental", "").lower() == "true",
        )


class StaticInfoReader:
    """Serves core info records from an in-memory mapping.

    Keys are info file paths or bare info file names; a path lookup
    falls back to its file name.
    """

    def __init__(self, records: Mapping[str, CoreInfoRecord]) -> None:
        self._records = dict(records)

    def read(self, info_path: str) -> CoreInfoRecord | None:
        record = self._records.get(info_path)
        if record is None:
            record = self._records.get(Path(info_path).name)
        return record
