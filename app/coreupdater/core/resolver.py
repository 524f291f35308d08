"""Path and metadata resolution for core updater entries.

Given the file name of a core as advertised by its source, this module
derives where the core is downloaded from, where it is installed, and
which core info file describes it, then pulls display metadata from
that info file.

Provenance changes the rules:
- Buildbot cores get a URL-encoded remote path and have symlinks
  resolved in their local path.
- Play feature delivery (PFD) cores have no remote path, and their
  local path is never symlink-resolved because the installed files use
  non-standard names that must be compared literally.
"""

import logging
import os
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

from coreupdater.core.info import CoreInfoFileReader, InfoReader
from coreupdater.models.entry import CoreEntry, ListProvenance, ReleaseDate

logger = logging.getLogger(__name__)

# Extension of core info files
CORE_INFO_EXTENSION = ".info"

# Core info files always end with this suffix; anything else after the
# last underscore is a platform addendum (e.g. '_android') to strip
CORE_NAME_SUFFIX = "_libretro"

# Remote files with these extensions are archives wrapping the core
ARCHIVE_EXTENSIONS: frozenset[str] = frozenset({".zip", ".7z"})

# Characters left as-is when URL-encoding the path part of a URL
_URL_SAFE_CHARS = "/*"


class PathUtils(Protocol):
    """Path operations consumed by the resolver."""

    def join(self, base: str, name: str) -> str: ...

    def is_archive(self, path: str) -> bool: ...

    def remove_extension(self, path: str) -> str: ...

    def resolve_realpath(self, path: str, resolve_symlinks: bool) -> str: ...

    def urlencode_full(self, url: str) -> str: ...


class LocalPathUtils:
    """Path operations backed by the local filesystem."""

    def join(self, base: str, name: str) -> str:
        """Join a directory (or base URL) and a file name.

        URLs are always joined with '/', filesystem paths with os.sep.
        """
        if base.endswith(("/", os.sep)):
            return base + name
        sep = "/" if "://" in base else os.sep
        return f"{base}{sep}{name}"

    def is_archive(self, path: str) -> bool:
        """Check if a path names a compressed archive."""
        return os.path.splitext(path)[1].lower() in ARCHIVE_EXTENSIONS

    def remove_extension(self, path: str) -> str:
        """Strip the last extension from the final path component."""
        return os.path.splitext(path)[0]

    def resolve_realpath(self, path: str, resolve_symlinks: bool) -> str:
        """Canonicalize a path, optionally resolving symlinks.

        Returns an empty string for paths the OS cannot represent.
        """
        if "\x00" in path:
            return ""
        if resolve_symlinks:
            return os.path.realpath(path)
        return os.path.abspath(path)

    def urlencode_full(self, url: str) -> str:
        """Percent-encode a URL, leaving scheme and host untouched."""
        scheme_end = url.find("://")
        if scheme_end < 0:
            return quote(url, safe=_URL_SAFE_CHARS)

        path_start = url.find("/", scheme_end + 3)
        if path_start < 0:
            return url

        return url[:path_start] + quote(url[path_start:], safe=_URL_SAFE_CHARS)


_default_path_utils = LocalPathUtils()
_default_info_reader = CoreInfoFileReader()


@dataclass(frozen=True, slots=True)
class ResolvedPaths:
    """Paths derived from a core file name.

    Attributes:
        remote_filename: File name as advertised by the source.
        remote_core_path: URL-encoded download location ('' for PFD).
        local_core_path: Canonical install path of the core.
        local_info_path: Path of the associated core info file.
    """

    remote_filename: str
    remote_core_path: str
    local_core_path: str
    local_info_path: str


@dataclass(frozen=True, slots=True)
class CoreMetadata:
    """Display metadata for a core.

    Attributes:
        display_name: Human-readable name (falls back to the file name).
        description: Description ('' when unavailable).
        licenses: License identifiers, or None when unavailable.
        is_experimental: True if the info file is missing or incomplete.
    """

    display_name: str
    description: str
    licenses: tuple[str, ...] | None
    is_experimental: bool


def resolves_symlinks(provenance: ListProvenance) -> bool:
    """Check whether local core paths of a provenance are symlink-resolved."""
    return provenance != ListProvenance.PFD


def _strip_platform_suffix(path: str) -> str:
    """Truncate the base name at its last underscore unless it is '_libretro'."""
    name_start = max(path.rfind("/"), path.rfind(os.sep)) + 1
    underscore = path.rfind("_", name_start)
    if underscore < 0 or path[underscore:] == CORE_NAME_SUFFIX:
        return path
    return path[:underscore]


def resolve_paths(
    filename: str,
    cores_dir: str,
    info_dir: str,
    buildbot_url: str | None,
    provenance: ListProvenance,
    path_utils: PathUtils | None = None,
) -> ResolvedPaths | None:
    """Derive remote and local paths for a core file name.

    Args:
        filename: Core file name as advertised (e.g. 'snes9x_libretro.so.zip').
        cores_dir: Directory cores are installed into.
        info_dir: Directory holding core info files.
        buildbot_url: Base URL of the build service (buildbot only).
        provenance: Ingestion source of the core.
        path_utils: Path operations to use (defaults to LocalPathUtils).

    Returns:
        ResolvedPaths, or None if a required argument is missing or the
        local core path cannot be canonicalized.
    """
    if not filename or not cores_dir or not info_dir:
        return None

    is_buildbot = provenance == ListProvenance.BUILDBOT
    if is_buildbot and not buildbot_url:
        return None

    paths = path_utils or _default_path_utils
    is_archive = paths.is_archive(filename)

    remote_core_path = ""
    if is_buildbot and buildbot_url:
        remote_core_path = paths.urlencode_full(paths.join(buildbot_url, filename))

    local_core_path = paths.join(cores_dir, filename)
    if is_archive:
        local_core_path = paths.remove_extension(local_core_path)
    local_core_path = paths.resolve_realpath(local_core_path, resolves_symlinks(provenance))
    if not local_core_path:
        return None

    local_info_path = paths.remove_extension(paths.join(info_dir, filename))
    if is_archive:
        local_info_path = paths.remove_extension(local_info_path)
    local_info_path = _strip_platform_suffix(local_info_path) + CORE_INFO_EXTENSION

    return ResolvedPaths(
        remote_filename=filename,
        remote_core_path=remote_core_path,
        local_core_path=local_core_path,
        local_info_path=local_info_path,
    )


def resolve_core_info(
    local_info_path: str,
    filename: str,
    info_reader: InfoReader | None = None,
) -> CoreMetadata:
    """Read display metadata for a core.

    Every core fit for consumption must have a complete info file, so a
    missing file or a blank display name marks the core experimental
    and uses its file name for display.

    Args:
        local_info_path: Path of the core info file.
        filename: Core file name, used as fallback display name.
        info_reader: Info reader to query (defaults to CoreInfoFileReader).

    Returns:
        CoreMetadata for the core.
    """
    reader = info_reader or _default_info_reader
    record = reader.read(local_info_path)

    if record is None:
        return CoreMetadata(
            display_name=filename,
            description="",
            licenses=None,
            is_experimental=True,
        )

    if record.display_name:
        display_name = record.display_name
        is_experimental = record.is_experimental
    else:
        display_name = filename
        is_experimental = True

    licenses = tuple(part for part in record.licenses.split("|") if part) or None

    return CoreMetadata(
        display_name=display_name,
        description=record.description or "",
        licenses=licenses,
        is_experimental=is_experimental,
    )


def build_entry(
    filename: str,
    cores_dir: str,
    info_dir: str,
    provenance: ListProvenance,
    *,
    buildbot_url: str | None = None,
    date: ReleaseDate | None = None,
    crc: int = 0,
    path_utils: PathUtils | None = None,
    info_reader: InfoReader | None = None,
) -> CoreEntry | None:
    """Build a fully resolved core entry.

    Args:
        filename: Core file name as advertised.
        cores_dir: Directory cores are installed into.
        info_dir: Directory holding core info files.
        provenance: Ingestion source of the core.
        buildbot_url: Base URL of the build service (buildbot only).
        date: Build date (buildbot only).
        crc: CRC32 checksum (buildbot only).
        path_utils: Path operations to use.
        info_reader: Info reader to query.

    Returns:
        CoreEntry, or None if the paths could not be resolved.
    """
    paths = resolve_paths(filename, cores_dir, info_dir, buildbot_url, provenance, path_utils)
    if paths is None:
        logger.debug("Could not resolve paths for core %r", filename)
        return None

    meta = resolve_core_info(paths.local_info_path, filename, info_reader)

    return CoreEntry(
        remote_filename=paths.remote_filename,
        remote_core_path=paths.remote_core_path,
        local_core_path=paths.local_core_path,
        local_info_path=paths.local_info_path,
        display_name=meta.display_name,
        description=meta.description,
        licenses=meta.licenses,
        is_experimental=meta.is_experimental,
        crc=crc,
        date=date if date is not None else ReleaseDate(),
    )
