"""Field parsers for network build service core listings.

Each line of a buildbot listing has the form::

    <date> <crc> <filename>

e.g. ``2021-07-04 1a2b3c4d snes9x_libretro.so.zip``. The parsers in this
module convert single fields and return None when a field is unusable,
so that callers can discard the offending line and move on.
"""

import string

from coreupdater.models.entry import CRC_MAX, ReleaseDate

_HEX_DIGITS = frozenset(string.hexdigits)

# Date components saturate at the largest unsigned 64-bit value
DATE_COMPONENT_MAX = 2**64 - 1
_DATE_COMPONENT_DIGITS = len(str(DATE_COMPONENT_MAX))


def _to_unsigned(text: str) -> int:
    """Convert a decimal string, treating anything non-numeric as zero.

    Values too large for an unsigned 64-bit integer saturate at
    DATE_COMPONENT_MAX.
    """
    if not text or not text.isascii() or not text.isdigit():
        return 0
    digits = text.lstrip("0")
    if len(digits) > _DATE_COMPONENT_DIGITS:
        return DATE_COMPONENT_MAX
    return min(int(digits or "0"), DATE_COMPONENT_MAX)


def parse_date(date_str: str) -> ReleaseDate | None:
    """Parse a hyphen-separated build date.

    Empty segments are collapsed (``2021--07-04`` has three components)
    and components beyond the third are ignored. Non-numeric components
    are accepted and read as zero.

    Args:
        date_str: Date string such as '2021-07-04'.

    Returns:
        ReleaseDate, or None if fewer than three components are present.
    """
    if not date_str:
        return None

    parts = [part for part in date_str.split("-") if part]
    if len(parts) < 3:
        return None

    return ReleaseDate(
        year=_to_unsigned(parts[0]),
        month=_to_unsigned(parts[1]),
        day=_to_unsigned(parts[2]),
    )


def parse_crc(crc_str: str) -> int | None:
    """Parse a hexadecimal CRC32 string.

    An optional '0x' prefix is accepted. Values wider than 32 bits are
    truncated. A result of zero is indistinguishable from 'unset' and
    is rejected, so a genuine checksum of zero cannot be represented.

    Args:
        crc_str: Hex string such as '1a2b3c4d'.

    Returns:
        The checksum value, or None if invalid or zero.
    """
    if not crc_str:
        return None

    hex_str = crc_str
    if len(hex_str) >= 2 and hex_str[0] == "0" and hex_str[1] in "xX":
        hex_str = hex_str[2:]

    if not hex_str or not all(c in _HEX_DIGITS for c in hex_str):
        return None

    crc = int(hex_str, 16) & CRC_MAX
    if crc == 0:
        return None
    return crc


def split_listing_line(line: str) -> tuple[str, str, str] | None:
    """Split a listing line into its date, crc, and filename fields.

    Fields are separated by spaces; runs of spaces count as a single
    separator and any tokens after the third are ignored.

    Args:
        line: A single listing line without its newline.

    Returns:
        Tuple of (date, crc, filename), or None if fewer than three
        fields are present.
    """
    tokens = [token for token in line.split(" ") if token]
    if len(tokens) < 3:
        return None
    return tokens[0], tokens[1], tokens[2]
