"""The 32-byte DBF file header.

Layout (little-endian):

    0       version byte
    1-3     last update as year-since-1900, month, day
    4-7     record count (u32)
    8-9     header length (u16), the offset of the first record
    10-11   record length (u16), status byte included
    12-31   reserved; byte 29 holds the language driver
"""

from __future__ import annotations

import datetime as dt
import logging
import struct

from ..config import CodecConfig, resolve_config
from ..exceptions import DecodeError, EncodeError, FormatError
from ..models.schema import Header
from ..utils.sizing import FILE_HEADER_SIZE, header_length, record_length
from .policy import degrade

logger = logging.getLogger(__name__)

LANGUAGE_DRIVER_OFFSET = 29

_PREFIX = struct.Struct("<BBBBIHH")

VERSION_NAMES: dict[int, str] = {
    0x03: "dBase III / FoxPro",
    0x04: "dBase IV (no SQL)",
    0x05: "dBase V",
    0x30: "Visual FoxPro",
    0x31: "Visual FoxPro (autoincrement)",
    0x83: "dBase III+ with Memo",
    0x8B: "dBase IV with Memo",
    0xF5: "FoxPro with Memo",
}


def describe_version(version: int) -> str:
    """Human-readable name of a version byte.

    Example:
        >>> describe_version(0x03)
        'dBase III / FoxPro'
        >>> describe_version(0x42)
        'Unknown (0x42)'
    """
    return VERSION_NAMES.get(version, f"Unknown (0x{version:x})")


def expand_year(year_byte: int) -> int:
    """Turn the stored year byte into a calendar year.

    Bytes below 70 are read as 2000-2069 for files written by tools that
    stored a two-digit year; everything else is an offset from 1900.
    """
    return 2000 + year_byte if year_byte < 70 else 1900 + year_byte


def decode_header(data: bytes, config: CodecConfig | None = None) -> Header:
    """Decode the fixed 32-byte header.

    The returned Header has no fields yet; the descriptors that follow the
    header are decoded separately.

    Args:
        data: Buffer starting at the first byte of the file
        config: Codec configuration (lenient default if None)

    Returns:
        Header with stored lengths and counts

    Raises:
        FormatError: If data is shorter than 32 bytes
        DecodeError: In strict mode, if the update date is not a calendar date
    """
    config = resolve_config(config)
    if len(data) < FILE_HEADER_SIZE:
        raise FormatError(
            f"Buffer too short for a DBF header: need {FILE_HEADER_SIZE} bytes, got {len(data)}"
        )

    version, year_byte, month, day, record_count, stored_header_length, stored_record_length = (
        _PREFIX.unpack_from(data)
    )

    try:
        last_update: dt.date | None = dt.date(expand_year(year_byte), month, day)
    except ValueError:
        degrade(
            config,
            DecodeError,
            f"Header update date {year_byte}/{month}/{day} is not a calendar date",
            logger,
        )
        last_update = None

    return Header(
        version=version,
        last_update=last_update,
        record_count=record_count,
        header_length=stored_header_length,
        record_length=stored_record_length,
        language_driver=data[LANGUAGE_DRIVER_OFFSET],
    )


def encode_header(header: Header, *, record_count: int, today: dt.date) -> bytes:
    """Encode the fixed 32-byte header.

    Header and record lengths are computed from ``header.fields``; the values
    stored in ``header`` are ignored.

    Args:
        header: Header supplying version, language driver and fields
        record_count: Number of records that will follow
        today: Date written as the last update

    Returns:
        32 bytes

    Raises:
        EncodeError: If today cannot be stored (years 1900-2155)
    """
    year_offset = today.year - 1900
    if not 0 <= year_offset <= 255:
        raise EncodeError(f"Update year {today.year} cannot be stored, must be 1900-2155")

    buffer = bytearray(FILE_HEADER_SIZE)
    _PREFIX.pack_into(
        buffer,
        0,
        header.version,
        year_offset,
        today.month,
        today.day,
        record_count,
        header_length(header.fields),
        record_length(header.fields),
    )
    buffer[LANGUAGE_DRIVER_OFFSET] = header.language_driver
    return bytes(buffer)
