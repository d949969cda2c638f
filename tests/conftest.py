"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import datetime as dt
import struct
from typing import Callable, Optional, Sequence

import pytest

from dbfcodec import FieldDescriptor, Header, Row, Table

FieldSpec = tuple[str, str, int, int]
DbfBuilder = Callable[..., bytes]


def build_dbf(
    fields: Sequence[FieldSpec],
    records: Sequence[bytes],
    *,
    version: int = 0x03,
    date_bytes: tuple[int, int, int] = (124, 5, 17),
    record_count: Optional[int] = None,
    header_length: Optional[int] = None,
    record_length: Optional[int] = None,
    language_driver: int = 0,
    eof: bool = True,
) -> bytes:
    """Assemble a DBF buffer byte by byte, independently of the encoder.

    Args:
        fields: (name, type code, length, decimal count) per field
        records: Raw records, status byte included
        version: Version byte
        date_bytes: Stored (year - 1900, month, day)
        record_count: Stored record count (default len(records))
        header_length: Stored header length (default computed)
        record_length: Stored record length (default computed)
        language_driver: Byte 29
        eof: Append the 0x1A marker
    """
    if record_count is None:
        record_count = len(records)
    if header_length is None:
        header_length = 32 + 32 * len(fields) + 1
    if record_length is None:
        record_length = 1 + sum(length for _, _, length, _ in fields)

    header = bytearray(32)
    struct.pack_into(
        "<BBBBIHH", header, 0, version, *date_bytes, record_count, header_length, record_length
    )
    header[29] = language_driver

    descriptors = bytearray()
    for name, type_code, length, decimals in fields:
        entry = bytearray(32)
        entry[:11] = name.encode("ascii").ljust(11, b"\x00")
        entry[11] = ord(type_code)
        entry[16] = length
        entry[17] = decimals
        descriptors.extend(entry)
    descriptors.append(0x0D)

    data = bytes(header) + bytes(descriptors) + b"".join(records)
    return data + b"\x1a" if eof else data


@pytest.fixture
def make_dbf() -> DbfBuilder:
    """Factory that assembles DBF bytes by hand."""
    return build_dbf


@pytest.fixture
def fixed_today() -> dt.date:
    """Update date written by encode() in tests."""
    return dt.date(2024, 6, 17)


@pytest.fixture
def hello_table() -> Table:
    """One C(5) column holding one record "HELLO"."""
    header = Header.for_fields([FieldDescriptor(name="F", type_code="C", length=5)])
    return Table(header=header, rows=(Row.from_python({"F": "HELLO"}),))


@pytest.fixture
def mixed_fields() -> tuple[FieldDescriptor, ...]:
    """One field of every round-trippable type."""
    return (
        FieldDescriptor(name="NAME", type_code="C", length=12),
        FieldDescriptor(name="QTY", type_code="N", length=8, decimal_count=0),
        FieldDescriptor(name="RATIO", type_code="F", length=10, decimal_count=3),
        FieldDescriptor(name="ACTIVE", type_code="L", length=1),
        FieldDescriptor(name="BORN", type_code="D", length=8),
        FieldDescriptor(name="COUNT", type_code="I", length=4),
        FieldDescriptor(name="WEIGHT", type_code="B", length=8),
        FieldDescriptor(name="PRICE", type_code="Y", length=8),
    )
