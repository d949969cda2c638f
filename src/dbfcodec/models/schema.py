"""Table schema: field types, field descriptors and the file header."""

from __future__ import annotations

import datetime as dt
import enum
from typing import Annotated, Iterable, Optional

from pydantic import Field, field_validator

from ..utils.sizing import header_length, record_length
from .base import DbfModel
from .fields import UInt8, UInt16, UInt32


class FieldType(str, enum.Enum):
    """Field type codes understood by the codec."""

    CHARACTER = "C"
    NUMERIC = "N"
    FLOAT = "F"
    LOGICAL = "L"
    DATE = "D"
    DATETIME = "T"
    MEMO = "M"
    INTEGER = "I"
    DOUBLE = "B"
    CURRENCY = "Y"


KNOWN_TYPE_CODES = frozenset(member.value for member in FieldType)


class FieldDescriptor(DbfModel):
    """One column of a table.

    Attributes:
        name: Column name, at most 10 bytes when encoded
        type_code: Single ASCII type code, upper-cased (see FieldType)
        length: Width of the column in bytes
        decimal_count: Fractional digits for N and F columns
    """

    name: str
    type_code: Annotated[str, Field(min_length=1, max_length=1)]
    length: UInt8
    decimal_count: UInt8 = 0

    @field_validator("type_code")
    @classmethod
    def _upper_type_code(cls, value: str) -> str:
        # "ß".upper() is two characters
        return value.upper() if value.isascii() else value

    @property
    def field_type(self) -> Optional[FieldType]:
        """The FieldType for this column, or None for an unknown code."""
        if self.type_code in KNOWN_TYPE_CODES:
            return FieldType(self.type_code)
        return None


class Header(DbfModel):
    """The 32-byte file header plus the field descriptors that follow it.

    ``header_length`` and ``record_length`` are the values stored in the
    file. The encoder ignores them and recomputes both from ``fields``.

    Attributes:
        version: Version byte (0x03 for dBase III)
        last_update: Date of last update, None if the stored bytes are not a date
        record_count: Number of records, deleted ones included
        header_length: Offset of the first record
        record_length: Bytes per record including the status byte
        language_driver: Code page marker (byte 29)
        fields: Field descriptors in record order
    """

    version: UInt8 = 0x03
    last_update: Optional[dt.date] = None
    record_count: UInt32 = 0
    header_length: UInt16 = 0
    record_length: UInt16 = 0
    language_driver: UInt8 = 0
    fields: tuple[FieldDescriptor, ...] = ()

    @classmethod
    def for_fields(
        cls, fields: Iterable[FieldDescriptor], *, version: int = 0x03, record_count: int = 0
    ) -> Header:
        """Build a header for a new table with consistent stored lengths.

        Args:
            fields: Field descriptors in record order
            version: Version byte
            record_count: Number of records

        Returns:
            Header whose header_length and record_length match the fields
        """
        fields = tuple(fields)
        return cls(
            version=version,
            record_count=record_count,
            header_length=header_length(fields),
            record_length=record_length(fields),
            fields=fields,
        )

    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)
