"""Table size calculation utilities.

This module provides functions to calculate header, record and file sizes
from a field list without actually encoding anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..models.schema import FieldDescriptor
    from ..models.table import Table

FILE_HEADER_SIZE = 32
DESCRIPTOR_SIZE = 32
TERMINATOR_SIZE = 1
STATUS_SIZE = 1
EOF_SIZE = 1


def header_length(fields: Sequence[FieldDescriptor]) -> int:
    """Calculate the header length (offset of the first record) for a field list.

    Args:
        fields: Field descriptors in table order

    Returns:
        32 + 32 * len(fields) + 1

    Example:
        >>> header_length([FieldDescriptor(name="F", type_code="C", length=5)])
        65
    """
    return FILE_HEADER_SIZE + DESCRIPTOR_SIZE * len(fields) + TERMINATOR_SIZE


def record_length(fields: Sequence[FieldDescriptor]) -> int:
    """Calculate the record length, status byte included, for a field list.

    Args:
        fields: Field descriptors in table order

    Returns:
        1 + sum of field lengths

    Example:
        >>> record_length([FieldDescriptor(name="F", type_code="C", length=5)])
        6
    """
    return STATUS_SIZE + sum(field.length for field in fields)


def field_offsets(fields: Sequence[FieldDescriptor]) -> dict[str, int]:
    """Get the byte offset of each field within a record.

    The first field starts at offset 1, after the status byte.

    Args:
        fields: Field descriptors in table order

    Returns:
        Dictionary mapping field names to their offset in the record

    Example:
        >>> field_offsets(fields)
        {'NAME': 1, 'AGE': 21}
    """
    offsets: dict[str, int] = {}
    offset = STATUS_SIZE
    for field in fields:
        offsets[field.name] = offset
        offset += field.length
    return offsets


def encoded_size(table: Table) -> int:
    """Calculate the size in bytes that encode(table) will produce.

    Args:
        table: Table to measure

    Returns:
        header length + rows * record length + 1 (EOF marker)
    """
    fields = table.header.fields
    return header_length(fields) + len(table.rows) * record_length(fields) + EOF_SIZE
