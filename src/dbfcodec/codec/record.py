"""Fixed-width records: a status byte followed by each field's bytes."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import CodecConfig, resolve_config
from ..models.schema import FieldDescriptor
from ..models.table import Row
from ..models.values import NULL, Value
from .converters import decode_value, encode_value

STATUS_ACTIVE = 0x20
STATUS_DELETED = 0x2A


def decode_record(
    record: bytes, fields: Sequence[FieldDescriptor], config: CodecConfig | None = None
) -> Optional[Row]:
    """Decode one record.

    Args:
        record: The record's bytes, status byte first
        fields: Field descriptors in record order
        config: Codec configuration (lenient default if None)

    Returns:
        The decoded Row, or None if the record is marked deleted

    Raises:
        DecodeError: In strict mode, if a field holds an invalid value
    """
    config = resolve_config(config)
    if record[:1] == bytes([STATUS_DELETED]):
        return None

    values: dict[str, Value] = {}
    offset = 1
    for field in fields:
        values[field.name] = decode_value(record[offset : offset + field.length], field, config)
        offset += field.length

    # Values come straight from the converters, no need to validate them again
    return Row.model_construct(values=values)


def encode_record(
    row: Row, fields: Sequence[FieldDescriptor], config: CodecConfig | None = None
) -> bytes:
    """Encode one record as active (status 0x20).

    Fields missing from the row are written as their type's default.

    Args:
        row: Row to encode
        fields: Field descriptors in record order
        config: Codec configuration (lenient default if None)

    Returns:
        1 + sum of field lengths bytes

    Raises:
        EncodeError: In strict mode, if a value cannot be stored without loss
    """
    config = resolve_config(config)
    parts = [bytes([STATUS_ACTIVE])]
    for field in fields:
        parts.append(encode_value(row.get(field.name, NULL), field, config))
    return b"".join(parts)
