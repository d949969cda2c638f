"""Field descriptors: the 32-byte entries between the header and the records.

Entry layout:

    0-10    name, NUL padded
    11      type code (ASCII)
    12-15   reserved (field offset in some dialects)
    16      length
    17      decimal count
    18-31   reserved

The list ends with a 0x0D byte at ``header_length - 1``.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..config import CodecConfig, resolve_config
from ..exceptions import DecodeError, SchemaError
from ..models.schema import FieldDescriptor
from ..utils.sizing import DESCRIPTOR_SIZE, FILE_HEADER_SIZE, header_length, record_length
from .policy import degrade
from .text import decode_text, encode_text

logger = logging.getLogger(__name__)

TERMINATOR = 0x0D
NAME_SIZE = 11
MAX_NAME_LENGTH = 10
TYPE_OFFSET = 11
LENGTH_OFFSET = 16
DECIMAL_OFFSET = 17

MAX_HEADER_LENGTH = 0xFFFF
MAX_RECORD_LENGTH = 0xFFFF


def _decode_name(raw: bytes, config: CodecConfig) -> str:
    raw = raw.split(b"\x00", 1)[0]
    return decode_text(raw, config.encoding).strip()


def decode_descriptors(
    data: bytes, stored_header_length: int, config: CodecConfig | None = None
) -> tuple[FieldDescriptor, ...]:
    """Decode the field descriptors that follow the 32-byte header.

    Reading stops at the 0x0D terminator, at ``stored_header_length - 1``, or
    at the end of the buffer, whichever comes first.

    Args:
        data: The whole file buffer
        stored_header_length: Header length read from the file header
        config: Codec configuration (lenient default if None)

    Returns:
        Field descriptors in record order

    Raises:
        DecodeError: In strict mode, if the buffer ends inside a descriptor
    """
    config = resolve_config(config)
    fields: list[FieldDescriptor] = []
    offset = FILE_HEADER_SIZE

    while offset < stored_header_length - 1:
        entry = data[offset : offset + DESCRIPTOR_SIZE]
        if entry[:1] == bytes([TERMINATOR]):
            break
        if len(entry) < DESCRIPTOR_SIZE:
            degrade(
                config,
                DecodeError,
                f"Field descriptor at offset {offset} is truncated ({len(entry)} bytes)",
                logger,
                logging.WARNING,
            )
            break

        type_code = chr(entry[TYPE_OFFSET])
        if type_code.isascii():
            type_code = type_code.upper()

        fields.append(
            FieldDescriptor(
                name=_decode_name(entry[:NAME_SIZE], config),
                type_code=type_code,
                length=entry[LENGTH_OFFSET],
                decimal_count=entry[DECIMAL_OFFSET],
            )
        )
        offset += DESCRIPTOR_SIZE

    logger.debug("Decoded %d field descriptors", len(fields))
    return tuple(fields)


def validate_fields(fields: Sequence[FieldDescriptor], config: CodecConfig | None = None) -> None:
    """Check that a field list can be written to a DBF header.

    Args:
        fields: Field descriptors in record order
        config: Codec configuration (supplies the name encoding)

    Raises:
        SchemaError: If a name is empty, too long, unencodable or duplicated,
            a type code is not ASCII, or the header or record would be too long
    """
    config = resolve_config(config)
    seen: set[str] = set()

    for field in fields:
        if not field.name:
            raise SchemaError("Field name must not be empty")
        encoded, lost = encode_text(field.name, config.encoding)
        if lost:
            raise SchemaError(f"Field name {field.name!r} cannot be encoded: {lost!r}")
        if len(encoded) > MAX_NAME_LENGTH:
            raise SchemaError(
                f"Field name {field.name!r} is {len(encoded)} bytes, "
                f"max is {MAX_NAME_LENGTH}"
            )
        if field.name in seen:
            raise SchemaError(f"Duplicate field name {field.name!r}")
        seen.add(field.name)

        if not field.type_code.isascii():
            raise SchemaError(f"Field {field.name}: type code {field.type_code!r} is not ASCII")

    if header_length(fields) > MAX_HEADER_LENGTH:
        raise SchemaError(f"Too many fields for a DBF header: {len(fields)}")
    if record_length(fields) > MAX_RECORD_LENGTH:
        raise SchemaError(
            f"Record length {record_length(fields)} exceeds max {MAX_RECORD_LENGTH}"
        )


def encode_descriptors(
    fields: Sequence[FieldDescriptor], config: CodecConfig | None = None
) -> bytes:
    """Encode field descriptors followed by the 0x0D terminator.

    Args:
        fields: Field descriptors in record order
        config: Codec configuration (supplies the name encoding)

    Returns:
        32 * len(fields) + 1 bytes

    Raises:
        SchemaError: If the fields fail validate_fields()
    """
    config = resolve_config(config)
    validate_fields(fields, config)

    result = bytearray()
    for field in fields:
        entry = bytearray(DESCRIPTOR_SIZE)
        entry[:NAME_SIZE] = encode_text(field.name, config.encoding)[0].ljust(NAME_SIZE, b"\x00")
        entry[TYPE_OFFSET] = ord(field.type_code)
        entry[LENGTH_OFFSET] = field.length
        entry[DECIMAL_OFFSET] = field.decimal_count
        result.extend(entry)

    result.append(TERMINATOR)
    return bytes(result)
