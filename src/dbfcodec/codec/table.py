"""Whole-table decoding and encoding.

This module provides the decode() and encode() functions that turn a DBF file
buffer into a Table and back.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from ..config import CodecConfig, resolve_config
from ..exceptions import DecodeError, EncodeError
from ..models.table import Row, Table
from ..utils.sizing import record_length
from .descriptors import decode_descriptors, encode_descriptors
from .header import decode_header, encode_header
from .policy import degrade
from .record import decode_record, encode_record

logger = logging.getLogger(__name__)

EOF_MARKER = 0x1A


def decode(
    data: bytes | bytearray | memoryview,
    file_name: Optional[str] = None,
    *,
    config: CodecConfig | None = None,
) -> Table:
    """Decode a DBF file buffer into a Table.

    The header is read first, then the field descriptors, then each record in
    turn. Deleted records are skipped. Anything short of a missing header is
    recovered from in lenient mode: a record cut off by the end of the buffer
    ends decoding, and bad field contents are kept in degraded form.

    Args:
        data: Complete file contents
        file_name: Name to carry on the Table (not used for decoding)
        config: Codec configuration (lenient default if None)

    Returns:
        Decoded Table

    Raises:
        FormatError: If data is shorter than the 32-byte header
        DecodeError: In strict mode, on any recoverable anomaly

    Examples:
        ```python
        from pathlib import Path
        from dbfcodec import decode

        table = decode(Path("customers.dbf").read_bytes(), "customers.dbf")
        for row in table.rows:
            print(row["NAME"].value)
        ```
    """
    config = resolve_config(config)
    data = bytes(data)

    header = decode_header(data, config)
    fields = decode_descriptors(data, header.header_length, config)
    header = header.model_copy(update={"fields": fields})

    names = header.field_names()
    if len(set(names)) != len(names):
        degrade(
            config,
            DecodeError,
            f"Duplicate field names {names}, later columns overwrite earlier ones",
            logger,
            logging.WARNING,
        )

    # The stored record length is what separates records on disk
    step = header.record_length
    needed = record_length(fields)
    if step < needed:
        degrade(
            config,
            DecodeError,
            f"Stored record length {step} is shorter than the fields need ({needed})",
            logger,
            logging.WARNING,
        )
        if step == 0:
            step = needed

    rows: list[Row] = []
    offset = header.header_length
    for index in range(header.record_count):
        end = offset + step
        if end > len(data):
            degrade(
                config,
                DecodeError,
                f"Record {index} is truncated ({len(data) - offset} of {step} bytes), "
                f"dropping it and any after it",
                logger,
                logging.WARNING,
            )
            break

        row = decode_record(data[offset:end], fields, config)
        if row is not None:
            rows.append(row)
        offset = end

    logger.debug(
        "Decoded %d live rows of %d records from %s",
        len(rows),
        header.record_count,
        file_name or "<buffer>",
    )
    return Table(header=header, rows=tuple(rows), file_name=file_name)


def encode(
    table: Table,
    *,
    config: CodecConfig | None = None,
    today: Optional[dt.date] = None,
) -> bytes:
    """Encode a Table into a DBF file buffer.

    Header and record lengths are recomputed from the table's fields, the
    record count is the number of rows, and every record is written as
    active. The buffer ends with the 0x1A end-of-file marker.

    Args:
        table: Table to encode
        config: Codec configuration (lenient default if None)
        today: Last-update date to write (defaults to the current date)

    Returns:
        header_length + len(rows) * record_length + 1 bytes

    Raises:
        SchemaError: If the field descriptors cannot be written
        EncodeError: In strict mode, if a value cannot be stored without loss

    Examples:
        ```python
        from dbfcodec import decode, encode

        table = decode(data)
        edited = table.with_rows(
            row.to_python() | {"PRICE": 9.99} for row in table.rows
        )
        data = encode(edited)
        ```
    """
    config = resolve_config(config)
    fields = table.header.fields
    today = dt.date.today() if today is None else today

    # Validates the fields before anything else is written
    descriptors = encode_descriptors(fields, config)

    field_names = set(table.header.field_names())
    result = bytearray(encode_header(table.header, record_count=len(table.rows), today=today))
    result.extend(descriptors)

    for index, row in enumerate(table.rows):
        unknown = [name for name in row.names() if name not in field_names]
        if unknown:
            degrade(
                config,
                EncodeError,
                f"Row {index} has values for unknown fields {unknown}, ignoring them",
                logger,
            )
        result.extend(encode_record(row, fields, config))

    result.append(EOF_MARKER)

    logger.debug("Encoded %d rows into %d bytes", len(table.rows), len(result))
    return bytes(result)
