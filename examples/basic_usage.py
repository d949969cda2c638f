#!/usr/bin/env python3
"""Basic usage example for dbfcodec.

This example demonstrates:
1. Defining a table layout with field descriptors
2. Encoding rows to a .dbf buffer
3. Decoding the buffer back into typed rows
4. Editing rows and re-encoding
5. Lenient versus strict handling of damaged values
"""

from __future__ import annotations

import datetime as dt

from dbfcodec import (
    CodecConfig,
    DbfCodecError,
    FieldDescriptor,
    Header,
    Table,
    decode,
    encode,
    encoded_size,
    field_offsets,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("dbfcodec Basic Usage Example")
    print("=" * 60)
    print()

    # Define the table layout
    print("1. Defining a customer table...")
    header = Header.for_fields(
        [
            FieldDescriptor(name="NAME", type_code="C", length=20),
            FieldDescriptor(name="BALANCE", type_code="N", length=10, decimal_count=2),
            FieldDescriptor(name="ACTIVE", type_code="L", length=1),
            FieldDescriptor(name="SINCE", type_code="D", length=8),
        ]
    )
    for name, offset in field_offsets(header.fields).items():
        print(f"   {name} at byte {offset}")
    print(f"   Record length: {header.record_length} bytes")
    print()

    table = Table(header=header).with_rows(
        [
            {"NAME": "Ada Lovelace", "BALANCE": 1815.5, "ACTIVE": True, "SINCE": dt.date(2019, 3, 1)},
            {"NAME": "Charles Babbage", "BALANCE": -42.0, "ACTIVE": False, "SINCE": None},
        ]
    )

    # Encode the table
    print("2. Encoding to .dbf bytes...")
    data = encode(table)
    print(f"   Encoded size: {len(data)} bytes (predicted {encoded_size(table)})")
    print(f"   First record: {data[header.header_length : header.header_length + header.record_length]!r}")
    print()

    # Decode it again
    print("3. Decoding...")
    decoded = decode(data, "customers.dbf")
    for record in decoded.to_records():
        print(f"   {record}")
    print()

    # Edit and re-encode
    print("4. Editing a row and re-encoding...")
    edited = decoded.with_rows(
        {**row.to_python(), "BALANCE": 0} if row["NAME"].value == "Charles Babbage" else row
        for row in decoded.rows
    )
    print(f"   {decode(encode(edited)).to_records()[1]}")
    print()

    # Damaged input
    print("5. Decoding a damaged value...")
    damaged = bytearray(data)
    balance = header.header_length + field_offsets(header.fields)["BALANCE"]
    damaged[balance : balance + 10] = b"**********"

    lenient = decode(bytes(damaged))
    print(f"   Lenient: BALANCE = {lenient.rows[0]['BALANCE']!r}")
    try:
        decode(bytes(damaged), config=CodecConfig.strict_mode())
    except DbfCodecError as e:
        print(f"   Strict:  {type(e).__name__}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
