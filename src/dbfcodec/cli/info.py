"""Table inspection CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.header import describe_version
from ..codec.table import decode
from ..config import CodecConfig
from ..models.table import Table
from ..utils.sizing import encoded_size, field_offsets, header_length, record_length


def show_file_info(file_path: Path, config: CodecConfig | None = None) -> None:
    """Decode a .dbf file and print its header and field layout.

    Args:
        file_path: Path to the .dbf file
        config: Codec configuration (lenient default if None)
    """
    table = decode(file_path.read_bytes(), file_path.name, config=config)
    print_table_info(table)


def print_table_info(table: Table) -> None:
    """Print a summary of a decoded table.

    Args:
        table: Table to describe
    """
    header = table.header
    title = table.file_name or "<buffer>"

    print(f"{'=' * 19} {title} {'=' * 19}")
    print(f"Version: {describe_version(header.version)}")
    if header.last_update is not None:
        print(f"Last update: {header.last_update.isoformat()}")
    else:
        print("Last update: (invalid)")

    deleted = header.record_count - len(table.rows)
    print(f"Records: {header.record_count} stored, {len(table.rows)} live", end="")
    print(f" ({deleted} deleted or unreadable)" if deleted else "")

    print(f"Header length: {header.header_length} bytes (computed {header_length(header.fields)})")
    print(f"Record length: {header.record_length} bytes (computed {record_length(header.fields)})")
    print(f"Re-encoded size: {encoded_size(table)} bytes")
    print()

    # Field-by-field breakdown
    print(f"{'-' * 26} Fields {'-' * 26}")
    offsets = field_offsets(header.fields)
    for i, field in enumerate(header.fields, 1):
        decimals = f".{field.decimal_count}" if field.decimal_count else ""
        field_desc = f"{i}. {field.name}"
        dots = "." * max(1, 30 - len(field_desc))
        print(
            f"        {field_desc}{dots}{field.type_code}({field.length}{decimals})"
            f" @ {offsets.get(field.name, 0)}"
        )

    print()
