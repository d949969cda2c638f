"""Main CLI entry point for dbfcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.info import show_file_info
from ..codec.table import decode, encode
from ..config import CodecConfig
from ..exceptions import DbfCodecError


def rewrite_file(source: Path, target: Path, config: CodecConfig | None = None) -> int:
    """Decode source and write the re-encoded table to target.

    Args:
        source: Input .dbf file
        target: Output .dbf file
        config: Codec configuration (lenient default if None)

    Returns:
        Number of rows written
    """
    table = decode(source.read_bytes(), source.name, config=config)
    target.write_bytes(encode(table, config=config))
    return len(table.rows)


def main() -> int:
    """Main entry point for the dbfcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="dbfcodec: dBase table codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dbfcodec --info customers.dbf                 Show header and field layout
  dbfcodec --rewrite old.dbf new.dbf            Decode and re-encode a table
  dbfcodec --strict --info customers.dbf        Fail on any damaged value
  dbfcodec --version                            Show version
        """,
    )

    parser.add_argument(
        "--info",
        metavar="FILE",
        type=str,
        help="Show header and field layout of a .dbf file",
    )

    parser.add_argument(
        "--rewrite",
        metavar=("IN", "OUT"),
        nargs=2,
        type=str,
        help="Decode IN and write the re-encoded table to OUT",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise on damaged values instead of recovering",
    )

    parser.add_argument(
        "--encoding",
        default="cp1252",
        help="Code page of text fields (default: cp1252)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every recovered anomaly",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"dbfcodec {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = CodecConfig(strict=args.strict, encoding=args.encoding)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Handle --info
    if args.info:
        file_path = Path(args.info)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            show_file_info(file_path, config)
            return 0
        except (DbfCodecError, OSError) as e:
            print(f"Error reading file: {e}", file=sys.stderr)
            return 1

    # Handle --rewrite
    if args.rewrite:
        source, target = (Path(p) for p in args.rewrite)
        if not source.exists():
            print(f"Error: File not found: {source}", file=sys.stderr)
            return 1

        try:
            count = rewrite_file(source, target, config)
        except (DbfCodecError, OSError) as e:
            print(f"Error rewriting file: {e}", file=sys.stderr)
            return 1

        print(f"Wrote {count} rows to {target}")
        return 0

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
