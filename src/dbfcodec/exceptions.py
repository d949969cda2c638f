"""Exception hierarchy for dbfcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from DbfCodecError for easy catching of any dbfcodec-specific error.
"""

from __future__ import annotations


class DbfCodecError(Exception):
    """Base exception for all dbfcodec errors."""

    pass


class FormatError(DbfCodecError):
    """Raised when a buffer cannot be a DBF file at all.

    This is the only fatal decode error in lenient mode.

    Examples:
        - Buffer shorter than the 32-byte file header
    """

    pass


class DecodeError(DbfCodecError):
    """Raised in strict mode when decoding hits a recoverable anomaly.

    Examples:
        - Numeric field text that is not a number
        - Date field that is not a calendar date
        - Date-time outside the representable range
        - Truncated trailing record or descriptor list
    """

    pass


class EncodeError(DbfCodecError):
    """Raised in strict mode when a value cannot be encoded faithfully.

    Examples:
        - Text or number wider than the field
        - Memo text that is not a pointer placeholder
        - Value of the wrong kind for the field type
    """

    pass


class SchemaError(DbfCodecError):
    """Raised when field descriptors cannot be written to a DBF header.

    Examples:
        - Field name longer than 10 bytes or empty
        - Duplicate field names
        - Type code that is not a single ASCII character
        - Header or record longer than 65535 bytes
    """

    pass
