"""Lossless single-byte text conversion.

Code pages leave some byte values unassigned (0x81, 0x8D, 0x8F, 0x90 and
0x9D in cp1252). Such a byte decodes to the code point of the same value and
encodes back to the same byte, so decoding and re-encoding never changes the
bytes of a field.
"""

from __future__ import annotations

import codecs
import functools

UNMAPPED_BYTES = "dbfcodec-unmapped-bytes"
REPLACEMENT = b"?"


def _decode_unmapped(error: UnicodeError) -> tuple[str, int]:
    if not isinstance(error, UnicodeDecodeError):
        raise error
    chunk = error.object[error.start : error.end]
    return "".join(map(chr, chunk)), error.end


codecs.register_error(UNMAPPED_BYTES, _decode_unmapped)


@functools.lru_cache(maxsize=None)
def unmapped_bytes(encoding: str) -> frozenset[int]:
    """Byte values the code page does not assign a character to."""
    unmapped = set()
    for value in range(256):
        try:
            bytes([value]).decode(encoding)
        except UnicodeDecodeError:
            unmapped.add(value)
    return frozenset(unmapped)


def decode_text(raw: bytes, encoding: str) -> str:
    """Decode field bytes; unassigned bytes become the matching code point."""
    return raw.decode(encoding, errors=UNMAPPED_BYTES)


def encode_text(text: str, encoding: str) -> tuple[bytes, str]:
    """Encode text for a field.

    Args:
        text: Text to encode
        encoding: Single-byte code page

    Returns:
        The encoded bytes, and the characters that had no byte and were
        written as ``?`` (empty when nothing was lost)

    Example:
        >>> encode_text("A\\x81中", "cp1252")
        (b'A\\x81?', '中')
    """
    try:
        return text.encode(encoding), ""
    except UnicodeEncodeError:
        return _encode_by_character(text, encoding)


def _encode_by_character(text: str, encoding: str) -> tuple[bytes, str]:
    unmapped = unmapped_bytes(encoding)
    result = bytearray()
    lost = []
    for ch in text:
        try:
            result += ch.encode(encoding)
        except UnicodeEncodeError:
            if ord(ch) in unmapped:
                result.append(ord(ch))
            else:
                result += REPLACEMENT
                lost.append(ch)
    return bytes(result), "".join(lost)
