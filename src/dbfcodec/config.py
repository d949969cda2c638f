"""Configuration for the DBF codec.

This module provides the configuration dataclass that selects how the codec
reacts to malformed input and which code page it uses for text bytes.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for decoding and encoding DBF tables.

    Real-world dBase files are often slightly corrupt: numeric columns holding
    overflow asterisks, dates typed by hand, a trailing record cut short by a
    crashed writer. By default the codec recovers from these locally and keeps
    going. Strict mode turns every such recovery into an exception instead.

    Attributes:
        strict: Raise DecodeError/EncodeError instead of degrading (default False).
            Lenient mode (the default) recovers as follows:
            - Unparseable numeric text is kept as text
            - Unparseable dates are kept as their raw text
            - Out-of-range date-times become "[Invalid Date]"
            - A truncated trailing record is dropped
            - Text wider than its field is cut to fit

        encoding: Single-byte code page for text fields (default "cp1252").
            Typical values:
            - cp1252: Western European (Windows)
            - cp437: US MS-DOS
            - cp850: International MS-DOS
            - cp866: Russian MS-DOS

        thousands_separator: Character stripped from numeric text before
            parsing (default ",").

    Examples:
        ```python
        from dbfcodec import CodecConfig, decode

        # Recover what we can from a damaged export
        table = decode(data)

        # Refuse anything that would not round-trip
        table = decode(data, config=CodecConfig(strict=True))

        # DOS-era file
        table = decode(data, config=CodecConfig(encoding="cp437"))
        ```
    """

    strict: bool = False
    encoding: str = "cp1252"
    thousands_separator: str = ","

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        try:
            info = codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e

        # Fixed-width fields need one byte per character
        if any(len(ch.encode(info.name, errors="replace")) != 1 for ch in "A€中"):
            raise ValueError(f"encoding must be a single-byte code page, got {self.encoding}")

        if len(self.thousands_separator) > 1:
            raise ValueError(
                f"thousands_separator must be at most one character, "
                f"got {self.thousands_separator!r}"
            )

    @classmethod
    def strict_mode(cls, encoding: str = "cp1252") -> CodecConfig:
        """Create a strict configuration.

        Args:
            encoding: Code page for text fields

        Returns:
            CodecConfig with strict=True
        """
        return cls(strict=True, encoding=encoding)


DEFAULT_CONFIG = CodecConfig()


def resolve_config(config: CodecConfig | None) -> CodecConfig:
    """Return config, or the lenient default when None."""
    return DEFAULT_CONFIG if config is None else config
