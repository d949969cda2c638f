"""Constrained integer types for the fixed-width slots of headers and descriptors."""

from __future__ import annotations

from typing import Annotated, Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def BoundedInt(*, ge: int | None = None, le: int | None = None, **kwargs: Any) -> FieldInfo:
    """Integer field limited to the range [ge, le]."""
    return cast(FieldInfo, Field(ge=ge, le=le, **kwargs))


def UnsignedInt(*, bits: int, **kwargs: Any) -> FieldInfo:
    """Integer field for an unsigned little-endian header slot of 8, 16 or 32 bits."""
    if bits not in (8, 16, 32):
        raise ValueError(f"bits must be 8, 16 or 32, got {bits}")

    return BoundedInt(ge=0, le=(1 << bits) - 1, **kwargs)


UInt8 = Annotated[int, UnsignedInt(bits=8)]
UInt16 = Annotated[int, UnsignedInt(bits=16)]
UInt32 = Annotated[int, UnsignedInt(bits=32)]
