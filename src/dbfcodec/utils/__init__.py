"""Utility functions for dbfcodec.

This module provides size and offset calculations for DBF layouts.
"""

from __future__ import annotations

from .sizing import encoded_size, field_offsets, header_length, record_length

__all__ = [
    "encoded_size",
    "field_offsets",
    "header_length",
    "record_length",
]
