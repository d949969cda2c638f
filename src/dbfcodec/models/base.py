"""Base model class and dbfcodec-specific Pydantic configuration.

This module provides the DbfModel class that all dbfcodec data types inherit from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DbfModel(BaseModel):
    """Base class for all dbfcodec data types.

    Decoded tables are values: once built they never change. Edits made by a
    caller produce new instances (see ``model_copy(update=...)``) that are then
    handed back to the encoder.
    """

    # ConfigDict for Pydantic v2
    model_config = ConfigDict(
        # Coerce ints to floats and the like
        strict=False,
        # Tables are immutable values
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )
