"""Exceptions raised at the encode, render and record-file boundaries.

Validation problems are never raised; they are returned as data by
``aamvagen.validation``.
"""

from __future__ import annotations

from collections.abc import Sequence


class AAMVAError(Exception):
    """Base class for failures reported by this package."""

    stage = "general"


class EncodingError(AAMVAError, ValueError):
    """A record reached the encoder with mandatory elements missing or malformed."""

    stage = "encode"

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = list(fields)


class RenderingError(AAMVAError, RuntimeError):
    """The PDF417 renderer rejected the encoded text (capacity, parameters)."""

    stage = "render"


class RecordFileError(AAMVAError, ValueError):
    """A record file could not be read or does not hold a record mapping."""

    stage = "load"
