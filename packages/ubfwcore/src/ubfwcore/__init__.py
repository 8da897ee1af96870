# packages/ubfwcore/src/ubfwcore/__init__.py
from __future__ import annotations

from .errors import (
    FirmwareError,
    HeaderNotFoundError,
    TruncatedInputError,
    UnknownSegmentMagicError,
    BadSignatureMagicError,
    FieldOverflowError,
    MissingSourceError,
)

__all__ = [
    "FirmwareError",
    "HeaderNotFoundError",
    "TruncatedInputError",
    "UnknownSegmentMagicError",
    "BadSignatureMagicError",
    "FieldOverflowError",
    "MissingSourceError",
]
