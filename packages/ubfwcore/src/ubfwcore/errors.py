# packages/ubfwcore/src/ubfwcore/errors.py
from __future__ import annotations

__all__ = [
    "FirmwareError",
    "HeaderNotFoundError",
    "TruncatedInputError",
    "UnknownSegmentMagicError",
    "BadSignatureMagicError",
    "FieldOverflowError",
    "MissingSourceError",
]


class FirmwareError(Exception):
    """Base des erreurs structurelles (conteneur illisible)."""


class HeaderNotFoundError(FirmwareError):
    def __init__(self, msg: str = "No valid firmware header found (tried OPEN & PART heuristics)"):
        super().__init__(msg)


class TruncatedInputError(FirmwareError):
    """A read ran past the end of the buffer."""

    def __init__(self, offset: int, needed: int, available: int, what: str = "data"):
        self.offset = int(offset)
        self.needed = int(needed)
        self.available = int(available)
        self.what = what
        super().__init__(
            f"Truncated input: {what} needs {needed} bytes @ {offset:#x}, only {available} available"
        )


class UnknownSegmentMagicError(FirmwareError):
    def __init__(self, magic: bytes, offset: int):
        self.magic = bytes(magic)
        self.offset = int(offset)
        super().__init__(f"Unknown part magic {self.magic!r} @ {self.offset:#x}")


class BadSignatureMagicError(FirmwareError):
    def __init__(self, magic: bytes, offset: int):
        self.magic = bytes(magic)
        self.offset = int(offset)
        super().__init__(f"Bad signature magic {self.magic!r} @ {self.offset:#x}")


class FieldOverflowError(FirmwareError, ValueError):
    """Text field longer than its fixed width (policy field_overflow='error')."""

    def __init__(self, field: str, size: int, limit: int):
        self.field = field
        self.size = int(size)
        self.limit = int(limit)
        super().__init__(f"{field} is {size} bytes, limit is {limit}")


class MissingSourceError(FirmwareError, FileNotFoundError):
    """Layout source (descriptor, blob, prefix) does not exist."""
