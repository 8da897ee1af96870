# packages/ubfwcodec/src/ubfwcodec/checksum.py
from __future__ import annotations
import zlib

__all__ = ["crc32"]


def crc32(data: bytes | bytearray | memoryview) -> int:
    """CRC-32 IEEE 802.3 (zlib), toujours dans [0, 2**32)."""
    return zlib.crc32(data) & 0xFFFFFFFF
