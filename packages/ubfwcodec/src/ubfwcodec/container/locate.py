# packages/ubfwcodec/src/ubfwcodec/container/locate.py
from __future__ import annotations
import struct
from typing import List

import numpy as np

from ubfwcore.errors import HeaderNotFoundError
from ..checksum import crc32
from .layout import HEADER_CRC_OFF, HEADER_SIZE, MAGIC_HEADER, MAGIC_PART

__all__ = ["find_magic", "header_self_check", "locate_header"]


def find_magic(buf: bytes, magic: bytes) -> List[int]:
    """
    Tous les offsets (croissants) où `magic` apparaît dans `buf`.

    Vectorisé via numpy : on compare chaque octet du motif à une vue décalée
    du buffer, puis on garde les positions où toutes les comparaisons tiennent.
    Les occurrences qui se chevauchent sont toutes rapportées.
    """
    m = len(magic)
    if m == 0 or len(buf) < m:
        return []
    arr = np.frombuffer(buf, dtype=np.uint8)
    n = arr.size - m + 1
    hit = arr[:n] == magic[0]
    for k in range(1, m):
        hit &= arr[k:k + n] == magic[k]
    return np.flatnonzero(hit).tolist()


def header_self_check(buf: bytes, off: int) -> bool:
    """True if a full header fits at `off` and its embedded CRC matches."""
    if off < 0 or off + HEADER_SIZE > len(buf):
        return False
    (stored,) = struct.unpack_from(">I", buf, off + HEADER_CRC_OFF)
    return crc32(buf[off:off + HEADER_CRC_OFF]) == stored


def locate_header(buf: bytes) -> int:
    """
    Offset of the first self-consistent container header in `buf`.

    1. every "OPEN" occurrence, CRC-gated;
    2. else every "PART" occurrence, testing HEADER_SIZE bytes before it;
    3. else HeaderNotFoundError.
    """
    buf = bytes(buf)
    for pos in find_magic(buf, MAGIC_HEADER):
        if header_self_check(buf, pos):
            return pos
    # fallback: header magic relocated/overwritten, segments still in place
    for part_pos in find_magic(buf, MAGIC_PART):
        cand = part_pos - HEADER_SIZE
        if header_self_check(buf, cand):
            return cand
    raise HeaderNotFoundError()
