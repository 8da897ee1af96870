# packages/ubfwcodec/src/ubfwcodec/container/decode.py
from __future__ import annotations
import struct
from typing import Callable, Generator, List, Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import rsa

from ubfwcore.errors import TruncatedInputError, UnknownSegmentMagicError
from ..checksum import crc32
from .layout import (
    HEADER_CRC_OFF,
    HEADER_SIZE,
    MAGIC_LEN,
    SEGMENT_HEAD_FMT,
    SEGMENT_HEAD_SIZE,
    SEGMENT_MAGICS,
    SEGMENT_TRAILER_FMT,
    SEGMENT_TRAILER_SIZE,
    SIGNATURE_MAGICS,
    VERSION_FIELD,
    VERSION_OFF,
)
from .locate import locate_header
from .records import Container, Segment, SegmentHeader
from .signature import decode_signature

__all__ = [
    "read_cstring", "decode_segment", "iter_segments", "collect_segments",
    "decode_container", "decode_firmware",
]


def _need(buf: bytes, off: int, n: int, what: str) -> None:
    if off < 0 or off + n > len(buf):
        raise TruncatedInputError(off, n, max(0, len(buf) - off), what)


def read_cstring(b: bytes, off: int, size: int) -> str:
    raw = bytes(b[off:off + size])
    nul = raw.find(b"\x00")
    if nul != -1:
        raw = raw[:nul]
    return raw.decode("utf-8", errors="replace")


def decode_segment(buf: bytes, off: int) -> Segment:
    """Decode one segment (header, payload, trailer) starting at `off`."""
    _need(buf, off, SEGMENT_HEAD_SIZE, "segment header")
    (magic, name_raw, mem_addr, index, base_addr,
     entry_addr, data_size, part_size) = struct.unpack_from(SEGMENT_HEAD_FMT, buf, off)
    if magic not in SEGMENT_MAGICS:
        raise UnknownSegmentMagicError(magic, off)

    data_start = off + SEGMENT_HEAD_SIZE
    _need(buf, data_start, data_size, "segment payload")
    data_end = data_start + data_size
    _need(buf, data_end, SEGMENT_TRAILER_SIZE, "segment trailer")
    (crc_claim,) = struct.unpack_from(SEGMENT_TRAILER_FMT, buf, data_end)

    header = SegmentHeader(
        magic=bytes(magic),
        name=read_cstring(name_raw, 0, len(name_raw)),
        mem_addr=int(mem_addr),
        index=int(index),
        base_addr=int(base_addr),
        entry_addr=int(entry_addr),
        data_size=int(data_size),
        part_size=int(part_size),
    )
    return Segment(
        header=header,
        data=bytes(buf[data_start:data_end]),
        crc_claim=int(crc_claim),
        crc_calc=crc32(buf[off:data_end]),
        offset=int(off),
    )


def iter_segments(buf: bytes, header_offset: int) -> Generator[Segment, None, int]:
    """
    Walk segments right after the fixed header, in stream order.

    Stops (without yielding) on a terminal signature magic; the generator's
    return value is the signature offset.
    """
    off = header_offset + HEADER_SIZE
    while True:
        _need(buf, off, MAGIC_LEN, "magic")
        magic = bytes(buf[off:off + MAGIC_LEN])
        if magic in SIGNATURE_MAGICS:
            return off
        if magic not in SEGMENT_MAGICS:
            raise UnknownSegmentMagicError(magic, off)
        seg = decode_segment(buf, off)
        yield seg
        off = seg.offset + SEGMENT_HEAD_SIZE + seg.header.data_size + SEGMENT_TRAILER_SIZE


def collect_segments(buf: bytes, header_offset: int,
                     observe: Optional[Callable[[Segment], None]] = None) -> Tuple[List[Segment], int]:
    """Drain `iter_segments` → (segments, signature offset)."""
    segments: List[Segment] = []
    walker = iter_segments(buf, header_offset)
    while True:
        try:
            seg = next(walker)
        except StopIteration as stop:
            return segments, int(stop.value)
        segments.append(seg)
        if observe is not None:
            observe(seg)


def decode_container(buf: bytes, header_offset: int,
                     public_key: Optional[rsa.RSAPublicKey] = None,
                     observe: Optional[Callable[[Segment], None]] = None) -> Container:
    """
    Decode a container whose header sits at `header_offset`.

    Checksum mismatches are reported as flags; only structural problems raise
    (TruncatedInputError, UnknownSegmentMagicError, BadSignatureMagicError).
    `observe` is called once per decoded segment and must not touch the buffer.
    """
    buf = bytes(buf)
    _need(buf, header_offset, HEADER_SIZE, "header")
    version = read_cstring(buf, header_offset + VERSION_OFF, VERSION_FIELD)
    (header_crc,) = struct.unpack_from(">I", buf, header_offset + HEADER_CRC_OFF)

    segments, sig_off = collect_segments(buf, header_offset, observe)
    signature = decode_signature(buf, sig_off, public_key)
    return Container(
        version=version,
        segments=tuple(segments),
        signature=signature,
        header_offset=int(header_offset),
        header_crc=int(header_crc),
    )


def decode_firmware(buf: bytes, public_key: Optional[rsa.RSAPublicKey] = None) -> Container:
    """locate_header + decode_container."""
    buf = bytes(buf)
    return decode_container(buf, locate_header(buf), public_key)
