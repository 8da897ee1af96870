# packages/ubfwcodec/src/ubfwcodec/container/encode.py
# sérialisation binaire du conteneur (header → segments → signature)
from __future__ import annotations
import struct
from typing import Callable, Optional, Sequence

from ubfwcore.errors import FieldOverflowError
from ..checksum import crc32
from ..config import CodecConfig
from .layout import (
    HEADER_CRC_OFF,
    HEADER_SIZE,
    MAGIC_HEADER,
    NAME_MAX,
    SEGMENT_HEAD_FMT,
    SEGMENT_MAGICS,
    SEGMENT_TRAILER_FMT,
    SIGNATURE_FMT,
    U32_MAX,
    VERSION_MAX,
    VERSION_OFF,
    container_size,
)
from .records import SegmentSpec

__all__ = ["fit_text", "pack_header", "pack_segment", "encode_container"]


def fit_text(text: str, limit: int, field: str, policy: str = "truncate") -> bytes:
    """UTF-8 bytes of `text`, at most `limit` long (truncated or rejected per `policy`)."""
    raw = str(text).encode("utf-8")
    if len(raw) > limit:
        if policy == "error":
            raise FieldOverflowError(field, len(raw), limit)
        raw = raw[:limit]
    return raw


def _check_u32(name: str, v: int) -> int:
    v = int(v)
    if not (0 <= v <= U32_MAX):
        raise ValueError(f"{name}={v} does not fit in uint32")
    return v


def pack_header(version_raw: bytes) -> bytes:
    """268-byte header: magic + version + CRC32 over the first 260 bytes."""
    head = bytearray(HEADER_SIZE)
    head[:4] = MAGIC_HEADER
    head[VERSION_OFF:VERSION_OFF + len(version_raw)] = version_raw
    struct.pack_into(">I", head, HEADER_CRC_OFF, crc32(head[:HEADER_CRC_OFF]))
    return bytes(head)


def pack_segment(spec: SegmentSpec, policy: str = "truncate") -> bytes:
    """Segment header + payload + trailer (CRC over header ‖ payload)."""
    magic = bytes(spec.magic)
    if magic not in SEGMENT_MAGICS:
        raise ValueError(f"segment {spec.name!r}: magic must be PART or EXEC, got {magic!r}")
    name_raw = fit_text(spec.name, NAME_MAX, f"segment name {spec.name!r}", policy)
    data = bytes(spec.data)
    head = struct.pack(
        SEGMENT_HEAD_FMT,
        magic,
        name_raw,                       # struct pads the 16-byte field with NUL
        _check_u32("mem_addr", spec.mem_addr),
        _check_u32("index", spec.index),
        _check_u32("base_addr", spec.base_addr),
        _check_u32("entry_addr", spec.entry_addr),
        _check_u32("data_size", len(data)),
        _check_u32("part_size", spec.part_size),
    )
    return head + data + struct.pack(SEGMENT_TRAILER_FMT, crc32(head + data))


def encode_container(
    specs: Sequence[SegmentSpec],
    version: Optional[str] = None,
    cfg: Optional[CodecConfig] = None,
    observe: Optional[Callable[[int, SegmentSpec], None]] = None,
) -> bytes:
    """
    Encode `specs` (stream order = list order) into a container.

    The result decodes with every segment CRC valid and a valid signature.
    Never appends an RSA block. `observe(i, spec)` fires after each segment
    is written.
    """
    cfg = cfg or CodecConfig()
    if version is None:
        version = cfg.default_version
    version_raw = fit_text(version, VERSION_MAX, "version", cfg.field_overflow)

    total = container_size(len(s.data) for s in specs)
    buf = bytearray(total)
    buf[:HEADER_SIZE] = pack_header(version_raw)

    off = HEADER_SIZE
    for i, spec in enumerate(specs):
        seg = pack_segment(spec, cfg.field_overflow)
        buf[off:off + len(seg)] = seg
        off += len(seg)
        if observe is not None:
            observe(i, spec)

    struct.pack_into(SIGNATURE_FMT, buf, off, cfg.signature_magic, crc32(buf[:off]))
    return bytes(buf)
