# packages/ubfwcodec/src/ubfwcodec/container/__init__.py
from __future__ import annotations

# I/O bruts
from .io import read_image, write_image

# Layout & records
from .layout import (
    MAGIC_HEADER, MAGIC_PART, MAGIC_EXEC, MAGIC_END, MAGIC_ENDS,
    HEADER_SIZE, SEGMENT_HEAD_SIZE, SEGMENT_TRAILER_SIZE, SIGNATURE_SIZE,
)
from .records import SegmentHeader, Segment, Signature, Container, SegmentSpec

# Decode path
from .locate import find_magic, locate_header
from .signature import load_public_key, verify_rsa, decode_signature
from .decode import decode_segment, iter_segments, decode_container, decode_firmware

# Encode path
from .encode import pack_header, pack_segment, encode_container

__all__ = [
    "read_image", "write_image",
    "MAGIC_HEADER", "MAGIC_PART", "MAGIC_EXEC", "MAGIC_END", "MAGIC_ENDS",
    "HEADER_SIZE", "SEGMENT_HEAD_SIZE", "SEGMENT_TRAILER_SIZE", "SIGNATURE_SIZE",
    "SegmentHeader", "Segment", "Signature", "Container", "SegmentSpec",
    "find_magic", "locate_header",
    "load_public_key", "verify_rsa", "decode_signature",
    "decode_segment", "iter_segments", "decode_container", "decode_firmware",
    "pack_header", "pack_segment", "encode_container",
]
