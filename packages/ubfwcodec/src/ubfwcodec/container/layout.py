"""
Container layout (OPEN/PART/END.)
=================================

Big-endian, fixed widths, no compression.

HEADER (268 bytes)
------------------
struct Header {
    char   magic[4];          // "OPEN"
    char   version[256];      // NUL padded text
    uint32 header_crc32;      // CRC32 of the 260 bytes before this field
    uint32 pad;               // 0
};

SEGMENT (56 + data_size + 8 bytes, repeated)
--------------------------------------------
struct SegmentHeader {
    char   magic[4];          // "PART" (data) | "EXEC" (executable)
    char   name[16];          // NUL terminated, <= 15 chars
    uint8  pad[12];
    uint32 mem_addr;          // load address
    uint32 index;
    uint32 base_addr;
    uint32 entry_addr;
    uint32 data_size;         // payload bytes that follow
    uint32 part_size;         // allocated size on flash
};
// uint8  payload[data_size];
struct SegmentTrailer {
    uint32 crc32;             // CRC32 of SegmentHeader || payload
    uint32 pad;
};

SIGNATURE (12 bytes, terminal)
------------------------------
struct Signature {
    char   magic[4];          // "END." | "ENDS"
    uint32 crc32;             // CRC32 of [0, sig_off) or [0, sig_off + 12)
    uint32 pad;
};
// optional: uint8 rsa[256 | 512];  PKCS#1 v1.5 / SHA-1 over [0, sig_off + 12)
"""
from __future__ import annotations
import struct

MAGIC_HEADER = b"OPEN"
MAGIC_PART = b"PART"
MAGIC_EXEC = b"EXEC"
MAGIC_END = b"END."
MAGIC_ENDS = b"ENDS"
MAGIC_LEN = 4

SEGMENT_MAGICS = (MAGIC_PART, MAGIC_EXEC)
SIGNATURE_MAGICS = (MAGIC_END, MAGIC_ENDS)

HEADER_FMT = ">4s256sI4x"
HEADER_SIZE = struct.calcsize(HEADER_FMT)          # = 268
HEADER_CRC_OFF = 260                               # CRC covers [0, 260)
VERSION_OFF = 4
VERSION_FIELD = 256
VERSION_MAX = VERSION_FIELD - 1                    # last byte stays NUL

SEGMENT_HEAD_FMT = ">4s16s12xIIIIII"
SEGMENT_HEAD_SIZE = struct.calcsize(SEGMENT_HEAD_FMT)  # = 56
NAME_FIELD = 16
NAME_MAX = NAME_FIELD - 1

SEGMENT_TRAILER_FMT = ">I4x"
SEGMENT_TRAILER_SIZE = struct.calcsize(SEGMENT_TRAILER_FMT)  # = 8

SIGNATURE_FMT = ">4sI4x"
SIGNATURE_SIZE = struct.calcsize(SIGNATURE_FMT)    # = 12

RSA_BLOCK_SIZES = (256, 512)

U32_MAX = 0xFFFFFFFF


def container_size(payload_sizes) -> int:
    """Total encoded size for segments of the given payload lengths."""
    return HEADER_SIZE + SIGNATURE_SIZE + sum(
        SEGMENT_HEAD_SIZE + int(n) + SEGMENT_TRAILER_SIZE for n in payload_sizes
    )
