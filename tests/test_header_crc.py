from __future__ import annotations
import struct

from ubfwcodec.checksum import crc32
from ubfwcodec.container import pack_header, HEADER_SIZE
from ubfwcodec.container.locate import header_self_check

def test_crc32_check_value():
    # CRC-32/IEEE check value
    assert crc32(b"123456789") == 0xCBF43926
    assert crc32(b"") == 0

def test_header_crc_self_consistent():
    h = pack_header(b"TEST-1.0")
    assert len(h) == HEADER_SIZE == 268
    assert h[:4] == b"OPEN"
    (stored,) = struct.unpack_from(">I", h, 260)
    assert stored == crc32(h[:260])
    assert header_self_check(h, 0)

def test_header_crc_detects_version_edit():
    h = bytearray(pack_header(b"TEST-1.0"))
    h[4] ^= 0x01
    assert not header_self_check(bytes(h), 0)
