from __future__ import annotations

import pytest

from ubfwcodec import SegmentSpec, build_firmware, parse_firmware
from ubfwcodec.container import HEADER_SIZE, SEGMENT_HEAD_SIZE, decode_container, decode_signature
from ubfwcore.errors import (
    BadSignatureMagicError,
    FirmwareError,
    TruncatedInputError,
    UnknownSegmentMagicError,
)

def _blob():
    return build_firmware(
        [SegmentSpec(name="kernel", data=b"K" * 40), SegmentSpec(name="rootfs", data=b"R" * 80)],
        "v1",
    )

def test_unknown_segment_magic_raises_with_offset():
    blob = bytearray(_blob())
    second = HEADER_SIZE + SEGMENT_HEAD_SIZE + 40 + 8
    assert blob[second:second + 4] == b"PART"
    blob[second:second + 4] = b"JUNK"
    with pytest.raises(UnknownSegmentMagicError) as ei:
        parse_firmware(bytes(blob))
    assert ei.value.offset == second
    assert ei.value.magic == b"JUNK"
    assert f"{second:#x}" in str(ei.value)

def test_truncated_mid_payload():
    blob = _blob()
    cut = HEADER_SIZE + SEGMENT_HEAD_SIZE + 20
    with pytest.raises(TruncatedInputError) as ei:
        parse_firmware(blob[:cut])
    assert ei.value.offset == HEADER_SIZE + SEGMENT_HEAD_SIZE
    assert ei.value.needed == 40
    assert ei.value.available == 20

def test_truncated_before_signature():
    blob = _blob()
    with pytest.raises(TruncatedInputError):
        parse_firmware(blob[:-12])
    with pytest.raises(TruncatedInputError):
        parse_firmware(blob[:-6])

def test_truncated_in_segment_header():
    blob = _blob()
    with pytest.raises(TruncatedInputError):
        parse_firmware(blob[:HEADER_SIZE + 30])

def test_bad_signature_magic():
    blob = _blob()
    sig_off = parse_firmware(blob).signature.offset
    with pytest.raises(BadSignatureMagicError) as ei:
        decode_signature(blob, sig_off - 8)
    assert ei.value.offset == sig_off - 8

def test_header_out_of_bounds():
    with pytest.raises(TruncatedInputError):
        decode_container(b"OPEN" + b"\x00" * 20, 0)

def test_errors_share_base_class():
    for cls in (BadSignatureMagicError, TruncatedInputError, UnknownSegmentMagicError):
        assert issubclass(cls, FirmwareError)
