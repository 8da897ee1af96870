from __future__ import annotations

from ubfwcodec import SegmentSpec, build_firmware, parse_firmware, read_image, write_image

def test_image_write_read_roundtrip(tmp_path):
    blob = build_firmware([SegmentSpec(name="kernel", data=b"\x01\x02\x03")], "TEST-1.0")

    # Écriture atomique puis relecture
    out = tmp_path / "sub" / "fw.bin"
    write_image(blob, out)
    assert not (tmp_path / "sub" / "fw.bin.tmp").exists()
    buf = read_image(out)

    assert buf == blob
    fw = parse_firmware(buf)
    assert fw.version == "TEST-1.0"
    assert fw.segments[0].data == b"\x01\x02\x03"

def test_workflow_writer_shares_image_writer(tmp_path, monkeypatch):
    import ubfwwf.api as wfapi
    calls = []
    monkeypatch.setattr(wfapi, "write_image", lambda data, path: calls.append((data, path)))
    wfapi.atomic_write(tmp_path / "x.bin", b"abc")
    assert calls == [(b"abc", tmp_path / "x.bin")]
