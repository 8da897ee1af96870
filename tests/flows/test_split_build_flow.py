from __future__ import annotations

from ubfwcodec import SegmentSpec, build_firmware, parse_firmware
from ubfwcodec.container import MAGIC_EXEC
from ubfwwf.ops import BuildCfg, ListCfg, SplitCfg, VerifyCfg, build_image, list_image, split_image, verify_image

def _image(tmp_path, version="UBNT.v1/beta"):
    specs = [
        SegmentSpec(name="u-boot", data=b"\x11" * 300, index=0, part_size=0x40000,
                    mem_addr=0x80000000, entry_addr=0x80000000),
        SegmentSpec(name="kernel", data=bytes(range(256)) * 8, index=1, base_addr=0x40000,
                    part_size=0x200000),
        SegmentSpec(name="script", data=b"bootm 0x80001000\n", index=2, magic=MAGIC_EXEC),
    ]
    p = tmp_path / "in" / "fw.bin"
    p.parent.mkdir(parents=True)
    blob = build_firmware(specs, version)
    p.write_bytes(b"UBNT-WRAPPER" * 3 + blob)
    return p, blob

def test_split_then_build_is_byte_identical(tmp_path):
    img, blob = _image(tmp_path)
    res = split_image(SplitCfg(image=img, out_dir=tmp_path / "parts"))
    assert res["prefix"] == "UBNT.v1_beta"
    assert res["all_valid"] is False  # signature CRC is absolute, wrapper breaks it
    assert len(res["files"]) == 3

    out = tmp_path / "rebuilt.bin"
    summary = build_image(BuildCfg(layout=res["descriptor"], output=out, version="UBNT.v1/beta"))
    assert summary == {"output": str(out), "segments": 3, "size": len(blob)}
    assert out.read_bytes() == blob

def test_split_prefix_and_auto_layout(tmp_path):
    img, blob = _image(tmp_path)
    res = split_image(SplitCfg(image=img, prefix="fw", out_dir=tmp_path / "parts"))
    assert sorted(p.name for p in (tmp_path / "parts").iterdir()) == [
        "fw.kernel", "fw.script", "fw.txt", "fw.u-boot"]
    out = tmp_path / "auto.bin"
    build_image(BuildCfg(layout=tmp_path / "parts" / "fw", output=out, version="auto"))
    fw = parse_firmware(out.read_bytes())
    assert fw.all_valid
    # auto layout sorts by file name and keeps payloads
    assert [s.name for s in fw.segments] == ["kernel", "script", "u-boot"]
    assert fw.segments[1].header.executable

def test_list_and_verify(tmp_path):
    img, blob = _image(tmp_path)
    info = list_image(ListCfg(image=img))
    assert info["version"] == "UBNT.v1/beta"
    assert info["header_offset"] == 36
    assert [s["crc_valid"] for s in info["segments"]] == [True, True, True]
    assert info["rsa"] == "absent"

    clean = tmp_path / "clean.bin"; clean.write_bytes(blob)
    assert verify_image(VerifyCfg(image=clean)) is True
    assert verify_image(VerifyCfg(image=img)) is False

def test_split_build_keeps_unnamed_and_duplicate_segments(tmp_path, caplog):
    specs = [
        SegmentSpec(name="", data=b"AAA", index=0),
        SegmentSpec(name="kernel", data=b"KK", index=1),
        SegmentSpec(name="kernel", data=b"K2", index=2),
    ]
    blob = build_firmware(specs, "dup")
    img = tmp_path / "fw.bin"; img.write_bytes(blob)

    res = split_image(SplitCfg(image=img, prefix="fw", out_dir=tmp_path / "parts"))
    assert len(set(res["files"])) == 3
    assert (tmp_path / "parts" / "fw.kernel").read_bytes() == b"KK"
    assert (tmp_path / "parts" / "fw.kernel_2").read_bytes() == b"K2"
    assert "en double" in caplog.text

    out = tmp_path / "rebuilt.bin"
    build_image(BuildCfg(layout=res["descriptor"], output=out, version="dup"))
    assert "ligne ignorée" not in caplog.text
    assert out.read_bytes() == blob
