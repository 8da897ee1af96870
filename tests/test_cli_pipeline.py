import json
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ubfwcodec import SegmentSpec, build_firmware, parse_firmware

def _write_image(tmp_path, name="fw.bin"):
    blob = build_firmware(
        [SegmentSpec(name="kernel", data=b"\x01\x02\x03", index=0, base_addr=0x10000),
         SegmentSpec(name="rootfs", data=b"\x00" * 64, index=1)],
        "TEST-1.0",
    )
    p = tmp_path / name
    p.write_bytes(blob)
    return p, blob

def test_cli_verify_exit_codes(tmp_path):
    from ubfwwf.cli.main import main
    img, blob = _write_image(tmp_path)
    assert main(["verify", str(img)]) == 0

    bad = bytearray(blob); bad[300] ^= 0xFF
    tampered = tmp_path / "bad.bin"; tampered.write_bytes(bytes(bad))
    assert main(["verify", str(tampered)]) == 1

    junk = tmp_path / "junk.bin"; junk.write_bytes(b"\x00" * 1000)
    assert main(["verify", str(junk)]) == 1
    assert main(["verify", str(tmp_path / "missing.bin")]) == 1

def test_cli_split_build_list(tmp_path, capsys):
    from ubfwwf.cli.main import main
    img, blob = _write_image(tmp_path)
    parts = tmp_path / "parts"
    assert main(["split", str(img), "-o", "fw", "--out-dir", str(parts)]) == 0
    assert (parts / "fw.txt").exists() and (parts / "fw.kernel").read_bytes() == b"\x01\x02\x03"

    out = tmp_path / "rebuilt.bin"
    assert main(["build", str(parts / "fw.txt"), "-o", str(out), "-V", "TEST-1.0"]) == 0
    assert out.read_bytes() == blob

    capsys.readouterr()
    assert main(["list", str(out), "--json"]) == 0
    text = capsys.readouterr().out
    info = json.loads(text[text.index("{"):])
    assert info["version"] == "TEST-1.0"
    assert [s["name"] for s in info["segments"]] == ["kernel", "rootfs"]

    assert main(["list", str(out)]) == 0
    text = capsys.readouterr().out
    assert "version: TEST-1.0" in text
    assert [l.split()[0] for l in text.splitlines() if "crc=" in l] == ["kernel", "rootfs"]
    assert text.count("crc=OK") == 2
    assert "signature: OK  rsa: absent" in text

def test_cli_build_long_options(tmp_path):
    from ubfwwf.cli.main import main
    (tmp_path / "fw.kernel").write_bytes(b"\x01\x02")
    out = tmp_path / "o.bin"
    assert main(["build", str(tmp_path / "fw"), "--output", str(out), "--version", "TEST-1.0"]) == 0
    fw = parse_firmware(out.read_bytes())
    assert fw.version == "TEST-1.0"
    assert [s.name for s in fw.segments] == ["kernel"]

def test_cli_build_strict_and_missing(tmp_path):
    from ubfwwf.cli.main import main
    (tmp_path / "fw.kernel").write_bytes(b"k")
    assert main(["build", str(tmp_path / "fw"), "-o", str(tmp_path / "o.bin"), "-V", "x" * 300, "--strict"]) == 2
    assert main(["build", str(tmp_path / "nope.txt"), "-o", str(tmp_path / "o.bin")]) == 2
    assert main(["frobnicate"]) == 2

def test_cli_key_from_env(tmp_path, monkeypatch):
    from ubfwwf.cli.main import main
    from ubfwwf.cli.common import KEY_ENV
    signer = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    other = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    img, blob = _write_image(tmp_path)
    img.write_bytes(blob + signer.sign(blob, padding.PKCS1v15(), hashes.SHA1()))

    def pem(k, name):
        p = tmp_path / name
        p.write_bytes(k.public_key().public_bytes(
            serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo))
        return p

    # no key: RSA unknown, ignored
    monkeypatch.delenv(KEY_ENV, raising=False)
    assert main(["verify", str(img)]) == 0
    # env key
    monkeypatch.setenv(KEY_ENV, str(pem(other, "other.pem")))
    assert main(["verify", str(img)]) == 1
    # explicit --key wins over env
    assert main(["verify", str(img), "--key", str(pem(signer, "good.pem"))]) == 0
