# packages/ubfwwf/src/ubfwwf/ops.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives.asymmetric import rsa

from ubfwcodec import CodecConfig, Container, build_firmware, parse_firmware, read_image
from ubfwcore.errors import MissingSourceError
from ubfwdata import resolve_layout, write_descriptor
from ubfwdata.layout import blob_name, blob_names

from .api import atomic_write, safe_prefix

log = logging.getLogger(__name__)

__all__ = [
    "SplitCfg", "BuildCfg", "ListCfg", "VerifyCfg",
    "load_image", "split_image", "build_image", "list_image", "verify_image",
]


# --- Typed per-command configs ----------------------------------------------

@dataclass
class SplitCfg:
    """`split`: image → one blob per segment + descriptor.

    prefix  : output prefix; None → firmware version, else image stem.
    out_dir : directory for blobs + descriptor; None → current directory.
    """
    image: Path
    prefix: Optional[str] = None
    out_dir: Optional[Path] = None
    public_key: Optional[rsa.RSAPublicKey] = None


@dataclass
class BuildCfg:
    """`build`: descriptor (.txt) or prefix/directory → image."""
    layout: Path
    output: Path = Path("firmware.bin")
    version: str = "UNKNOWN"
    codec: CodecConfig = field(default_factory=CodecConfig)


@dataclass
class ListCfg:
    image: Path
    public_key: Optional[rsa.RSAPublicKey] = None


@dataclass
class VerifyCfg:
    image: Path
    public_key: Optional[rsa.RSAPublicKey] = None


# --- Progress (cosmetic, never touches bytes) --------------------------------

def _log_progress(verb: str):
    def hook(i: int, total: Optional[int], item: Any) -> None:
        name = getattr(item, "name", "?")
        if total is None:
            log.debug("[%d] %s: %s", i + 1, verb, name)
        else:
            log.debug("[%d/%d] %s: %s", i + 1, total, verb, name)
    return hook


def load_image(image: Path, public_key: Optional[rsa.RSAPublicKey] = None) -> Container:
    image = Path(image)
    if not image.is_file():
        raise MissingSourceError(f"File not found: {image}")
    fw = parse_firmware(read_image(image), public_key, on_segment=_log_progress("decode"))
    if fw.header_offset:
        log.info("Header found @ 0x%x", fw.header_offset)
    return fw


def _log_validity(fw: Container) -> None:
    for s in fw.segments:
        if not s.crc_valid:
            log.warning("CRC mismatch: %s (claim=%#010x, calc=%#010x)", s.name, s.crc_claim, s.crc_calc)
    if not fw.signature.crc_valid:
        log.warning("Signature CRC mismatch (claim=%#010x)", fw.signature.crc_claim)
    if fw.signature.rsa_valid is False:
        log.warning("RSA signature invalid")


# --- Public ops ---------------------------------------------------------------

def split_image(cfg: SplitCfg) -> Dict[str, Any]:
    """Extract every segment (even on CRC mismatch) and write the descriptor."""
    fw = load_image(cfg.image, cfg.public_key)
    _log_validity(fw)
    prefix = cfg.prefix or safe_prefix(fw.version, Path(cfg.image).stem)
    out_dir = Path(cfg.out_dir) if cfg.out_dir else Path(".")
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    n = len(fw.segments)
    names = blob_names(fw.segments, prefix)
    for i, (seg, fname) in enumerate(zip(fw.segments, names), 1):
        if fname != blob_name(prefix, seg.name):
            log.warning("Segment %r en double, extrait sous %s", seg.name, fname)
        target = out_dir / fname
        atomic_write(target, seg.data)
        written.append(str(target))
        log.info("[%d/%d] %s → %s (%d bytes)", i, n, seg.name, target, len(seg.data))
    desc = write_descriptor(fw.segments, out_dir / f"{prefix}.txt", prefix)
    log.info("Split OK - %d parts, descriptor %s", n, desc)
    return {
        "prefix": prefix,
        "descriptor": str(desc),
        "files": written,
        "all_valid": fw.all_valid,
    }


def build_image(cfg: BuildCfg) -> Dict[str, Any]:
    specs = resolve_layout(cfg.layout)
    blob = build_firmware(specs, cfg.version, cfg.codec, on_segment=_log_progress("encode"))
    atomic_write(cfg.output, blob)
    log.info("Firmware built → %s (%d segments, %d bytes)", cfg.output, len(specs), len(blob))
    return {"output": str(cfg.output), "segments": len(specs), "size": len(blob)}


def list_image(cfg: ListCfg) -> Dict[str, Any]:
    fw = load_image(cfg.image, cfg.public_key)
    _log_validity(fw)
    return fw.summary()


def verify_image(cfg: VerifyCfg) -> bool:
    """True iff every segment CRC and the signature (incl. RSA if checked) are valid."""
    fw = load_image(cfg.image, cfg.public_key)
    _log_validity(fw)
    return fw.all_valid
