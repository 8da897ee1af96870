# packages/ubfwdata/src/ubfwdata/layout.py
from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import List, Sequence

from ubfwcore.errors import MissingSourceError
from ubfwcodec import Segment, SegmentSpec
from ubfwcodec.container import MAGIC_EXEC, MAGIC_PART

log = logging.getLogger(__name__)

__all__ = [
    "DESCRIPTOR_EXT", "ALIGN",
    "parse_hex", "round_up", "magic_for", "blob_name", "blob_names",
    "parse_descriptor", "auto_layout", "resolve_layout",
    "format_descriptor", "write_descriptor",
]

DESCRIPTOR_EXT = ".txt"
ALIGN = 0x1000
_SKIP_EXTS = {".txt", ".bin"}
_COLS = re.compile(r"\t+")
_SEPS = re.compile(r"[\\/]")


def parse_hex(s: str) -> int:
    s = s.strip()
    if s[:2].lower() == "0x":
        s = s[2:]
    return int(s, 16)


def round_up(v: int, a: int = ALIGN) -> int:
    return (v + a - 1) & ~(a - 1)


def magic_for(name: str) -> bytes:
    # u-boot scripts are flagged executable
    return MAGIC_EXEC if name == "script" else MAGIC_PART


def _read_blob(p: Path) -> bytes:
    try:
        return p.read_bytes()
    except FileNotFoundError as exc:
        raise MissingSourceError(f"Segment source introuvable: {p}") from exc


def parse_descriptor(path: str | Path) -> List[SegmentSpec]:
    """
    Parse a tab-separated descriptor into segment specs (file order).

    Columns: name, index, base, size, mem, entry, filename (hex, ``0x`` optional).
    Filenames are resolved against the descriptor's directory.
    """
    path = Path(path)
    if not path.is_file():
        raise MissingSourceError(f"Descripteur introuvable: {path}")
    base_dir = path.resolve().parent
    specs: List[SegmentSpec] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        # leading tabs are an empty segment name, keep them
        if not line.strip() or line.startswith("#"):
            continue
        cols = _COLS.split(line.rstrip())
        if len(cols) < 7:
            log.warning("%s:%d: %d colonnes (7 attendues), ligne ignorée", path, lineno, len(cols))
            continue
        name, idx, base, size, mem, entry, fname = cols[:7]
        src = base_dir / fname.strip()
        specs.append(SegmentSpec(
            name=name,
            data=_read_blob(src),
            index=parse_hex(idx),
            base_addr=parse_hex(base),
            part_size=parse_hex(size),
            mem_addr=parse_hex(mem),
            entry_addr=parse_hex(entry),
            magic=magic_for(name),
            filename=str(src),
        ))
    return specs


def auto_layout(prefix: str | Path) -> List[SegmentSpec]:
    """
    Build specs from extracted blobs: every file of a directory, or the files
    next to `prefix` whose name starts with its base name.
    """
    prefix = Path(prefix)
    if prefix.is_dir():
        folder, stem = prefix, ""
    else:
        folder, stem = prefix.resolve().parent, prefix.name
    if not folder.is_dir():
        raise MissingSourceError(f"Dossier introuvable: {folder}")

    files = sorted(
        p for p in folder.iterdir()
        if p.is_file() and p.name.startswith(stem) and p.suffix.lower() not in _SKIP_EXTS
    )
    if not files:
        raise MissingSourceError(f"No blobs found for auto layout: {prefix}")

    specs: List[SegmentSpec] = []
    for idx, p in enumerate(files):
        data = _read_blob(p)
        name = p.name.split(".", 1)[1] if "." in p.name else p.name
        specs.append(SegmentSpec(
            name=name,
            data=data,
            index=idx,
            part_size=round_up(len(data)),
            magic=magic_for(name),
            filename=str(p),
        ))
    return specs


def resolve_layout(source: str | Path) -> List[SegmentSpec]:
    """Descriptor (``.txt``) or file prefix / directory → ordered specs."""
    source = Path(source)
    if source.suffix.lower() == DESCRIPTOR_EXT:
        return parse_descriptor(source)
    return auto_layout(source)


def blob_name(prefix: str, name: str) -> str:
    """File name of an extracted segment; path separators in `name` are neutralized."""
    return f"{prefix}.{_SEPS.sub('_', name)}"


def blob_names(segments: Sequence[Segment], prefix: str) -> List[str]:
    """
    One file name per segment, in stream order. A name already taken (or the
    descriptor's own) gets the segment position appended.
    """
    taken = {f"{prefix}{DESCRIPTOR_EXT}"}
    names: List[str] = []
    for i, s in enumerate(segments):
        fname = blob_name(prefix, s.name)
        while fname in taken:
            fname = f"{fname}_{i}"
        taken.add(fname)
        names.append(fname)
    return names


def format_descriptor(segments: Sequence[Segment], prefix: str) -> str:
    lines = []
    for s, fname in zip(segments, blob_names(segments, prefix)):
        h = s.header
        lines.append(
            f"{h.name}\t\t0x{h.index:02x}\t0x{h.base_addr:08x}\t0x{h.part_size:08x}"
            f"\t0x{h.mem_addr:08x}\t0x{h.entry_addr:08x}\t{fname}"
        )
    return "\n".join(lines) + ("\n" if lines else "")


def write_descriptor(segments: Sequence[Segment], path: str | Path, prefix: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_descriptor(segments, prefix), encoding="utf-8")
    return path
