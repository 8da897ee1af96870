from __future__ import annotations
import os
from pathlib import Path


def read_image(path: str | Path) -> bytes:
    """Read a firmware image from disk (raw bytes)."""
    return Path(path).read_bytes()


def write_image(payload: bytes, path: str | Path) -> None:
    """Atomic write to target path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with open(tmp, "wb") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, p)
