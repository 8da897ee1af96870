from __future__ import annotations
import re
from pathlib import Path

from ubfwcodec import write_image

def atomic_write(path: Path | str, data: bytes) -> None:
    write_image(data, path)

def safe_prefix(text: str, fallback: str) -> str:
    """Version text → usable file prefix (no path separators, no blanks)."""
    s = re.sub(r"[\\/\s]+", "_", text.strip()).strip("._")
    return s or fallback
