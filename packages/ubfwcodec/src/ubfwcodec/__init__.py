# packages/ubfwcodec/src/ubfwcodec/__init__.py
from __future__ import annotations

"""ubfw - codec de conteneurs firmware OPEN/PART/END. (public surface).

Expose la config publique, les records et la façade parse/build.
"""

__version__ = "0.4.0"

# container avant config : config lit les constantes de layout
from .container import (
    Container,
    Segment,
    SegmentHeader,
    SegmentSpec,
    Signature,
    decode_firmware,
    encode_container,
    load_public_key,
    locate_header,
    read_image,
    write_image,
)
from .checksum import crc32
from .config import CodecConfig
from .codec import parse_firmware, build_firmware

__all__ = [
    "__version__",
    "CodecConfig",
    "Container", "Segment", "SegmentHeader", "SegmentSpec", "Signature",
    "crc32",
    "locate_header", "decode_firmware", "encode_container", "load_public_key",
    "read_image", "write_image",
    "parse_firmware", "build_firmware",
]
