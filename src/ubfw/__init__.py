"""ubfw — unified API
Install once, import one namespace:

    pip install -e .

Usage:

    import ubfw
    fw = ubfw.parse_firmware(open("fw.bin", "rb").read())
    blob = ubfw.build_firmware([s.to_spec() for s in fw.segments], fw.version)

Or detailed modules:

    from ubfw import codec, core, data, wf
"""

__version__ = "0.4.0"

# Bring subpackages into a single namespace
import ubfwcore as core
import ubfwcodec as codec
import ubfwdata as data
import ubfwwf as wf

# High-level convenience re-exports (top-level functions)
from ubfwcodec import (
    CodecConfig,
    Container,
    SegmentSpec,
    build_firmware,
    crc32,
    load_public_key,
    locate_header,
    parse_firmware,
    read_image,
    write_image,
)
from ubfwcore.errors import (
    FirmwareError,
    HeaderNotFoundError,
    TruncatedInputError,
    UnknownSegmentMagicError,
    BadSignatureMagicError,
    FieldOverflowError,
    MissingSourceError,
)
from ubfwdata import resolve_layout, parse_descriptor, auto_layout
from ubfwwf import split_image, build_image, list_image, verify_image

__all__ = [
    # sub-namespaces
    "codec", "core", "data", "wf",
    # convenience
    "CodecConfig", "Container", "SegmentSpec",
    "parse_firmware", "build_firmware", "crc32", "load_public_key", "locate_header",
    "read_image", "write_image",
    "FirmwareError", "HeaderNotFoundError", "TruncatedInputError",
    "UnknownSegmentMagicError", "BadSignatureMagicError",
    "FieldOverflowError", "MissingSourceError",
    "resolve_layout", "parse_descriptor", "auto_layout",
    "split_image", "build_image", "list_image", "verify_image",
    "__version__",
]
