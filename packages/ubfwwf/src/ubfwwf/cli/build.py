from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args
from ubfwcodec import CodecConfig
from ubfwcore.errors import FirmwareError
from ubfwwf.ops import BuildCfg, build_image

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="ubfw — Build firmware image from descriptor or prefix")
    p.add_argument("layout", help="Descripteur .txt, préfixe des blobs, ou dossier")
    p.add_argument("-o", "--output", default="firmware.bin")
    # --version est capté par main avant la dispatch, ici il vise le texte firmware
    p.add_argument("-V", "--version", "--fw-version", dest="fw_version", default="UNKNOWN",
                   help="Texte de version (≤ 255 octets)")
    p.add_argument("--strict", action="store_true",
                   help="Refuser nom/version trop longs au lieu de tronquer")
    add_common_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        cfg = BuildCfg(
            layout=Path(args.layout),
            output=Path(args.output),
            version=args.fw_version,
            codec=CodecConfig(field_overflow="error" if args.strict else "truncate"),
        )
        build_image(cfg)
    except (FirmwareError, OSError, ValueError) as e:
        logging.error("Échec build %s: %s", args.layout, e)
        return 2
    return 0

if __name__ == "__main__":
    sys.exit(main())
