from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, resolve_key
from ubfwcore.errors import FirmwareError
from ubfwwf.ops import VerifyCfg, verify_image

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="ubfw — Verify checksums and signature (exit 0 iff valid)")
    p.add_argument("image")
    add_common_args(p, key=True)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        ok = verify_image(VerifyCfg(image=Path(args.image), public_key=resolve_key(args.key)))
    except (FirmwareError, OSError, ValueError) as e:
        logging.error("Échec verify %s: %s", args.image, e)
        return 1
    logging.info("%s: %s", args.image, "OK" if ok else "INVALID")
    return 0 if ok else 1

if __name__ == "__main__":
    sys.exit(main())
