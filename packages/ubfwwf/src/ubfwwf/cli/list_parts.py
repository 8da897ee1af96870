from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, resolve_key
from ubfwcore.errors import FirmwareError
from ubfwwf.ops import ListCfg, list_image

def _fmt_flag(v) -> str:
    return {True: "OK", False: "BAD", None: "unknown"}.get(v, str(v))

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="ubfw — List segments of a firmware image")
    p.add_argument("image")
    p.add_argument("--json", action="store_true", help="Sortie JSON")
    add_common_args(p, key=True)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        info = list_image(ListCfg(image=Path(args.image), public_key=resolve_key(args.key)))
    except (FirmwareError, OSError, ValueError) as e:
        logging.error("Échec list %s: %s", args.image, e)
        return 2

    if args.json:
        print(json.dumps(info, ensure_ascii=False, indent=2))
        return 0
    print(f"version: {info['version']}")
    for s in info["segments"]:
        print(f"  {s['name']:<16} {s['magic']}  idx=0x{s['index']:02x}  size={s['size']:>10}"
              f"  part=0x{s['part_size']:08x}  crc={_fmt_flag(s['crc_valid'])}")
    print(f"signature: {_fmt_flag(info['signature_valid'])}  rsa: {_fmt_flag(info['rsa'])}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
