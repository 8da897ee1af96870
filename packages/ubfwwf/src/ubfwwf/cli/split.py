from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, resolve_key
from ubfwcore.errors import FirmwareError
from ubfwwf.ops import SplitCfg, split_image

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="ubfw — Split firmware image -> segments + descriptor")
    p.add_argument("image", help="Image firmware (.bin)")
    p.add_argument("-o", "--output", dest="prefix", default=None,
                   help="Préfixe de sortie (défaut: version du firmware)")
    p.add_argument("--out-dir", default=None, help="Dossier de sortie (défaut: .)")
    add_common_args(p, key=True)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        cfg = SplitCfg(
            image=Path(args.image),
            prefix=args.prefix,
            out_dir=Path(args.out_dir) if args.out_dir else None,
            public_key=resolve_key(args.key),
        )
        res = split_image(cfg)
    except (FirmwareError, OSError, ValueError) as e:
        logging.error("Échec split %s: %s", args.image, e)
        return 2
    if not res["all_valid"]:
        logging.warning("Extraction terminée malgré des sommes de contrôle invalides")
    return 0

if __name__ == "__main__":
    sys.exit(main())
