from __future__ import annotations
import argparse, logging, os, sys
from pathlib import Path
from typing import Optional

from ubfwcodec import load_public_key

KEY_ENV = "UBFW_PUBLIC_KEY"

def setup_logging(log_file: Optional[Path], verbose: bool = True) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=log_fmt, datefmt=datefmt, handlers=handlers)

def add_common_args(p: argparse.ArgumentParser, key: bool = False) -> None:
    if key:
        p.add_argument("--key", default=None,
                       help=f"Clé publique RSA (PEM) pour le bloc signature; défaut: ${KEY_ENV}")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", "-d", action="store_true", help="Logs DEBUG (progression par segment)")

def key_path(arg: Optional[str]) -> Optional[Path]:
    """--key wins, then $UBFW_PUBLIC_KEY, else None. Only place the env is read."""
    v = arg or os.getenv(KEY_ENV)
    return Path(v) if v else None

def resolve_key(arg: Optional[str]):
    p = key_path(arg)
    if p is None:
        return None
    logging.debug("Clé publique: %s", p)
    return load_public_key(p.read_bytes())
