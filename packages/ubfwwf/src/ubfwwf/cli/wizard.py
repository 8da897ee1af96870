from __future__ import annotations
import argparse, logging, sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from .common import setup_logging, add_common_args, resolve_key
from ubfwcore.errors import FirmwareError
from ubfwwf.ops import BuildCfg, SplitCfg, VerifyCfg, build_image, split_image, verify_image

ACTIONS = ("split", "build", "verify")

def _ask_path(console: Console, message: str) -> Path:
    while True:
        p = Path(Prompt.ask(message, console=console))
        if p.exists():
            return p
        console.print(f"[red]Fichier introuvable :[/red] {p}")

def run(console: Optional[Console] = None, key_arg: Optional[str] = None) -> int:
    """Interactive flow; every answer is turned into a typed cfg, then the op runs."""
    console = console or Console()
    act = Prompt.ask("Que voulez-vous faire ?", choices=list(ACTIONS), default="split", console=console)
    if act == "split":
        image = _ask_path(console, "Chemin du firmware.bin")
        prefix = Prompt.ask("Préfixe de sortie (entrée = auto)", default="", console=console)
        res = split_image(SplitCfg(image=image, prefix=prefix or None, public_key=resolve_key(key_arg)))
        console.print(f"[green]Split OK[/green] - {len(res['files'])} parts → {res['descriptor']}")
        return 0
    if act == "build":
        layout = _ask_path(console, "Descripteur .txt ou préfixe")
        output = Prompt.ask("Fichier de sortie", default="firmware.bin", console=console)
        version = Prompt.ask("Version FW", default="UNKNOWN", console=console)
        res = build_image(BuildCfg(layout=layout, output=Path(output), version=version))
        console.print(f"[green]Firmware built[/green] → {res['output']}")
        return 0
    image = _ask_path(console, "Chemin du firmware.bin")
    ok = verify_image(VerifyCfg(image=image, public_key=resolve_key(key_arg)))
    console.print("[green]OK[/green]" if ok else "[red]INVALID[/red]")
    return 0 if ok else 1

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="ubfw — interactive wizard")
    add_common_args(p, key=True)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        return run(key_arg=args.key)
    except (FirmwareError, OSError, ValueError) as e:
        logging.error("Échec wizard: %s", e)
        return 2

if __name__ == "__main__":
    sys.exit(main())
