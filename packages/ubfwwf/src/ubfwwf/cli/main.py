from __future__ import annotations
import sys

from . import build, list_parts, split, verify, wizard

COMMANDS = {
    "split": split.main,
    "build": build.main,
    "list": list_parts.main,
    "verify": verify.main,
    "wizard": wizard.main,
}

USAGE = "usage: ubfw {split,build,list,verify,wizard} ...  (no arguments: wizard)"

def main(argv=None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        return wizard.main([])
    cmd, rest = argv[0], argv[1:]
    if cmd in ("-h", "--help"):
        print(USAGE)
        return 0
    if cmd in ("--version",):
        from ubfwwf import __version__
        print(__version__)
        return 0
    fn = COMMANDS.get(cmd)
    if fn is None:
        print(USAGE, file=sys.stderr)
        return 2
    return fn(rest)

if __name__ == "__main__":
    sys.exit(main())
