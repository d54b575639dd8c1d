# primbytes/cli/main.py
from __future__ import annotations

from typing import Optional

from primbytes.core.errors import CodecError

from primbytes.cli.args import parse_args
from primbytes.cli.commands import (
    configure_logging,
    cmd_encode,
    cmd_decode,
    cmd_pair,
    cmd_unpair,
    cmd_layouts,
    cmd_unpack,
    cmd_pack,
)

_COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "pair": cmd_pair,
    "unpair": cmd_unpair,
    "layouts": cmd_layouts,
    "unpack": cmd_unpack,
    "pack": cmd_pack,
}


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args, cfg = parse_args(argv)
        configure_logging(cfg)

        handler = _COMMANDS.get(args.cmd)
        if handler is None:
            return 2
        return handler(args, cfg)
    except CodecError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
