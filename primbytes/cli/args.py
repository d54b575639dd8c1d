# primbytes/cli/args.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Optional, Tuple

from primbytes.common.config import DEFAULTS, CliConfig
from primbytes.core.errors import UnsupportedTypeError
from primbytes.model.kinds import CHAR, DOUBLE, FLOAT, KINDS, Primitive, normalize_kind


# ---------------- value parsing (CLI-local) ----------------

def hex_bytes(text: str) -> bytes:
    """argparse type: '00 00 01 00', '00000100' or '0x00000100' -> bytes."""
    s = text.strip()
    if s.lower().startswith("0x"):
        s = s[2:]
    s = s.replace(":", "").replace("_", "")
    try:
        return bytes.fromhex(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid hex bytes '{text}'") from None


def kind_name(text: str) -> str:
    try:
        return normalize_kind(text)
    except UnsupportedTypeError:
        raise argparse.ArgumentTypeError(
            f"Unknown kind '{text}' (use one of: {', '.join(KINDS)})"
        ) from None


def parse_value(kind: str, text: str) -> Any:
    """
    Cast a command-line literal for the given kind.

    Integers accept 0x/0o/0b prefixes, floats accept nan/inf, chars accept a
    single character or a numeric code unit.
    """
    if kind in (DOUBLE, FLOAT):
        return float(text)
    if kind == CHAR and len(text) == 1:
        return text
    return int(text, 0)


def tagged_value(text: str) -> Primitive:
    """argparse type: 'KIND:VALUE' -> Primitive."""
    kind_txt, sep, value_txt = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected KIND:VALUE, got '{text}'")
    kind = kind_name(kind_txt)
    try:
        return Primitive(kind, parse_value(kind, value_txt))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid {kind} literal '{value_txt}'") from None


def field_assignment(text: str) -> Tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    return name, value


# ---------------- argparse ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="primbytes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr.")
    parser.add_argument("--log-file", type=Path, default=None, help="Also append logs to this file.")
    parser.add_argument(
        "--sep",
        default=DEFAULTS.hex_separator,
        help="Separator between printed hex bytes (default: space).",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("encode", help="Encode one value.")
    p.add_argument("kind", type=kind_name)
    p.add_argument("value")

    p = sub.add_parser("decode", help="Decode one value from hex bytes.")
    p.add_argument("kind", type=kind_name)
    p.add_argument("hex", type=hex_bytes)

    p = sub.add_parser("pair", help="Encode a pair of KIND:VALUE elements.")
    p.add_argument("first", type=tagged_value)
    p.add_argument("second", type=tagged_value)

    p = sub.add_parser("unpair", help="Decode a pair of the given kinds.")
    p.add_argument("first", type=kind_name)
    p.add_argument("second", type=kind_name)
    p.add_argument("hex", type=hex_bytes)

    layout_file = argparse.ArgumentParser(add_help=False)
    layout_file.add_argument(
        "--file",
        type=Path,
        default=Path(DEFAULTS.layouts_path),
        help=f"Layout metadata (default: {DEFAULTS.layouts_path}).",
    )

    sub.add_parser("layouts", parents=[layout_file], help="List record layouts.")

    p = sub.add_parser("unpack", parents=[layout_file], help="Split hex bytes into records.")
    p.add_argument("layout")
    p.add_argument("hex", type=hex_bytes)

    p = sub.add_parser("pack", parents=[layout_file], help="Pack NAME=VALUE fields as one record.")
    p.add_argument("layout")
    p.add_argument("fields", type=field_assignment, nargs="+")

    return parser


def parse_args(argv: Optional[list[str]] = None) -> Tuple[argparse.Namespace, CliConfig]:
    args = build_parser().parse_args(argv)
    cfg = CliConfig(
        layouts_path=getattr(args, "file", Path(DEFAULTS.layouts_path)),
        log_file=args.log_file,
        verbose=bool(args.verbose),
        separator=args.sep,
    )
    return args, cfg
