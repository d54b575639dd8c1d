# primbytes/cli/commands.py
from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Any

from primbytes.common.config import DEFAULTS, CliConfig
from primbytes.layout import LayoutLoader
from primbytes.model.codec import (
    decode_primitive, double_to_bits, encode_primitive, float_to_bits,
)
from primbytes.model.kinds import CHAR, DOUBLE, FLOAT
from primbytes.model.pair import pair_from_bytes, pair_to_bytes

from primbytes.cli.args import parse_value


log = logging.getLogger(__name__)


# ---------------- Logging ----------------

def configure_logging(cfg: CliConfig) -> None:
    root = logging.getLogger()
    if cfg.verbose:
        logging.basicConfig(level=logging.DEBUG, format=DEFAULTS.log_format)
        root.setLevel(logging.DEBUG)
    if cfg.log_file is not None:
        configure_file_logging(cfg.log_file)


def configure_file_logging(app_log_path: Path) -> None:
    """
    Add a file handler to the root logger (idempotent).
    Kept in CLI (presentation-layer concern).
    """
    root = logging.getLogger()
    app_log_path.parent.mkdir(parents=True, exist_ok=True)
    target = str(app_log_path.resolve())

    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
            return

    fh = logging.FileHandler(app_log_path, encoding="utf-8", delay=True)
    fh.setLevel(logging.INFO)
    fh.setFormatter(logging.Formatter(DEFAULTS.log_format))
    root.addHandler(fh)

    if root.level > logging.INFO:
        root.setLevel(logging.INFO)


# ---------------- Formatting ----------------

def format_hex(raw: bytes, sep: str = DEFAULTS.hex_separator) -> str:
    return sep.join(f"{b:02x}" for b in raw)


def format_value(kind: str, value: Any) -> str:
    if kind == CHAR:
        return f"{value!r} (U+{ord(value):04X})"
    if kind == DOUBLE and math.isnan(value):
        return f"nan (bits=0x{double_to_bits(value) & 0xFFFFFFFFFFFFFFFF:016x})"
    if kind == FLOAT and math.isnan(value):
        return f"nan (bits=0x{float_to_bits(value) & 0xFFFFFFFF:08x})"
    return repr(value)


def format_record(rec: dict, kinds: dict) -> str:
    return ", ".join(f"{k}={format_value(kinds[k], v)}" for k, v in rec.items())


# ---------------- Commands ----------------

def cmd_encode(args: argparse.Namespace, cfg: CliConfig) -> int:
    try:
        value = parse_value(args.kind, args.value)
    except ValueError:
        print(f"ERROR: invalid {args.kind} literal '{args.value}'")
        return 2
    raw = encode_primitive(args.kind, value)
    log.info("encode %s %r -> %d bytes", args.kind, value, len(raw))
    print(format_hex(raw, cfg.separator))
    return 0


def cmd_decode(args: argparse.Namespace, cfg: CliConfig) -> int:
    value = decode_primitive(args.kind, args.hex)
    log.info("decode %s from %d bytes", args.kind, len(args.hex))
    print(format_value(args.kind, value))
    return 0


def cmd_pair(args: argparse.Namespace, cfg: CliConfig) -> int:
    raw = pair_to_bytes((args.first, args.second))
    print(format_hex(raw, cfg.separator))
    return 0


def cmd_unpair(args: argparse.Namespace, cfg: CliConfig) -> int:
    a, b = pair_from_bytes(args.hex, args.first, args.second)
    print(format_value(args.first, a))
    print(format_value(args.second, b))
    return 0


def _load_layouts(cfg: CliConfig) -> LayoutLoader:
    loader = LayoutLoader(cfg.layouts_path)
    loader.load()
    return loader


def cmd_layouts(args: argparse.Namespace, cfg: CliConfig) -> int:
    loader = _load_layouts(cfg)
    print(f"File:    {loader.path} (sha256={loader.file_hash})")
    if not loader.layouts:
        print("Layouts: (none)")
        return 0

    print("Layouts:")
    for name, layout in loader.layouts.items():
        fields = " ".join(f"{f.name}:{f.kind}" for f in layout.fields)
        print(f"  - {name} size={layout.size} fields=[{fields}]")
    return 0


def cmd_unpack(args: argparse.Namespace, cfg: CliConfig) -> int:
    layout = _load_layouts(cfg).get(args.layout)
    kinds = {f.name: f.kind for f in layout.fields}
    for i, rec in enumerate(layout.unpack_many(args.hex)):
        print(f"[{i}] {format_record(rec, kinds)}")
    return 0


def cmd_pack(args: argparse.Namespace, cfg: CliConfig) -> int:
    layout = _load_layouts(cfg).get(args.layout)
    kinds = {f.name: f.kind for f in layout.fields}

    values = {}
    for name, text in args.fields:
        if name not in kinds:
            print(f"ERROR: layout '{layout.name}' has no field '{name}'")
            return 2
        try:
            values[name] = parse_value(kinds[name], text)
        except ValueError:
            print(f"ERROR: invalid {kinds[name]} literal '{text}' for field '{name}'")
            return 2

    print(format_hex(layout.pack(values), cfg.separator))
    return 0
