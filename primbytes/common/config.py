# primbytes/common/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class CodecDefaults:
    layouts_path:     str = "metadata/layouts.yml"
    hex_separator:    str = " "
    log_format:       str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULTS = CodecDefaults()


@dataclass(frozen=True)
class CliConfig:
    layouts_path: Path = Path(DEFAULTS.layouts_path)
    log_file: Optional[Path] = None
    verbose: bool = False
    separator: str = DEFAULTS.hex_separator
