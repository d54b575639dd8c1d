# primbytes/layout/loader.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from primbytes.core.errors import LayoutError
from primbytes.utils.hashing import sha256_file
from .record import RecordLayout


class LayoutLoader:
    """
    Loads record layouts from a YAML file.

        layouts:
          point:
            fields:
              - {name: x, type: double}
              - {name: y, type: double}

    After calling load(), exposes:
        self.layouts     : dict[str, RecordLayout]
        self.file_hash   : sha256 of the file
    """

    def __init__(self, path: str | Path, *, logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.layouts: Dict[str, RecordLayout] = {}
        self.file_hash: Optional[str] = None
        self._log = logger or logging.getLogger(__name__)

    def _load_yaml(self) -> dict:
        if not self.path.exists():
            raise LayoutError(f"Missing layout file: {self.path}", hint="pass --file")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise LayoutError(f"Invalid YAML in {self.path}: {e}") from e

    def load(self) -> Dict[str, RecordLayout]:
        self.layouts.clear()
        self.file_hash = sha256_file(self.path) if self.path.exists() else None
        data = self._load_yaml()

        layouts = data.get("layouts") if isinstance(data, dict) else None
        if not isinstance(layouts, dict):
            raise LayoutError(f"{self.path.name} is missing 'layouts' root node")

        for name, info in layouts.items():
            if not isinstance(info, dict):
                raise LayoutError(f"Layout '{name}' entry must be a mapping")

            fields = info.get("fields")
            if not isinstance(fields, list) or not fields:
                raise LayoutError(f"Layout '{name}' must define a non-empty 'fields' list")

            pairs = []
            for i, fdef in enumerate(fields):
                if not isinstance(fdef, dict):
                    raise LayoutError(f"Layout '{name}' field #{i} must be a mapping")
                fname = fdef.get("name")
                ftype = fdef.get("type")
                if not fname:
                    raise LayoutError(f"Layout '{name}' field #{i} is missing 'name'")
                if not ftype:
                    raise LayoutError(f"Layout '{name}' field '{fname}' is missing 'type'")
                pairs.append((str(fname), str(ftype)))

            self.layouts[str(name)] = RecordLayout(str(name), pairs, logger=self._log)

        self._log.debug(
            "Loaded %d layouts from %s (sha256=%s)",
            len(self.layouts),
            self.path,
            self.file_hash,
        )
        return self.layouts

    def get(self, name: str) -> RecordLayout:
        if name not in self.layouts:
            known = ", ".join(sorted(self.layouts)) or "(none)"
            raise LayoutError(f"Unknown layout: {name}", hint=f"known layouts: {known}")
        return self.layouts[name]
