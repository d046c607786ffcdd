"""Reading the module catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

import yaml

from .config import ConfigError


def read_module_list(list_path: Path) -> List[Path]:
    """Return absolute module paths listed in ``list_path``.

    The file holds either a YAML list of paths or a mapping with a ``modules``
    list. Relative entries are resolved against the list file's directory.
    """
    if not list_path.is_file():
        raise FileNotFoundError(f"Module list not found: {list_path}")
    try:
        data: Any = yaml.safe_load(list_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse module list {list_path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("modules")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"Module list {list_path} must contain a list of paths")

    base = list_path.parent.resolve()
    modules: List[Path] = []
    seen = set()
    for entry in data:
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigError(f"Module list {list_path} contains an invalid entry: {entry!r}")
        path = (base / entry.strip()).resolve()
        if path in seen:
            continue
        seen.add(path)
        modules.append(path)
    return modules


__all__ = ["read_module_list"]
