"""Configuration loading for modbook (.modbook.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".modbook.yml"
DEFAULT_MODULE_LIST = Path("system") / "modules" / "module-list.yml"
DEFAULT_ROOT_SEGMENTS = 2
DEFAULT_BUILDER = ["mdbook", "build"]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ModbookConfig:
    """Represents the settings defined in .modbook.yml."""

    root: Path
    module_list: Path
    output_dir: Path
    root_segments: int = DEFAULT_ROOT_SEGMENTS
    title: str = "Modules"
    book_title: Optional[str] = None
    provider: Optional[str] = None
    builder: List[str] = field(default_factory=lambda: list(DEFAULT_BUILDER))
    build: bool = True
    jobs: Optional[int] = None
    show_examples: bool = False
    include_hidden: bool = True


def default_config(root: Path) -> ModbookConfig:
    root = root.resolve()
    return ModbookConfig(
        root=root,
        module_list=root / DEFAULT_MODULE_LIST,
        output_dir=root / "book",
    )


def load_config(config_path: Path) -> ModbookConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = default_config(root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    module_list = _as_str(data.get("module_list"))
    if module_list:
        config.module_list = root / module_list

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = root / output_dir

    if "root_segments" in data:
        root_segments = _as_int(data.get("root_segments"))
        if root_segments is None or root_segments < 0:
            raise ConfigError("root_segments must be a non-negative integer")
        config.root_segments = root_segments

    title = _as_str(data.get("title"))
    if title:
        config.title = title

    book_data = _as_dict(data.get("book"))
    config.book_title = _as_str(book_data.get("title")) if book_data else None

    config.provider = _as_str(data.get("provider"))

    if "builder" in data:
        builder = _as_str_list(data.get("builder"))
        if not builder:
            raise ConfigError("builder must name a command")
        config.builder = builder

    build = _as_bool(data.get("build"))
    if build is not None:
        config.build = build

    if "jobs" in data:
        jobs = _as_int(data.get("jobs"))
        if jobs is None or jobs < 1:
            raise ConfigError("jobs must be a positive integer")
        config.jobs = jobs

    render_data = _as_dict(data.get("render"))
    if render_data:
        show_examples = _as_bool(render_data.get("show_examples"))
        if show_examples is not None:
            config.show_examples = show_examples
        include_hidden = _as_bool(render_data.get("include_hidden"))
        if include_hidden is not None:
            config.include_hidden = include_hidden

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
