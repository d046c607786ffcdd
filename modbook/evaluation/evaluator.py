"""Evaluate module definitions against the synthetic context."""

from __future__ import annotations

import hashlib
import importlib.util
import inspect
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from ..logging import get_logger
from .context import (
    CONTEXT_FIELDS,
    ModuleEvaluationError,
    SyntheticContext,
    Unresolved,
    UnresolvedPlaceholderError,
)

PYTHON_SUFFIXES = (".py",)
YAML_SUFFIXES = (".yaml", ".yml")
MODULE_SUFFIXES = PYTHON_SUFFIXES + YAML_SUFFIXES
ENTRY_STEMS = ("default", "index")
README_FILENAME = "README.md"
ENTRY_ATTRIBUTE = "module"


@dataclass
class EvaluatedModule:
    """Raw result of evaluating one module."""

    path: Path
    source: Path
    name: str
    doc_file: Path
    raw_options: Optional[Mapping[str, Any]]


def module_name(path: Path) -> str:
    """Derive a display name; folder-style modules use their folder's name."""
    if path.is_dir():
        return path.name
    if path.stem in ENTRY_STEMS:
        return path.parent.name
    return path.stem


def resolve_entry_file(path: Path) -> Path:
    """Return the file to evaluate for ``path`` (a file or a module folder)."""
    if path.is_file():
        if path.suffix not in MODULE_SUFFIXES:
            raise ModuleEvaluationError(f"{path}: unsupported module file type '{path.suffix}'")
        return path
    if path.is_dir():
        for stem in ENTRY_STEMS:
            for suffix in MODULE_SUFFIXES:
                candidate = path / f"{stem}{suffix}"
                if candidate.is_file():
                    return candidate
        raise ModuleEvaluationError(f"{path}: module folder has no default or index file")
    raise ModuleEvaluationError(f"{path}: module does not exist")


def documentation_file(path: Path, source: Path) -> Path:
    """Locate the file whose leading comment documents the module."""
    if path.is_dir() or source.stem in ENTRY_STEMS:
        readme = source.parent / README_FILENAME
        if readme.is_file():
            return readme
    return source


class ModuleEvaluator:
    """Evaluates modules one at a time; safe to share between worker threads."""

    def __init__(self, context: SyntheticContext) -> None:
        self.context = context
        self.logger = get_logger("evaluation")

    def evaluate(self, path: Path) -> EvaluatedModule:
        source = resolve_entry_file(path)
        if source.suffix in PYTHON_SUFFIXES:
            result = self._evaluate_python(source)
        else:
            result = self._evaluate_yaml(source)
        raw_options = self._raw_options(result, source)
        self.logger.debug(
            "Evaluated %s (%s)", source, "options" if raw_options is not None else "no options"
        )
        return EvaluatedModule(
            path=path,
            source=source,
            name=module_name(path),
            doc_file=documentation_file(path, source),
            raw_options=raw_options,
        )

    def _evaluate_python(self, source: Path) -> Any:
        digest = hashlib.sha1(str(source).encode("utf-8")).hexdigest()[:12]
        spec = importlib.util.spec_from_file_location(f"_modbook_module_{digest}", source)
        if spec is None or spec.loader is None:
            raise ModuleEvaluationError(f"{source}: unable to load Python module")
        namespace = importlib.util.module_from_spec(spec)
        # Class decorators such as dataclass look their module up while it executes.
        sys.modules[spec.name] = namespace
        try:
            spec.loader.exec_module(namespace)
        except Exception as exc:
            raise ModuleEvaluationError(f"{source}: failed to import: {exc}") from exc
        finally:
            sys.modules.pop(spec.name, None)

        entry = getattr(namespace, ENTRY_ATTRIBUTE, None)
        if entry is None:
            options = getattr(namespace, "options", None)
            return {} if options is None else {"options": options}
        if not callable(entry):
            raise ModuleEvaluationError(f"{source}: '{ENTRY_ATTRIBUTE}' must be callable")

        arguments = self._arguments_for(entry, source)
        try:
            return entry(**arguments)
        except UnresolvedPlaceholderError as exc:
            raise UnresolvedPlaceholderError(f"{source}: {exc}") from exc
        except Exception as exc:
            raise ModuleEvaluationError(f"{source}: evaluation failed: {exc}") from exc

    def _arguments_for(self, entry: Callable[..., Any], source: Path) -> Dict[str, Any]:
        try:
            signature = inspect.signature(entry)
        except (TypeError, ValueError) as exc:
            raise ModuleEvaluationError(f"{source}: cannot inspect module parameters") from exc

        requested: list[str] = []
        accepts_any = False
        for parameter in signature.parameters.values():
            if parameter.kind is inspect.Parameter.VAR_KEYWORD:
                accepts_any = True
            elif parameter.kind is inspect.Parameter.VAR_POSITIONAL:
                continue
            elif parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                raise ModuleEvaluationError(
                    f"{source}: parameter '{parameter.name}' must be accepted by keyword"
                )
            elif parameter.name in CONTEXT_FIELDS:
                requested.append(parameter.name)
            elif parameter.default is inspect.Parameter.empty:
                raise ModuleEvaluationError(
                    f"{source}: parameter '{parameter.name}' is not a context field"
                )
        if accepts_any:
            requested.extend(name for name in CONTEXT_FIELDS if name not in requested)
        return self.context.arguments(requested)

    @staticmethod
    def _evaluate_yaml(source: Path) -> Any:
        try:
            loaded = yaml.safe_load(source.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ModuleEvaluationError(f"{source}: failed to parse: {exc}") from exc
        return {} if loaded is None else loaded

    @staticmethod
    def _raw_options(result: Any, source: Path) -> Optional[Mapping[str, Any]]:
        if isinstance(result, Mapping):
            options = result.get("options")
        elif result is not None and not isinstance(result, Unresolved) and hasattr(result, "options"):
            options = result.options
        else:
            raise ModuleEvaluationError(
                f"{source}: module must evaluate to a mapping, got {type(result).__name__}"
            )
        if options is None:
            return None
        if not isinstance(options, Mapping):
            raise ModuleEvaluationError(f"{source}: 'options' must be a mapping")
        return options
