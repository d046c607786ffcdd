"""Synthetic context handed to modules during evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Tuple

from ..lib import Provider

PLACEHOLDER_FIELDS: Tuple[str, ...] = (
    "config",
    "utils",
    "base_modules",
    "extra_modules",
    "modules",
    "options",
    "services",
)
CONTEXT_FIELDS: Tuple[str, ...] = ("pkgs", "lib") + PLACEHOLDER_FIELDS


class ModuleEvaluationError(RuntimeError):
    """Raised when a module cannot be evaluated against the synthetic context."""


class UnresolvedPlaceholderError(ModuleEvaluationError):
    """Raised when a module reads a value from an empty placeholder field."""


class Unresolved:
    """Empty stand-in for a context field that has no real value.

    It behaves as an empty read-only mapping: iterating, sizing, membership
    tests and ``get`` with a default all succeed. Reading a key or attribute
    raises :class:`UnresolvedPlaceholderError` at that point.
    """

    __slots__ = ("_field",)

    def __init__(self, field_name: str) -> None:
        self._field = field_name

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        self._fail(name)

    def __getitem__(self, key: Any) -> Any:
        self._fail(key)

    def get(self, key: Any, default: Any = None) -> Any:
        return default

    def keys(self) -> Iterable[Any]:
        return ()

    def values(self) -> Iterable[Any]:
        return ()

    def items(self) -> Iterable[Any]:
        return ()

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __contains__(self, key: object) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<unresolved {self._field}>"

    def _fail(self, key: Any) -> None:
        raise UnresolvedPlaceholderError(
            f"'{self._field}.{key}' was read, but '{self._field}' is an empty placeholder"
        )


def _placeholder(name: str) -> Any:
    return field(default_factory=lambda: Unresolved(name))


@dataclass(frozen=True)
class SyntheticContext:
    """Every input a module may declare, with placeholders for runtime values."""

    pkgs: Any
    lib: Any
    config: Any = _placeholder("config")
    utils: Any = _placeholder("utils")
    base_modules: Any = _placeholder("base_modules")
    extra_modules: Any = _placeholder("extra_modules")
    modules: Any = _placeholder("modules")
    options: Any = _placeholder("options")
    services: Any = _placeholder("services")

    @classmethod
    def from_provider(cls, provider: Provider) -> "SyntheticContext":
        return cls(pkgs=provider.pkgs, lib=provider.lib)

    def resolve(self, name: str) -> Any:
        if name not in CONTEXT_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def arguments(self, names: Iterable[str]) -> Dict[str, Any]:
        return {name: self.resolve(name) for name in names}


__all__ = [
    "CONTEXT_FIELDS",
    "ModuleEvaluationError",
    "PLACEHOLDER_FIELDS",
    "SyntheticContext",
    "Unresolved",
    "UnresolvedPlaceholderError",
]
