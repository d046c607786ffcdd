"""Shared library and package set handed to modules during evaluation."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, Dict

from ..config import ConfigError
from .packages import Package, PackageSet
from .types import OptionType, Types, types

OPTION_MARKER = "option"
DEFAULT_PROVIDER = "modbook.lib:default_provider"

_MISSING = object()


@dataclass(frozen=True)
class LiteralExpression:
    """Example or default given as source text rather than a value."""

    text: str


def mk_option(
    *,
    type: OptionType | None = None,
    description: str | None = None,
    default: Any = _MISSING,
    example: Any = _MISSING,
    visible: bool | None = None,
) -> Dict[str, Any]:
    """Declare an option; only the supplied fields are recorded."""
    option: Dict[str, Any] = {"_type": OPTION_MARKER}
    if type is not None:
        option["type"] = type
    if description is not None:
        option["description"] = description
    if default is not _MISSING:
        option["default"] = default
    if example is not _MISSING:
        option["example"] = example
    if visible is not None:
        option["visible"] = visible
    return option


def mk_enable_option(name: str) -> Dict[str, Any]:
    """Declare the conventional boolean ``enable`` option."""
    return mk_option(
        type=types.bool,
        default=False,
        example=True,
        description=f"Whether to enable {name}.",
    )


def literal_expression(text: str) -> LiteralExpression:
    return LiteralExpression(text)


class Library:
    """The ``lib`` argument: option constructors and type descriptors."""

    types: Types = types

    mk_option = staticmethod(mk_option)
    mk_enable_option = staticmethod(mk_enable_option)
    literal_expression = staticmethod(literal_expression)

    def __repr__(self) -> str:
        return "Library()"


@dataclass(frozen=True)
class Provider:
    """Supplies the package set and shared library for the synthetic context."""

    pkgs: Any
    lib: Any


def default_provider() -> Provider:
    return Provider(pkgs=PackageSet(), lib=Library())


def load_provider(spec: str | None) -> Provider:
    """Resolve ``package.module:attribute`` into a :class:`Provider`.

    The attribute may be a Provider instance or a zero-argument callable
    returning one.
    """
    target = spec or DEFAULT_PROVIDER
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError(f"Provider must look like 'package.module:attribute', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Unable to import provider module '{module_name}': {exc}") from exc
    try:
        obj = getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigError(f"Provider module '{module_name}' has no attribute '{attribute}'") from exc

    if not isinstance(obj, Provider) and callable(obj):
        obj = obj()
    if not isinstance(obj, Provider):
        raise ConfigError(f"Provider '{target}' did not produce a Provider instance")
    return obj


__all__ = [
    "DEFAULT_PROVIDER",
    "Library",
    "LiteralExpression",
    "OPTION_MARKER",
    "OptionType",
    "Package",
    "PackageSet",
    "Provider",
    "Types",
    "default_provider",
    "literal_expression",
    "load_provider",
    "mk_enable_option",
    "mk_option",
    "types",
]
