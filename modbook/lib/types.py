"""Option type descriptors exposed to modules as ``lib.types``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class OptionType:
    """A named option type carrying a human readable description."""

    name: str
    description: str


def _quote(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Types:
    """Namespace of the option types modules may declare."""

    str = OptionType("str", "string")
    bool = OptionType("bool", "boolean")
    int = OptionType("int", "signed integer")
    float = OptionType("float", "floating point number")
    path = OptionType("path", "path")
    package = OptionType("package", "package")
    lines = OptionType("lines", 'strings concatenated with "\\n"')
    port = OptionType("port", "16 bit unsigned integer; between 0 and 65535 (both inclusive)")
    attrs = OptionType("attrs", "attribute set")
    anything = OptionType("anything", "anything")
    submodule = OptionType("submodule", "submodule")

    @staticmethod
    def list_of(element: OptionType) -> OptionType:
        return OptionType("listOf", f"list of {element.description}")

    @staticmethod
    def attrs_of(element: OptionType) -> OptionType:
        return OptionType("attrsOf", f"attribute set of {element.description}")

    @staticmethod
    def null_or(element: OptionType) -> OptionType:
        return OptionType("nullOr", f"null or {element.description}")

    @staticmethod
    def either(first: OptionType, second: OptionType) -> OptionType:
        return OptionType("either", f"{first.description} or {second.description}")

    @staticmethod
    def enum(values: Iterable[Any]) -> OptionType:
        return OptionType("enum", "one of " + ", ".join(_quote(value) for value in values))


types = Types()

__all__ = ["OptionType", "Types", "types"]
