"""Serialise example values into the literal syntax shown in the docs."""

from __future__ import annotations

from typing import Any, Mapping

from ..lib import LiteralExpression, Package

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}


class UnsupportedValueError(RuntimeError):
    """Raised when an example value falls outside the supported value model."""


def pretty_print(value: Any) -> str:
    """Render strings, numbers, booleans, null, lists and mappings."""
    if isinstance(value, LiteralExpression):
        return value.text
    if isinstance(value, Package):
        return str(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return '"' + "".join(_ESCAPES.get(char, char) for char in value) + '"'
    if isinstance(value, (list, tuple)):
        if not value:
            return "[ ]"
        return "[ " + " ".join(pretty_print(item) for item in value) + " ]"
    if isinstance(value, Mapping):
        if not value:
            return "{ }"
        entries = (f"{key} = {pretty_print(value[key])};" for key in sorted(value, key=str))
        return "{ " + " ".join(entries) + " }"
    raise UnsupportedValueError(f"Cannot render example value of type {type(value).__name__}")


__all__ = ["UnsupportedValueError", "pretty_print"]
