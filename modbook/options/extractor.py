"""Option tree classification and flattening."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple, Union

from ..lib import OPTION_MARKER
from ..logging import get_logger
from ..models import OptionRecord
from .pretty import pretty_print

NONE_PLACEHOLDER = "<none>"

logger = get_logger("options")


@dataclass(frozen=True)
class OptionNode:
    """An option declaration found in a module's option tree."""

    path: Tuple[str, ...]
    declaration: Mapping[str, Any]


@dataclass
class CategoryNode:
    """A nested group of options."""

    path: Tuple[str, ...]
    children: Dict[str, "OptionTreeNode"] = field(default_factory=dict)


OptionTreeNode = Union[OptionNode, CategoryNode]


def is_option(value: Any) -> bool:
    """Return True when ``value`` carries the option marker."""
    return isinstance(value, Mapping) and value.get("_type") == OPTION_MARKER


def build_option_tree(raw: Mapping[str, Any], path: Tuple[str, ...] = ()) -> CategoryNode:
    """Classify every node of a raw option mapping exactly once."""
    node = CategoryNode(path=path)
    for key in sorted(raw, key=str):
        value = raw[key]
        child_path = path + (str(key),)
        if is_option(value):
            node.children[str(key)] = OptionNode(path=child_path, declaration=value)
        elif isinstance(value, Mapping):
            node.children[str(key)] = build_option_tree(value, child_path)
        else:
            logger.debug("Skipping non-option value at %s", ".".join(child_path))
    return node


def extract_options(tree: CategoryNode) -> List[OptionRecord]:
    """Flatten an option tree into records ordered lexically by path."""
    records: List[OptionRecord] = []
    _collect(tree, records)
    return records


def document_option(node: OptionNode) -> OptionRecord:
    declaration = node.declaration
    description = declaration.get("description")
    if description is None:
        description = NONE_PLACEHOLDER
    else:
        description = str(description).replace("\n", " ")

    example = None
    if "example" in declaration:
        example = pretty_print(declaration["example"])

    return OptionRecord(
        path=node.path,
        name=".".join(node.path),
        type_description=_type_description(declaration.get("type")),
        description=description,
        visible=bool(declaration.get("visible", True)),
        example=example,
    )


def _collect(node: CategoryNode, records: List[OptionRecord]) -> None:
    for child in node.children.values():
        if isinstance(child, OptionNode):
            records.append(document_option(child))
        else:
            _collect(child, records)


def _type_description(option_type: Any) -> str:
    if option_type is None:
        return NONE_PLACEHOLDER
    if isinstance(option_type, str):
        return option_type
    if isinstance(option_type, Mapping):
        described = option_type.get("description")
        return str(described) if described is not None else NONE_PLACEHOLDER
    described = getattr(option_type, "description", None)
    return str(described) if described is not None else NONE_PLACEHOLDER
