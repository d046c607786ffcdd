"""Navigation tree reconstruction from module locations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..logging import get_logger
from ..models import ModuleRecord

FILLER_SEGMENTS = ("default", "index")
SUMMARY_FILENAME = "SUMMARY.md"

Address = Tuple[str, ...]


class InvalidAddressError(RuntimeError):
    """Raised when a module location cannot be mapped to a tree address."""


class AddressCollisionError(RuntimeError):
    """Raised when two entities claim the same tree address or output file."""

    def __init__(self, address: Address, first: str, second: str) -> None:
        self.address = address
        self.first = first
        self.second = second
        super().__init__(
            f"Address '{'/'.join(address)}' is claimed by both {first} and {second}"
        )


@dataclass
class LeafNode:
    """A module placed in the navigation tree."""

    name: str
    address: Address
    module: ModuleRecord

    @property
    def document(self) -> str:
        return "-".join(self.address) + "-docs.md"


@dataclass
class CategoryNode:
    """A folder of modules; ``origin`` is the module that first implied it."""

    name: str
    address: Address
    origin: Optional[str] = None
    children: Dict[str, "TreeNode"] = field(default_factory=dict)

    @property
    def page(self) -> str:
        return "-".join(self.address) + ".md"


TreeNode = Union[CategoryNode, LeafNode]


@dataclass
class TreeBuildResult:
    """The assembled tree plus its flattened views and navigation document."""

    tree: CategoryNode
    modules: List[LeafNode]
    categories: List[CategoryNode]
    navigation: str


def relative_location(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` as a POSIX string."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError as exc:
        raise InvalidAddressError(f"{path} is outside the repository root {root}") from exc


def module_address(relative_path: str, *, is_file: bool, root_segments: int) -> Address:
    """Normalise a module location into its tree address.

    Drops the leading root segments, strips the file suffix and drops a
    trailing ``default``/``index`` segment so folder-style and single-file
    modules share one addressing scheme.
    """
    parts = PurePosixPath(relative_path).parts[root_segments:]
    if parts and is_file:
        parts = parts[:-1] + (PurePosixPath(parts[-1]).stem,)
    if parts and parts[-1] in FILLER_SEGMENTS:
        parts = parts[:-1]
    if not parts:
        raise InvalidAddressError(f"{relative_path} does not leave an address after normalisation")
    return tuple(parts)


class TreeBuilder:
    """Merges module addresses into one strict hierarchy."""

    def __init__(self, root_segments: int = 2, title: str = "Modules") -> None:
        self.root_segments = root_segments
        self.title = title
        self.logger = get_logger("tree")

    def address_for(self, module: ModuleRecord) -> Address:
        return module_address(
            module.relative_path,
            is_file=module.path == module.source,
            root_segments=self.root_segments,
        )

    def build(self, modules: Sequence[ModuleRecord]) -> TreeBuildResult:
        root = CategoryNode(name="", address=())
        for module in modules:
            self.insert(root, self.address_for(module), module)

        leaves: List[LeafNode] = []
        categories: List[CategoryNode] = []
        self._flatten(root, leaves, categories)
        self._check_filenames(leaves, categories)
        self.logger.debug(
            "Built navigation tree with %d modules in %d categories", len(leaves), len(categories)
        )
        return TreeBuildResult(
            tree=root,
            modules=leaves,
            categories=categories,
            navigation=self.render_navigation(root),
        )

    def insert(self, root: CategoryNode, address: Address, module: ModuleRecord) -> LeafNode:
        node = root
        for depth, segment in enumerate(address[:-1], start=1):
            child = node.children.get(segment)
            if child is None:
                child = CategoryNode(name=segment, address=address[:depth], origin=module.relative_path)
                node.children[segment] = child
            elif isinstance(child, LeafNode):
                raise AddressCollisionError(
                    address[:depth], child.module.relative_path, module.relative_path
                )
            node = child

        key = address[-1]
        existing = node.children.get(key)
        if isinstance(existing, LeafNode):
            raise AddressCollisionError(address, existing.module.relative_path, module.relative_path)
        if isinstance(existing, CategoryNode):
            raise AddressCollisionError(address, str(existing.origin), module.relative_path)

        leaf = LeafNode(name=key, address=address, module=module)
        node.children[key] = leaf
        return leaf

    def render_navigation(self, root: CategoryNode) -> str:
        """Render the book outline.

        Category entries link to their address-joined page, so nested
        categories point at e.g. ``./services-web.md``.
        """
        lines = [f"# {self.title}", ""]
        self._render_entries(root, 0, lines)
        return "\n".join(lines) + "\n"

    def _render_entries(self, node: CategoryNode, depth: int, lines: List[str]) -> None:
        indent = "  " * depth
        for key in sorted(node.children):
            child = node.children[key]
            if isinstance(child, LeafNode):
                lines.append(f"{indent}- [{child.module.name}]({child.document})")
            else:
                lines.append(f"{indent}- [{key}](./{child.page})")
                self._render_entries(child, depth + 1, lines)

    def _flatten(
        self, node: CategoryNode, leaves: List[LeafNode], categories: List[CategoryNode]
    ) -> None:
        for key in sorted(node.children):
            child = node.children[key]
            if isinstance(child, LeafNode):
                leaves.append(child)
            else:
                categories.append(child)
                self._flatten(child, leaves, categories)

    @staticmethod
    def _check_filenames(leaves: Sequence[LeafNode], categories: Sequence[CategoryNode]) -> None:
        claimed: Dict[str, Tuple[Address, str]] = {
            SUMMARY_FILENAME: ((), "the navigation document"),
        }
        entries = [(leaf.document, leaf.address, leaf.module.relative_path) for leaf in leaves]
        entries.extend((node.page, node.address, str(node.origin)) for node in categories)
        for filename, address, source in entries:
            previous = claimed.get(filename)
            if previous is not None:
                raise AddressCollisionError(address, previous[1], source)
            claimed[filename] = (address, source)
