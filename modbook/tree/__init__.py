"""Navigation tree construction."""

from .builder import (
    SUMMARY_FILENAME,
    AddressCollisionError,
    CategoryNode,
    InvalidAddressError,
    LeafNode,
    TreeBuildResult,
    TreeBuilder,
    TreeNode,
    module_address,
    relative_location,
)

__all__ = [
    "SUMMARY_FILENAME",
    "AddressCollisionError",
    "CategoryNode",
    "InvalidAddressError",
    "LeafNode",
    "TreeBuildResult",
    "TreeBuilder",
    "TreeNode",
    "module_address",
    "relative_location",
]
