"""Option extraction from evaluated module trees."""

from .extractor import (
    NONE_PLACEHOLDER,
    CategoryNode,
    OptionNode,
    OptionTreeNode,
    build_option_tree,
    document_option,
    extract_options,
    is_option,
)
from .pretty import UnsupportedValueError, pretty_print

__all__ = [
    "NONE_PLACEHOLDER",
    "CategoryNode",
    "OptionNode",
    "OptionTreeNode",
    "UnsupportedValueError",
    "build_option_tree",
    "document_option",
    "extract_options",
    "is_option",
    "pretty_print",
]
