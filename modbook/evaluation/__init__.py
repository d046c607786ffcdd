"""Module evaluation against a synthetic context."""

from .context import (
    CONTEXT_FIELDS,
    PLACEHOLDER_FIELDS,
    ModuleEvaluationError,
    SyntheticContext,
    Unresolved,
    UnresolvedPlaceholderError,
)
from .evaluator import (
    MODULE_SUFFIXES,
    EvaluatedModule,
    ModuleEvaluator,
    documentation_file,
    module_name,
    resolve_entry_file,
)

__all__ = [
    "CONTEXT_FIELDS",
    "MODULE_SUFFIXES",
    "PLACEHOLDER_FIELDS",
    "EvaluatedModule",
    "ModuleEvaluationError",
    "ModuleEvaluator",
    "SyntheticContext",
    "Unresolved",
    "UnresolvedPlaceholderError",
    "documentation_file",
    "module_name",
    "resolve_entry_file",
]
