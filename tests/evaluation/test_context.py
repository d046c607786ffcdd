"""Tests for the synthetic evaluation context."""

from __future__ import annotations

import pytest

from modbook.evaluation import (
    CONTEXT_FIELDS,
    PLACEHOLDER_FIELDS,
    ModuleEvaluationError,
    SyntheticContext,
    Unresolved,
    UnresolvedPlaceholderError,
)
from modbook.lib import default_provider


def test_placeholder_behaves_as_empty_mapping() -> None:
    placeholder = Unresolved("config")

    assert list(placeholder) == []
    assert len(placeholder) == 0
    assert not placeholder
    assert "services" not in placeholder
    assert placeholder.get("services", "fallback") == "fallback"
    assert list(placeholder.items()) == []
    assert repr(placeholder) == "<unresolved config>"


def test_placeholder_raises_when_read() -> None:
    placeholder = Unresolved("config")

    with pytest.raises(UnresolvedPlaceholderError, match="config.services"):
        placeholder.services
    with pytest.raises(UnresolvedPlaceholderError, match="config.networking"):
        placeholder["networking"]


def test_unresolved_error_is_an_evaluation_error() -> None:
    assert issubclass(UnresolvedPlaceholderError, ModuleEvaluationError)


def test_context_from_provider_fills_placeholders() -> None:
    provider = default_provider()
    context = SyntheticContext.from_provider(provider)

    assert context.pkgs is provider.pkgs
    assert context.lib is provider.lib
    for name in PLACEHOLDER_FIELDS:
        assert isinstance(context.resolve(name), Unresolved)
    assert set(CONTEXT_FIELDS) == {"pkgs", "lib", *PLACEHOLDER_FIELDS}


def test_context_arguments_selects_requested_fields() -> None:
    context = SyntheticContext.from_provider(default_provider())

    arguments = context.arguments(["lib", "services"])

    assert set(arguments) == {"lib", "services"}


def test_context_rejects_unknown_fields() -> None:
    context = SyntheticContext.from_provider(default_provider())

    with pytest.raises(KeyError):
        context.resolve("environment")
