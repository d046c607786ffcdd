"""Tests for module evaluation against the synthetic context."""

from __future__ import annotations

import sys

import pytest

from modbook.evaluation import (
    ModuleEvaluationError,
    ModuleEvaluator,
    SyntheticContext,
    UnresolvedPlaceholderError,
    module_name,
)
from modbook.lib import default_provider


@pytest.fixture
def evaluator() -> ModuleEvaluator:
    return ModuleEvaluator(SyntheticContext.from_provider(default_provider()))


def test_python_module_receives_requested_fields(catalog, evaluator) -> None:
    catalog.write(
        {
            "services/foo.py": """
            # Foo service.

            def module(lib, pkgs):
                return {
                    "options": {
                        "services": {
                            "foo": {
                                "enable": lib.mk_enable_option("foo"),
                                "package": lib.mk_option(
                                    type=lib.types.package,
                                    default=pkgs.foo,
                                    description="Foo package to use.",
                                ),
                            },
                        },
                    },
                }
            """,
        }
    )
    path = catalog.module("services/foo.py")

    evaluated = evaluator.evaluate(path)

    assert evaluated.name == "foo"
    assert evaluated.source == path
    assert evaluated.doc_file == path
    assert set(evaluated.raw_options["services"]["foo"]) == {"enable", "package"}


def test_placeholder_fields_are_not_forced_when_unread(catalog, evaluator) -> None:
    catalog.write(
        {
            "quiet.py": """
            def module(config, services, lib):
                return {"options": {"enable": lib.mk_enable_option("quiet")}}
            """,
        }
    )

    evaluated = evaluator.evaluate(catalog.module("quiet.py"))

    assert "enable" in evaluated.raw_options


def test_reading_a_placeholder_fails_evaluation(catalog, evaluator) -> None:
    catalog.write(
        {
            "greedy.py": """
            def module(config, lib):
                port = config.services.greedy.port
                return {"options": {"port": lib.mk_option(default=port)}}
            """,
        }
    )

    with pytest.raises(UnresolvedPlaceholderError, match="greedy.py"):
        evaluator.evaluate(catalog.module("greedy.py"))


def test_keyword_catch_all_receives_every_field(catalog, evaluator) -> None:
    catalog.write(
        {
            "catchall.py": """
            def module(**args):
                return {"options": {"fields": args["lib"].mk_option(description=",".join(sorted(args)))}}
            """,
        }
    )

    evaluated = evaluator.evaluate(catalog.module("catchall.py"))

    description = evaluated.raw_options["fields"]["description"]
    assert description.split(",") == sorted(
        ["pkgs", "lib", "config", "utils", "base_modules", "extra_modules", "modules", "options", "services"]
    )


def test_unknown_required_parameter_fails(catalog, evaluator) -> None:
    catalog.write({"odd.py": "def module(lib, hostname):\n    return {}\n"})

    with pytest.raises(ModuleEvaluationError, match="hostname"):
        evaluator.evaluate(catalog.module("odd.py"))


def test_unknown_parameter_with_default_is_allowed(catalog, evaluator) -> None:
    catalog.write({"odd.py": "def module(lib, hostname='localhost'):\n    return {}\n"})

    evaluated = evaluator.evaluate(catalog.module("odd.py"))

    assert evaluated.raw_options is None


def test_static_python_module_without_entry(catalog, evaluator) -> None:
    catalog.write(
        {
            "static.py": """
            from modbook.lib import mk_option

            options = {"motd": mk_option(description="Message of the day.")}
            """,
        }
    )

    evaluated = evaluator.evaluate(catalog.module("static.py"))

    assert evaluated.raw_options["motd"]["description"] == "Message of the day."


def test_python_module_may_define_dataclasses(catalog, evaluator) -> None:
    catalog.write(
        {
            "svc.py": """
            from __future__ import annotations

            from dataclasses import dataclass


            @dataclass
            class Settings:
                port: int = 8080


            def module(lib):
                return {
                    "options": {
                        "port": lib.mk_option(
                            type=lib.types.port,
                            default=Settings().port,
                            description="Listening port.",
                        ),
                    },
                }
            """,
        }
    )

    evaluated = evaluator.evaluate(catalog.module("svc.py"))

    assert evaluated.raw_options["port"]["default"] == 8080
    assert not [name for name in sys.modules if name.startswith("_modbook_module_")]


def test_yaml_module_is_loaded_statically(catalog, evaluator) -> None:
    catalog.write(
        {
            "programs/editor.yaml": """
            # Default editor.
            options:
              programs:
                editor:
                  _type: option
                  type: string
                  description: Editor to launch.
            """,
        }
    )

    evaluated = evaluator.evaluate(catalog.module("programs/editor.yaml"))

    assert evaluated.name == "editor"
    assert evaluated.raw_options["programs"]["editor"]["type"] == "string"


def test_folder_module_uses_default_entry(catalog, evaluator) -> None:
    catalog.write({"networking/default.py": "# Networking.\n\ndef module(config):\n    return {}\n"})
    path = catalog.module("networking")

    evaluated = evaluator.evaluate(path)

    assert evaluated.name == "networking"
    assert evaluated.source == path / "default.py"
    assert evaluated.doc_file == path / "default.py"
    assert evaluated.raw_options is None


def test_folder_module_prefers_readme_for_docs(catalog, evaluator) -> None:
    catalog.write(
        {
            "storage/index.yml": "options: {}\n",
            "storage/README.md": "Storage overview.\n",
        }
    )
    path = catalog.module("storage")

    evaluated = evaluator.evaluate(path)

    assert evaluated.source == path / "index.yml"
    assert evaluated.doc_file == path / "README.md"
    assert evaluated.raw_options == {}


def test_default_file_listed_directly_takes_folder_name(catalog) -> None:
    catalog.write({"audio/default.yaml": "{}\n"})

    assert module_name(catalog.module("audio/default.yaml")) == "audio"


@pytest.mark.parametrize(
    ("files", "target", "message"),
    [
        ({}, "missing.py", "does not exist"),
        ({"empty/notes.txt": "x"}, "empty", "no default or index file"),
        ({"notes.txt": "x"}, "notes.txt", "unsupported module file type"),
        ({"broken.py": "def module(:\n"}, "broken.py", "failed to import"),
        ({"raises.py": "def module(lib):\n    raise ValueError('boom')\n"}, "raises.py", "boom"),
        ({"scalar.py": "def module():\n    return 42\n"}, "scalar.py", "must evaluate to a mapping"),
        ({"bad.yaml": "options: [1, 2]\n"}, "bad.yaml", "'options' must be a mapping"),
        ({"invalid.yaml": "options: [\n"}, "invalid.yaml", "failed to parse"),
        ({"list.yaml": "- a\n- b\n"}, "list.yaml", "must evaluate to a mapping"),
    ],
)
def test_evaluation_failures(catalog, evaluator, files, target, message) -> None:
    catalog.write(files)

    with pytest.raises(ModuleEvaluationError, match=message):
        evaluator.evaluate(catalog.module(target))
