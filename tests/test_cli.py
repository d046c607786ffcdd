"""CLI parser and entrypoint tests."""

from __future__ import annotations

import pytest

from modbook.cli import _build_parser, main

MODULE = """# Hello module.

def module(lib):
    return {"options": {"hello": lib.mk_option(description="Greeting.")}}
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "--verbose"])
    assert args.verbose is True


def test_cli_accepts_build_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "build",
            "repo",
            "--module-list",
            "modules.yml",
            "--provider",
            "pkg.mod:provider",
            "-o",
            "out",
            "-j",
            "2",
            "--no-build",
        ]
    )
    assert args.path == "repo"
    assert args.module_list == "modules.yml"
    assert args.provider == "pkg.mod:provider"
    assert args.output == "out"
    assert args.jobs == 2
    assert args.no_build is True


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_main_writes_staged_book(catalog, capsys) -> None:
    catalog.write({"hello.py": MODULE})
    catalog.module_list(["hello.py"])
    output = catalog.root / "site"

    main(["build", str(catalog.root), "--no-build", "-o", str(output)])

    assert (output / "src" / "hello-docs.md").read_text(encoding="utf-8").startswith("# hello\nHello module.\n")
    assert "Book with 1 modules written to" in capsys.readouterr().out


def test_main_reports_missing_module_list(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path), "--no-build"])

    assert excinfo.value.code == 1
    assert "Module list not found" in capsys.readouterr().err


def test_main_reports_pipeline_errors(catalog, capsys) -> None:
    catalog.write({"greedy.py": "def module(config):\n    return config.everything\n"})
    catalog.module_list(["greedy.py"])

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(catalog.root), "--no-build"])

    assert excinfo.value.code == 1
    assert "modbook build failed" in capsys.readouterr().err
    assert not (catalog.root / "book").exists()


def test_cli_accepts_log_file_on_either_side_of_command() -> None:
    parser = _build_parser()

    assert str(parser.parse_args(["--log-file", "run.log", "build"]).log_file) == "run.log"
    assert str(parser.parse_args(["build", "--log-file", "run.log"]).log_file) == "run.log"
    assert parser.parse_args(["build"]).log_file is None


def test_main_writes_run_log(catalog) -> None:
    catalog.write({"hello.py": MODULE})
    catalog.module_list(["hello.py"])
    log_file = catalog.root / "logs" / "modbook.log"

    main(["build", str(catalog.root), "--no-build", "--log-file", str(log_file)])

    assert "Book written to" in log_file.read_text(encoding="utf-8")
