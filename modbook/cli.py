"""CLI entrypoints for modbook commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ModbookConfig, load_config
from .logging import configure_logging
from .orchestrator import BookGenerator


def _add_logging_options(parser: argparse.ArgumentParser, *, inherited: bool = False) -> None:
    # Subcommand copies must not reset values given before the command.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if inherited else False,
        help="Log debug detail for every module.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if inherited else None,
        help="Also write the run log to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modbook",
        description="Build a documentation book from declarative configuration modules.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Evaluate every listed module and build the documentation book.",
    )
    _add_logging_options(build_parser, inherited=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    build_parser.add_argument(
        "--module-list",
        help="YAML file listing the modules to document.",
    )
    build_parser.add_argument(
        "--provider",
        help="Package set and library provider as 'package.module:attribute'.",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        help="Directory receiving the built book.",
    )
    build_parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        help="Number of worker threads for evaluation and rendering.",
    )
    build_parser.add_argument(
        "--no-build",
        action="store_true",
        help="Write the staged book sources without invoking the book builder.",
    )
    return parser


def _apply_overrides(config: ModbookConfig, args: argparse.Namespace) -> ModbookConfig:
    if args.module_list:
        config.module_list = Path(args.module_list).expanduser().resolve()
    if args.provider:
        config.provider = args.provider
    if args.output:
        config.output_dir = Path(args.output).expanduser().resolve()
    if args.jobs is not None:
        config.jobs = args.jobs
    if args.no_build:
        config.build = False
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for modbook commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "build":
        if args.jobs is not None and args.jobs < 1:
            parser.exit(1, "--jobs must be at least 1\n")
        try:
            config = _apply_overrides(load_config(Path(args.path)), args)
            result = BookGenerator().generate(config)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except RuntimeError as exc:
            parser.exit(1, f"modbook build failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Book with {len(result.modules)} modules written to {_display_path(result.output_dir)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _display_path(path: Path) -> str:
    cwd = Path.cwd()
    return str(path.relative_to(cwd)) if path.is_relative_to(cwd) else str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
