"""Stage the book sources and invoke the external book builder."""

from __future__ import annotations

import json
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Iterable, Sequence

from ..logging import get_logger
from ..models import Book, BookConfig
from ..tree import SUMMARY_FILENAME

BOOK_CONFIG_FILENAME = "book.toml"
DEFAULT_BUILDER_COMMAND = ("mdbook", "build")


class BookBuildError(RuntimeError):
    """Raised when the external book builder fails."""


def render_book_config(config: BookConfig) -> str:
    """Render book.toml; JSON string literals are valid TOML basic strings."""
    lines = ["[book]"]
    if config.title:
        lines.append(f"title = {json.dumps(config.title)}")
    lines.append("authors = [" + ", ".join(json.dumps(author) for author in config.authors) + "]")
    lines.append(f"language = {json.dumps(config.language)}")
    lines.append(f"multilingual = {'true' if config.multilingual else 'false'}")
    lines.append(f"src = {json.dumps(config.src)}")
    return "\n".join(lines) + "\n"


class BookAssembler:
    """Lays out book.toml and src/ in a scratch tree, builds, then promotes."""

    def __init__(
        self,
        builder_command: Sequence[str] = DEFAULT_BUILDER_COMMAND,
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.builder_command = list(builder_command)
        self._runner = runner or self._default_runner
        self.logger = get_logger("book")

    def stage(self, book: Book, directory: Path) -> Path:
        """Write the book sources into ``directory`` and return it."""
        source_dir = directory / book.config.src
        source_dir.mkdir(parents=True, exist_ok=True)
        (directory / BOOK_CONFIG_FILENAME).write_text(
            render_book_config(book.config), encoding="utf-8"
        )
        (source_dir / SUMMARY_FILENAME).write_text(book.navigation, encoding="utf-8")
        for document in book.documents:
            (source_dir / document.filename).write_text(document.content, encoding="utf-8")
        self.logger.debug("Staged %d documents in %s", len(book.documents), source_dir)
        return directory

    def assemble(self, book: Book, output_dir: Path, *, build: bool = True) -> Path:
        """Produce ``output_dir``; it is only replaced once everything succeeded."""
        output_dir = output_dir.resolve()
        output_dir.parent.mkdir(parents=True, exist_ok=True)
        scratch = Path(tempfile.mkdtemp(prefix=".modbook-", dir=output_dir.parent))
        try:
            staging = self.stage(book, scratch / "stage")
            if build:
                built = scratch / "book"
                self.logger.info("Running %s", " ".join(self.builder_command))
                self._runner([*self.builder_command, "-d", str(built)], cwd=staging)
                if not built.is_dir():
                    raise BookBuildError(f"Book builder produced no output in {built}")
            else:
                built = staging
            self._promote(built, output_dir, scratch)
        finally:
            shutil.rmtree(scratch, ignore_errors=True)
        return output_dir

    @staticmethod
    def _promote(built: Path, output_dir: Path, scratch: Path) -> None:
        previous = None
        if output_dir.exists():
            previous = scratch / "previous"
            output_dir.replace(previous)
        try:
            built.replace(output_dir)
        except OSError:
            if previous is not None:
                previous.replace(output_dir)
            raise

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        command = list(args)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                check=True,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise BookBuildError(
                f"Unable to locate '{command[0]}'. Install mdBook or configure another builder."
            ) from exc
        except subprocess.CalledProcessError as exc:
            raise BookBuildError(
                f"Book builder failed with exit code {exc.returncode}: {(exc.stderr or '').strip()}"
            ) from exc
        return completed.stdout
