"""Documentation header extraction."""

from __future__ import annotations

import re
from pathlib import Path

_COMMENT_MARKER = re.compile(r"^#\s?")


class MissingDocumentationFile(RuntimeError):
    """Raised when a module's documentation file cannot be read."""


def read_header(doc_file: Path) -> str:
    """Return the documentation header for a module.

    Markdown files are used whole; any other file contributes its leading
    comment block.
    """
    try:
        text = doc_file.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingDocumentationFile(f"Documentation file not found: {doc_file}") from exc
    if doc_file.suffix.lower() == ".md":
        return text if not text or text.endswith("\n") else text + "\n"
    return leading_comment(text)


def leading_comment(text: str) -> str:
    """Extract the ``#`` comment lines at the very start of ``text``.

    The marker and one following whitespace character are stripped. A blank
    line terminating the block is kept. An interpreter line (``#!``) opening
    the file is not part of the header.
    """
    lines = text.splitlines()
    if lines and lines[0].startswith("#!"):
        lines = lines[1:]
    block: list[str] = []
    for line in lines:
        if line.startswith("#"):
            block.append(_COMMENT_MARKER.sub("", line, count=1))
            continue
        if block and not line.strip():
            block.append("")
        break
    return "".join(f"{line}\n" for line in block)
