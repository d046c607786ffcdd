"""Core data models shared across modbook components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class OptionRecord:
    """Documentation extracted from a single option leaf."""

    path: Tuple[str, ...]
    name: str
    type_description: str
    description: str
    visible: bool = True
    example: Optional[str] = None


@dataclass
class ModuleRecord:
    """A configuration module after evaluation and option extraction."""

    path: Path
    source: Path
    relative_path: str
    name: str
    doc_file: Path
    options: Optional[List[OptionRecord]] = None


@dataclass(frozen=True)
class RenderedDocument:
    """A markdown page destined for the book's source directory."""

    filename: str
    content: str


@dataclass
class BookConfig:
    """Metadata written to book.toml."""

    authors: List[str] = field(default_factory=list)
    language: str = "en"
    multilingual: bool = False
    src: str = "src"
    title: Optional[str] = None


@dataclass
class Book:
    """Everything the assembler needs to stage a book."""

    navigation: str
    documents: List[RenderedDocument]
    config: BookConfig = field(default_factory=BookConfig)
