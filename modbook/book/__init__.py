"""Book staging and building."""

from .assembler import (
    BOOK_CONFIG_FILENAME,
    SUMMARY_FILENAME,
    BookAssembler,
    BookBuildError,
    render_book_config,
)

__all__ = [
    "BOOK_CONFIG_FILENAME",
    "SUMMARY_FILENAME",
    "BookAssembler",
    "BookBuildError",
    "render_book_config",
]
