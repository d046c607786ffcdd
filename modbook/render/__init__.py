"""Markdown rendering of module documentation."""

from .header import MissingDocumentationFile, leading_comment, read_header
from .markdown import ModuleRenderer

__all__ = ["MissingDocumentationFile", "ModuleRenderer", "leading_comment", "read_header"]
