"""Markdown rendering for module and category pages."""

from __future__ import annotations

from typing import List, Sequence

from ..models import OptionRecord, RenderedDocument
from ..tree import CategoryNode, LeafNode
from .header import read_header


def _cell(value: str) -> str:
    return value.replace("|", "\\|")


class ModuleRenderer:
    """Renders extracted module data; never evaluates modules."""

    def __init__(self, *, show_examples: bool = False, include_hidden: bool = True) -> None:
        self.show_examples = show_examples
        self.include_hidden = include_hidden

    def render(self, leaf: LeafNode) -> RenderedDocument:
        module = leaf.module
        header = read_header(module.doc_file)
        content = f"# {module.name}\n{header}"

        table = self.render_table(module.options or [])
        if table:
            if header and not header.endswith("\n\n"):
                content += "\n"
            content += table
        return RenderedDocument(filename=leaf.document, content=content)

    def render_table(self, options: Sequence[OptionRecord]) -> str:
        rows = [option for option in options if self.include_hidden or option.visible]
        if not rows:
            return ""

        if self.show_examples:
            lines = [
                "|option|type|description|example|",
                "|------|----|-----------|-------|",
            ]
        else:
            lines = [
                "|option|type|description|",
                "|------|----|-----------|",
            ]
        for option in rows:
            line = f"|{_cell(option.name)}|{_cell(option.type_description)}|{_cell(option.description)}|"
            if self.show_examples:
                example = f"`{_cell(option.example)}`" if option.example is not None else ""
                line += f"{example}|"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def render_category(self, node: CategoryNode) -> RenderedDocument:
        lines: List[str] = [f"# {node.name}", ""]
        for key in sorted(node.children):
            child = node.children[key]
            if isinstance(child, LeafNode):
                lines.append(f"- [{child.module.name}]({child.document})")
            else:
                lines.append(f"- [{key}](./{child.page})")
        return RenderedDocument(filename=node.page, content="\n".join(lines) + "\n")
