"""Tree rendering for screenplay outlines."""

from __future__ import annotations

import io

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from slugline.cli.formatters.base import OutputFormat, OutputFormatter
from slugline.parser.outline import NodeKind, OutlineNode

_STYLES = {
    NodeKind.TITLE: "bold cyan",
    NodeKind.CHAPTER: "bold",
    NodeKind.SCENE_GROUP: "magenta",
    NodeKind.SCENE: "green",
    NodeKind.PRE_SCENE: "dim",
}


def _label(node: OutlineNode) -> str:
    if node.kind is NodeKind.PRE_SCENE:
        text = "(before first chapter)"
    elif node.synthetic:
        text = f"({node.kind.value.replace('_', ' ')})"
    else:
        text = escape(node.title or "")
    count = node.end - node.start
    return f"[{_STYLES[node.kind]}]{text}[/] [dim]{count} elements[/dim]"


class OutlineFormatter(OutputFormatter[OutlineNode]):
    """Render an outline as a rich tree."""

    def build_tree(self, node: OutlineNode) -> Tree:
        tree = Tree(_label(node))
        self._add_children(tree, node)
        return tree

    def _add_children(self, branch: Tree, node: OutlineNode) -> None:
        for child in node.children:
            self._add_children(branch.add(_label(child)), child)

    def format(
        self, data: OutlineNode, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        string_io = io.StringIO()
        Console(file=string_io, force_terminal=False).print(self.build_tree(data))
        return string_io.getvalue()

    def print(
        self, data: OutlineNode, format_type: OutputFormat = OutputFormat.TEXT
    ) -> None:
        self.console.print(self.build_tree(data))
