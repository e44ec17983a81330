"""Outline display command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from slugline.cli.formatters.base import OutputFormat
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.formatters.outline_formatter import OutlineFormatter
from slugline.cli.utils.cli_handler import CLIHandler, cli_command
from slugline.parser.outline import extract_outline

console = Console()


@cli_command
def outline_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to outline")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output the outline tree as JSON")
    ] = False,
) -> None:
    """Show the chapter / scene group / scene outline of a screenplay.

    Chapters come from ## sections and scene groups from ### sections.
    Scenes outside any section are placed in implicit groups.
    """
    handler = CLIHandler(console)
    screenplay = handler.load_screenplay(file)
    root = extract_outline(screenplay)

    if json_output:
        JsonFormatter(console).print(root, OutputFormat.JSON)
    else:
        OutlineFormatter(console).print(root)
