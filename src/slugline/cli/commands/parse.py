"""Element listing command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from slugline.cli.formatters.base import OutputFormat
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.formatters.table_formatter import TableFormatter
from slugline.cli.utils.cli_handler import CLIHandler, cli_command
from slugline.parser.models import Element, Screenplay

console = Console()

PREVIEW_WIDTH = 60


def _preview(text: str) -> str:
    flat = " / ".join(line.strip() for line in text.split("\n") if line.strip())
    if len(flat) > PREVIEW_WIDTH:
        return flat[: PREVIEW_WIDTH - 3] + "..."
    return flat


def _flags(element: Element) -> str:
    flags = []
    if element.is_dual_dialogue:
        flags.append("dual")
    if element.is_centered:
        flags.append("centered")
    if element.scene_number:
        flags.append(f"#{element.scene_number}")
    if element.section_depth:
        flags.append(f"depth {element.section_depth}")
    return " ".join(flags)


def element_rows(screenplay: Screenplay) -> list[dict[str, Any]]:
    """One table row per element."""
    return [
        {
            "index": index,
            "type": element.element_type.value,
            "text": _preview(element.text),
            "flags": _flags(element),
        }
        for index, element in enumerate(screenplay.elements)
    ]


@cli_command
def parse_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to parse")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output elements as JSON")
    ] = False,
    csv_output: Annotated[bool, typer.Option("--csv", help="Output as CSV")] = False,
) -> None:
    """List the elements of a screenplay with their types.

    Examples:
        slugline parse script.fountain
        slugline parse script.fountain --json
    """
    handler = CLIHandler(console)
    screenplay = handler.load_screenplay(file)
    output_format = handler.get_output_format(json=json_output, csv=csv_output)

    if output_format == OutputFormat.JSON:
        JsonFormatter(console).print(
            {
                "filename": screenplay.filename,
                "title_page": [
                    {"key": entry.key, "values": list(entry.values)}
                    for entry in screenplay.title_page
                ],
                "elements": list(screenplay.elements),
            },
            OutputFormat.JSON,
        )
        return

    if output_format == OutputFormat.TABLE and screenplay.title_page:
        for entry in screenplay.title_page:
            values = escape(" / ".join(entry.values))
            console.print(f"[bold]{escape(entry.key)}:[/bold] {values}")
        console.print()

    TableFormatter(console, title=screenplay.filename).print(
        element_rows(screenplay), output_format
    )
