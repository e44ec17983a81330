"""Location and character breakdown commands."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from slugline.analysis.characters import extract_characters
from slugline.analysis.locations import (
    locations_by_appearance,
    locations_by_frequency,
)
from slugline.cli.formatters.base import OutputFormat
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.formatters.table_formatter import TableFormatter
from slugline.cli.utils.cli_handler import CLIHandler, cli_command

console = Console()


class LocationOrder(str, Enum):
    """Sort orders for the location breakdown."""

    FREQUENCY = "frequency"
    APPEARANCE = "appearance"


@cli_command
def locations_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to analyze")],
    order: Annotated[
        LocationOrder,
        typer.Option("--by", help="Sort by scene count or first appearance"),
    ] = LocationOrder.APPEARANCE,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    csv_output: Annotated[bool, typer.Option("--csv", help="Output as CSV")] = False,
) -> None:
    """List the locations of a screenplay with their scenes.

    Scenes are grouped by place and sub-place, ignoring case.
    """
    handler = CLIHandler(console)
    screenplay = handler.load_screenplay(file)

    if order is LocationOrder.FREQUENCY:
        groups = locations_by_frequency(screenplay)
    else:
        groups = locations_by_appearance(screenplay)

    output_format = handler.get_output_format(json=json_output, csv=csv_output)
    if output_format == OutputFormat.JSON:
        JsonFormatter(console).print(groups, OutputFormat.JSON)
        return

    rows = [
        {
            "location": group.representative.full_location,
            "scenes": group.scene_count,
            "lighting": sorted(
                lighting.abbreviation or "?" for lighting in group.lighting_types
            ),
            "times_of_day": sorted(group.times_of_day),
        }
        for group in groups
    ]
    TableFormatter(console, title="Locations").print(rows, output_format)


@cli_command
def characters_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to analyze")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    csv_output: Annotated[bool, typer.Option("--csv", help="Output as CSV")] = False,
) -> None:
    """List speaking characters with dialogue counts, in order of first cue."""
    handler = CLIHandler(console)
    screenplay = handler.load_screenplay(file)
    characters = extract_characters(screenplay)

    output_format = handler.get_output_format(json=json_output, csv=csv_output)
    if output_format == OutputFormat.JSON:
        JsonFormatter(console).print(list(characters.values()), OutputFormat.JSON)
        return

    rows = [
        {
            "name": info.name,
            "scenes": info.scene_count,
            "cues": info.cues,
            "dialogue_lines": info.dialogue_lines,
            "words": info.dialogue_words,
        }
        for info in characters.values()
    ]
    TableFormatter(console, title="Characters").print(rows, output_format)
