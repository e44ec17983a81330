"""Re-format command: parse a screenplay and write it back out."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from slugline.cli.utils.cli_handler import CLIHandler, cli_command
from slugline.parser.writer import FountainWriter

console = Console()


@cli_command
def format_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to re-format")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
    no_scene_numbers: Annotated[
        bool,
        typer.Option("--no-scene-numbers", help="Do not write scene number markers"),
    ] = False,
    normalize_headings: Annotated[
        bool,
        typer.Option(
            "--normalize-headings",
            help="Rewrite scene headings from their parsed location",
        ),
    ] = False,
) -> None:
    """Parse a screenplay and write it back as normalized Fountain.

    Notes ([[...]]) are not kept. Scene numbers are added unless
    --no-scene-numbers is given.
    """
    handler = CLIHandler(console)
    screenplay = handler.load_screenplay(file)
    writer = FountainWriter(
        suppress_scene_numbers=True if no_scene_numbers else None,
        normalize_headings=normalize_headings,
    )

    if output is None:
        typer.echo(writer.write(screenplay), nl=False)
        return

    path = writer.write_file(screenplay, output)
    handler.handle_success(f"Wrote {path}")
