"""Configuration management commands."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slugline.cli.formatters.base import OutputFormat
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.utils.cli_handler import CLIHandler
from slugline.config import get_settings
from slugline.config.template import get_default_config_path, write_config_template

console = Console()

config_app = typer.Typer(
    name="config",
    help="Manage Slugline configuration",
    pretty_exceptions_enable=False,
)


@config_app.command(name="init")
def config_init(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for config (default: ~/.config/slugline/config.yaml)",
        ),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite existing config file")
    ] = False,
) -> None:
    """Generate a commented YAML configuration file with every setting.

    Examples:
        slugline config init
        slugline config init -o slugline.yaml --force
    """
    handler = CLIHandler(console)
    output_path = output or get_default_config_path()
    try:
        written = write_config_template(output_path, force=force)
    except FileExistsError as e:
        console.print(
            f"[yellow]Configuration file already exists: {escape(str(output_path))}"
            "[/yellow]\n[dim]Use --force to overwrite.[/dim]"
        )
        raise typer.Exit(1) from e
    except OSError as e:
        handler.handle_error(e)
    console.print(f"[green]✓[/green] Configuration file generated at {written}")


@config_app.command(name="show")
def config_show(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    sources: Annotated[
        bool,
        typer.Option("--sources", "-s", help="Also list SLUGLINE_ environment vars"),
    ] = False,
) -> None:
    """Display the effective configuration after merging all sources."""
    settings = get_settings()

    if json_output:
        JsonFormatter(console).print(settings, OutputFormat.JSON)
        return

    table = Table(title="Slugline Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name in type(settings).model_fields:
        table.add_row(name, escape(str(getattr(settings, name))))
    console.print(table)

    if sources:
        env_vars = sorted(key for key in os.environ if key.startswith("SLUGLINE_"))
        console.print("\n[bold]Environment variables[/bold]")
        if not env_vars:
            console.print("  [dim](none)[/dim]")
        for key in env_vars:
            console.print(f"  {key} = {escape(os.environ[key])}")
