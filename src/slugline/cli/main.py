"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from slugline import __version__
from slugline.cli.commands import (
    characters_command,
    config_app,
    format_command,
    locations_command,
    outline_command,
    parse_command,
)
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.utils.cli_handler import CLIHandler
from slugline.cli.validators.file_validator import ConfigFileValidator
from slugline.config import configure_logging, get_logger, set_settings
from slugline.config.settings import get_settings_for_cli
from slugline.exceptions import SluglineError

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="slugline",
    help="Parse, outline and re-format Fountain screenplays",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="outline")(outline_command)
app.command(name="locations")(locations_command)
app.command(name="characters")(characters_command)
app.command(name="format")(format_command)

app.add_typer(config_app, name="config")


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show Slugline version."""
    version_info = {
        "name": "Slugline",
        "version": __version__,
        "description": "Fountain screenplay parsing and structural analysis",
    }
    if json_output:
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"Slugline v{version_info['version']}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            envvar="SLUGLINE_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, Any] = {}
    if debug:
        overrides.update(log_level="DEBUG", debug=True)
    elif verbose:
        overrides["log_level"] = "INFO"

    if not config and not overrides:
        return

    try:
        config_path = ConfigFileValidator().validate(config) if config else None
        settings = get_settings_for_cli(
            config_file=config_path, cli_overrides=overrides
        )
    except (SluglineError, ValueError) as e:
        CLIHandler(console).handle_error(e)
        return

    set_settings(settings)
    configure_logging(settings)
    logger.debug(
        "Settings loaded",
        config_file=str(config_path) if config_path else None,
        log_level=settings.log_level,
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
