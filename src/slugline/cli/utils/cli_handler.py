"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from slugline.cli.formatters.base import OutputFormat
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.validators.file_validator import ScreenplayFileValidator
from slugline.config import get_logger
from slugline.exceptions import SluglineError, ValidationError
from slugline.parser.classifier import FountainParser
from slugline.parser.models import Screenplay

logger = get_logger(__name__)

T = TypeVar("T")


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Report an error and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always, with ``exit_code``.
        """
        logger.error("Command failed", error=str(error), error_type=type(error).__name__)

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, SluglineError):
            label = "Validation Error" if isinstance(error, ValidationError) else "Error"
            self.console.print(f"[red]{label}: {escape(error.message)}[/red]")
            if error.hint:
                self.console.print(f"[yellow]Hint: {escape(error.hint)}[/yellow]")
        else:
            self.console.print(f"[red]Error: {escape(str(error))}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Report a success message."""
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{escape(message)}[/green]")

    def get_output_format(self, json: bool = False, csv: bool = False) -> OutputFormat:
        """Determine output format from flags."""
        if json:
            return OutputFormat.JSON
        if csv:
            return OutputFormat.CSV
        return OutputFormat.TABLE

    def load_screenplay(self, path: Path) -> Screenplay:
        """Validate ``path`` and parse the screenplay it points to."""
        file_path = ScreenplayFileValidator().validate(path)
        logger.info("Loading screenplay", path=str(file_path))
        return FountainParser().parse_file(file_path)


def cli_command(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator for CLI commands with standardized error handling.

    Slugline errors raised by the command are reported through
    ``CLIHandler.handle_error``; the ``json_output`` keyword of the command
    selects the JSON error format.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except (SluglineError, OSError) as e:
            CLIHandler().handle_error(e, kwargs.get("json_output", False))
            raise  # pragma: no cover - handle_error always exits

    return wrapper
