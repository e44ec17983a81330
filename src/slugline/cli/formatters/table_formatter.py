"""Table output formatter for CLI."""

from __future__ import annotations

import csv
import io
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slugline.cli.formatters.base import OutputFormat, OutputFormatter


class TableFormatter(OutputFormatter[list[dict[str, Any]]]):
    """Formatter for rows of data (elements, locations, characters)."""

    def __init__(self, console: Console | None = None, title: str | None = None):
        super().__init__(console)
        self.title = title

    def format(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        """Format rows as a rich table or CSV.

        Args:
            data: Rows to format; columns come from the first row
            format_type: TABLE or CSV

        Returns:
            Formatted string
        """
        if not data:
            return "No data to display"
        if format_type == OutputFormat.CSV:
            return self._format_csv(data)
        return self._format_table(data)

    def build_table(self, data: list[dict[str, Any]]) -> Table:
        """Build a rich table with one column per key of the first row."""
        table = Table(title=self.title, show_header=True, header_style="bold magenta")
        columns = list(data[0].keys())
        for col in columns:
            table.add_column(col.replace("_", " ").title())
        for row in data:
            table.add_row(*[escape(_cell(row.get(col))) for col in columns])
        return table

    def print(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> None:
        if data and format_type == OutputFormat.TABLE:
            self.console.print(self.build_table(data))
        else:
            super().print(data, format_type)

    def _format_table(self, data: list[dict[str, Any]]) -> str:
        string_io = io.StringIO()
        temp_console = Console(file=string_io, force_terminal=True)
        temp_console.print(self.build_table(data))
        return string_io.getvalue()

    def _format_csv(self, data: list[dict[str, Any]]) -> str:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=list(data[0].keys()))
        writer.writeheader()
        for row in data:
            writer.writerow({key: _cell(value) for key, value in row.items()})
        return output.getvalue().rstrip("\n")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list | tuple | set | frozenset):
        return ", ".join(str(item) for item in value)
    return str(value)
