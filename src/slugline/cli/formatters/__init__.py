"""Output formatters for the Slugline CLI."""

from __future__ import annotations

from slugline.cli.formatters.base import OutputFormat, OutputFormatter
from slugline.cli.formatters.json_formatter import JsonFormatter
from slugline.cli.formatters.outline_formatter import OutlineFormatter
from slugline.cli.formatters.table_formatter import TableFormatter

__all__ = [
    "JsonFormatter",
    "OutlineFormatter",
    "OutputFormat",
    "OutputFormatter",
    "TableFormatter",
]
