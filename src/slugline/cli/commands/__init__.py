"""CLI commands for Slugline."""

from .breakdown import characters_command, locations_command
from .config import config_app
from .format import format_command
from .outline import outline_command
from .parse import parse_command

__all__ = [
    "characters_command",
    "config_app",
    "format_command",
    "locations_command",
    "outline_command",
    "parse_command",
]
